from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    client.get.return_value = None
    client.set.return_value = True
    client.incr.return_value = 1
    client.delete.return_value = 0
    return client
