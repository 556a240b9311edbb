import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from urlshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def connection_error_message(client: redis.Redis) -> str:
    """Describe the Redis endpoint a client is configured for."""
    info = client.connection_pool.connection_kwargs
    redis_host = info.get('host')
    redis_port = info.get('port')
    redis_db = info.get('db')
    return f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}."


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError
            or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def resolve(self, alias):
        ...     return self.redis.get(alias)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(connection_error_message(self.redis)) from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed: {e}') from e

    return wrapper
