"""Connection plumbing for the Redis URL store.

`build_client()` turns the flat `redis_*` options of an AppConfig `redis`
section into a `redis.Redis` client. `RedisClientMixin` attaches that client
and the `links:*` key schema to a DAO and refuses to finish construction while
the server does not answer PING, so a misconfigured Lambda fails on its first
request instead of on its first write.

    >>> class URLRedisDAO(RedisClientMixin, URLBaseDAO):
    ...     pass
    ...
    >>> dao = URLRedisDAO(redis_host='cache.internal', prefix='urlshortener:prod')
    >>> dao.keys.link_key('aBcDeF')
    'urlshortener:prod:links:aBcDeF'
"""

from typing import Optional

import redis

from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.redis.helpers import connection_error_message
from urlshortener.dao.exceptions import DataStoreError


def build_client(
    host: str = 'localhost',
    port: int | str = 6379,
    db: int | str = 0,
    decode_responses: bool = True,
    username: Optional[str] = None,
    password: Optional[str] = None,
    socket_timeout: Optional[float] = None,
) -> redis.Redis:
    """Create a Redis client; port and db may arrive as strings from AppConfig."""
    return redis.Redis(
        host=host,
        port=int(port),
        db=int(db),
        decode_responses=decode_responses,
        username=username,
        password=password,
        socket_timeout=socket_timeout,
    )


class RedisClientMixin:
    """Give a DAO a live Redis client and its namespaced key schema.

    Attributes:
        redis (redis.Redis):
            Client every DAO command goes through.

        keys (RedisKeySchema):
            Builds `links:<alias>` and `links:counter` under the DAO prefix.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Attach a Redis client and check that the server answers

        Connection options are ignored when `redis_client` is supplied; tests
        and callers that share a pool pass their own client.

        Args:
            redis_host, redis_port, redis_db (Optional):
                Server endpoint and database index. Defaults to localhost:6379/0.

            redis_decode_responses (Optional[bool]):
                Return str instead of bytes. The DAO stores JSON text, so keep True.

            redis_username, redis_password (Optional[str]):
                ACL credentials, if the server requires them.

            redis_socket_timeout (Optional[float]):
                Seconds to wait on a Redis command before giving up. None waits forever.

            redis_client (Optional[redis.Redis]):
                Ready-made client to adopt.

            prefix (Optional[str]):
                Key namespace, e.g. 'urlshortener:prod'.

        Raises:
            DataStoreError:
                If the server does not answer PING.
        """
        if redis_client is None:
            redis_client = build_client(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING the server; on failure raise DataStoreError, or return False when `raise_error` is off."""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(f'{connection_error_message(self.redis)} Check the provided configuration parameters.') from e
        return True
