"""Data Access Object (DAO) implementation for managing URL records in Redis

This module provides a Redis-based implementation of URLBaseDAO.

Responsibilities:
    - Save, resolve and delete alias to URL mappings in Redis;
    - Allocate strictly increasing record ids from a global counter;
    - Enforce alias uniqueness with a single atomic SET NX;
    - Translate Redis failures into DAO exceptions.

Data layout:
    [<prefix>:]links:<alias>    -> '{"id": 17, "url": "https://example.com/page"}'
    [<prefix>:]links:counter    -> 17

Classes:
    URLRedisDAO:
        DAO for storing and retrieving URL records in a Redis datastore.

Example:
    >>> from urlshortener.dao.redis import URLRedisDAO

    >>> dao = URLRedisDAO(prefix="urlshortener:dev")
    >>> dao.save('https://example.com/page', 'aBcDeF')
    1
    >>> dao.resolve('aBcDeF')
    'https://example.com/page'
    >>> dao.delete('aBcDeF')
    True
"""

import json

import redis
from beartype import beartype

from urlshortener.models import URLRecordModel
from urlshortener.dao.base import URLBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_connection_error, connection_error_message
from urlshortener.dao.exceptions import DAOError, AliasExistsError, AliasNotFoundError, DataStoreError


class URLRedisDAO(RedisClientMixin, URLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing URL records

    This class implements the URLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Example:
        >>> dao = URLRedisDAO(redis_host="localhost", prefix="urlshortener:test")
        >>> dao.save('https://example.com', 'abc123')
        1
        >>> dao.get('abc123')
        URLRecordModel(alias='abc123', url='https://example.com', id=1)
    """

    @handle_redis_connection_error
    @beartype
    def save(self, url: str, alias: str) -> int:
        """Save an alias to URL mapping into Redis

        The record id is reserved with INCR before the write. The record itself
        is created with SET NX, so exactly one of several concurrent writers of
        the same alias succeeds. Ids reserved by losing writers are never
        handed out again, so ids stay strictly increasing (with gaps).

        Args:
            url (str):
                Target URL.
            alias (str):
                Alias to store the URL under.

        Returns:
            int: id of the new record.

        Raises:
            InvalidArgumentError:
                If url or alias is empty.
            AliasExistsError:
                If a record with the same alias already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.save('https://example.com', 'abc123')
            42
        """
        self._require_non_empty(url=url, alias=alias)

        record_id = int(self.redis.incr(self.keys.counter_key()))
        document = json.dumps({'id': record_id, 'url': url})
        try:
            created = self.redis.set(self.keys.link_key(alias), document, nx=True)
        except redis.exceptions.RedisError as e:
            raise self.classify_write_error(e) from e

        if not created:
            raise AliasExistsError(f"Alias '{alias}' already exists.")
        return record_id

    @handle_redis_connection_error
    @beartype
    def get(self, alias: str) -> URLRecordModel:
        """Retrieve a stored URL record by alias

        Raises:
            AliasNotFoundError:
                If the alias does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur or the stored document is corrupted.

        Example:
            >>> dao.get('abc123')
            URLRecordModel(alias='abc123', url='https://example.com', id=42)
        """
        document = self.redis.get(self.keys.link_key(alias))
        if document is None:
            raise AliasNotFoundError(f"Alias '{alias}' not found.")

        try:
            data = json.loads(document)
            return URLRecordModel(alias=alias, url=data['url'], id=int(data['id']))
        except (ValueError, TypeError, KeyError) as e:
            raise DataStoreError(f"Corrupted record stored under alias '{alias}'.") from e

    @beartype
    def resolve(self, alias: str) -> str:
        """Look up the URL stored under an alias

        Raises:
            AliasNotFoundError:
                If the alias does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        return self.get(alias).url

    @handle_redis_connection_error
    @beartype
    def delete(self, alias: str) -> bool:
        """Delete the record stored under an alias (no-op when absent)

        Returns:
            bool: True if a record was removed, False otherwise.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        return self.redis.delete(self.keys.link_key(alias)) > 0

    def classify_write_error(self, error: Exception) -> DAOError:
        """Classify a failed Redis write

        Redis reports taken aliases through the SET NX reply rather than an
        exception, so every raised write error is a data store failure.
        """
        if isinstance(error, (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)):
            return DataStoreError(connection_error_message(self.redis))
        return DataStoreError(f'Redis write failed: {error}')
