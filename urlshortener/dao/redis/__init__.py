from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.url_redis_dao import URLRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'URLRedisDAO',
]
