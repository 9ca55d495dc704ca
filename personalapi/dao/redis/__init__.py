from personalapi.dao.redis.redis_key_schema import RedisKeySchema
from personalapi.dao.redis.mixins import RedisClientMixin
from personalapi.dao.redis.redis_store_adapter import RedisStoreAdapter


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'RedisStoreAdapter',
]
