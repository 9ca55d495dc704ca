"""Redis implementation of the backing store adapter

Each entry is stored as a JSON document under its own key:

    <prefix>:<collection>:entries:<entry key>

Responsibilities:
    - Read single entries (GET);
    - Write entries, conditionally via SET NX for creates;
    - Scan a whole collection (SCAN MATCH + MGET);
    - Raise DataStoreError on connectivity issues with Redis.

Classes:
    RedisStoreAdapter:
        StoreBaseAdapter backed by a Redis datastore.

Example:
    >>> store = RedisStoreAdapter(redis_host='localhost', prefix='personalapi:dev')
    >>> store.put_item(SHORTLINK_COLLECTION, {'shortname': 'abc', 'longurl': 'https://example.com'}, if_absent=True)
    True
    >>> store.put_item(SHORTLINK_COLLECTION, {'shortname': 'abc', 'longurl': 'https://other.com'}, if_absent=True)
    False
    >>> store.get_item(SHORTLINK_COLLECTION, 'abc')['longurl']
    'https://example.com'
"""

import json
import logging

from beartype import beartype

from personalapi.types import StoreItem
from personalapi.dao.base import Collection, StoreBaseAdapter
from personalapi.dao.redis.mixins import RedisClientMixin
from personalapi.dao.redis.helpers import handle_redis_connection_error


logger = logging.getLogger(__name__)


class RedisStoreAdapter(RedisClientMixin, StoreBaseAdapter):
    """Redis-based backing store adapter

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Attributes:
        scan_count (int):
            COUNT hint passed to SCAN. Defaults to 500.
    """

    scan_count = 500

    @handle_redis_connection_error
    @beartype
    def get_item(self, collection: Collection, key: str) -> StoreItem | None:
        raw = self.redis.get(self.keys.entry_key(collection.name, key))
        return None if raw is None else json.loads(raw)

    @handle_redis_connection_error
    @beartype
    def put_item(self, collection: Collection, item: StoreItem, if_absent: bool = False) -> bool:
        """Write an item as a JSON document

        NOTE: conditional creates rely on a single SET ... NX command. Redis
              executes it atomically, so of two concurrent creates for the same key
              exactly one gets 'OK' and the other gets nil. Checking EXISTS before
              SET would let both callers pass the check:

              (lambda 1): EXISTS <prefix>:shortener:entries:abc  => 0
              (lambda 2): EXISTS <prefix>:shortener:entries:abc  => 0
              (lambda 1): SET <prefix>:shortener:entries:abc <doc 1>
              (lambda 2): SET <prefix>:shortener:entries:abc <doc 2>  => doc 1 silently overwritten

        Returns:
            bool: True if written, False if if_absent=True and the key already exists.
        """
        redis_key = self.keys.entry_key(collection.name, str(item[collection.key_field]))
        document = json.dumps(item)

        if if_absent:
            return bool(self.redis.set(redis_key, document, nx=True))

        self.redis.set(redis_key, document)
        return True

    @handle_redis_connection_error
    @beartype
    def scan(self, collection: Collection) -> list[StoreItem]:
        """Scan every entry of a collection

        NOTE: keys deleted between SCAN and MGET come back as nil and are skipped.
              Entries are never physically deleted by this application, so this only
              happens on manual intervention.
        """
        redis_keys = list(self.redis.scan_iter(match=self.keys.entries_pattern(collection.name), count=self.scan_count))
        if not redis_keys:
            return []

        documents = self.redis.mget(redis_keys)
        items = [json.loads(doc) for doc in documents if doc is not None]
        logger.debug(
            'Scanned Redis collection.',
            extra={'collection': collection.name, 'keys': len(redis_keys), 'items': len(items)},
        )
        return items
