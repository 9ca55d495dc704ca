"""Abstract base class for backing store adapters.

An adapter is the minimal interface the entry DAOs need from a remote
key-value store, regardless of the underlying storage mechanism
(e.g., Redis, DynamoDB).

Responsibilities:
    - Read a single item by key.
    - Write an item, optionally only if no item exists under its key.
    - Scan every item of a collection.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from personalapi.dao.base import SHORTLINK_COLLECTION
        >>> from personalapi.dao.redis import RedisStoreAdapter

        >>> store = RedisStoreAdapter(prefix='personalapi:dev')
        >>> store.put_item(SHORTLINK_COLLECTION, {'shortname': 'abc', ...}, if_absent=True)
        True
        >>> store.put_item(SHORTLINK_COLLECTION, {'shortname': 'abc', ...}, if_absent=True)
        False
        >>> store.get_item(SHORTLINK_COLLECTION, 'abc')['shortname']
        'abc'
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from personalapi.types import StoreItem


@dataclass(frozen=True)
class Collection:
    """Describe an entry collection in the backing store.

    Attributes:
        name (str):
            Collection name, used to namespace keys or pick a table.
        key_field (str):
            Item attribute holding the record key.
    """

    name: str
    key_field: str


GUESTBOOK_COLLECTION = Collection(name='guestbook', key_field='id')
SHORTLINK_COLLECTION = Collection(name='shortener', key_field='shortname')


class StoreBaseAdapter(ABC):
    """Interface for backing store adapters.

    Methods:
        get_item(collection: Collection, key: str) -> StoreItem | None:
            Retrieve the item stored under key, or None if absent.

        put_item(collection: Collection, item: StoreItem, if_absent: bool = False) -> bool:
            Write an item. With if_absent=True the write is a single atomic
            conditional write which only succeeds if no item exists under the key.

        scan(collection: Collection) -> list[StoreItem]:
            Return every item of the collection, in no particular order.

    Subclassing:
        Datastore-specific implementations must extend this class and implement all
        abstract methods. Conditional writes MUST use the store's native
        compare-and-swap primitive; read-then-write reintroduces a race between
        concurrent creates.

    NOTE:
        - Adapters hold no in-process mutable state besides their client.
        - Adapters never retry. Any connectivity issue raises DataStoreError.
    """

    @abstractmethod
    def get_item(self, collection: Collection, key: str) -> StoreItem | None:
        """Retrieve a single item by key.

        Returns:
            StoreItem | None: The stored item, or None if nothing is stored under key.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def put_item(self, collection: Collection, item: StoreItem, if_absent: bool = False) -> bool:
        """Write an item to the data store.

        Args:
            collection (Collection):
                Target collection. The item's key is item[collection.key_field].
            item (StoreItem):
                Item to write.
            if_absent (bool):
                If True, only write when no item (live or tombstoned) exists under the key.

        Returns:
            bool: True if the item was written, False if the conditional write failed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def scan(self, collection: Collection) -> list[StoreItem]:
        """Return all items of a collection.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
