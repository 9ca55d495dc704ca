import copy
import threading

import pytest

from personalapi.dao.base import Collection, StoreBaseAdapter


class InMemoryStore(StoreBaseAdapter):
    """Backing store stand-in honoring the adapter contract.

    The lock plays the role of the remote store's atomic conditional write.
    """

    def __init__(self):
        self.collections = {}
        self._lock = threading.Lock()

    def get_item(self, collection: Collection, key: str):
        item = self.collections.get(collection.name, {}).get(key)
        return copy.deepcopy(item)

    def put_item(self, collection: Collection, item, if_absent: bool = False) -> bool:
        with self._lock:
            items = self.collections.setdefault(collection.name, {})
            key = item[collection.key_field]
            if if_absent and key in items:
                return False
            items[key] = copy.deepcopy(item)
            return True

    def scan(self, collection: Collection):
        return [copy.deepcopy(item) for item in self.collections.get(collection.name, {}).values()]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()
