"""Data Access Object (DAO) for entry collections

This module provides the collection-scoped persistence operations shared by
the guestbook and the link shortener, independent of transport and of the
backing store (see StoreBaseAdapter).

Responsibilities:
    - Retrieve a single entry, tombstoned or not;
    - Upsert entries (tombstoning, stat updates);
    - Create entries only if their key is free (atomic conditional write);
    - List live entries in creation order, with cursor pagination;
    - Raise appropriate DAO exceptions, never swallow store errors.

Classes:
    EntryDAO:
        Generic entry DAO parameterized by model class and collection.

Example:
    >>> from personalapi.models import ShortlinkEntryModel
    >>> from personalapi.dao.base import SHORTLINK_COLLECTION

    >>> dao = EntryDAO(store, ShortlinkEntryModel, SHORTLINK_COLLECTION)
    >>> dao.create_if_absent(ShortlinkEntryModel(shortname='abc', longurl='https://example.com'))
    <EntryDAO collection='shortener'>
    >>> dao.create_if_absent(ShortlinkEntryModel(shortname='abc', longurl='https://other.com'))
    Traceback (most recent call last):
        ...
    EntryAlreadyExistsError: Entry 'abc' already exists in collection 'shortener'.
    >>> dao.get('abc').longurl
    'https://example.com'
"""

import logging
from datetime import datetime
from collections.abc import Callable
from typing import Generic, TypeVar

from beartype import beartype

from personalapi.models import EntryModel
from personalapi.dao.base import Collection, StoreBaseAdapter
from personalapi.dao.exceptions import EntryAlreadyExistsError, EntryNotFoundError
from personalapi.utils.pagination import entries_after


logger = logging.getLogger(__name__)

E = TypeVar('E', bound=EntryModel)


class EntryDAO(Generic[E]):
    """Entry DAO over a backing store adapter

    The DAO holds no in-process mutable state and takes no locks. Duplicate key
    prevention relies entirely on the store's atomic conditional write.
    Read-after-write is not guaranteed: a listing right after a create may or
    may not contain the new entry.

    Attributes:
        store (StoreBaseAdapter):
            Backing store adapter.
        model (type[EntryModel]):
            Entry model class stored in this collection.
        collection (Collection):
            Collection descriptor (name and key field).

    Methods:
        get(key: str) -> EntryModel:
            Raises EntryNotFoundError when nothing is stored under key.
        put(entry: EntryModel) -> EntryDAO:
            Unconditional upsert.
        create_if_absent(entry: EntryModel) -> EntryDAO:
            Raises EntryAlreadyExistsError when the key is taken (live or tombstoned).
        list_undeleted(predicate=None, after=None) -> tuple[int, list[EntryModel]]:
            Total scan size (tombstones included) and the live, ordered page.
        soft_delete(key: str, at: datetime | None = None) -> EntryModel:
            Tombstone an entry and return it.

    All methods raise DataStoreError when the backing store is unavailable.
    """

    def __init__(self, store: StoreBaseAdapter, model: type[E], collection: Collection):
        self.store = store
        self.model = model
        self.collection = collection

    def __repr__(self) -> str:
        return f'<{type(self).__name__} collection={self.collection.name!r}>'

    @beartype
    def get(self, key: str) -> E:
        """Retrieve the entry stored under key

        NOTE: this is a store-level lookup. Tombstoned entries are returned as well;
              callers decide whether a deleted entry is acceptable.

        Raises:
            EntryNotFoundError:
                If no item is stored under key.
            DataStoreError:
                If the backing store is unavailable.
        """
        item = self.store.get_item(self.collection, key)
        if item is None:
            raise EntryNotFoundError(f"Entry '{key}' not found in collection '{self.collection.name}'.")
        return self.model.from_item(item)

    @beartype
    def put(self, entry: EntryModel) -> 'EntryDAO':
        """Unconditionally upsert an entry (tombstoning, stat updates)"""
        self._check_model(entry)
        self.store.put_item(self.collection, entry.to_item())
        return self

    @beartype
    def create_if_absent(self, entry: EntryModel) -> 'EntryDAO':
        """Create an entry only if no item (live or tombstoned) exists under its key

        The check and the write are a single conditional write in the backing store.
        A tombstoned entry keeps its key reserved: deleted short names cannot be reused.

        Raises:
            EntryAlreadyExistsError:
                If an item already exists under the entry's key.
            DataStoreError:
                If the backing store is unavailable.
        """
        self._check_model(entry)
        written = self.store.put_item(self.collection, entry.to_item(), if_absent=True)
        if not written:
            logger.info(
                'Conditional create lost: key already taken.',
                extra={'collection': self.collection.name, 'key': entry.key},
            )
            raise EntryAlreadyExistsError(f"Entry '{entry.key}' already exists in collection '{self.collection.name}'.")
        return self

    def list_undeleted(
        self,
        predicate: Callable[[E], bool] | None = None,
        after: str | None = None,
    ) -> tuple[int, list[E]]:
        """List live entries in ascending creation order

        Scans the whole collection, drops tombstoned entries and entries rejected
        by predicate, sorts by (created_at, key) and returns the window following
        the `after` cursor (see entries_after()).

        NOTE: total_count is the size of the full, unfiltered scan INCLUDING
              tombstoned (and unparseable) items. It is therefore >= the number of
              live entries. Clients have come to rely on this number, keep it.

        Args:
            predicate (Callable[[EntryModel], bool] | None):
                Collection-specific filter applied to live entries.
            after (str | None):
                Cursor: key of the last entry of the previous page.

        Returns:
            tuple[int, list[EntryModel]]: (total_count, ordered live entries)

        Raises:
            DataStoreError:
                If the backing store is unavailable.
        """
        items = self.store.scan(self.collection)
        total_count = len(items)

        entries = []
        for item in items:
            try:
                entry = self.model.from_item(item)
            except ValueError:
                logger.warning(
                    'Skipping malformed item in listing.',
                    extra={'collection': self.collection.name, 'key': item.get(self.collection.key_field)},
                )
                continue
            if entry.is_deleted:
                continue
            if predicate is not None and not predicate(entry):
                continue
            entries.append(entry)

        entries.sort(key=lambda entry: entry.sort_key())
        return total_count, entries_after(entries, after)

    @beartype
    def soft_delete(self, key: str, at: datetime | None = None) -> E:
        """Tombstone the entry stored under key and return the tombstoned entry

        NOTE: deleting an already deleted entry succeeds and re-stamps deleted_at
              (last write wins). The tombstone is never cleared.

        Raises:
            EntryNotFoundError:
                If no item is stored under key.
            DataStoreError:
                If the backing store is unavailable.
        """
        entry = self.get(key).tombstoned(at)
        self.put(entry)
        logger.info('Entry tombstoned.', extra={'collection': self.collection.name, 'key': key})
        return entry

    def _check_model(self, entry: EntryModel) -> None:
        if not isinstance(entry, self.model):
            raise TypeError(f'{type(self).__name__} stores {self.model.__name__}, got {type(entry).__name__}.')
