import logging
from collections.abc import Iterable

from personalapi.models import ShortlinkEntryModel
from personalapi.dao.base import SHORTLINK_COLLECTION, StoreBaseAdapter
from personalapi.dao.entry_dao import EntryDAO
from personalapi.dao.exceptions import EntryNotFoundError


logger = logging.getLogger(__name__)


class ShortlinkDAO(EntryDAO[ShortlinkEntryModel]):
    """Entry DAO for the link shortener.

    Shortlinks are keyed by their human-chosen short name. A tombstoned
    shortlink keeps its name reserved: create_if_absent() rejects it.
    """

    def __init__(self, store: StoreBaseAdapter):
        super().__init__(store, ShortlinkEntryModel, SHORTLINK_COLLECTION)

    def update_stats(self, stats: Iterable[tuple[str, int]]) -> tuple[int, list[str]]:
        """Bulk update click counters

        Each shortlink is read, given its new click counter and upserted, one by one.
        Only `clicks` changes: created_at, longurl and deleted_at are carried over
        from the stored record. There is no multi-record transaction: on a
        DataStoreError the records written so far stay written.

        NOTE: read-then-write is acceptable here (unlike creates): a concurrent
              update of the same record is last write wins.

        Args:
            stats (Iterable[tuple[str, int]]):
                (shortname, clicks) pairs.

        Returns:
            tuple[int, list[str]]: number of records written, short names not found.
        """
        written, missing = 0, []
        for shortname, clicks in stats:
            try:
                entry = self.get(shortname)
            except EntryNotFoundError:
                missing.append(shortname)
                continue
            self.put(entry.with_clicks(clicks))
            written += 1

        logger.info(
            'Shortlink stats updated.',
            extra={'collection': self.collection.name, 'written': written, 'missing': missing},
        )
        return written, missing
