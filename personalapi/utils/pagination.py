"""Cursor-based windowing over ordered entry listings.

The backing stores have no native ordering or offset support, so each page
request re-scans and re-sorts the whole collection. This keeps pages
consistent with writes but bounds listings to small collections (a few
thousand entries at most). Do not cache listings to work around this: a
cached page can desynchronize from writes.
"""

from collections.abc import Sequence
from typing import TypeVar

from personalapi.models import EntryModel


E = TypeVar('E', bound=EntryModel)


def entries_after(entries: Sequence[E], after: str | None = None) -> list[E]:
    """Return the entries strictly following the entry whose key is `after`.

    Args:
        entries (Sequence[EntryModel]):
            Entries already sorted in listing order.
        after (str | None):
            Cursor (an entry key). None returns every entry.

    Returns:
        list[EntryModel]:
            The window following the cursor. A stale cursor (no entry with
            that key, e.g. it was deleted or never existed) returns every
            entry, i.e. restarts from the beginning.

    Example:
        >>> [e.key for e in entries_after([a, b, c], after=a.key)]
        ['b', 'c']
        >>> entries_after([a, b, c], after=c.key)
        []
    """
    if after is None:
        return list(entries)

    for index, entry in enumerate(entries):
        if entry.key == after:
            return list(entries[index + 1 :])

    return list(entries)
