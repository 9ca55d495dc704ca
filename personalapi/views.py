"""Response projections of entries (field visibility policy)

The same stored entry is returned from public endpoints (listings, creation)
and from admin endpoints (single fetch, delete confirmation) with different
disclosure requirements. Instead of flagging the entry itself, handlers wrap
it in an EntryView naming the conditional fields to disclose, and serialize
the view.

Rules:
    - Identity and content fields are always emitted.
    - Conditional fields (Field) are emitted if and only if requested.
    - `email` is write-only: it is never emitted, whatever the requested fields.

Example:
    >>> serialize(public_view(entry))
    {'id': '...', 'created_at': '...', 'url': None, 'message': 'Hello!', 'name': 'Paulo'}
    >>> serialize(admin_view(entry))['deleted_at']
    None
"""

from enum import StrEnum
from dataclasses import dataclass, field
from typing import Any

from personalapi.models import EntryModel, GuestbookEntryModel, ShortlinkEntryModel
from personalapi.utils.helpers import to_iso


class Field(StrEnum):
    """Conditional fields, disclosed only on request."""

    DELETED_AT = 'deleted_at'
    QA = 'qa'


@dataclass(frozen=True)
class EntryView:
    """An entry together with the conditional fields a response may disclose."""

    entry: EntryModel
    fields: frozenset[Field] = field(default_factory=frozenset)

    def shows(self, name: Field) -> bool:
        return name in self.fields


def public_view(entry: EntryModel, *extra: Field) -> EntryView:
    return EntryView(entry, frozenset(extra))


def admin_view(entry: EntryModel) -> EntryView:
    return EntryView(entry, frozenset(Field))


def _content(entry: EntryModel) -> dict[str, Any]:
    if isinstance(entry, GuestbookEntryModel):
        return {
            'id': entry.id,
            'created_at': to_iso(entry.created_at),
            'url': entry.url,
            'message': entry.message,
            'name': entry.name,
        }
    if isinstance(entry, ShortlinkEntryModel):
        return {
            'shortname': entry.shortname,
            'created_at': to_iso(entry.created_at),
            'longurl': entry.longurl,
            'clicks': entry.clicks,
        }
    raise TypeError(f'No serializer for {type(entry).__name__}.')


def serialize(view: EntryView) -> dict[str, Any]:
    """Serialize a view into a JSON-compatible dictionary"""
    entry = view.entry
    data = _content(entry)

    if view.shows(Field.DELETED_AT):
        data['deleted_at'] = None if entry.deleted_at is None else to_iso(entry.deleted_at)

    if view.shows(Field.QA) and hasattr(entry, 'qa'):
        data['qa'] = entry.qa

    return data


def serialize_all(views: list[EntryView]) -> list[dict[str, Any]]:
    return [serialize(view) for view in views]
