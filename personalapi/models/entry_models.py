"""Record models shared by every entry collection.

Every persisted entry has an immutable identity (its key and creation time)
and a single mutable lifecycle field, `deleted_at`, which marks the entry as
soft-deleted (tombstoned). Entries are never physically erased.

Classes:
    EntryModel:
        Abstract base record. Subclasses declare `KEY_FIELD`.
    GuestbookEntryModel:
        Public guestbook message, keyed by a generated UUID.
    ShortlinkEntryModel:
        Link shortener mapping, keyed by its human-chosen short name.

Example:
    >>> entry = GuestbookEntryModel.from_form({'name': 'Paulo', 'message': 'Hello!'})
    >>> entry.key == entry.id
    True
    >>> entry.is_deleted
    False
    >>> entry.tombstoned().is_deleted
    True
"""

import uuid
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Self

from personalapi.constants import Limits
from personalapi.exceptions import ValidationError
from personalapi.types import StoreItem
from personalapi.utils.helpers import utc_now, to_iso, from_iso


@dataclass(frozen=True, kw_only=True)
class EntryModel:
    """Base record with identity and lifecycle fields.

    Attributes:
        created_at (datetime):
            Set once at creation, never mutated.
        deleted_at (datetime | None):
            Tombstone timestamp. None while the entry is live.

    Subclasses must set `KEY_FIELD` to the name of the attribute holding
    the record key.
    """

    KEY_FIELD: ClassVar[str]

    created_at: datetime = field(default_factory=utc_now)
    deleted_at: datetime | None = None

    @property
    def key(self) -> str:
        return getattr(self, self.KEY_FIELD)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def sort_key(self) -> tuple[datetime, str]:
        """Strict total order for listings: creation time, ties broken by key."""
        return self.created_at, self.key

    def tombstoned(self, at: datetime | None = None) -> Self:
        """Return a copy of this entry stamped as deleted at `at` (now by default).

        NOTE: stamping an already deleted entry re-stamps it (last write wins).
        """
        return dataclasses.replace(self, deleted_at=at or utc_now())

    def to_item(self) -> StoreItem:
        """Convert to the persisted item shape, omitting absent optional fields."""
        item = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            item[f.name] = to_iso(value) if isinstance(value, datetime) else value
        return item

    @classmethod
    def from_item(cls, item: StoreItem) -> Self:
        """Build an entry from a persisted item.

        Raises:
            ValueError:
                If the item is missing required attributes or holds malformed values.
        """
        names = {f.name for f in dataclasses.fields(cls)}
        kwargs = {k: v for k, v in item.items() if k in names}
        try:
            kwargs['created_at'] = from_iso(kwargs['created_at'])
            if kwargs.get('deleted_at') is not None:
                kwargs['deleted_at'] = from_iso(kwargs['deleted_at'])
            return cls(**kwargs)
        except (KeyError, TypeError) as e:
            raise ValueError(f'Malformed {cls.__name__} item: {e}') from e


def _required_text(form: dict[str, Any], name: str, max_length: int | None = None) -> str:
    value = form.get(name)
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Field '{name}' is required and must be a non-empty string.")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"Field '{name}' must be <= {max_length} characters.")
    return value


def _optional_text(form: dict[str, Any], name: str) -> str | None:
    value = form.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Field '{name}' must be a string.")
    return value or None


@dataclass(frozen=True, kw_only=True)
class GuestbookEntryModel(EntryModel):
    """Guestbook message.

    Attributes:
        id (str): Generated UUID4 (record key).
        name (str): Author name.
        message (str): Message body.
        email (str | None): Author email. Write-only, never serialized in responses.
        url (str | None): Author website.
        qa (bool): Marks test submissions, hidden from public listings by default.
    """

    KEY_FIELD: ClassVar[str] = 'id'

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    message: str
    email: str | None = None
    url: str | None = None
    qa: bool = False

    @classmethod
    def from_form(cls, form: dict[str, Any]) -> 'GuestbookEntryModel':
        """Validate a client submission and build a new (live) guestbook entry.

        Raises:
            ValidationError: If a field is missing, has the wrong type or is too long.
        """
        if not isinstance(form, dict):
            raise ValidationError('Guestbook submission must be a JSON object.')

        qa = form.get('qa', False)
        if not isinstance(qa, bool):
            raise ValidationError("Field 'qa' must be a boolean.")

        return cls(
            name=_required_text(form, 'name', Limits.GUESTBOOK_NAME),
            message=_required_text(form, 'message', Limits.GUESTBOOK_MESSAGE),
            email=_optional_text(form, 'email'),
            url=_optional_text(form, 'url'),
            qa=qa,
        )


@dataclass(frozen=True, kw_only=True)
class ShortlinkEntryModel(EntryModel):
    """Link shortener mapping.

    Attributes:
        shortname (str): Human-chosen short name (natural record key).
        longurl (str): Target URL.
        clicks (int): Click counter, updated through bulk stat updates.
    """

    KEY_FIELD: ClassVar[str] = 'shortname'

    shortname: str
    longurl: str
    clicks: int = 0

    def with_clicks(self, clicks: int) -> 'ShortlinkEntryModel':
        return dataclasses.replace(self, clicks=clicks)

    @classmethod
    def from_form(cls, form: dict[str, Any]) -> 'ShortlinkEntryModel':
        """Validate a client submission and build a new (live) shortlink entry.

        Raises:
            ValidationError: If `shortname` or `longurl` is missing or empty.
        """
        if not isinstance(form, dict):
            raise ValidationError('Shortlink submission must be a JSON object.')

        return cls(
            shortname=_required_text(form, 'shortname'),
            longurl=_required_text(form, 'longurl'),
        )

    @staticmethod
    def parse_stats(item: Any) -> tuple[str, int]:
        """Parse a bulk stats payload element into (shortname, clicks).

        Elements are shortlink records as previously listed; only `shortname`
        and `clicks` are used, the other attributes are ignored.

        Raises:
            ValidationError: If the element cannot be parsed.
        """
        if not isinstance(item, dict):
            raise ValidationError(f'Could not parse entry: {item!r}')

        shortname = item.get('shortname')
        if not isinstance(shortname, str) or not shortname:
            raise ValidationError(f"Could not parse entry: {item!r} ('shortname' must be a non-empty string)")

        clicks = item.get('clicks')
        if isinstance(clicks, bool) or not isinstance(clicks, int) or clicks < 0:
            raise ValidationError(f"Could not parse entry: {item!r} ('clicks' must be a non-negative integer)")

        return shortname, clicks
