"""Unit tests for entry models.

Test coverage includes:

1. Identity and lifecycle
   - Ensures keys resolve through KEY_FIELD.
   - Ensures tombstoning returns a stamped copy and re-stamps deleted entries.

2. Persisted item conversion
   - Ensures absent optional fields are omitted and datetimes are ISO strings.
   - Ensures malformed items raise ValueError.

3. Form validation
   - Ensures guestbook submissions are validated (required fields, limits, qa flag).
   - Ensures shortlink submissions require shortname and longurl.

4. Stats payload parsing
"""

from datetime import datetime, UTC

import pytest
from freezegun import freeze_time

from personalapi.constants import Limits
from personalapi.exceptions import ValidationError
from personalapi.models import GuestbookEntryModel, ShortlinkEntryModel


T0 = datetime(2024, 4, 5, 16, 11, 3, tzinfo=UTC)


# -------------------------------
# 1. Identity and lifecycle
# -------------------------------


def test_keys():
    guestbook_entry = GuestbookEntryModel(id='f00d', name='Mat', message='Woooooo')
    shortlink = ShortlinkEntryModel(shortname='abc', longurl='https://example.com')

    assert guestbook_entry.key == 'f00d'
    assert shortlink.key == 'abc'


def test_generated_ids_are_unique():
    assert GuestbookEntryModel(name='a', message='b').id != GuestbookEntryModel(name='a', message='b').id


@freeze_time('2025-10-01 09:00:00')
def test_created_at_defaults_to_now():
    entry = ShortlinkEntryModel(shortname='abc', longurl='https://example.com')

    assert entry.created_at == datetime(2025, 10, 1, 9, 0, tzinfo=UTC)
    assert entry.deleted_at is None
    assert not entry.is_deleted


def test_tombstoned_returns_stamped_copy():
    entry = ShortlinkEntryModel(shortname='abc', longurl='https://example.com', created_at=T0)

    with freeze_time('2025-10-01 09:00:00'):
        deleted = entry.tombstoned()

    assert not entry.is_deleted
    assert deleted.is_deleted
    assert deleted.deleted_at == datetime(2025, 10, 1, 9, 0, tzinfo=UTC)
    assert deleted.created_at == entry.created_at


def test_tombstoned_restamps():
    first = datetime(2025, 1, 1, tzinfo=UTC)
    second = datetime(2025, 2, 1, tzinfo=UTC)
    entry = ShortlinkEntryModel(shortname='abc', longurl='https://example.com').tombstoned(first)

    assert entry.tombstoned(second).deleted_at == second


def test_sort_key_breaks_ties_by_key():
    a = ShortlinkEntryModel(shortname='a', longurl='https://a.com', created_at=T0)
    b = ShortlinkEntryModel(shortname='b', longurl='https://b.com', created_at=T0)

    assert sorted([b, a], key=lambda entry: entry.sort_key()) == [a, b]


# -------------------------------
# 2. Persisted item conversion
# -------------------------------


def test_to_item_omits_absent_fields():
    entry = GuestbookEntryModel(id='f00d', name='Mat', message='Woooooo', created_at=T0)

    assert entry.to_item() == {
        'id': 'f00d',
        'name': 'Mat',
        'message': 'Woooooo',
        'qa': False,
        'created_at': '2024-04-05T16:11:03+00:00',
    }


def test_from_item_restores_entry():
    entry = GuestbookEntryModel(id='f00d', name='Mat', message='Woooooo', email='mat@example.com', created_at=T0).tombstoned(T0)
    assert GuestbookEntryModel.from_item(entry.to_item()) == entry


def test_from_item_ignores_unknown_attributes():
    item = {'shortname': 'abc', 'longurl': 'https://example.com', 'created_at': '2024-04-05T16:11:03Z', 'legacy': 1}

    entry = ShortlinkEntryModel.from_item(item)

    assert entry.created_at == T0
    assert entry.clicks == 0


@pytest.mark.parametrize(
    'item',
    [
        {'shortname': 'abc', 'longurl': 'https://example.com'},
        {'shortname': 'abc', 'created_at': '2024-04-05T16:11:03Z'},
        {'shortname': 'abc', 'longurl': 'https://example.com', 'created_at': 'yesterday'},
        {'shortname': 'abc', 'longurl': 'https://example.com', 'created_at': 1712333463},
    ],
)
def test_from_item_with_malformed_item(item):
    with pytest.raises(ValueError):
        ShortlinkEntryModel.from_item(item)


# -------------------------------
# 3. Form validation
# -------------------------------


def test_guestbook_from_form():
    entry = GuestbookEntryModel.from_form(
        {'name': 'Paulo', 'message': 'Hello!', 'email': 'paulo@example.com', 'url': '', 'qa': True}
    )

    assert entry.name == 'Paulo'
    assert entry.email == 'paulo@example.com'
    assert entry.url is None
    assert entry.qa is True
    assert entry.deleted_at is None


@pytest.mark.parametrize(
    'form, message',
    [
        ({'message': 'Hello!'}, "Field 'name' is required"),
        ({'name': 'Paulo', 'message': ''}, "Field 'message' is required"),
        ({'name': 'Paulo', 'message': 'Hello!', 'qa': 'yes'}, "Field 'qa' must be a boolean"),
        ({'name': 'Paulo', 'message': 'Hello!', 'email': 42}, "Field 'email' must be a string"),
        ({'name': 'x' * (Limits.GUESTBOOK_NAME + 1), 'message': 'Hello!'}, "Field 'name' must be <= 600 characters"),
        ({'name': 'Paulo', 'message': 'x' * (Limits.GUESTBOOK_MESSAGE + 1)}, "Field 'message' must be <= 1200 characters"),
        (['Paulo', 'Hello!'], 'must be a JSON object'),
    ],
)
def test_guestbook_from_form_rejects_invalid_submissions(form, message):
    with pytest.raises(ValidationError, match=message):
        GuestbookEntryModel.from_form(form)


def test_guestbook_limits_are_inclusive():
    entry = GuestbookEntryModel.from_form({'name': 'x' * Limits.GUESTBOOK_NAME, 'message': 'x' * Limits.GUESTBOOK_MESSAGE})
    assert len(entry.message) == Limits.GUESTBOOK_MESSAGE


def test_guestbook_limits_count_characters_not_bytes():
    name = 'é' * Limits.GUESTBOOK_NAME
    entry = GuestbookEntryModel.from_form({'name': name, 'message': '日本' * (Limits.GUESTBOOK_MESSAGE // 2)})

    assert entry.name == name
    assert len(entry.name.encode('utf-8')) == 2 * Limits.GUESTBOOK_NAME
    assert len(entry.message.encode('utf-8')) == 3 * Limits.GUESTBOOK_MESSAGE


def test_shortlink_from_form_ignores_client_counters():
    entry = ShortlinkEntryModel.from_form({'shortname': 'abc', 'longurl': 'https://example.com', 'clicks': 999})

    assert entry.clicks == 0
    assert entry.key == 'abc'


@pytest.mark.parametrize(
    'form',
    [
        {'longurl': 'https://example.com'},
        {'shortname': '', 'longurl': 'https://example.com'},
        {'shortname': 'abc'},
        'abc',
    ],
)
def test_shortlink_from_form_rejects_invalid_submissions(form):
    with pytest.raises(ValidationError):
        ShortlinkEntryModel.from_form(form)


def test_with_clicks():
    entry = ShortlinkEntryModel(shortname='abc', longurl='https://example.com', created_at=T0)

    updated = entry.with_clicks(5)

    assert updated.clicks == 5
    assert entry.clicks == 0
    assert updated.created_at == T0


# -------------------------------
# 4. Stats payload parsing
# -------------------------------


def test_parse_stats():
    item = {'shortname': 'abc', 'longurl': 'https://example.com', 'clicks': 7, 'created_at': '2024-04-05T16:11:03+00:00'}
    assert ShortlinkEntryModel.parse_stats(item) == ('abc', 7)


@pytest.mark.parametrize(
    'item',
    [
        {'shortname': 'abc'},
        {'shortname': 'abc', 'clicks': -1},
        {'shortname': 'abc', 'clicks': '7'},
        {'shortname': 'abc', 'clicks': True},
        {'clicks': 7},
        'abc',
    ],
)
def test_parse_stats_rejects_unparseable_items(item):
    with pytest.raises(ValidationError, match='Could not parse entry'):
        ShortlinkEntryModel.parse_stats(item)
