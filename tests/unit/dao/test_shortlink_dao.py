"""Unit tests for the ShortlinkDAO

Test coverage includes:
    1. Bulk stat updates
       - Ensures only click counters change on stored records.
       - Ensures unknown short names are reported, not created.
       - Ensures tombstones survive stat updates.
    2. Short name reservation
       - Confirms a deleted short name cannot be created again.
"""

from datetime import datetime, UTC

import pytest

from personalapi.dao import ShortlinkDAO
from personalapi.dao.exceptions import EntryAlreadyExistsError, EntryNotFoundError
from personalapi.models import ShortlinkEntryModel


T0 = datetime(2024, 4, 5, 16, 11, 3, tzinfo=UTC)


@pytest.fixture
def shortlinks(store) -> ShortlinkDAO:
    dao = ShortlinkDAO(store)
    dao.create_if_absent(ShortlinkEntryModel(shortname='abc', longurl='https://example.com', created_at=T0))
    dao.create_if_absent(ShortlinkEntryModel(shortname='cv', longurl='https://example.com/cv.pdf', created_at=T0))
    return dao


# -------------------------------
# 1. Bulk stat updates
# -------------------------------


def test_update_stats(shortlinks):
    written, missing = shortlinks.update_stats([('abc', 12), ('cv', 3)])

    assert (written, missing) == (2, [])
    abc = shortlinks.get('abc')
    assert abc.clicks == 12
    assert abc.longurl == 'https://example.com'
    assert abc.created_at == T0
    assert shortlinks.get('cv').clicks == 3


def test_update_stats_reports_missing(shortlinks):
    written, missing = shortlinks.update_stats([('abc', 1), ('ghost', 5)])

    assert (written, missing) == (1, ['ghost'])
    with pytest.raises(EntryNotFoundError):
        shortlinks.get('ghost')


def test_update_stats_keeps_tombstones(shortlinks):
    deleted = shortlinks.soft_delete('cv')

    shortlinks.update_stats([('cv', 40)])

    cv = shortlinks.get('cv')
    assert cv.clicks == 40
    assert cv.deleted_at == deleted.deleted_at


def test_update_stats_with_nothing(shortlinks):
    assert shortlinks.update_stats([]) == (0, [])


# -------------------------------
# 2. Short name reservation
# -------------------------------


def test_deleted_shortname_stays_reserved(shortlinks):
    shortlinks.soft_delete('abc')

    with pytest.raises(EntryAlreadyExistsError):
        shortlinks.create_if_absent(ShortlinkEntryModel(shortname='abc', longurl='https://other.com'))
