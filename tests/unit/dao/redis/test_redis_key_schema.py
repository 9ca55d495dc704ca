"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Entry key generation
   - Ensures entry_key() namespaces keys by collection.

2. Collection scan pattern
   - Ensures entries_pattern() matches every entry key of a collection only.

3. Prefix behavior
   - Confirms keys are not prefixed when no prefix is provided.
   - Confirms keys are correctly prefixed when a valid prefix is provided.

4. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

from fnmatch import fnmatchcase

import pytest

from personalapi.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Entry key generation
# -------------------------------


@pytest.mark.parametrize(
    'collection, key, expected',
    [
        ('shortener', 'abc', 'shortener:entries:abc'),
        ('guestbook', '0b6f4c3e-3f0e-4a55-9d43-5d0b5a8b1c11', 'guestbook:entries:0b6f4c3e-3f0e-4a55-9d43-5d0b5a8b1c11'),
    ],
)
def test_entry_key(collection, key, expected):
    keys = RedisKeySchema()
    assert keys.entry_key(collection, key) == expected


# -------------------------------
# 2. Collection scan pattern
# -------------------------------


def test_entries_pattern_matches_own_collection_only():
    keys = RedisKeySchema(prefix='personalapi:dev')
    pattern = keys.entries_pattern('shortener')

    assert pattern == 'personalapi:dev:shortener:entries:*'
    assert fnmatchcase(keys.entry_key('shortener', 'abc'), pattern)
    assert not fnmatchcase(keys.entry_key('guestbook', 'abc'), pattern)


# -------------------------------
# 3. Prefix behavior
# -------------------------------


@pytest.mark.parametrize(
    'prefix, expected',
    [
        ('personalapi:prod', 'personalapi:prod:shortener:entries:abc'),
        ('secret', 'secret:shortener:entries:abc'),
        (None, 'shortener:entries:abc'),
    ],
)
def test_key_prefixing(prefix, expected):
    keys = RedisKeySchema(prefix=prefix)
    assert keys.entry_key('shortener', 'abc') == expected


# -------------------------------
# 4. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, -1, 45.6, [], {}])
def test_invalid_prefix_type_raises_error(prefix):
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
