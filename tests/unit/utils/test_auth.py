"""Unit tests for admin bearer-token gating in auth.py.

Test coverage includes:

1. Bearer token extraction
   - Header name is case-insensitive, scheme must be Bearer.

2. Admin check
   - Matching token grants access, anything else denies it.
   - An unset ADMIN_BEARER_TOKEN denies every request.
"""

import pytest

from personalapi.utils.auth import bearer_token, is_admin


@pytest.fixture(autouse=True)
def admin_token(monkeypatch):
    monkeypatch.setenv('ADMIN_BEARER_TOKEN', 's3cr3t')


# -------------------------------
# 1. Bearer token extraction
# -------------------------------


@pytest.mark.parametrize(
    'headers, expected',
    [
        ({'Authorization': 'Bearer s3cr3t'}, 's3cr3t'),
        ({'authorization': 'bearer s3cr3t'}, 's3cr3t'),
        ({'Authorization': 'Basic czNjcjN0'}, None),
        ({'Authorization': 'Bearer '}, None),
        ({'Authorization': 's3cr3t'}, None),
        ({}, None),
        (None, None),
    ],
)
def test_bearer_token(headers, expected):
    assert bearer_token({'headers': headers}) == expected


# -------------------------------
# 2. Admin check
# -------------------------------


@pytest.mark.parametrize(
    'headers, expected',
    [
        ({'Authorization': 'Bearer s3cr3t'}, True),
        ({'Authorization': 'Bearer wrong'}, False),
        ({}, False),
    ],
)
def test_is_admin(headers, expected):
    assert is_admin({'headers': headers}) is expected


@pytest.mark.parametrize('token', [None, ''])
def test_is_admin_without_configured_token(monkeypatch, token):
    if token is None:
        monkeypatch.delenv('ADMIN_BEARER_TOKEN')
    else:
        monkeypatch.setenv('ADMIN_BEARER_TOKEN', token)

    assert is_admin({'headers': {'Authorization': 'Bearer '}}) is False
    assert is_admin({'headers': {'Authorization': 'Bearer anything'}}) is False
