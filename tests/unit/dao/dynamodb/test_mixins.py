"""Unit tests for DynamoDBClientMixin

Test coverage includes:

1. Initialization and configuration
   - Ensures a provided client is used as is.
   - Ensures a boto3 client is created, pointed at LocalStack when running locally.

2. Table naming
   - Explicit table overrides win.
   - Default table names are derived from the application prefix.
"""

from unittest.mock import MagicMock, patch

import pytest

from personalapi.constants import ENV
from personalapi.dao.base import GUESTBOOK_COLLECTION, SHORTLINK_COLLECTION
from personalapi.dao.dynamodb.mixins import DynamoDBClientMixin


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_with_client():
    client = MagicMock()
    mixin = DynamoDBClientMixin(dynamodb_client=client)
    assert mixin.dynamodb is client


def test_initialize_locally_points_at_localstack(monkeypatch):
    monkeypatch.setenv(ENV.App.APP_ENV, 'local')
    monkeypatch.setenv(ENV.LocalStack.ENDPOINT, 'http://localstack:4566')

    with patch('personalapi.dao.dynamodb.mixins.boto3.client') as client_mock:
        mixin = DynamoDBClientMixin(region_name='us-east-1')

    client_mock.assert_called_once_with('dynamodb', endpoint_url='http://localstack:4566', region_name='us-east-1')
    assert mixin.dynamodb is client_mock.return_value


def test_initialize_in_aws(monkeypatch):
    monkeypatch.setenv(ENV.App.APP_ENV, 'prod')
    monkeypatch.delenv(ENV.App.AWS_SAM_LOCAL, raising=False)

    with patch('personalapi.dao.dynamodb.mixins.boto3.client') as client_mock:
        DynamoDBClientMixin()

    client_mock.assert_called_once_with('dynamodb')


# -------------------------------
# 2. Table naming
# -------------------------------


@pytest.mark.parametrize(
    'tables, prefix, collection, expected',
    [
        ({'shortener': 'jil-link-shortener'}, 'personalapi:prod', SHORTLINK_COLLECTION, 'jil-link-shortener'),
        ({'shortener': 'jil-link-shortener'}, 'personalapi:prod', GUESTBOOK_COLLECTION, 'personalapi-prod-guestbook'),
        (None, None, GUESTBOOK_COLLECTION, 'guestbook'),
    ],
)
def test_table_name(tables, prefix, collection, expected):
    mixin = DynamoDBClientMixin(dynamodb_client=MagicMock(), tables=tables, prefix=prefix)
    assert mixin.table_name(collection) == expected
