"""Unit tests for store_from_config()

Test coverage includes:
    1. Backend selection
       - Redis settings are forwarded as redis_* keyword arguments.
       - DynamoDB settings are forwarded as region and table overrides.
    2. Invalid configurations
       - Zero, several or unknown backends raise BadConfigurationError.
"""

from unittest.mock import patch

import pytest

from personalapi.dao.factory import store_from_config
from personalapi.exceptions import BadConfigurationError


# -------------------------------
# 1. Backend selection
# -------------------------------


def test_redis_backend():
    app_config = {'redis': {'host': 'redis', 'port': 6379, 'db': 0}}

    with patch('personalapi.dao.factory.RedisStoreAdapter') as adapter_mock:
        store = store_from_config(app_config, prefix='personalapi:test')

    adapter_mock.assert_called_once_with(redis_host='redis', redis_port=6379, redis_db=0, prefix='personalapi:test')
    assert store is adapter_mock.return_value


def test_dynamodb_backend():
    app_config = {'dynamodb': {'region_name': 'us-east-1', 'tables': {'shortener': 'jil-link-shortener'}}}

    with patch('personalapi.dao.factory.DynamoDBStoreAdapter') as adapter_mock:
        store = store_from_config(app_config)

    adapter_mock.assert_called_once_with(region_name='us-east-1', tables={'shortener': 'jil-link-shortener'}, prefix=None)
    assert store is adapter_mock.return_value


def test_dynamodb_backend_without_settings():
    with patch('personalapi.dao.factory.DynamoDBStoreAdapter') as adapter_mock:
        store_from_config({'dynamodb': None}, prefix='personalapi:dev')

    adapter_mock.assert_called_once_with(region_name=None, tables=None, prefix='personalapi:dev')


# -------------------------------
# 2. Invalid configurations
# -------------------------------


@pytest.mark.parametrize(
    'app_config',
    [
        {},
        {'redis': {}, 'dynamodb': {}},
        {'postgres': {'host': 'db'}},
    ],
)
def test_invalid_configurations(app_config):
    with pytest.raises(BadConfigurationError):
        store_from_config(app_config)
