"""Build the backing store adapter selected by the application configuration.

Example:
    >>> store_from_config({'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}, prefix='personalapi:dev')
    <personalapi.dao.redis.redis_store_adapter.RedisStoreAdapter object at ...>
"""

import logging

from personalapi.types import LambdaConfiguration
from personalapi.constants import Backend
from personalapi.exceptions import BadConfigurationError
from personalapi.dao.base import StoreBaseAdapter
from personalapi.dao.redis import RedisStoreAdapter
from personalapi.dao.dynamodb import DynamoDBStoreAdapter


logger = logging.getLogger(__name__)


def store_from_config(app_config: LambdaConfiguration, prefix: str | None = None) -> StoreBaseAdapter:
    """Instantiate the store adapter for the (single) backend in a lambda's config

    Args:
        app_config (dict):
            Lambda config as returned by load_config(), e.g. {'redis': {...}}.
        prefix (str | None):
            Application prefix used to namespace keys/tables.

    Raises:
        BadConfigurationError:
            If the config does not hold exactly one supported backend.
        DataStoreError:
            If the backend is unreachable at construction time (Redis healthcheck).
    """
    if len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one active backend, got {sorted(app_config)}.')

    [(backend, settings)] = app_config.items()
    settings = settings or {}
    logger.debug('Using %s as the backing store.', backend)

    if backend == Backend.REDIS:
        redis_config = {f'redis_{k}': v for k, v in settings.items()}
        return RedisStoreAdapter(**redis_config, prefix=prefix)
    if backend == Backend.DYNAMODB:
        return DynamoDBStoreAdapter(
            region_name=settings.get('region_name'),
            tables=settings.get('tables'),
            prefix=prefix,
        )

    raise BadConfigurationError(f"Unsupported backend '{backend}'.")
