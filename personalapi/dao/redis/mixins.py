"""Redis client setup shared by Redis-backed store adapters.

The mixin owns two things an adapter needs before it can serve requests:
a connected client and the key schema for its application prefix. A client
is either injected (tests, shared pools) or built from the `redis_*`
settings of the lambda's AppConfig section, e.g.

    {"redis": {"host": "redis", "port": 6379, "db": 0, "username": "default", "password": "..."}}

is passed by store_from_config() as `redis_host='redis', redis_port=6379, ...`.

The server is pinged once at construction, so a lambda fails fast with a
DataStoreError (503) instead of failing on its first command.

Example:
    >>> class RedisStoreAdapter(RedisClientMixin, StoreBaseAdapter):
    ...     pass
    ...
    >>> store = RedisStoreAdapter(redis_host='redis', prefix='personalapi:prod')
    >>> store.keys.entries_pattern('guestbook')
    'personalapi:prod:guestbook:entries:*'
"""

from typing import Optional

import redis

from personalapi.dao.redis.redis_key_schema import RedisKeySchema
from personalapi.dao.redis.helpers import UNREACHABLE_ERRORS, unreachable_error


class RedisClientMixin:
    """Inject a Redis client and a key schema into store adapters.

    Attributes:
        redis (redis.Redis):
            Client used by the adapter's commands.
        keys (RedisKeySchema):
            Namespaced key builder for the application prefix.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Attach a Redis client (injected or built from settings) and check it answers

        NOTE: ports and db indexes may come from AppConfig as strings; they are
              coerced to int.

        Raises:
            DataStoreError:
                If Redis can't be reached or doesn't answer PING in time.
        """
        self.redis = redis_client or redis.Redis(
            host=redis_host,
            port=int(redis_port),
            db=int(redis_db),
            decode_responses=redis_decode_responses,
            username=redis_username,
            password=redis_password,
        )
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis

        Returns:
            bool: True on PONG. False on connection failure or timeout, only if raise_error=False.

        Raises:
            DataStoreError:
                On connection failure or timeout, if raise_error=True.
        """
        try:
            self.redis.ping()
        except UNREACHABLE_ERRORS as e:
            if raise_error:
                raise unreachable_error(self.redis, hint='Check the provided configuration parameters.') from e
            return False
        return True
