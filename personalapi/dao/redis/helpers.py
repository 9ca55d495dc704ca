import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from personalapi.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

# Raised when the server can't be reached or doesn't answer in time
UNREACHABLE_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_address(client: redis.Redis) -> str:
    """Render a client's target as host:port/db for error messages"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def unreachable_error(client: redis.Redis, hint: str = '') -> DataStoreError:
    message = f"Can't connect to Redis at {redis_address(client)}."
    return DataStoreError(f'{message} {hint}' if hint else message)


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting adapter methods to translate Redis failures

    Args:
        method (Callable[..., Any]):
            Adapter method performing Redis operations which may raise
            any redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError instead:
              - connection errors and timeouts: "Can't connect to Redis at ...";
              - any other server error (READONLY replica, OOM, ...): "Redis request failed ...".

    Example:
        >>> @handle_redis_connection_error
        ... def get_item(self, collection, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except UNREACHABLE_ERRORS as e:
            raise unreachable_error(self.redis) from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis request failed at {redis_address(self.redis)} ({type(e).__name__}: {e}).') from e

    return wrapper
