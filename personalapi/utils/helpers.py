"""Helper utilities for AWS lambda functions.

Functions:
    utc_now() -> datetime
        Current time as a timezone-aware UTC datetime
    to_iso(dt: datetime) -> str
        ISO-8601 string representation of a datetime
    from_iso(value: str) -> datetime
        Parse an ISO-8601 string into a timezone-aware datetime
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn any unhandled exception in a handler into a 500 response

Example:
    >>> to_iso(datetime(2024, 4, 5, 16, 11, 3, tzinfo=UTC))
    '2024-04-05T16:11:03+00:00'
    >>> from_iso('2024-04-05T16:11:03Z')
    datetime.datetime(2024, 4, 5, 16, 11, 3, tzinfo=datetime.timezone.utc)
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from personalapi.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from personalapi.exceptions import MissingEnvironmentVariableError
from personalapi.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    return dt.isoformat()


def from_iso(value: str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are assumed to be UTC.

    Raises:
        TypeError: If value is not a string.
        ValueError: If value is not a valid ISO-8601 timestamp.
    """
    if not isinstance(value, str):
        raise TypeError(f'Expected ISO-8601 string, got {type(value).__name__}.')
    dt = datetime.fromisoformat(value)
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 on any exception escaping a lambda handler

    When running locally (SAM), the exception is re-raised instead so the
    traceback shows up in the SAM console.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'handler': handler.__name__},
            )
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
