"""Admin bearer-token gating for privileged routes.

The expected token is read from the `ADMIN_BEARER_TOKEN` environment variable.
Requests must carry it as `Authorization: Bearer <token>`.

Example:
    >>> os.environ['ADMIN_BEARER_TOKEN'] = 'admin'
    >>> is_admin({'headers': {'Authorization': 'Bearer admin'}})
    True
    >>> is_admin({'headers': {}})
    False
"""

import os
import hmac
import logging

from personalapi.types import LambdaEvent
from personalapi.constants import ENV


logger = logging.getLogger(__name__)


def bearer_token(event: LambdaEvent) -> str | None:
    """Extract the bearer token from the (case-insensitive) Authorization header."""
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    authorization = headers.get('authorization') or ''
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def is_admin(event: LambdaEvent) -> bool:
    """Return True if the request carries the configured admin bearer token.

    An unset or empty `ADMIN_BEARER_TOKEN` denies every request.
    """
    expected = os.environ.get(ENV.App.ADMIN_BEARER_TOKEN)
    if not expected:
        logger.warning('ADMIN_BEARER_TOKEN is not set. Denying privileged request.')
        return False

    token = bearer_token(event)
    if token is None:
        return False
    return hmac.compare_digest(token.encode(), expected.encode())
