"""API Gateway (Lambda proxy) responses shared by all handlers

Error bodies follow the same shape everywhere:

    {"message": "Bad Request (Field 'name' must be <= 600 characters.)", "errorCode": "VALIDATION_FAILED"}
"""

import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from personalapi.types import LambdaResponse
from personalapi.constants import STORE_UNAVAILABLE
from personalapi.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def response(status_code: int, body: Any, headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error(status_code: int, base: str, message: str | None, error_code: str | None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return response(status_code, body)


def response_200(body: Any) -> LambdaResponse:
    return response(200, body)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_401(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    resp = _error(401, 'Unauthorized', message, error_code)
    resp['headers']['WWW-Authenticate'] = 'Bearer'
    return resp


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(409, 'Conflict', message, error_code)


def response_503(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(503, 'Service Unavailable', message, error_code)


def respond_503_on_store_error(handler: Callable) -> Callable:
    """Decorator: map DataStoreError escaping a handler to a retryable 503 response"""

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except DataStoreError:
            logger.exception('Backing store unavailable. Responding with 503.', extra={'event': STORE_UNAVAILABLE})
            return response_503(message='backing store unavailable, retry later', error_code=STORE_UNAVAILABLE)

    return wrapper
