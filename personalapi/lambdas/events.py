"""Helpers extracting request data from API Gateway (Lambda proxy) events"""

import json
import base64
from typing import Any

from personalapi.types import LambdaEvent


def path_parameter(event: LambdaEvent, name: str) -> str | None:
    return (event.get('pathParameters') or {}).get(name)


def query_parameter(event: LambdaEvent, name: str) -> str | None:
    return (event.get('queryStringParameters') or {}).get(name)


def query_flag(event: LambdaEvent, name: str) -> bool:
    """Interpret a query string parameter as a boolean flag (?qa=true, ?qa=1)"""
    value = query_parameter(event, name)
    return value is not None and value.strip().lower() in {'1', 'true', 'yes'}


def json_body(event: LambdaEvent) -> Any:
    """Decode the JSON request body

    Raises:
        ValueError: If the body is not valid (base64-encoded) JSON.
    """
    body = event.get('body') or 'null'
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return json.loads(body)
