import functools
from decimal import Decimal
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

from personalapi.types import StoreItem
from personalapi.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

CONDITIONAL_CHECK_FAILED = 'ConditionalCheckFailedException'

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def handle_dynamodb_error[F](method: F) -> F:
    """Wrap DynamoDB-interacting adapter methods to handle AWS API errors

    Args:
        method (Callable[..., Any]):
            Adapter method performing DynamoDB calls which may raise
            botocore.exceptions.BotoCoreError or ClientError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on DynamoDB failures.

    NOTE: ConditionalCheckFailedException must be handled inside the wrapped
          method; if it escapes, it is reported as a DataStoreError too.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', 'Unknown')
            raise DataStoreError(f'DynamoDB request failed ({code}).') from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach DynamoDB: {e}") from e

    return wrapper


def is_conditional_check_failure(error: ClientError) -> bool:
    return error.response.get('Error', {}).get('Code') == CONDITIONAL_CHECK_FAILED


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_plain(v) for v in value]
    return value


def to_dynamodb(item: StoreItem) -> dict[str, Any]:
    """Serialize a plain item into DynamoDB attribute values"""
    return {k: _serializer.serialize(v) for k, v in item.items()}


def from_dynamodb(attributes: dict[str, Any]) -> StoreItem:
    """Deserialize DynamoDB attribute values into a plain item (Decimal -> int/float)"""
    return {k: _plain(_deserializer.deserialize(v)) for k, v in attributes.items()}
