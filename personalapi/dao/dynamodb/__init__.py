from personalapi.dao.dynamodb.mixins import DynamoDBClientMixin
from personalapi.dao.dynamodb.dynamodb_store_adapter import DynamoDBStoreAdapter


__all__ = [
    'DynamoDBClientMixin',
    'DynamoDBStoreAdapter',
]
