"""DynamoDB implementation of the backing store adapter

Each collection lives in its own table, partitioned by the collection's
key field (`id` for the guestbook, `shortname` for the link shortener).

Classes:
    DynamoDBStoreAdapter:
        StoreBaseAdapter backed by DynamoDB.

Example:
    >>> store = DynamoDBStoreAdapter(tables={'shortener': 'jil-link-shortener'})
    >>> store.put_item(SHORTLINK_COLLECTION, {'shortname': 'abc', 'longurl': 'https://example.com'}, if_absent=True)
    True
    >>> store.put_item(SHORTLINK_COLLECTION, {'shortname': 'abc', 'longurl': 'https://other.com'}, if_absent=True)
    False
"""

import logging

from beartype import beartype
from botocore.exceptions import ClientError

from personalapi.types import StoreItem
from personalapi.dao.base import Collection, StoreBaseAdapter
from personalapi.dao.dynamodb.mixins import DynamoDBClientMixin
from personalapi.dao.dynamodb.helpers import (
    handle_dynamodb_error,
    is_conditional_check_failure,
    to_dynamodb,
    from_dynamodb,
)


logger = logging.getLogger(__name__)


class DynamoDBStoreAdapter(DynamoDBClientMixin, StoreBaseAdapter):
    """DynamoDB-based backing store adapter

    Attributes (see DynamoDBClientMixin):
        dynamodb (BaseClient):
            Low-level boto3 DynamoDB client.
        tables (dict[str, str]):
            Collection name -> table name overrides.
    """

    @handle_dynamodb_error
    @beartype
    def get_item(self, collection: Collection, key: str) -> StoreItem | None:
        response = self.dynamodb.get_item(
            TableName=self.table_name(collection),
            Key={collection.key_field: {'S': key}},
            ConsistentRead=True,
        )
        attributes = response.get('Item')
        return None if attributes is None else from_dynamodb(attributes)

    @handle_dynamodb_error
    @beartype
    def put_item(self, collection: Collection, item: StoreItem, if_absent: bool = False) -> bool:
        """Write an item, conditionally on `attribute_not_exists(<key field>)` for creates

        NOTE: the condition is evaluated by DynamoDB atomically with the write,
              so exactly one of two concurrent creates for the same key succeeds.
              The loser gets ConditionalCheckFailedException, reported as False.
        """
        request = {
            'TableName': self.table_name(collection),
            'Item': to_dynamodb(item),
        }
        if if_absent:
            request['ConditionExpression'] = 'attribute_not_exists(#key)'
            request['ExpressionAttributeNames'] = {'#key': collection.key_field}

        try:
            self.dynamodb.put_item(**request)
        except ClientError as e:
            if if_absent and is_conditional_check_failure(e):
                return False
            raise
        return True

    @handle_dynamodb_error
    @beartype
    def scan(self, collection: Collection) -> list[StoreItem]:
        """Scan a whole table, following LastEvaluatedKey until exhausted"""
        request = {'TableName': self.table_name(collection)}
        items = []
        pages = 0

        while True:
            response = self.dynamodb.scan(**request)
            items.extend(from_dynamodb(attributes) for attributes in response.get('Items', []))
            pages += 1

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            request['ExclusiveStartKey'] = last_key

        logger.debug('Scanned DynamoDB table.', extra={'collection': collection.name, 'pages': pages, 'items': len(items)})
        return items
