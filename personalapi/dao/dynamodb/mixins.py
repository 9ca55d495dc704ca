"""DynamoDB mixin providing shared boto3 client initialization.

Responsibilities:
    - Initialize a DynamoDB client (pointed at LocalStack when running locally)
    - Resolve table names per collection

Classes:
    - DynamoDBClientMixin: Base mixin to inject DynamoDB client setup & table naming.
"""

import os
from typing import Optional

import boto3
from botocore.client import BaseClient

from personalapi.constants import ENV
from personalapi.dao.base import Collection
from personalapi.utils.runtime import running_locally


class DynamoDBClientMixin:
    """Mixin DynamoDB client setup for DynamoDB-backed adapters.

    Attributes:
        dynamodb (BaseClient):
            Low-level boto3 DynamoDB client used by subclasses.

        tables (dict[str, str]):
            Explicit collection name -> table name mapping.

        prefix (Optional[str]):
            Prefix for default table names, e.g. 'personalapi:prod' gives
            'personalapi-prod-guestbook'.
    """

    def __init__(
        self,
        dynamodb_client: Optional[BaseClient] = None,
        region_name: Optional[str] = None,
        tables: Optional[dict[str, str]] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a DynamoDB client for entry storage

        Args:
            dynamodb_client (Optional[BaseClient]):
                Pre-initialized boto3 DynamoDB client (useful in tests).
                If None, a new client is created (points to LocalStack in local mode).

            region_name (Optional[str]):
                AWS region of the tables. Defaults to the boto3 session region.

            tables (Optional[dict[str, str]]):
                Collection name -> table name overrides.

            prefix (Optional[str]):
                Namespace prefix for default table names, e.g. 'app:env'.
        """
        if dynamodb_client is None:
            # fmt: off
            client_kwargs = {
                'endpoint_url': os.environ.get(ENV.LocalStack.ENDPOINT, 'http://localhost:4566'),
            } if running_locally() else {}
            # fmt: on
            if region_name is not None:
                client_kwargs['region_name'] = region_name
            dynamodb_client = boto3.client('dynamodb', **client_kwargs)

        self.dynamodb = dynamodb_client
        self.tables = dict(tables or {})
        self.prefix = prefix

    def table_name(self, collection: Collection) -> str:
        if collection.name in self.tables:
            return self.tables[collection.name]
        if self.prefix is None:
            return collection.name
        return f"{self.prefix.replace(':', '-')}-{collection.name}"
