"""
DynamoDB implementation of StateRepository.

Table schema
────────────
  Table name    : vpc_provider_state  (configurable via DYNAMODB_TABLE_NAME)
  Partition key : resource_key  (String)

The table is created on first use when it does not already exist.
"""

import logging
from typing import Optional

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from vpcprovider.config import settings
from vpcprovider.dao.base import StateRepository

logger = logging.getLogger(__name__)


class DynamoDBStateRepository(StateRepository):
    """
    StateRepository backed by Amazon DynamoDB.

    The boto3 resource and table handle are created lazily so that importing
    this module does not require live AWS credentials.
    """

    def __init__(self) -> None:
        self._table = None  # populated on first access via _get_table()

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _build_resource(self):
        kwargs: dict = {"region_name": settings.aws_region}
        if settings.aws_access_key_id:
            kwargs["aws_access_key_id"] = settings.aws_access_key_id
            kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
        if settings.dynamodb_endpoint_url:
            kwargs["endpoint_url"] = settings.dynamodb_endpoint_url
        return boto3.resource("dynamodb", **kwargs)

    def _get_table(self):
        """
        Return the Table handle, creating the table if it does not yet exist.
        The handle is cached after the first successful call.
        """
        if self._table is not None:
            return self._table

        ddb = self._build_resource()
        table_name = settings.dynamodb_table_name

        try:
            table = ddb.create_table(
                TableName=table_name,
                KeySchema=[{"AttributeName": "resource_key", "KeyType": "HASH"}],
                AttributeDefinitions=[
                    {"AttributeName": "resource_key", "AttributeType": "S"}
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            table.wait_until_exists()
            logger.info("DynamoDB state table '%s' created.", table_name)
        except ClientError as exc:
            if exc.response["Error"]["Code"] == "ResourceInUseException":
                table = ddb.Table(table_name)
            else:
                raise

        self._table = table
        return self._table

    # ── StateRepository interface ─────────────────────────────────────────────

    def save(self, record: dict) -> None:
        table = self._get_table()
        try:
            table.put_item(Item=record)
            logger.info("Saved state for '%s'.", record.get("resource_key"))
        except ClientError as exc:
            logger.error("DynamoDB PutItem failed: %s", exc)
            raise

    def get(self, key: str) -> Optional[dict]:
        table = self._get_table()
        try:
            response = table.get_item(Key={"resource_key": key})
            return response.get("Item")
        except ClientError as exc:
            logger.error("DynamoDB GetItem failed for '%s': %s", key, exc)
            raise

    def list_all(self, resource_type: Optional[str] = None) -> list[dict]:
        """
        Scan the table, following ``LastEvaluatedKey`` until exhausted.
        """
        table = self._get_table()
        scan_kwargs: dict = {}
        if resource_type:
            scan_kwargs["FilterExpression"] = Attr("resource_type").eq(resource_type)
        try:
            response = table.scan(**scan_kwargs)
            items: list[dict] = response.get("Items", [])

            while "LastEvaluatedKey" in response:
                response = table.scan(
                    ExclusiveStartKey=response["LastEvaluatedKey"], **scan_kwargs
                )
                items.extend(response.get("Items", []))

            logger.info("Listed %d state record(s).", len(items))
            return items
        except ClientError as exc:
            logger.error("DynamoDB Scan failed: %s", exc)
            raise

    def delete(self, key: str) -> bool:
        table = self._get_table()
        try:
            response = table.delete_item(
                Key={"resource_key": key},
                ReturnValues="ALL_OLD",
            )
            existed = bool(response.get("Attributes"))
            if existed:
                logger.info("Deleted state for '%s'.", key)
            else:
                logger.warning("Delete called for unknown state '%s'.", key)
            return existed
        except ClientError as exc:
            logger.error("DynamoDB DeleteItem failed for '%s': %s", key, exc)
            raise
