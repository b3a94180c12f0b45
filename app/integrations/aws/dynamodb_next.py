"""DynamoDB table operations for the events store.

Thin wrappers over client_next.execute_aws_api_call. Each call names its
table, takes the boto3 low-level arguments as keywords (DynamoDB attribute
format) and returns an OperationResult with the raw response in ``data``.

Scan and query follow every page and return the flattened item list, unless
``Limit`` is given: a limited read fetches one page and returns the raw
response, so ``data["Items"]`` holds at most ``Limit`` items.

Usage:
    result = get_item(
        table_name="euvou_events",
        Key={"id": {"S": "seed-01"}},
    )
    if result.is_success:
        item = result.data.get("Item")
    else:
        kind = result.error_kind
"""

from typing import Any, Dict

from integrations.aws.client_next import execute_aws_api_call
from infrastructure.operations.result import OperationResult


def _table_call(method: str, table_name: str, **kwargs) -> OperationResult:
    return execute_aws_api_call(
        service_name="dynamodb",
        method=method,
        TableName=table_name,
        **kwargs,
    )


def _read_items(method: str, table_name: str, **kwargs) -> OperationResult:
    paginate = "Limit" not in kwargs
    return _table_call(method, table_name, keys=["Items"], paginate=paginate, **kwargs)


def get_item(table_name: str, Key: Dict[str, Any], **kwargs) -> OperationResult:
    """``Item`` is absent from the response when the key has no record."""
    return _table_call("get_item", table_name, Key=Key, **kwargs)


def put_item(table_name: str, Item: Dict[str, Any], **kwargs) -> OperationResult:
    """A failed ConditionExpression is classified as NOT_FOUND."""
    return _table_call("put_item", table_name, Item=Item, **kwargs)


def update_item(table_name: str, Key: Dict[str, Any], **kwargs) -> OperationResult:
    return _table_call("update_item", table_name, Key=Key, **kwargs)


def delete_item(table_name: str, Key: Dict[str, Any], **kwargs) -> OperationResult:
    return _table_call("delete_item", table_name, Key=Key, **kwargs)


def query(table_name: str, KeyConditionExpression: str, **kwargs) -> OperationResult:
    """Query the table or one of its indexes (``IndexName``).

    A missing index is classified as QUERY_UNSUPPORTED.
    """
    return _read_items(
        "query", table_name, KeyConditionExpression=KeyConditionExpression, **kwargs
    )


def scan(table_name: str, **kwargs) -> OperationResult:
    return _read_items("scan", table_name, **kwargs)
