"""
AWS Service Next Module

Centralized error handling, retry logic and pagination for AWS API calls.
Every call returns an OperationResult; errors are classified once, here, so
callers only ever look at ``result.is_success`` and ``result.error_kind``.

Usage:
    # Single call, raw response in result.data
    result = execute_aws_api_call(
        service_name="dynamodb",
        method="get_item",
        TableName="euvou_events",
        Key={"id": {"S": "seed-1"}},
    )

    # Paginated call, flattened items in result.data
    result = execute_aws_api_call(
        service_name="dynamodb",
        method="scan",
        keys=["Items"],
        paginate=True,
        TableName="euvou_events",
    )
"""

import time
from typing import Any, Callable, List, Optional

import boto3  # type: ignore
from botocore.client import BaseClient  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore
from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations.classifiers import classify_aws_error
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind

logger = get_module_logger()

AWS_REGION = settings.aws.AWS_REGION
DYNAMODB_ENDPOINT_URL = settings.aws.DYNAMODB_ENDPOINT_URL
THROTTLING_ERRS = settings.aws.THROTTLING_ERRS
DEFAULT_MAX_RETRIES = settings.aws.MAX_RETRIES
DEFAULT_BACKOFF_FACTOR = 0.5

# Kinds that are expected while the service runs degraded on the local replica
DEGRADED_KINDS = (ErrorKind.NOT_INITIALIZED, ErrorKind.PERMISSION_DENIED)


def _should_retry(error: Exception, attempt: int, max_attempts: int) -> bool:
    if not isinstance(error, ClientError):
        return False
    error_code = error.response.get("Error", {}).get("Code")
    return error_code in THROTTLING_ERRS and attempt < max_attempts


def _calculate_retry_delay(attempt: int) -> float:
    return DEFAULT_BACKOFF_FACTOR * (2**attempt)


def _handle_final_error(error: Exception, function_name: str) -> OperationResult:
    """Classify the final error after retries are exhausted.

    Degraded-mode kinds log a warning, everything else logs an error.
    """
    result = classify_aws_error(error)

    if result.error_kind in DEGRADED_KINDS:
        logger.warning(
            "aws_api_degraded",
            function=function_name,
            error=str(error),
            error_code=result.error_code,
            error_kind=result.error_kind.value,
        )
    elif result.error_kind in (ErrorKind.NOT_FOUND, ErrorKind.QUERY_UNSUPPORTED):
        logger.info(
            "aws_api_expected_error",
            function=function_name,
            error_code=result.error_code,
            error_kind=result.error_kind.value,
        )
    else:
        logger.error(
            "aws_api_error_final",
            function=function_name,
            error=str(error),
            error_code=result.error_code,
        )
    return result


def get_aws_client(
    service_name: str,
    session_config: Optional[dict] = None,
    client_config: Optional[dict] = None,
) -> BaseClient:
    """
    Create a boto3 AWS service client.

    DynamoDB clients honour DYNAMODB_ENDPOINT_URL so a local DynamoDB can
    stand in for the remote table.

    Args:
        service_name (str): The name of the AWS service.
        session_config (dict, optional): Session configuration.
        client_config (dict, optional): Client configuration.
    """
    session_config = session_config or {"region_name": AWS_REGION}
    client_config = client_config or {"region_name": AWS_REGION}
    if service_name == "dynamodb" and DYNAMODB_ENDPOINT_URL:
        client_config = {"endpoint_url": DYNAMODB_ENDPOINT_URL, **client_config}
    session = boto3.Session(**session_config)
    return session.client(service_name, **client_config)


def _paginate_all_results(
    client: BaseClient, method: str, keys: Optional[List[str]] = None, **kwargs
) -> List[dict]:
    paginator = client.get_paginator(method)
    results: List[dict] = []
    for page in paginator.paginate(**kwargs):
        if keys is None:
            for key, value in page.items():
                if key != "ResponseMetadata" and isinstance(value, list):
                    results.extend(value)
        else:
            for key in keys:
                if key in page:
                    results.extend(page[key])
    return results


def execute_api_call(
    func_name: str,
    api_call: Callable[[], Any],
    max_retries: Optional[int] = None,
) -> OperationResult:
    """
    Run an AWS API call with throttling retries and error classification.

    Args:
        func_name (str): Name of the calling function for logging
        api_call (callable): The API call to execute
        max_retries (int): Override default max retries

    Returns:
        OperationResult: success with the call's return value in ``data``,
        or the classified error.
    """
    max_retry_attempts = max_retries if max_retries is not None else DEFAULT_MAX_RETRIES

    for attempt in range(max_retry_attempts + 1):
        try:
            logger.debug(
                "aws_api_call_start",
                function=func_name,
                attempt=attempt + 1,
                max_attempts=max_retry_attempts + 1,
            )

            result = api_call()

            if attempt > 0:
                logger.info(
                    "aws_api_retry_success",
                    function=func_name,
                    attempt=attempt + 1,
                )

            return OperationResult.success(data=result)

        except (BotoCoreError, ClientError) as e:
            if _should_retry(e, attempt, max_retry_attempts):
                delay = _calculate_retry_delay(attempt)
                logger.warning(
                    "aws_api_retrying",
                    function=func_name,
                    attempt=attempt + 1,
                    error=str(e),
                    delay=delay,
                )
                time.sleep(delay)
                continue

            return _handle_final_error(e, func_name)

        except Exception as e:  # pylint: disable=broad-except
            return _handle_final_error(e, func_name)

    return _handle_final_error(Exception("Unknown error after retries"), func_name)


def execute_aws_api_call(
    service_name: str,
    method: str,
    keys: Optional[List[str]] = None,
    paginate: bool = False,
    session_config: Optional[dict] = None,
    client_config: Optional[dict] = None,
    max_retries: Optional[int] = None,
    **kwargs,
) -> OperationResult:
    """
    Execute an AWS API call and return a classified OperationResult.

    Args:
        service_name (str): The name of the AWS service.
        method (str): The method to call on the service.
        keys (list, optional): The keys to extract from paginated results.
        paginate (bool): Follow pagination and return the flattened items.
        session_config (dict, optional): Session configuration.
        client_config (dict, optional): Client configuration.
        max_retries (int, optional): Override default max retries.
        **kwargs: Additional keyword arguments for the API call.

    Returns:
        OperationResult: Standardized result.
    """

    def api_call():
        client = get_aws_client(service_name, session_config, client_config)
        if paginate:
            return _paginate_all_results(client, method, keys, **kwargs)
        return getattr(client, method)(**kwargs)

    return execute_api_call(
        f"{service_name}_{method}",
        api_call,
        max_retries=max_retries,
    )
