"""Error classifiers for provider exceptions.

Converts AWS SDK exceptions and integration layer errors into standardized
OperationResult objects tagged with an ErrorKind. Centralizes error
classification so store adapters and the fallback controller never branch on
raw provider error codes.

Key Functions:
- classify_aws_error(): AWS SDK errors → OperationResult
- classify_integration_error(): integration layer errors → OperationResult

Usage:
    from infrastructure.operations.classifiers import classify_aws_error

    try:
        response = client.query(TableName=table, IndexName=index, ...)
    except ClientError as e:
        return classify_aws_error(e)
"""

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    ConnectTimeoutError,
    EndpointConnectionError,
    NoCredentialsError,
    NoRegionError,
    PartialCredentialsError,
    ReadTimeoutError,
)

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind, OperationStatus

PERMISSION_ERROR_CODES = (
    "AccessDeniedException",
    "UnrecognizedClientException",
    "InvalidSignatureException",
    "ExpiredTokenException",
    "MissingAuthenticationTokenException",
)

THROTTLING_ERROR_CODES = (
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "ProvisionedThroughputExceededException",
)

UNAVAILABLE_ERRORS = (
    EndpointConnectionError,
    ConnectTimeoutError,
    ConnectionClosedError,
    ReadTimeoutError,
    NoRegionError,
)

CREDENTIAL_ERRORS = (NoCredentialsError, PartialCredentialsError)


def _is_missing_index(message: str) -> bool:
    message = message.lower()
    return "index" in message and (
        "does not have the specified index" in message
        or "requires an index" in message
        or "index not found" in message
    )


def classify_aws_error(exc: Exception) -> OperationResult:
    """Classify AWS SDK errors into OperationResult.

    Error Code Mapping:
    - AccessDenied / bad or expired credentials → UNAUTHORIZED, PERMISSION_DENIED
    - ResourceNotFoundException (table missing) → PERMANENT_ERROR, NOT_INITIALIZED
    - ConditionalCheckFailedException → NOT_FOUND (writes guarded by
      attribute_exists(id))
    - ValidationException naming a missing index → QUERY_UNSUPPORTED
    - Throttling codes → TRANSIENT_ERROR with retry_after
    - Connection failures, missing region → TRANSIENT_ERROR, NOT_INITIALIZED
    - Other → UNKNOWN

    Args:
        exc: Exception raised by boto3/botocore

    Returns:
        OperationResult with status, error_kind and error_code populated
    """
    if isinstance(exc, CREDENTIAL_ERRORS):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"AWS credentials unavailable: {exc}",
            error_kind=ErrorKind.PERMISSION_DENIED,
            error_code=type(exc).__name__,
        )

    if isinstance(exc, UNAVAILABLE_ERRORS):
        return OperationResult.transient_error(
            f"AWS endpoint unavailable: {type(exc).__name__}: {exc}",
            error_kind=ErrorKind.NOT_INITIALIZED,
            error_code=type(exc).__name__,
        )

    if not isinstance(exc, ClientError):
        if isinstance(exc, BotoCoreError):
            return OperationResult.transient_error(
                f"AWS connection error: {type(exc).__name__}: {exc}",
                error_kind=ErrorKind.UNKNOWN,
                error_code="CONNECTION_ERROR",
            )
        return OperationResult.permanent_error(
            f"Unexpected error: {type(exc).__name__}: {exc}",
            error_kind=ErrorKind.UNKNOWN,
            error_code="UNKNOWN_ERROR",
        )

    error_info = exc.response.get("Error", {}) if exc.response else {}
    error_code = error_info.get("Code", "Unknown")
    error_message = error_info.get("Message", str(exc))

    if error_code in PERMISSION_ERROR_CODES:
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            "AWS API access denied",
            error_kind=ErrorKind.PERMISSION_DENIED,
            error_code=error_code,
        )

    if error_code == "ResourceNotFoundException":
        return OperationResult.permanent_error(
            f"AWS table not provisioned: {error_message}",
            error_kind=ErrorKind.NOT_INITIALIZED,
            error_code=error_code,
        )

    if error_code == "ConditionalCheckFailedException":
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            "Record does not exist",
            error_kind=ErrorKind.NOT_FOUND,
            error_code=error_code,
        )

    if error_code == "ValidationException" and _is_missing_index(error_message):
        return OperationResult.permanent_error(
            f"Query requires a missing index: {error_message}",
            error_kind=ErrorKind.QUERY_UNSUPPORTED,
            error_code=error_code,
        )

    if error_code in THROTTLING_ERROR_CODES:
        return OperationResult.transient_error(
            "AWS API throttled",
            error_kind=ErrorKind.UNKNOWN,
            error_code=error_code,
            retry_after=60,
        )

    return OperationResult.permanent_error(
        f"AWS client error: {error_code}: {error_message}",
        error_kind=ErrorKind.UNKNOWN,
        error_code=error_code,
    )


def classify_integration_error(exc: Exception) -> OperationResult:
    """Classify errors raised by store adapters into OperationResult.

    Adapters raise errors carrying the OperationResult of the failed call in
    their ``response`` attribute; that result already holds the classification
    and is returned as is. Raw SDK errors are classified with
    classify_aws_error, anything else is UNKNOWN.

    Example:
        try:
            events = await remote.list_all()
        except Exception as e:
            result = classify_integration_error(e)
            if result.error_kind == ErrorKind.PERMISSION_DENIED:
                ...
    """
    response = getattr(exc, "response", None)
    if isinstance(response, OperationResult):
        return response

    if isinstance(exc, (ClientError, BotoCoreError)):
        return classify_aws_error(exc)

    message = str(exc) if exc.args else type(exc).__name__
    return OperationResult.permanent_error(
        f"Integration failed: {message}",
        error_kind=ErrorKind.UNKNOWN,
        error_code="INTEGRATION_ERROR",
    )
