"""Operation status and error kind enumerations.

OperationStatus is the coarse outcome of a remote call (success, retryable,
non-retryable). ErrorKind is the domain failure taxonomy used by the event
store controller to pick between retrying, falling back to the local replica
and propagating.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, throttling)
        PERMANENT_ERROR: Non-retryable error (validation, missing table)
        UNAUTHORIZED: Authentication or authorization failure
        NOT_FOUND: Resource not found
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


class ErrorKind(Enum):
    """Tagged failure kinds for event store operations.

    Attributes:
        NOT_INITIALIZED: Remote backend unavailable, unreachable or not provisioned
        PERMISSION_DENIED: Credentials missing, invalid or not authorized
        NOT_FOUND: The identifier has no record
        QUERY_UNSUPPORTED: The query needs a composite index that does not exist
        UPLOAD_FAILED: The media upload collaborator rejected or lost the file
        SERIALIZATION_ERROR: A persisted blob could not be decoded
        UNKNOWN: Anything else
    """

    NOT_INITIALIZED = "not_initialized"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    QUERY_UNSUPPORTED = "query_unsupported"
    UPLOAD_FAILED = "upload_failed"
    SERIALIZATION_ERROR = "serialization_error"
    UNKNOWN = "unknown"
