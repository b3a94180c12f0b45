"""Operation result dataclass.

Uniform result type returned by remote store calls, carrying the outcome
status, the payload and, on failure, the classified error kind.
"""

from typing import Optional, Any
from dataclasses import dataclass

from infrastructure.operations.status import ErrorKind, OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- optional payload (raw API response or items)
        error_code: Optional[str] -- provider error code (e.g. AccessDeniedException)
        error_kind: Optional[ErrorKind] -- classified failure kind
        retry_after: Optional[int] -- seconds until retry when throttled
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS."""
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult with optional data."""
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_kind: ErrorKind = ErrorKind.UNKNOWN,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_kind: Classified failure kind
            error_code: Optional provider error code
            retry_after: Optional seconds until retry
            data: Optional payload to include with the error

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            error_kind=error_kind,
            retry_after=retry_after,
            data=data,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_kind: ErrorKind = ErrorKind.UNKNOWN,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Create a transient (retryable) error result."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR,
            message,
            error_kind=error_kind,
            error_code=error_code,
            retry_after=retry_after,
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_kind: ErrorKind = ErrorKind.UNKNOWN,
        error_code: Optional[str] = None,
    ) -> "OperationResult":
        """Create a permanent (non-retryable) error result."""
        return cls.error(
            OperationStatus.PERMANENT_ERROR,
            message,
            error_kind=error_kind,
            error_code=error_code,
        )
