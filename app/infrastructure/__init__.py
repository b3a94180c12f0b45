"""Infrastructure modules for the Euvou events service.

Centralized infrastructure components:
- operations: Operation results, error kinds and error classification
- persistence: Local string-keyed storage backing the event replica
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind, OperationStatus

__all__ = [
    "ErrorKind",
    "OperationResult",
    "OperationStatus",
]
