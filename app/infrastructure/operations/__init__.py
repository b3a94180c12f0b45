"""Operation result types and status enums.

This module contains standardized result types for remote operations,
including status enums, the error kind taxonomy, result dataclasses, and
error classifiers for provider exceptions.
"""

from infrastructure.operations.classifiers import (
    classify_aws_error,
    classify_integration_error,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind, OperationStatus

__all__ = [
    "ErrorKind",
    "OperationResult",
    "OperationStatus",
    "classify_aws_error",
    "classify_integration_error",
]
