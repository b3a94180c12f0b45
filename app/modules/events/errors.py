"""Errors for the events module."""

from typing import Optional

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind, OperationStatus


class EventStoreError(Exception):
    """Raised by event stores when the backing storage reports an error.

    Attributes:
        message: human-friendly message
        response: the classified OperationResult of the failed call
    """

    def __init__(self, message: str, response: Optional[OperationResult] = None):
        super().__init__(message)
        self.response = response

    @property
    def kind(self) -> ErrorKind:
        if self.response is None or self.response.error_kind is None:
            return ErrorKind.UNKNOWN
        return self.response.error_kind


class EventNotFoundError(EventStoreError):
    """The event identifier has no record."""

    def __init__(self, event_id: str, response: Optional[OperationResult] = None):
        response = response or OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"Event {event_id} not found",
            error_kind=ErrorKind.NOT_FOUND,
        )
        super().__init__(f"Event {event_id} not found", response=response)
        self.event_id = event_id


class SubmissionFailedError(Exception):
    """A create or RSVP submission could not be completed; the user may retry."""


class ReplicaUnreadableError(EventStoreError):
    """The local replica blob exists but cannot be decoded.

    Raised to mutators only, so that a read-modify-write never replaces the
    stored blob with the seed dataset.
    """

    def __init__(self, key: str, reason: str):
        message = f"Local replica {key} is unreadable: {reason}"
        super().__init__(
            message,
            response=OperationResult.permanent_error(
                message, error_kind=ErrorKind.SERIALIZATION_ERROR
            ),
        )
        self.key = key
