"""Failure policy for event operations.

Maps (operation, error kind) to the action the EventService takes when the
remote store fails.
"""

from enum import Enum
from typing import Dict, Tuple

from infrastructure.operations.status import ErrorKind


class EventOperation(Enum):
    LIST_APPROVED = "list_approved"
    LIST_ALL = "list_all"
    GET_BY_ID = "get_by_id"
    CREATE = "create"
    UPDATE = "update"
    SET_STATUS = "set_status"
    DELETE = "delete"
    ADD_PARTICIPANT = "add_participant"


class FallbackAction(Enum):
    """What to do with a failed remote operation.

    Attributes:
        RETRY_TRANSFORMED: Re-issue the remote call in a form that avoids the failure
        FALLBACK: Perform the operation against the local replica instead
        PROPAGATE: Raise the original error to the caller
    """

    RETRY_TRANSFORMED = "retry_transformed"
    FALLBACK = "fallback"
    PROPAGATE = "propagate"


# Expected while offline or unauthorized; not alarm-worthy
DEGRADED_KINDS = (ErrorKind.NOT_INITIALIZED, ErrorKind.PERMISSION_DENIED)

# User-initiated submissions favour best-effort persistence over transparency
BEST_EFFORT_OPERATIONS = (EventOperation.CREATE, EventOperation.ADD_PARTICIPANT)


def _build_policy() -> Dict[Tuple[EventOperation, ErrorKind], FallbackAction]:
    policy = {}
    for operation in EventOperation:
        for kind in ErrorKind:
            if operation in BEST_EFFORT_OPERATIONS or kind in DEGRADED_KINDS:
                action = FallbackAction.FALLBACK
            else:
                action = FallbackAction.PROPAGATE
            policy[(operation, kind)] = action

    policy[(EventOperation.LIST_APPROVED, ErrorKind.QUERY_UNSUPPORTED)] = (
        FallbackAction.RETRY_TRANSFORMED
    )
    return policy


FALLBACK_POLICY: Dict[Tuple[EventOperation, ErrorKind], FallbackAction] = _build_policy()


def resolve_action(operation: EventOperation, kind: ErrorKind) -> FallbackAction:
    return FALLBACK_POLICY.get((operation, kind), FallbackAction.PROPAGATE)
