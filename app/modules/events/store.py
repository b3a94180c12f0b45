"""Event store capability interface.

Two implementations sit behind the EventService controller: the remote
DynamoDB adapter and the local replica store. The protocol-based design keeps
the controller independent of either backend.
"""

from typing import Any, Dict, List, Optional, Protocol

from modules.events.models import (
    MODERATION_STATUSES,
    Event,
    EventDraft,
    EventStatus,
    ParticipantDraft,
)


class EventStore(Protocol):
    """Storage interface for events.

    Methods:
        list_approved: Approved events ordered by date ascending
        list_all: Every event regardless of status, ordered by date ascending
        get_by_id: The event, or None when the identifier has no record
        create: Insert a pending event with no participants
        update: Merge the given fields into an existing event
        set_status: Moderation action (approved or rejected)
        delete: Permanently remove an event
        add_participant: Append an RSVP, newest first
    """

    async def list_approved(self) -> List[Event]: ...

    async def list_all(self) -> List[Event]: ...

    async def get_by_id(self, event_id: str) -> Optional[Event]: ...

    async def create(self, draft: EventDraft) -> Event: ...

    async def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        """Raises EventNotFoundError when the event does not exist."""
        ...

    async def set_status(self, event_id: str, status: EventStatus) -> Event:
        """Raises EventNotFoundError when the event does not exist."""
        ...

    async def delete(self, event_id: str) -> None: ...

    async def add_participant(
        self, event_id: str, draft: ParticipantDraft
    ) -> Event: ...


def sort_by_date(events: List[Event]) -> List[Event]:
    """Order events by date ascending; ties are broken by identifier."""
    return sorted(events, key=lambda event: (event.date, event.id))


def check_moderation_status(status: EventStatus) -> EventStatus:
    status = EventStatus(status)
    if status not in MODERATION_STATUSES:
        raise ValueError("moderation can only approve or reject an event")
    return status
