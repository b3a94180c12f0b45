"""Event store over the local replica.

Serves as the fallback target of the EventService and as the write-through
cache for successful remote operations. Every mutation is a
read-modify-write of the whole replica; mutations refuse to run against a
replica blob that cannot be decoded.
"""

import uuid
from typing import Any, Dict, List, Optional

from core.logging import get_module_logger
from modules.events.errors import EventNotFoundError, ReplicaUnreadableError
from modules.events.local_replica import LocalReplicaStore
from modules.events.models import (
    Event,
    EventDraft,
    EventStatus,
    Participant,
    ParticipantDraft,
    to_update_document,
)
from modules.events.store import check_moderation_status, sort_by_date
from modules.events.timestamps import utc_now

logger = get_module_logger()

# Identifiers of records created while the remote store was unavailable
LOCAL_ID_PREFIX = "local-"


def new_local_id() -> str:
    return f"{LOCAL_ID_PREFIX}{uuid.uuid4()}"


def is_local_id(event_id: str) -> bool:
    return event_id.startswith(LOCAL_ID_PREFIX)


class LocalEventStore:
    """EventStore implementation backed by a LocalReplicaStore."""

    def __init__(self, replica: LocalReplicaStore):
        self.replica = replica

    def _find(self, events: List[Event], event_id: str) -> int:
        for index, event in enumerate(events):
            if event.id == event_id:
                return index
        raise EventNotFoundError(event_id)

    # EventStore operations

    async def list_approved(self) -> List[Event]:
        return sort_by_date(
            [e for e in self.replica.read_all() if e.status == EventStatus.APPROVED]
        )

    async def list_all(self) -> List[Event]:
        return sort_by_date(self.replica.read_all())

    async def get_by_id(self, event_id: str) -> Optional[Event]:
        for event in self.replica.read_all():
            if event.id == event_id:
                return event
        return None

    async def create(self, draft: EventDraft) -> Event:
        event = draft.to_event(new_local_id())
        events = self.replica.read_for_update()
        events.append(event)
        self.replica.write_all(events)
        logger.info("local_event_created", event_id=event.id)
        return event

    async def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        document = to_update_document(fields)
        events = self.replica.read_for_update()
        index = self._find(events, event_id)
        merged = events[index].model_dump(mode="json", by_alias=True)
        merged.update(document)
        events[index] = Event.model_validate(merged)
        self.replica.write_all(events)
        return events[index]

    async def set_status(self, event_id: str, status: EventStatus) -> Event:
        status = check_moderation_status(status)
        events = self.replica.read_for_update()
        index = self._find(events, event_id)
        events[index] = events[index].model_copy(update={"status": status})
        self.replica.write_all(events)
        return events[index]

    async def delete(self, event_id: str) -> None:
        self.remove(event_id)

    async def add_participant(self, event_id: str, draft: ParticipantDraft) -> Event:
        participant = Participant(
            id=f"part-{uuid.uuid4()}",
            confirmed_at=utc_now(),
            **draft.model_dump(),
        )
        events = self.replica.read_for_update()
        index = self._find(events, event_id)
        event = events[index]
        events[index] = event.model_copy(
            update={"participants": [participant, *event.participants]}
        )
        self.replica.write_all(events)
        logger.info(
            "local_participant_added", event_id=event_id, participant_id=participant.id
        )
        return events[index]

    # Write-through helpers used after successful remote operations

    def upsert(self, event: Event) -> None:
        """Insert or replace one event by identifier."""
        events = self.replica.read_for_update()
        for index, existing in enumerate(events):
            if existing.id == event.id:
                events[index] = event
                break
        else:
            events.append(event)
        self.replica.write_all(events)

    def remove(self, event_id: str) -> None:
        events = self.replica.read_for_update()
        remaining = [event for event in events if event.id != event_id]
        if len(remaining) != len(events):
            self.replica.write_all(remaining)

    def replace_all(self, events: List[Event], keep_local: bool = True) -> None:
        """Replace the replica with a remote result set.

        Records created offline (local identifiers) are kept unless
        ``keep_local`` is False, since the remote store never has them. An
        unreadable replica is replaced outright: the remote result set is the
        only state that can still be recovered.
        """
        replacement = list(events)
        if keep_local:
            try:
                current = self.replica.read_for_update()
            except ReplicaUnreadableError as e:
                logger.warning("local_replica_replaced_unreadable", error=str(e))
                current = []
            known = {event.id for event in replacement}
            replacement.extend(
                event
                for event in current
                if is_local_id(event.id) and event.id not in known
            )
        self.replica.write_all(replacement)
