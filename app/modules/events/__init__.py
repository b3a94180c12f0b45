"""Community events catalogue: stores, consistency controller and helpers."""

from modules.events.connectivity import (
    ConnectivityProber,
    ConnectivityState,
    ConnectivityStatus,
)
from modules.events.errors import (
    EventNotFoundError,
    EventStoreError,
    SubmissionFailedError,
)
from modules.events.models import (
    Event,
    EventCategory,
    EventDraft,
    EventStatus,
    Participant,
    ParticipantDraft,
)
from modules.events.service import EventService, build_event_service

__all__ = [
    "ConnectivityProber",
    "ConnectivityState",
    "ConnectivityStatus",
    "Event",
    "EventCategory",
    "EventDraft",
    "EventNotFoundError",
    "EventService",
    "EventStatus",
    "EventStoreError",
    "Participant",
    "ParticipantDraft",
    "SubmissionFailedError",
    "build_event_service",
]
