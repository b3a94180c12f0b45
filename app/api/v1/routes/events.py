import base64
import binascii
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from api.dependencies.events import get_event_service
from api.dependencies.rate_limits import get_limiter
from core.logging import get_module_logger
from modules.events.filters import DateWindow, EventFilter, filter_events
from modules.events.models import (
    ALL_CATEGORIES,
    ALL_CITIES,
    CamelModel,
    Event,
    EventDraft,
    ParticipantDraft,
)
from modules.events.service import EventService
from modules.events.submissions import ImageUpload, confirm_rsvp, propose_event

logger = get_module_logger()

router = APIRouter(tags=["Events"])
limiter = get_limiter()


class ImagePayload(CamelModel):
    """An image file sent inline as base64."""

    filename: str
    content_base64: str
    content_type: Optional[str] = None

    def to_upload(self) -> ImageUpload:
        try:
            content = base64.b64decode(self.content_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid base64 image: {self.filename}",
            ) from e
        return ImageUpload(
            content=content, filename=self.filename, content_type=self.content_type
        )


class EventProposal(EventDraft):
    image: Optional[ImagePayload] = None


class RsvpRequest(ParticipantDraft):
    photo: Optional[ImagePayload] = None


@router.get("/events", response_model=List[Event])
@limiter.limit("120/minute")
async def list_events(
    request: Request,  # pylint: disable=unused-argument
    search: str = "",
    category: str = ALL_CATEGORIES,
    city: str = ALL_CITIES,
    date: DateWindow = Query(default=DateWindow.ALL),
    service: EventService = Depends(get_event_service),
):
    """List approved events by date, optionally filtered."""
    events = await service.list_approved()
    return filter_events(
        events,
        EventFilter(search=search, category=category, city=city, date=date),
    )


@router.get("/events/{event_id}", response_model=Event)
@limiter.limit("120/minute")
async def get_event(
    request: Request,  # pylint: disable=unused-argument
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    event = await service.get_by_id(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event {event_id} not found")
    return event


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def create_event(
    request: Request,  # pylint: disable=unused-argument
    proposal: EventProposal,
    service: EventService = Depends(get_event_service),
):
    """Propose an event; it stays pending until a moderator approves it."""
    image = proposal.image.to_upload() if proposal.image else None
    draft = EventDraft.model_validate(proposal.model_dump(exclude={"image"}))
    return await propose_event(service, draft, image=image)


@router.post("/events/{event_id}/participants", response_model=Event)
@limiter.limit("20/minute")
async def add_participant(
    request: Request,  # pylint: disable=unused-argument
    event_id: str,
    rsvp: RsvpRequest,
    service: EventService = Depends(get_event_service),
):
    """Confirm presence at an event and return the updated event."""
    photo = rsvp.photo.to_upload() if rsvp.photo else None
    draft = ParticipantDraft.model_validate(rsvp.model_dump(exclude={"photo"}))
    return await confirm_rsvp(service, event_id, draft, photo=photo)
