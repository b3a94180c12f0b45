from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from api.dependencies.events import get_event_service, require_admin
from api.dependencies.rate_limits import get_limiter
from core.logging import get_module_logger
from modules.events.filters import partition_by_status
from modules.events.models import CamelModel, Event, EventStatus
from modules.events.service import EventService

logger = get_module_logger()

router = APIRouter(
    prefix="/admin",
    tags=["Moderation"],
    dependencies=[Depends(require_admin)],
)
limiter = get_limiter()


class StatusChange(CamelModel):
    status: EventStatus


class ModerationQueue(CamelModel):
    pending: List[Event]
    approved: List[Event]
    rejected: List[Event]


@router.get("/events", response_model=ModerationQueue)
@limiter.limit("60/minute")
async def list_all_events(
    request: Request,  # pylint: disable=unused-argument
    service: EventService = Depends(get_event_service),
):
    """Every event, grouped by moderation status."""
    buckets = partition_by_status(await service.list_all())
    return ModerationQueue(
        pending=buckets[EventStatus.PENDING],
        approved=buckets[EventStatus.APPROVED],
        rejected=buckets[EventStatus.REJECTED],
    )


@router.patch("/events/{event_id}/status", response_model=Event)
@limiter.limit("60/minute")
async def set_event_status(
    request: Request,  # pylint: disable=unused-argument
    event_id: str,
    change: StatusChange,
    service: EventService = Depends(get_event_service),
):
    try:
        event = await service.set_status(event_id, change.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("event_moderated", event_id=event_id, status=change.status.value)
    return event


@router.patch("/events/{event_id}", response_model=Event)
@limiter.limit("60/minute")
async def update_event(
    request: Request,  # pylint: disable=unused-argument
    event_id: str,
    fields: Dict[str, Any] = Body(...),
    service: EventService = Depends(get_event_service),
):
    """Merge the given camelCase fields into the event."""
    try:
        return await service.update(event_id, fields)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("60/minute")
async def delete_event(
    request: Request,  # pylint: disable=unused-argument
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    await service.delete(event_id)
    logger.info("event_deleted_by_moderator", event_id=event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
