"""Create and RSVP submission orchestration.

Wraps the EventService with the media upload step: an image that was supplied
must upload successfully before anything is written, while a submission
without an image deliberately uses a fixed placeholder URL.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

from core.config import settings
from core.logging import get_module_logger
from integrations.cloudinary import UploadFailedError, upload_image
from modules.events.errors import EventNotFoundError, SubmissionFailedError
from modules.events.models import Event, EventDraft, ParticipantDraft
from modules.events.service import EventService

logger = get_module_logger()

Uploader = Callable[[bytes, str, Optional[str]], str]


@dataclass
class ImageUpload:
    content: bytes
    filename: str
    content_type: Optional[str] = None


async def _upload(image: ImageUpload, uploader: Uploader) -> str:
    if not image.content:
        raise UploadFailedError(f"Image {image.filename} is empty")
    return await asyncio.to_thread(
        uploader, image.content, image.filename, image.content_type
    )


async def propose_event(
    service: EventService,
    draft: EventDraft,
    image: Optional[ImageUpload] = None,
    uploader: Uploader = upload_image,
) -> Event:
    """Upload the cover image if any, then create a pending event.

    Raises:
        UploadFailedError: the supplied image could not be uploaded; nothing
            was created.
        SubmissionFailedError: the event could not be stored.
    """
    updates = {}
    if image is not None:
        updates["image_url"] = await _upload(image, uploader)
    elif not draft.image_url:
        updates["image_url"] = settings.events.PLACEHOLDER_EVENT_IMAGE_URL
    if not draft.organizer.strip():
        updates["organizer"] = settings.events.DEFAULT_ORGANIZER
    if updates:
        draft = draft.model_copy(update=updates)

    try:
        event = await service.create(draft)
    except Exception as e:
        logger.error("event_proposal_failed", title=draft.title, error=str(e))
        raise SubmissionFailedError("Could not create the event, please try again") from e

    logger.info("event_proposed", event_id=event.id, title=event.title)
    return event


async def confirm_rsvp(
    service: EventService,
    event_id: str,
    draft: ParticipantDraft,
    photo: Optional[ImageUpload] = None,
    uploader: Uploader = upload_image,
) -> Event:
    """Upload the participant photo if any, then add the participant.

    Raises:
        UploadFailedError: the supplied photo could not be uploaded.
        EventNotFoundError: the event does not exist in either store.
        SubmissionFailedError: the RSVP could not be stored.
    """
    if photo is not None:
        draft = draft.model_copy(update={"photo_url": await _upload(photo, uploader)})
    elif not draft.photo_url:
        draft = draft.model_copy(
            update={"photo_url": settings.events.PLACEHOLDER_PARTICIPANT_PHOTO_URL}
        )

    try:
        event = await service.add_participant(event_id, draft)
    except EventNotFoundError:
        raise
    except Exception as e:
        logger.error("rsvp_failed", event_id=event_id, error=str(e))
        raise SubmissionFailedError("Could not confirm your presence, please try again") from e

    logger.info("rsvp_confirmed", event_id=event_id, participants=len(event.participants))
    return event


@dataclass
class IdentityProfile:
    """What a federated sign-in provider hands back."""

    display_name: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass
class ParticipantPrefill:
    name: str = ""
    photo_url: str = ""


def prefill_participant(
    profile: Optional[IdentityProfile] = None,
    loader: Optional[Callable[[], Optional[IdentityProfile]]] = None,
) -> ParticipantPrefill:
    """Prefill the RSVP form from a sign-in profile.

    Only the display name and photo are copied. A missing profile or a failing
    loader yields an empty prefill so the form can still be completed by hand.
    """
    if profile is None and loader is not None:
        try:
            profile = loader()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("identity_prefill_failed", error=str(e))
            profile = None
    if profile is None:
        return ParticipantPrefill()
    return ParticipantPrefill(
        name=profile.display_name or "",
        photo_url=profile.photo_url or "",
    )
