"""Unit tests for create and RSVP submission orchestration."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from core.config import settings
from integrations.cloudinary import UploadFailedError
from modules.events.errors import EventNotFoundError, SubmissionFailedError
from modules.events.submissions import (
    IdentityProfile,
    ImageUpload,
    confirm_rsvp,
    prefill_participant,
    propose_event,
)

UPLOADED_URL = "https://res.cloudinary.com/demo/image/upload/v1/cover.jpg"


@pytest.fixture
def service(event_factory):
    service = MagicMock()
    service.create = AsyncMock(side_effect=lambda draft: draft.to_event("e-new"))
    service.add_participant = AsyncMock(return_value=event_factory())
    return service


@pytest.fixture
def uploader():
    return MagicMock(return_value=UPLOADED_URL)


class TestProposeEvent:
    @pytest.mark.asyncio
    async def test_uploaded_image_is_used(self, service, uploader, event_draft_factory):
        image = ImageUpload(content=b"jpeg", filename="cover.jpg", content_type="image/jpeg")

        event = await propose_event(service, event_draft_factory(), image=image, uploader=uploader)

        uploader.assert_called_once_with(b"jpeg", "cover.jpg", "image/jpeg")
        assert event.image_url == UPLOADED_URL

    @pytest.mark.asyncio
    async def test_upload_failure_aborts_without_creating(
        self, service, event_draft_factory
    ):
        uploader = MagicMock(side_effect=UploadFailedError("rejected"))

        with pytest.raises(UploadFailedError):
            await propose_event(
                service,
                event_draft_factory(),
                image=ImageUpload(content=b"jpeg", filename="cover.jpg"),
                uploader=uploader,
            )

        service.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_image_is_an_upload_failure(self, service, uploader, event_draft_factory):
        with pytest.raises(UploadFailedError):
            await propose_event(
                service,
                event_draft_factory(),
                image=ImageUpload(content=b"", filename="empty.jpg"),
                uploader=uploader,
            )

        uploader.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_image_uses_placeholder(self, service, uploader, event_draft_factory):
        event = await propose_event(service, event_draft_factory(image_url=""), uploader=uploader)

        uploader.assert_not_called()
        assert event.image_url == settings.events.PLACEHOLDER_EVENT_IMAGE_URL

    @pytest.mark.asyncio
    async def test_existing_image_url_is_kept(self, service, uploader, event_draft_factory):
        event = await propose_event(
            service, event_draft_factory(image_url="https://example.com/own.jpg"), uploader=uploader
        )

        assert event.image_url == "https://example.com/own.jpg"

    @pytest.mark.asyncio
    async def test_blank_organizer_gets_default(self, service, uploader, event_draft_factory):
        event = await propose_event(service, event_draft_factory(organizer="  "), uploader=uploader)

        assert event.organizer == settings.events.DEFAULT_ORGANIZER

    @pytest.mark.asyncio
    async def test_store_failure_is_a_submission_failure(self, service, event_draft_factory):
        service.create = AsyncMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(SubmissionFailedError):
            await propose_event(service, event_draft_factory())


class TestConfirmRsvp:
    @pytest.mark.asyncio
    async def test_uploaded_photo_is_used(self, service, uploader, participant_draft_factory):
        await confirm_rsvp(
            service,
            "e1",
            participant_draft_factory(photo_url=""),
            photo=ImageUpload(content=b"png", filename="me.png"),
            uploader=uploader,
        )

        event_id, draft = service.add_participant.await_args.args
        assert event_id == "e1"
        assert draft.photo_url == UPLOADED_URL

    @pytest.mark.asyncio
    async def test_no_photo_uses_placeholder(self, service, uploader, participant_draft_factory):
        await confirm_rsvp(service, "e1", participant_draft_factory(photo_url=""), uploader=uploader)

        _, draft = service.add_participant.await_args.args
        assert draft.photo_url == settings.events.PLACEHOLDER_PARTICIPANT_PHOTO_URL

    @pytest.mark.asyncio
    async def test_photo_upload_failure_aborts(self, service, participant_draft_factory):
        uploader = MagicMock(side_effect=UploadFailedError("timeout"))

        with pytest.raises(UploadFailedError):
            await confirm_rsvp(
                service,
                "e1",
                participant_draft_factory(),
                photo=ImageUpload(content=b"png", filename="me.png"),
                uploader=uploader,
            )

        service.add_participant.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_is_a_submission_failure(
        self, service, participant_draft_factory
    ):
        service.add_participant = AsyncMock(side_effect=RuntimeError("offline"))

        with pytest.raises(SubmissionFailedError):
            await confirm_rsvp(service, "e1", participant_draft_factory())


    @pytest.mark.asyncio
    async def test_missing_event_is_not_wrapped(self, service, participant_draft_factory):
        service.add_participant = AsyncMock(side_effect=EventNotFoundError("ghost"))

        with pytest.raises(EventNotFoundError):
            await confirm_rsvp(service, "ghost", participant_draft_factory())


class TestPrefillParticipant:
    def test_copies_only_name_and_photo(self):
        prefill = prefill_participant(
            IdentityProfile(display_name="Joana Prado", photo_url="https://example.com/j.jpg")
        )

        assert prefill.name == "Joana Prado"
        assert prefill.photo_url == "https://example.com/j.jpg"
        assert not hasattr(prefill, "age")
        assert not hasattr(prefill, "origin_city")
        assert not hasattr(prefill, "instagram_handle")

    def test_missing_profile_gives_empty_prefill(self):
        prefill = prefill_participant(None)

        assert (prefill.name, prefill.photo_url) == ("", "")

    def test_failing_loader_does_not_block(self):
        def loader():
            raise RuntimeError("popup closed")

        prefill = prefill_participant(loader=loader)

        assert (prefill.name, prefill.photo_url) == ("", "")

    def test_loader_profile_is_used(self):
        prefill = prefill_participant(loader=lambda: IdentityProfile(display_name="Ana"))

        assert prefill.name == "Ana"
        assert prefill.photo_url == ""
