"""Unit tests for event domain models and document helpers."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from modules.events.models import (
    Event,
    EventDraft,
    EventStatus,
    Participant,
    field_alias,
    from_document,
    to_document,
    to_update_document,
)
from modules.events.seed import seed_events


class TestEventDraft:
    def test_to_event_forces_pending_without_participants(self, event_draft_factory):
        draft = event_draft_factory(
            status=EventStatus.APPROVED,
            participants=[{"id": "x", "name": "Intruso"}],
        )

        event = draft.to_event("e9")

        assert event.id == "e9"
        assert event.status == EventStatus.PENDING
        assert event.participants == []

    def test_unknown_city_is_rejected(self, event_draft_factory):
        with pytest.raises(ValidationError):
            event_draft_factory(city="Gotham")

    def test_all_cities_sentinel_is_not_a_city(self, event_draft_factory):
        with pytest.raises(ValidationError):
            event_draft_factory(city="Todas")

    def test_negative_price_is_rejected(self, event_draft_factory):
        with pytest.raises(ValidationError):
            event_draft_factory(price=-1)

    def test_participants_goal_must_be_positive(self, event_draft_factory):
        with pytest.raises(ValidationError):
            event_draft_factory(participants_goal=0)

    def test_accepts_camel_case_payload(self):
        draft = EventDraft.model_validate(
            {
                "title": "Hackathon",
                "city": "Recife",
                "date": "2026-12-01T12:00:00Z",
                "category": "Tecnologia",
                "participantsGoal": 40,
                "locationName": "Porto Digital",
            }
        )

        assert draft.location_name == "Porto Digital"
        assert draft.participants_goal == 40


class TestEvent:
    @pytest.mark.parametrize("status", [None, ""])
    def test_missing_status_reads_as_approved(self, status):
        document = to_document(seed_events()[0])
        document["status"] = status

        assert from_document(document).status == EventStatus.APPROVED

    def test_absent_status_reads_as_approved(self):
        document = to_document(seed_events()[0])
        del document["status"]

        assert from_document(document).status == EventStatus.APPROVED

    def test_null_participants_read_as_empty(self, event_factory):
        document = to_document(event_factory())
        document["participants"] = None

        assert from_document(document).participants == []


class TestDocuments:
    def test_to_document_uses_camel_case_and_store_timestamps(self, event_factory):
        document = to_document(event_factory(ticket_link=None))

        assert document["date"] == "2026-11-10T22:00:00.000Z"
        assert document["participantsGoal"] == 50
        assert document["locationName"] == "Galeria do Rock"
        assert document["status"] == "approved"
        assert document["category"] == "Cultural"
        assert "ticketLink" not in document

    def test_document_round_trip_keeps_instants(self):
        event = seed_events()[0]

        restored = from_document(to_document(event))

        assert restored == event
        assert restored.date == datetime(2026, 11, 7, 20, tzinfo=timezone.utc)
        assert [p.confirmed_at for p in restored.participants] == [
            p.confirmed_at for p in event.participants
        ]

    def test_participant_confirmed_at_is_serialized(self):
        participant = seed_events()[0].participants[0]

        document = participant.model_dump(mode="json", by_alias=True)

        assert document["confirmedAt"] == "2026-10-18T15:00:00.000Z"
        assert Participant.model_validate(document) == participant


class TestUpdateDocument:
    def test_field_alias_accepts_both_spellings(self):
        assert field_alias("participants_goal") == "participantsGoal"
        assert field_alias("participantsGoal") == "participantsGoal"

    def test_field_alias_unknown_field(self):
        with pytest.raises(KeyError):
            field_alias("capacity")

    def test_to_update_document_normalizes_values(self):
        document = to_update_document(
            {
                "title": "Novo título",
                "date": "2026-12-24T20:00:00-03:00",
                "category": "Show",
                "coordinates": {"lat": 1.5, "lng": 2.5},
            }
        )

        assert document == {
            "title": "Novo título",
            "date": "2026-12-24T23:00:00.000Z",
            "category": "Show",
            "coordinates": {"lat": 1.5, "lng": 2.5},
        }

    @pytest.mark.parametrize("field", ["id", "status", "participants"])
    def test_protected_fields_are_rejected(self, field):
        with pytest.raises(ValueError, match="cannot be updated"):
            to_update_document({field: "x"})

    def test_unknown_fields_are_rejected(self):
        with pytest.raises(ValueError, match="unknown event field"):
            to_update_document({"capacity": 10})

    @pytest.mark.parametrize(
        "fields",
        [
            {"category": "NotACategory"},
            {"participantsGoal": 0},
            {"price": -1},
            {"coordinates": {"lat": "norte"}},
            {"date": "amanhã"},
        ],
    )
    def test_invalid_values_are_rejected(self, fields):
        with pytest.raises(ValueError):
            to_update_document(fields)


class TestSeed:
    def test_seed_events_are_approved_with_fixed_ids(self):
        events = seed_events()

        assert [event.id for event in events] == [f"seed-0{i}" for i in range(1, 7)]
        assert all(event.status == EventStatus.APPROVED for event in events)

    def test_seed_participants_are_newest_first(self):
        for event in seed_events():
            confirmed = [p.confirmed_at for p in event.participants]
            assert confirmed == sorted(confirmed, reverse=True)

    def test_seed_events_returns_fresh_copies(self):
        first = seed_events()
        first[0].participants.clear()

        assert seed_events()[0].participants

    def test_seed_events_are_valid_events(self):
        assert all(isinstance(event, Event) for event in seed_events())
