"""Unit tests for the local replica event store."""

import pytest

from modules.events.errors import EventNotFoundError, ReplicaUnreadableError
from modules.events.local_store import LOCAL_ID_PREFIX, is_local_id
from modules.events.models import EventStatus

REPLICA_KEY = "euvou_events"
TRUNCATED_BLOB = '[{"id": "mine", "title": '


@pytest.fixture
def seeded(replica, event_factory):
    replica.write_all(
        [
            event_factory(event_id="b", date="2026-11-20T10:00:00Z"),
            event_factory(event_id="a", date="2026-11-10T10:00:00Z"),
            event_factory(event_id="p", status=EventStatus.PENDING),
            event_factory(event_id="r", status=EventStatus.REJECTED),
        ]
    )
    return replica


class TestReads:
    @pytest.mark.asyncio
    async def test_list_approved_filters_and_sorts(self, local_store, seeded):
        events = await local_store.list_approved()

        assert [e.id for e in events] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_list_all_includes_every_status(self, local_store, seeded):
        events = await local_store.list_all()

        assert {e.id for e in events} == {"a", "b", "p", "r"}

    @pytest.mark.asyncio
    async def test_get_by_id_miss_returns_none(self, local_store, seeded):
        assert await local_store.get_by_id("missing") is None


class TestWrites:
    @pytest.mark.asyncio
    async def test_create_uses_local_prefix_and_pending(
        self, local_store, seeded, event_draft_factory
    ):
        event = await local_store.create(event_draft_factory(status=EventStatus.APPROVED))

        assert event.id.startswith(LOCAL_ID_PREFIX)
        assert is_local_id(event.id)
        assert event.status == EventStatus.PENDING
        assert (await local_store.get_by_id(event.id)) == event

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, local_store, seeded):
        event = await local_store.update("a", {"title": "Renomeado", "price": 15})

        assert event.title == "Renomeado"
        assert event.price == 15
        assert event.city == "São Paulo"
        assert (await local_store.get_by_id("a")).title == "Renomeado"

    @pytest.mark.asyncio
    async def test_update_missing_event_raises(self, local_store, seeded):
        with pytest.raises(EventNotFoundError):
            await local_store.update("missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_update_rejects_protected_fields(self, local_store, seeded):
        with pytest.raises(ValueError):
            await local_store.update("a", {"status": "approved"})

    @pytest.mark.asyncio
    async def test_set_status(self, local_store, seeded):
        await local_store.set_status("p", EventStatus.APPROVED)

        assert "p" in [e.id for e in await local_store.list_approved()]

    @pytest.mark.asyncio
    async def test_set_status_rejects_pending(self, local_store, seeded):
        with pytest.raises(ValueError):
            await local_store.set_status("a", EventStatus.PENDING)

    @pytest.mark.asyncio
    async def test_delete_removes_record(self, local_store, seeded):
        await local_store.delete("a")

        assert await local_store.get_by_id("a") is None

    @pytest.mark.asyncio
    async def test_add_participant_prepends(
        self, local_store, seeded, participant_draft_factory
    ):
        await local_store.add_participant("a", participant_draft_factory(name="Primeira"))
        event = await local_store.add_participant(
            "a", participant_draft_factory(name="Segunda")
        )

        assert [p.name for p in event.participants] == ["Segunda", "Primeira"]
        assert all(p.id.startswith("part-") for p in event.participants)

    @pytest.mark.asyncio
    async def test_add_participant_missing_event_raises(
        self, local_store, seeded, participant_draft_factory
    ):
        with pytest.raises(EventNotFoundError):
            await local_store.add_participant("missing", participant_draft_factory())


class TestWriteThroughHelpers:
    def test_upsert_replaces_by_id(self, local_store, seeded, event_factory):
        local_store.upsert(event_factory(event_id="a", title="Atualizado"))
        local_store.upsert(event_factory(event_id="novo"))

        events = {e.id: e for e in seeded.read_all()}
        assert events["a"].title == "Atualizado"
        assert "novo" in events
        assert len(events) == 5

    def test_replace_all_keeps_local_records(self, local_store, seeded, event_factory):
        local_store.upsert(event_factory(event_id="local-123"))

        local_store.replace_all([event_factory(event_id="remote-1")])

        assert sorted(e.id for e in seeded.read_all()) == ["local-123", "remote-1"]

    def test_replace_all_can_drop_local_records(self, local_store, seeded, event_factory):
        local_store.upsert(event_factory(event_id="local-123"))

        local_store.replace_all([event_factory(event_id="remote-1")], keep_local=False)

        assert [e.id for e in seeded.read_all()] == ["remote-1"]

    def test_remove_unknown_id_is_a_no_op(self, local_store, seeded):
        local_store.remove("missing")

        assert len(seeded.read_all()) == 4


class TestUnreadableReplica:
    @pytest.fixture
    def truncated(self, storage):
        storage.set_item(REPLICA_KEY, TRUNCATED_BLOB)
        return storage

    @pytest.mark.asyncio
    async def test_reads_fall_back_to_seed(self, local_store, truncated):
        assert await local_store.list_all()
        assert truncated.get_item(REPLICA_KEY) == TRUNCATED_BLOB

    @pytest.mark.asyncio
    async def test_create_does_not_overwrite_blob(
        self, local_store, truncated, event_draft_factory
    ):
        with pytest.raises(ReplicaUnreadableError):
            await local_store.create(event_draft_factory())

        assert truncated.get_item(REPLICA_KEY) == TRUNCATED_BLOB

    @pytest.mark.asyncio
    async def test_add_participant_does_not_overwrite_blob(
        self, local_store, truncated, participant_draft_factory
    ):
        with pytest.raises(ReplicaUnreadableError):
            await local_store.add_participant("seed-01", participant_draft_factory())

        assert truncated.get_item(REPLICA_KEY) == TRUNCATED_BLOB

    def test_write_through_helpers_do_not_overwrite_blob(
        self, local_store, truncated, event_factory
    ):
        with pytest.raises(ReplicaUnreadableError):
            local_store.upsert(event_factory())
        with pytest.raises(ReplicaUnreadableError):
            local_store.remove("seed-01")

        assert truncated.get_item(REPLICA_KEY) == TRUNCATED_BLOB

    def test_full_replace_recovers_the_replica(self, local_store, truncated, event_factory):
        local_store.replace_all([event_factory(event_id="remote-1")])

        assert [e.id for e in local_store.replica.read_all()] == ["remote-1"]
