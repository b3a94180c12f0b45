import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `core.config`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402

from infrastructure.persistence.key_value import InMemoryKeyValueStorage  # noqa: E402
from modules.events.local_replica import LocalReplicaStore  # noqa: E402
from modules.events.local_store import LocalEventStore  # noqa: E402
from modules.events.remote_store import DynamoDBEventStore  # noqa: E402
from modules.events.service import EventService  # noqa: E402
from tests.factories.events import (  # noqa: E402
    make_event,
    make_event_draft,
    make_participant_draft,
)
from tests.fixtures.dynamodb import FakeEventsTable  # noqa: E402

REPLICA_KEY = "euvou_events"


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def event_draft_factory():
    return make_event_draft


@pytest.fixture
def participant_draft_factory():
    return make_participant_draft


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def replica(storage):
    return LocalReplicaStore(storage, REPLICA_KEY)


@pytest.fixture
def local_store(replica):
    return LocalEventStore(replica)


@pytest.fixture
def fake_table(monkeypatch):
    """In-memory DynamoDB table installed in place of dynamodb_next calls."""
    table = FakeEventsTable()
    table.install(monkeypatch)
    return table


@pytest.fixture
def remote_store(fake_table):
    return DynamoDBEventStore(table_name="test_events", status_index="status-date-index")


@pytest.fixture
def event_service(remote_store, local_store):
    return EventService(remote=remote_store, local=local_store)
