import pytest
from fastapi.testclient import TestClient

from api.dependencies.rate_limits import limiter
from core.config import settings
from modules.events.models import to_document
from modules.events.remote_store import serialize_item
from server.server import create_app

ADMIN_TOKEN = "moderator-secret"


@pytest.fixture
def app(event_service, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", False)
    app = create_app()
    app.state.event_service = event_service
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers(monkeypatch):
    monkeypatch.setattr(settings.server, "ADMIN_API_TOKEN", ADMIN_TOKEN)
    return {"X-Admin-Token": ADMIN_TOKEN}


@pytest.fixture
def put_remote(fake_table):
    """Store events directly in the fake remote table."""

    def put(*events):
        for event in events:
            fake_table.items[event.id] = serialize_item(to_document(event))

    return put
