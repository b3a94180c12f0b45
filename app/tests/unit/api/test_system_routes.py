"""Tests for the health, version and connectivity routes."""

import asyncio
from unittest.mock import AsyncMock

from modules.events.connectivity import ConnectivityProber


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_version(client):
    response = client.get("/version")

    assert response.status_code == 200
    assert "version" in response.json()


def test_connectivity_is_loading_without_prober(client):
    response = client.get("/connectivity")

    assert response.json() == {"is_connected": False, "is_loading": True}


def test_connectivity_reports_last_probe(app, client):
    prober = ConnectivityProber(AsyncMock(return_value=True), interval_seconds=5)
    asyncio.run(prober.check())
    app.state.prober = prober

    response = client.get("/connectivity")

    assert response.json() == {"is_connected": True, "is_loading": False}


def test_missing_service_is_503(app, client):
    del app.state.event_service

    response = client.get("/api/v1/events")

    assert response.status_code == 503
