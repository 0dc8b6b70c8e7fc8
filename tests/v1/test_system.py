# tests/v1/test_system.py
"""Tests for health, root and system endpoints."""

from fastapi import status


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root(client) -> None:
    data = client.get("/").json()
    assert data["docs"] == "/docs"
    assert "name" in data


def test_public_config_has_no_secrets(client) -> None:
    data = client.get("/api/v1/system/config").json()
    assert data["sessions"]["default_duration_hours"] == 3
    assert "secret_key" not in str(data)


def test_stats(client, game_session) -> None:
    data = client.get("/api/v1/system/stats").json()
    assert data == {"users": 1, "open_sessions": 1, "posts": 0}
