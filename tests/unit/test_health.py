"""Tests for the health endpoints."""

from fastapi.testclient import TestClient

from config import Config
from main import create_app
from transport.discord.dispatcher import build_registry


def _client(config: Config) -> TestClient:
    return TestClient(create_app(config=config, registry=build_registry({})))


def test_live():
    response = _client(Config(public_key="", application_id="")).get("/health/live")
    assert response.json() == {"status": "alive"}


def test_ready_when_configured():
    response = _client(Config(public_key="ab" * 32, application_id="1")).get("/health/ready")
    assert response.json() == {"status": "ready"}


def test_not_ready_without_public_key():
    response = _client(Config(public_key="", application_id="1")).get("/health/ready")
    body = response.json()
    assert body["status"] == "not_ready"
    assert "DISCORD_PUBLIC_KEY" in body["reason"]
