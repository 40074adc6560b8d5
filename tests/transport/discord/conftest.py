"""Shared fixtures for Discord transport tests."""

import json
from typing import Callable, List

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from config import Config
from transport.discord.followup import FollowUpClient

APPLICATION_ID = "865321519605612554"
API_BASE_URL = "https://discord.test/api/v8"


def public_key_hex(private_key: Ed25519PrivateKey) -> str:
    return private_key.public_key().public_bytes(
        serialization.Encoding.Raw,
        serialization.PublicFormat.Raw,
    ).hex()


def sign(private_key: Ed25519PrivateKey, timestamp: str, body: str) -> str:
    return private_key.sign((timestamp + body).encode("utf-8")).hex()


@pytest.fixture
def private_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture
def config(private_key) -> Config:
    return Config(
        public_key=public_key_hex(private_key),
        application_id=APPLICATION_ID,
        api_base_url=API_BASE_URL,
        edge_location="TST",
    )


@pytest.fixture
def signed_request(private_key) -> Callable[[dict], tuple]:
    """Return (body, headers) for a payload signed with the test key."""

    def _signed(payload: dict, timestamp: str = "1700000000") -> tuple:
        body = json.dumps(payload)
        headers = {
            "Content-Type": "application/json",
            "X-Signature-Ed25519": sign(private_key, timestamp, body),
            "X-Signature-Timestamp": timestamp,
            "X-Real-IP": "203.0.113.7",
        }
        return body, headers

    return _signed


@pytest.fixture
def patch_log() -> List[httpx.Request]:
    return []


@pytest.fixture
def followup_client(config, patch_log) -> FollowUpClient:
    """FollowUpClient whose HTTP calls are recorded instead of sent."""

    def handler(request: httpx.Request) -> httpx.Response:
        patch_log.append(request)
        return httpx.Response(200, json={"id": "1"})

    return FollowUpClient(config, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


