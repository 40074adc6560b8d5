"""
Discord Follow-up Sender Tests

The PATCH that replaces the deferred placeholder. No retries.
"""

import json

import httpx
import pytest

from transport.discord.errors import FollowUpDeliveryFailure
from transport.discord.followup import FollowUpClient


def _client(config, handler) -> FollowUpClient:
    return FollowUpClient(config, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestEditUrl:

    def test_defaults_to_original_message(self, config):
        client = FollowUpClient(config, client=httpx.AsyncClient())
        assert client.edit_url("tok") == (
            "https://discord.test/api/v8/webhooks/865321519605612554/tok/messages/@original"
        )

    def test_explicit_message_id(self, config):
        client = FollowUpClient(config, client=httpx.AsyncClient())
        assert client.edit_url("tok", "42").endswith("/tok/messages/42")


class TestComplete:

    @pytest.mark.asyncio
    async def test_patch_request(self, followup_client, patch_log):
        payload = {"embeds": [{"title": "Done"}]}

        await followup_client.complete("tok", "@original", payload)

        assert len(patch_log) == 1
        request = patch_log[0]
        assert request.method == "PATCH"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == payload

    @pytest.mark.asyncio
    async def test_empty_message_id_uses_original(self, followup_client, patch_log):
        await followup_client.complete("tok", "", {"content": "x"})
        assert patch_log[0].url.path.endswith("/messages/@original")

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self, config):
        client = _client(config, lambda request: httpx.Response(401, json={"message": "401: Unauthorized"}))

        with pytest.raises(FollowUpDeliveryFailure) as exc_info:
            await client.complete("tok", "@original", {"content": "x"})

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_network_error_raises(self, config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(config, handler)

        with pytest.raises(FollowUpDeliveryFailure) as exc_info:
            await client.complete("tok", "@original", {"content": "x"})

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_no_retry(self, config):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        client = _client(config, handler)

        with pytest.raises(FollowUpDeliveryFailure):
            await client.complete("tok", "@original", {"content": "x"})

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_missing_token_raises(self, followup_client, patch_log):
        with pytest.raises(FollowUpDeliveryFailure):
            await followup_client.complete(None, "@original", {"content": "x"})
        assert patch_log == []


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self, config):
        http_client = httpx.AsyncClient()
        client = FollowUpClient(config, client=http_client)

        await client.aclose()

        assert http_client.is_closed is False
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self, config):
        client = FollowUpClient(config)
        await client.aclose()
        assert client._client.is_closed is True
