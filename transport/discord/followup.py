"""
Discord Follow-up Sender

Replaces the deferred "thinking" message with the final payload.
No formatting intelligence. No retries. No logic.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from config import Config

from .errors import FollowUpDeliveryFailure
from .schemas import ORIGINAL_MESSAGE

logger = logging.getLogger(__name__)


class FollowUpClient:
    """
    Issues the webhook-message-edit call for deferred interactions.

    Owns one httpx.AsyncClient unless one is injected.
    """

    def __init__(self, config: Config, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.followup_timeout)

    def edit_url(self, token: str, message_id: str = ORIGINAL_MESSAGE) -> str:
        return (
            f"{self.config.api_base_url}/webhooks/"
            f"{self.config.application_id}/{token}/messages/{message_id}"
        )

    async def complete(
        self,
        token: Optional[str],
        message_id: str,
        payload: Dict[str, Any],
    ) -> None:
        """
        PATCH the final payload onto the deferred message.

        Raises:
            FollowUpDeliveryFailure: Missing token, network error, or non-2xx
        """
        if not token:
            raise FollowUpDeliveryFailure("Interaction has no token")

        url = self.edit_url(token, message_id or ORIGINAL_MESSAGE)

        # Send (no retries, at most once)
        try:
            response = await self._client.patch(
                url,
                json=payload,
                headers={"content-type": "application/json"},
            )
        except httpx.RequestError as e:
            raise FollowUpDeliveryFailure(f"HTTP request failed: {e}") from e

        if not response.is_success:
            raise FollowUpDeliveryFailure(
                f"Discord API returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        logger.info(
            "Follow-up delivered",
            extra={"message_id": message_id, "status_code": response.status_code},
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
