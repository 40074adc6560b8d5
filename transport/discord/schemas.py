"""
Discord Interactions - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the contract between Discord and the command handlers.

ref: https://discord.com/developers/docs/interactions/receiving-and-responding
"""

import json
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# ENUMS
# ============================================================================

class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


class InteractionState(str, Enum):
    """Lifecycle of one ApplicationCommand interaction."""
    RECEIVED = "received"
    SIGNATURE_VERIFIED = "signature_verified"
    ACKED = "acked"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"
    LOST_UPDATE = "lost_update"


ORIGINAL_MESSAGE = "@original"


# ============================================================================
# INTERACTION (INPUT)
# ============================================================================

class Interaction(BaseModel):
    """
    Authenticated, parsed interaction body.

    Any JSON object is accepted. Fields are kept as Discord sent them so that
    unexpected shapes still reach the diagnostic reply; the properties below
    read them defensively.
    """

    type: Any = Field(None, description="1 = ping, 2 = command, 3 = component")
    data: Any = Field(None, description="Command name + options, or component custom_id")
    token: Any = Field(None, description="Credential for follow-up calls")
    message: Any = Field(None, description="Originating message, if any")
    id: Any = None
    application_id: Any = None

    class Config:
        frozen = True  # Immutable - lives for one request
        extra = "allow"  # Discord may add fields

    @property
    def type_code(self) -> Optional[int]:
        """Integer interaction type, or None when ``type`` is not an integer."""
        value = self.type
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    @property
    def type_label(self) -> str:
        """The raw ``type`` value as compact JSON, for diagnostics."""
        if self.type_code is not None:
            return str(self.type_code)
        return json.dumps(self.type, ensure_ascii=False)

    @property
    def command_name(self) -> Optional[str]:
        if not isinstance(self.data, dict):
            return None
        name = self.data.get("name")
        return name if isinstance(name, str) else None

    @property
    def followup_token(self) -> Optional[str]:
        return self.token if isinstance(self.token, str) and self.token else None

    @property
    def followup_message_id(self) -> str:
        """Message to edit: the originating message, or the deferred reply."""
        if isinstance(self.message, dict):
            message_id = self.message.get("id")
            if isinstance(message_id, (str, int)) and not isinstance(message_id, bool) and message_id != "":
                return str(message_id)
        return ORIGINAL_MESSAGE


# ============================================================================
# EMBEDS (OUTPUT)
# ============================================================================

class EmbedField(BaseModel):
    name: str
    value: str
    inline: Optional[bool] = None


class EmbedFooter(BaseModel):
    text: str


class Embed(BaseModel):
    """Rich embed attached to a message payload."""

    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[int] = None
    fields: Optional[List[EmbedField]] = None
    footer: Optional[EmbedFooter] = None
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
