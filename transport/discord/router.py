"""
Interaction Router

Classifies an authenticated interaction by type and decides the immediate
response shape. Does not run commands; the caller schedules deferred work.
"""

import base64
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .schemas import Embed, EmbedField, Interaction, InteractionResponseType, InteractionType

NOT_IMPLEMENTED_COLOR = 0xF12525


class OutcomeKind(str, Enum):
    ACK = "ack"
    DEFER_AND_DISPATCH = "defer_and_dispatch"
    NOT_IMPLEMENTED = "not_implemented"


@dataclass(frozen=True)
class RequestMeta:
    """Transport metadata used for diagnostics. Never passed to commands."""

    edge_location: str = "unknown"
    client_ip: Optional[str] = None

    @classmethod
    def from_headers(
        cls,
        headers: Mapping[str, str],
        client_ip_header: str = "X-Real-IP",
        default_edge_location: str = "unknown",
    ) -> "RequestMeta":
        # CF-Ray is "<ray-id>-<colo>"
        ray = headers.get("CF-Ray") or ""
        _, sep, colo = ray.rpartition("-")
        return cls(
            edge_location=colo if sep and colo else default_edge_location,
            client_ip=headers.get(client_ip_header),
        )


@dataclass(frozen=True)
class RouterOutcome:
    kind: OutcomeKind
    response: Dict[str, Any]

    @property
    def needs_dispatch(self) -> bool:
        return self.kind is OutcomeKind.DEFER_AND_DISPATCH


def route(interaction: Interaction, meta: RequestMeta) -> RouterOutcome:
    """
    Decide the immediate response for an interaction.

    - PING: terminal {"type": 1}
    - APPLICATION_COMMAND: placeholder {"type": 5}, command runs afterwards
    - MESSAGE_COMPONENT, unknown or non-integer types: terminal diagnostic embed
    """
    if interaction.type_code == InteractionType.PING:
        return RouterOutcome(
            kind=OutcomeKind.ACK,
            response={"type": int(InteractionResponseType.PONG)},
        )

    if interaction.type_code == InteractionType.APPLICATION_COMMAND:
        return RouterOutcome(
            kind=OutcomeKind.DEFER_AND_DISPATCH,
            response={"type": int(InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE)},
        )

    return RouterOutcome(
        kind=OutcomeKind.NOT_IMPLEMENTED,
        response={
            "type": int(InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE),
            "data": {"embeds": [_debug_embed(interaction, meta).to_payload()]},
        },
    )


def encode_debug_data(data: Any) -> str:
    """Base64 of the compact JSON form of ``data``."""
    raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def _debug_embed(interaction: Interaction, meta: RequestMeta) -> Embed:
    debug = (
        f"```yml\nType: {interaction.type_label}\n\n"
        f"Colo: {meta.edge_location}\n"
        f"Request Data: {encode_debug_data(interaction.data)}```"
    )
    return Embed(
        title="Not yet implemented",
        description="This command hasn't been implemented yet.",
        color=NOT_IMPLEMENTED_COLOR,
        fields=[EmbedField(name="Debug information", value=debug)],
    )
