"""Runtime stats for the /stats command."""

import platform
import time
from typing import Any, Dict

from fastapi import Request

from transport.discord.schemas import Embed, EmbedField, Interaction

_STARTED_AT = time.monotonic()

STATS_COLOR = 0x5865F2


def _format_uptime(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h {minutes}m {secs}s"


async def handle_stats(request: Request, interaction: Interaction) -> Dict[str, Any]:
    embed = Embed(
        title="Stats",
        color=STATS_COLOR,
        fields=[
            EmbedField(name="Uptime", value=_format_uptime(time.monotonic() - _STARTED_AT), inline=True),
            EmbedField(name="Python", value=platform.python_version(), inline=True),
        ],
    )
    return {"embeds": [embed.to_payload()]}
