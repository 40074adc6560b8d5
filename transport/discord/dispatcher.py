"""
Command Dispatcher

Looks up the handler for an application command, runs it, and hands the
resulting payload to the follow-up client.

Flow:
  dispatch → (HandlerFailure → diagnostic payload) → FollowUpClient.complete
"""

import logging
from types import MappingProxyType
from typing import Any, Awaitable, Dict, Mapping, Optional, Protocol

from fastapi import Request

from .errors import FollowUpDeliveryFailure, HandlerFailure
from .followup import FollowUpClient
from .router import NOT_IMPLEMENTED_COLOR
from .schemas import Embed, EmbedField, EmbedFooter, Interaction, InteractionState

logger = logging.getLogger(__name__)

ResponsePayload = Dict[str, Any]


class CommandHandler(Protocol):
    """Async callable producing a message payload for one command."""

    def __call__(self, request: Request, interaction: Interaction) -> Awaitable[ResponsePayload]:
        ...


CommandRegistry = Mapping[str, CommandHandler]


def build_registry(handlers: Mapping[str, CommandHandler]) -> CommandRegistry:
    """Freeze a name → handler mapping. Built once at startup."""
    return MappingProxyType(dict(handlers))


def _client_ip(request: Request, client_ip_header: str) -> Optional[str]:
    return request.headers.get(client_ip_header)


def not_implemented_payload(client_ip: Optional[str]) -> ResponsePayload:
    embed = Embed(
        title="Not yet implemented",
        description="This command hasn't been implemented yet.",
        color=NOT_IMPLEMENTED_COLOR,
        footer=EmbedFooter(text=f"Request sent by {client_ip}"),
    )
    return {"embeds": [embed.to_payload()]}


def failure_payload(failure: HandlerFailure) -> ResponsePayload:
    embed = Embed(
        title="Command failed",
        description="Something went wrong while running this command.",
        color=NOT_IMPLEMENTED_COLOR,
        fields=[
            EmbedField(name="Command", value=str(failure.command_name), inline=True),
            EmbedField(name="Error", value=type(failure.original).__name__, inline=True),
        ],
    )
    return {"embeds": [embed.to_payload()]}


async def dispatch(
    request: Request,
    interaction: Interaction,
    registry: CommandRegistry,
    client_ip_header: str = "X-Real-IP",
) -> ResponsePayload:
    """
    Run the registered handler for ``interaction.data.name``.

    The handler's return value is the payload verbatim. Handler errors
    propagate to the caller.
    """
    name = interaction.command_name
    handler = registry.get(name) if name else None

    if handler is None:
        logger.info(f"No handler for command {name!r}, sending placeholder")
        return not_implemented_payload(_client_ip(request, client_ip_header))

    return await handler(request, interaction)


async def execute_command(
    request: Request,
    interaction: Interaction,
    registry: CommandRegistry,
    client: FollowUpClient,
) -> InteractionState:
    """
    Background continuation for a deferred command.

    Always attempts the follow-up edit, with a diagnostic payload if the
    handler failed. Returns the terminal state of the interaction.
    """
    name = interaction.command_name
    log_extra = {"command": name, "interaction_id": interaction.id}
    logger.info(f"Interaction {InteractionState.DISPATCHING.value}", extra=log_extra)

    try:
        payload = await dispatch(
            request,
            interaction,
            registry,
            client_ip_header=client.config.client_ip_header,
        )
    except Exception as e:
        failure = HandlerFailure(name, e)
        logger.error(str(failure), exc_info=True, extra=log_extra)
        payload = failure_payload(failure)

    try:
        await client.complete(interaction.followup_token, interaction.followup_message_id, payload)
    except FollowUpDeliveryFailure as e:
        # Not retried; the user keeps seeing the "thinking" placeholder
        logger.error(
            f"Interaction {InteractionState.LOST_UPDATE.value}: {e}",
            extra={**log_extra, "status_code": e.status_code},
        )
        return InteractionState.LOST_UPDATE

    logger.info(f"Interaction {InteractionState.COMPLETED.value}", extra=log_extra)
    return InteractionState.COMPLETED
