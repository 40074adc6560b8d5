"""
Discord Interactions Webhook Receiver

FastAPI router that authenticates interaction callbacks and answers them.
No command imports. Pure transport.

Dependencies (config, registry, follow-up client) are read from app.state,
set once by main.create_app.
"""

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .dispatcher import execute_command
from .errors import MalformedInteraction, MethodNotAllowed
from .router import RequestMeta, route
from .schemas import Interaction, InteractionState
from .security import verify_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Discord Transport"])

INTERACTIONS_PATH = "/interactions"

# Methods outside this list are turned into MethodNotAllowed by main
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route(INTERACTIONS_PATH, methods=ALL_METHODS)
async def discord_interactions(request: Request, background_tasks: BackgroundTasks) -> JSONResponse:
    """
    Receive Discord interactions.

    Flow:
    1. Reject anything but POST (400)
    2. Verify signature (401 if missing, 401 if invalid)
    3. Parse the interaction (400 if not a JSON object)
    4. Route by type
    5. For commands: acknowledge with {"type": 5} and run the command
       as a background task that edits the placeholder when done

    Raises:
        MethodNotAllowed, MissingCredentials, InvalidSignature,
        MalformedInteraction: rendered as structured JSON by main
    """
    if request.method != "POST":
        raise MethodNotAllowed(request.method)

    state = request.app.state
    config = state.config

    # Step 1: Raw body for signature verification
    body = await request.body()
    logger.debug(f"Interaction {InteractionState.RECEIVED.value}")

    # Step 2: Security boundary
    envelope = verify_request(request.headers, body, config.public_key)
    logger.debug(f"Interaction {InteractionState.SIGNATURE_VERIFIED.value}")

    # Step 3: Parse (any JSON object is an interaction)
    try:
        interaction = Interaction.model_validate(json.loads(envelope.body))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Malformed interaction body: {e}")
        raise MalformedInteraction()

    # Step 4: Route
    meta = RequestMeta.from_headers(
        request.headers,
        client_ip_header=config.client_ip_header,
        default_edge_location=config.edge_location,
    )
    outcome = route(interaction, meta)

    logger.info(
        "Interaction routed",
        extra={
            "interaction_type": interaction.type,
            "outcome": outcome.kind.value,
            "interaction_id": interaction.id,
        },
    )

    # Step 5: Deferred work runs after the response is sent
    if outcome.needs_dispatch:
        background_tasks.add_task(
            execute_command,
            request,
            interaction,
            state.registry,
            state.followup_client,
        )
        logger.info(
            f"Interaction {InteractionState.ACKED.value}",
            extra={"command": interaction.command_name, "interaction_id": interaction.id},
        )

    return JSONResponse(content=outcome.response)
