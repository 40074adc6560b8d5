"""Discord Interactions Transport Layer - Module Exports"""

from .codec import to_bytes
from .dispatcher import (
    CommandHandler,
    CommandRegistry,
    build_registry,
    dispatch,
    execute_command,
)
from .errors import (
    FollowUpDeliveryFailure,
    HandlerFailure,
    InteractionHTTPError,
    InvalidEncoding,
    InvalidSignature,
    MalformedInteraction,
    MethodNotAllowed,
    MissingCredentials,
)
from .followup import FollowUpClient
from .router import OutcomeKind, RequestMeta, RouterOutcome, route
from .schemas import (
    Embed,
    Interaction,
    InteractionResponseType,
    InteractionState,
    InteractionType,
)
from .security import SignatureEnvelope, verify, verify_request
from .webhook import INTERACTIONS_PATH, router

__all__ = [
    # Schemas
    "Interaction",
    "InteractionType",
    "InteractionResponseType",
    "InteractionState",
    "Embed",
    # Codec & security
    "to_bytes",
    "verify",
    "verify_request",
    "SignatureEnvelope",
    # Routing
    "route",
    "RequestMeta",
    "RouterOutcome",
    "OutcomeKind",
    # Dispatch
    "CommandHandler",
    "CommandRegistry",
    "build_registry",
    "dispatch",
    "execute_command",
    # Follow-up
    "FollowUpClient",
    # Errors
    "InteractionHTTPError",
    "MethodNotAllowed",
    "MalformedInteraction",
    "MissingCredentials",
    "InvalidSignature",
    "InvalidEncoding",
    "HandlerFailure",
    "FollowUpDeliveryFailure",
    # Router
    "router",
]
