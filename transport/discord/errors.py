"""
Discord Interactions Error Taxonomy

HTTP errors are raised before the acknowledgement is sent and rendered as
structured JSON bodies. Everything after the acknowledgement is reported to the
user through the follow-up edit, never through the original HTTP response.
"""

from typing import Dict, Optional


class InteractionHTTPError(Exception):
    """Error surfaced directly as an HTTP response."""

    status_code: int = 400
    error: str = "400 - BAD REQUEST"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    def to_body(self) -> Dict[str, str]:
        return {"error": self.error, "reason": self.reason}


class MethodNotAllowed(InteractionHTTPError):
    """Only POST is accepted on the interactions endpoint."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"The {method} method is not allowed.")


class MalformedInteraction(InteractionHTTPError):
    """Authenticated body is not a valid interaction object."""

    def __init__(self):
        super().__init__("Malformed interaction body.")


class MissingCredentials(InteractionHTTPError):
    """Signature or timestamp header absent."""

    status_code = 401
    error = "401 - UNAUTHORIZED"

    def __init__(self):
        super().__init__("No signature or timestamp provided.")


class InvalidSignature(InteractionHTTPError):
    """Signature present but does not match the request."""

    status_code = 401
    error = "401 - UNAUTHORIZED"

    def __init__(self):
        super().__init__("Invalid request signature.")


class InvalidEncoding(ValueError):
    """Input string is not valid hex."""
    pass


class HandlerFailure(Exception):
    """A command handler raised while building its payload."""

    def __init__(self, command_name: Optional[str], original: BaseException):
        self.command_name = command_name
        self.original = original
        super().__init__(f"Command {command_name!r} failed: {type(original).__name__}: {original}")


class FollowUpDeliveryFailure(Exception):
    """The follow-up edit did not reach the platform."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
