"""
Discord Signature Verification

SECURITY BOUNDARY - Verify Ed25519 signature over timestamp + body.
No command imports. No retries. No logic.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Union

from cryptography.exceptions import InvalidSignature as _CryptoInvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .codec import to_bytes
from .errors import InvalidEncoding, InvalidSignature, MissingCredentials

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


def verify(
    public_key_hex: str,
    signature_hex: str,
    timestamp: str,
    body: str,
) -> bool:
    """
    Verify an Ed25519 signature over ``timestamp + body``.

    Returns True only if verification succeeds. Malformed key or signature
    material counts as a failed verification.
    """
    try:
        public_key = Ed25519PublicKey.from_public_bytes(to_bytes(public_key_hex, True))
        public_key.verify(
            to_bytes(signature_hex, True),
            to_bytes(timestamp + body, False),
        )
        return True
    except (_CryptoInvalidSignature, InvalidEncoding, ValueError):
        return False


@dataclass(frozen=True)
class SignatureEnvelope:
    """Signature material of one request. Verified once, never persisted."""

    signature: str
    timestamp: str
    body: str

    @classmethod
    def from_request(
        cls,
        headers: Mapping[str, str],
        body: Union[bytes, str],
    ) -> "SignatureEnvelope":
        """
        Collect the signature headers and the body.

        Raises:
            MissingCredentials: Signature or timestamp header absent (401)
            InvalidSignature: Body is not valid UTF-8, so it cannot match (401)
        """
        signature = headers.get(SIGNATURE_HEADER)
        timestamp = headers.get(TIMESTAMP_HEADER)

        # Missing credentials never reach the crypto
        if not signature or not timestamp:
            raise MissingCredentials()

        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("Request body is not valid UTF-8", extra={"timestamp": timestamp})
                raise InvalidSignature()

        return cls(signature=signature, timestamp=timestamp, body=body)

    def verify(self, public_key_hex: str) -> bool:
        return verify(public_key_hex, self.signature, self.timestamp, self.body)


def verify_request(
    headers: Mapping[str, str],
    body: Union[bytes, str],
    public_key_hex: str,
) -> SignatureEnvelope:
    """
    Apply the header policy and verify the request signature.

    Discord sends:
    - X-Signature-Ed25519 header with the hex signature
    - X-Signature-Timestamp header
    - Request body

    Returns:
        The verified envelope; its ``body`` is the exact signed text

    Raises:
        MissingCredentials: Signature or timestamp header absent (401)
        InvalidSignature: Signature does not match (401)
    """
    envelope = SignatureEnvelope.from_request(headers, body)

    if not envelope.verify(public_key_hex):
        logger.warning("Invalid request signature", extra={"timestamp": envelope.timestamp})
        raise InvalidSignature()

    return envelope
