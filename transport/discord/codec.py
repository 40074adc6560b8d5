"""
Buffer Codec

Converts hex and UTF-8 strings into raw bytes for signature material.
Pure conversion. No side effects.
"""

import binascii

from .errors import InvalidEncoding


def to_bytes(value: str, is_hex: bool) -> bytes:
    """
    Convert a string into bytes.

    Args:
        value: Input string
        is_hex: Parse as base-16 pairs when True, encode as UTF-8 otherwise

    Returns:
        Raw bytes

    Raises:
        InvalidEncoding: Odd length or non-hex characters in hex mode
    """
    if not is_hex:
        return value.encode("utf-8")

    if len(value) % 2 != 0:
        raise InvalidEncoding(f"Hex string has odd length: {len(value)}")

    # unhexlify rejects whitespace and non-ASCII, unlike bytes.fromhex
    try:
        return binascii.unhexlify(value)
    except ValueError as e:
        raise InvalidEncoding(f"Invalid hex string: {e}") from e
