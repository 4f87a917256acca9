"""Base64 text <-> bytes codec."""

from __future__ import annotations

import base64
import binascii

from omniconvert.errors import ParseError


def encode(data: bytes) -> str:
    """Encode bytes as standard Base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """Decode Base64 text, ignoring surrounding whitespace.

    Raises
    ------
    ParseError
        If the text is not valid Base64.
    """
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ParseError(f"Invalid Base64 data: {exc}") from exc
