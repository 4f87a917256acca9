"""Unit tests for the Base64 codec."""

from __future__ import annotations

import pytest

from omniconvert.codecs import base64_codec
from omniconvert.errors import ParseError


def test_encode() -> None:
    """Encode bytes with the standard alphabet and padding."""
    assert base64_codec.encode(b"hello") == "aGVsbG8="


def test_decode_ignores_surrounding_whitespace() -> None:
    """Strip whitespace before strict decoding."""
    assert base64_codec.decode("  aGVsbG8=\n") == b"hello"


@pytest.mark.parametrize("text", ["!!!", "aGVsbG8", "aGV sbG8="])
def test_decode_invalid_raises(text: str) -> None:
    """Reject characters outside the alphabet and bad padding."""
    with pytest.raises(ParseError, match="Invalid Base64"):
        base64_codec.decode(text)
