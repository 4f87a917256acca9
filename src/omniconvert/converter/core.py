"""Shared upload-conversion core utilities."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from hashlib import sha256
from pathlib import PurePosixPath
from urllib.parse import quote

from omniconvert.application.results import InputFile
from omniconvert.application.use_cases import convert_item
from omniconvert.types import ConverterKind, OptionMap

_UNSAFE_HEADER_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')


@dataclass(frozen=True)
class ConversionRequest:
    """Normalized conversion request.

    Parameters
    ----------
    kind : ConverterKind
        Converter to run.
    filename : str
        Original upload filename.
    media_type : str | None, default=None
        Declared media type of the upload, without parameters.
    expected_sha256 : str | None, default=None
        Optional expected SHA-256 digest of the uploaded bytes.
    options : OptionMap, default={}
        Converter options validated by the converter's config schema.
    """

    kind: ConverterKind
    filename: str
    media_type: str | None = None
    expected_sha256: str | None = None
    options: OptionMap = field(default_factory=dict)


@dataclass(frozen=True)
class ConversionOutcome:
    """Conversion output metadata."""

    output_bytes: bytes
    output_filename: str
    output_media_type: str
    output_sha256: str
    output_size_bytes: int
    input_size_bytes: int
    metadata: Mapping[str, object] = field(default_factory=dict)


def digest_bytes(data: bytes) -> str:
    """Compute SHA-256 digest for byte payload."""
    return sha256(data).hexdigest()


def normalize_sha256(value: str | None) -> str | None:
    """Normalize and validate SHA-256 string if provided."""
    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        return None
    if len(normalized) != 64 or any(ch not in "0123456789abcdef" for ch in normalized):
        raise ValueError("expected_sha256 must be a 64-character hex digest")
    return normalized


def normalize_media_type(value: str | None) -> str | None:
    """Drop parameters such as ``; charset=utf-8`` from a media type."""
    if value is None:
        return None
    essence = value.split(";", 1)[0].strip().lower()
    return essence or None


def safe_input_filename(filename: str) -> str:
    """Return the basename of an uploaded filename, or ``upload.bin``."""
    raw = filename.strip()
    if not raw:
        return "upload.bin"
    # Normalize Windows-style separators before basename extraction.
    candidate = PurePosixPath(raw.replace("\\", "/")).name
    if candidate in {"", ".", ".."}:
        return "upload.bin"
    return candidate


def header_filename(filename: str) -> str:
    """Percent-encode ``filename`` for use as an ASCII header value."""
    return quote(filename, safe="")


def content_disposition(filename: str) -> str:
    """Build an attachment ``Content-Disposition`` value for ``filename``.

    The quoted ``filename`` parameter is an ASCII fallback with unsafe
    characters replaced by ``_``; ``filename*`` carries the exact name as
    UTF-8 (RFC 5987).
    """
    fallback = _UNSAFE_HEADER_CHARS.sub("_", filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{header_filename(filename)}"


def parse_options_json(value: str | None) -> dict[str, object]:
    """Parse the ``options`` form field into a mapping.

    Raises
    ------
    ValueError
        If the field is not a JSON object.
    """
    if value is None or not value.strip():
        return {}
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"options must be a JSON object: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ValueError("options must be a JSON object")
    return parsed


def convert_upload_bytes(
    data: bytes,
    request: ConversionRequest,
) -> tuple[str, ConversionOutcome]:
    """Convert uploaded bytes and return input/output integrity metadata.

    Raises
    ------
    ValueError
        If request validation or the integrity check fails.
    ConversionError
        If conversion fails.
    """
    expected_sha = normalize_sha256(request.expected_sha256)
    input_sha = digest_bytes(data)
    if expected_sha is not None and input_sha != expected_sha:
        raise ValueError("input SHA-256 mismatch")

    item = InputFile(
        name=safe_input_filename(request.filename),
        data=data,
        media_type=normalize_media_type(request.media_type),
    )
    result = convert_item(request.kind, item, request.options)
    outcome = ConversionOutcome(
        output_bytes=result.data,
        output_filename=result.filename,
        output_media_type=result.media_type,
        output_sha256=digest_bytes(result.data),
        output_size_bytes=result.output_size,
        input_size_bytes=result.input_size,
        metadata=result.metadata,
    )
    return input_sha, outcome
