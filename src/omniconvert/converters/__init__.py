"""Closed set of converter variants selected by kind."""

from __future__ import annotations

from typing import assert_never

from omniconvert.application.ports import Converter
from omniconvert.converters.base import Clock, format_file_size, generate_filename, utc_now
from omniconvert.converters.builtins import (
    Base64DecodeConverter,
    Base64EncodeConverter,
    CsvToJsonConverter,
    JsonToCsvConverter,
    JsonToXmlConverter,
    MarkdownToHtmlConverter,
    XmlToJsonConverter,
)
from omniconvert.errors import ConversionError
from omniconvert.types import CONVERTER_KINDS, ConverterKind


def parse_kind(value: str) -> ConverterKind:
    """Normalize and validate a converter kind name."""
    normalized = value.strip().lower()
    for kind in CONVERTER_KINDS:
        if kind == normalized:
            return kind
    raise ConversionError(
        f"Converter '{value}' not found. Available: {', '.join(CONVERTER_KINDS)}"
    )


def converter_for(kind: ConverterKind, clock: Clock = utc_now) -> Converter:
    """Instantiate the converter variant for ``kind``.

    Raises
    ------
    ConversionError
        If ``kind`` is not a known converter name.
    """
    kind = parse_kind(kind)
    match kind:
        case "csv-to-json":
            return CsvToJsonConverter(clock)
        case "json-to-csv":
            return JsonToCsvConverter(clock)
        case "xml-to-json":
            return XmlToJsonConverter(clock)
        case "json-to-xml":
            return JsonToXmlConverter(clock)
        case "markdown-to-html":
            return MarkdownToHtmlConverter(clock)
        case "base64-encode":
            return Base64EncodeConverter(clock)
        case "base64-decode":
            return Base64DecodeConverter(clock)
        case _:
            assert_never(kind)


__all__ = [
    "converter_for",
    "format_file_size",
    "generate_filename",
    "parse_kind",
]
