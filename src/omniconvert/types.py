"""Shared type aliases for codec and converter modules."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

type Scalar = str | int | float | bool | None
type Value = Scalar | list["Value"] | dict[str, "Value"]

type ConverterKind = Literal[
    "csv-to-json",
    "json-to-csv",
    "xml-to-json",
    "json-to-xml",
    "markdown-to-html",
    "base64-encode",
    "base64-decode",
]

CONVERTER_KINDS: tuple[ConverterKind, ...] = (
    "csv-to-json",
    "json-to-csv",
    "xml-to-json",
    "json-to-xml",
    "markdown-to-html",
    "base64-encode",
    "base64-decode",
)

type OptionValue = Scalar | list["OptionValue"] | dict[str, "OptionValue"]
type OptionMap = Mapping[str, OptionValue]
