"""Pydantic schemas for runtime validation of codec configuration."""

from __future__ import annotations

import codecs
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from omniconvert.errors import ConversionError


def _check_delimiter(value: str) -> str:
    if len(value) != 1:
        raise ValueError("delimiter must be a single character.")
    if value in {'"', "\n", "\r"}:
        raise ValueError("delimiter cannot be a quote or line terminator.")
    return value


class CsvDecodeConfig(BaseModel):
    """Options for CSV text to value decoding."""

    model_config = ConfigDict(extra="forbid")

    delimiter: str = ","
    has_header: bool = True

    @field_validator("delimiter")
    @classmethod
    def _validate_delimiter(cls, value: str) -> str:
        return _check_delimiter(value)


class CsvEncodeConfig(BaseModel):
    """Options for value to CSV text encoding."""

    model_config = ConfigDict(extra="forbid")

    delimiter: str = ","
    include_header: bool = True

    @field_validator("delimiter")
    @classmethod
    def _validate_delimiter(cls, value: str) -> str:
        return _check_delimiter(value)


class XmlDecodeConfig(BaseModel):
    """Options for XML text to value decoding."""

    model_config = ConfigDict(extra="forbid")

    attribute_prefix: str = "@"
    text_node_name: str = Field(default="#text", min_length=1)
    ignore_attributes: bool = False
    parse_numbers: bool = True
    parse_booleans: bool = True


class XmlEncodeConfig(BaseModel):
    """Options for value to XML text encoding."""

    model_config = ConfigDict(extra="forbid")

    root_element_name: str = Field(default="root", min_length=1)
    attribute_prefix: str = "@"
    text_node_name: str = Field(default="#text", min_length=1)
    array_element_name: str = Field(default="item", min_length=1)
    pretty_print: bool = True
    xml_declaration: bool = True
    encoding: str = Field(default="UTF-8", min_length=1)

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        if any(ch in value for ch in "\"'<>&"):
            raise ValueError("encoding cannot contain markup characters.")
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value


class MarkdownConfig(BaseModel):
    """Feature toggles for the Markdown renderer."""

    model_config = ConfigDict(extra="forbid")

    enable_tables: bool = True
    enable_code_blocks: bool = True
    enable_strikethrough: bool = True
    enable_task_lists: bool = True


class Base64EncodeConfig(BaseModel):
    """Options for Base64 encoding (currently none)."""

    model_config = ConfigDict(extra="forbid")


class Base64DecodeConfig(BaseModel):
    """Options for Base64 decoding."""

    model_config = ConfigDict(extra="forbid")

    output_media_type: str = Field(default="text/plain", min_length=1)


def build_config[ConfigT: BaseModel](
    schema: type[ConfigT],
    options: Mapping[str, object] | ConfigT | None,
) -> ConfigT:
    """Validate raw options into ``schema``.

    Raises
    ------
    ConversionError
        If the options do not satisfy the schema.
    """
    if isinstance(options, schema):
        return options
    try:
        return schema.model_validate(dict(options or {}))
    except ValidationError as exc:
        raise ConversionError(f"Invalid {schema.__name__} options: {exc}") from exc
