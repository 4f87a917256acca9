"""Unit tests for value helpers and option schemas."""

from __future__ import annotations

import pytest

from omniconvert.errors import ConversionError, ParseError
from omniconvert.schemas import CsvDecodeConfig, XmlEncodeConfig, build_config
from omniconvert.value import dump_json, parse_json, stringify


def test_parse_json_keeps_key_order() -> None:
    """Preserve object key order from the source text."""
    assert list(parse_json('{"b": 1, "a": 2}')) == ["b", "a"]


@pytest.mark.parametrize("text", ["{", "NaN", '{"a": Infinity}'])
def test_parse_json_rejects_invalid(text: str) -> None:
    """Report malformed JSON and non-finite constants as ParseError."""
    with pytest.raises(ParseError, match="Invalid JSON"):
        parse_json(text)


def test_dump_json_keeps_unicode() -> None:
    """Write non-ASCII characters as-is with two-space indentation."""
    assert dump_json({"k": "é"}) == '{\n  "k": "é"\n}'


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (3.0, "3"),
        (0.25, "0.25"),
        ("x", "x"),
        ({"a": [1, 2]}, '{"a":[1,2]}'),
    ],
)
def test_stringify(value: object, expected: str) -> None:
    """Render scalars and containers as cell text."""
    assert stringify(value) == expected  # type: ignore[arg-type]


def test_build_config_from_mapping() -> None:
    """Validate a raw mapping into the schema."""
    config = build_config(CsvDecodeConfig, {"delimiter": ";"})
    assert config.delimiter == ";"
    assert config.has_header is True


def test_build_config_passes_instances_through() -> None:
    """Return an already-built config unchanged."""
    config = XmlEncodeConfig(root_element_name="doc")
    assert build_config(XmlEncodeConfig, config) is config


@pytest.mark.parametrize(
    "options",
    [
        {"delimiter": ",,"},
        {"delimiter": '"'},
        {"unknown": True},
    ],
)
def test_build_config_rejects_invalid_options(options: dict[str, object]) -> None:
    """Wrap validation failures in ConversionError."""
    with pytest.raises(ConversionError, match="Invalid CsvDecodeConfig options"):
        build_config(CsvDecodeConfig, options)


def test_xml_encoding_rejects_markup() -> None:
    """Refuse encodings that would break the declaration."""
    with pytest.raises(ConversionError):
        build_config(XmlEncodeConfig, {"encoding": 'UTF-8"?><x'})


def test_xml_encoding_rejects_unknown_codec() -> None:
    """Refuse encodings Python cannot encode with."""
    with pytest.raises(ConversionError, match="unknown encoding"):
        build_config(XmlEncodeConfig, {"encoding": "no-such-codec"})
