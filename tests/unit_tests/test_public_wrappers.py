"""Unit tests for the top-level convenience API."""

from __future__ import annotations

import json

import pytest

import omniconvert
from omniconvert.errors import InvalidFileType, UnsupportedStructure


def test_csv_to_json_text() -> None:
    """Convert CSV text straight to JSON text."""
    assert json.loads(omniconvert.csv_to_json("a,b\n1,2")) == [{"a": "1", "b": "2"}]


def test_csv_to_json_compact() -> None:
    """Emit compact JSON when indentation is disabled."""
    assert omniconvert.csv_to_json("a\n1", indent=None) == '[{"a": "1"}]'


def test_json_to_csv_text() -> None:
    """Convert JSON text to CSV text."""
    assert omniconvert.json_to_csv('[["a", 1]]') == "a,1\n"


def test_json_to_csv_rejects_scalar() -> None:
    """Surface unsupported shapes from the codec."""
    with pytest.raises(UnsupportedStructure):
        omniconvert.json_to_csv("42")


def test_xml_and_json_wrappers() -> None:
    """Forward options to the XML codec in both directions."""
    assert json.loads(omniconvert.xml_to_json("<a><b>1</b></a>")) == {"a": {"b": 1}}
    xml = omniconvert.json_to_xml('{"a": {"b": 1}}', {"xml_declaration": False, "pretty_print": False})
    assert xml == "<a><b>1</b></a>"


def test_markdown_wrapper() -> None:
    """Render Markdown with default options."""
    assert omniconvert.markdown_to_html("**x**") == "<p><strong>x</strong></p>"


def test_convert_checks_file_type() -> None:
    """Validate the filename before converting payload bytes."""
    with pytest.raises(InvalidFileType):
        omniconvert.convert("csv-to-json", b"a\n1", "data.txt")


def test_convert_and_batch() -> None:
    """Convert single payloads and batches through the façade."""
    result = omniconvert.convert("base64-encode", b"hi", "hi.txt")
    assert result.data == b"aGk="
    batch = omniconvert.convert_batch(
        "base64-decode",
        [omniconvert.InputFile(name="a.b64", data=b"aGk="), omniconvert.InputFile(name="b.b64", data=b"%%")],
    )
    assert [entry.success for entry in batch] == [True, False]


def test_format_file_size_wrapper() -> None:
    """Expose the size formatter at package level."""
    assert omniconvert.format_file_size(2048) == "2 KB"
