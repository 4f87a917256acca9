"""Unit tests for the CSV codec."""

from __future__ import annotations

import pytest

from omniconvert.codecs import csv_codec
from omniconvert.errors import EmptyOrMalformedInput, UnsupportedStructure
from omniconvert.schemas import CsvDecodeConfig, CsvEncodeConfig


def test_decode_header_rows_to_string_dicts() -> None:
    """Map each data row onto the header cells without numeric coercion."""
    value = csv_codec.decode("a,b\n1,2\n3,4")
    assert value == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


def test_decode_pads_short_rows_with_empty_strings() -> None:
    """Fill cells missing from short rows with empty strings."""
    value = csv_codec.decode("a,b,c\n1,2")
    assert value == [{"a": "1", "b": "2", "c": ""}]


def test_decode_without_header_returns_rows() -> None:
    """Return raw rows when the first line is not a header."""
    config = CsvDecodeConfig(has_header=False)
    assert csv_codec.decode("a,b\n1,2", config) == [["a", "b"], ["1", "2"]]


def test_decode_single_record_with_header_returns_rows() -> None:
    """Keep a lone header line as a plain row."""
    assert csv_codec.decode("a,b") == [["a", "b"]]


def test_decode_drops_blank_lines_and_trims_cells() -> None:
    """Ignore blank records and strip whitespace around fields."""
    text = "\n name , age \n\n  Ann ,  30 \n   \n"
    assert csv_codec.decode(text) == [{"name": "Ann", "age": "30"}]


def test_decode_custom_delimiter() -> None:
    """Split on the configured delimiter only."""
    config = CsvDecodeConfig(delimiter=";")
    assert csv_codec.decode("a;b\n1,5;2", config) == [{"a": "1,5", "b": "2"}]


def test_decode_quoted_fields_keep_delimiters_and_newlines() -> None:
    """Treat delimiters, line feeds and doubled quotes inside quotes as text."""
    text = 'name,note\n"Doe, ""J""","line1\nline2"'
    assert csv_codec.decode(text) == [{"name": 'Doe, "J"', "note": "line1\nline2"}]


@pytest.mark.parametrize("text", ["", "   ", "\n\n \n"])
def test_decode_empty_input_raises(text: str) -> None:
    """Reject input that yields no rows."""
    with pytest.raises(EmptyOrMalformedInput, match="empty or invalid"):
        csv_codec.decode(text)


def test_encode_dict_rows_with_header() -> None:
    """Use the first object's keys as header and column order."""
    value = [{"a": 1, "b": "x"}, {"b": "y", "a": 2}]
    assert csv_codec.encode(value) == "a,b\n1,x\n2,y\n"


def test_encode_missing_keys_and_nulls_become_empty() -> None:
    """Write empty cells for missing keys and null values."""
    value = [{"a": 1, "b": None}, {"a": 0}]
    assert csv_codec.encode(value) == "a,b\n1,\n0,\n"


def test_encode_without_header() -> None:
    """Skip the header row when disabled."""
    config = CsvEncodeConfig(include_header=False)
    assert csv_codec.encode([{"a": 1}], config) == "1\n"


def test_encode_list_rows_verbatim() -> None:
    """Emit array rows as-is with scalar stringification."""
    value = [["x", True, 2.0], [None, 1.5]]
    assert csv_codec.encode(value) == "x,true,2\n,1.5\n"


def test_encode_nested_values_as_compact_json() -> None:
    """Render nested containers as quoted compact JSON cells."""
    value = [{"tags": ["a", "b"]}]
    assert csv_codec.encode(value) == 'tags\n"[""a"",""b""]"\n'


@pytest.mark.parametrize(
    ("value", "message"),
    [
        ({"a": 1}, "array of objects or arrays"),
        ([], "array is empty"),
        ([1, 2], "Unsupported JSON structure"),
        ([{"a": 1}, [1]], "Unsupported JSON structure"),
        ([{}, {"a": 1}], "no keys to use as CSV columns"),
    ],
)
def test_encode_rejects_unsupported_shapes(value: object, message: str) -> None:
    """Reject values that are not non-empty uniform arrays with columns."""
    with pytest.raises(UnsupportedStructure, match=message):
        csv_codec.encode(value)  # type: ignore[arg-type]


def test_special_characters_survive_encode_then_decode() -> None:
    """Quote cells containing delimiters, quotes and line feeds reversibly."""
    rows = [{"name": 'Doe, "J"', "note": "line1\nline2", "plain": "ok"}]
    assert csv_codec.decode(csv_codec.encode(rows)) == rows


def test_preview_with_header() -> None:
    """Return header, first rows and overall counts."""
    result = csv_codec.preview("a,b\n1,2\n3,4\n5,6", rows=2)
    assert result.headers == ["a", "b"]
    assert result.rows == [["1", "2"], ["3", "4"]]
    assert result.total_rows == 4
    assert result.total_columns == 2


def test_preview_without_header_labels_columns() -> None:
    """Label columns positionally when there is no header row."""
    result = csv_codec.preview("1,2,3\n4,5,6", CsvDecodeConfig(has_header=False), rows=1)
    assert result.headers == ["Column 1", "Column 2", "Column 3"]
    assert result.rows == [["1", "2", "3"]]
