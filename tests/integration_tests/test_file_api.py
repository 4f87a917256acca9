"""Integration tests for the file-based conversion API."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from omniconvert.api import convert_file, convert_files
from omniconvert.errors import ConversionError


def test_convert_file_writes_next_to_input(tmp_path: Path) -> None:
    """Write the output beside the input when no directory is given."""
    source = tmp_path / "feed.xml"
    source.write_text('<feed><entry id="1">a</entry><entry id="2">b</entry></feed>', encoding="utf-8")

    output = convert_file("xml-to-json", source)

    assert output.parent == tmp_path
    assert output.name.startswith("feed-converted-")
    assert output.suffix == ".json"
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "feed": {"entry": [{"@id": 1, "#text": "a"}, {"@id": 2, "#text": "b"}]}
    }


def test_convert_file_creates_output_dir(tmp_path: Path) -> None:
    """Create the requested output directory on demand."""
    source = tmp_path / "readme.md"
    source.write_text("# Title\n\n- [x] done\n", encoding="utf-8")
    out_dir = tmp_path / "nested" / "html"

    output = convert_file("markdown-to-html", source, output_dir=out_dir)

    assert output.parent == out_dir
    html = output.read_text(encoding="utf-8")
    assert html.startswith("<p><h1>Title</h1></p><p><ul>")
    assert 'checked disabled' in html


def test_convert_file_propagates_conversion_errors(tmp_path: Path) -> None:
    """Raise domain errors for single-file conversions."""
    source = tmp_path / "empty.csv"
    source.write_text("\n\n", encoding="utf-8")
    with pytest.raises(ConversionError, match="empty or invalid"):
        convert_file("csv-to-json", source)
    assert list(tmp_path.glob("*.json")) == []


def test_convert_files_records_each_outcome(tmp_path: Path) -> None:
    """Write successful outputs and pair failures with ``None``."""
    good = tmp_path / "good.json"
    good.write_text('{"order": {"@ref": "A1", "line": ["x", "y"]}}', encoding="utf-8")
    bad = tmp_path / "bad.json"
    bad.write_text("[1,", encoding="utf-8")
    out_dir = tmp_path / "out"

    outcomes = convert_files(
        "json-to-xml", [good, bad], output_dir=out_dir, options={"xml_declaration": False}
    )

    assert [entry.success for entry, _ in outcomes] == [True, False]
    written = outcomes[0][1]
    assert written is not None and written.parent == out_dir
    assert written.read_text(encoding="utf-8") == (
        '<order ref="A1">\n  <line>x</line>\n  <line>y</line>\n</order>'
    )
    assert outcomes[1][1] is None
    assert outcomes[1][0].error is not None and "Invalid JSON" in outcomes[1][0].error


def test_convert_files_unreadable_input(tmp_path: Path) -> None:
    """Fail before converting when an input path cannot be read."""
    with pytest.raises(ConversionError, match="Unable to read"):
        convert_files("csv-to-json", [tmp_path / "missing.csv"])
