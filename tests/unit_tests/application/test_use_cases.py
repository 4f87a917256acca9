"""Unit tests for application use-cases."""

from __future__ import annotations

import logging

import pytest

from omniconvert.application import convert_batch, convert_item
from omniconvert.application.results import ConversionResult, InputFile
from omniconvert.errors import InvalidFileType, ParseError


class _Converter:
    kind = "json-to-csv"
    accepted_types = (".json",)
    output_media_type = "text/csv"

    def __init__(self) -> None:
        self.validated: list[str] = []
        self.converted: list[str] = []

    def validate(self, item: InputFile) -> None:
        self.validated.append(item.name)
        if not item.name.endswith(".json"):
            raise InvalidFileType("Invalid file type. Expected: .json")

    def convert(self, item: InputFile, options: object) -> ConversionResult:
        self.converted.append(item.name)
        if item.data == b"bad":
            raise ParseError("Invalid JSON: boom")
        return ConversionResult(
            data=b"ok",
            media_type="text/csv",
            filename="out.csv",
            input_size=item.size,
            output_size=2,
        )


def test_convert_item_validates_before_converting() -> None:
    """Stop at validation when the file type is rejected."""
    converter = _Converter()
    with pytest.raises(InvalidFileType):
        convert_item("json-to-csv", InputFile(name="a.txt", data=b"x"), converter=converter)
    assert converter.validated == ["a.txt"]
    assert converter.converted == []


def test_convert_batch_continues_after_failures(caplog: pytest.LogCaptureFixture) -> None:
    """Record each failure and keep converting the remaining items."""
    converter = _Converter()
    items = [
        InputFile(name="a.json", data=b"good"),
        InputFile(name="b.txt", data=b"good"),
        InputFile(name="c.json", data=b"bad"),
        InputFile(name="d.json", data=b"good"),
    ]

    with caplog.at_level(logging.INFO, logger="omniconvert.application.use_cases"):
        results = convert_batch("json-to-csv", items, converter=converter)

    assert [entry.success for entry in results] == [True, False, False, True]
    assert [entry.item.name for entry in results] == ["a.json", "b.txt", "c.json", "d.json"]
    assert results[1].error == "Invalid file type. Expected: .json"
    assert results[2].error == "Invalid JSON: boom"
    assert results[0].result is not None and results[0].result.data == b"ok"
    assert "Converted 2/4 files" in caplog.text


def test_convert_batch_real_converter() -> None:
    """Run the built-in converter when none is injected."""
    results = convert_batch(
        "csv-to-json",
        [InputFile(name="a.csv", data=b"x\n1"), InputFile(name="b.csv", data=b"")],
    )
    assert results[0].success
    assert not results[1].success
    assert results[1].error == "CSV file appears to be empty or invalid"
