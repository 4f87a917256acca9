"""Application ports for converter variants."""

from __future__ import annotations

from typing import Protocol

from omniconvert.application.results import ConversionResult, InputFile
from omniconvert.types import ConverterKind, OptionMap


class Converter(Protocol):
    """Validate and convert one input payload."""

    kind: ConverterKind
    accepted_types: tuple[str, ...]
    output_media_type: str

    def validate(self, item: InputFile) -> None:
        """Raise ``InvalidFileType`` when the item is not accepted."""

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        """Convert the item and package the output payload."""
