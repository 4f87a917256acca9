"""Application-layer use-cases and result objects."""

from __future__ import annotations

from collections.abc import Iterable

from omniconvert.application.ports import Converter
from omniconvert.application.results import (
    BatchItemResult,
    ConversionResult,
    InputFile,
)
from omniconvert.types import ConverterKind, OptionMap


def convert_item(
    kind: ConverterKind,
    item: InputFile,
    options: OptionMap | None = None,
    *,
    converter: Converter | None = None,
) -> ConversionResult:
    """Convert a single item via lazy use-case import."""
    from omniconvert.application.use_cases import convert_item as _impl

    return _impl(kind, item, options, converter=converter)


def convert_batch(
    kind: ConverterKind,
    items: Iterable[InputFile],
    options: OptionMap | None = None,
    *,
    converter: Converter | None = None,
) -> list[BatchItemResult]:
    """Convert a batch of items via lazy use-case import."""
    from omniconvert.application.use_cases import convert_batch as _impl

    return _impl(kind, items, options, converter=converter)


__all__ = [
    "BatchItemResult",
    "ConversionResult",
    "Converter",
    "InputFile",
    "convert_batch",
    "convert_item",
]
