"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel

from omniconvert.application.ports import Converter
from omniconvert.application.results import (
    BatchItemResult,
    ConversionResult,
    InputFile,
)
from omniconvert.converters import converter_for
from omniconvert.errors import ConversionError
from omniconvert.types import ConverterKind, OptionMap

logger = logging.getLogger(__name__)

type Options = OptionMap | BaseModel | None


def convert_item(
    kind: ConverterKind,
    item: InputFile,
    options: Options = None,
    *,
    converter: Converter | None = None,
) -> ConversionResult:
    """Use-case: validate and convert a single input payload."""
    converter = converter or converter_for(kind)
    converter.validate(item)
    logger.debug("Converting %s with %s", item.name, kind)
    return converter.convert(item, options or {})


def convert_batch(
    kind: ConverterKind,
    items: Iterable[InputFile],
    options: Options = None,
    *,
    converter: Converter | None = None,
) -> list[BatchItemResult]:
    """Use-case: convert items one after another, recording each outcome.

    A failing item is reported in its ``BatchItemResult`` and the batch
    continues with the next item.
    """
    converter = converter or converter_for(kind)
    results: list[BatchItemResult] = []
    for item in items:
        try:
            result = convert_item(kind, item, options, converter=converter)
        except ConversionError as exc:
            logger.warning("Failed to convert %s: %s", item.name, exc)
            results.append(BatchItemResult(success=False, item=item, error=str(exc)))
            continue
        results.append(BatchItemResult(success=True, item=item, result=result))

    succeeded = sum(1 for entry in results if entry.success)
    logger.info("Converted %d/%d files", succeeded, len(results))
    return results
