"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from omniconvert.application.results import BatchItemResult, InputFile
from omniconvert.application.use_cases import convert_batch, convert_item
from omniconvert.errors import ConversionError
from omniconvert.types import ConverterKind, OptionMap


def read_input(path: Path) -> InputFile:
    """Load a file from disk as an ``InputFile``."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ConversionError(f"Unable to read {path}: {exc}") from exc
    return InputFile(name=path.name, data=data)


def _output_dir(input_path: Path, output_dir: Optional[Path]) -> Path:
    target = output_dir or input_path.parent
    target.mkdir(parents=True, exist_ok=True)
    return target


def convert_file(
    kind: ConverterKind,
    input_path: Path,
    output_dir: Optional[Path] = None,
    options: Optional[OptionMap] = None,
) -> Path:
    """Convert a file and write the result next to it (or into ``output_dir``)."""
    result = convert_item(kind, read_input(input_path), options)
    output_path = _output_dir(input_path, output_dir) / result.filename
    output_path.write_bytes(result.data)
    return output_path


def convert_files(
    kind: ConverterKind,
    input_paths: Iterable[Path],
    output_dir: Optional[Path] = None,
    options: Optional[OptionMap] = None,
) -> list[tuple[BatchItemResult, Optional[Path]]]:
    """Convert files one after another and write each successful output.

    All inputs are read before the first conversion starts; conversion
    failures are then recorded per file without stopping the batch.

    Returns
    -------
    list[tuple[BatchItemResult, Path | None]]
        Per-file outcome paired with the written output path (``None`` on
        failure).

    Raises
    ------
    ConversionError
        If an input file cannot be read.
    """
    paths = list(input_paths)
    items = [read_input(path) for path in paths]
    outcomes: list[tuple[BatchItemResult, Optional[Path]]] = []
    results = convert_batch(kind, items, options)
    for path, entry in zip(paths, results, strict=True):
        if entry.result is None:
            outcomes.append((entry, None))
            continue
        output_path = _output_dir(path, output_dir) / entry.result.filename
        output_path.write_bytes(entry.result.data)
        outcomes.append((entry, output_path))
    return outcomes
