"""Application-layer input and result objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class InputFile:
    """Raw input handed to a converter."""

    name: str
    data: bytes
    media_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome."""

    data: bytes
    media_type: str
    filename: str
    input_size: int
    output_size: int
    metadata: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome of one item in a batch conversion."""

    success: bool
    item: InputFile
    result: ConversionResult | None = None
    error: str | None = None
