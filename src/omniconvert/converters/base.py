"""Shared helpers for converter variants."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from pydantic import BaseModel

from omniconvert.application.results import ConversionResult, InputFile
from omniconvert.errors import InvalidFileType, ParseError
from omniconvert.schemas import build_config
from omniconvert.types import ConverterKind, OptionMap

UTC = getattr(datetime, "UTC", timezone.utc)  # noqa: UP017

type Clock = Callable[[], datetime]

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def utc_now() -> datetime:
    return datetime.now(UTC)


def generate_filename(original_name: str, extension: str, now: datetime) -> str:
    """Build ``{stem}-converted-{timestamp}.{extension}``.

    The stem is the part before the last ``.``; names without a usable stem
    (``"data"``, ``".csv"``) are kept whole. The timestamp is ISO-8601 to
    seconds with ``:`` replaced by ``-``.
    """
    stem = original_name.rpartition(".")[0] or original_name
    timestamp = now.strftime("%Y-%m-%dT%H-%M-%S")
    return f"{stem}-converted-{timestamp}.{extension}"


def format_file_size(size: int) -> str:
    """Return a human-readable size such as ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    scaled = float(size)
    exponent = 0
    while scaled >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        scaled /= 1024
        exponent += 1
    return f"{round(scaled, 2):g} {_SIZE_UNITS[exponent]}"


def matches_file_type(
    filename: str,
    media_type: str | None,
    allowed_types: tuple[str, ...],
) -> bool:
    """Check a file against media types (``a/b``) or extensions (``.ext``)."""
    lowered_name = filename.lower()
    for allowed in allowed_types:
        if "/" in allowed:
            if media_type is not None and media_type.lower() == allowed:
                return True
        elif lowered_name.endswith(allowed.lower()):
            return True
    return False


def decode_text(item: InputFile) -> str:
    """Decode UTF-8 payload text, dropping a byte-order mark."""
    try:
        return item.data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"{item.name} is not valid UTF-8: {exc}") from exc


class BaseConverter:
    """Common validation, option parsing and result packaging."""

    kind: ConverterKind
    accepted_types: tuple[str, ...] = ()
    output_extension: str = "bin"
    output_media_type: str = "application/octet-stream"

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    def validate(self, item: InputFile) -> None:
        """Raise ``InvalidFileType`` unless the item matches ``accepted_types``.

        An empty ``accepted_types`` accepts every input.
        """
        if not self.accepted_types:
            return
        if not matches_file_type(item.name, item.media_type, self.accepted_types):
            raise InvalidFileType(
                f"Invalid file type. Expected: {', '.join(self.accepted_types)}"
            )

    def _parse_options[ConfigT: BaseModel](
        self,
        schema: type[ConfigT],
        options: OptionMap | ConfigT | None,
    ) -> ConfigT:
        return build_config(schema, options)

    def _result(
        self,
        item: InputFile,
        payload: bytes,
        *,
        media_type: str | None = None,
        metadata: Mapping[str, object] | None = None,
    ) -> ConversionResult:
        return ConversionResult(
            data=payload,
            media_type=media_type or self.output_media_type,
            filename=generate_filename(item.name, self.output_extension, self._clock()),
            input_size=item.size,
            output_size=len(payload),
            metadata=dict(metadata or {}),
        )
