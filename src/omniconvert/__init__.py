"""Top-level API for structured-data format conversion."""

from __future__ import annotations

from collections.abc import Iterable

from omniconvert.application.results import (
    BatchItemResult,
    ConversionResult,
    InputFile,
)
from omniconvert.types import ConverterKind, OptionMap

__version__ = "0.1.0"


def csv_to_json(
    text: str,
    delimiter: str = ",",
    has_header: bool = True,
    indent: int | None = 2,
) -> str:
    """Convert CSV text to JSON text.

    Parameters
    ----------
    text : str
        CSV document.
    delimiter : str, default=","
        Field separator.
    has_header : bool, default=True
        Use the first row as object keys.
    indent : int | None, default=2
        JSON indentation; ``None`` for compact output.

    Returns
    -------
    str
        JSON array of objects (header mode) or of string arrays.
    """
    from omniconvert.codecs import csv_codec
    from omniconvert.schemas import CsvDecodeConfig, build_config
    from omniconvert.value import dump_json

    config = build_config(
        CsvDecodeConfig, {"delimiter": delimiter, "has_header": has_header}
    )
    return dump_json(csv_codec.decode(text, config), indent=indent)


def json_to_csv(
    text: str,
    delimiter: str = ",",
    include_header: bool = True,
) -> str:
    """Convert a JSON array of objects or arrays to CSV text.

    Parameters
    ----------
    text : str
        JSON document.
    delimiter : str, default=","
        Field separator.
    include_header : bool, default=True
        Emit the header row for arrays of objects.

    Returns
    -------
    str
        CSV text, one ``\\n``-terminated line per row.
    """
    from omniconvert.codecs import csv_codec
    from omniconvert.schemas import CsvEncodeConfig, build_config
    from omniconvert.value import parse_json

    config = build_config(
        CsvEncodeConfig, {"delimiter": delimiter, "include_header": include_header}
    )
    return csv_codec.encode(parse_json(text), config)


def xml_to_json(
    text: str,
    options: OptionMap | None = None,
    indent: int | None = 2,
) -> str:
    """Convert XML text to JSON text.

    Parameters
    ----------
    text : str
        XML document.
    options : OptionMap, optional
        ``XmlDecodeConfig`` fields (``attribute_prefix``, ``text_node_name``,
        ``ignore_attributes``, ``parse_numbers``, ``parse_booleans``).
    indent : int | None, default=2
        JSON indentation; ``None`` for compact output.
    """
    from omniconvert.codecs import xml_codec
    from omniconvert.schemas import XmlDecodeConfig, build_config
    from omniconvert.value import dump_json

    config = build_config(XmlDecodeConfig, options)
    return dump_json(xml_codec.decode(text, config), indent=indent)


def json_to_xml(text: str, options: OptionMap | None = None) -> str:
    """Convert JSON text to XML text.

    Parameters
    ----------
    text : str
        JSON document.
    options : OptionMap, optional
        ``XmlEncodeConfig`` fields (``root_element_name``,
        ``attribute_prefix``, ``text_node_name``, ``array_element_name``,
        ``pretty_print``, ``xml_declaration``, ``encoding``).
    """
    from omniconvert.codecs import xml_codec
    from omniconvert.schemas import XmlEncodeConfig, build_config
    from omniconvert.value import parse_json

    config = build_config(XmlEncodeConfig, options)
    return xml_codec.encode(parse_json(text), config)


def markdown_to_html(text: str, options: OptionMap | None = None) -> str:
    """Render Markdown text as an HTML fragment."""
    from omniconvert.codecs import markdown
    from omniconvert.schemas import MarkdownConfig, build_config

    return markdown.render(text, build_config(MarkdownConfig, options))


def convert(
    kind: ConverterKind,
    data: bytes,
    filename: str,
    media_type: str | None = None,
    options: OptionMap | None = None,
) -> ConversionResult:
    """Validate and convert one payload with the converter named ``kind``.

    Returns
    -------
    ConversionResult
        Output bytes, media type, suggested filename and size metadata.
    """
    from omniconvert.application.use_cases import convert_item

    item = InputFile(name=filename, data=data, media_type=media_type)
    return convert_item(kind, item, options)


def convert_batch(
    kind: ConverterKind,
    items: Iterable[InputFile],
    options: OptionMap | None = None,
) -> list[BatchItemResult]:
    """Convert items sequentially; failures are recorded per item."""
    from omniconvert.application.use_cases import convert_batch as _impl

    return _impl(kind, items, options)


def format_file_size(size: int) -> str:
    """Return a human-readable byte count such as ``1.5 KB``."""
    from omniconvert.converters.base import format_file_size as _impl

    return _impl(size)


__all__ = [
    "BatchItemResult",
    "ConversionResult",
    "InputFile",
    "convert",
    "convert_batch",
    "csv_to_json",
    "format_file_size",
    "json_to_csv",
    "json_to_xml",
    "markdown_to_html",
    "xml_to_json",
]
