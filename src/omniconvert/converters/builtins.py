"""Built-in converter variants."""

from __future__ import annotations

from omniconvert.application.results import ConversionResult, InputFile
from omniconvert.codecs import base64_codec, csv_codec, markdown, xml_codec
from omniconvert.converters.base import BaseConverter, decode_text
from omniconvert.schemas import (
    Base64DecodeConfig,
    Base64EncodeConfig,
    CsvDecodeConfig,
    CsvEncodeConfig,
    MarkdownConfig,
    XmlDecodeConfig,
    XmlEncodeConfig,
)
from omniconvert.types import OptionMap
from omniconvert.value import dump_json, parse_json

CSV_TYPES = ("text/csv", "application/csv", ".csv")
JSON_TYPES = ("application/json", ".json")
XML_TYPES = ("application/xml", "text/xml", ".xml")
MARKDOWN_TYPES = ("text/markdown", "text/x-markdown", ".md", ".markdown")
BASE64_TYPES = ("text/plain", ".txt", ".b64")


class CsvToJsonConverter(BaseConverter):
    """Decode CSV rows into a JSON array."""

    kind = "csv-to-json"
    accepted_types = CSV_TYPES
    output_extension = "json"
    output_media_type = "application/json"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        config = self._parse_options(CsvDecodeConfig, options)
        value = csv_codec.decode(decode_text(item), config)
        payload = dump_json(value).encode("utf-8")
        return self._result(
            item,
            payload,
            metadata={
                "record_count": len(value),
                "has_header": config.has_header,
                "delimiter": config.delimiter,
            },
        )


class JsonToCsvConverter(BaseConverter):
    """Encode a JSON array of objects or arrays as CSV."""

    kind = "json-to-csv"
    accepted_types = JSON_TYPES
    output_extension = "csv"
    output_media_type = "text/csv"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        config = self._parse_options(CsvEncodeConfig, options)
        value = parse_json(decode_text(item))
        payload = csv_codec.encode(value, config).encode("utf-8")
        return self._result(
            item,
            payload,
            metadata={"record_count": len(value), "delimiter": config.delimiter},
        )


class XmlToJsonConverter(BaseConverter):
    """Decode an XML document into JSON."""

    kind = "xml-to-json"
    accepted_types = XML_TYPES
    output_extension = "json"
    output_media_type = "application/json"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        config = self._parse_options(XmlDecodeConfig, options)
        value = xml_codec.decode(decode_text(item), config)
        payload = dump_json(value).encode("utf-8")
        return self._result(item, payload, metadata={"root_element": next(iter(value))})


class JsonToXmlConverter(BaseConverter):
    """Encode a JSON document as XML."""

    kind = "json-to-xml"
    accepted_types = JSON_TYPES
    output_extension = "xml"
    output_media_type = "application/xml"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        config = self._parse_options(XmlEncodeConfig, options)
        value = parse_json(decode_text(item))
        # Characters outside the declared encoding become character references.
        text = xml_codec.encode(value, config)
        payload = text.encode(config.encoding, errors="xmlcharrefreplace")
        return self._result(item, payload, metadata={"encoding": config.encoding})


class MarkdownToHtmlConverter(BaseConverter):
    """Render Markdown as an HTML fragment."""

    kind = "markdown-to-html"
    accepted_types = MARKDOWN_TYPES
    output_extension = "html"
    output_media_type = "text/html"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        config = self._parse_options(MarkdownConfig, options)
        payload = markdown.render(decode_text(item), config).encode("utf-8")
        return self._result(item, payload)


class Base64EncodeConverter(BaseConverter):
    """Encode any payload as Base64 text."""

    kind = "base64-encode"
    output_extension = "txt"
    output_media_type = "text/plain"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        self._parse_options(Base64EncodeConfig, options)
        payload = base64_codec.encode(item.data).encode("ascii")
        return self._result(item, payload, metadata={"operation": "encode"})


class Base64DecodeConverter(BaseConverter):
    """Decode Base64 text back to bytes."""

    kind = "base64-decode"
    accepted_types = BASE64_TYPES
    output_extension = "bin"
    output_media_type = "text/plain"

    def convert(self, item: InputFile, options: OptionMap) -> ConversionResult:
        config = self._parse_options(Base64DecodeConfig, options)
        payload = base64_codec.decode(decode_text(item))
        return self._result(
            item,
            payload,
            media_type=config.output_media_type,
            metadata={"operation": "decode"},
        )
