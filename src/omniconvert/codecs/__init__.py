"""Text codecs between file formats and the value model."""

from . import base64_codec, csv_codec, markdown, xml_codec

__all__ = ["base64_codec", "csv_codec", "markdown", "xml_codec"]
