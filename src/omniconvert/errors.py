"""Exception hierarchy for structured-data conversion."""

from __future__ import annotations


class ConversionError(Exception):
    """Base error raised when a conversion cannot be completed.

    Attributes
    ----------
    exit_code : int
        Process exit code used by the CLI when this error is reported.
    """

    exit_code: int = 1


class InvalidFileType(ConversionError):
    """Input does not match the converter's accepted media types/extensions."""

    exit_code = 2


class ParseError(ConversionError):
    """Malformed JSON, XML or Base64 input."""

    exit_code = 3


class EmptyOrMalformedInput(ConversionError):
    """CSV text produced no rows."""

    exit_code = 4


class UnsupportedStructure(ConversionError):
    """Value shape cannot be represented in the target format."""

    exit_code = 5
