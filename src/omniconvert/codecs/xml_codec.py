"""XML text <-> value model codec (tree subset).

Attributes are stored under prefixed keys (``@id``), mixed text under a
configurable text key (``#text``) and repeated sibling elements are folded
into lists. The encoder promotes a single-key root object to the root element;
JSON -> XML -> JSON is therefore not idempotent in general.
"""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET

from omniconvert.errors import ParseError
from omniconvert.schemas import XmlDecodeConfig, XmlEncodeConfig
from omniconvert.types import Value
from omniconvert.value import stringify

MULTI_KEY_ROOT_NAME = "data"
EMPTY_ROOT_NAME = "empty"

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_VALID_NAME_START = re.compile(r"[A-Za-z_]")
_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

type _Line = tuple[int, str]


def sanitize_name(name: str) -> str:
    """Make ``name`` usable as an element or attribute name.

    Characters outside ``[A-Za-z0-9._-]`` become ``_`` and a leading ``_`` is
    added when the name does not start with a letter or underscore.
    """
    cleaned = _INVALID_NAME_CHARS.sub("_", name)
    if not _VALID_NAME_START.match(cleaned):
        cleaned = "_" + cleaned
    return cleaned


def escape(text: str) -> str:
    """Escape XML special characters, ampersand first."""
    for char, entity in _ESCAPES:
        text = text.replace(char, entity)
    return text


def coerce(raw: str, config: XmlDecodeConfig) -> Value:
    """Convert attribute/text content to a bool or number when enabled."""
    stripped = raw.strip()
    if config.parse_booleans and stripped.lower() in {"true", "false"}:
        return stripped.lower() == "true"
    if config.parse_numbers and _DECIMAL.fullmatch(stripped):
        if _INTEGER.fullmatch(stripped):
            return int(stripped)
        number = float(stripped)
        if math.isfinite(number):
            return number
    return raw


# -----------------------------
# Decode
# -----------------------------
def _fold(result: dict[str, Value], key: str, value: Value) -> None:
    if key not in result:
        result[key] = value
        return
    existing = result[key]
    if isinstance(existing, list):
        existing.append(value)
    else:
        result[key] = [existing, value]


def element_to_value(element: ET.Element, config: XmlDecodeConfig) -> Value:
    """Convert a parsed element (attributes, text runs, children) to a value."""
    result: dict[str, Value] = {}
    if not config.ignore_attributes:
        for name, raw in element.attrib.items():
            result[config.attribute_prefix + name] = coerce(raw, config)

    text = (element.text or "").strip()
    if text:
        if not result:
            return coerce(text, config)
        _fold(result, config.text_node_name, coerce(text, config))

    for child in element:
        _fold(result, child.tag, element_to_value(child, config))
        tail = (child.tail or "").strip()
        if tail:
            _fold(result, config.text_node_name, coerce(tail, config))

    return result or None


def decode(text: str, config: XmlDecodeConfig | None = None) -> Value:
    """Decode an XML document into ``{root_tag: value}``.

    Raises
    ------
    ParseError
        If the XML parser rejects the document.
    """
    config = config or XmlDecodeConfig()
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ParseError(f"Invalid XML: {exc}") from exc
    return {root.tag: element_to_value(root, config)}


# -----------------------------
# Encode
# -----------------------------
class _Encoder:
    def __init__(self, config: XmlEncodeConfig) -> None:
        self.config = config

    def _is_attribute(self, key: str) -> bool:
        prefix = self.config.attribute_prefix
        return bool(prefix) and key.startswith(prefix)

    def items(self, name: str, values: list[Value], depth: int) -> list[_Line]:
        """Render ``values`` as ``array_element_name`` children of ``name``."""
        tag = sanitize_name(name)
        inner: list[_Line] = []
        for value in values:
            inner.extend(self.element(self.config.array_element_name, value, depth + 1))
        if not inner:
            return [(depth, f"<{tag}/>")]
        return [(depth, f"<{tag}>"), *inner, (depth, f"</{tag}>")]

    def element(self, name: str, value: Value, depth: int) -> list[_Line]:
        if isinstance(value, list):
            lines: list[_Line] = []
            for item in value:
                if isinstance(item, list):
                    lines.extend(self.items(name, item, depth))
                else:
                    lines.extend(self.element(name, item, depth))
            return lines

        tag = sanitize_name(name)
        if value is None:
            return [(depth, f"<{tag}/>")]
        if not isinstance(value, dict):
            return [(depth, f"<{tag}>{escape(stringify(value))}</{tag}>")]

        attributes = ""
        text: str | None = None
        children: list[_Line] = []
        prefix_length = len(self.config.attribute_prefix)
        for key, item in value.items():
            if self._is_attribute(key):
                attr_name = sanitize_name(key[prefix_length:])
                attributes += f' {attr_name}="{escape(stringify(item))}"'
            elif key == self.config.text_node_name:
                if item is not None:
                    text = escape(stringify(item))
            else:
                children.extend(self.element(key, item, depth + 1))

        if text is None and not children:
            return [(depth, f"<{tag}{attributes}/>")]
        if not children:
            return [(depth, f"<{tag}{attributes}>{text}</{tag}>")]
        lines = [(depth, f"<{tag}{attributes}>")]
        if text is not None:
            lines.append((depth + 1, text))
        lines.extend(children)
        lines.append((depth, f"</{tag}>"))
        return lines

    def document(self, value: Value) -> list[_Line]:
        root_name = self.config.root_element_name
        default_root = "root_element_name" not in self.config.model_fields_set
        if isinstance(value, dict):
            if len(value) == 1:
                key, item = next(iter(value.items()))
                # A document has exactly one root element.
                if isinstance(item, list):
                    return self.items(key, item, 0)
                return self.element(key, item, 0)
            if not value:
                return self.element(EMPTY_ROOT_NAME if default_root else root_name, None, 0)
            return self.element(MULTI_KEY_ROOT_NAME if default_root else root_name, value, 0)
        if isinstance(value, list):
            return self.items(root_name, value, 0)
        return self.element(root_name, value, 0)


def encode(value: Value, config: XmlEncodeConfig | None = None) -> str:
    """Encode a value as an XML document.

    Parameters
    ----------
    value : Value
        Value to encode. A single-key object names the root element.
    config : XmlEncodeConfig, optional
        Naming and formatting options.

    Returns
    -------
    str
        XML text, optionally preceded by an XML declaration.
    """
    config = config or XmlEncodeConfig()
    lines = _Encoder(config).document(value)
    if config.pretty_print:
        body = "\n".join("  " * depth + text for depth, text in lines)
    else:
        body = "".join(text for _, text in lines)
    if not config.xml_declaration:
        return body
    declaration = f'<?xml version="1.0" encoding="{config.encoding}"?>'
    separator = "\n" if config.pretty_print else ""
    return f"{declaration}{separator}{body}"
