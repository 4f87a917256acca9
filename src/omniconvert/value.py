"""Canonical value model helpers and the JSON text boundary."""

from __future__ import annotations

import json
import math
from typing import NoReturn

from omniconvert.errors import ParseError
from omniconvert.types import Value


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str) -> Value:
    """Parse JSON text into the value model.

    Parameters
    ----------
    text : str
        JSON document.

    Returns
    -------
    Value
        Parsed value. Objects keep their key order.

    Raises
    ------
    ParseError
        If the text is not valid JSON. ``NaN`` and ``Infinity`` are rejected.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc


def dump_json(value: Value, *, indent: int | None = 2) -> str:
    """Serialize a value to JSON text, keeping non-ASCII characters."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def stringify(value: Value) -> str:
    """Render a value as cell/text content.

    ``None`` becomes an empty string, booleans become ``true``/``false``,
    integral floats lose their fraction and containers become compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return str(value)
