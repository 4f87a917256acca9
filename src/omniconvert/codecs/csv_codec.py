"""CSV text <-> value model codec (tabular subset)."""

from __future__ import annotations

from dataclasses import dataclass

from omniconvert.errors import EmptyOrMalformedInput, UnsupportedStructure
from omniconvert.schemas import CsvDecodeConfig, CsvEncodeConfig
from omniconvert.types import Value
from omniconvert.value import stringify

type CsvTable = list[list[str]]


@dataclass(frozen=True)
class CsvPreview:
    """First rows of a CSV document plus its overall dimensions."""

    headers: list[str]
    rows: CsvTable
    total_rows: int
    total_columns: int


def parse_table(text: str, delimiter: str = ",") -> CsvTable:
    """Tokenize CSV text into rows of trimmed string cells.

    A ``"`` toggles quoting; inside a quoted span the delimiter and line feeds
    are literal and ``""`` stands for one quote character. Blank records are
    dropped.

    Parameters
    ----------
    text : str
        CSV document.
    delimiter : str, default=","
        Field separator.

    Returns
    -------
    CsvTable
        Parsed rows. Rows may differ in length.
    """
    source = text.strip()
    rows: CsvTable = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    record_start = 0
    index = 0
    length = len(source)

    def finish_record(end: int) -> None:
        row.append("".join(field).strip())
        if source[record_start:end].strip():
            rows.append(list(row))
        row.clear()
        field.clear()

    while index < length:
        char = source[index]
        if char == '"':
            if in_quotes and index + 1 < length and source[index + 1] == '"':
                field.append('"')
                index += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            row.append("".join(field).strip())
            field.clear()
        elif char == "\n" and not in_quotes:
            finish_record(index)
            record_start = index + 1
        else:
            field.append(char)
        index += 1

    finish_record(length)
    return rows


def decode(text: str, config: CsvDecodeConfig | None = None) -> Value:
    """Decode CSV text into a list of dicts (header mode) or a list of rows.

    Raises
    ------
    EmptyOrMalformedInput
        If no rows remain after dropping blank lines.
    """
    config = config or CsvDecodeConfig()
    table = parse_table(text, config.delimiter)
    if not table:
        raise EmptyOrMalformedInput("CSV file appears to be empty or invalid")

    if config.has_header and len(table) > 1:
        headers = table[0]
        return [
            {
                header: row[index] if index < len(row) else ""
                for index, header in enumerate(headers)
            }
            for row in table[1:]
        ]
    return [list(row) for row in table]


def _escape_cell(value: Value, delimiter: str) -> str:
    text = stringify(value)
    if delimiter in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _join_row(cells: list[Value], delimiter: str) -> str:
    return delimiter.join(_escape_cell(cell, delimiter) for cell in cells)


def encode(value: Value, config: CsvEncodeConfig | None = None) -> str:
    """Encode a list of dicts or a list of lists as CSV text.

    Column order comes from the keys of the first dict; other rows are not
    reconciled against it.

    Raises
    ------
    UnsupportedStructure
        If ``value`` is not a non-empty list of all-dicts or all-lists, or
        the first dict has no keys.
    """
    config = config or CsvEncodeConfig()
    if not isinstance(value, list):
        raise UnsupportedStructure("JSON must be an array of objects or arrays")
    if not value:
        raise UnsupportedStructure("JSON array is empty")

    delimiter = config.delimiter
    lines: list[str] = []
    if all(isinstance(row, dict) for row in value):
        headers = list(value[0])
        if not headers:
            raise UnsupportedStructure("JSON objects have no keys to use as CSV columns")
        if config.include_header:
            lines.append(_join_row(list(headers), delimiter))
        for row in value:
            lines.append(_join_row([row.get(header) for header in headers], delimiter))
    elif all(isinstance(row, list) for row in value):
        for row in value:
            lines.append(_join_row(row, delimiter))
    else:
        raise UnsupportedStructure(
            "Unsupported JSON structure. Expected array of objects or array of arrays."
        )
    return "".join(f"{line}\n" for line in lines)


def preview(
    text: str,
    config: CsvDecodeConfig | None = None,
    rows: int = 5,
) -> CsvPreview:
    """Return the header and first ``rows`` data rows of a CSV document."""
    config = config or CsvDecodeConfig()
    table = parse_table(text, config.delimiter)
    first = table[0] if table else []
    limit = min(max(rows, 0), len(table))
    if config.has_header:
        headers = list(first)
        data_rows = table[1 : limit + 1]
    else:
        headers = [f"Column {index + 1}" for index in range(len(first))]
        data_rows = table[:limit]
    return CsvPreview(
        headers=headers,
        rows=[list(row) for row in data_rows],
        total_rows=len(table),
        total_columns=len(first),
    )
