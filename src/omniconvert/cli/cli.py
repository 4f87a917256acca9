#!/usr/bin/env python3
"""
omniconvert.cli.cli

Typer-based CLI for converting between CSV, JSON, XML, Markdown and Base64.

Every conversion command accepts one or more files and converts them in
order; a failing file is reported and the remaining files are still
converted.

Examples
--------
    omniconvert csv-to-json people.csv --output-dir out/
    omniconvert json-to-xml order.json --root-name order --compact
    omniconvert markdown-to-html README.md --no-tables
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Any

import typer

from omniconvert.errors import ConversionError
from omniconvert.types import ConverterKind

app = typer.Typer(
    name="omniconvert",
    help="Convert structured text between CSV, JSON, XML, Markdown/HTML and Base64.",
    no_args_is_help=True,
)

FILES_HELP = "Input file(s); converted one after another."
OUTPUT_DIR_HELP = "Directory for converted files (defaults to each input's directory)."
DELIMITER_HELP = "Single-character field delimiter."
ATTRIBUTE_PREFIX_HELP = "Key prefix marking XML attributes."
TEXT_NODE_HELP = "Key holding element text next to attributes/children."


# -----------------------------
# Utilities
# -----------------------------
def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _run(
    ctx: typer.Context,
    kind: ConverterKind,
    files: list[Path],
    output_dir: Path | None,
    options: dict[str, Any],
) -> None:
    """Convert ``files`` with ``kind`` and report each outcome.

    Raises
    ------
    typer.Exit
        With a non-zero code when any file failed.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from omniconvert.api import convert_files
        from omniconvert.converters import format_file_size

        outcomes = convert_files(kind, files, output_dir=output_dir, options=options)
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    failures = 0
    for entry, output_path in outcomes:
        if entry.result is None or output_path is None:
            failures += 1
            typer.secho(f"✗ {entry.item.name}: {entry.error}", fg=typer.colors.RED, err=True)
            continue
        sizes = (
            f"{format_file_size(entry.result.input_size)} → "
            f"{format_file_size(entry.result.output_size)}"
        )
        typer.secho(f"✓ Saved: {output_path} ({sizes})", fg=typer.colors.GREEN)

    typer.echo(f"Converted {len(outcomes) - failures}/{len(outcomes)} files")
    if failures:
        raise typer.Exit(code=1)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    """
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("csv-to-json")
def csv_to_json_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    delimiter: str = typer.Option(",", "--delimiter", "-d", help=DELIMITER_HELP),
    header: bool = typer.Option(
        True, "--header/--no-header", help="Treat the first row as column names."
    ),
) -> None:
    """Convert CSV files to JSON arrays.

    Notes
    -----
    - Values stay strings; no numeric coercion is applied.
    - With a header, each row becomes an object keyed by the header cells.
    """
    _run(ctx, "csv-to-json", files, output_dir, {"delimiter": delimiter, "has_header": header})


@app.command("json-to-csv")
def json_to_csv_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    delimiter: str = typer.Option(",", "--delimiter", "-d", help=DELIMITER_HELP),
    header: bool = typer.Option(
        True, "--header/--no-header", help="Write the header row for arrays of objects."
    ),
) -> None:
    """Convert JSON arrays of objects or arrays to CSV."""
    _run(
        ctx,
        "json-to-csv",
        files,
        output_dir,
        {"delimiter": delimiter, "include_header": header},
    )


@app.command("xml-to-json")
def xml_to_json_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    attribute_prefix: str = typer.Option("@", "--attribute-prefix", help=ATTRIBUTE_PREFIX_HELP),
    text_node_name: str = typer.Option("#text", "--text-node-name", help=TEXT_NODE_HELP),
    ignore_attributes: bool = typer.Option(
        False, "--ignore-attributes", help="Drop XML attributes."
    ),
    parse_numbers: bool = typer.Option(
        True, "--parse-numbers/--no-parse-numbers", help="Convert numeric text to numbers."
    ),
    parse_booleans: bool = typer.Option(
        True, "--parse-booleans/--no-parse-booleans", help="Convert true/false text to booleans."
    ),
) -> None:
    """Convert XML documents to JSON."""
    _run(
        ctx,
        "xml-to-json",
        files,
        output_dir,
        {
            "attribute_prefix": attribute_prefix,
            "text_node_name": text_node_name,
            "ignore_attributes": ignore_attributes,
            "parse_numbers": parse_numbers,
            "parse_booleans": parse_booleans,
        },
    )


@app.command("json-to-xml")
def json_to_xml_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    root_name: str | None = typer.Option(
        None, "--root-name", help="Root element for objects with several keys."
    ),
    attribute_prefix: str = typer.Option("@", "--attribute-prefix", help=ATTRIBUTE_PREFIX_HELP),
    text_node_name: str = typer.Option("#text", "--text-node-name", help=TEXT_NODE_HELP),
    array_item_name: str = typer.Option(
        "item", "--array-item-name", help="Element name for nested array items."
    ),
    pretty: bool = typer.Option(True, "--pretty/--compact", help="Indent nested elements."),
    declaration: bool = typer.Option(
        True, "--declaration/--no-declaration", help="Emit the <?xml ...?> declaration."
    ),
    encoding: str = typer.Option(
        "UTF-8", "--encoding", help="Encoding of the output bytes, named in the declaration."
    ),
) -> None:
    """Convert JSON documents to XML.

    Notes
    -----
    - A top-level object with a single key becomes the root element.
    - Keys starting with the attribute prefix become attributes.
    """
    options: dict[str, Any] = {
        "attribute_prefix": attribute_prefix,
        "text_node_name": text_node_name,
        "array_element_name": array_item_name,
        "pretty_print": pretty,
        "xml_declaration": declaration,
        "encoding": encoding,
    }
    if root_name is not None:
        options["root_element_name"] = root_name
    _run(ctx, "json-to-xml", files, output_dir, options)


@app.command("markdown-to-html")
def markdown_to_html_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    tables: bool = typer.Option(True, "--tables/--no-tables", help="Render pipe tables."),
    code_blocks: bool = typer.Option(
        True, "--code-blocks/--no-code-blocks", help="Render fenced and inline code."
    ),
    strikethrough: bool = typer.Option(
        True, "--strikethrough/--no-strikethrough", help="Render ~~strikethrough~~."
    ),
    task_lists: bool = typer.Option(
        True, "--task-lists/--no-task-lists", help="Render - [ ] / - [x] checkboxes."
    ),
) -> None:
    """Render Markdown files as HTML fragments."""
    _run(
        ctx,
        "markdown-to-html",
        files,
        output_dir,
        {
            "enable_tables": tables,
            "enable_code_blocks": code_blocks,
            "enable_strikethrough": strikethrough,
            "enable_task_lists": task_lists,
        },
    )


@app.command("base64-encode")
def base64_encode_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
) -> None:
    """Encode files of any type as Base64 text."""
    _run(ctx, "base64-encode", files, output_dir, {})


@app.command("base64-decode")
def base64_decode_cmd(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, readable=True, dir_okay=False, help=FILES_HELP),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help=OUTPUT_DIR_HELP),
    output_media_type: str = typer.Option(
        "text/plain", "--output-media-type", help="Media type reported for decoded bytes."
    ),
) -> None:
    """Decode Base64 text files back to bytes."""
    _run(ctx, "base64-decode", files, output_dir, {"output_media_type": output_media_type})


@app.command("preview-csv")
def preview_csv_cmd(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="CSV file."),
    rows: int = typer.Option(5, "--rows", "-n", min=0, help="Number of data rows to show."),
    delimiter: str = typer.Option(",", "--delimiter", "-d", help=DELIMITER_HELP),
    header: bool = typer.Option(
        True, "--header/--no-header", help="Treat the first row as column names."
    ),
) -> None:
    """Show the header and first rows of a CSV file."""
    debug: bool = bool(ctx.obj.get("debug", False))
    try:
        from omniconvert.codecs.csv_codec import preview
        from omniconvert.schemas import CsvDecodeConfig, build_config

        config = build_config(CsvDecodeConfig, {"delimiter": delimiter, "has_header": header})
        result = preview(file.read_text(encoding="utf-8-sig"), config, rows=rows)
    except ConversionError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    typer.echo(" | ".join(result.headers))
    for row in result.rows:
        typer.echo(" | ".join(row))
    typer.echo(f"{result.total_rows} rows × {result.total_columns} columns")


@app.command("formats")
def formats_cmd() -> None:
    """List available converters and the inputs they accept."""
    from omniconvert.converters import converter_for
    from omniconvert.types import CONVERTER_KINDS

    for kind in CONVERTER_KINDS:
        accepted = converter_for(kind).accepted_types
        typer.echo(f"{kind}: {', '.join(accepted) if accepted else 'any file'}")


if __name__ == "__main__":
    app()
