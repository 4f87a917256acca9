"""Markdown to HTML rendering as a fixed-order text-rewrite pipeline.

Every rule is a substitution over the whole document and later rules see the
output of earlier ones, so the order below is part of the output contract.
Known limitations that follow from this design:

- only the first contiguous run of list items is wrapped in ``<ul>``/``<ol>``;
- emphasis markers inside code spans are rewritten before code is recognized;
- column counts of table rows are not checked.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from omniconvert.schemas import MarkdownConfig

type _Replacement = str | Callable[[re.Match[str]], str]
type _Rule = tuple[re.Pattern[str], _Replacement]

# Ordered items carry a private marker until the list-wrapping pass runs.
_ORDERED_MARK = "\x00"

_HEADER_RULES: tuple[_Rule, ...] = (
    (re.compile(r"^### (.*)$", re.M), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.M), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.M), r"<h1>\1</h1>"),
)
_BOLD: _Rule = (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>")
_ITALIC: _Rule = (re.compile(r"\*(.+?)\*"), r"<em>\1</em>")
_STRIKETHROUGH: _Rule = (re.compile(r"~~(.+?)~~"), r"<del>\1</del>")
_LINK: _Rule = (
    re.compile(r"(?<!!)\[([^\]]+)\]\(([^)\s]+)\)"),
    r'<a href="\2">\1</a>',
)
_IMAGE: _Rule = (
    re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)"),
    r'<img src="\2" alt="\1">',
)
_LIST_ITEM_RULES: tuple[_Rule, ...] = (
    (re.compile(r"^[*+-] (.*)$", re.M), r"<li>\1</li>"),
    (re.compile(r"^\d+\. (.*)$", re.M), f"<li{_ORDERED_MARK}>\\1</li>"),
)
_LIST_RUN = re.compile(rf"(?:^<li{_ORDERED_MARK}?>.*</li>(?:\n|$))+", re.M)
_TASK_ITEM = re.compile(r"<li>\[([ xX])\] (.*?)</li>")
_HORIZONTAL_RULE: _Rule = (re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$", re.M), "<hr>")
_BLOCKQUOTE: _Rule = (re.compile(r"^> ?(.*)$", re.M), r"<blockquote>\1</blockquote>")
_PARAGRAPH_BREAK: _Rule = (re.compile(r"\n{2,}"), "</p><p>")
_LINE_BREAK: _Rule = (re.compile(r"\n"), "<br>")
_EMPTY_PARAGRAPH: _Rule = (re.compile(r"<p>\s*</p>"), "")


def _fenced_code(match: re.Match[str]) -> str:
    language, body = match.group(1), match.group(2)
    css = f' class="language-{language}"' if language else ""
    return f"<pre><code{css}>{body}</code></pre>"


_FENCED_CODE: _Rule = (re.compile(r"```(\w*)\n(.*?)```", re.S), _fenced_code)
_INLINE_CODE: _Rule = (re.compile(r"`([^`\n]+)`"), r"<code>\1</code>")


def _apply(text: str, rule: _Rule, count: int = 0) -> str:
    pattern, replacement = rule
    return pattern.sub(replacement, text, count=count)


def _wrap_first_list(text: str) -> str:
    """Wrap the first contiguous run of ``<li>`` lines in ``<ul>``/``<ol>``."""

    def wrap(match: re.Match[str]) -> str:
        run = match.group(0)
        trailing = "\n" if run.endswith("\n") else ""
        tag = "ol" if run.startswith(f"<li{_ORDERED_MARK}>") else "ul"
        items = run.rstrip("\n").replace("\n", "")
        return f"<{tag}>{items}</{tag}>{trailing}"

    wrapped = _LIST_RUN.sub(wrap, text, count=1)
    return wrapped.replace(_ORDERED_MARK, "")


def _task_item(match: re.Match[str]) -> str:
    checked = " checked" if match.group(1) in {"x", "X"} else ""
    return (
        f'<li class="task-list-item"><input type="checkbox"{checked} disabled> '
        f"{match.group(2)}</li>"
    )


def _table_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def _render_table(header: list[str], rows: list[list[str]]) -> str:
    head = "".join(f"<th>{cell}</th>" for cell in header)
    body = "".join(
        "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in rows
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"


def render_tables(text: str) -> str:
    """Replace pipe-delimited line blocks with single-line HTML tables.

    The first pipe-bearing line opens a table and supplies the header cells,
    later pipe lines become body rows unless they contain ``---`` (alignment
    row) and the first line without a pipe closes the table.
    """
    output: list[str] = []
    header: list[str] | None = None
    rows: list[list[str]] = []
    for line in text.split("\n"):
        if "|" in line:
            if header is None:
                header = _table_cells(line)
                rows = []
            elif "---" not in line:
                rows.append(_table_cells(line))
            continue
        if header is not None:
            output.append(_render_table(header, rows))
            header = None
        output.append(line)
    if header is not None:
        output.append(_render_table(header, rows))
    return "\n".join(output)


def render(markdown: str, config: MarkdownConfig | None = None) -> str:
    """Render Markdown text to an HTML fragment.

    Parameters
    ----------
    markdown : str
        Markdown source. Line endings are normalized to ``\\n``.
    config : MarkdownConfig, optional
        Toggles for tables, code, strikethrough and task lists.

    Returns
    -------
    str
        HTML wrapped in a single paragraph with empty paragraphs removed.
    """
    config = config or MarkdownConfig()
    html = markdown.replace("\r\n", "\n").replace("\r", "\n").strip("\n")

    for rule in _HEADER_RULES:
        html = _apply(html, rule)
    html = _apply(html, _BOLD)
    html = _apply(html, _ITALIC)
    if config.enable_strikethrough:
        html = _apply(html, _STRIKETHROUGH)
    if config.enable_code_blocks:
        html = _apply(html, _FENCED_CODE)
        html = _apply(html, _INLINE_CODE)
    html = _apply(html, _LINK)
    html = _apply(html, _IMAGE)
    for rule in _LIST_ITEM_RULES:
        html = _apply(html, rule)
    html = _wrap_first_list(html)
    if config.enable_task_lists:
        html = _TASK_ITEM.sub(_task_item, html)
    html = _apply(html, _HORIZONTAL_RULE)
    html = _apply(html, _BLOCKQUOTE)
    if config.enable_tables:
        html = render_tables(html)
    html = _apply(html, _PARAGRAPH_BREAK)
    html = _apply(html, _LINE_BREAK)
    html = f"<p>{html}</p>"
    return _apply(html, _EMPTY_PARAGRAPH)
