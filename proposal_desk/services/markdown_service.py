"""
Markdown Service — restricted Markdown to HTML fragments, plus the
plain-text stripping used for PDF export.

Supported: headings (#, ##, ###), unordered lists (-, *, +), paragraphs,
**bold**, *italic* and `code`. Anything else renders as paragraph text.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_ESCAPE_MAP = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_ESCAPE_RE = re.compile(r"""[&<>"']""")

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_BLANK_RE = re.compile(r"^\s*$")
_HEADING_RE = re.compile(r"^(#{1,3})\s+(.*)$")
_LIST_ITEM_RE = re.compile(r"^[-*+]\s+")
_LIST_MARKER_RE = re.compile(r"^[-*+]\s*")

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"\*(.+?)\*")
_CODE_RE = re.compile(r"`([^`]+?)`")

# Plain-text stripping for PDF export
_CODE_SPAN_RE = re.compile(r"`{1,3}[^`]+`")
_EMPHASIS_CHARS_RE = re.compile(r"[*_~]")
_HEADING_MARK_RE = re.compile(r"#{1,6}\s*")


def escape_html(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPE_MAP[m.group(0)], text)


def format_inline(text: str) -> str:
    """Apply bold, italic and code substitutions to already-escaped text."""
    text = _BOLD_RE.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_RE.sub(r"<em>\1</em>", text)
    return _CODE_RE.sub(r"<code>\1</code>", text)


def _render_list(lines: list[str]) -> str:
    items = "".join(
        f"<li>{format_inline(escape_html(_LIST_MARKER_RE.sub('', line, count=1).strip()))}</li>"
        for line in lines
    )
    return f"<ul>{items}</ul>"


def markdown_to_html(markdown: str) -> str:
    """Render the supported dialect as an HTML fragment (no <html>/<body>)."""
    blocks: list[str] = []
    paragraph: list[str] = []
    list_items: list[str] = []

    def flush_paragraph() -> None:
        if paragraph:
            content = " ".join(paragraph).strip()
            if content:
                blocks.append(f"<p>{format_inline(escape_html(content))}</p>")
            paragraph.clear()

    def flush_list() -> None:
        if list_items:
            blocks.append(_render_list(list_items))
            list_items.clear()

    for line in _LINE_SPLIT_RE.split(markdown or ""):
        if _BLANK_RE.match(line):
            flush_list()
            flush_paragraph()
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            flush_list()
            flush_paragraph()
            level = len(heading.group(1))
            content = format_inline(escape_html(heading.group(2).strip()))
            blocks.append(f"<h{level}>{content}</h{level}>")
            continue

        if _LIST_ITEM_RE.match(line):
            flush_paragraph()
            list_items.append(line)
            continue

        flush_list()
        paragraph.append(line.strip())

    flush_list()
    flush_paragraph()

    logger.debug(f"Rendered {len(blocks)} markdown blocks")
    return "".join(blocks)


def strip_markdown(markdown: str) -> list[str]:
    """
    Reduce Markdown to non-empty plain-text lines for the PDF export.
    Inline-code backticks, emphasis characters and heading marks are dropped.
    """
    text = _CODE_SPAN_RE.sub(lambda m: m.group(0).replace("`", ""), markdown or "")
    text = _EMPHASIS_CHARS_RE.sub("", text)
    text = _HEADING_MARK_RE.sub("", text)
    return [line.strip() for line in _LINE_SPLIT_RE.split(text) if line.strip()]
