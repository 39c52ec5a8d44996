"""
PDF Service — single-page, single-font PDF written by hand.

Layout of every document:
  1 0 obj  Helvetica font (resource /F1)
  2 0 obj  content stream (title at 20pt, lines at 12pt)
  3 0 obj  page, US Letter
  4 0 obj  pages tree
  5 0 obj  catalog
followed by the xref table, trailer and startxref.

There is no pagination: lines that do not fit run off the page.
"""

from __future__ import annotations

import logging
from typing import Sequence

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.4\n"
PAGE_MEDIA_BOX = "[0 0 612 792]"  # US Letter, points
TITLE_FONT_SIZE = 20
BODY_FONT_SIZE = 12
TEXT_ORIGIN = (72, 770)
FIRST_LINE_GAP = 30
LINE_GAP = 18


def escape_pdf_text(text: str) -> str:
    """Escape a PDF literal string: only \\, ( and ) need it."""
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def _encode(text: str) -> bytes:
    return text.encode("utf-8")


class PdfWriter:
    """
    Accumulates numbered objects and remembers where each one starts.
    Offsets are byte positions from the start of the file, header included.
    """

    def __init__(self) -> None:
        self._chunks: list[bytes] = [PDF_HEADER]
        self._position = len(PDF_HEADER)
        self._offsets: list[int] = []

    @property
    def object_count(self) -> int:
        return len(self._offsets)

    @property
    def offsets(self) -> list[int]:
        return list(self._offsets)

    def add_object(self, body: str | bytes) -> int:
        """Append `N 0 obj ... endobj` and return its object number."""
        object_id = self.object_count + 1
        if isinstance(body, str):
            body = _encode(body)
        chunk = _encode(f"{object_id} 0 obj\n") + body + b"\nendobj\n"

        self._offsets.append(self._position)
        self._chunks.append(chunk)
        self._position += len(chunk)
        return object_id

    def add_stream(self, data: str | bytes) -> int:
        if isinstance(data, str):
            data = _encode(data)
        body = _encode(f"<< /Length {len(data)} >>\nstream\n") + data + b"\nendstream"
        return self.add_object(body)

    def finish(self, root_id: int) -> bytes:
        """Write xref, trailer and startxref; return the whole file."""
        xref_offset = self._position
        size = self.object_count + 1  # + free entry 0

        entries = "".join(f"{offset:010d} 00000 n \n" for offset in self._offsets)
        xref = f"xref\n0 {size}\n0000000000 65535 f \n{entries}"
        trailer = (
            f"trailer\n<< /Size {size} /Root {root_id} 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF"
        )
        return b"".join(self._chunks) + _encode(xref + "\n" + trailer)


def build_content_stream(title: str, lines: Sequence[str]) -> str:
    ops = [
        "BT",
        f"/F1 {TITLE_FONT_SIZE} Tf",
        f"{TEXT_ORIGIN[0]} {TEXT_ORIGIN[1]} Td",
        f"({escape_pdf_text(title)}) Tj",
        f"/F1 {BODY_FONT_SIZE} Tf",
    ]
    gap = FIRST_LINE_GAP
    for line in lines:
        ops.append(f"0 -{gap} Td")
        ops.append(f"({escape_pdf_text(line)}) Tj")
        gap = LINE_GAP
    ops.append("ET")
    return "\n".join(ops)


def create_document(title: str, lines: Sequence[str]) -> bytes:
    """Render a title and body lines as a one-page PDF."""
    writer = PdfWriter()

    font_id = writer.add_object("<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")
    content_id = writer.add_stream(build_content_stream(title, lines))
    # Pages tree is always the object right after the page
    pages_id = content_id + 2
    page_id = writer.add_object(
        f"<< /Type /Page /Parent {pages_id} 0 R /MediaBox {PAGE_MEDIA_BOX} "
        f"/Contents {content_id} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
    )
    writer.add_object(f"<< /Type /Pages /Kids [{page_id} 0 R] /Count 1 >>")
    catalog_id = writer.add_object(f"<< /Type /Catalog /Pages {pages_id} 0 R >>")

    document = writer.finish(root_id=catalog_id)
    logger.debug(f"Built PDF '{title}' with {len(lines)} lines, {len(document)} bytes")
    return document
