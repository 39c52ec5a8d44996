"""
Content digests for exported proposal PDFs. The hex digest is returned as
ExportedDocument.sha256 and sent as the ETag of the PDF download.
"""

from __future__ import annotations

import hashlib


def sha256_hash(content: str | bytes) -> str:
    """Hex SHA-256 of a PDF body (str input is hashed as UTF-8)."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()
