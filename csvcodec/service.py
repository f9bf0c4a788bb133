"""
Glue between the HTTP layer and the Parser.

Responsibilities:
- decode uploaded bytes to text (the only place bytes become characters)
- parse / encode / status with a per-request Parser
- shape results into the response envelopes in models.py
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Dict

from charset_normalizer import from_bytes

from .models import Table
from .parser import Parser

logger = logging.getLogger(__name__)


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_upload(raw: bytes) -> tuple[str, str]:
    """
    Decode uploaded bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is dropped rather than becoming part of the first field.
    - If decode fails, fall back to UTF-8, then to UTF-8 with replacement
      characters.

    Returns (text, encoding actually used).
    """
    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else "utf-8"

    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used), decode_used
    except (UnicodeDecodeError, LookupError):
        logger.warning("decode with %s failed, falling back to utf-8", decode_used)

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace"), "utf-8"


def parse_csv_bytes(raw: bytes, field_delimiter: str, record_delimiter: str) -> Dict[str, Any]:
    """
    Raises:
        DelimiterError
    """
    parser = Parser(field_delimiter, record_delimiter)
    text, encoding = decode_upload(raw)
    table = parser.parse(text)
    status = parser.get_status(table)
    logger.info("parsed upload: %d records, encoding=%s", len(table), encoding)
    return {"table": table, "status": status, "encoding": encoding}


def encode_table_text(table: Table, field_delimiter: str, record_delimiter: str) -> Dict[str, Any]:
    """
    Raises:
        DelimiterError
    """
    content = Parser(field_delimiter, record_delimiter).encode(table)
    return {
        "content": content,
        "sha256": _sha256_hex(content.encode("utf-8")),
    }
