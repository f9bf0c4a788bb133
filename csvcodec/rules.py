"""
Codec defaults and the numeral grammar.

Delimiters here are only defaults; every Parser carries its own pair.
"""

from __future__ import annotations

import os
import re

DEFAULT_FIELD_DELIMITER = ","
DEFAULT_RECORD_DELIMITER = "\r\n"  # CRLF
DEFAULT_ENCODING = "utf-8"

LOG_LEVEL = os.getenv("CSVCODEC_LOG_LEVEL", "INFO")

# signed decimal, optionally with an exponent, or a 0x hex literal.
# Whole-field match only; ASCII digits only.
NUMERAL_RE = re.compile(
    r"[+-]?[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
    r"|0[xX][0-9a-fA-F]+"
)


def is_numeral(field: str) -> bool:
    return NUMERAL_RE.fullmatch(field) is not None
