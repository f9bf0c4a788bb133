"""Delimiter-configurable CSV codec with structural status checks."""

from .errors import CsvCodecError, DelimiterError, FileOpenError, FileWriteError, FilenameNotSetError
from .models import Record, Status, Table
from .parser import Parser
from .rules import is_numeral
from .status import get_status

__all__ = [
    "CsvCodecError",
    "DelimiterError",
    "FileOpenError",
    "FileWriteError",
    "FilenameNotSetError",
    "Parser",
    "Record",
    "Status",
    "Table",
    "get_status",
    "is_numeral",
]
