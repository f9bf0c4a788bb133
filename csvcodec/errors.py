"""Errors raised by the codec.

Malformed CSV content is never an error: any text tokenizes into some table.
Only configuration mistakes and file I/O failures raise.
"""

from __future__ import annotations

from typing import Optional


class CsvCodecError(Exception):
    """Base error for this package."""


class DelimiterError(CsvCodecError, ValueError):
    """Raised when the field/record delimiter pair is unusable."""


class FilenameNotSetError(CsvCodecError):
    """Raised when a file operation has neither an explicit nor a stored filename."""


class FileOpenError(CsvCodecError):
    """Raised when the source file cannot be opened or read."""

    def __init__(self, filename: str, reason: Optional[str] = None):
        self.filename = filename
        msg = f"could not open {filename!r} for reading"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class FileWriteError(CsvCodecError):
    """Raised when the destination file cannot be opened or written."""

    def __init__(self, filename: str, reason: Optional[str] = None):
        self.filename = filename
        msg = f"could not write {filename!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
