"""
Parser: one delimiter configuration applied to reading, writing and checking
CSV tables.

Files are always opened with newline="" so the record delimiter reaches the
tokenizer verbatim (CRLF stays CRLF). Each file operation opens, uses and
closes its file within the call.
"""

from __future__ import annotations

import io
import logging
from typing import Optional, TextIO

from .codec import RecordReader, encode_table, read_record
from .errors import DelimiterError, FileOpenError, FileWriteError, FilenameNotSetError
from .models import Record, Status, Table
from .rules import DEFAULT_ENCODING, DEFAULT_FIELD_DELIMITER, DEFAULT_RECORD_DELIMITER
from .status import get_status

logger = logging.getLogger(__name__)


def _ends_where_other_starts(left: str, right: str) -> bool:
    # a proper suffix of left that is also a prefix of right, e.g. "ab"/"bc"
    return any(right.startswith(left[i:]) for i in range(1, len(left)))


def check_delimiters(field_delimiter: str, record_delimiter: str) -> None:
    """
    Raises:
        DelimiterError: if either delimiter is empty, they are equal, one
        contains the other, or the end of one is the start of the other.
    """
    if not field_delimiter:
        raise DelimiterError("field delimiter must not be empty")
    if not record_delimiter:
        raise DelimiterError("record delimiter must not be empty")
    if (
        field_delimiter in record_delimiter
        or record_delimiter in field_delimiter
        or _ends_where_other_starts(field_delimiter, record_delimiter)
        or _ends_where_other_starts(record_delimiter, field_delimiter)
    ):
        raise DelimiterError(
            f"field delimiter {field_delimiter!r} and record delimiter "
            f"{record_delimiter!r} overlap"
        )


class Parser:
    """Decodes and encodes CSV text, and reports on the status of CSV tables."""

    def __init__(
        self,
        field_delimiter: str = DEFAULT_FIELD_DELIMITER,
        record_delimiter: str = DEFAULT_RECORD_DELIMITER,
        filename: Optional[str] = None,
        encoding: str = DEFAULT_ENCODING,
    ):
        check_delimiters(field_delimiter, record_delimiter)
        self._field_delimiter = field_delimiter
        self._record_delimiter = record_delimiter
        self._filename = filename
        self.encoding = encoding

    def __repr__(self) -> str:
        return (
            f"Parser(field_delimiter={self._field_delimiter!r}, "
            f"record_delimiter={self._record_delimiter!r}, filename={self._filename!r})"
        )

    @property
    def field_delimiter(self) -> str:
        return self._field_delimiter

    @property
    def record_delimiter(self) -> str:
        return self._record_delimiter

    @property
    def filename(self) -> Optional[str]:
        return self._filename

    def set_delimiters(self, field_delimiter: str, record_delimiter: str) -> None:
        """Reconfigure both delimiters at once; the old pair is kept on error."""
        check_delimiters(field_delimiter, record_delimiter)
        self._field_delimiter = field_delimiter
        self._record_delimiter = record_delimiter

    def set_filename(self, filename: str) -> None:
        """Store the file used when read_entire_file/create_csv_file get no filename."""
        self._filename = filename

    def _resolve_filename(self, filename: Optional[str]) -> str:
        if filename is not None:
            return filename
        if self._filename is None:
            raise FilenameNotSetError("no filename given and none set with set_filename()")
        return self._filename

    # -- reading ---------------------------------------------------------

    def read_record(self, stream: TextIO) -> Optional[Record]:
        """
        Read one record from an open text stream; None at end-of-stream.

        File streams must be opened with newline="", as read_entire_file()
        does. Default newline translation turns CRLF into "\\n", and with a
        "\\r\\n" record delimiter the whole file then reads as one record.
        """
        return read_record(stream, self._field_delimiter, self._record_delimiter)

    def _read_all(self, stream: TextIO) -> Table:
        return list(RecordReader(stream, self._field_delimiter, self._record_delimiter))

    def _read_encoding(self) -> str:
        # a UTF-8 BOM is not part of the first field
        if self.encoding.lower().replace("-", "_") in ("utf_8", "utf8"):
            return "utf-8-sig"
        return self.encoding

    def parse(self, text: str) -> Table:
        """Tokenize a whole CSV document held in memory."""
        return self._read_all(io.StringIO(text, newline=""))

    def read_entire_file(self, filename: Optional[str] = None) -> Table:
        """
        Read every record of a CSV file into a table.

        Uses the filename set with set_filename() when none is given.
        With a UTF-8 encoding a leading BOM is skipped.

        Raises:
            FilenameNotSetError: no filename to read from.
            FileOpenError: the file cannot be opened or read. No partial
            table is returned.
        """
        path = self._resolve_filename(filename)
        try:
            with open(path, "r", encoding=self._read_encoding(), newline="") as fh:
                table = self._read_all(fh)
        except (OSError, UnicodeError, LookupError) as exc:
            logger.error("failed to read %s: %s", path, exc)
            raise FileOpenError(path, str(exc)) from exc

        logger.info("read %d records from %s", len(table), path)
        return table

    # -- writing ---------------------------------------------------------

    def encode(self, table: Table) -> str:
        """Encode a table to text; every record ends with the record delimiter."""
        return encode_table(table, self._field_delimiter, self._record_delimiter)

    def create_csv_file(self, table: Table, filename: Optional[str] = None) -> None:
        """
        Write a table to a CSV file, replacing any existing content.

        The whole table is encoded before the file is opened, so a field
        the encoding cannot represent leaves an existing file untouched.

        Raises:
            FilenameNotSetError: no filename to write to.
            FileWriteError: the file cannot be opened or written.
        """
        path = self._resolve_filename(filename)
        try:
            data = self.encode(table).encode(self.encoding)
            with open(path, "wb") as fh:
                fh.write(data)
        except (OSError, UnicodeError, LookupError) as exc:
            logger.error("failed to write %s: %s", path, exc)
            raise FileWriteError(path, str(exc)) from exc

        logger.info("wrote %d records to %s", len(table), path)

    # -- status ----------------------------------------------------------

    def get_status(self, table: Table) -> Status:
        status = get_status(table)
        logger.debug("status for %d records: %s", len(table), status)
        return status
