"""
Delimiter-aware splitting and joining.

Reading:
- split_record: one chunk of text -> Record
- read_record: pull one record-delimiter-terminated chunk off a text stream
- RecordReader: every record of a stream, read in chunks

Writing:
- encode_record / encode_table: Record/Table -> text
- write_table: the same, straight onto a text stream

No quoting or escaping: a field that contains a delimiter is written as-is
and will split differently when read back.
"""

from __future__ import annotations

from typing import Optional, TextIO

from .models import Record, Table

CHUNK_SIZE = 64 * 1024


def split_record(chunk: str, field_delimiter: str) -> Record:
    """
    Split one record's text on every non-overlapping occurrence of the
    field delimiter, scanning left to right.

    Empty fields are kept (",a," -> ["", "a", ""]) and nothing is trimmed.
    An empty chunk is a record with one empty field.
    """
    return chunk.split(field_delimiter)


def read_record(stream: TextIO, field_delimiter: str, record_delimiter: str) -> Optional[Record]:
    """
    Read the next record from a text stream.

    Consumes characters up to and including the record delimiter, so the
    stream is left positioned at the start of the following record.
    Trailing text without a delimiter still forms a last record.

    Returns None at end-of-stream. An empty line between two delimiters is
    [""], not None.
    """
    width = len(record_delimiter)
    last = record_delimiter[-1]
    chars: list[str] = []

    while True:
        ch = stream.read(1)
        if not ch:
            break
        chars.append(ch)
        if ch == last and len(chars) >= width and "".join(chars[-width:]) == record_delimiter:
            return split_record("".join(chars[:-width]), field_delimiter)

    if not chars:
        return None
    return split_record("".join(chars), field_delimiter)


class RecordReader:
    """
    Iterate the records of a text stream, reading it in chunks.

    Yields the same records as repeated read_record() calls, but reads
    ahead: text past the current record sits in the reader's buffer, so
    the stream position is only meaningful once iteration is finished.
    Use read_record() when the stream is shared with other readers.
    """

    def __init__(self, stream: TextIO, field_delimiter: str, record_delimiter: str, chunk_size: int = CHUNK_SIZE):
        self._stream = stream
        self._field_delimiter = field_delimiter
        self._record_delimiter = record_delimiter
        self._chunk_size = chunk_size
        self._buf = ""
        self._eof = False

    def __iter__(self) -> RecordReader:
        return self

    def __next__(self) -> Record:
        record = self.read()
        if record is None:
            raise StopIteration
        return record

    def read(self) -> Optional[Record]:
        """Next record, or None at end-of-stream."""
        width = len(self._record_delimiter)
        start = 0
        while True:
            idx = self._buf.find(self._record_delimiter, start)
            if idx != -1:
                chunk = self._buf[:idx]
                self._buf = self._buf[idx + width:]
                return split_record(chunk, self._field_delimiter)
            if self._eof:
                break
            # a delimiter may straddle the old buffer and the next chunk
            start = max(0, len(self._buf) - width + 1)
            data = self._stream.read(self._chunk_size)
            if data:
                self._buf += data
            else:
                self._eof = True

        if not self._buf:
            return None
        chunk, self._buf = self._buf, ""
        return split_record(chunk, self._field_delimiter)


def encode_record(record: Record, field_delimiter: str) -> str:
    return field_delimiter.join(record)


def encode_table(table: Table, field_delimiter: str, record_delimiter: str) -> str:
    """
    Every record is terminated by the record delimiter, the last one included,
    so [["a", "b"], ["c", "d"]] with "," / "\\n" encodes to "a,b\\nc,d\\n".
    An empty table encodes to "".
    """
    return "".join(encode_record(r, field_delimiter) + record_delimiter for r in table)


def write_table(stream: TextIO, table: Table, field_delimiter: str, record_delimiter: str) -> int:
    """Write a table record by record. Returns the number of records written."""
    n = 0
    for record in table:
        stream.write(encode_record(record, field_delimiter))
        stream.write(record_delimiter)
        n += 1
    return n
