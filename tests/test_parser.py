import io

import pytest

from csvcodec import (
    DelimiterError,
    FileOpenError,
    FileWriteError,
    FilenameNotSetError,
    Parser,
)


def test_defaults():
    p = Parser()
    assert p.field_delimiter == ","
    assert p.record_delimiter == "\r\n"
    assert p.filename is None

@pytest.mark.parametrize("field, record", [
    (",", ","),
    ("", "\n"),
    (",", ""),
    ("\n", "\r\n"),
    (";;", ";"),
    ("ab", "bc"),
    ("bc", "ab"),
    ("<|", "|>"),
    ("\r\n", "\n\r"),
])
def test_rejects_bad_delimiters(field, record):
    with pytest.raises(DelimiterError):
        Parser(field, record)

def test_set_delimiters_keeps_old_pair_on_error():
    p = Parser(";", "\n")
    with pytest.raises(DelimiterError):
        p.set_delimiters("\n", "\n")
    assert (p.field_delimiter, p.record_delimiter) == (";", "\n")

    p.set_delimiters("\t", "\r\n")
    assert p.parse("a\tb\r\n") == [["a", "b"]]

def test_read_record_from_stream():
    p = Parser(",", "\n")
    stream = io.StringIO("a,b\n\n", newline="")
    assert p.read_record(stream) == ["a", "b"]
    assert p.read_record(stream) == [""]
    assert p.read_record(stream) is None

def test_parse_multi_character_delimiters():
    p = Parser("||", "##")
    assert p.parse("a||b##c||||d##") == [["a", "b"], ["c", "", "d"]]

def test_encode_pins_trailing_delimiter():
    p = Parser(",", "\n")
    assert p.encode([["a", "b"], ["c", "d"]]) == "a,b\nc,d\n"

@pytest.mark.parametrize("table", [
    [],
    [["a", "b"], ["c", "d"]],
    [["1", ""], ["", "2", "3"]],
    [[""]],
    [[" x ", "y"]],
])
def test_round_trip(table):
    p = Parser()
    assert p.parse(p.encode(table)) == table

def test_zero_field_record_reads_back_as_one_empty_field():
    p = Parser()
    assert p.parse(p.encode([[]])) == [[""]]

def test_file_round_trip(tmp_path):
    path = str(tmp_path / "out.csv")
    table = [["id", "value"], ["1", "3.5"], ["2", ""]]

    p = Parser()
    p.create_csv_file(table, path)

    with open(path, "r", newline="") as fh:
        assert fh.read() == "id,value\r\n1,3.5\r\n2,\r\n"

    assert p.read_entire_file(path) == table

def test_stored_filename(tmp_path):
    path = str(tmp_path / "stored.csv")
    p = Parser(";", "\n")
    p.set_filename(path)
    assert p.filename == path

    p.create_csv_file([["a", "b"]])
    assert p.read_entire_file() == [["a", "b"]]

def test_filename_from_constructor(tmp_path):
    path = tmp_path / "ctor.csv"
    path.write_text("x,y\r\n", newline="")
    assert Parser(filename=str(path)).read_entire_file() == [["x", "y"]]

def test_explicit_filename_overrides_stored(tmp_path):
    good = tmp_path / "good.csv"
    good.write_text("1\r\n", newline="")

    p = Parser()
    p.set_filename(str(tmp_path / "missing.csv"))
    assert p.read_entire_file(str(good)) == [["1"]]

def test_missing_filename():
    p = Parser()
    with pytest.raises(FilenameNotSetError):
        p.read_entire_file()
    with pytest.raises(FilenameNotSetError):
        p.create_csv_file([["a"]])

def test_read_nonexistent_file(tmp_path):
    path = str(tmp_path / "nope.csv")
    with pytest.raises(FileOpenError) as exc_info:
        Parser().read_entire_file(path)
    assert exc_info.value.filename == path

def test_read_undecodable_file(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_bytes(b"a,\xff\xfe\r\n")
    with pytest.raises(FileOpenError):
        Parser(encoding="utf-8").read_entire_file(str(path))

def test_write_into_missing_directory(tmp_path):
    path = str(tmp_path / "no" / "such" / "dir.csv")
    with pytest.raises(FileWriteError) as exc_info:
        Parser().create_csv_file([["a"]], path)
    assert exc_info.value.filename == path

def test_write_unencodable_field(tmp_path):
    path = str(tmp_path / "ascii.csv")
    with pytest.raises(FileWriteError):
        Parser(encoding="ascii").create_csv_file([["café"]], path)

def test_get_status_on_parsed_file(tmp_path):
    path = tmp_path / "nums.csv"
    path.write_text("1,2.5\r\n3,4\r\n", newline="")

    p = Parser()
    status = p.get_status(p.read_entire_file(str(path)))
    assert status.is_wellformed is True
    assert status.num_records == 2
    assert status.num_fields == 2
    assert status.all_fields_numeral is True

def test_round_trip_multi_character_delimiters_without_overlap():
    p = Parser("ab", "cd")
    table = [["a", "c"], ["b", "d"], ["", "dc"]]
    assert p.parse(p.encode(table)) == table

def test_failed_write_leaves_existing_file_untouched(tmp_path):
    path = tmp_path / "keep.csv"
    path.write_bytes(b"old,data\r\n")

    with pytest.raises(FileWriteError):
        Parser(encoding="ascii").create_csv_file([["ok"], ["café"]], str(path))
    assert path.read_bytes() == b"old,data\r\n"

def test_read_skips_utf8_bom(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes(b"\xef\xbb\xbfa,b\r\nc,d\r\n")
    assert Parser().read_entire_file(str(path)) == [["a", "b"], ["c", "d"]]

def test_write_does_not_add_bom(tmp_path):
    path = tmp_path / "plain.csv"
    Parser().create_csv_file([["a", "b"]], str(path))
    assert path.read_bytes() == b"a,b\r\n"

def test_read_record_needs_untranslated_newlines(tmp_path):
    path = tmp_path / "crlf.csv"
    path.write_bytes(b"a,b\r\nc,d\r\n")
    p = Parser()

    with open(path, "r", newline="") as fh:
        assert p.read_record(fh) == ["a", "b"]
        assert p.read_record(fh) == ["c", "d"]
        assert p.read_record(fh) is None

    # default newline handling turns CRLF into "\n", so no "\r\n" is ever seen
    with open(path, "r") as fh:
        assert p.read_record(fh) == ["a", "b\nc", "d\n"]
