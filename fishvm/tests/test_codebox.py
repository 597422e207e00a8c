import pytest

from fishvm.codebox import CodeBox, split_rows
from fishvm.errors import EmptyProgram, OutOfBounds


def test_rows_are_padded_to_longest_line():
    box = CodeBox.from_source("ab\nc")
    assert box.width == 2
    assert box.height == 2
    assert box.row_text(1) == "c "


def test_carriage_returns_are_stripped():
    box = CodeBox.from_source("ab\r\ncd\r\n")
    assert box.lines() == ["ab", "cd"]


def test_single_trailing_newline_is_not_a_row():
    assert CodeBox.from_source("ab\n").height == 1
    assert CodeBox.from_source("ab\n\n").height == 2


def test_bytes_source_accepted():
    box = CodeBox.from_source(b"1n;")
    assert box.get(2, 0) == ord(";")


def test_non_ascii_source_is_stored_as_utf8_bytes():
    box = CodeBox.from_source("é;")
    assert box.width == 3
    assert box.get(0, 0) == 0xC3


@pytest.mark.parametrize("source", ["", "\n", "   ", " \n \r\n", b""])
def test_empty_or_blank_program_rejected(source):
    with pytest.raises(EmptyProgram):
        CodeBox.from_source(source)


def test_get_and_put():
    box = CodeBox.from_source("abc\ndef")
    assert box.get(2, 1) == ord("f")
    box.put(2, 1, ord(";"))
    assert box.row_text(1) == "de;"


def test_put_truncates_to_a_byte():
    box = CodeBox.from_source("ab")
    box.put(0, 0, 300)
    box.put(1, 0, -1)
    assert box.get(0, 0) == 300 & 0xFF
    assert box.get(1, 0) == 0xFF


@pytest.mark.parametrize("x,y", [(-1, 0), (3, 0), (0, 2), (0, -1)])
def test_out_of_range_cells_fault(x, y):
    box = CodeBox.from_source("abc\ndef")
    with pytest.raises(OutOfBounds):
        box.get(x, y)
    with pytest.raises(OutOfBounds):
        box.put(x, y, 0)


def test_split_rows_keeps_inner_blank_lines():
    assert split_rows("a\n\nb") == [b"a", b"", b"b"]
