import os

import pytest

from mtxtsv.convert import (
    EmptyInputError,
    convert_to_tsv,
    count_header_lines,
    header_line_count,
    tsv_lines,
)


def _write(tmp_path, text, name="in.mtx"):
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return path


def _native(text):
    return text.replace("\n", os.linesep).encode("utf-8")


@pytest.mark.parametrize("comments", [0, 1, 2, 7])
def test_header_is_comments_plus_dimensions_line(tmp_path, comments):
    text = "%c\n" * comments + "4 4 2\n1 1 1\n2 2 2\n"
    assert count_header_lines(_write(tmp_path, text)) == comments + 1


def test_header_lines_example(tmp_path):
    path = _write(tmp_path, "%comment\n%comment2\n3 3 5\n1 1 1.0\n")
    assert count_header_lines(path) == 3


def test_header_lines_without_comments(tmp_path):
    assert count_header_lines(_write(tmp_path, "3 3 1\n1 2 3\n")) == 1


def test_header_lines_crlf(tmp_path):
    assert count_header_lines(_write(tmp_path, "%a\r\n%b\r\n2 2 0\r\n")) == 3


def test_header_lines_all_comments_counts_one_extra(tmp_path):
    # no dimensions line: the +1 is still added
    assert count_header_lines(_write(tmp_path, "%a\n%b\n%c\n")) == 4


def test_header_lines_empty_file_raises(tmp_path):
    with pytest.raises(EmptyInputError):
        count_header_lines(_write(tmp_path, ""))


def test_header_lines_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        count_header_lines(tmp_path / "nope.mtx")


def test_header_count_stops_at_first_data_line():
    pulled = []

    def lines():
        for line in ["%a", "3 3 1", "1 1 1", "2 2 2"]:
            pulled.append(line)
            yield line

    assert header_line_count(lines()) == 2
    assert pulled == ["%a", "3 3 1"]


def test_header_count_ignores_later_comments():
    assert header_line_count(["%a", "1 1 1", "%b", "%c"]) == 2


def test_convert_drops_comments_and_tabs_fields(tmp_path):
    src = _write(tmp_path, "%c\n3 3 1\n1  2   3.5\n")
    dst = tmp_path / "out.tsv"

    assert convert_to_tsv(src, dst) == 2
    assert dst.read_bytes() == _native("3\t3\t1\n1\t2\t3.5\n")


def test_convert_keeps_dimensions_line(tmp_path):
    src = _write(tmp_path, "3 3 1\n1 2 3\n")
    dst = tmp_path / "out.tsv"

    convert_to_tsv(src, dst)
    assert dst.read_bytes() == _native("3\t3\t1\n1\t2\t3\n")


def test_convert_drops_comments_anywhere(tmp_path):
    src = _write(tmp_path, "%a\n2 2 2\n%mid\n1 1 1\n2 2 2\n%tail\n")
    dst = tmp_path / "out.tsv"

    assert convert_to_tsv(src, dst) == 3
    assert dst.read_bytes() == _native("2\t2\t2\n1\t1\t1\n2\t2\t2\n")


def test_convert_crlf_input(tmp_path):
    src = _write(tmp_path, "%a\r\n2 2 1\r\n1\t 2 \t 0.5\r\n")
    dst = tmp_path / "out.tsv"

    convert_to_tsv(src, dst)
    assert dst.read_bytes() == _native("2\t2\t1\n1\t2\t0.5\n")


def test_convert_overwrites_output(tmp_path):
    src = _write(tmp_path, "1 1 1\n")
    dst = tmp_path / "out.tsv"
    dst.write_text("stale\nstale\nstale\n")

    convert_to_tsv(src, dst)
    assert dst.read_bytes() == _native("1\t1\t1\n")


def test_convert_missing_input_creates_no_output(tmp_path):
    dst = tmp_path / "out.tsv"
    with pytest.raises(FileNotFoundError):
        convert_to_tsv(tmp_path / "nope.mtx", dst)
    assert not dst.exists()


def test_convert_unwritable_output(tmp_path):
    src = _write(tmp_path, "1 1 1\n")
    with pytest.raises(OSError):
        convert_to_tsv(src, tmp_path / "no-such-dir" / "out.tsv")


def test_tsv_lines_order_and_whitespace():
    lines = ["%h", "  1 2", "3\t\t4  ", "%x", "5"]
    # leading and trailing runs become a tab too
    assert list(tsv_lines(lines)) == ["\t1\t2", "3\t4\t", "5"]


def test_blank_and_whitespace_lines_are_kept():
    assert list(tsv_lines(["2 2 1", "", "   ", "1 1 1"])) == ["2\t2\t1", "", "\t", "1\t1\t1"]


def test_convert_blank_lines(tmp_path):
    src = _write(tmp_path, "%a\n2 2 1\n\n \t \n1 1 1\n")
    dst = tmp_path / "out.tsv"

    assert convert_to_tsv(src, dst) == 4
    assert dst.read_bytes() == _native("2\t2\t1\n\n\t\n1\t1\t1\n")


def test_header_lines_latin1(tmp_path):
    path = tmp_path / "latin1.mtx"
    path.write_bytes(b"%caf\xe9\n2 2 1\n1 1 \xe9\n")
    assert count_header_lines(path) == 2


def test_convert_latin1_bytes_pass_through(tmp_path):
    src = tmp_path / "latin1.mtx"
    src.write_bytes(b"%caf\xe9\n2 2 1\n1 1 \xe9\n")
    dst = tmp_path / "out.tsv"

    assert convert_to_tsv(src, dst) == 2
    assert dst.read_bytes() == b"2\t2\t1\n1\t1\t\xe9\n".replace(b"\n", os.linesep.encode())
