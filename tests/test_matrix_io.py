import os
import sys

import numpy as np
import pandas as pd
import pytest

# Add the src directory to Python path to import local sparse_arith
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_arith import (SparseMatrix, FormatError, parse_matrix, format_matrix, load_matrix, save_matrix,
                          matrix_to_frame, matrix_from_frame)
from test_utils import make_matrix, random_matrix, SCENARIO_A


def test_parse_scenario():
    m = parse_matrix(SCENARIO_A)
    assert m.shape == (2, 2)
    assert dict(m.items()) == {(0, 0): 1, (1, 1): 2}


def test_parse_spaced_entries_and_negative_values():
    m = parse_matrix("rows=3\ncols=4\n(0, 3, 7)\n(2, 0, -5)\n")
    assert m.shape == (3, 4)
    assert m[0, 3] == 7
    assert m[2, 0] == -5


def test_parse_skips_blank_lines():
    text = "\n\n  rows=2  \n\n\tcols=3\n\n(0, 1, 5)\n   \n(1, 2, 6)\n\n"
    m = parse_matrix(text)
    assert m.shape == (2, 3)
    assert dict(m.items()) == {(0, 1): 5, (1, 2): 6}


def test_parse_windows_line_endings():
    m = parse_matrix("rows=1\r\ncols=1\r\n(0, 0, 1)\r\n")
    assert m.shape == (1, 1)
    assert m[0, 0] == 1


def test_parse_zero_triple_is_not_stored():
    m = parse_matrix("rows=2\ncols=2\n(0, 0, 0)\n(1, 1, 3)")
    assert (0, 0) not in m
    assert len(m) == 1


def test_parse_later_triple_overwrites_earlier():
    m = parse_matrix("rows=2\ncols=2\n(0, 0, 4)\n(0, 0, 0)\n(1, 0, 1)\n(1, 0, 2)")
    assert dict(m.items()) == {(1, 0): 2}


def test_parse_header_only():
    m = parse_matrix("rows=5\ncols=6")
    assert m.shape == (5, 6)
    assert len(m) == 0


def test_parse_out_of_bounds_entries_are_kept():
    m = parse_matrix("rows=1\ncols=1\n(4, 4, 2)")
    assert m[4, 4] == 2


@pytest.mark.parametrize("line", [
    "(1, 2)",
    "1, 2, 3",
    "(1, 2, 3",
    "(a, 2, 3)",
    "(1, 2, 3.5)",
    "(-1, 2, 3)",
    "(1, -2, 3)",
    "(1, 2, +3)",
    "(1; 2; 3)",
    "( 1, 2, 3)",
    "(1, 2, 3) extra",
    "rows=2",
])
def test_parse_malformed_entry(line):
    with pytest.raises(FormatError) as exc_info:
        parse_matrix(f"rows=2\ncols=3\n(0, 0, 1)\n\n{line}")
    assert exc_info.value.line == line.strip()
    assert exc_info.value.line_number == 5


@pytest.mark.parametrize("text", [
    "",
    "   \n\n",
    "rows=2",
    "cols=2\nrows=2\n(0, 0, 1)",
    "rows=2\n(0, 0, 1)\n(1, 1, 1)",
    "rows=two\ncols=2",
    "rows=2\ncols=-1",
    "height=2\nwidth=2",
])
def test_parse_malformed_header(text):
    with pytest.raises(FormatError):
        parse_matrix(text)


def test_format_matrix():
    m = make_matrix(3, 4, {(2, 0): -5, (0, 3): 7})
    assert format_matrix(m) == "rows=3\ncols=4\n(2, 0, -5)\n(0, 3, 7)"
    assert m.to_text() == format_matrix(m)


def test_format_empty_matrix():
    assert format_matrix(SparseMatrix()) == "rows=0\ncols=0"


def test_round_trip():
    rng = np.random.default_rng(7)
    for _ in range(5):
        m = random_matrix(rng, 8, 5, density=0.3)
        m.set_element(20, 30, -1)
        parsed = SparseMatrix.from_text(m.to_text())
        assert parsed == m
        assert parsed.items() == m.items()


def test_load_and_save(tmp_path):
    m = make_matrix(3, 3, {(0, 0): 1, (2, 1): -4})
    fp = os.path.join(tmp_path, 'matrix.txt')
    save_matrix(m, fp)
    with open(fp, 'r') as f:
        assert f.read() == "rows=3\ncols=3\n(0, 0, 1)\n(2, 1, -4)"
    assert load_matrix(fp) == m


def test_load_sample_with_blank_lines():
    fp = os.path.join(os.path.dirname(__file__), '..', 'examples', 'data', 'matrix_c.txt')
    m = load_matrix(fp)
    assert m.shape == (3, 4)
    assert dict(m.items()) == {(0, 3): 7, (2, 0): -5, (2, 2): 9}


def test_frame_round_trip():
    m = make_matrix(4, 4, {(0, 1): 2, (3, 3): -8})
    df = matrix_to_frame(m)
    assert list(df.columns) == ['row', 'col', 'value']
    assert df['value'].tolist() == [2, -8]
    assert matrix_from_frame(df, 4, 4) == m


def test_empty_frame():
    df = matrix_to_frame(SparseMatrix(2, 2))
    assert len(df) == 0
    assert matrix_from_frame(df, 2, 2) == SparseMatrix(2, 2)


def test_frame_drops_zero_values():
    df = pd.DataFrame({'row': [0, 1], 'col': [0, 1], 'value': [0, 5]})
    m = matrix_from_frame(df, 2, 2)
    assert dict(m.items()) == {(1, 1): 5}


def test_frame_missing_column():
    df = pd.DataFrame({'row': [0], 'value': [1]})
    with pytest.raises(FormatError):
        matrix_from_frame(df, 1, 1)


def test_frame_non_integer_values():
    df = pd.DataFrame({'row': [0], 'col': [0], 'value': [1.5]})
    with pytest.raises(FormatError):
        matrix_from_frame(df, 1, 1)


@pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x1d", "\x1e", "\x85", " "])
def test_parse_only_splits_on_newlines(separator):
    with pytest.raises(FormatError) as exc_info:
        parse_matrix(f"rows=2\ncols=2\n(0, 0, 1){separator}(1, 1, 2)")
    assert exc_info.value.line_number == 3


def test_parse_large_values():
    big = 2 ** 64 + 1
    m = parse_matrix(f"rows=1\ncols=1\n(0, 0, {big})\n(3, 0, -{big})")
    assert m[0, 0] == big
    assert m[3, 0] == -big
    assert parse_matrix(m.to_text()) == m


def test_frame_round_trip_large_values():
    big = 2 ** 63
    m = make_matrix(2, 2, {(0, 0): big, (1, 1): 3})
    df = matrix_to_frame(m)
    assert df['value'].dtype == object
    assert df['row'].dtype == np.int64
    assert df['value'].tolist() == [big, 3]
    assert matrix_from_frame(df, 2, 2) == m
