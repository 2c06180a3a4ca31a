import numpy as np
import pandas as pd

from .constants import ROWS_KEY, COLS_KEY, HEADER_PATTERN, ENTRY_PATTERN, TripletColumn
from .errors import FormatError
from .sparse_matrix import SparseMatrix, int_array_dtype


def _parse_header(line: str, line_number: int, key: str) -> int:
    match = HEADER_PATTERN.fullmatch(line)
    if match is None or match.group(1) != key:
        raise FormatError(line, line_number, reason=f"expected '{key}=<integer>'")
    return int(match.group(2))


def parse_matrix(text: str) -> SparseMatrix:
    """
    Parse the serialized text form of a matrix.

    The first two non-blank lines are the 'rows=<n>' and 'cols=<n>' headers, every
    following non-blank line is one '(row, col, value)' triple. Blank lines are
    ignored everywhere and do not count towards the header positions.

    Args:
        text: The serialized matrix.

    Returns:
        A new SparseMatrix. Triples with value 0 are accepted but not stored.

    Raises:
        FormatError: on the first line that does not follow the format, or if a header is missing.
    """
    # (line_number, stripped line) for every non-blank line, line numbers are 1-based in the raw text
    lines = [(i + 1, line.strip()) for i, line in enumerate(text.split("\n")) if line.strip()]

    if len(lines) < 1:
        raise FormatError("", reason=f"missing '{ROWS_KEY}=<integer>' header")
    if len(lines) < 2:
        raise FormatError("", reason=f"missing '{COLS_KEY}=<integer>' header")

    matrix = SparseMatrix()
    matrix.rows = _parse_header(lines[0][1], lines[0][0], ROWS_KEY)
    matrix.cols = _parse_header(lines[1][1], lines[1][0], COLS_KEY)

    for line_number, line in lines[2:]:
        match = ENTRY_PATTERN.fullmatch(line)
        if match is None:
            raise FormatError(line, line_number, reason="expected '(<row>, <col>, <value>)'")
        row, col, value = (int(g) for g in match.groups())
        matrix.set_element(row, col, value)

    return matrix


def format_matrix(matrix: SparseMatrix) -> str:
    """Serialize a matrix: rows/cols headers then one '(row, col, value)' line per stored element."""
    lines = [f"{ROWS_KEY}={matrix.rows}", f"{COLS_KEY}={matrix.cols}"]
    for (row, col), value in matrix.items():
        lines.append(f"({row}, {col}, {value})")
    return "\n".join(lines)


def load_matrix(fp: str) -> SparseMatrix:
    with open(fp, 'r', encoding='utf-8') as f:
        return parse_matrix(f.read())


def save_matrix(matrix: SparseMatrix, fp: str) -> None:
    with open(fp, 'w', encoding='utf-8') as f:
        f.write(format_matrix(matrix))


def matrix_to_frame(matrix: SparseMatrix) -> pd.DataFrame:
    """One row per stored element with columns row, col, value."""
    items = matrix.items()
    columns = {
        TripletColumn.ROW: [k[0] for k, _ in items],
        TripletColumn.COL: [k[1] for k, _ in items],
        TripletColumn.VALUE: [v for _, v in items],
    }
    # values beyond int64 are kept as python ints in an object column
    return pd.DataFrame({name: np.array(vals, dtype=int_array_dtype(vals)) for name, vals in columns.items()})


def _is_integer_column(series: pd.Series) -> bool:
    if pd.api.types.is_integer_dtype(series):
        return True
    # object columns written by matrix_to_frame for values beyond int64
    return series.dtype == object and all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in series)


def matrix_from_frame(df: pd.DataFrame, rows: int, cols: int) -> SparseMatrix:
    """
    Build a matrix from a triplet table.

    Args:
        df: DataFrame with integer columns row, col and value. Later rows overwrite earlier ones.
        rows: declared row count of the result
        cols: declared column count of the result

    Raises:
        FormatError: if a column is missing or holds non-integer data.
    """
    required_cols = [TripletColumn.ROW, TripletColumn.COL, TripletColumn.VALUE]
    for col in required_cols:
        if col not in df.columns:
            raise FormatError(str(list(df.columns)), reason=f"column \"{col}\" not found in triplet table")
        if len(df) > 0 and not _is_integer_column(df[col]):
            raise FormatError(str(df[col].dtype), reason=f"column \"{col}\" must hold integers")

    matrix = SparseMatrix(rows, cols)
    for r, c, v in zip(df[TripletColumn.ROW], df[TripletColumn.COL], df[TripletColumn.VALUE]):
        matrix.set_element(int(r), int(c), int(v))
    return matrix
