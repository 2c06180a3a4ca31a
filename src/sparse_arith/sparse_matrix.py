import numpy as np
from numpy.typing import NDArray
from dataclasses import dataclass, field

from .errors import DimensionError

_INT64_MIN = int(np.iinfo(np.int64).min)
_INT64_MAX = int(np.iinfo(np.int64).max)


def int_array_dtype(values) -> type:
    """np.int64 if every value fits in it, otherwise object so arbitrarily large ints survive."""
    if all(_INT64_MIN <= v <= _INT64_MAX for v in values):
        return np.int64
    return object



@dataclass
class SparseMatrix:
    """Integer matrix that only stores its nonzero elements, keyed by (row, col).

    rows and cols are the declared dimensions. They are descriptive: elements may be
    read or written outside of them, only multiply checks them.
    """
    rows: int = 0
    cols: int = 0
    data_store: dict[tuple[int, int], int] = field(default_factory=dict)

    def __post_init__(self):
        # the store is never shared with the caller and never holds zeros
        self.data_store = {k: v for k, v in self.data_store.items() if v != 0}

    @classmethod
    def from_text(cls, text: str) -> 'SparseMatrix':
        """Build a matrix from its serialized text form (see matrix_io.parse_matrix)."""
        from .matrix_io import parse_matrix
        return parse_matrix(text)

    def to_text(self) -> str:
        """Serialize the matrix (see matrix_io.format_matrix)."""
        from .matrix_io import format_matrix
        return format_matrix(self)

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def get_element(self, row: int, col: int) -> int:
        """Get the value at position (row, col), 0 if nothing is stored there."""
        return self[row, col]

    def set_element(self, row: int, col: int, value: int) -> None:
        """Set the value at position (row, col). Setting 0 removes the element."""
        self[row, col] = value

    def add_at(self, row: int, col: int, value: int) -> None:
        """Add a value to the element at position (row, col)."""
        self[row, col] = self[row, col] + value

    def __getitem__(self, key) -> int:
        """Returns the value at position (row, col).

        Args:
            key: Either a tuple (row, col) or comma-separated indices row, col

        Returns:
            The value at position (row, col), or 0 if not found.
        """
        if isinstance(key, tuple) and len(key) == 2:
            row, col = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        return self.data_store.get((row, col), 0)

    def __setitem__(self, key, value: int) -> None:
        """Sets the value at position (row, col).

        Args:
            key: Either a tuple (row, col) or comma-separated indices row, col
            value: The value to set.
        """
        if isinstance(key, tuple) and len(key) == 2:
            row, col = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")

        if value == 0:
            # Remove zero values to maintain sparsity
            self.data_store.pop((row, col), None)
        else:
            self.data_store[(row, col)] = value

    def __delitem__(self, key) -> None:
        if isinstance(key, tuple) and len(key) == 2:
            row, col = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        self.data_store.pop((row, col), None)

    def __contains__(self, key) -> bool:
        """True if a nonzero value is stored at position (row, col)."""
        if isinstance(key, tuple) and len(key) == 2:
            return key in self.data_store
        return False

    def __len__(self) -> int:
        """Returns the number of non-zero elements."""
        return len(self.data_store)

    def __iter__(self):
        """Allows iteration over the position tuples with non-zero values."""
        return iter(self.data_store.keys())

    def keys(self):
        return self.data_store.keys()

    def values(self):
        return self.data_store.values()

    def items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns a list of ((row, col), value) pairs in insertion order."""
        return list(self.data_store.items())

    def add(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Element-wise sum, returning a new matrix.

        The declared dimensions do not have to match; the result takes the larger
        row count and the larger column count of the two operands.

        Args:
            other: Right hand operand.

        Returns:
            New SparseMatrix holding self + other.
        """
        result = SparseMatrix(max(self.rows, other.rows), max(self.cols, other.cols))

        # positions stored in self, combined with whatever other holds there
        for (row, col), v in self.data_store.items():
            result[row, col] = v + other[row, col]

        # positions only stored in other
        for (row, col), v in other.data_store.items():
            if (row, col) not in self.data_store:
                result[row, col] = v

        return result

    def subtract(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Element-wise difference, returning a new matrix.

        Same dimension policy as add.

        Args:
            other: Right hand operand.

        Returns:
            New SparseMatrix holding self - other.
        """
        result = SparseMatrix(max(self.rows, other.rows), max(self.cols, other.cols))

        for (row, col), v in self.data_store.items():
            result[row, col] = v - other[row, col]

        for (row, col), v in other.data_store.items():
            if (row, col) not in self.data_store:
                result[row, col] = -v

        return result

    def multiply(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Matrix product, returning a new matrix.

        Args:
            other: Right hand operand, other.rows must equal self.cols.

        Returns:
            New SparseMatrix of shape (self.rows, other.cols).

        Raises:
            DimensionError: if self.cols != other.rows.
        """
        if self.cols != other.rows:
            raise DimensionError(self.shape, other.shape)

        result = SparseMatrix(self.rows, other.cols)
        for (row_a, col_a), value_a in self.data_store.items():
            for col_b in range(other.cols):
                value_b = other[col_a, col_b]
                if value_b != 0:
                    result.add_at(row_a, col_b, value_a * value_b)

        return result

    def __add__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        return self.add(other)

    def __sub__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        return self.subtract(other)

    def __matmul__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        return self.multiply(other)

    def to_dense(self) -> NDArray:
        """Dense (rows, cols) array. Elements outside the declared dimensions are dropped.

        The dtype is int64, or object when a value does not fit in int64.
        """
        dense = np.zeros((self.rows, self.cols), dtype=int_array_dtype(self.data_store.values()))
        for (row, col), v in self.data_store.items():
            if 0 <= row < self.rows and 0 <= col < self.cols:
                dense[row, col] = v
        return dense

    def render(self) -> str:
        """Dense grid of the declared dimensions, one space separated line per row."""
        lines = []
        for row in range(self.rows):
            lines.append(" ".join(str(self[row, col]) for col in range(self.cols)).rstrip())
        return "\n".join(lines)

    def print_dense(self) -> None:
        print(self.render())

    def __repr__(self) -> str:
        """String representation of the matrix."""
        if not self.data_store:
            return f"SparseMatrix({self.rows}x{self.cols}, {{}})"
        items_str = ", ".join(f"{k}: {v}" for k, v in sorted(self.data_store.items()))
        return f"SparseMatrix({self.rows}x{self.cols}, {{{items_str}}})"

    def clear(self) -> None:
        """Removes all elements from the matrix. Dimensions are kept."""
        self.data_store.clear()

    def copy(self) -> 'SparseMatrix':
        """Returns a copy of the matrix."""
        return SparseMatrix(self.rows, self.cols, self.data_store.copy())
