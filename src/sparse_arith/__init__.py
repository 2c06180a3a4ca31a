"""
Sparse integer matrices stored as a (row, col) -> value map.

Element-wise addition and subtraction that tolerate mismatched dimensions,
matrix multiplication, and a small text format to load and save matrices.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrix
from .matrix_io import parse_matrix, format_matrix, load_matrix, save_matrix, matrix_to_frame, matrix_from_frame
from .calculator import SparseMatrixCalculator, perform_operation
from .config import OperationConfig
from .errors import (SparseMatrixConfigError, SparseMatrixRuntimeError,
                     InvalidOperationError, FormatError, DimensionError)

__all__ = [
    "SparseMatrix",
    "parse_matrix",
    "format_matrix",
    "load_matrix",
    "save_matrix",
    "matrix_to_frame",
    "matrix_from_frame",
    "SparseMatrixCalculator",
    "perform_operation",
    "OperationConfig",
    "SparseMatrixConfigError",
    "SparseMatrixRuntimeError",
    "InvalidOperationError",
    "FormatError",
    "DimensionError",
]
