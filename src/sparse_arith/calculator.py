import os
import sys
import time
from typing import Optional, TextIO

from .config import OperationConfig
from .constants import OPERATIONS
from .errors import InvalidOperationError
from .matrix_io import parse_matrix, format_matrix, save_matrix
from .sparse_matrix import SparseMatrix



class SparseMatrixCalculator:
    """
    Runs one arithmetic operation over two serialized sparse matrices.

    The calculator owns the glue around SparseMatrix: parsing both inputs,
    dispatching on the configured operation and writing the serialized result.
    """

    def __init__(self, config: Optional[OperationConfig] = None, log_file: Optional[TextIO] = None):
        """
        Initialize the SparseMatrixCalculator

        Args:
            config: OperationConfig object defining the operation and where the result goes
            log_file: stream progress messages are printed to. If None, sys.stdout at the time of printing.
        """
        self.config = config if config is not None else OperationConfig()
        self.config.validate()
        self.log_file = log_file

        self.matrix_a = None
        self.matrix_b = None
        self.result = None

    def _stream(self) -> TextIO:
        return self.log_file if self.log_file is not None else sys.stdout

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message, file=self._stream())

    def _apply(self, matrix_a: SparseMatrix, matrix_b: SparseMatrix) -> SparseMatrix:
        if self.config.operation == 'add':
            return matrix_a.add(matrix_b)
        elif self.config.operation == 'subtract':
            return matrix_a.subtract(matrix_b)
        elif self.config.operation == 'multiply':
            return matrix_a.multiply(matrix_b)
        raise InvalidOperationError(self.config.operation, OPERATIONS)

    def evaluate(self, text_a: str, text_b: str) -> SparseMatrix:
        """
        Parse both matrices and apply the configured operation
        text_a: str
            serialized left operand
        text_b: str
            serialized right operand

        On failure the calculator holds no matrices, so nothing from an earlier call can be exported.
        """
        self.matrix_a = None
        self.matrix_b = None
        self.result = None

        self._log(f"=== Computing sparse matrix {self.config.operation} ===")

        st = time.time()
        matrix_a = parse_matrix(text_a)
        matrix_b = parse_matrix(text_b)
        self._log(f"Matrix A: {matrix_a.rows} x {matrix_a.cols}")
        self._log(f"Matrix B: {matrix_b.rows} x {matrix_b.cols}")
        self._log(f"  took: {time.time() - st} seconds")

        st = time.time()
        self._log(f"Applying {self.config.operation}")
        result = self._apply(matrix_a, matrix_b)
        self._log(f"  took: {time.time() - st} seconds")
        self._log(f"Result: {result.rows} x {result.cols}, {len(result)} non-zero elements")

        self.matrix_a, self.matrix_b, self.result = matrix_a, matrix_b, result

        if self.config.print_result:
            print(result.render(), file=self._stream())

        return self.result

    def evaluate_files(self, fp_a: str, fp_b: str) -> SparseMatrix:
        """Read both operands from disk and evaluate them."""
        with open(fp_a, 'r', encoding='utf-8') as f:
            text_a = f.read()
        with open(fp_b, 'r', encoding='utf-8') as f:
            text_b = f.read()
        return self.evaluate(text_a, text_b)

    def get_result_text(self) -> str:
        """
        Get the serialized result of the last evaluation
        """
        if self.result is None:
            raise RuntimeError("No result available, call evaluate first")
        return format_matrix(self.result)

    def export_to_file(self, output_path: Optional[str] = None):
        if self.result is None:
            print("Warning: Result matrix is not available", file=self._stream())
            return
        output_path = output_path if output_path is not None else self.config.output_path
        if output_path is None:
            print("Warning: No output path given", file=self._stream())
            return

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        save_matrix(self.result, output_path)
        self._log(f"Result saved to {output_path}")


def perform_operation(operation: str, text_a: str, text_b: str) -> str:
    """
    Apply an operation to two serialized matrices and return the serialized result.
    Nothing is printed.

    Args:
        operation: one of 'add', 'subtract', 'multiply'
        text_a: serialized left operand
        text_b: serialized right operand

    Raises:
        InvalidOperationError: for an unknown operation name.
        FormatError: if either input is malformed.
        DimensionError: for a multiply whose operands are not conformable.
    """
    calculator = SparseMatrixCalculator(OperationConfig(operation=operation, verbose=False))
    calculator.evaluate(text_a, text_b)
    return calculator.get_result_text()
