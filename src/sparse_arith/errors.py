
class SparseMatrixConfigError(ValueError):
    """Base class for sparse matrix configuration errors."""
    pass

class SparseMatrixRuntimeError(ValueError):
    """Base class for sparse matrix runtime errors."""
    pass



class InvalidOperationError(SparseMatrixConfigError):
    """Raised when an unknown matrix operation is requested."""

    def __init__(self, operation: str, valid_operations: list):
        self.operation = operation
        self.valid_operations = valid_operations
        message = f"Invalid operation '{operation}'. Must be one of: {valid_operations}"
        super().__init__(message)


class FormatError(SparseMatrixRuntimeError):
    """Raised when serialized matrix text does not follow the rows/cols/(r, c, v) layout."""

    def __init__(self, line: str, line_number: int = None, reason: str = "malformed line"):
        self.line = line
        self.line_number = line_number
        self.reason = reason
        if line_number is None:
            message = f"Input has wrong format: {reason}"
        else:
            message = f"Input has wrong format at line {line_number}: {reason}: {line!r}"
        super().__init__(message)


class DimensionError(SparseMatrixRuntimeError):
    """Raised when the column count of the left operand does not match the row count of the right operand."""

    def __init__(self, left_shape: tuple[int, int], right_shape: tuple[int, int]):
        self.left_shape = left_shape
        self.right_shape = right_shape

        message = (
            f"Matrix multiplication not possible: columns of A must match rows of B\n"
            f"  A: {left_shape[0]} x {left_shape[1]}\n"
            f"  B: {right_shape[0]} x {right_shape[1]}"
        )
        super().__init__(message)
