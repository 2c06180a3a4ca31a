from typing import Optional, Literal
from dataclasses import dataclass

from .constants import OPERATIONS
from .errors import InvalidOperationError


@dataclass
class OperationConfig:
    """
    Configuration for a single sparse matrix operation.

    This class defines which arithmetic operation is applied to the two
    input matrices and what happens with the result afterwards.
    """

    operation: Literal['add', 'subtract', 'multiply'] = 'add'
    """Arithmetic operation to apply to the two matrices:
    - 'add': element-wise sum, result dimensions are the per-axis maximum
    - 'subtract': element-wise difference, result dimensions are the per-axis maximum
    - 'multiply': matrix product, requires A.cols == B.rows
    """

    output_path: Optional[str] = None
    """File the serialized result is written to by export_to_file. If None, a path must be passed explicitly."""

    print_result: bool = False
    """Whether to print the result as a dense grid after computing it."""

    verbose: bool = True
    """Whether to print progress messages (input dimensions, timings) while computing."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.operation not in OPERATIONS:
            raise InvalidOperationError(self.operation, OPERATIONS)
