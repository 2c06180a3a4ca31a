import argparse
import sys

from .calculator import SparseMatrixCalculator
from .config import OperationConfig
from .constants import OPERATIONS
from .errors import SparseMatrixConfigError, SparseMatrixRuntimeError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="sparse-arith", description="Add, subtract or multiply two sparse matrix files.")
    parser.add_argument("operation", help=f"one of {OPERATIONS}")
    parser.add_argument("matrix_a", help="file holding the left operand")
    parser.add_argument("matrix_b", help="file holding the right operand")
    parser.add_argument("-o", "--output", default=None, help="write the result here instead of printing it")
    parser.add_argument("--print", dest="print_result", action="store_true", help="also print the result as a dense grid")
    args = parser.parse_args(argv)

    try:
        config = OperationConfig(operation=args.operation, output_path=args.output, print_result=args.print_result)
        # the serialized result owns stdout when no output file is given
        log_file = sys.stderr if args.output is None else None
        calculator = SparseMatrixCalculator(config, log_file=log_file)
        calculator.evaluate_files(args.matrix_a, args.matrix_b)
    except (SparseMatrixConfigError, SparseMatrixRuntimeError, OSError) as e:
        print(e, file=sys.stderr)
        return 1

    if args.output is None:
        print(calculator.get_result_text())
    else:
        calculator.export_to_file()
    return 0


if __name__ == "__main__":
    sys.exit(main())
