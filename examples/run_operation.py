import os
import sys

# Add the src directory to Python path to import local sparse_arith
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from sparse_arith import SparseMatrixCalculator, OperationConfig



def run_all_operations():
    # Get the directory where this script is located
    script_dir = os.path.dirname(os.path.abspath(__file__))
    fp_a = os.path.join(script_dir, 'data', 'matrix_a.txt')
    fp_b = os.path.join(script_dir, 'data', 'matrix_b.txt')
    output_dir = os.path.join(script_dir, 'results')

    for operation in ['add', 'subtract', 'multiply']:
        config = OperationConfig(operation=operation, print_result=True)
        calculator = SparseMatrixCalculator(config)
        calculator.evaluate_files(fp_a, fp_b)
        calculator.export_to_file(os.path.join(output_dir, f'{operation}_result.txt'))


if __name__ == "__main__":
    run_all_operations()
