import re

ROWS_KEY = "rows"
COLS_KEY = "cols"

HEADER_PATTERN = re.compile(r"(rows|cols)\s*=\s*(\d+)", re.ASCII)
ENTRY_PATTERN = re.compile(r"\((\d+),\s*(\d+),\s*(-?\d+)\)", re.ASCII)

OPERATIONS = ['add', 'subtract', 'multiply']

class TripletColumn:
    ROW = "row"
    COL = "col"
    VALUE = "value"
