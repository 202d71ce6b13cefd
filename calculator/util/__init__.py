import math
import sys

# Largest magnitude below which every integer is exactly representable
max_exact_integer = 2 ** 53

clear_sequence = '\x1b[2J\x1b[1;1H'


def format_result(value):
    '''
    Formats a result for display

    Whole numbers are printed without a decimal point
    '''
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value.is_integer() and abs(value) <= max_exact_integer:
        return str(int(value))
    return repr(value)


def format_error(error):
    return 'Error: {}'.format(error)


def clear_screen(stream=None):
    stream = stream or sys.stdout
    stream.write(clear_sequence)
    stream.flush()
