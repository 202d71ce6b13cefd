'''Calculator REPL
Type expressions, e.g.: 2 + 3 * (4 - 1) ^ 2
Operators: + - * / ^ % (percent converts number to fraction, e.g. 50% -> 0.5)
Commands: quit, exit, help, clear
'''

import argparse
import logging
import sys
from collections import OrderedDict

from .util import format_result, format_error, clear_screen
from .util.equations import EquationError, evaluate_expression

logger = logging.getLogger(__name__)

default_config = OrderedDict([
    ('prompt', '> '),
    ('banner', True),
])


class Quit (Exception):
    pass


def print_help():
    print(__doc__.rstrip())


def say_goodbye():
    print('Goodbye.')
    raise Quit()


commands = {
    'help': print_help,
    'clear': clear_screen,
    'quit': say_goodbye,
    'exit': say_goodbye,
}


def evaluate_line(line):
    '''
    Evaluates one line of input and returns the text to display

    Returns None when there is nothing to display
    '''
    try:
        value = evaluate_expression(line)
    except EquationError as e:
        logger.debug('Could not evaluate %r: %s', line, e)
        return format_error(e)
    if value is None:
        return None
    return format_result(value)


def handle_line(line):
    '''
    Runs a command or evaluates an expression

    Raises Quit when the session should end
    '''
    line = line.strip()
    if line in commands:
        commands[line]()
        return
    output = evaluate_line(line)
    if output is not None:
        print(output)


def main(config=None):
    '''
    Runs the read-evaluate-print loop until quit, exit or end of input
    '''
    settings = default_config.copy()
    if config:
        settings.update(config)

    if settings['banner']:
        print_help()

    while True:
        try:
            line = input(settings['prompt'])
        except (EOFError, KeyboardInterrupt):
            print()
            line = 'quit'
        try:
            handle_line(line)
        except Quit:
            break


def parse_args(argv=None):
    '''
    Parses the command line

    Options are only read before the expression, so an expression may start
    with '-'
    '''
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = argparse.ArgumentParser(
        prog='calculator',
        description='Interactive arithmetic calculator',
        epilog='Options must come before the expression.')
    parser.add_argument(
        'expression', nargs='*',
        help='evaluate this expression once instead of starting the REPL')
    parser.add_argument(
        '--prompt', default=default_config['prompt'],
        help='REPL prompt (default: %(default)r)')
    parser.add_argument(
        '--quiet', action='store_true',
        help='do not print the help text on start')
    parser.add_argument(
        '--verbose', action='store_true',
        help='log debugging output')

    index = 0
    while index < len(argv):
        word = argv[index]
        if word == '--prompt':
            index += 2
        elif word in ('-h', '--help', '--quiet', '--verbose') or word.startswith('--prompt='):
            index += 1
        else:
            break
    if index < len(argv) and argv[index] != '--':
        argv.insert(index, '--')
    return parser.parse_args(argv)


def configure_logging(args):
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)


def run(args):
    '''
    Evaluates the expression given on the command line, or starts the REPL

    Returns the process exit status
    '''
    if args.expression:
        line = ' '.join(args.expression)
        try:
            value = evaluate_expression(line)
        except EquationError as e:
            print(format_error(e), file=sys.stderr)
            return 1
        if value is not None:
            print(format_result(value))
        return 0

    main(OrderedDict([
        ('prompt', args.prompt),
        ('banner', not args.quiet),
    ]))
    return 0
