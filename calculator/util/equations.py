'''
Tokenizing and evaluation of infix arithmetic expressions

Expressions are evaluated in a single Shunting Yard pass: operators wait on
an operator stack until precedence allows them to be applied to the values
on an operand stack.
'''

import enum
import logging
import math
import operator
import re
from collections import namedtuple

logger = logging.getLogger(__name__)

LEFT = 'left'
RIGHT = 'right'

NEGATE = '~'
PERCENT = '%'


class SyntaxKind (enum.Enum):
    INVALID_NUMBER = 'Invalid number'
    UNEXPECTED_CHARACTER = 'Invalid character'


class EvalKind (enum.Enum):
    UNMATCHED_PARENTHESIS = 'Mismatched parentheses'
    DIVISION_BY_ZERO = 'Division by zero'
    INSUFFICIENT_OPERANDS = 'Not enough operands'
    MALFORMED_EXPRESSION = 'Invalid expression'


class EquationError (Exception):
    def __init__(self, kind, detail=None):
        self.kind = kind
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self):
        if self.detail is None:
            return self.kind.value
        return '{}: {}'.format(self.kind.value, self.detail)


class EquationSyntaxError (EquationError):
    '''
    The expression text could not be split into tokens
    '''
    pass


class EvalError (EquationError):
    '''
    The tokens do not form an expression that can be evaluated
    '''
    pass


Token = namedtuple('Token', ['type', 'value', 'position'])

OperatorSpec = namedtuple('OperatorSpec', ['precedence', 'associativity', 'arity', 'function'])


def divide(a, b):
    if b == 0:
        raise EvalError(EvalKind.DIVISION_BY_ZERO)
    return a / b


def _odd(n):
    return n.is_integer() and n % 2 == 1


def power(a, b):
    '''
    Raises a to the power b with IEEE-754 pow semantics

    Results that math.pow refuses to produce come back as nan or inf
    '''
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and _odd(b):
            return -math.inf
        return math.inf
    except ValueError:
        if a == 0:
            # zero to a negative power
            if _odd(b):
                return math.copysign(math.inf, a)
            return math.inf
        return math.nan


operations = {
    '+': OperatorSpec(1, LEFT, 2, operator.add),
    '-': OperatorSpec(1, LEFT, 2, operator.sub),
    '*': OperatorSpec(2, LEFT, 2, operator.mul),
    '/': OperatorSpec(2, LEFT, 2, divide),
    '^': OperatorSpec(3, RIGHT, 2, power),
    NEGATE: OperatorSpec(4, RIGHT, 1, operator.neg),
    PERCENT: OperatorSpec(5, LEFT, 1, lambda a: a / 100),
}

_scanner = re.compile(r'''
    (?P<WHITESPACE>\s+)
    |(?P<NUMBER>[0-9.]+)
    |(?P<OPERATOR>[-+*/^%])
    |(?P<PAREN_OPEN>\()
    |(?P<PAREN_CLOSE>\))
''', re.VERBOSE).match


def _parse_number(text):
    if text.count('.') > 1:
        raise EquationSyntaxError(SyntaxKind.INVALID_NUMBER, text)
    try:
        return float(text)
    except ValueError:
        raise EquationSyntaxError(SyntaxKind.INVALID_NUMBER, text) from None


def tokenize(expression):
    '''
    Lazily splits an expression into tokens

    A '-' that starts the expression or follows an operator or an opening
    parenthesis is yielded as the unary negation operator '~'
    '''
    previous = None
    position = 0
    while position < len(expression):
        match = _scanner(expression, position)
        if match is None:
            raise EquationSyntaxError(
                SyntaxKind.UNEXPECTED_CHARACTER,
                "'{}'".format(expression[position]))
        type, text = match.lastgroup, match.group()
        start, position = position, match.end()

        if type == 'WHITESPACE':
            continue
        elif type == 'NUMBER':
            token = Token(type, _parse_number(text), start)
        elif type == 'OPERATOR' and text == '-' and (
                previous is None
                or previous.type == 'PAREN_OPEN'
                or (previous.type == 'OPERATOR' and previous.value != PERCENT)):
            token = Token(type, NEGATE, start)
        else:
            token = Token(type, text, start)

        yield token
        previous = token


def _apply(symbol, operands):
    spec = operations[symbol]
    if len(operands) < spec.arity:
        raise EvalError(EvalKind.INSUFFICIENT_OPERANDS, "'{}'".format('-' if symbol == NEGATE else symbol))
    args = operands[-spec.arity:]
    del operands[-spec.arity:]
    operands.append(spec.function(*args))


def _binds_before(top, symbol):
    '''
    Whether the stacked operator top has to be applied before symbol is pushed
    '''
    if top.type != 'OPERATOR':
        return False
    pending, incoming = operations[top.value], operations[symbol]
    return (pending.precedence > incoming.precedence
            or (pending.precedence == incoming.precedence and incoming.associativity == LEFT))


def evaluate(tokens):
    '''
    Evaluates a sequence of tokens as produced by tokenize

    Returns the value as a float
    '''
    operands = []
    stack = []

    # True once the tokens read so far end in a complete value
    after_value = False
    for token in tokens:
        if token.type == 'NUMBER':
            operands.append(token.value)
            after_value = True
        elif token.type == 'PAREN_OPEN':
            stack.append(token)
            after_value = False
        elif token.type == 'PAREN_CLOSE':
            while stack and stack[-1].type != 'PAREN_OPEN':
                _apply(stack.pop().value, operands)
            if not stack:
                raise EvalError(EvalKind.UNMATCHED_PARENTHESIS, "')' at position {}".format(token.position))
            stack.pop()
            after_value = True
        elif token.value == PERCENT:
            if not after_value:
                raise EvalError(EvalKind.INSUFFICIENT_OPERANDS, "'%'")
            _apply(PERCENT, operands)
        elif token.value == NEGATE:
            stack.append(token)
            after_value = False
        elif token.value in operations:
            while stack and _binds_before(stack[-1], token.value):
                _apply(stack.pop().value, operands)
            stack.append(token)
            after_value = False
        else:
            raise EvalError(EvalKind.MALFORMED_EXPRESSION, 'unknown token {!r}'.format(token.value))

    while stack:
        token = stack.pop()
        if token.type == 'PAREN_OPEN':
            raise EvalError(EvalKind.UNMATCHED_PARENTHESIS, "'(' at position {}".format(token.position))
        _apply(token.value, operands)

    if len(operands) != 1:
        raise EvalError(EvalKind.MALFORMED_EXPRESSION)

    return operands[0]


def evaluate_expression(expression):
    '''
    Solves an infix expression

    Returns None for blank input, otherwise the value of the expression
    Raises EquationSyntaxError or EvalError for invalid input
    '''
    if not expression.strip():
        return None
    value = evaluate(list(tokenize(expression)))
    logger.debug('%s = %r', expression.strip(), value)
    return value
