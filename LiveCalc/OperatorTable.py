# OperatorTable.py
"""""
Fixed operator table for the expression engine.

Every symbol the tokenizer accepts as an operator has exactly one descriptor here.
The table is built once at import time and never mutated afterwards.
"""""

import math
from types import MappingProxyType

LEFT = "L"
RIGHT = "R"

UNARY = 1
BINARY = 2


class OperatorDescriptor:
    """Precedence, associativity, arity and implementation of one operator symbol."""

    __slots__ = ("symbol", "precedence", "associativity", "arity", "func")

    def __init__(self, symbol, precedence, associativity, arity, func):
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "precedence", precedence)
        object.__setattr__(self, "associativity", associativity)
        object.__setattr__(self, "arity", arity)
        object.__setattr__(self, "func", func)

    def __setattr__(self, name, value):
        raise AttributeError("OperatorDescriptor is immutable")

    @property
    def is_unary(self):
        return self.arity == UNARY

    @property
    def is_left_associative(self):
        return self.associativity == LEFT

    def apply(self, a, b=None):
        """Apply the operator. Unary operators ignore ``b``."""
        if self.is_unary:
            return self.func(a)
        return self.func(a, b)

    def __repr__(self):
        return (f"OperatorDescriptor({self.symbol!r}, prec={self.precedence}, "
                f"assoc={self.associativity}, arity={self.arity})")


def divide(a, b):
    # Zero divisor is reported as a non-finite result, never as ±inf
    if b == 0:
        return math.nan
    return a / b


def percent(a):
    return a / 100


OPERATORS = MappingProxyType({
    '^': OperatorDescriptor('^', 4, RIGHT, BINARY, math.pow),
    '√': OperatorDescriptor('√', 5, RIGHT, UNARY, math.sqrt),
    '%': OperatorDescriptor('%', 5, LEFT, UNARY, percent),
    '×': OperatorDescriptor('×', 3, LEFT, BINARY, lambda a, b: a * b),
    '÷': OperatorDescriptor('÷', 3, LEFT, BINARY, divide),
    '+': OperatorDescriptor('+', 2, LEFT, BINARY, lambda a, b: a + b),
    '-': OperatorDescriptor('-', 2, LEFT, BINARY, lambda a, b: a - b),
})

# Kept as strings for quick membership checks on raw text
Operations = "".join(OPERATORS)
Binary_Operations = "".join(s for s, d in OPERATORS.items() if not d.is_unary)


def lookup(symbol):
    """Return the descriptor for ``symbol`` or None if it is not an operator."""
    return OPERATORS.get(symbol)


def isOp(symbol):
    return symbol in OPERATORS


def isBinaryOp(symbol):
    descriptor = OPERATORS.get(symbol)
    return descriptor is not None and not descriptor.is_unary
