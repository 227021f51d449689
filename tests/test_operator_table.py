import math

import pytest

from LiveCalc import OperatorTable as OT
from LiveCalc.OperatorTable import lookup, OPERATORS, LEFT, RIGHT, UNARY, BINARY


class TestDescriptors:

    @pytest.mark.parametrize("symbol, precedence, associativity, arity", [
        ("^", 4, RIGHT, BINARY),
        ("√", 5, RIGHT, UNARY),
        ("%", 5, LEFT, UNARY),
        ("×", 3, LEFT, BINARY),
        ("÷", 3, LEFT, BINARY),
        ("+", 2, LEFT, BINARY),
        ("-", 2, LEFT, BINARY),
    ])
    def test_fixed_entries(self, symbol, precedence, associativity, arity):
        descriptor = lookup(symbol)
        assert descriptor.symbol == symbol
        assert descriptor.precedence == precedence
        assert descriptor.associativity == associativity
        assert descriptor.arity == arity

    def test_unknown_symbol(self):
        assert lookup("*") is None
        assert lookup("(") is None
        assert not OT.isOp("x")

    def test_binary_symbols(self):
        assert sorted(OT.Binary_Operations) == sorted("^×÷+-")
        assert OT.isBinaryOp("^")
        assert not OT.isBinaryOp("%")


class TestApply:

    def test_binary_functions(self):
        assert lookup("^").apply(2, 10) == 1024
        assert lookup("×").apply(3, 4) == 12
        assert lookup("÷").apply(9, 3) == 3
        assert lookup("+").apply(1.5, 2) == 3.5
        assert lookup("-").apply(1, 4) == -3

    def test_unary_functions(self):
        assert lookup("√").apply(16) == 4
        assert lookup("%").apply(50) == 0.5

    def test_divide_by_zero_is_not_finite(self):
        assert math.isnan(lookup("÷").apply(5, 0))
        assert math.isnan(lookup("÷").apply(-5, 0))

    def test_sqrt_of_negative_raises_domain_error(self):
        with pytest.raises(ValueError):
            lookup("√").apply(-1)


class TestImmutability:

    def test_descriptor_cannot_be_changed(self):
        with pytest.raises(AttributeError):
            lookup("+").precedence = 9

    def test_table_cannot_be_changed(self):
        with pytest.raises(TypeError):
            OPERATORS["*"] = lookup("×")
