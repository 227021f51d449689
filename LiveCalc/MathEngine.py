# MathEngine.py
"""""
Core calculation engine for the live calculator.

Pipeline
--------
1) Tokenizer: converts a raw, possibly half-typed input string into a flat list of tokens.
2) Normalizer: rewrites unary minus as '0 - operand'.
3) Shunting-yard: reorders the infix tokens into postfix (RPN) order.
4) RPN evaluator: computes the numeric value with a plain operand stack.
5) Formatter: renders the float as a short display string.

No stage raises across its boundary. Every stage that can fail returns an Outcome,
which either holds a value or a MathError describing what went wrong.
"""""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

from . import error as E
from .OperatorTable import lookup, isOp

DIGITS = "0123456789"
DECIMAL_POINT = "."

# Display string for every failed evaluation
ERROR_TEXT = "Error"

# Default rounding used by the formatter to hide binary float artifacts
DECIMAL_PLACES = 10

# A '-' directly after one of these is a sign, not a subtraction
UNARY_MINUS_PRECEDERS = ("(", "+", "-", "×", "÷", "^", "√")


# -----------------------------
# Result type
# -----------------------------

class Outcome:
    """Either a successful value or a MathError, never both."""

    __slots__ = ("value", "error")

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def failure(cls, error):
        return cls(error=error)

    @property
    def ok(self):
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f"Outcome.success({self.value!r})"
        return f"Outcome.failure({self.error!r})"


# -----------------------------
# Token types
# -----------------------------

class Token:
    """Base token: compares equal to another token of the same type and text."""

    __slots__ = ("text",)

    def __init__(self, text):
        self.text = text

    def __eq__(self, other):
        return type(self) is type(other) and self.text == other.text

    def __hash__(self):
        return hash((type(self).__name__, self.text))

    def __repr__(self):
        return f"{type(self).__name__}({self.text!r})"


class NumberToken(Token):
    """Decimal literal, kept as typed. Malformed literals like '1.2.' fail later."""

    def is_valid(self):
        try:
            float(self.text)
        except ValueError:
            return False
        return True

    def number(self):
        return float(self.text)


class OperatorToken(Token):

    @property
    def descriptor(self):
        return lookup(self.text)


class LeftParen(Token):
    def __init__(self, text="("):
        super().__init__(text)


class RightParen(Token):
    def __init__(self, text=")"):
        super().__init__(text)


class InvalidToken(Token):
    """A character outside the recognized set. Guarantees the conversion fails."""


# -----------------------------
# Tokenizer
# -----------------------------

def tokenize(expression):
    """Convert the raw input string into a token list in one left-to-right pass.

    Notes:
    - A maximal run of digits and '.' becomes one NumberToken; dot count is not checked here.
    - Unknown characters become InvalidToken instead of being dropped.
    """
    tokens = []
    b = 0

    while b < len(expression):
        current_char = expression[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1
            continue

        # --- Numbers: digits and decimal separator ---
        if current_char in DIGITS or current_char == DECIMAL_POINT:
            end = b + 1
            while end < len(expression) and (expression[end] in DIGITS or expression[end] == DECIMAL_POINT):
                end += 1
            tokens.append(NumberToken(expression[b:end]))
            b = end
            continue

        # --- Operators and parentheses ---
        if isOp(current_char):
            tokens.append(OperatorToken(current_char))
        elif current_char == "(":
            tokens.append(LeftParen())
        elif current_char == ")":
            tokens.append(RightParen())
        else:
            tokens.append(InvalidToken(current_char))

        b += 1

    return tokens


# -----------------------------
# Unary minus
# -----------------------------

def normalize_unary_minus(tokens):
    """Rewrite every sign '-' as the pair '0', '-'.

    A '-' is a sign when it opens the expression or directly follows '(' or an
    operator other than postfix '%'. Only the immediately preceding raw token is inspected.
    """
    normalized = []
    previous = None

    for token in tokens:
        is_minus = isinstance(token, OperatorToken) and token.text == "-"
        if is_minus and (previous is None or
                         (isinstance(previous, (LeftParen, OperatorToken)) and previous.text in UNARY_MINUS_PRECEDERS)):
            normalized.append(NumberToken("0"))
            normalized.append(OperatorToken("-"))
        else:
            normalized.append(token)
        previous = token

    return normalized


# -----------------------------
# Shunting-yard
# -----------------------------

def _should_pop(current, top):
    if current.is_left_associative:
        return current.precedence <= top.precedence
    return current.precedence < top.precedence


def to_rpn(tokens):
    """Convert normalized infix tokens to postfix order.

    Returns Outcome.success(list_of_tokens), or a failure on unknown tokens and
    unbalanced parentheses. Postfix '%' and prefix '√' go through the same
    precedence loop as the binary operators.
    """
    output = []
    stack = []

    for token in tokens:
        if isinstance(token, NumberToken):
            if not token.is_valid():
                return Outcome.failure(E.LexicalError(f"Invalid number: {token.text}", code="1001"))
            output.append(token)

        elif isinstance(token, OperatorToken):
            current = token.descriptor
            while stack and isinstance(stack[-1], OperatorToken) and _should_pop(current, stack[-1].descriptor):
                output.append(stack.pop())
            stack.append(token)

        elif isinstance(token, LeftParen):
            stack.append(token)

        elif isinstance(token, RightParen):
            while stack and not isinstance(stack[-1], LeftParen):
                output.append(stack.pop())
            if not stack:
                return Outcome.failure(E.StructuralError("Missing opening parenthesis '('", code="2000"))
            stack.pop()  # discard '('

        else:
            return Outcome.failure(E.LexicalError(f"Unknown character: {token.text}", code="1000"))

    # Drain the stack; any parenthesis left over is unbalanced
    while stack:
        top = stack.pop()
        if isinstance(top, (LeftParen, RightParen)):
            return Outcome.failure(E.StructuralError("Missing closing parenthesis ')'", code="2001"))
        output.append(top)

    return Outcome.success(output)


# -----------------------------
# RPN evaluation
# -----------------------------

def _apply(token, operands):
    descriptor = token.descriptor
    try:
        value = descriptor.apply(*operands)
    except ZeroDivisionError:
        return Outcome.failure(E.CalculationError("Division by zero", code="4000"))
    except OverflowError:
        return Outcome.failure(E.CalculationError(f"Overflow in '{token.text}'", code="4001"))
    except ValueError:
        # math.sqrt(-1), math.pow(-8, 1/3), math.pow(0, -1)
        return Outcome.failure(E.CalculationError(f"Math domain error in '{token.text}'", code="4002"))

    if not math.isfinite(value):
        if token.text == "÷" and operands[-1] == 0:
            return Outcome.failure(E.CalculationError("Division by zero", code="4000"))
        return Outcome.failure(E.CalculationError(f"Non-finite result in '{token.text}'", code="4001"))
    return Outcome.success(value)


def evaluate_rpn(rpn):
    """Evaluate a postfix token list. Returns Outcome.success(float) or a failure.

    Binary operators pop the right operand first, then the left one.
    The result is only valid when exactly one value is left on the stack.
    """
    stack = []

    for token in rpn:
        if isinstance(token, NumberToken):
            try:
                stack.append(token.number())
            except ValueError:
                return Outcome.failure(E.LexicalError(f"Invalid number: {token.text}", code="1001"))
            continue

        if not isinstance(token, OperatorToken) or token.descriptor is None:
            return Outcome.failure(E.LexicalError(f"Unknown token: {token.text}", code="1000"))

        if token.descriptor.is_unary:
            if not stack:
                return Outcome.failure(E.StackUnderflowError(f"Missing operand for: {token.text}", code="3000"))
            operands = (stack.pop(),)
        else:
            if len(stack) < 2:
                return Outcome.failure(E.StackUnderflowError(f"Missing operand for: {token.text}", code="3000"))
            right = stack.pop()
            left = stack.pop()
            operands = (left, right)

        applied = _apply(token, operands)
        if not applied.ok:
            return applied
        stack.append(applied.value)

    if len(stack) != 1:
        return Outcome.failure(E.StackUnderflowError("Incomplete expression.", code="3001"))
    return Outcome.success(stack[0])


# -----------------------------
# Result formatting
# -----------------------------

def format_number(value, decimal_places=DECIMAL_PLACES):
    """Render a float for display: round, then strip trailing zeros and a bare '.'.

    Non-finite input maps to "Error". Negative zero is shown as "0".
    """
    if value is None or not math.isfinite(value):
        return ERROR_TEXT

    decimal_places = max(0, int(decimal_places))

    # Decimal(float) is the exact binary value, so half-up rounding matches fixed-point output.
    # A temporary precision boost keeps quantize() from failing on huge magnitudes.
    with localcontext() as ctx:
        ctx.prec = 400 + decimal_places
        rounded = Decimal(value).quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)
        rendered = format(rounded, "f")

    if DECIMAL_POINT in rendered:
        rendered = rendered.rstrip("0").rstrip(DECIMAL_POINT)
    if rendered == "-0":
        rendered = "0"
    return rendered


# -----------------------------
# Public entry points
# -----------------------------

def explain(expression, debug=False):
    """Run tokenizer → normalizer → shunting-yard → evaluator and return the Outcome.

    The failure, if any, has its ``equation`` set to the input string.
    """
    tokens = normalize_unary_minus(tokenize(expression))
    if debug == True:
        print("Tokens:", tokens)

    conversion = to_rpn(tokens)
    if not conversion.ok:
        conversion.error.equation = expression
        return conversion

    if debug == True:
        print("RPN:", " ".join(token.text for token in conversion.value))

    result = evaluate_rpn(conversion.value)
    if not result.ok:
        result.error.equation = expression
        if debug == True:
            print("Failed:", E.describe(result.error))
    return result


def render(outcome):
    """Display form of an Outcome: the formatted number, or "Error"."""
    if not outcome.ok:
        return ERROR_TEXT
    return format_number(outcome.value)


def evaluate(expression):
    """Main API: evaluate an expression string to its display form.

    Returns "" for empty input, the formatted number on success, "Error" otherwise.
    Pure: no settings are read, rounding is always DECIMAL_PLACES.
    """
    if not expression:
        return ""
    return render(explain(expression))


def test_main():
    """Simple REPL-like runner for manual testing of the engine."""
    print("Enter the problem (empty line quits): ")
    while True:
        try:
            problem = input("> ")
        except EOFError:
            break
        if not problem:
            break
        print(evaluate(problem))


if __name__ == "__main__":
    #   python -m LiveCalc.MathEngine
    test_main()
