# InputMachine.py
"""""
Keystroke-level editing of the calculator expression.

Every action is a pure function: it takes an ExpressionState and returns a new one.
The Calculator class is the single owner that threads the state through the actions
and is what the UI talks to.

Rules enforced at entry time (so most broken expressions never reach the engine):
- binary operators cannot open an expression and replace a trailing binary operator
- '√' and '(' after a finished operand get an implicit '×'
- '%' only follows a digit or ')'
- ')' only closes an open '(' after a finished operand
- one '.' per number; a '.' without a number in front becomes '0.'
"""""

from enum import Enum

from . import MathEngine as MathEngine
from .MathEngine import (DIGITS, DECIMAL_POINT, UNARY_MINUS_PRECEDERS,
                         NumberToken, OperatorToken, LeftParen, RightParen)
from .OperatorTable import Operations, isBinaryOp

# Characters after which the text "looks finished" and may be evaluated
OPERAND_ENDINGS = DIGITS + ")%"

# Keyboard / label aliases understood by Calculator.press()
KEY_ALIASES = {
    "*": "×",
    "/": "÷",
    "Enter": "=",
    "Return": "=",
    "C": "AC",
    "Backspace": "⌫",
    "±": "+/-",
}


class SessionMode(Enum):
    FRESH = "fresh"
    JUST_EVALUATED = "just_evaluated"


class ExpressionState:
    """Raw expression text, the live result shown under it, and the session mode.

    ``outcome`` is the engine Outcome the live result was rendered from (None when
    nothing was evaluated). It is a cache for callers that want the error code and
    does not take part in equality.
    """

    __slots__ = ("text", "live_result", "mode", "outcome")

    def __init__(self, text="", live_result="", mode=SessionMode.FRESH, outcome=None):
        self.text = text
        self.live_result = live_result
        self.mode = mode
        self.outcome = outcome

    @property
    def just_evaluated(self):
        return self.mode is SessionMode.JUST_EVALUATED

    def __eq__(self, other):
        if not isinstance(other, ExpressionState):
            return NotImplemented
        return (self.text, self.live_result, self.mode) == (other.text, other.live_result, other.mode)

    def __repr__(self):
        return f"ExpressionState(text={self.text!r}, live_result={self.live_result!r}, mode={self.mode.name})"


# -----------------------------
# Helpers
# -----------------------------

def ends_with_operand(text):
    return bool(text) and text[-1] in OPERAND_ENDINGS


def live_outcome_for(text, debug=False):
    """Evaluate only when the text ends like a complete sub-expression; None otherwise."""
    if ends_with_operand(text):
        return MathEngine.explain(text, debug=debug)
    return None


def trailing_number(text):
    """Return the number the text ends with ("" if it ends with anything else)."""
    tokens = MathEngine.tokenize(text)
    if tokens and isinstance(tokens[-1], NumberToken) and text.endswith(tokens[-1].text):
        return tokens[-1].text
    return ""


def _edited(text, debug=False):
    outcome = live_outcome_for(text, debug=debug)
    live_result = "" if outcome is None else MathEngine.render(outcome)
    return ExpressionState(text, live_result, SessionMode.FRESH, outcome)


def _unchanged(state):
    # The mode is consumed by every action, even one that changes nothing else
    return ExpressionState(state.text, state.live_result, SessionMode.FRESH, state.outcome)


def _is_sign(tokens, index):
    """True if tokens[index] is a '-' used as a sign rather than a subtraction."""
    token = tokens[index]
    if not (isinstance(token, OperatorToken) and token.text == "-"):
        return False
    if index == 0:
        return True
    previous = tokens[index - 1]
    return isinstance(previous, (LeftParen, OperatorToken)) and previous.text in UNARY_MINUS_PRECEDERS


# -----------------------------
# Actions
# -----------------------------

def press_digit(state, ch, debug=False):
    if len(ch) != 1 or (ch not in DIGITS and ch != DECIMAL_POINT):
        raise ValueError(f"Not a digit or decimal point: {ch!r}")

    # After '=' a digit starts a new expression
    text = "" if state.just_evaluated else state.text

    if ch == DECIMAL_POINT:
        segment = trailing_number(text)
        if DECIMAL_POINT in segment:
            return _unchanged(state)
        if not segment:
            ch = "0."

    return _edited(text + ch, debug)


def press_operator(state, symbol, debug=False):
    if symbol == "√":
        return press_root(state, debug)
    if symbol == "%":
        return press_percent(state, debug)
    if not isBinaryOp(symbol):
        raise ValueError(f"Unknown operator: {symbol!r}")

    # Binary operators keep the text after '=' and continue from the result
    text = state.text
    if not text:
        return _unchanged(state)

    # '2+' then '-' gives '2-'
    if isBinaryOp(text[-1]):
        return _edited(text[:-1] + symbol, debug)
    return _edited(text + symbol, debug)


def press_root(state, debug=False):
    text = "" if state.just_evaluated else state.text
    if ends_with_operand(text):
        text += "×"
    return _edited(text + "√", debug)


def press_percent(state, debug=False):
    text = state.text
    if not text or text[-1] not in DIGITS + ")":
        return _unchanged(state)
    return _edited(text + "%", debug)


def press_open_paren(state, debug=False):
    text = "" if state.just_evaluated else state.text
    if ends_with_operand(text):
        text += "×"
    return _edited(text + "(", debug)


def press_close_paren(state, debug=False):
    text = state.text
    if text.count("(") > text.count(")") and ends_with_operand(text):
        return _edited(text + ")", debug)
    return _unchanged(state)


def press_equals(state, debug=False):
    """Replace the text with its value, or flag "Error" and keep the text."""
    if not state.text:
        return state

    outcome = MathEngine.explain(state.text, debug=debug)
    if outcome.ok:
        return ExpressionState(MathEngine.render(outcome), "", SessionMode.JUST_EVALUATED, outcome)
    return ExpressionState(state.text, MathEngine.render(outcome), SessionMode.JUST_EVALUATED, outcome)


def press_clear(state, debug=False):
    return ExpressionState()


def press_backspace(state, debug=False):
    if not state.text:
        return _unchanged(state)
    return _edited(state.text[:-1], debug)


def press_toggle_sign(state, debug=False):
    """Negate the trailing number.

    - '…(-5)' becomes '…5'
    - '…-5' where '-' is a sign becomes '…5'
    - '…5' becomes '…(-5)'
    A trailing '%' or any other ')' leaves the text alone.
    """
    tokens = MathEngine.tokenize(state.text)
    if not tokens:
        return _unchanged(state)

    last = tokens[-1]
    if (isinstance(last, RightParen) and len(tokens) >= 4 and isinstance(tokens[-2], NumberToken)
            and isinstance(tokens[-4], LeftParen) and _is_sign(tokens, len(tokens) - 3)):
        tokens[-4:] = [tokens[-2]]

    elif isinstance(last, NumberToken):
        if len(tokens) >= 2 and _is_sign(tokens, len(tokens) - 2):
            del tokens[-2]
        else:
            tokens[-1:] = [LeftParen(), OperatorToken("-"), last, RightParen()]

    else:
        return _unchanged(state)

    return _edited("".join(token.text for token in tokens), debug)


# -----------------------------
# Controller
# -----------------------------

class Calculator:
    """Owns the ExpressionState for one session and applies actions to it.

    ``debug`` turns on the engine's diagnostic prints for every evaluation.
    """

    def __init__(self, debug=False):
        self.state = ExpressionState()
        self.debug = debug

    def _apply(self, action, *args):
        self.state = action(self.state, *args, debug=self.debug)
        return self.state

    def digit(self, ch):
        return self._apply(press_digit, ch)

    def operator(self, symbol):
        return self._apply(press_operator, symbol)

    def open_paren(self):
        return self._apply(press_open_paren)

    def close_paren(self):
        return self._apply(press_close_paren)

    def equals(self):
        return self._apply(press_equals)

    def clear(self):
        return self._apply(press_clear)

    def backspace(self):
        return self._apply(press_backspace)

    def toggle_sign(self):
        return self._apply(press_toggle_sign)

    def current_text(self):
        return self.state.text

    def current_live_result(self):
        return self.state.live_result

    def current_error(self):
        """The MathError behind an "Error" live result, or None."""
        outcome = self.state.outcome
        if outcome is None or outcome.ok:
            return None
        return outcome.error

    def press(self, key):
        """Dispatch a keypad label or keyboard key. Unknown keys are ignored."""
        key = KEY_ALIASES.get(key, key)

        if len(key) == 1 and (key in DIGITS or key == DECIMAL_POINT):
            return self.digit(key)
        elif len(key) == 1 and key in Operations:
            return self.operator(key)
        elif key == "(":
            return self.open_paren()
        elif key == ")":
            return self.close_paren()
        elif key == "=":
            return self.equals()
        elif key == "AC":
            return self.clear()
        elif key == "⌫":
            return self.backspace()
        elif key == "+/-":
            return self.toggle_sign()
        return self.state
