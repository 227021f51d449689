"""Keystroke-driven calculator: expression engine, input state machine and desktop UI."""

from .MathEngine import evaluate, explain
from .InputMachine import Calculator, ExpressionState, SessionMode

__all__ = ["evaluate", "explain", "Calculator", "ExpressionState", "SessionMode"]
