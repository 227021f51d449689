# error.py
"""""
Error taxonomy for the expression engine.

The pipeline never lets these cross a stage boundary as raised exceptions:
stages build them and hand them back inside an Outcome. They are still real
exceptions so a caller that wants to fail loudly can simply ``raise outcome.error``.
"""""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __repr__(self):
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class LexicalError(MathError):
    pass

class StructuralError(MathError):
    pass

class StackUnderflowError(MathError):
    pass

class CalculationError(MathError):
    pass



Error_Dictionary = {

    "1" : "Lexical Error",
    "2" : "Structural Error",
    "3" : "Stack Underflow",
    "4" : "Arithmetic Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Sub-category
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Unknown character: ", # + character
    "1001" : "Invalid number: ", # + literal

    "2000" : "Missing '('. ",
    "2001" : "Missing ')'. ",

    "3000" : "Missing operand for: ", # + operator
    "3001" : "Incomplete expression.",

    "4000" : "Division by zero",
    "4001" : "Result is not a finite number.",
    "4002" : "Math domain error: ", # + operator

    "5000" : "Settings file could not be written.",

    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return 'Error <code>: <category> - <message>' for display in dialogs."""
    category = Error_Dictionary.get(str(error.code)[:1], "Unknown Error")
    return f"Error {error.code}: {category} - {error.message}"
