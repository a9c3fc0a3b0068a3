"""Error taxonomy for raz.

Every failure the interpreter reports is a RazError. The driver catches the
base class, prints the message and decides whether to exit (file mode) or
keep going (REPL).
"""
from __future__ import annotations
from typing import Optional


class RazError(Exception):
    """Runtime error in raz."""
    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self):
        if self.line is not None:
            return f"[line {self.line}] {self.message}"
        return self.message


class UndeclaredVariableError(RazError):
    """Read or assignment of a name with no binding in the scope chain."""
    def __init__(self, name: str, line: Optional[int] = None):
        super().__init__(f"Variable '{name}' has not been declared", line)
        self.name = name


class TypeMismatchError(RazError):
    """Operator applied to operand types it does not support."""
    pass


class ArityMismatchError(RazError):
    """Call argument count differs from the callable's declared arity."""
    def __init__(self, name: str, expected: int, got: int, line: Optional[int] = None):
        super().__init__(f"Callable {name} expected {expected} arguments but got {got}.", line)
        self.name = name
        self.expected = expected
        self.got = got


class InvalidOperatorError(RazError):
    """An operator the evaluator does not know for that kind of expression."""
    def __init__(self, operator: str, kind: str = "unary", line: Optional[int] = None):
        super().__init__(f"'{operator}' is not a valid {kind} operator", line)
        self.operator = operator
