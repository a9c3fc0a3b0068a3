"""Core interpreter runtime for raz, part 1: Setup & Expression evaluation."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

from .ast_nodes import *
from .environment import Environment
from .errors import (
    RazError, UndeclaredVariableError, TypeMismatchError,
    ArityMismatchError, InvalidOperatorError,
)
from .values import (
    RazValue, RazType, raz_number, raz_string, raz_bool, raz_none,
    format_number, is_truthy, is_falsy, type_name, values_equal,
)
from .natives import install_natives
from .lexer import Lexer
from .parser import Parser


@dataclass
class ReturnSignal:
    """Outcome of a return statement, handed back up through enclosing blocks.

    Statement execution yields None for normal completion and a ReturnSignal
    once a return has run; errors are raised as RazError.
    """
    value: RazValue


# ============================================================
# Float arithmetic with IEEE results instead of Python exceptions
# ============================================================

def _divide(x: float, y: float) -> float:
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def _modulo(x: float, y: float) -> float:
    """C fmod: the result takes the sign of the dividend."""
    if y == 0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
        return math.nan
    return math.fmod(x, y)


ARITHMETIC = {
    "+": lambda x, y: x + y,
    "-": lambda x, y: x - y,
    "*": lambda x, y: x * y,
    "/": _divide,
    "%": _modulo,
}

COMPARISONS = {
    ">": lambda x, y: x > y,
    ">=": lambda x, y: x >= y,
    "<": lambda x, y: x < y,
    "<=": lambda x, y: x <= y,
}


class Interpreter:
    """The main raz interpreter."""

    def __init__(self, flags: dict | None = None):
        self.flags = flags or {}

        # Print wraps strings in double quotes
        self.quote_strings = self.flags.get("quote_strings", False)

        # Root scope, seeded with natives; persists across run() calls
        self.global_env = Environment()
        install_natives(self.global_env)

        # Output capture (for testing)
        self.output: list[str] = []

    # ================================================
    # Main execution
    # ================================================

    def run(self, source: str) -> RazValue:
        """Run a raz program from source string."""
        tokens = Lexer(source).tokenize()
        program = Parser(tokens).parse()
        return self.interpret(program)

    def interpret(self, statements: Program) -> RazValue:
        """Execute parsed statements against the global environment.

        Returns the value of the last top-level expression statement, which
        the REPL echoes. A top-level return stops the remaining statements.
        """
        result = raz_none()
        for stmt in statements:
            if isinstance(stmt, ExpressionStatement):
                result = self.evaluate(stmt.expression, self.global_env)
                continue
            if self.execute(stmt, self.global_env) is not None:
                break
        return result

    # ================================================
    # Statement execution
    # ================================================

    def execute(self, node: Statement, env: Environment) -> Optional[ReturnSignal]:
        """Execute a statement node."""
        if isinstance(node, ExpressionStatement):
            self.evaluate(node.expression, env)
            return None
        if isinstance(node, PrintStatement):
            return self._exec_print(node, env)
        if isinstance(node, VarDeclaration):
            return self._exec_var_decl(node, env)
        if isinstance(node, Block):
            return self._exec_block(node, env)
        if isinstance(node, IfStatement):
            return self._exec_if(node, env)
        if isinstance(node, WhileStatement):
            return self._exec_while(node, env)
        if isinstance(node, FunctionDecl):
            return self._exec_func_decl(node, env)
        if isinstance(node, ReturnStatement):
            return self._exec_return(node, env)
        raise RazError(f"Unknown statement: {type(node).__name__}", node.line)

    def execute_block(self, statements: list[Statement], env: Environment) -> Optional[ReturnSignal]:
        """Execute statements in order, stopping at the first return."""
        for stmt in statements:
            outcome = self.execute(stmt, env)
            if outcome is not None:
                return outcome
        return None

    # ================================================
    # Expression evaluation
    # ================================================

    def evaluate(self, node: Expression, env: Environment) -> RazValue:
        """Evaluate an expression node."""
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return self._eval_variable(node, env)
        if isinstance(node, Assignment):
            return self._eval_assignment(node, env)
        if isinstance(node, Unary):
            return self._eval_unary(node, env)
        if isinstance(node, Logical):
            return self._eval_logical(node, env)
        if isinstance(node, Binary):
            return self._eval_binary(node, env)
        if isinstance(node, Call):
            return self._eval_call(node, env)
        raise RazError(f"Unknown expression: {type(node).__name__}", node.line)

    def _eval_variable(self, node: Variable, env: Environment) -> RazValue:
        value = env.get(node.name)
        if value is None:
            raise UndeclaredVariableError(node.name, node.line)
        return value

    def _eval_assignment(self, node: Assignment, env: Environment) -> RazValue:
        value = self.evaluate(node.value, env)
        if not env.assign(node.name, value):
            raise UndeclaredVariableError(node.name, node.line)
        return value

    def _eval_unary(self, node: Unary, env: Environment) -> RazValue:
        operand = self.evaluate(node.operand, env)
        op = node.operator

        if op == "!":
            return raz_bool(is_falsy(operand))
        if op in ("-", "++", "--"):
            if operand.type != RazType.NUMBER:
                raise TypeMismatchError(f"'{op}' is not implemented for {type_name(operand)}", node.line)
            if op == "-":
                return raz_number(-operand.value)
            if op == "++":
                return raz_number(operand.value + 1)
            return raz_number(operand.value - 1)

        raise InvalidOperatorError(op, "unary", node.line)

    def _eval_logical(self, node: Logical, env: Environment) -> RazValue:
        # 'or' hands back an operand value; 'and' evaluates both sides and
        # collapses to a Boolean.
        if node.operator == "or":
            left = self.evaluate(node.left, env)
            if is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if node.operator == "and":
            left_true = is_truthy(self.evaluate(node.left, env))
            right_true = is_truthy(self.evaluate(node.right, env))
            return raz_bool(left_true and right_true)

        raise InvalidOperatorError(node.operator, "logical", node.line)

    def _eval_binary(self, node: Binary, env: Environment) -> RazValue:
        left = self.evaluate(node.left, env)
        right = self.evaluate(node.right, env)
        op = node.operator
        lt, rt = left.type, right.type

        if lt == RazType.NUMBER and rt == RazType.NUMBER:
            if op in ARITHMETIC:
                return raz_number(ARITHMETIC[op](left.value, right.value))
            if op in COMPARISONS:
                return raz_bool(COMPARISONS[op](left.value, right.value))

        if op == "+":
            if lt == RazType.STRING and rt == RazType.STRING:
                return raz_string(left.value + right.value)
            if lt == RazType.STRING and rt == RazType.NUMBER:
                return raz_string(left.value + format_number(right.value))
            if lt == RazType.NUMBER and rt == RazType.STRING:
                return raz_string(format_number(left.value) + right.value)

        if op == "*":
            if lt == RazType.STRING and rt == RazType.NUMBER:
                return raz_string(self._repeat(left.value, right.value, node))
            if lt == RazType.NUMBER and rt == RazType.STRING:
                return raz_string(self._repeat(right.value, left.value, node))

        # Equality works for every pair of operands, so it goes last
        if op == "==":
            return raz_bool(values_equal(left, right))
        if op == "!=":
            return raz_bool(not values_equal(left, right))

        raise TypeMismatchError(
            f"'{op}' is not implemented for operands {type_name(left)} and {type_name(right)}",
            node.line,
        )

    def _repeat(self, text: str, count: float, node: Binary) -> str:
        """String repetition; fractional counts truncate toward zero."""
        if math.isnan(count) or math.isinf(count):
            raise TypeMismatchError(f"Cannot repeat a String {format_number(count)} times", node.line)
        if count < 0:
            raise TypeMismatchError(f"Cannot repeat a String a negative number of times ({format_number(count)})", node.line)
        return text * int(count)

    def _eval_call(self, node: Call, env: Environment) -> RazValue:
        callee = self.evaluate(node.callee, env)
        if callee.type != RazType.CALLABLE:
            raise TypeMismatchError(f"{type_name(callee)} is not callable.", node.line)

        args = [self.evaluate(arg, env) for arg in node.arguments]

        function = callee.value
        if len(args) != function.arity:
            raise ArityMismatchError(function.name, function.arity, len(args), node.line)
        return function(env, args)
