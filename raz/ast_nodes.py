"""AST node definitions for raz."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .values import RazValue, raz_none


# ============================================================
# Base
# ============================================================

@dataclass
class ASTNode:
    """Base for all AST nodes."""
    line: int = 0
    column: int = 0


@dataclass
class Statement(ASTNode):
    """Base for statements."""
    pass


@dataclass
class Expression(ASTNode):
    """Base for expressions."""
    pass


# ============================================================
# Expressions
# ============================================================

@dataclass
class Assignment(Expression):
    name: str = ""
    value: Expression = field(default_factory=Expression)


@dataclass
class Binary(Expression):
    left: Expression = field(default_factory=Expression)
    operator: str = ""
    right: Expression = field(default_factory=Expression)


@dataclass
class Call(Expression):
    callee: Expression = field(default_factory=Expression)
    arguments: list[Expression] = field(default_factory=list)


@dataclass
class Grouping(Expression):
    expression: Expression = field(default_factory=Expression)


@dataclass
class Literal(Expression):
    value: RazValue = field(default_factory=raz_none)


@dataclass
class Logical(Expression):
    left: Expression = field(default_factory=Expression)
    operator: str = ""  # "and" or "or"
    right: Expression = field(default_factory=Expression)


@dataclass
class Unary(Expression):
    operator: str = ""  # "-", "!", "++", "--"
    operand: Expression = field(default_factory=Expression)


@dataclass
class Variable(Expression):
    name: str = ""


# ============================================================
# Statements
# ============================================================

@dataclass
class ExpressionStatement(Statement):
    expression: Expression = field(default_factory=Expression)


@dataclass
class PrintStatement(Statement):
    expression: Expression = field(default_factory=Expression)


@dataclass
class VarDeclaration(Statement):
    name: str = ""
    initializer: Expression = field(default_factory=Literal)


@dataclass
class Block(Statement):
    statements: list[Statement] = field(default_factory=list)


@dataclass
class IfStatement(Statement):
    condition: Expression = field(default_factory=Expression)
    then_branch: Statement = field(default_factory=Statement)
    else_branch: Optional[Statement] = None


@dataclass
class WhileStatement(Statement):
    condition: Expression = field(default_factory=Expression)
    body: Statement = field(default_factory=Statement)


@dataclass
class FunctionDecl(Statement):
    name: str = ""
    params: list[str] = field(default_factory=list)
    body: list[Statement] = field(default_factory=list)


@dataclass
class ReturnStatement(Statement):
    value: Optional[Expression] = None


Program = list[Statement]
