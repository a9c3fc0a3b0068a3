"""Token types for raz."""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    # === Single-character tokens ===
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()
    PERCENT = auto()

    # === One or two character tokens ===
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    PLUS_PLUS = auto()
    MINUS_MINUS = auto()

    # === Literals ===
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # === Keywords ===
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUNC = auto()
    IF = auto()
    NON = auto()
    OR = auto()
    PRINT = auto()
    SHOW = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # === Special ===
    EOF = auto()


@dataclass
class Token:
    type: TokenType
    lexeme: str
    literal: Any = None  # float for NUMBER, str for STRING
    line: int = 1
    column: int = 1

    def __repr__(self):
        return f"Token({self.type.name}, {self.lexeme!r}, L{self.line}:C{self.column})"


# Keywords mapping
KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "func": TokenType.FUNC,
    "if": TokenType.IF,
    "non": TokenType.NON,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "show": TokenType.SHOW,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
    # Reserved, no behavior yet
    "class": TokenType.CLASS,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
}
