"""Lexer for raz: tokenizes source into a stream of Tokens."""
from __future__ import annotations
from .errors import RazError
from .tokens import Token, TokenType, KEYWORDS


class LexerError(RazError):
    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"[L{line}:C{column}] Lexer error: {message}")
        self.line = line
        self.column = column

    def __str__(self):
        return self.message


# Characters that are a token on their own, no lookahead needed
SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "%": TokenType.PERCENT,
}

# first char -> (second char, two-char type, one-char type)
TWO_CHAR_TOKENS = {
    "!": ("=", TokenType.BANG_EQUAL, TokenType.BANG),
    "=": ("=", TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": ("=", TokenType.LESS_EQUAL, TokenType.LESS),
    ">": ("=", TokenType.GREATER_EQUAL, TokenType.GREATER),
    "+": ("+", TokenType.PLUS_PLUS, TokenType.PLUS),
    "-": ("-", TokenType.MINUS_MINUS, TokenType.MINUS),
}


def _is_digit(ch: str) -> bool:
    """ASCII 0-9 only."""
    return "0" <= ch <= "9"


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def error(self, msg: str, line: int | None = None, column: int | None = None) -> LexerError:
        return LexerError(msg, line or self.line, column or self.column)

    @property
    def current(self) -> str:
        if self.pos >= len(self.source):
            return "\0"
        return self.source[self.pos]

    def peek(self, offset: int = 1) -> str:
        p = self.pos + offset
        if p >= len(self.source):
            return "\0"
        return self.source[p]

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def advance(self) -> str:
        ch = self.current
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_comment(self):
        """Skip // to end of line."""
        while not self.at_end() and self.current != "\n":
            self.advance()

    def skip_block_comment(self):
        """Skip /* ... */, which may span lines."""
        line, col = self.line, self.column
        self.advance()  # /
        self.advance()  # *
        while not self.at_end():
            if self.current == "*" and self.peek() == "/":
                self.advance()
                self.advance()
                return
            self.advance()
        raise self.error("Unterminated block comment", line, col)

    def read_string(self) -> str:
        """Read a double-quoted string literal. Newlines are allowed, escapes are not."""
        line, col = self.line, self.column
        self.advance()  # opening quote
        start = self.pos
        while not self.at_end() and self.current != '"':
            self.advance()
        if self.at_end():
            raise self.error("Unterminated string", line, col)
        text = self.source[start:self.pos]
        self.advance()  # closing quote
        return text

    def read_number(self) -> str:
        """Read a numeric literal. A '.' only belongs to the number when a digit follows it."""
        start = self.pos
        while _is_digit(self.current):
            self.advance()
        if self.current == "." and _is_digit(self.peek()):
            self.advance()
            while _is_digit(self.current):
                self.advance()
        return self.source[start:self.pos]

    def read_identifier(self) -> str:
        start = self.pos
        while not self.at_end() and (self.current.isalnum() or self.current == "_"):
            self.advance()
        return self.source[start:self.pos]

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source into a list of Tokens."""
        self.tokens = []

        while not self.at_end():
            ch = self.current
            line, col = self.line, self.column

            # Whitespace
            if ch in (" ", "\t", "\r", "\n"):
                self.advance()
                continue

            # Comments
            if ch == "/" and self.peek() == "/":
                self.skip_comment()
                continue
            if ch == "/" and self.peek() == "*":
                self.skip_block_comment()
                continue
            if ch == "/":
                self.advance()
                self.tokens.append(Token(TokenType.SLASH, "/", None, line, col))
                continue

            # String literals
            if ch == '"':
                text = self.read_string()
                self.tokens.append(Token(TokenType.STRING, f'"{text}"', text, line, col))
                continue

            # Numbers
            if _is_digit(ch):
                text = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, text, float(text), line, col))
                continue

            # Identifiers / keywords
            if ch.isalpha() or ch == "_":
                ident = self.read_identifier()
                ttype = KEYWORDS.get(ident, TokenType.IDENTIFIER)
                self.tokens.append(Token(ttype, ident, None, line, col))
                continue

            if ch in SINGLE_CHAR_TOKENS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_TOKENS[ch], ch, None, line, col))
                continue

            if ch in TWO_CHAR_TOKENS:
                second, double_type, single_type = TWO_CHAR_TOKENS[ch]
                self.advance()
                if self.current == second:
                    self.advance()
                    self.tokens.append(Token(double_type, ch + second, None, line, col))
                else:
                    self.tokens.append(Token(single_type, ch, None, line, col))
                continue

            # && and || are spellings of 'and' / 'or'
            if ch == "&" and self.peek() == "&":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.AND, "&&", None, line, col))
                continue
            if ch == "|" and self.peek() == "|":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.OR, "||", None, line, col))
                continue

            raise self.error(f"Unexpected character: {ch!r}")

        self.tokens.append(Token(TokenType.EOF, "", None, self.line, self.column))
        return self.tokens
