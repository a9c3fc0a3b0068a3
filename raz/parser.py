"""Recursive descent parser for raz."""
from __future__ import annotations
from typing import Optional

from .errors import RazError
from .tokens import Token, TokenType
from .ast_nodes import *
from .values import raz_number, raz_string, raz_true, raz_false, raz_none

MAX_ARGUMENTS = 255


class ParseError(RazError):
    def __init__(self, message: str, token: Token):
        super().__init__(f"[L{token.line}:C{token.column}] Parse error: {message}")
        self.token = token
        self.errors: list[ParseError] = [self]

    def __str__(self):
        return "\n".join(e.message for e in self.errors)


class Parser:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    # ================================================
    # Utilities
    # ================================================

    @property
    def current(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    @property
    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        tok = self.current
        if not self.at_end():
            self.pos += 1
        return tok

    def check(self, ttype: TokenType) -> bool:
        return self.current.type == ttype

    def expect(self, ttype: TokenType, msg: str = "") -> Token:
        if self.current.type != ttype:
            raise self.error(msg or f"Expected {ttype.name}, got {self.current.type.name} ({self.current.lexeme!r})")
        return self.advance()

    def match(self, *types: TokenType) -> Optional[Token]:
        if self.current.type in types:
            return self.advance()
        return None

    def at_end(self) -> bool:
        return self.current.type == TokenType.EOF

    def error(self, msg: str) -> ParseError:
        return ParseError(msg, self.current)

    def synchronize(self):
        """Skip ahead to the next likely statement boundary after an error."""
        self.advance()
        while not self.at_end():
            if self.previous.type == TokenType.SEMICOLON:
                return
            if self.current.type in (
                TokenType.CLASS, TokenType.FUNC, TokenType.VAR, TokenType.FOR,
                TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.SHOW,
                TokenType.RETURN,
            ):
                return
            self.advance()

    # ================================================
    # Top-level
    # ================================================

    def parse(self) -> Program:
        """Parse the entire program, reporting every bad declaration at once."""
        statements: Program = []
        errors: list[ParseError] = []

        while not self.at_end():
            try:
                statements.append(self.parse_declaration())
            except ParseError as e:
                errors.append(e)
                self.synchronize()

        if errors:
            first = errors[0]
            first.errors = errors
            raise first
        return statements

    # ================================================
    # Declarations
    # ================================================

    def parse_declaration(self) -> Statement:
        if self.check(TokenType.VAR):
            return self.parse_var_declaration()
        if self.check(TokenType.FUNC):
            return self.parse_function_decl()
        return self.parse_statement()

    def parse_var_declaration(self) -> VarDeclaration:
        tok = self.advance()  # var
        name = self.expect(TokenType.IDENTIFIER, "Expect variable name.").lexeme

        if self.match(TokenType.EQUAL):
            initializer = self.parse_expression()
        else:
            initializer = Literal(line=tok.line, column=tok.column, value=raz_none())

        self.expect(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDeclaration(line=tok.line, column=tok.column, name=name, initializer=initializer)

    def parse_function_decl(self) -> FunctionDecl:
        tok = self.advance()  # func
        name = self.expect(TokenType.IDENTIFIER, "Expected function name.").lexeme
        self.expect(TokenType.LPAREN, "Expected '(' after function name.")

        params: list[str] = []
        if not self.check(TokenType.RPAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    raise self.error(f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.expect(TokenType.IDENTIFIER, "Expected parameter name.").lexeme)
                if not self.match(TokenType.COMMA):
                    break
        self.expect(TokenType.RPAREN, "Expected ')' after parameters.")

        self.expect(TokenType.LBRACE, "Expected '{' before function body.")
        body = self.parse_block_statements()
        return FunctionDecl(line=tok.line, column=tok.column, name=name, params=params, body=body)

    # ================================================
    # Statements
    # ================================================

    def parse_statement(self) -> Statement:
        tok = self.current

        if tok.type == TokenType.IF:
            return self.parse_if()
        if tok.type == TokenType.FOR:
            return self.parse_for()
        if tok.type == TokenType.WHILE:
            return self.parse_while()
        if tok.type == TokenType.LBRACE:
            self.advance()
            return Block(line=tok.line, column=tok.column, statements=self.parse_block_statements())
        if tok.type in (TokenType.PRINT, TokenType.SHOW):
            return self.parse_print()
        if tok.type == TokenType.RETURN:
            return self.parse_return()

        return self.parse_expression_statement()

    def parse_block_statements(self) -> list[Statement]:
        """Parse declarations up to the closing '}' (the '{' is already consumed)."""
        statements = []
        while not self.check(TokenType.RBRACE) and not self.at_end():
            statements.append(self.parse_declaration())
        self.expect(TokenType.RBRACE, "Expect '}' to end the block.")
        return statements

    def parse_print(self) -> PrintStatement:
        tok = self.advance()  # print / show
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStatement(line=tok.line, column=tok.column, expression=expr)

    def parse_return(self) -> ReturnStatement:
        tok = self.advance()  # return
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after return value.")
        return ReturnStatement(line=tok.line, column=tok.column, value=value)

    def parse_if(self) -> IfStatement:
        tok = self.advance()  # if
        self.expect(TokenType.LPAREN, "Expect '(' after 'if'.")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expect ')' after if condition.")

        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.parse_statement()

        return IfStatement(line=tok.line, column=tok.column, condition=condition,
                           then_branch=then_branch, else_branch=else_branch)

    def parse_while(self) -> WhileStatement:
        tok = self.advance()  # while
        self.expect(TokenType.LPAREN, "Expect '(' after 'while'.")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expect ')' after while condition.")
        body = self.parse_statement()
        return WhileStatement(line=tok.line, column=tok.column, condition=condition, body=body)

    def parse_for(self) -> Statement:
        """Desugar for (init; cond; incr) body into a while loop."""
        tok = self.advance()  # for
        self.expect(TokenType.LPAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.check(TokenType.VAR):
            initializer = self.parse_var_declaration()
        else:
            initializer = self.parse_expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RPAREN):
            increment = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expect ')' after for clauses.")

        body = self.parse_statement()

        if increment is not None:
            body = Block(line=tok.line, column=tok.column, statements=[
                body,
                ExpressionStatement(line=increment.line, column=increment.column, expression=increment),
            ])
        if condition is None:
            condition = Literal(line=tok.line, column=tok.column, value=raz_true())
        body = WhileStatement(line=tok.line, column=tok.column, condition=condition, body=body)
        if initializer is not None:
            body = Block(line=tok.line, column=tok.column, statements=[initializer, body])
        return body

    def parse_expression_statement(self) -> ExpressionStatement:
        line, col = self.current.line, self.current.column
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStatement(line=line, column=col, expression=expr)

    # ================================================
    # Expressions: precedence climbing
    # ================================================

    def parse_expression(self) -> Expression:
        """Parse a full expression (lowest precedence)."""
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        expr = self.parse_or()

        if self.check(TokenType.EQUAL):
            equals = self.current
            self.advance()
            value = self.parse_assignment()  # Right-associative
            if isinstance(expr, Variable):
                return Assignment(line=expr.line, column=expr.column, name=expr.name, value=value)
            raise ParseError("Invalid assignment target.", equals)

        return expr

    def parse_or(self) -> Expression:
        left = self.parse_and()
        while self.check(TokenType.OR):
            self.advance()
            right = self.parse_and()
            left = Logical(line=left.line, column=left.column, left=left, operator="or", right=right)
        return left

    def parse_and(self) -> Expression:
        left = self.parse_equality()
        while self.check(TokenType.AND):
            self.advance()
            right = self.parse_equality()
            left = Logical(line=left.line, column=left.column, left=left, operator="and", right=right)
        return left

    def _parse_binary(self, operand, *types: TokenType) -> Expression:
        """Left-associative binary level: operand (op operand)*."""
        left = operand()
        while self.current.type in types:
            tok = self.advance()
            right = operand()
            left = Binary(line=left.line, column=left.column, left=left, operator=tok.lexeme, right=right)
        return left

    def parse_equality(self) -> Expression:
        return self._parse_binary(self.parse_comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def parse_comparison(self) -> Expression:
        return self._parse_binary(
            self.parse_term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def parse_term(self) -> Expression:
        return self._parse_binary(self.parse_factor, TokenType.MINUS, TokenType.PLUS)

    def parse_factor(self) -> Expression:
        return self._parse_binary(self.parse_unary, TokenType.SLASH, TokenType.STAR, TokenType.PERCENT)

    def parse_unary(self) -> Expression:
        """Prefix ! - ++ --, or a call optionally followed by postfix ++ / --."""
        if self.current.type in (TokenType.BANG, TokenType.MINUS, TokenType.PLUS_PLUS, TokenType.MINUS_MINUS):
            tok = self.advance()
            operand = self.parse_unary()
            return Unary(line=tok.line, column=tok.column, operator=tok.lexeme, operand=operand)

        expr = self.parse_call()
        if self.current.type in (TokenType.PLUS_PLUS, TokenType.MINUS_MINUS):
            tok = self.advance()
            expr = Unary(line=expr.line, column=expr.column, operator=tok.lexeme, operand=expr)
        return expr

    def parse_call(self) -> Expression:
        expr = self.parse_primary()
        while self.match(TokenType.LPAREN):
            args: list[Expression] = []
            if not self.check(TokenType.RPAREN):
                while True:
                    if len(args) >= MAX_ARGUMENTS:
                        raise self.error(f"Can't have more than {MAX_ARGUMENTS} arguments.")
                    args.append(self.parse_expression())
                    if not self.match(TokenType.COMMA):
                        break
            self.expect(TokenType.RPAREN, "Expected ')' after arguments.")
            expr = Call(line=expr.line, column=expr.column, callee=expr, arguments=args)
        return expr

    def parse_primary(self) -> Expression:
        """Parse primary expressions: literals, identifiers, parenthesized."""
        tok = self.current

        if tok.type == TokenType.NUMBER:
            self.advance()
            return Literal(line=tok.line, column=tok.column, value=raz_number(tok.literal))
        if tok.type == TokenType.STRING:
            self.advance()
            return Literal(line=tok.line, column=tok.column, value=raz_string(tok.literal))
        if tok.type == TokenType.TRUE:
            self.advance()
            return Literal(line=tok.line, column=tok.column, value=raz_true())
        if tok.type == TokenType.FALSE:
            self.advance()
            return Literal(line=tok.line, column=tok.column, value=raz_false())
        if tok.type == TokenType.NON:
            self.advance()
            return Literal(line=tok.line, column=tok.column, value=raz_none())

        if tok.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.expect(TokenType.RPAREN, "Expected ')' after expression.")
            return Grouping(line=tok.line, column=tok.column, expression=expr)

        if tok.type == TokenType.IDENTIFIER:
            self.advance()
            return Variable(line=tok.line, column=tok.column, name=tok.lexeme)

        raise self.error(f"Expected expression, got {tok.type.name} ({tok.lexeme!r})")
