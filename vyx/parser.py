"""Parser for the Vyx language.

A recursive-descent parser turns the token list produced by the lexer into
a tuple of statements. Expressions are parsed by precedence climbing, one
method per precedence level, from lowest to highest binding:

    assignment -> elvis -> ternary -> or -> and -> equality ->
    comparison -> term -> factor -> unary -> call -> primary

Syntax errors do not abort the parse. Each one is recorded as a
:class:`Diagnostic`, then the parser discards tokens until a statement
boundary (just past a ``;``, or at ``let``, ``print`` or ``fn``) and
resumes, so every top-level statement is still checked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Ternary,
    Assign, Variable, Call, Expression, Print, Let, Block, If, While,
    Function,
)
from .errors import Diagnostic, ParseError
from .tokens import Token, TokenKind

MAX_ARGUMENTS = 255

SYNC_KINDS = (TokenKind.LET, TokenKind.PRINT, TokenKind.FN)


@dataclass
class ParseResult:
    statements: List[Stmt]
    errors: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.pos = 0
        self.errors: List[Diagnostic] = []

    def parse(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements

    # Token helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def match(self, *kinds: TokenKind) -> bool:
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), message)

    def error(self, token: Token, message: str) -> ParseError:
        """Record a syntax error and return the exception used to unwind.

        Callers ``raise`` the result when the construct cannot continue;
        limits such as the argument count only record the error.
        """
        self.errors.append(Diagnostic.at_token(token, message))
        return ParseError(message)

    def synchronize(self, start: int) -> None:
        # Always make progress, but keep a boundary keyword that follows
        # the offending token so the next statement is still parsed.
        if self.pos == start:
            self.advance()
        while not self.is_at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.peek().kind in SYNC_KINDS:
                return
            self.advance()

    # Statements

    def parse_declaration(self) -> Optional[Stmt]:
        start = self.pos
        try:
            if self.match(TokenKind.FN):
                return self.parse_function('function')
            if self.match(TokenKind.LET):
                return self.parse_let_declaration()
            return self.parse_statement()
        except ParseError:
            self.synchronize(start)
            return None
        except RecursionError:
            self.error(self.peek(), 'Expression nested too deeply.')
            self.synchronize(start)
            return None

    def parse_function(self, kind: str) -> Function:
        name = self.consume(TokenKind.IDENTIFIER, f"Expected {kind} name.")
        self.consume(TokenKind.LEFT_PAREN, f"Expected '(' after {kind} name.")
        params: List[Token] = []
        if not self.check(TokenKind.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(TokenKind.IDENTIFIER, 'Expected parameter name.'))
                if not self.match(TokenKind.COMMA):
                    break
        self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after parameters.")
        self.consume(TokenKind.LEFT_BRACE, f"Expected '{{' before {kind} body.")
        body = self.parse_block()
        return Function(name, tuple(params), tuple(body))

    def parse_let_declaration(self) -> Let:
        name = self.consume(TokenKind.IDENTIFIER, "Expected variable name after 'let'.")
        initializer: Optional[Expr] = None
        if self.match(TokenKind.EQUAL):
            initializer = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after variable declaration.")
        return Let(name, initializer)

    def parse_statement(self) -> Stmt:
        if self.match(TokenKind.FOR):
            return self.parse_for_statement()
        if self.match(TokenKind.IF):
            return self.parse_if_statement()
        if self.match(TokenKind.PRINT):
            return self.parse_print_statement()
        if self.match(TokenKind.WHILE):
            return self.parse_while_statement()
        if self.match(TokenKind.LEFT_BRACE):
            return Block(tuple(self.parse_block()))
        return self.parse_expression_statement()

    def parse_for_statement(self) -> Stmt:
        """Desugar ``for (init; cond; incr) body`` into a block and a while loop."""
        self.consume(TokenKind.LEFT_PAREN, "Expected '(' after 'for'.")
        initializer: Optional[Stmt]
        if self.match(TokenKind.SEMICOLON):
            initializer = None
        elif self.match(TokenKind.LET):
            initializer = self.parse_let_declaration()
        else:
            initializer = self.parse_expression_statement()

        condition: Optional[Expr] = None
        if not self.check(TokenKind.SEMICOLON):
            condition = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after loop condition.")

        increment: Optional[Expr] = None
        if not self.check(TokenKind.RIGHT_PAREN):
            increment = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after for clauses.")

        body = self.parse_statement()
        if increment is not None:
            body = Block((body, Expression(increment)))
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block((initializer, body))
        return body

    def parse_if_statement(self) -> If:
        self.consume(TokenKind.LEFT_PAREN, "Expected '(' after 'if'.")
        condition = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after if condition.")
        then_branch = self.parse_statement()
        else_branch = None
        if self.match(TokenKind.ELSE):
            else_branch = self.parse_statement()
        return If(condition, then_branch, else_branch)

    def parse_print_statement(self) -> Print:
        self.consume(TokenKind.LEFT_PAREN, "Expected '(' after 'print'.")
        value = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after expression.")
        self.consume(TokenKind.SEMICOLON, "Expected ';' after print statement.")
        return Print(value)

    def parse_while_statement(self) -> While:
        self.consume(TokenKind.LEFT_PAREN, "Expected '(' after 'while'.")
        condition = self.parse_expression()
        self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after while condition.")
        body = self.parse_statement()
        return While(condition, body)

    def parse_block(self) -> List[Stmt]:
        # the opening brace has already been consumed
        statements: List[Stmt] = []
        while not self.check(TokenKind.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.parse_declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenKind.RIGHT_BRACE, "Expected '}' after block.")
        return statements

    def parse_expression_statement(self) -> Expression:
        expr = self.parse_expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after expression.")
        return Expression(expr)

    # Expressions

    def parse_expression(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_elvis()
        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # reported, but the left-hand node is kept so parsing continues
            self.error(equals, 'Invalid assignment target.')
        return expr

    def parse_elvis(self) -> Expr:
        expr = self.parse_ternary()
        while self.match(TokenKind.ELVIS):
            operator = self.previous()
            right = self.parse_ternary()
            expr = Binary(expr, operator, right)
        return expr

    def parse_ternary(self) -> Expr:
        expr = self.parse_or()
        if self.match(TokenKind.QUESTION):
            then_branch = self.parse_expression()
            self.consume(TokenKind.COLON, "Expected ':' after then branch of ternary expression.")
            else_branch = self.parse_ternary()
            return Ternary(expr, then_branch, else_branch)
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.match(TokenKind.OR):
            operator = self.previous()
            right = self.parse_and()
            expr = Logical(expr, operator, right)
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(TokenKind.AND):
            operator = self.previous()
            right = self.parse_equality()
            expr = Logical(expr, operator, right)
        return expr

    def parse_equality(self) -> Expr:
        expr = self.parse_comparison()
        while self.match(TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL):
            operator = self.previous()
            right = self.parse_comparison()
            expr = Binary(expr, operator, right)
        return expr

    def parse_comparison(self) -> Expr:
        expr = self.parse_term()
        while self.match(TokenKind.GREATER, TokenKind.GREATER_EQUAL,
                         TokenKind.LESS, TokenKind.LESS_EQUAL):
            operator = self.previous()
            right = self.parse_term()
            expr = Binary(expr, operator, right)
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()
        while self.match(TokenKind.MINUS, TokenKind.PLUS):
            operator = self.previous()
            right = self.parse_factor()
            expr = Binary(expr, operator, right)
        return expr

    def parse_factor(self) -> Expr:
        expr = self.parse_unary()
        while self.match(TokenKind.SLASH, TokenKind.STAR):
            operator = self.previous()
            right = self.parse_unary()
            expr = Binary(expr, operator, right)
        return expr

    def parse_unary(self) -> Expr:
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous()
            right = self.parse_unary()
            return Unary(operator, right)
        return self.parse_call()

    def parse_call(self) -> Expr:
        expr = self.parse_primary()
        while self.match(TokenKind.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Call:
        arguments: List[Expr] = []
        if not self.check(TokenKind.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.parse_expression())
                if not self.match(TokenKind.COMMA):
                    break
        paren = self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def parse_primary(self) -> Expr:
        if self.match(TokenKind.FALSE):
            return Literal(False)
        if self.match(TokenKind.TRUE):
            return Literal(True)
        if self.match(TokenKind.NULL):
            return Literal(None)
        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenKind.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expected ')' after expression.")
            return Grouping(expr)
        raise self.error(self.peek(), 'Expected expression.')


def parse(tokens: Sequence[Token]) -> ParseResult:
    """Parse a token list into statements plus any syntax errors found."""
    parser = Parser(tokens)
    statements = parser.parse()
    return ParseResult(statements, parser.errors)
