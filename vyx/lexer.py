"""Lexer for the Vyx language.

The lexer walks the source text once and produces a list of tokens that
always ends with an ``EOF`` token. It never raises: an unexpected
character or an unterminated string is recorded as a :class:`Diagnostic`
and scanning carries on, so a single pass reports every lexical error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .errors import Diagnostic
from .tokens import KEYWORDS, Position, Token, TokenKind


@dataclass
class LexResult:
    tokens: List[Token]
    errors: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


SINGLE_CHAR_TOKENS = {
    '(': TokenKind.LEFT_PAREN,
    ')': TokenKind.RIGHT_PAREN,
    '{': TokenKind.LEFT_BRACE,
    '}': TokenKind.RIGHT_BRACE,
    ':': TokenKind.COLON,
    ';': TokenKind.SEMICOLON,
    ',': TokenKind.COMMA,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.STAR,
}

# first char -> (second char, merged kind, single kind)
TWO_CHAR_TOKENS = {
    '!': ('=', TokenKind.BANG_EQUAL, TokenKind.BANG),
    '=': ('=', TokenKind.EQUAL_EQUAL, TokenKind.EQUAL),
    '>': ('=', TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    '<': ('=', TokenKind.LESS_EQUAL, TokenKind.LESS),
    '?': (':', TokenKind.ELVIS, TokenKind.QUESTION),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def is_alnum(c: str) -> bool:
    return is_alpha(c) or is_digit(c)


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[Diagnostic] = []
        self.start = 0
        self.current = 0
        self.line = 1
        self.line_start = 0
        self.start_position = Position(1, 1)

    def tokenize(self) -> List[Token]:
        while not self.is_at_end():
            self.start = self.current
            self.start_position = Position(self.line, self.current - self.line_start + 1)
            self.scan_token()
        self.start_position = Position(self.line, self.current - self.line_start + 1)
        self.add_token(TokenKind.EOF)
        return self.tokens

    def scan_token(self) -> None:
        c = self.advance()
        if c in (' ', '\r', '\t'):
            return
        if c == '\n':
            self.newline()
            return
        if c == '"':
            self.string()
            return
        if c == '/':
            if self.match('/'):
                while self.peek() != '\n' and not self.is_at_end():
                    self.advance()
            elif self.match('*'):
                self.block_comment()
            else:
                self.add_token(TokenKind.SLASH)
            return
        if c in TWO_CHAR_TOKENS:
            second, merged, single = TWO_CHAR_TOKENS[c]
            self.add_token(merged if self.match(second) else single)
            return
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
            return
        if is_digit(c):
            self.number()
        elif is_alpha(c):
            self.identifier()
        else:
            self.error(f"Unexpected character '{c}'.")

    def block_comment(self) -> None:
        # not nested: the first */ closes the comment
        while not self.is_at_end():
            if self.peek() == '*' and self.peek_next() == '/':
                self.advance()
                self.advance()
                return
            if self.advance() == '\n':
                self.newline()

    def string(self) -> None:
        while self.peek() != '"' and not self.is_at_end():
            if self.advance() == '\n':
                self.newline()
        if self.is_at_end():
            self.error('Unterminated string.')
            return
        self.advance()  # closing quote
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def number(self) -> None:
        while is_digit(self.peek()):
            self.advance()
        if self.peek() == '.' and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()
        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self) -> None:
        while is_alnum(self.peek()):
            self.advance()
        text = self.source[self.start:self.current]
        kind = KEYWORDS.get(text)
        if kind is None:
            self.add_token(TokenKind.IDENTIFIER, text)
        else:
            self.add_token(kind)

    # Character helpers

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def newline(self) -> None:
        self.line += 1
        self.line_start = self.current

    def add_token(self, kind: TokenKind, literal: Optional[Union[float, str]] = None) -> None:
        self.tokens.append(Token(kind, literal, self.start_position))

    def error(self, message: str) -> None:
        self.errors.append(Diagnostic(self.line, '', message))


def tokenize(source: str) -> LexResult:
    """Convert source code into tokens plus any lexical errors found."""
    lexer = Lexer(source)
    tokens = lexer.tokenize()
    return LexResult(tokens, lexer.errors)
