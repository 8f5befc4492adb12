"""Token definitions for the Vyx language.

A token is the smallest named unit of Vyx source text. Tokens are produced
by the lexer and consumed by the parser; they never change once created.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .types import stringify


class TokenKind(enum.Enum):
    """Closed set of token kinds."""
    # Literals
    IDENTIFIER = enum.auto()
    NUMBER = enum.auto()
    STRING = enum.auto()

    # Operators
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    EQUAL = enum.auto()
    BANG = enum.auto()
    GREATER = enum.auto()
    LESS = enum.auto()
    EQUAL_EQUAL = enum.auto()
    BANG_EQUAL = enum.auto()
    GREATER_EQUAL = enum.auto()
    LESS_EQUAL = enum.auto()

    # Punctuation
    LEFT_PAREN = enum.auto()
    RIGHT_PAREN = enum.auto()
    LEFT_BRACE = enum.auto()
    RIGHT_BRACE = enum.auto()
    COLON = enum.auto()
    SEMICOLON = enum.auto()
    COMMA = enum.auto()
    QUESTION = enum.auto()
    ELVIS = enum.auto()

    # Keywords
    OR = enum.auto()
    AND = enum.auto()
    NULL = enum.auto()
    LET = enum.auto()
    FN = enum.auto()
    TRUE = enum.auto()
    FALSE = enum.auto()
    PRINT = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    WHILE = enum.auto()
    FOR = enum.auto()

    EOF = enum.auto()


KEYWORDS = {
    'or':    TokenKind.OR,
    'and':   TokenKind.AND,
    'null':  TokenKind.NULL,
    'let':   TokenKind.LET,
    'fn':    TokenKind.FN,
    'true':  TokenKind.TRUE,
    'false': TokenKind.FALSE,
    'print': TokenKind.PRINT,
    'if':    TokenKind.IF,
    'else':  TokenKind.ELSE,
    'while': TokenKind.WHILE,
    'for':   TokenKind.FOR,
}

PUNCTUATION = {
    TokenKind.PLUS: '+',
    TokenKind.MINUS: '-',
    TokenKind.STAR: '*',
    TokenKind.SLASH: '/',
    TokenKind.EQUAL: '=',
    TokenKind.BANG: '!',
    TokenKind.GREATER: '>',
    TokenKind.LESS: '<',
    TokenKind.EQUAL_EQUAL: '==',
    TokenKind.BANG_EQUAL: '!=',
    TokenKind.GREATER_EQUAL: '>=',
    TokenKind.LESS_EQUAL: '<=',
    TokenKind.LEFT_PAREN: '(',
    TokenKind.RIGHT_PAREN: ')',
    TokenKind.LEFT_BRACE: '{',
    TokenKind.RIGHT_BRACE: '}',
    TokenKind.COLON: ':',
    TokenKind.SEMICOLON: ';',
    TokenKind.COMMA: ',',
    TokenKind.QUESTION: '?',
    TokenKind.ELVIS: '?:',
}


@dataclass(frozen=True)
class Position:
    line: int
    column: int


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: Optional[Union[float, str]]
    position: Position

    @property
    def line(self) -> int:
        return self.position.line

    def lexeme(self) -> str:
        """Return the source-level text this token stands for."""
        if self.kind is TokenKind.EOF:
            return 'EOF'
        if self.kind in PUNCTUATION:
            return PUNCTUATION[self.kind]
        if self.kind is TokenKind.NUMBER:
            return stringify(self.literal)
        if self.kind in (TokenKind.IDENTIFIER, TokenKind.STRING):
            return self.literal if isinstance(self.literal, str) else ''
        return self.kind.name.lower()

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.literal!r}, {self.position.line}:{self.position.column})"
