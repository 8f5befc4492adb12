"""Abstract Syntax Tree (AST) definitions for the Vyx language.

The AST is split into two closed families: expressions (:class:`Expr`),
which evaluate to a value, and statements (:class:`Stmt`), which are
executed only for their effects. Nodes are frozen and hold tuples rather
than lists, so a tree is never modified after the parser builds it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .tokens import Token


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expr(Node):
    pass


@dataclass(frozen=True)
class Stmt(Node):
    pass


# Expressions

@dataclass(frozen=True)
class Literal(Expr):
    value: Any  # None, bool, float or str


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuit operators ``and`` and ``or``."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Ternary(Expr):
    condition: Expr
    then_branch: Expr
    else_branch: Expr


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used for error positions
    arguments: Tuple[Expr, ...]


# Statements

@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Let(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Function(Stmt):
    name: Token
    params: Tuple[Token, ...]
    body: Tuple[Stmt, ...]
