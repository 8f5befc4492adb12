"""Interpreter for the Vyx language.

This module holds the tree-walking evaluator and the pipeline driver that
connects it to the lexer and parser. Statements are executed in order
against a persistent global environment; expressions evaluate to plain
Python values (see :mod:`vyx.types`).

The stages report failure through the values they return rather than
shared flags: :func:`run_program` only executes a program whose lexing and
parsing produced no diagnostics.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, TextIO, Tuple

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Ternary,
    Assign, Variable, Call, Expression, Print, Let, Block, If, While,
    Function,
)
from .environment import Environment
from .errors import Diagnostic, ErrorReporter, VyxRuntimeError
from .lexer import tokenize
from .parser import parse
from .std import populate_standard_environment
from .tokens import Token, TokenKind
from .types import VyxCallable, is_number, is_truthy, stringify, type_name, values_equal

# Each Vyx call nests several Python frames.
RECURSION_LIMIT = 4000
if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)


class FunctionValue(VyxCallable):
    """Represents a user-defined Vyx function.

    Calls run against a fresh environment whose parent is the global
    environment, not the one where the function was declared.
    """
    def __init__(self, declaration: Function):
        self.declaration = declaration

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme()

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        environment = Environment(interpreter.globals)
        for param, arg in zip(self.declaration.params, arguments):
            environment.define(param, arg)
        interpreter.execute_block(self.declaration.body, environment)
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return f"<function {self.name}>"


class Interpreter:
    """Core interpreter that executes Vyx statements."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 reporter: Optional[ErrorReporter] = None, out: Optional[TextIO] = None):
        self.globals = populate_standard_environment(Environment())
        self.environment = self.globals
        self.reporter = reporter
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self) -> None:
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self, statements: Sequence[Stmt]) -> List[VyxRuntimeError]:
        """Execute top-level statements, returning the runtime errors raised.

        A runtime error abandons only the statement that raised it; the
        remaining statements still run.
        """
        errors: List[VyxRuntimeError] = []
        for stmt in statements:
            try:
                self.execute(stmt)
            except VyxRuntimeError as ex:
                self.debug(f"runtime error at line {ex.token.line}: {ex.message}")
                errors.append(ex)
                if self.reporter is not None:
                    self.reporter.report_runtime(ex)
        return errors

    @contextmanager
    def scope(self, environment: Environment) -> Iterator[Environment]:
        """Make ``environment`` the active one, restoring the previous on exit."""
        previous = self.environment
        self.environment = environment
        try:
            yield environment
        finally:
            self.environment = previous

    def execute_block(self, statements: Sequence[Stmt], environment: Environment) -> None:
        with self.scope(environment):
            for stmt in statements:
                self.execute(stmt)

    def execute(self, node: Stmt) -> None:
        if isinstance(node, Expression):
            self.evaluate(node.expression)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expression)
            print(stringify(value), file=self.out)
            return
        if isinstance(node, Let):
            value = self.evaluate(node.initializer) if node.initializer is not None else None
            self.environment.define(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name.lexeme()}: {type_name(value)} = {stringify(value)}")
            return
        if isinstance(node, Block):
            if self.debug_level >= 3:
                self.debug(f"enter block at depth {self.environment.depth() + 1}")
            self.execute_block(node.statements, Environment(self.environment))
            return
        if isinstance(node, If):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {stringify(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
            return
        if isinstance(node, While):
            while is_truthy(self.evaluate(node.condition)):
                self.execute(node.body)
            return
        if isinstance(node, Function):
            self.environment.define(node.name, FunctionValue(node))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name.lexeme()}")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Expr) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression)
        if isinstance(node, Variable):
            return self.environment.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.environment.assign(node.name, value)
            return value
        if isinstance(node, Unary):
            operand = self.evaluate(node.right)
            if node.operator.kind is TokenKind.MINUS:
                self.check_number_operand(node.operator, operand)
                return -operand
            if node.operator.kind is TokenKind.BANG:
                return not is_truthy(operand)
            raise VyxRuntimeError(node.operator, 'Unknown unary operator.')
        if isinstance(node, Logical):
            left = self.evaluate(node.left)
            # Short-circuit: return the left operand when it decides the result
            if node.operator.kind is TokenKind.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right)
        if isinstance(node, Ternary):
            if is_truthy(self.evaluate(node.condition)):
                return self.evaluate(node.then_branch)
            return self.evaluate(node.else_branch)
        if isinstance(node, Binary):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, Call):
            callee = self.evaluate(node.callee)
            args = [self.evaluate(arg) for arg in node.arguments]
            return self.call_function(callee, args, node.paren)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any], paren: Token) -> Any:
        if not isinstance(func, VyxCallable):
            raise VyxRuntimeError(paren, 'Can only call functions.')
        if len(args) != func.arity():
            raise VyxRuntimeError(paren, f"Expected {func.arity()} arguments but got {len(args)}.")
        if self.debug_level >= 3:
            self.debug(f"call {func!r} with {len(args)} argument(s)")
        try:
            return func.call(self, args)
        except RecursionError:
            raise VyxRuntimeError(paren, 'Stack overflow.') from None

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        kind = op.kind
        if kind is TokenKind.PLUS:
            if is_number(a) and is_number(b):
                return a + b
            # If either operand is string, perform concatenation
            if isinstance(a, str) or isinstance(b, str):
                return stringify(a) + stringify(b)
            raise VyxRuntimeError(op, 'Operands must be two numbers or at least one string.')
        if kind is TokenKind.MINUS:
            self.check_number_operands(op, a, b)
            return a - b
        if kind is TokenKind.STAR:
            self.check_number_operands(op, a, b)
            return a * b
        if kind is TokenKind.SLASH:
            self.check_number_operands(op, a, b)
            if b == 0.0:
                raise VyxRuntimeError(op, 'Division by zero.')
            return a / b
        if kind is TokenKind.ELVIS:
            return b if a is None else a
        if kind is TokenKind.EQUAL_EQUAL:
            return values_equal(a, b)
        if kind is TokenKind.BANG_EQUAL:
            return not values_equal(a, b)
        if kind is TokenKind.GREATER:
            self.check_number_operands(op, a, b)
            return a > b
        if kind is TokenKind.GREATER_EQUAL:
            self.check_number_operands(op, a, b)
            return a >= b
        if kind is TokenKind.LESS:
            self.check_number_operands(op, a, b)
            return a < b
        if kind is TokenKind.LESS_EQUAL:
            self.check_number_operands(op, a, b)
            return a <= b
        raise VyxRuntimeError(op, f"Unknown operator '{op.lexeme()}'.")

    @staticmethod
    def check_number_operand(op: Token, operand: Any) -> None:
        if not is_number(operand):
            raise VyxRuntimeError(op, 'Operand must be a number.')

    @staticmethod
    def check_number_operands(op: Token, a: Any, b: Any) -> None:
        if not (is_number(a) and is_number(b)):
            raise VyxRuntimeError(op, 'Operands must be numbers.')


@dataclass
class RunResult:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    runtime_errors: List[VyxRuntimeError] = field(default_factory=list)

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return bool(self.runtime_errors)


def parse_program(source: str) -> Tuple[List[Stmt], List[Diagnostic]]:
    """Lex and parse source code, returning ``(statements, diagnostics)``.

    Lexical errors do not stop the parser from running, so a single call
    surfaces both kinds of error.
    """
    lexed = tokenize(source)
    parsed = parse(lexed.tokens)
    return parsed.statements, lexed.errors + parsed.errors


def run_program(source: str, interpreter: Optional[Interpreter] = None,
                reporter: Optional[ErrorReporter] = None) -> RunResult:
    """Run Vyx source through the whole pipeline.

    Diagnostics go to ``reporter`` when one is given. If lexing or parsing
    found any error, nothing is executed.
    """
    if interpreter is None:
        interpreter = Interpreter(reporter=reporter)
    statements, diagnostics = parse_program(source)
    if reporter is not None:
        for diagnostic in diagnostics:
            reporter.report(diagnostic)
    if diagnostics:
        return RunResult(diagnostics=diagnostics)
    errors = interpreter.interpret(statements)
    if reporter is not None and interpreter.reporter is not reporter:
        for error in errors:
            reporter.report_runtime(error)
    return RunResult(runtime_errors=errors)
