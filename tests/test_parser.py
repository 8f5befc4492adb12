from vyx.ast import (
    Assign, Binary, Block, Call, Expression, Function, Grouping, If, Let,
    Literal, Logical, Print, Ternary, Unary, Variable, While,
)
from vyx.lexer import tokenize
from vyx.parser import parse
from vyx.tokens import TokenKind


def parse_source(source):
    return parse(tokenize(source).tokens)


def parse_expr(source):
    result = parse_source(source + ';')
    assert result.errors == []
    (stmt,) = result.statements
    assert isinstance(stmt, Expression)
    return stmt.expression


def test_factor_binds_tighter_than_term():
    expr = parse_expr('1 + 2 * 3')
    assert isinstance(expr, Binary)
    assert expr.operator.kind is TokenKind.PLUS
    assert isinstance(expr.right, Binary)
    assert expr.right.operator.kind is TokenKind.STAR


def test_binary_operators_are_left_associative():
    expr = parse_expr('1 - 2 - 3')
    assert expr.operator.kind is TokenKind.MINUS
    assert isinstance(expr.left, Binary)
    assert expr.right == Literal(3.0)


def test_grouping_overrides_precedence():
    expr = parse_expr('(1 + 2) * 3')
    assert expr.operator.kind is TokenKind.STAR
    assert isinstance(expr.left, Grouping)


def test_and_binds_tighter_than_or():
    expr = parse_expr('a or b and c')
    assert isinstance(expr, Logical)
    assert expr.operator.kind is TokenKind.OR
    assert isinstance(expr.right, Logical)
    assert expr.right.operator.kind is TokenKind.AND


def test_unary_nests_and_binds_tighter_than_factor():
    expr = parse_expr('-!x * 2')
    assert isinstance(expr, Binary)
    assert isinstance(expr.left, Unary)
    assert expr.left.operator.kind is TokenKind.MINUS
    assert isinstance(expr.left.right, Unary)


def test_ternary_is_right_associative():
    expr = parse_expr('a ? 1 : b ? 2 : 3')
    assert isinstance(expr, Ternary)
    assert expr.then_branch == Literal(1.0)
    assert isinstance(expr.else_branch, Ternary)


def test_elvis_sits_below_ternary():
    expr = parse_expr('a ?: b ? 1 : 2')
    assert isinstance(expr, Binary)
    assert expr.operator.kind is TokenKind.ELVIS
    assert isinstance(expr.right, Ternary)


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme() == 'a'
    assert isinstance(expr.value, Assign)


def test_invalid_assignment_target_is_reported_but_not_fatal():
    result = parse_source('1 = 2; print(3);')
    assert [e.message for e in result.errors] == ['Invalid assignment target.']
    assert len(result.statements) == 2
    assert isinstance(result.statements[1], Print)


def test_chained_calls():
    expr = parse_expr('f(1)(2, 3)()')
    assert isinstance(expr, Call)
    assert expr.arguments == ()
    assert isinstance(expr.callee, Call)
    assert len(expr.callee.arguments) == 2
    assert isinstance(expr.callee.callee.callee, Variable)


def test_statements():
    result = parse_source(
        'let x = 1; let y; print(x); { x; } if (x) print(1); else print(2); '
        'while (x) x = x - 1; fn f(a, b) { print(a); }'
    )
    assert result.errors == []
    let_x, let_y, pr, block, if_stmt, while_stmt, fn = result.statements
    assert isinstance(let_x, Let) and let_x.initializer == Literal(1.0)
    assert isinstance(let_y, Let) and let_y.initializer is None
    assert isinstance(pr, Print)
    assert isinstance(block, Block) and len(block.statements) == 1
    assert isinstance(if_stmt, If) and isinstance(if_stmt.else_branch, Print)
    assert isinstance(while_stmt, While)
    assert isinstance(fn, Function)
    assert [p.lexeme() for p in fn.params] == ['a', 'b']
    assert len(fn.body) == 1


def test_for_loop_is_desugared_into_block_and_while():
    result = parse_source('for (let i = 0; i < 3; i = i + 1) print(i);')
    assert result.errors == []
    (outer,) = result.statements
    assert isinstance(outer, Block)
    init, loop = outer.statements
    assert isinstance(init, Let)
    assert isinstance(loop, While)
    assert isinstance(loop.body, Block)
    body, increment = loop.body.statements
    assert isinstance(body, Print)
    assert isinstance(increment, Expression)
    assert isinstance(increment.expression, Assign)


def test_for_loop_without_clauses_defaults_to_true():
    result = parse_source('for (;;) print(1);')
    assert result.errors == []
    (loop,) = result.statements
    assert isinstance(loop, While)
    assert loop.condition == Literal(True)
    assert isinstance(loop.body, Print)


def test_missing_semicolon_reports_one_error_and_keeps_parsing():
    result = parse_source('print(1);\nprint(2)\nprint(3);')
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.message == "Expected ';' after print statement."
    assert error.where == "at 'print'"
    assert error.line == 3
    # the statements on either side of the broken one were still parsed
    assert len(result.statements) == 2


def test_each_broken_statement_is_reported():
    result = parse_source('let = 1;\nprint(2);\nlet y = ;\nprint(4);')
    assert [e.line for e in result.errors] == [1, 3]
    assert len(result.statements) == 2


def test_error_at_end_of_input():
    result = parse_source('print(1')
    assert len(result.errors) == 1
    assert result.errors[0].where == 'at end'
    assert str(result.errors[0]) == "[Line 1] Error at end: Expected ')' after expression."


def test_recovery_inside_block():
    result = parse_source('{ let = 1; print(2); }')
    assert len(result.errors) == 1
    (block,) = result.statements
    assert isinstance(block, Block)
    assert len(block.statements) == 1


def test_too_many_arguments_is_reported_but_not_fatal():
    args = ', '.join(['1'] * 256)
    result = parse_source(f'f({args});')
    assert [e.message for e in result.errors] == ["Can't have more than 255 arguments."]
    assert len(result.statements) == 1
    assert len(result.statements[0].expression.arguments) == 256


def test_too_many_parameters_is_reported_but_not_fatal():
    params = ', '.join(f'p{i}' for i in range(256))
    result = parse_source(f'fn f({params}) {{ }}')
    assert [e.message for e in result.errors] == ["Can't have more than 255 parameters."]
    assert len(result.statements[0].params) == 256


def test_deep_nesting_is_reported_and_parsing_continues():
    depth = 2000
    source = 'print(' + '(' * depth + '1' + ')' * depth + ');\nprint(2);'
    result = parse_source(source)
    assert [e.message for e in result.errors] == ['Expression nested too deeply.']
    (stmt,) = result.statements
    assert stmt == Print(Literal(2.0))
