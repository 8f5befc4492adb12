from pathlib import Path

from vyx.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_11_logical_operators(capsys):
    with open(EXAMPLES / 'program_11.vyx', 'r', encoding='utf-8') as f:
        source = f.read()
    statements, diagnostics = parse_program(source)
    assert diagnostics == []
    interp = Interpreter()
    errors = interp.interpret(statements)
    # the right operand of `false and undefinedName` is never evaluated
    assert errors == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        'fallback',
        'zero is truthy',
        'false',
        'empty string is truthy',
        'true',
        'true',
        'false',
        'true',
    ]
