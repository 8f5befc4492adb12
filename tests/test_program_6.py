from pathlib import Path

from vyx.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_6_countdown(capsys):
    with open(EXAMPLES / 'program_6.vyx', 'r', encoding='utf-8') as f:
        source = f.read()
    statements, diagnostics = parse_program(source)
    assert diagnostics == []
    interp = Interpreter()
    errors = interp.interpret(statements)
    assert errors == []
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['t=5', 't=4', 't=3', 't=2', 't=1', 'liftoff!']
