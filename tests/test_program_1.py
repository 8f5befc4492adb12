from pathlib import Path

from vyx.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1(capsys):
    with open(EXAMPLES / 'program_1.vyx', 'r', encoding='utf-8') as f:
        source = f.read()
    statements, diagnostics = parse_program(source)
    interp = Interpreter()
    interp.interpret(statements)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
