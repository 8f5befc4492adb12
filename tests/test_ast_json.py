import json
from pathlib import Path

import pytest

from vyx.ast_json import ast_from_obj, ast_to_obj, program_from_obj, program_to_obj
from vyx.interpreter import Interpreter, parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


@pytest.mark.parametrize('name', ['program_7.vyx', 'program_8.vyx', 'program_9.vyx', 'program_12.vyx'])
def test_program_survives_json_round_trip(name):
    with open(EXAMPLES / name, 'r', encoding='utf-8') as f:
        statements, diagnostics = parse_program(f.read())
    assert diagnostics == []
    encoded = json.dumps(program_to_obj(statements))
    assert program_from_obj(json.loads(encoded)) == statements


def test_node_encoding_shape():
    statements, _ = parse_program('let x = 1;')
    obj = ast_to_obj(statements[0])
    assert obj['type'] == 'Let'
    assert obj['name'] == {'__type__': 'Token', 'kind': 'IDENTIFIER', 'literal': 'x', 'line': 1, 'column': 5}
    assert obj['initializer'] == {'type': 'Literal', 'value': 1.0}


def test_integer_literals_are_loaded_as_numbers():
    node = ast_from_obj({'type': 'Literal', 'value': 3})
    assert node.value == 3.0
    assert isinstance(node.value, float)


def test_loaded_program_runs(capsys):
    statements, _ = parse_program('fn greet(who) { print("hi " + who); } greet("there");')
    loaded = program_from_obj(json.loads(json.dumps(program_to_obj(statements))))
    assert Interpreter().interpret(loaded) == []
    assert capsys.readouterr().out.strip() == 'hi there'


def test_unknown_node_type_is_rejected():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'Class'})
    with pytest.raises(ValueError):
        program_from_obj({'type': 'Block'})
