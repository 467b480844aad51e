import json

from boba.ast_json import ast_from_obj, ast_to_obj, program_from_obj, program_to_obj
from boba.interpreter import Interpreter
from boba.parser import parse_expression, parse_source
from boba.types import IntVal


def test_expression_round_trip():
    node = parse_expression('-(a := 1.25) * f(x, "s") or !true')
    assert ast_from_obj(ast_to_obj(node)) == node


def test_program_round_trip_through_json():
    statements = parse_source('fn f(a, b):\n    a + b\nf(1, 2)')
    document = json.loads(json.dumps(program_to_obj(statements, 'p.boba', 'src')))
    assert document['label'] == 'p.boba'
    assert program_from_obj(document) == statements


def test_locations_are_kept():
    node = parse_expression('1 + 22')
    obj = ast_to_obj(node)
    assert obj['loc'] == [0, 6]
    assert obj['right']['loc'] == [4, 6]


def test_program_from_json_runs_with_diagnostics():
    source = 'let x = 40\nx + 2\n'
    statements = parse_source(source)
    document = json.loads(json.dumps(program_to_obj(statements, 'p.boba', source)))

    interp = Interpreter()
    entry = interp.cache.store(document['label'], document['source'])
    assert interp.run(program_from_obj(document, entry.id)) == IntVal(42)
    assert interp.cache[entry.id].slice(program_from_obj(document, entry.id)[1].location) == 'x + 2'


def test_long_integer_literal_round_trip():
    node = parse_expression('1' + '0' * 5000)
    obj = json.loads(json.dumps(ast_to_obj(node)))
    assert obj['value'] == '1' + '0' * 5000
    assert ast_from_obj(obj) == node
