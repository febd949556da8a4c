"""
Tests for serialization and deserialization of xsys objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `xsys.serialization`, and pin the dict shape
embedded in generated HTML.
"""

import json

import pytest

from xsys.examples import build_example_program
from xsys.expressions import condition, and_, or_
from xsys.model import Program, Rule, Variable
from xsys.serialization import (
    expr_to_dict,
    expr_from_dict,
    program_to_dict,
    program_from_dict,
    program_to_json,
    program_from_json,
    program_to_yaml,
    program_from_yaml,
)


def test_condition_shape():
    assert expr_to_dict(condition("a", negated=True)) == {
        "type": "condition",
        "condition": {"variable": "a", "negated": True},
    }


def test_logical_shape():
    d = expr_to_dict(or_(condition("a"), condition("b")))
    assert d["type"] == "logical"
    assert d["operator"] == "OR"
    assert d["left"]["condition"]["variable"] == "a"
    assert d["right"]["condition"]["variable"] == "b"


def test_program_dict_shape():
    program = Program(
        statements=[Variable("a", "Q1")],
        results=[Variable("r1", "Outcome1")],
        rules=[Rule(condition("a"), "r1")],
    )
    assert program_to_dict(program) == {
        "statements": [{"name": "a", "value": "Q1"}],
        "results": [{"name": "r1", "value": "Outcome1"}],
        "rules": [
            {
                "expression": {"type": "condition", "condition": {"variable": "a", "negated": False}},
                "result": "r1",
            }
        ],
    }


def test_dict_roundtrip():
    program = build_example_program()
    assert program_from_dict(program_to_dict(program)) == program


def test_json_roundtrip():
    program = build_example_program()
    assert program_from_json(program_to_json(program)) == program


def test_yaml_roundtrip():
    program = build_example_program()
    assert program_from_yaml(program_to_yaml(program)) == program


def test_json_keeps_declaration_order():
    data = json.loads(program_to_json(build_example_program()))
    assert list(data) == ["statements", "results", "rules"]
    assert [s["name"] for s in data["statements"]] == [
        "no_boot", "fan_noise", "graphics_issues", "slow_performance", "overheating",
    ]


def test_json_is_indented():
    assert program_to_json(Program()).startswith('{\n  "statements"')


def test_unknown_expression_type():
    with pytest.raises(TypeError):
        expr_from_dict({"type": "xor"})
    with pytest.raises(TypeError):
        expr_to_dict("a")


def test_nested_expression_roundtrip():
    expr = and_(condition("a"), or_(condition("b", negated=True), condition("c")))
    assert expr_from_dict(expr_to_dict(expr)) == expr
