"""
Serialization helpers for xsys objects (Program, Rule, Expression, etc.).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
The dict shape is the one embedded in generated HTML pages, so it must stay
stable: {"statements": [...], "results": [...], "rules": [...]}.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from xsys.model import Program, Variable, Rule
from xsys.expressions import (
    Condition,
    ConditionExpression,
    Expression,
    LogicalExpression,
    LogicalOperator,
)


def expr_to_dict(expr: Expression) -> Dict[str, Any]:
    if isinstance(expr, ConditionExpression):
        return {
            "type": "condition",
            "condition": {
                "variable": expr.condition.variable,
                "negated": expr.condition.negated,
            },
        }
    if isinstance(expr, LogicalExpression):
        return {
            "type": "logical",
            "operator": expr.operator.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Dict[str, Any]) -> Expression:
    t = d.get("type")
    if t == "condition":
        cond = d["condition"]
        return ConditionExpression(
            Condition(variable=cond["variable"], negated=bool(cond.get("negated", False)))
        )
    if t == "logical":
        op = LogicalOperator(d["operator"])
        left = expr_from_dict(d["left"])
        right = expr_from_dict(d["right"])
        return LogicalExpression(operator=op, left=left, right=right)
    raise TypeError(f"Unsupported expression dict type: {t}")


def variable_to_dict(v: Variable) -> Dict[str, Any]:
    return {"name": v.name, "value": v.value}


def variable_from_dict(d: Dict[str, Any]) -> Variable:
    return Variable(name=d["name"], value=d.get("value", ""))


def rule_to_dict(r: Rule) -> Dict[str, Any]:
    return {"expression": expr_to_dict(r.expression), "result": r.result}


def rule_from_dict(d: Dict[str, Any]) -> Rule:
    return Rule(expression=expr_from_dict(d["expression"]), result=d["result"])


def program_to_dict(p: Program) -> Dict[str, Any]:
    return {
        "statements": [variable_to_dict(v) for v in p.statements],
        "results": [variable_to_dict(v) for v in p.results],
        "rules": [rule_to_dict(r) for r in p.rules],
    }


def program_from_dict(d: Dict[str, Any]) -> Program:
    return Program(
        statements=[variable_from_dict(v) for v in d.get("statements", [])],
        results=[variable_from_dict(v) for v in d.get("results", [])],
        rules=[rule_from_dict(r) for r in d.get("rules", [])],
    )


def program_to_json(p: Program) -> str:
    return json.dumps(program_to_dict(p), indent=2)


def program_from_json(s: str) -> Program:
    d = json.loads(s)
    return program_from_dict(d)


def program_to_yaml(p: Program) -> str:
    return yaml.safe_dump(program_to_dict(p), sort_keys=False)


def program_from_yaml(s: str) -> Program:
    d = yaml.safe_load(s)
    return program_from_dict(d)
