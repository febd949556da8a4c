"""
Tests for the xsys Expression System

These tests verify:
    - Expression objects can be created
    - Expression tree composition
    - Expression immutability
    - Traversal and rendering helpers
"""

import pytest
from xsys.expressions import (
    Expression,
    Condition,
    ConditionExpression,
    LogicalExpression,
    LogicalOperator,
    condition,
    and_,
    or_,
    iter_conditions,
    format_expression,
)
from xsys.examples import build_example_program
from xsys.parser import parse_expression


class TestCondition:
    """Test condition leaves."""

    def test_create_condition(self):
        """Should reference a statement by name."""
        cond = Condition("fan_noise")
        assert cond.variable == "fan_noise"
        assert cond.negated is False

    def test_negated_condition(self):
        cond = Condition("fan_noise", negated=True)
        assert cond.negated is True

    def test_condition_immutable(self):
        """Conditions should be immutable."""
        cond = Condition("fan_noise")
        with pytest.raises(AttributeError):
            cond.variable = "Changed"

    def test_condition_expression_is_expression(self):
        assert isinstance(ConditionExpression(Condition("a")), Expression)

    def test_condition_shorthand(self):
        assert condition("a", negated=True) == ConditionExpression(Condition("a", True))


class TestLogicalExpression:
    """Test AND / OR nodes."""

    def test_create_and(self):
        expr = LogicalExpression(LogicalOperator.AND, condition("a"), condition("b"))
        assert expr.operator == LogicalOperator.AND
        assert expr.left == condition("a")
        assert expr.right == condition("b")

    def test_shorthands(self):
        assert and_(condition("a"), condition("b")).operator == LogicalOperator.AND
        assert or_(condition("a"), condition("b")).operator == LogicalOperator.OR

    def test_nested_tree(self):
        """graphics_issues AND (fan_noise OR no_boot)."""
        expr = and_(condition("graphics_issues"), or_(condition("fan_noise"), condition("no_boot")))
        assert isinstance(expr.right, LogicalExpression)
        assert expr.right.operator == LogicalOperator.OR

    def test_logical_immutable(self):
        expr = and_(condition("a"), condition("b"))
        with pytest.raises(AttributeError):
            expr.operator = LogicalOperator.OR

    def test_structural_equality(self):
        assert and_(condition("a"), condition("b")) == and_(condition("a"), condition("b"))
        assert and_(condition("a"), condition("b")) != or_(condition("a"), condition("b"))

    def test_operator_values(self):
        assert LogicalOperator("AND") is LogicalOperator.AND
        assert LogicalOperator("OR") is LogicalOperator.OR


class TestHelpers:
    """Test traversal and rendering."""

    def test_iter_conditions_left_to_right(self):
        expr = and_(condition("a"), or_(condition("b", negated=True), condition("c")))
        assert [c.variable for c in iter_conditions(expr)] == ["a", "b", "c"]
        assert [c.negated for c in iter_conditions(expr)] == [False, True, False]

    def test_iter_conditions_rejects_unknown_node(self):
        with pytest.raises(TypeError):
            list(iter_conditions("a"))

    def test_format_leaf(self):
        assert format_expression(condition("a")) == "a"
        assert format_expression(condition("a", negated=True)) == "NOT a"

    def test_format_parenthesises_logical_nodes(self):
        expr = and_(condition("a"), or_(condition("b"), condition("c")))
        assert format_expression(expr) == "(a AND (b OR c))"

    def test_formatted_rules_parse_back(self):
        """Rendered example rules parse back to the same trees."""
        for rule in build_example_program().rules:
            assert parse_expression(format_expression(rule.expression)) == rule.expression

    def test_formatted_left_nested_tree_parses_back(self):
        """Explicit grouping survives where leftmost splitting would regroup."""
        expr = or_(and_(condition("a"), condition("b", negated=True)), condition("c"))
        assert parse_expression(format_expression(expr)) == expr
