"""
Expression System for xsys

The IF clause of every rule is represented as an Abstract Syntax Tree,
never as a string.

There are exactly two node kinds:
    - ConditionExpression: a reference to a statement, optionally negated
    - LogicalExpression: AND / OR over two sub-expressions

ARCHITECTURAL RULE:
    Nodes are structure only. Evaluation lives in xsys.evaluator,
    rendering lives in the backends.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum


class Expression(ABC):
    """
    Base class for all AST expressions.

    This class is structure only. It exists so the two node kinds share
    a common type.
    """
    pass


class LogicalOperator(Enum):
    """Binary operators of the rule language."""

    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Condition:
    """
    A reference to a statement by name.

    Examples:
        fan_noise          -> Condition("fan_noise", negated=False)
        NOT fan_noise      -> Condition("fan_noise", negated=True)

    Properties:
        variable: Statement name (never empty)
        negated: True when the statement must be answered "no"

    IMPORTANT:
        The name is NOT checked against declared statements.
        An unknown name simply never matches an answer.
    """

    variable: str
    negated: bool = False


@dataclass(frozen=True)
class ConditionExpression(Expression):
    """Leaf node wrapping a Condition."""

    condition: Condition


@dataclass(frozen=True)
class LogicalExpression(Expression):
    """
    Represents an AND / OR node.

    Example:
        graphics_issues AND (fan_noise OR no_boot)

    Becomes:
        LogicalExpression(
            operator=LogicalOperator.AND,
            left=ConditionExpression(Condition("graphics_issues")),
            right=LogicalExpression(
                operator=LogicalOperator.OR,
                left=ConditionExpression(Condition("fan_noise")),
                right=ConditionExpression(Condition("no_boot")),
            ),
        )

    Properties:
        operator: LogicalOperator enum
        left: Left operand (Expression)
        right: Right operand (Expression)

    IMPORTANT:
        This object is immutable (frozen=True).
        Both children are always present.
    """

    operator: LogicalOperator
    left: Expression
    right: Expression


def condition(variable: str, negated: bool = False) -> ConditionExpression:
    """Shorthand for building a leaf node."""
    return ConditionExpression(Condition(variable, negated))


def and_(left: Expression, right: Expression) -> LogicalExpression:
    return LogicalExpression(LogicalOperator.AND, left, right)


def or_(left: Expression, right: Expression) -> LogicalExpression:
    return LogicalExpression(LogicalOperator.OR, left, right)


def iter_conditions(expr: Expression):
    """Yield every Condition in the tree, left to right."""
    if isinstance(expr, ConditionExpression):
        yield expr.condition
    elif isinstance(expr, LogicalExpression):
        yield from iter_conditions(expr.left)
        yield from iter_conditions(expr.right)
    else:
        raise TypeError(f"Unsupported Expression type: {type(expr)}")


def format_expression(expr: Expression) -> str:
    """
    Render an expression back to rule-language text.

    Logical nodes are always parenthesised, so the output parses back to
    the same tree.
    """
    if isinstance(expr, ConditionExpression):
        cond = expr.condition
        return f"NOT {cond.variable}" if cond.negated else cond.variable
    if isinstance(expr, LogicalExpression):
        left = format_expression(expr.left)
        right = format_expression(expr.right)
        return f"({left} {expr.operator.value} {right})"
    raise TypeError(f"Unsupported Expression type: {type(expr)}")
