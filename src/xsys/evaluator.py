"""
Rule evaluation against a set of answers.

Answers map statement names to "yes" or "no". A missing name means the
question was not answered.

Evaluation is pure and never raises: the Program is read, never written,
so one Program can be evaluated for any number of answer sets at once.
"""

import logging
from typing import Iterable, Iterator, Mapping, Optional

from .expressions import ConditionExpression, Expression, LogicalExpression, LogicalOperator
from .model import Rule, Variable

logger = logging.getLogger(__name__)

YES = "yes"
NO = "no"


def evaluate(expr: Expression, answers: Mapping[str, str]) -> bool:
    """
    Evaluate an expression tree.

    A condition is true only for an exact "yes" (or an exact "no" when
    negated). An unanswered question is false under both polarities.
    """
    if isinstance(expr, ConditionExpression):
        answer = answers.get(expr.condition.variable)
        if expr.condition.negated:
            return answer == NO
        return answer == YES

    if isinstance(expr, LogicalExpression):
        left = evaluate(expr.left, answers)
        right = evaluate(expr.right, answers)
        if expr.operator == LogicalOperator.AND:
            return left and right
        return left or right

    return False


def matching_rules(rules: Iterable[Rule], answers: Mapping[str, str]) -> Iterator[Rule]:
    """Yield the rules whose expression holds, in declaration order."""
    for rule in rules:
        if evaluate(rule.expression, answers):
            logger.debug("Rule fired: %s", rule.result)
            yield rule


def select_result(
    rules: Iterable[Rule],
    answers: Mapping[str, str],
    results: Iterable[Variable],
) -> Optional[str]:
    """
    Text of the selected result, or None.

    The LAST matching rule wins. A matching rule whose result name is not
    declared leaves the current selection unchanged.
    """
    # First declaration wins on duplicate names
    texts = {}
    for result in results:
        texts.setdefault(result.name, result.value)

    selected = None
    for rule in matching_rules(rules, answers):
        if rule.result in texts:
            selected = texts[rule.result]
        else:
            logger.debug("Rule result %r is not declared, skipped", rule.result)
    return selected


__all__ = ["YES", "NO", "evaluate", "matching_rules", "select_result"]
