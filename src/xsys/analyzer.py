"""
Program Analyzer — inventory and reference checks for xsys programs.

This module provides lightweight analysis of Program objects:
    - Statement and result usage inventory
    - Undefined / unused / duplicate names
    - Expression complexity metrics

IMPORTANT: It does NOT modify the program.
It only produces read-only reports.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Set

from xsys.model import Program, Variable
from xsys.expressions import Expression, ConditionExpression, LogicalExpression


@dataclass
class ExpressionMetrics:
    """Metrics about a single expression tree."""
    depth: int = 0
    node_count: int = 0
    variable_references: Set[str] = field(default_factory=set)


def _analyze_expression(expr: Expression) -> ExpressionMetrics:
    """Recursively analyze an expression tree."""
    metrics = ExpressionMetrics(depth=1, node_count=1)

    if isinstance(expr, LogicalExpression):
        left = _analyze_expression(expr.left)
        right = _analyze_expression(expr.right)
        metrics.depth = 1 + max(left.depth, right.depth)
        metrics.node_count += left.node_count + right.node_count
        metrics.variable_references.update(left.variable_references)
        metrics.variable_references.update(right.variable_references)

    elif isinstance(expr, ConditionExpression):
        metrics.variable_references.add(expr.condition.variable)

    return metrics


def _duplicates(variables: List[Variable]) -> Set[str]:
    counts = Counter(v.name for v in variables)
    return {name for name, count in counts.items() if count > 1}


@dataclass
class ProgramReport:
    """Analysis report for a program."""

    total_statements: int = 0
    total_results: int = 0
    total_rules: int = 0

    # Statement usage (number of rules referencing each statement)
    statement_usage: Dict[str, int] = field(default_factory=dict)
    undefined_statements: Set[str] = field(default_factory=set)
    unused_statements: Set[str] = field(default_factory=set)
    duplicate_statements: Set[str] = field(default_factory=set)

    # Result usage
    undefined_results: Set[str] = field(default_factory=set)
    unused_results: Set[str] = field(default_factory=set)
    duplicate_results: Set[str] = field(default_factory=set)

    # Expression complexity
    max_expression_depth: int = 0
    total_expression_nodes: int = 0

    warnings: List[str] = field(default_factory=list)

    @property
    def referenced_statements(self) -> Set[str]:
        return set(self.statement_usage)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_program(program: Program) -> ProgramReport:
    """
    Analyze a Program.

    Checks for:
    - Rules naming statements or results that are not declared
    - Declared statements and results that no rule uses
    - Names declared more than once in a section
    - Expression complexity

    Returns a ProgramReport with metrics and warnings.
    """
    report = ProgramReport(
        total_statements=len(program.statements),
        total_results=len(program.results),
        total_rules=len(program.rules),
    )

    declared_statements = {s.name for s in program.statements}
    declared_results = {r.name for r in program.results}

    # =========================================================================
    # 1. REFERENCES
    # =========================================================================

    usage: Counter = Counter()
    referenced_results: Set[str] = set()

    for rule in program.rules:
        metrics = _analyze_expression(rule.expression)
        usage.update(metrics.variable_references)
        referenced_results.add(rule.result)

        report.max_expression_depth = max(report.max_expression_depth, metrics.depth)
        report.total_expression_nodes += metrics.node_count

    report.statement_usage = dict(usage)
    report.undefined_statements = set(usage) - declared_statements
    report.unused_statements = declared_statements - set(usage)
    report.undefined_results = referenced_results - declared_results
    report.unused_results = declared_results - referenced_results

    # =========================================================================
    # 2. DUPLICATES
    # =========================================================================

    report.duplicate_statements = _duplicates(program.statements)
    report.duplicate_results = _duplicates(program.results)

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.undefined_statements:
        report.add_warning(
            f"Undefined statement references: {', '.join(sorted(report.undefined_statements))}"
        )

    if report.undefined_results:
        report.add_warning(
            f"Undefined result references: {', '.join(sorted(report.undefined_results))}"
        )

    if report.unused_statements:
        report.add_warning(
            f"Unused statements: {', '.join(sorted(report.unused_statements))}"
        )

    if report.unused_results:
        report.add_warning(
            f"Unused results: {', '.join(sorted(report.unused_results))}"
        )

    if report.duplicate_statements:
        report.add_warning(
            f"Duplicate statement names: {', '.join(sorted(report.duplicate_statements))}"
        )

    if report.duplicate_results:
        report.add_warning(
            f"Duplicate result names: {', '.join(sorted(report.duplicate_results))}"
        )

    if report.max_expression_depth > 5:
        report.add_warning(
            f"High expression complexity: max depth {report.max_expression_depth}"
        )

    return report
