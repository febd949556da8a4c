"""
Core Program Model Objects

Defines the data structures produced by one parse of an xsys source:
    - Variables (statements and results: name = text)
    - Rules (IF expression THEN result)
    - Program (root container)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable once built
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .expressions import Expression


@dataclass(frozen=True)
class Variable:
    """
    A named piece of text.

    Used for both sections:
        statements: name = question text
        results:    name = outcome text

    Properties:
        name: Identifier used as a lookup key
        value: Free text shown to the user
    """

    name: str
    value: str


@dataclass(frozen=True)
class Rule:
    """
    IF <expression> THEN <result>.

    Properties:
        expression: Boolean Expression over statement names
        result: Name of a result Variable

    IMPORTANT:
        `result` is NOT checked against declared results.
        An unknown name is skipped at selection time.
    """

    expression: Expression
    result: str


@dataclass(frozen=True)
class Program:
    """
    Root container for a parsed xsys source.

    Rule order is significant: when several rules match, the last one wins.

    Properties:
        statements: Declared questions, in source order
        results: Declared outcomes, in source order
        rules: Rules, in source order

    INVARIANTS:
        - Built once, never mutated
        - Names are expected to be unique within a section
          (not enforced, see xsys.analyzer)
    """

    statements: Tuple[Variable, ...] = field(default_factory=tuple)
    results: Tuple[Variable, ...] = field(default_factory=tuple)
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence, store tuples.
        object.__setattr__(self, "statements", tuple(self.statements))
        object.__setattr__(self, "results", tuple(self.results))
        object.__setattr__(self, "rules", tuple(self.rules))

    def get_statement(self, name: str) -> Optional[Variable]:
        """
        Retrieve a statement by name.

        Returns:
            First statement with that name, or None
        """
        for stmt in self.statements:
            if stmt.name == name:
                return stmt
        return None

    def get_result(self, name: str) -> Optional[Variable]:
        """
        Retrieve a result by name.

        Returns:
            First result with that name, or None
        """
        for result in self.results:
            if result.name == name:
                return result
        return None

    def select(self, answers: Mapping[str, str]) -> Optional[str]:
        """Text of the result selected for `answers` (see xsys.evaluator)."""
        from .evaluator import select_result
        return select_result(self.rules, answers, self.results)
