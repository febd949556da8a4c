"""
Error taxonomy for xsys parsing.

Every error is a syntax-class error and aborts the whole parse.
Evaluation never raises.
"""

from typing import Optional


class ParseError(Exception):
    """
    Raised when an xsys source cannot be parsed.

    Attributes:
        line: 1-based line number within the section, when known
        text: Offending raw line, when known
        section: Section name ("stmt", "results", "rules"), when known
    """

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        text: Optional[str] = None,
        section: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.text = text
        self.section = section

    def rewrap(self, message: str, **location) -> "ParseError":
        """
        Same error class, new message.

        Location attributes are carried over unless given in `location`.
        """
        kwargs = {"line": self.line, "text": self.text, "section": self.section}
        kwargs.update(location)
        return type(self)(message, **kwargs)


class MissingSection(ParseError):
    """A stmt / results / rules block is absent."""


class MalformedDeclaration(ParseError):
    """A declaration line is not `<name> = <value>`."""


class MalformedRule(ParseError):
    """A rule line is not `IF <condition> THEN <result>`."""


class InvalidCondition(ParseError):
    """A condition has no variable name left after removing NOT."""


class InvalidLogicalExpression(ParseError):
    """An AND / OR operator is missing its left or right operand."""


class DanglingReference(ParseError):
    """A rule names a statement or result that is not declared (strict mode)."""


__all__ = [
    "ParseError",
    "MissingSection",
    "MalformedDeclaration",
    "MalformedRule",
    "InvalidCondition",
    "InvalidLogicalExpression",
    "DanglingReference",
]
