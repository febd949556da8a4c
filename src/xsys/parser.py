"""
xsys Parser (Layer 1: Raw Text -> Program).

Converts a ``.xsys`` source into a Program.

Source Format:
    stmt
        <name> = <question text>
    endstmt

    results
        <name> = <outcome text>
    endresults

    rules
        IF <condition-expr> THEN <result-name>
    endrules

Syntax Notes:
    - Section keywords are literal and case-sensitive
    - AND / OR are case-sensitive, NOT is matched in any case
    - The FIRST top-level AND / OR in a condition is the split point.
      There is no precedence table: ``a AND b OR c`` means ``a AND (b OR c)``.
      Use parentheses for any other grouping.

The first error aborts the whole parse. A partial Program is never returned.
"""

import logging
import re
from typing import List, Tuple

from .errors import (
    ParseError,
    MissingSection,
    MalformedDeclaration,
    MalformedRule,
    InvalidCondition,
    InvalidLogicalExpression,
    DanglingReference,
)
from .expressions import (
    Condition,
    ConditionExpression,
    Expression,
    LogicalExpression,
    LogicalOperator,
    iter_conditions,
)
from .model import Program, Rule, Variable

logger = logging.getLogger(__name__)


# (start keyword, end keyword), in the order they are checked
SECTIONS = (
    ("stmt", "endstmt"),
    ("results", "endresults"),
    ("rules", "endrules"),
)

OPERATOR_TOKENS = (LogicalOperator.AND, LogicalOperator.OR)

RULE_PATTERN = re.compile(r"IF\s+(.*)\s+THEN\s+(\w+)")
NOT_PATTERN = re.compile(r"\bNOT\b", re.IGNORECASE)

START_PATTERN = re.compile(r"\b(" + "|".join(start for start, _ in SECTIONS) + r")\b")
_BODY_PATTERNS = {
    start: re.compile(rf"\s*(.*?)\s*\b{end}\b", re.DOTALL)
    for start, end in SECTIONS
}


# =============================================================================
# BLOCK EXTRACTOR
# =============================================================================

def extract_blocks(text: str) -> Tuple[str, str, str]:
    """
    Locate the stmt, results and rules sections.

    The text is scanned left to right and each section body is skipped as a
    whole, so keywords inside a section's text never start another section.

    Returns:
        (stmt_body, results_body, rules_body), each trimmed at the edges

    Raises:
        MissingSection: naming the first section that was not found

    Duplicate sections are not rejected: the first match wins.
    A start keyword with no matching end keyword is not a section.
    """
    bodies = {}
    pos = 0
    while True:
        start = START_PATTERN.search(text, pos)
        if start is None:
            break
        name = start.group(1)
        body = _BODY_PATTERNS[name].match(text, start.end())
        if body is None:
            pos = start.end()
            continue
        bodies.setdefault(name, body.group(1).strip())
        pos = body.end()

    for name, _ in SECTIONS:
        if name not in bodies:
            raise MissingSection(
                f'Missing "{name}" block. '
                f'Ensure the input contains a "{name}" section.',
                section=name,
            )
    logger.debug("Found sections: %s", ", ".join(name for name, _ in SECTIONS))
    return bodies["stmt"], bodies["results"], bodies["rules"]


def _non_blank_lines(block: str) -> List[str]:
    return [line for line in block.split("\n") if line.strip()]


# =============================================================================
# DECLARATION PARSER
# =============================================================================

def parse_declarations(block: str, section: str) -> List[Variable]:
    """
    Parse ``name = value`` lines.

    Line numbers in errors count non-blank lines only, starting at 1.
    A line must contain exactly one ``=``.
    """
    variables = []
    for index, line in enumerate(_non_blank_lines(block), start=1):
        parts = [part.strip() for part in line.split("=")]
        if len(parts) != 2:
            raise MalformedDeclaration(
                f'Invalid variable declaration in {section} block at line {index}: "{line}". '
                "Expected format: <name> = <value>",
                line=index,
                text=line,
                section=section,
            )
        name, value = parts
        variables.append(Variable(name=name, value=value))
    return variables


# =============================================================================
# EXPRESSION PARSER
# =============================================================================

def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _token_at(text: str, pos: int, token: str) -> bool:
    """True when `token` starts at `pos` as a whole word."""
    if not text.startswith(token, pos):
        return False
    if pos > 0 and _is_word_char(text[pos - 1]):
        return False
    end = pos + len(token)
    if end < len(text) and _is_word_char(text[end]):
        return False
    return True


def _wrapped_in_parens(text: str) -> bool:
    """True when the opening ``(`` closes exactly at the last character."""
    if not (text.startswith("(") and text.endswith(")")):
        return False
    depth = 0
    for pos, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return pos == len(text) - 1
    return False


def parse_condition(text: str) -> Condition:
    """
    Parse a leaf: ``[NOT] name``.

    Raises:
        InvalidCondition: if nothing is left once NOT is removed
    """
    stripped, count = NOT_PATTERN.subn("", text, count=1)
    variable = stripped.strip()
    if not variable:
        raise InvalidCondition(
            f'Invalid condition: "{text}". '
            'Expected format: "NOT <variable>" or "<variable>"'
        )
    return Condition(variable=variable, negated=count > 0)


def parse_expression(text: str) -> Expression:
    """
    Parse condition text into an Expression tree.

    Splits on the leftmost AND / OR found outside parentheses.

    Raises:
        InvalidCondition: empty variable name
        InvalidLogicalExpression: operator with an empty side
    """
    text = text.strip()

    if _wrapped_in_parens(text):
        return parse_expression(text[1:-1])

    depth = 0
    for pos, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if depth != 0:
            continue
        for operator in OPERATOR_TOKENS:
            token = operator.value
            if not _token_at(text, pos, token):
                continue
            left = text[:pos].strip()
            right = text[pos + len(token):].strip()
            if not left or not right:
                raise InvalidLogicalExpression(
                    f'Invalid logical expression: "{text}". '
                    'Expected format: "<expression> AND <expression>" '
                    'or "<expression> OR <expression>"'
                )
            return LogicalExpression(
                operator=operator,
                left=parse_expression(left),
                right=parse_expression(right),
            )

    return ConditionExpression(parse_condition(text))


# =============================================================================
# RULE PARSER
# =============================================================================

def parse_rule(line: str, index: int) -> Rule:
    """
    Parse ``IF <condition> THEN <result>``.

    Args:
        line: Raw rule line
        index: 1-based line number (non-blank lines only)
    """
    match = RULE_PATTERN.search(line)
    if match is None:
        raise MalformedRule(
            f'Invalid rule at line {index}: "{line}". '
            'Expected format: "IF <condition> THEN <result>"',
            line=index,
            text=line,
            section="rules",
        )
    condition_text, result = match.groups()
    try:
        expression = parse_expression(condition_text)
    except ParseError as exc:
        raise exc.rewrap(
            f'Error in rule at line {index}: "{line}". Details: {exc.message}',
            line=index,
            text=line,
            section="rules",
        ) from exc
    return Rule(expression=expression, result=result)


def parse_rules(block: str) -> List[Rule]:
    rules = [
        parse_rule(line, index)
        for index, line in enumerate(_non_blank_lines(block), start=1)
    ]
    logger.debug("Parsed %d rule(s)", len(rules))
    return rules


# =============================================================================
# ENTRY POINTS
# =============================================================================

def check_references(program: Program) -> None:
    """
    Raise DanglingReference for the first rule naming an undeclared
    statement or result.
    """
    statements = {stmt.name for stmt in program.statements}
    results = {result.name for result in program.results}

    for index, rule in enumerate(program.rules, start=1):
        for cond in iter_conditions(rule.expression):
            if cond.variable not in statements:
                raise DanglingReference(
                    f'Rule at line {index} references undeclared statement "{cond.variable}"',
                    line=index,
                    section="rules",
                )
        if rule.result not in results:
            raise DanglingReference(
                f'Rule at line {index} references undeclared result "{rule.result}"',
                line=index,
                section="rules",
            )


def parse_string(text: str, strict: bool = False) -> Program:
    """
    Parse a complete xsys source.

    Args:
        text: Source text
        strict: Reject rules that name undeclared statements or results

    Returns:
        Program

    Raises:
        MissingSection: a section is absent (not prefixed)
        ParseError: any other syntax error, prefixed with
            "Failed to parse input: "
    """
    stmt_block, results_block, rules_block = extract_blocks(text)

    try:
        program = Program(
            statements=parse_declarations(stmt_block, "stmt"),
            results=parse_declarations(results_block, "results"),
            rules=parse_rules(rules_block),
        )
        if strict:
            check_references(program)
    except ParseError as exc:
        raise exc.rewrap(f"Failed to parse input: {exc.message}") from exc

    logger.debug(
        "Parsed program: %d statement(s), %d result(s), %d rule(s)",
        len(program.statements),
        len(program.results),
        len(program.rules),
    )
    return program


def parse_file(path: str, strict: bool = False) -> Program:
    """Read a ``.xsys`` file (UTF-8) and parse it."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return parse_string(text, strict=strict)


__all__ = [
    "extract_blocks",
    "parse_declarations",
    "parse_condition",
    "parse_expression",
    "parse_rule",
    "parse_rules",
    "check_references",
    "parse_string",
    "parse_file",
]
