"""
xsys — a small expert-system rule language.

A ``.xsys`` source declares yes/no questions (statements), named outcomes
(results) and ``IF ... THEN ...`` rules. This package compiles such a source
into a read-only Program and evaluates it against a set of answers.

LAYERS:
-------
    parser       raw text -> Program
    evaluator    Program + answers -> selected result
    analyzer     Program -> read-only report
    serialization / backends
                 Program -> JSON, YAML, HTML

The Program is built once and never mutated afterwards.
Every consumer reads it unchanged.
"""

__version__ = "1.0.0"
