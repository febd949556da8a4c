"""
Tests for the bundled example program.
"""

import pytest

from xsys.examples import EXAMPLE_SOURCE, build_example_program
from xsys.parser import parse_string


def test_source_parses_to_built_program():
    assert parse_string(EXAMPLE_SOURCE, strict=True) == build_example_program()


@pytest.mark.parametrize(
    "answers, expected",
    [
        ({"no_boot": "yes"}, "Check the power supply unit and cables"),
        ({"overheating": "yes"}, "Clean the fans and renew the thermal paste"),
        # cooling fires first, gpu is declared later and wins
        ({"graphics_issues": "yes", "fan_noise": "yes"}, "The graphics card may be failing"),
        ({"graphics_issues": "yes", "fan_noise": "no", "no_boot": "no"}, None),
        ({"slow_performance": "yes", "overheating": "no"}, "Run a malware scan and review startup programs"),
        # overheating unanswered: NOT overheating is false
        ({"slow_performance": "yes"}, None),
        ({}, None),
    ],
)
def test_example_answers(answers, expected):
    assert build_example_program().select(answers) == expected
