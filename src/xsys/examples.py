"""
Example program: a small computer diagnostics questionnaire.

EXAMPLE_SOURCE is the .xsys text; build_example_program() builds the same
Program directly from model objects.
"""
from xsys.model import Program, Variable, Rule
from xsys.expressions import condition, and_, or_


EXAMPLE_SOURCE = """\
stmt
    no_boot = The computer does not turn on
    fan_noise = The fan is making loud noises
    graphics_issues = The screen shows artifacts or flickers
    slow_performance = The computer is running slowly
    overheating = The case feels hot to the touch
endstmt

results
    power_supply = Check the power supply unit and cables
    cooling = Clean the fans and renew the thermal paste
    gpu = The graphics card may be failing
    malware = Run a malware scan and review startup programs
endresults

rules
    IF no_boot THEN power_supply
    IF fan_noise OR overheating THEN cooling
    IF graphics_issues AND (fan_noise OR no_boot) THEN gpu
    IF slow_performance AND NOT overheating THEN malware
endrules
"""


def build_example_program() -> Program:
    statements = [
        Variable(name="no_boot", value="The computer does not turn on"),
        Variable(name="fan_noise", value="The fan is making loud noises"),
        Variable(name="graphics_issues", value="The screen shows artifacts or flickers"),
        Variable(name="slow_performance", value="The computer is running slowly"),
        Variable(name="overheating", value="The case feels hot to the touch"),
    ]

    results = [
        Variable(name="power_supply", value="Check the power supply unit and cables"),
        Variable(name="cooling", value="Clean the fans and renew the thermal paste"),
        Variable(name="gpu", value="The graphics card may be failing"),
        Variable(name="malware", value="Run a malware scan and review startup programs"),
    ]

    rules = [
        Rule(expression=condition("no_boot"), result="power_supply"),
        Rule(
            expression=or_(condition("fan_noise"), condition("overheating")),
            result="cooling",
        ),
        # graphics_issues AND (fan_noise OR no_boot)
        Rule(
            expression=and_(
                condition("graphics_issues"),
                or_(condition("fan_noise"), condition("no_boot")),
            ),
            result="gpu",
        ),
        Rule(
            expression=and_(
                condition("slow_performance"),
                condition("overheating", negated=True),
            ),
            result="malware",
        ),
    ]

    return Program(statements=statements, results=results, rules=rules)
