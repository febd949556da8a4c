#!/usr/bin/env python3
"""
Complete Pipeline Demo: .xsys text → Program → Analysis → Evaluation → HTML

Shows the full workflow:
1. Parse the example diagnostics source
2. Analyze the program
3. Evaluate a few answer sets
4. Generate the HTML questionnaire and the JSON form
"""

from xsys.examples import EXAMPLE_SOURCE
from xsys.parser import parse_string
from xsys.analyzer import analyze_program
from xsys.expressions import format_expression
from xsys.serialization import program_to_json
from xsys.backends import save_html_file


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: .xsys → Program → Analysis → HTML")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse
    # =========================================================================
    print("\n1. PARSING SOURCE...")
    program = parse_string(EXAMPLE_SOURCE)
    print(f"   ✓ Statements: {len(program.statements)}")
    print(f"   ✓ Results: {len(program.results)}")
    print(f"   ✓ Rules: {len(program.rules)}")
    for rule in program.rules:
        print(f"      IF {format_expression(rule.expression)} THEN {rule.result}")

    # =========================================================================
    # STEP 2: Analyze
    # =========================================================================
    print("\n2. ANALYZING PROGRAM...")
    report = analyze_program(program)
    print(f"   ✓ Max expression depth: {report.max_expression_depth}")
    print(f"   ✓ Undefined statements: {report.undefined_statements or 'none'}")
    print(f"   ✓ Unused results: {report.unused_results or 'none'}")
    for warning in report.warnings:
        print(f"      - {warning}")

    # =========================================================================
    # STEP 3: Evaluate
    # =========================================================================
    print("\n3. EVALUATING ANSWERS...")
    scenarios = [
        {"no_boot": "yes"},
        {"graphics_issues": "yes", "fan_noise": "yes"},
        {"slow_performance": "yes", "overheating": "no"},
        {},
    ]
    for answers in scenarios:
        selected = program.select(answers)
        print(f"   {answers} → {selected or 'no result'}")

    # =========================================================================
    # STEP 4: Generate
    # =========================================================================
    print("\n4. GENERATING OUTPUT...")
    save_html_file(program, "diagnostics.html", title="Computer Diagnostics")
    print("   ✓ diagnostics.html")
    with open("diagnostics.json", "w", encoding="utf-8") as f:
        f.write(program_to_json(program))
    print("   ✓ diagnostics.json")


if __name__ == "__main__":
    main()
