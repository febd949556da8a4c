"""
HTML questionnaire generator for xsys programs.

Converts a Program into a standalone HTML page:
    - One yes/no radio pair per statement
    - A submit button and a result box
    - The program embedded as JSON, evaluated in the browser with the same
      semantics as xsys.evaluator (last matching rule wins)
"""

import json
from html import escape

from xsys.model import Program
from xsys.serialization import program_to_dict


NO_RESULT_MESSAGE = "No specific issue identified. Your system may be functioning normally."


_STYLE = """
        body {
            font-family: Arial, sans-serif;
            background-color: #f4f4f9;
            margin: 0;
            padding: 20px;
        }
        .container {
            background: white;
            padding: 2rem;
            border-radius: 8px;
            box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);
            max-width: 800px;
            margin: 0 auto;
        }
        h1 {
            font-size: 1.5rem;
            color: #333;
            margin-bottom: 1.5rem;
            text-align: center;
        }
        .statement {
            margin-bottom: 1rem;
            padding: 1rem;
            background: #f9f9f9;
            border-radius: 4px;
            border: 1px solid #ddd;
        }
        .options {
            display: flex;
            gap: 1rem;
        }
        button {
            background: #007bff;
            color: white;
            border: none;
            padding: 0.75rem 1.5rem;
            border-radius: 4px;
            cursor: pointer;
            font-size: 1rem;
            margin-top: 1rem;
        }
        #result {
            margin-top: 1.5rem;
            padding: 1rem;
            background: #e9f5ff;
            border-radius: 4px;
            border: 1px solid #007bff;
            color: #007bff;
            font-weight: bold;
        }
"""

_SCRIPT = """
        const rules = __RULES__;
        const allResults = __RESULTS__;
        const allStatements = __STATEMENTS__;

        const evaluateExpression = (expr, answers) => {
            if (expr.type === 'condition') {
                const answer = answers[expr.condition.variable];
                return expr.condition.negated ? answer === 'no' : answer === 'yes';
            }
            if (expr.type === 'logical') {
                const left = evaluateExpression(expr.left, answers);
                const right = evaluateExpression(expr.right, answers);
                return expr.operator === 'AND' ? left && right : left || right;
            }
            return false;
        };

        document.getElementById('ruleForm').addEventListener('submit', (e) => {
            e.preventDefault();
            const answers = {};
            new FormData(e.target).forEach((value, key) => {
                answers[key] = value;
            });

            let result = null;
            rules.forEach(rule => {
                if (evaluateExpression(rule.expression, answers)) {
                    const resultVar = allResults.find(r => r.name === rule.result);
                    if (resultVar) {
                        result = resultVar.value;
                    }
                }
            });

            document.getElementById('result').textContent =
                result === null ? __NO_RESULT__ : result;
        });
"""


def _embed_json(data) -> str:
    """JSON safe to place inside a <script> element."""
    return json.dumps(data, indent=2).replace("</", "<\\/")


def _statement_html(name: str, text: str) -> str:
    name_attr = escape(name, quote=True)
    return (
        '            <div class="statement">\n'
        f"                <label>{escape(text)}</label>\n"
        '                <div class="options">\n'
        f'                    <label><input type="radio" name="{name_attr}" value="yes"> Yes</label>\n'
        f'                    <label><input type="radio" name="{name_attr}" value="no"> No</label>\n'
        "                </div>\n"
        "            </div>\n"
    )


def generate_html(program: Program, title: str = "Expert System") -> str:
    """
    Generate an HTML questionnaire for a program.

    Args:
        program: Parsed Program
        title: Page heading

    Returns:
        String containing a complete HTML document
    """
    data = program_to_dict(program)

    script = (
        _SCRIPT
        .replace("__RULES__", _embed_json(data["rules"]))
        .replace("__RESULTS__", _embed_json(data["results"]))
        .replace("__STATEMENTS__", _embed_json(data["statements"]))
        .replace("__NO_RESULT__", _embed_json(NO_RESULT_MESSAGE))
    )
    statements = "".join(_statement_html(s.name, s.value) for s in program.statements)

    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '    <meta charset="utf-8">',
        f"    <title>{escape(title)}</title>",
        f"    <style>{_STYLE}    </style>",
        "</head>",
        "<body>",
        '    <div class="container">',
        f"        <h1>{escape(title)}</h1>",
        "        <h2>Answer the following questions:</h2>",
        '        <form id="ruleForm">',
        statements + '            <button type="submit">Diagnose</button>',
        "        </form>",
        "        <h2>Result:</h2>",
        '        <div id="result"></div>',
        "    </div>",
        f"    <script>{script}    </script>",
        "</body>",
        "</html>",
    ]
    return "\n".join(lines) + "\n"


def save_html_file(program: Program, filename: str, title: str = "Expert System") -> None:
    """
    Generate HTML and save to file.

    Args:
        program: Program to render
        filename: Output file path (.html extension recommended)
        title: Page heading
    """
    page = generate_html(program, title=title)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(page)


__all__ = ["NO_RESULT_MESSAGE", "generate_html", "save_html_file"]
