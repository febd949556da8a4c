"""
Tests for the xsys command-line entry point.
"""

import json

import pytest
import yaml

from xsys.cli import main
from xsys.examples import EXAMPLE_SOURCE


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "diagnostics.xsys"
    path.write_text(EXAMPLE_SOURCE, encoding="utf-8")
    return path


def test_generates_html_by_default(source, tmp_path, capsys):
    out = tmp_path / "output"
    assert main(["-i", str(source), "-o", str(out)]) == 0

    html = (tmp_path / "output.html").read_text(encoding="utf-8")
    assert "<h1>Expert System</h1>" in html
    assert "File generated:" in capsys.readouterr().out


def test_title_option(source, tmp_path):
    out = tmp_path / "page"
    assert main(["-i", str(source), "-o", str(out), "-T", "Diagnostics"]) == 0
    assert "<h1>Diagnostics</h1>" in (tmp_path / "page.html").read_text(encoding="utf-8")


def test_generates_json(source, tmp_path):
    out = tmp_path / "rules"
    assert main(["-i", str(source), "-t", "json", "-o", str(out)]) == 0

    data = json.loads((tmp_path / "rules.json").read_text(encoding="utf-8"))
    assert len(data["rules"]) == 4


def test_generates_yaml(source, tmp_path):
    out = tmp_path / "rules"
    assert main(["-i", str(source), "-t", "yaml", "-o", str(out)]) == 0

    data = yaml.safe_load((tmp_path / "rules.yaml").read_text(encoding="utf-8"))
    assert data["results"][0]["name"] == "power_supply"


def test_rejects_wrong_extension(tmp_path, capsys):
    path = tmp_path / "rules.txt"
    path.write_text(EXAMPLE_SOURCE, encoding="utf-8")

    assert main(["-i", str(path)]) == 1
    assert ".xsys extension" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["-i", str(tmp_path / "absent.xsys")]) == 1
    assert "Input file not found" in capsys.readouterr().err


def test_syntax_error(tmp_path, capsys):
    path = tmp_path / "broken.xsys"
    path.write_text("stmt a = Q endstmt results r = R endresults", encoding="utf-8")

    assert main(["-i", str(path), "-o", str(tmp_path / "out")]) == 1
    assert 'Syntax Error: Missing "rules" block' in capsys.readouterr().err
    assert not (tmp_path / "out.html").exists()


def test_answers_print_selected_result(source, tmp_path, capsys):
    code = main(["-i", str(source), "-a", "no_boot=yes", "--answer", "fan_noise=no"])

    assert code == 0
    assert "Result: Check the power supply unit and cables" in capsys.readouterr().out


def test_answers_without_match(source, capsys):
    assert main(["-i", str(source), "-a", "no_boot=no"]) == 0
    assert "No result selected." in capsys.readouterr().out


def test_invalid_answer_value(source):
    with pytest.raises(SystemExit) as exc:
        main(["-i", str(source), "-a", "no_boot=maybe"])
    assert exc.value.code == 2


def test_warnings_for_dangling_references(tmp_path, capsys):
    path = tmp_path / "dangling.xsys"
    path.write_text(
        "stmt\n a = Q\nendstmt\nresults\n r = R\nendresults\nrules\n IF ghost THEN r\nendrules\n",
        encoding="utf-8",
    )

    assert main(["-i", str(path), "-o", str(tmp_path / "out")]) == 0
    err = capsys.readouterr().err
    assert "Warning: Undefined statement references: ghost" in err


def test_strict_rejects_dangling_references(tmp_path, capsys):
    path = tmp_path / "dangling.xsys"
    path.write_text(
        "stmt\n a = Q\nendstmt\nresults\n r = R\nendresults\nrules\n IF a THEN nowhere\nendrules\n",
        encoding="utf-8",
    )

    assert main(["-i", str(path), "--strict", "-o", str(tmp_path / "out")]) == 1
    assert '"nowhere"' in capsys.readouterr().err
