"""Tests for the CLI using Typer's CliRunner."""

import json

from typer.testing import CliRunner

from loopscan.main import app

runner = CliRunner()


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--target" in result.output
    assert "--output" in result.output


def test_missing_target_exits_with_error(tmp_path):
    result = runner.invoke(app, ["--target", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_clean_scan(tmp_path):
    (tmp_path / "ok.js").write_text("// fine\nexport const x = 1;\n")
    result = runner.invoke(app, ["--target", str(tmp_path)])
    assert result.exit_code == 0
    assert "No infinite loop patterns detected." in result.output


def test_output_writes_json(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "loop.js").write_text("while (true) { x++; }\n")
    out = tmp_path / "loops.json"
    result = runner.invoke(app, [f"--target={src}", f"--output={out}"])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["target"] == str(src)
    assert data["summary"]["critical"] == 1
    assert [f["type"] for f in data["findings"]] == ["infinite-while"]


def test_extended_flag_adds_hygiene_rules(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "x.js").write_text("eval(code);\n")
    out = tmp_path / "report.json"

    runner.invoke(app, ["--target", str(src), "--output", str(out)])
    assert json.loads(out.read_text())["findings"] == []

    result = runner.invoke(app, ["--target", str(src), "--output", str(out), "--extended"])
    assert result.exit_code == 0
    types = [f["type"] for f in json.loads(out.read_text())["findings"]]
    assert types == ["unsafe-construct", "undocumented-module"]
