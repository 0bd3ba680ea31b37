from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from doctasks.cli import app
from doctasks.settings import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def definition(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "Doctasks.py"
    path.write_text(
        'arch = dia("arch")\nlatex("paper", figures=[arch], need_aux=False)\n',
        encoding="utf-8",
    )
    return path


def test_plan_prints_rules_and_groups(definition: Path) -> None:
    result = runner.invoke(app, ["plan", "-f", "Doctasks.py"])

    assert result.exit_code == 0, result.output
    assert "./arch.eps\n  <- ./arch.dia\n  $ dia -l -t eps-builtin -e ./arch.eps ./arch.dia" in result.output
    assert "  $ (cd .) pdflatex paper" in result.output
    assert "[figures] ./arch.eps ./arch.pdf" in result.output


def test_plan_for_group(definition: Path) -> None:
    result = runner.invoke(app, ["plan", "-f", "Doctasks.py", "--group", "pdf"])

    assert result.exit_code == 0, result.output
    assert "./paper.pdf" in result.output
    assert "./arch.pdf" in result.output
    assert "./paper.dvi" not in result.output


def test_plan_unknown_group(definition: Path) -> None:
    result = runner.invoke(app, ["plan", "-f", "Doctasks.py", "--group", "slides"])
    assert result.exit_code == 2


def test_definition_errors_are_usage_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "Doctasks.py").write_text('vega("g", "cobol", "latex")\n', encoding="utf-8")

    result = runner.invoke(app, ["build"])

    assert result.exit_code == 2


def test_build_uses_configured_tools(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    tool = tmp_path / "fake-graffle"
    tool.write_text('#!/bin/sh\ncp "$2" "$3"\n', encoding="utf-8")
    tool.chmod(0o755)
    (tmp_path / "arch.graffle").write_text("drawing", encoding="utf-8")
    (tmp_path / "figures.yaml").write_text(
        "targets:\n  - kind: graffle\n    name: arch\n", encoding="utf-8"
    )
    monkeypatch.setenv("DOCTASKS_GRAFFLE", str(tool))
    monkeypatch.setenv("DOCTASKS_DEFINITION_FILE", "figures.yaml")

    result = runner.invoke(app, ["build", "graffle"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "arch.pdf").read_text() == "drawing"


def test_clean_group_removes_its_files(definition: Path, tmp_path: Path) -> None:
    for name in ("arch.eps", "arch.pdf", "paper.pdf", "paper.aux"):
        (tmp_path / name).write_text("old", encoding="utf-8")

    result = runner.invoke(app, ["clean", "figures"])

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "arch.eps").exists()
    assert not (tmp_path / "arch.pdf").exists()
    assert (tmp_path / "paper.pdf").exists()

    result = runner.invoke(app, ["clean"])

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "paper.pdf").exists()
    assert not (tmp_path / "paper.aux").exists()
