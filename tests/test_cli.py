from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from dependr import __version__
from dependr.cli import app

runner = CliRunner()


@pytest.fixture
def repo(monkeypatch, tmp_path: Path) -> Path:
    root = tmp_path.resolve()
    monkeypatch.setattr("dependr.repo.resolve_repo_root", lambda _start: root)
    monkeypatch.delenv("DEPENDR_SETTINGS", raising=False)
    return root


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_scan_creates_config(repo: Path) -> None:
    (repo / "package.json").write_text("{}", encoding="utf-8")
    result = runner.invoke(app, ["scan", str(repo), "--create-if-missing"])
    assert result.exit_code == 0
    assert "CREATED" in result.stdout
    assert (repo / ".github" / "dependabot.yml").exists()

    again = runner.invoke(app, ["scan", str(repo), "-c"])
    assert again.exit_code == 0
    assert "UP TO DATE" in again.stdout


def test_scan_without_config_fails(repo: Path) -> None:
    result = runner.invoke(app, ["scan", str(repo)])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not (repo / ".github").exists()


def test_scan_dry_run_prints_document(repo: Path) -> None:
    (repo / "go.mod").write_text("module x\n", encoding="utf-8")
    result = runner.invoke(app, ["scan", str(repo), "-c", "--dry-run"])
    assert result.exit_code == 0
    assert "gomod" in result.stdout
    assert not (repo / ".github" / "dependabot.yml").exists()


def test_scan_empty_repo_nothing_to_do(repo: Path) -> None:
    result = runner.invoke(app, ["scan", str(repo), "-c"])
    assert result.exit_code == 0
    assert "NOTHING TO DO" in result.stdout


def test_sniff_uses_existing_config(repo: Path) -> None:
    config = repo / "dependabot.yaml"
    config.write_text("version: 2\nupdates: []\n", encoding="utf-8")
    (repo / "Gemfile").write_text("", encoding="utf-8")
    result = runner.invoke(app, ["sniff", "-p", str(config)])
    assert result.exit_code == 0
    assert "bundler" in config.read_text(encoding="utf-8")


def test_sniff_requires_path() -> None:
    result = runner.invoke(app, ["sniff"])
    assert result.exit_code == 2


def test_sniff_missing_path(repo: Path) -> None:
    result = runner.invoke(app, ["sniff", "--path", str(repo / "missing")])
    assert result.exit_code == 1


def test_invalid_settings_file(repo: Path) -> None:
    settings = repo / "settings.yaml"
    settings.write_text("schedule_interval: hourly\n", encoding="utf-8")
    result = runner.invoke(app, ["scan", str(repo), "-c", "--settings", str(settings)])
    assert result.exit_code == 1


def test_ecosystems_lists_catalog() -> None:
    result = runner.invoke(app, ["ecosystems"])
    assert result.exit_code == 0
    assert "github-actions" in result.stdout
    assert "package.json" in result.stdout


def test_undecodable_config_reports_error(repo: Path) -> None:
    (repo / "dependabot.yml").write_bytes(b"version: 2\nupdates:\n# caf\xe9\n")
    result = runner.invoke(app, ["scan", str(repo)])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_undecodable_settings_reports_error(repo: Path) -> None:
    settings = repo / "settings.yaml"
    settings.write_bytes(b"\xff")
    result = runner.invoke(app, ["scan", str(repo), "-c", "--settings", str(settings)])
    assert result.exit_code == 1
    assert "Error:" in result.output
