"""Tests for the nuget-plugin command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nuget_cli.main import main
from nuget_core.runner import CommandResult


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("NUGET_API_KEY", raising=False)
    monkeypatch.delenv("NUGET_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


def _write_config(path: Path, package_dir: Path, **extra: object) -> Path:
    lines = ["nuget:", f"  package_path: '{package_dir / '*.nupkg'}'"]
    lines.extend(f"  {key}: {value}" for key, value in extra.items())
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_info_prints_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["info"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["name"] == "nuget"
    assert payload["hooks"] == ["post-publish"]
    assert "timeout" in payload["config_schema"]["properties"]


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    assert "nuget-plugin v2.0.0" in capsys.readouterr().out


def test_missing_command_is_an_error() -> None:
    assert main([]) == 2


def test_validate_good_config(tmp_path: Path, package_dir: Path, make_plugin, capsys) -> None:
    config = _write_config(tmp_path / "nuget.yml", package_dir, timeout=60)
    assert main(["validate", "--config", str(config)], plugin=make_plugin()) == 0
    assert "configuration is valid" in capsys.readouterr().out


def test_validate_reports_field_errors(tmp_path: Path, make_plugin, capsys) -> None:
    config = tmp_path / "bad.yml"
    config.write_text("source: http://nuget.example.com\ntimeout: 0\n", encoding="utf-8")
    assert main(["validate", "-c", str(config)], plugin=make_plugin()) == 1
    out = capsys.readouterr().out
    assert "source: only HTTPS URLs are allowed" in out
    assert "timeout: must be a positive integer" in out


def test_validate_uses_cwd_config_by_default(tmp_path: Path, make_plugin, capsys) -> None:
    (tmp_path / "nuget.yml").write_text("package_path: ../escape/*.nupkg\n", encoding="utf-8")
    assert main(["validate"], plugin=make_plugin()) == 1
    assert "package_path: path traversal detected" in capsys.readouterr().out


def test_missing_config_file_is_reported(tmp_path: Path, capsys) -> None:
    assert main(["validate", "--config", str(tmp_path / "missing.yml")]) == 1
    assert "config file not found" in capsys.readouterr().err


def test_push_dry_run(tmp_path: Path, package_dir: Path, make_plugin, runner, monkeypatch, capsys) -> None:
    monkeypatch.setenv("NUGET_API_KEY", "env-key")
    config = _write_config(tmp_path / "nuget.yml", package_dir)
    code = main(
        ["push", "--config", str(config), "--release-version", "v3.1.0", "--dry-run"],
        plugin=make_plugin(runner),
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "Would push 3 package(s) to NuGet" in out
    assert '"version": "3.1.0"' in out
    assert runner.calls == []


def test_push_failure_exit_code(tmp_path: Path, package_dir: Path, make_plugin, make_runner, capsys) -> None:
    runner = make_runner([CommandResult(output=b"409 Conflict", error="exit status 1")])
    config = _write_config(tmp_path / "nuget.yml", package_dir, api_key="cli-key")
    code = main(["push", "-c", str(config), "--release-version", "1.0.0"], plugin=make_plugin(runner))
    captured = capsys.readouterr()
    assert code == 1
    assert "failed to push package" in captured.err
    assert "409 Conflict: exit status 1" in captured.err
    assert '"failed_package"' in captured.out
    assert len(runner.calls) == 1


def test_push_other_hook_is_not_handled(tmp_path: Path, make_plugin, runner, capsys) -> None:
    code = main(
        ["push", "--release-version", "1.0.0", "--hook", "pre-plan"],
        plugin=make_plugin(runner),
    )
    assert code == 0
    assert "Hook pre-plan not handled" in capsys.readouterr().out
    assert runner.calls == []
