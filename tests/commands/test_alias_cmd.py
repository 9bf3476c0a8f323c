"""Tests for the alias CLI command."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from theshit.cli import cli


class TestAliasCommand:
    def test_default_name(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--shell", "zsh", "alias"])
        assert result.exit_code == 0
        assert result.stdout.startswith("shit() {")
        assert "export SH_SHELL=zsh" in result.stdout

    def test_custom_name(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--shell", "fish", "alias", "fuck"])
        assert result.exit_code == 0
        assert result.stdout.startswith("function fuck")

    def test_shell_from_env(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SH_SHELL", "bash")
        result = cli_runner.invoke(cli, ["alias"])
        assert result.exit_code == 0
        assert "export SH_SHELL=bash" in result.stdout

    def test_rejects_unknown_shell_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--shell", "tcsh", "alias"])
        assert result.exit_code == 2

    def test_alias_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["alias", "--examples"])
        assert result.exit_code == 0
        assert "eval" in result.output


class TestHookProgram:
    def test_uses_console_script_on_path(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "theshit.commands._context.shutil.which", lambda name: f"/opt/venv/bin/{name}"
        )
        result = cli_runner.invoke(cli, ["--shell", "bash", "alias"])
        assert result.exit_code == 0
        assert "/opt/venv/bin/theshit fix" in result.stdout
        assert "__main__" not in result.stdout

    def test_falls_back_to_argv(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        script = tmp_path / "bin" / "theshit-dev"
        monkeypatch.setattr("theshit.commands._context.shutil.which", lambda name: None)
        monkeypatch.setattr(sys, "argv", [str(script)])
        result = cli_runner.invoke(cli, ["--shell", "zsh", "alias"])
        assert result.exit_code == 0
        assert f"{script.resolve()} fix" in result.stdout
