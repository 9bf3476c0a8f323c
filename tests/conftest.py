"""Shared pytest fixtures and test helpers for theshit tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from theshit.config.models import RulesConfig, RunnerConfig
from theshit.config.settings import ShitSettings

_HOOK_ENV_VARS = (
    "SH_SHELL",
    "SH_PREV_CMD",
    "SH_SHELL_ALIASES",
    "SH_PREV_STDOUT",
    "SH_PREV_STDERR",
    "THESHIT_CONFIG",
    "THESHIT_SHELL",
)


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate every test from the caller's shell hook and config directory."""
    for name in _HOOK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler/level changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("theshit")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def rules_dir(tmp_path: Path) -> Path:
    """Empty script rule directory."""
    path = tmp_path / "fix_rules"
    path.mkdir()
    return path


@pytest.fixture
def settings(rules_dir: Path) -> ShitSettings:
    """Settings pinned to bash, with re-running disabled and a temp rule dir."""
    return ShitSettings(
        shell="bash",
        rules=RulesConfig(directory=rules_dir),
        runner=RunnerConfig(rerun=False),
    )


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def _write_rule(directory: Path, name: str, source: str, *, mode: int = 0o600) -> Path:
    """Write a script rule file with *mode* and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    os.chmod(path, mode)
    return path


@pytest.fixture
def write_rule() -> Callable[..., Path]:
    """Return a helper that writes script rule files."""
    return _write_rule
