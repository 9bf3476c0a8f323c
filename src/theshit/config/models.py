"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``config.toml`` only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from theshit.domain.types import NativeRuleName


def _default_native_rules() -> list[str]:
    return [name.value for name in NativeRuleName]


class RulesConfig(BaseModel):
    """[rules] section.

    ``native`` holds raw names; they are validated when a fix runs so an
    unknown name is reported as a configuration error, not a crash.
    """

    model_config = {"frozen": True}

    native: list[str] = Field(default_factory=_default_native_rules)
    scripts_enabled: bool = True
    directory: Path | None = None
    pattern: str = "**/*.py"


class RunnerConfig(BaseModel):
    """[runner] section — re-running the failed command to capture output."""

    model_config = {"frozen": True}

    rerun: bool = True
    timeout: float = 3.0


class ShitConfig(BaseModel):
    """Top-level config file model."""

    model_config = {"frozen": True}

    rules: RulesConfig = Field(default_factory=RulesConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
