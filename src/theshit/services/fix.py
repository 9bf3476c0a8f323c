"""FixService — the correction pipeline.

Pipeline: SHELL → ALIASES → EXPAND → CAPTURE → NATIVE RULES → SCRIPT RULES

Native rules run first in configured order; the first fix wins. When none
applies, script rules run and the first candidate in file order wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from theshit.domain.command import Command
from theshit.errors import ConfigurationError
from theshit.infrastructure import runner
from theshit.plugins.loader import ScriptRuleLoader, discover_rule_files
from theshit.rules import native_rules, run_rule
from theshit.services.base import BaseService, ShellResolver
from theshit.services.result import ServiceResult
from theshit.shells import get_shell
from theshit.shells.aliases import expand_aliases

if TYPE_CHECKING:
    from theshit.config.settings import ShitSettings
    from theshit.domain.types import ShellKind
    from theshit.plugins.engine import ScriptEngine

logger = logging.getLogger(__name__)


class FixService(BaseService):
    """Turns a failed command into a corrected one."""

    def __init__(
        self,
        settings: ShitSettings,
        *,
        shell_resolver: ShellResolver | None = None,
        engine: ScriptEngine | None = None,
    ) -> None:
        super().__init__(settings, shell_resolver=shell_resolver)
        self._loader = ScriptRuleLoader(engine)

    def fix(
        self,
        raw_command: str,
        *,
        output: runner.CapturedOutput | None = None,
    ) -> ServiceResult:
        """Find a replacement for *raw_command*.

        *output* is the captured stdout/stderr of the failed run. When omitted
        it is taken from the environment or by re-running the command.
        """
        op = "fix"
        raw_command = raw_command.strip()
        if not raw_command:
            return ServiceResult.failure(op, "EMPTY_COMMAND", "No previous command to fix")

        shell_kind = self._resolve_shell()
        if shell_kind is None:
            return ServiceResult.failure(op, "NO_SHELL", "Could not determine the current shell")

        aliases = get_shell(shell_kind).get_aliases()
        expanded = expand_aliases(raw_command, aliases)

        try:
            rules = native_rules(self._settings.rules.native)
        except ConfigurationError as exc:
            return ServiceResult.failure(op, "UNKNOWN_RULE", str(exc))

        captured = output or self._capture(expanded, shell_kind)
        command = Command(command=expanded, stdout=captured.stdout, stderr=captured.stderr)

        for rule in rules:
            fixed = run_rule(rule, command)
            if fixed is not None:
                return self._fixed(fixed, rule.name, shell_kind)

        if self._settings.rules.scripts_enabled:
            candidates = discover_rule_files(
                self._settings.rules_dir, self._settings.rules.pattern
            )
            logger.debug("Found %d script rule candidates", len(candidates))
            try:
                fixes = self._loader.load_and_run(command, candidates)
            except ConfigurationError as exc:
                return ServiceResult.failure(
                    op,
                    "NO_COMMON_ANCESTOR",
                    str(exc),
                    rules_dir=str(self._settings.rules_dir),
                )
            if fixes:
                return self._fixed(fixes[0], "script", shell_kind, candidates=len(fixes))

        return ServiceResult.failure(op, "NO_FIX", "No fix found", command=expanded)

    def _capture(self, command: str, shell_kind: ShellKind) -> runner.CapturedOutput:
        exported = runner.from_env()
        if exported is not None:
            return exported
        if not self._settings.runner.rerun:
            return runner.CapturedOutput()
        return runner.capture(command, shell_kind.value, timeout=self._settings.runner.timeout)

    @staticmethod
    def _fixed(
        fixed: str,
        source: str,
        shell_kind: ShellKind,
        *,
        candidates: int = 1,
    ) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op="fix",
            data={
                "command": fixed,
                "source": source,
                "shell": shell_kind.value,
                "candidates": candidates,
            },
        )
