"""Script rule loading and execution.

Pipeline per batch: COMMON ROOT → SEARCH PATH → for each file
(SECURITY → MODULE NAME → IMPORT → BIND match/fix → RUN).

Every per-file step returns either its value or a :class:`Skip`. A skip is
logged and the batch moves on; only a missing common root aborts the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from theshit.errors import ConfigurationError, ScriptError
from theshit.plugins import paths, security
from theshit.plugins.engine import ScriptEngine, get_script_engine
from theshit.rules.base import run_rule

if TYPE_CHECKING:
    from theshit.domain.command import Command

logger = logging.getLogger(__name__)

MATCH_FUNCTION = "match"
FIX_FUNCTION = "fix"


@dataclass(frozen=True)
class Skip:
    """A candidate file that was left out of the batch."""

    path: Path
    stage: str
    reason: str


@dataclass(frozen=True)
class ScriptRule:
    """A script rule that passed the gate and exposes ``match`` and ``fix``."""

    path: Path
    module_name: str
    match_fn: Any
    fix_fn: Any
    engine: ScriptEngine

    @property
    def name(self) -> str:
        return f"script:{self.path}"

    def match(self, command: Command) -> bool:
        return self.engine.call_bool(
            self.match_fn, command.command, command.stdout, command.stderr
        )

    def fix(self, command: Command) -> str:
        return self.engine.call_str(self.fix_fn, command.command, command.stdout, command.stderr)


class ScriptRuleLoader:
    """Turns candidate rule files into fixed-command strings."""

    def __init__(self, engine: ScriptEngine | None = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> ScriptEngine:
        if self._engine is None:
            self._engine = get_script_engine()
        return self._engine

    def load_and_run(self, command: Command, candidate_paths: Sequence[Path]) -> list[str]:
        """Run every loadable rule against *command*.

        Returns one entry per matching rule, in the order of
        *candidate_paths*. An empty input returns ``[]``.

        Raises:
            ConfigurationError: the paths share no common ancestor.
        """
        fixed_commands: list[str] = []
        if not candidate_paths:
            return fixed_commands

        with self.engine.lock:
            for rule in self.iter_rules(candidate_paths):
                fixed = run_rule(rule, command)
                if fixed is not None:
                    fixed_commands.append(fixed)
        return fixed_commands

    def load_rules(self, candidate_paths: Sequence[Path]) -> list[ScriptRule]:
        """Import and bind every candidate that passes all loading steps."""
        with self.engine.lock:
            return list(self.iter_rules(candidate_paths))

    def iter_rules(self, candidate_paths: Sequence[Path]) -> Iterator[ScriptRule]:
        """Yield bound rules lazily, one candidate at a time."""
        if not candidate_paths:
            return
        root = paths.common_ancestor(candidate_paths)
        if root is None:
            msg = "No common ancestor found for script rule paths"
            raise ConfigurationError(msg)

        self.engine.add_search_path(root)

        for rule_path in candidate_paths:
            outcome = self._load_one(root, Path(rule_path))
            if isinstance(outcome, Skip):
                logger.debug("Skipped %s at %s: %s", outcome.path, outcome.stage, outcome.reason)
                continue
            yield outcome

    # ------------------------------------------------------------------
    # Per-file steps
    # ------------------------------------------------------------------

    def _load_one(self, root: Path, rule_path: Path) -> ScriptRule | Skip:
        if not security.is_allowed(rule_path):
            return Skip(rule_path, "security", "denied by security gate")

        # Importing a.b.rule runs a/__init__.py and a/b/__init__.py first.
        for init_path in _package_inits(root, rule_path):
            if not security.is_allowed(init_path):
                return Skip(rule_path, "security", f"package file {init_path} denied")

        name = paths.module_name(root, rule_path)
        if name is None:
            return Skip(rule_path, "module_name", "no module name")

        try:
            module = self.engine.import_module(name)
        except ScriptError as exc:
            logger.warning("Failed to import rule module '%s': %s", rule_path, exc)
            return Skip(rule_path, "import", str(exc))

        return self._bind(rule_path, name, module)

    def _bind(self, rule_path: Path, name: str, module: Any) -> ScriptRule | Skip:
        match_fn = self.engine.get_attribute(module, MATCH_FUNCTION)
        fix_fn = self.engine.get_attribute(module, FIX_FUNCTION)
        if not (callable(match_fn) and callable(fix_fn)):
            logger.warning("Rule '%s' is missing required functions (match, fix)", rule_path)
            return Skip(rule_path, "bind", "missing required functions")
        return ScriptRule(
            path=rule_path,
            module_name=name,
            match_fn=match_fn,
            fix_fn=fix_fn,
            engine=self.engine,
        )


def _package_inits(root: Path, rule_path: Path) -> list[Path]:
    """``__init__.py`` files of the packages between *root* and *rule_path*."""
    try:
        relative = rule_path.relative_to(root)
    except ValueError:
        return []
    inits: list[Path] = []
    package = root
    for part in relative.parts[:-1]:
        package = package / part
        init_path = package / "__init__.py"
        if init_path.exists():
            inits.append(init_path)
    return inits


def discover_rule_files(directory: Path, pattern: str = "**/*.py") -> list[Path]:
    """List candidate rule files under *directory* in lexicographic order.

    ``_``-prefixed files and anything inside ``__pycache__`` are ignored.
    A missing directory yields no candidates.
    """
    if not directory.is_dir():
        return []
    found: list[Path] = []
    for candidate in sorted(directory.glob(pattern)):
        if not candidate.is_file():
            continue
        if candidate.name.startswith("_") or "__pycache__" in candidate.parts:
            continue
        found.append(candidate)
    return found
