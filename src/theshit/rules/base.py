"""The Rule capability shared by native and script rules.

Both variants expose ``name``, ``match(command)`` and ``fix(command)``.
:func:`run_rule` is the single dispatch site: it evaluates ``match`` and,
only when it holds, ``fix``. Rule-local failures are logged and turn into
"no fix"; they never abort the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from theshit.errors import RuleError, ScriptError

if TYPE_CHECKING:
    from theshit.domain.command import Command

logger = logging.getLogger(__name__)


class Rule(Protocol):
    """A match predicate plus fix transform."""

    @property
    def name(self) -> str: ...

    def match(self, command: Command) -> bool: ...

    def fix(self, command: Command) -> str: ...


def run_rule(rule: Rule, command: Command) -> str | None:
    """Return the fixed command produced by *rule*, or None."""
    try:
        if not rule.match(command):
            return None
    except (RuleError, ScriptError) as exc:
        logger.warning("Failed to execute 'match' in rule '%s': %s", rule.name, exc)
        return None

    try:
        fixed = rule.fix(command)
    except (RuleError, ScriptError) as exc:
        logger.warning("Failed to execute 'fix' in rule '%s': %s", rule.name, exc)
        return None

    logger.debug("Rule '%s' produced: %s", rule.name, fixed)
    return fixed
