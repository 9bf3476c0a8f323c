"""Compiled-in rules and the native half of the Rule capability.

Each rule module exposes ``is_match(command) -> bool`` and
``fix(command) -> str``. A fix may raise :class:`~theshit.errors.RuleError`,
which is logged and treated as "no fix".
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING

from theshit.domain.types import NativeRuleName, parse_rule_names
from theshit.errors import ConfigurationError
from theshit.rules import cargo_no_command, mkdir_p, sudo, to_cd, unsudo
from theshit.rules.base import Rule, run_rule

if TYPE_CHECKING:
    from theshit.domain.command import Command

NATIVE_RULES: dict[NativeRuleName, ModuleType] = {
    NativeRuleName.SUDO: sudo,
    NativeRuleName.TO_CD: to_cd,
    NativeRuleName.UNSUDO: unsudo,
    NativeRuleName.MKDIR_P: mkdir_p,
    NativeRuleName.CARGO_NO_COMMAND: cargo_no_command,
}


@dataclass(frozen=True)
class NativeRule:
    """A compiled-in rule resolved by name."""

    rule_name: NativeRuleName
    is_match: Callable[[Command], bool]
    fix_fn: Callable[[Command], str]

    @property
    def name(self) -> str:
        return f"native:{self.rule_name.value}"

    def match(self, command: Command) -> bool:
        return self.is_match(command)

    def fix(self, command: Command) -> str:
        return self.fix_fn(command)


def get_native_rule(rule_name: NativeRuleName | str) -> NativeRule:
    """Resolve *rule_name* to its rule.

    Raises:
        ConfigurationError: *rule_name* is not a compiled-in rule.
    """
    if isinstance(rule_name, NativeRuleName):
        name = rule_name
    else:
        parsed = parse_rule_names([rule_name])
        if not parsed:
            msg = "Empty native rule name"
            raise ConfigurationError(msg)
        name = parsed[0]
    module = NATIVE_RULES[name]
    return NativeRule(rule_name=name, is_match=module.is_match, fix_fn=module.fix)


def native_rules(names: list[str] | str | None = None) -> list[NativeRule]:
    """Resolve a configured list of rule names, all of them when *names* is None.

    Every name is validated before any rule is returned.
    """
    parsed = list(NativeRuleName) if names is None else parse_rule_names(names)
    return [get_native_rule(name) for name in parsed]


def fix_native(rule_name: NativeRuleName | str, command: Command) -> str | None:
    """Run one native rule: ``fix`` only when ``is_match`` holds."""
    return run_rule(get_native_rule(rule_name), command)


__all__ = [
    "NATIVE_RULES",
    "NativeRule",
    "Rule",
    "fix_native",
    "get_native_rule",
    "native_rules",
    "run_rule",
]
