"""Tests for ScriptRuleLoader — batch loading and running of script rules."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from theshit.domain.command import Command
from theshit.errors import ConfigurationError
from theshit.plugins import security
from theshit.plugins.loader import ScriptRule, ScriptRuleLoader, discover_rule_files

# -- Rule source code used in tests ---------------------------------------------

_ALWAYS = """\
def match(command, stdout, stderr):
    return True


def fix(command, stdout, stderr):
    return "fixed-command"
"""

_NEVER = """\
def match(command, stdout, stderr):
    return False


def fix(command, stdout, stderr):
    return "should-not-be-called"
"""

_ECHO = """\
def match(command, stdout, stderr):
    return True


def fix(command, stdout, stderr):
    return "|".join([command, stdout, stderr])
"""

_MISSING_MATCH = """\
def fix(command, stdout, stderr):
    return "something"
"""

_NOT_CALLABLE = """\
match = True


def fix(command, stdout, stderr):
    return "something"
"""

_MATCH_RAISES = """\
def match(command, stdout, stderr):
    raise ValueError("oops")


def fix(command, stdout, stderr):
    return "fixed"
"""

_FIX_RAISES = """\
def match(command, stdout, stderr):
    return True


def fix(command, stdout, stderr):
    raise Exception("fix failed")
"""

_MATCH_NOT_BOOL = """\
def match(command, stdout, stderr):
    return "yes"


def fix(command, stdout, stderr):
    return "fixed"
"""

_FIX_NOT_STR = """\
def match(command, stdout, stderr):
    return True


def fix(command, stdout, stderr):
    return 42
"""

_WRONG_ARITY = """\
def match(command):
    return True


def fix(command, stdout, stderr):
    return "fixed"
"""

_SYNTAX_ERROR = """\
def match(
    # missing closing paren and colon
"""

_IMPORT_RAISES = """\
raise RuntimeError("boom at import")
"""

_EXITS = """\
import sys

sys.exit(3)
"""


def _returning(value: str) -> str:
    return f"""\
def match(c, o, e):
    return True


def fix(c, o, e):
    return {value!r}
"""


@pytest.fixture
def command() -> Command:
    return Command(command="test", stdout="", stderr="")


@pytest.fixture
def loader() -> ScriptRuleLoader:
    return ScriptRuleLoader()


class TestLoadAndRun:
    def test_empty_input(self, loader: ScriptRuleLoader, command: Command) -> None:
        assert loader.load_and_run(command, []) == []

    def test_no_common_ancestor(self, loader: ScriptRuleLoader, command: Command) -> None:
        with pytest.raises(ConfigurationError, match="No common ancestor"):
            loader.load_and_run(command, [Path("a/b.py"), Path("c/d.py")])

    def test_single_rule_match(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        path = write_rule(tmp_path, "match_ok.py", _ALWAYS)
        assert loader.load_and_run(command, [path]) == ["fixed-command"]

    def test_rule_no_match(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        path = write_rule(tmp_path, "no_match.py", _NEVER)
        assert loader.load_and_run(command, [path]) == []

    def test_multiple_rules_keep_file_order(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        rule1 = write_rule(tmp_path, "multi1.py", _returning("cmd1"))
        rule2 = write_rule(tmp_path, "multi2.py", _NEVER)
        rule3 = write_rule(tmp_path, "multi3.py", _returning("cmd3"))
        assert loader.load_and_run(command, [rule1, rule2, rule3]) == ["cmd1", "cmd3"]

    def test_order_follows_input_not_name(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        first = write_rule(tmp_path, "order_a.py", _returning("a"))
        second = write_rule(tmp_path, "order_b.py", _returning("b"))
        assert loader.load_and_run(command, [second, first]) == ["b", "a"]

    def test_command_passed_verbatim(
        self,
        loader: ScriptRuleLoader,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        path = write_rule(tmp_path, "echo_rule.py", _ECHO)
        cmd = Command(command="git  psuh ", stdout="out\n", stderr="  err\t")
        assert loader.load_and_run(cmd, [path]) == ["git  psuh |out\n|  err\t"]

    def test_nested_rule_directories(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        top = write_rule(tmp_path, "nested_top.py", _returning("top"))
        deep = write_rule(tmp_path / "nested_pkg" / "inner", "nested_deep.py", _returning("deep"))
        assert loader.load_and_run(command, [top, deep]) == ["top", "deep"]

    @pytest.mark.parametrize(
        ("filename", "source"),
        [
            ("missing_match.py", _MISSING_MATCH),
            ("not_callable.py", _NOT_CALLABLE),
            ("match_raises.py", _MATCH_RAISES),
            ("fix_raises.py", _FIX_RAISES),
            ("match_not_bool.py", _MATCH_NOT_BOOL),
            ("fix_not_str.py", _FIX_NOT_STR),
            ("wrong_arity.py", _WRONG_ARITY),
            ("syntax_error.py", _SYNTAX_ERROR),
            ("import_raises.py", _IMPORT_RAISES),
            ("exits_on_import.py", _EXITS),
        ],
    )
    def test_broken_rule_is_skipped_and_batch_continues(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
        filename: str,
        source: str,
    ) -> None:
        broken = write_rule(tmp_path, filename, source)
        good = write_rule(tmp_path, f"after_{filename}", _returning("still-runs"))
        assert loader.load_and_run(command, [broken, good]) == ["still-runs"]

    def test_missing_functions_logged(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        path = write_rule(tmp_path, "only_fix.py", _MISSING_MATCH)
        with caplog.at_level(logging.WARNING, logger="theshit"):
            loader.load_and_run(command, [path])
        assert "missing required functions" in caplog.text

    def test_import_failure_logged_with_path(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        path = write_rule(tmp_path, "bad_import.py", _IMPORT_RAISES)
        with caplog.at_level(logging.WARNING, logger="theshit"):
            loader.load_and_run(command, [path])
        assert str(path) in caplog.text
        assert "boom at import" in caplog.text

    def test_world_writable_rule_never_imported(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        marker = tmp_path / "imported.marker"
        source = f"open({str(marker)!r}, 'w').close()\n" + _ALWAYS
        path = write_rule(tmp_path, "tampered.py", source, mode=0o666)
        assert loader.load_and_run(command, [path]) == []
        assert not marker.exists()

    def test_foreign_owned_rule_never_imported(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        marker = tmp_path / "foreign.marker"
        source = f"open({str(marker)!r}, 'w').close()\n" + _ALWAYS
        path = write_rule(tmp_path, "foreign.py", source, mode=0o400)
        monkeypatch.setattr(security.os, "geteuid", lambda: os.stat(path).st_uid + 1)
        assert loader.load_and_run(command, [path]) == []
        assert not marker.exists()

    def test_denied_rule_does_not_affect_others(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        denied = write_rule(tmp_path, "denied_one.py", _returning("bad"), mode=0o622)
        allowed = write_rule(tmp_path, "allowed_one.py", _returning("good"))
        assert loader.load_and_run(command, [denied, allowed]) == ["good"]

    def test_writable_package_init_blocks_nested_rule(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        marker = tmp_path / "package_init.marker"
        write_rule(
            tmp_path / "gate_pkg_open",
            "__init__.py",
            f"open({str(marker)!r}, 'w').close()\n",
            mode=0o666,
        )
        nested = write_rule(tmp_path / "gate_pkg_open", "gate_nested.py", _returning("nested"))
        top = write_rule(tmp_path, "gate_top.py", _returning("top"))
        assert loader.load_and_run(command, [nested, top]) == ["top"]
        assert not marker.exists()

    def test_private_package_init_is_allowed(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        write_rule(tmp_path / "gate_pkg_private", "__init__.py", "")
        nested = write_rule(tmp_path / "gate_pkg_private", "gate_inner.py", _returning("inner"))
        top = write_rule(tmp_path, "gate_sibling.py", _returning("sibling"))
        assert loader.load_and_run(command, [nested, top]) == ["inner", "sibling"]

    def test_rule_named_like_stdlib_module_is_skipped(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        shadow = write_rule(tmp_path, "json.py", _returning("shadow"))
        other = write_rule(tmp_path, "not_shadowing.py", _returning("other"))
        with caplog.at_level(logging.WARNING, logger="theshit"):
            assert loader.load_and_run(command, [shadow, other]) == ["other"]
        assert "shadows the standard library module 'json'" in caplog.text
        assert "missing required functions" not in caplog.text

    def test_missing_file_is_skipped(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        present = write_rule(tmp_path, "present.py", _returning("here"))
        assert loader.load_and_run(command, [tmp_path / "absent.py", present]) == ["here"]

    def test_rule_edits_are_picked_up_between_batches(
        self,
        loader: ScriptRuleLoader,
        command: Command,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        path = write_rule(tmp_path, "edited_rule.py", _returning("v1"))
        assert loader.load_and_run(command, [path]) == ["v1"]
        path.write_text(_returning("version-two"), encoding="utf-8")
        assert loader.load_and_run(command, [path]) == ["version-two"]


class TestLoadRules:
    def test_returns_bound_script_rules(
        self,
        loader: ScriptRuleLoader,
        tmp_path: Path,
        write_rule: Callable[..., Path],
    ) -> None:
        good = write_rule(tmp_path, "bound_good.py", _ALWAYS)
        write_rule(tmp_path, "bound_bad.py", _MISSING_MATCH)
        rules = loader.load_rules([good, tmp_path / "bound_bad.py"])
        assert len(rules) == 1
        rule = rules[0]
        assert isinstance(rule, ScriptRule)
        assert rule.module_name == "bound_good"
        assert rule.name == f"script:{good}"
        assert rule.match(Command(command="x")) is True
        assert rule.fix(Command(command="x")) == "fixed-command"

    def test_empty_input(self, loader: ScriptRuleLoader) -> None:
        assert loader.load_rules([]) == []


class TestDiscoverRuleFiles:
    def test_sorted_and_recursive(self, tmp_path: Path, write_rule: Callable[..., Path]) -> None:
        b = write_rule(tmp_path, "b.py", "")
        a = write_rule(tmp_path, "a.py", "")
        nested = write_rule(tmp_path / "pkg", "c.py", "")
        assert discover_rule_files(tmp_path) == [a, b, nested]

    def test_skips_private_and_non_python(
        self, tmp_path: Path, write_rule: Callable[..., Path]
    ) -> None:
        write_rule(tmp_path, "_helper.py", "")
        write_rule(tmp_path, "notes.txt", "")
        write_rule(tmp_path / "__pycache__", "cached.py", "")
        keep = write_rule(tmp_path, "keep.py", "")
        assert discover_rule_files(tmp_path) == [keep]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert discover_rule_files(tmp_path / "nowhere") == []

    def test_custom_pattern(self, tmp_path: Path, write_rule: Callable[..., Path]) -> None:
        top = write_rule(tmp_path, "top.py", "")
        write_rule(tmp_path / "pkg", "deep.py", "")
        assert discover_rule_files(tmp_path, "*.py") == [top]
