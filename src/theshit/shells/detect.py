"""Identify the interactive shell that launched theshit.

Resolution order: the ``SH_SHELL`` environment variable set by the shell
function, then a walk up the process ancestry until an executable named
like a supported shell is found.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

import psutil

from theshit.domain.types import ShellKind

logger = logging.getLogger(__name__)

SHELL_ENV_VAR = "SH_SHELL"
ROOT_PID = 0


class ProcessInspector(Protocol):
    """Read-only view of the process table."""

    def get_parent_pid(self, pid: int) -> int | None: ...

    def get_exe_name(self, pid: int) -> str | None: ...


class PsutilInspector:
    """Process table access backed by psutil."""

    def get_parent_pid(self, pid: int) -> int | None:
        try:
            return psutil.Process(pid).ppid()
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            return None

    def get_exe_name(self, pid: int) -> str | None:
        try:
            proc = psutil.Process(pid)
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            return None
        try:
            exe = proc.exe()
        except (psutil.AccessDenied, psutil.ZombieProcess, psutil.NoSuchProcess):
            exe = ""
        if exe:
            return Path(exe).name
        try:
            # Login shells report their name as "-bash".
            return proc.name().lstrip("-") or None
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            return None


def shell_from_env(environ: Mapping[str, str] | None = None) -> ShellKind | None:
    env = os.environ if environ is None else environ
    return ShellKind.parse(env.get(SHELL_ENV_VAR))


def find_shell_in_process_tree(inspector: ProcessInspector, start_pid: int) -> ShellKind | None:
    """Walk parent links from *start_pid* until a shell executable is found.

    Stops with None at a process without a parent or whose parent is the
    root sentinel (pid 0).
    """
    current = start_pid
    while True:
        shell = ShellKind.parse(inspector.get_exe_name(current))
        if shell is not None:
            logger.debug("Found %s at pid %d", shell, current)
            return shell

        parent = inspector.get_parent_pid(current)
        if parent is None or parent == ROOT_PID:
            return None
        current = parent


def get_current_shell(
    *,
    environ: Mapping[str, str] | None = None,
    inspector: ProcessInspector | None = None,
    start_pid: int | None = None,
) -> ShellKind | None:
    """Resolve the current shell from the environment, then the process tree."""
    shell = shell_from_env(environ)
    if shell is not None:
        return shell
    return find_shell_in_process_tree(
        inspector or PsutilInspector(),
        os.getpid() if start_pid is None else start_pid,
    )
