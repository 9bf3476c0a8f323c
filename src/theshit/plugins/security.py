"""Ownership and permission gate for script rule files.

A rule file is imported into the running interpreter with the caller's
privileges, so it must belong to the effective user and must not be
writable by anyone else.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

NON_OWNER_WRITE_MASK = stat.S_IWGRP | stat.S_IWOTH  # 0o022


@dataclass(frozen=True)
class Allow:
    """The file may be imported."""

    path: Path

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class Deny:
    """The file must not be imported."""

    path: Path
    reason: str

    @property
    def allowed(self) -> bool:
        return False


SecurityVerdict = Allow | Deny


def validate(path: Path) -> SecurityVerdict:
    """Check that *path* is safe to import.

    Checks run in order and the first failure wins:

    1. the file can be stat'ed;
    2. it is owned by the effective uid of this process;
    3. it grants no write permission to group or other.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        return Deny(path, f"I/O error: {exc}")

    current_uid = os.geteuid()
    if st.st_uid != current_uid:
        return Deny(
            path,
            f"ownership mismatch: running with UID {current_uid}, but file is owned "
            f"by UID {st.st_uid}",
        )

    if st.st_mode & NON_OWNER_WRITE_MASK:
        mode = stat.S_IMODE(st.st_mode)
        return Deny(path, f"writable by non-owner (mode {mode:#o})")

    return Allow(path)


def is_allowed(path: Path) -> bool:
    """Validate *path*, logging the reason when it is denied."""
    verdict = validate(path)
    if isinstance(verdict, Deny):
        logger.warning(
            "SECURITY: refusing to load script rule '%s': %s. Aborting to prevent "
            "privilege escalation.",
            verdict.path,
            verdict.reason,
        )
        return False
    return True
