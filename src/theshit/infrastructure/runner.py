"""Capture the output of the failed command.

The shell function only hands over the command text, so stdout and stderr
are recovered by running the command again through the user's shell.
``SH_PREV_STDOUT``/``SH_PREV_STDERR`` take precedence when a hook exports
them.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

STDOUT_ENV_VAR = "SH_PREV_STDOUT"
STDERR_ENV_VAR = "SH_PREV_STDERR"


@dataclass(frozen=True)
class CapturedOutput:
    stdout: str = ""
    stderr: str = ""


def from_env(environ: Mapping[str, str] | None = None) -> CapturedOutput | None:
    """Return output exported by the shell hook, if any."""
    env = os.environ if environ is None else environ
    if STDOUT_ENV_VAR not in env and STDERR_ENV_VAR not in env:
        return None
    return CapturedOutput(stdout=env.get(STDOUT_ENV_VAR, ""), stderr=env.get(STDERR_ENV_VAR, ""))


def capture(command: str, shell: str, *, timeout: float = 3.0) -> CapturedOutput:
    """Run *command* with ``<shell> -c`` and return what it printed.

    A timeout or a failure to start the shell yields empty output and a
    warning; the caller can still try rules that only look at the text.
    """
    env = dict(os.environ)
    # Some programs only print their hints in English.
    env["LC_ALL"] = "C"
    try:
        proc = subprocess.run(
            [shell, "-c", command],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            env=env,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Re-running '%s' timed out after %ss", command, timeout)
        return CapturedOutput()
    except OSError as exc:
        logger.warning("Could not re-run '%s' with %s: %s", command, shell, exc)
        return CapturedOutput()

    logger.debug("Re-ran '%s' (exit %d)", command, proc.returncode)
    return CapturedOutput(stdout=proc.stdout, stderr=proc.stderr)
