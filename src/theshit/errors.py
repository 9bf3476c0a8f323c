"""Exception hierarchy for theshit.

Only :class:`ConfigurationError` is allowed to abort a fix run. The other
classes describe failures that stay local to one rule or one file.
"""

from __future__ import annotations


class TheShitError(Exception):
    """Base error for theshit failures."""


class IoError(TheShitError):
    """Raised when a file or process cannot be accessed."""


class SecurityError(TheShitError):
    """Raised when a script rule file fails the ownership/permission gate."""


class ConfigurationError(TheShitError):
    """Raised when the run cannot proceed (no shell, no import root, bad rule name)."""


class ScriptError(TheShitError):
    """Raised when a script rule cannot be imported or invoked."""


class RuleError(TheShitError):
    """Raised by a native rule whose fix cannot be computed."""
