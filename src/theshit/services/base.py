"""BaseService — shared foundation for theshit services.

Every service receives the resolved :class:`ShitSettings` and a shell
resolver at construction time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from theshit.domain.types import ShellKind
from theshit.shells import get_current_shell

if TYPE_CHECKING:
    from theshit.config.settings import ShitSettings

logger = logging.getLogger(__name__)

ShellResolver = Callable[[], ShellKind | None]


class BaseService:
    """Base for service-layer classes."""

    def __init__(
        self,
        settings: ShitSettings,
        *,
        shell_resolver: ShellResolver | None = None,
    ) -> None:
        self._settings = settings
        self._shell_resolver = shell_resolver or get_current_shell

    def _resolve_shell(self) -> ShellKind | None:
        """Explicit ``--shell`` first, then environment and process detection."""
        explicit = ShellKind.parse(self._settings.shell)
        if explicit is not None:
            return explicit
        if self._settings.shell:
            logger.warning("Unknown shell '%s', falling back to detection", self._settings.shell)
        return self._shell_resolver()
