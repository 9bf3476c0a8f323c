"""Script engine port and the in-process Python implementation.

The loader talks to script code only through :class:`ScriptEngine`:
search path registration, import by name, attribute lookup, and calls
whose results are checked against the expected type.

The Python engine mutates ``sys.path`` and ``sys.modules``, which are
process-wide. :func:`get_script_engine` hands out a single instance created
under a lock; batches serialize on :attr:`PythonScriptEngine.lock`.
"""

from __future__ import annotations

import importlib
import logging
import sys
import threading
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from theshit.errors import ScriptError

logger = logging.getLogger(__name__)


class ScriptEngine(Protocol):
    """Capabilities the loader needs from an embedded script runtime."""

    lock: threading.RLock

    def add_search_path(self, path: Path) -> None: ...

    def import_module(self, name: str) -> Any: ...

    def get_attribute(self, module: Any, name: str) -> Any | None: ...

    def call_bool(self, func: Any, *args: str) -> bool: ...

    def call_str(self, func: Any, *args: str) -> str: ...


class PythonScriptEngine:
    """Runs script rules inside the current interpreter."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._imported: set[str] = set()

    def add_search_path(self, path: Path) -> None:
        """Put *path* at the head of ``sys.path`` (moving it if already present)."""
        entry = str(path)
        with self.lock:
            while entry in sys.path:
                sys.path.remove(entry)
            sys.path.insert(0, entry)
            # Rule files may have appeared since the path finders last listed
            # their directories.
            importlib.invalidate_caches()
        logger.debug("Script search path head: %s", entry)

    def import_module(self, name: str) -> ModuleType:
        """Import *name* afresh.

        Modules previously imported through this engine, and the packages
        above them, are dropped from ``sys.modules`` first, so every batch
        executes the files on disk.

        Raises:
            ScriptError: *name* (or a package above it) would shadow a module
                the engine did not load, or the import itself failed.
        """
        prefixes = _package_prefixes(name)
        with self.lock:
            self._check_collision(name, prefixes)
            for prefix in prefixes:
                if prefix in self._imported:
                    sys.modules.pop(prefix, None)
            try:
                module = importlib.import_module(name)
            except (Exception, SystemExit) as exc:
                sys.modules.pop(name, None)
                self._imported.update(p for p in prefixes[:-1] if p in sys.modules)
                msg = f"{type(exc).__name__}: {exc}"
                raise ScriptError(msg) from exc
            self._imported.update(prefixes)
            return module

    def _check_collision(self, name: str, prefixes: list[str]) -> None:
        top = prefixes[0]
        if top in sys.stdlib_module_names:
            msg = f"module name '{name}' shadows the standard library module '{top}'"
            raise ScriptError(msg)
        for prefix in prefixes:
            if prefix in sys.modules and prefix not in self._imported:
                msg = f"module name '{name}' collides with already loaded module '{prefix}'"
                raise ScriptError(msg)

    def get_attribute(self, module: Any, name: str) -> Any | None:
        """Return ``module.name`` or None when it is missing."""
        return getattr(module, name, None)

    def call_bool(self, func: Any, *args: str) -> bool:
        result = self._call(func, args)
        if not isinstance(result, bool):
            msg = f"expected bool, got {type(result).__name__}"
            raise ScriptError(msg)
        return result

    def call_str(self, func: Any, *args: str) -> str:
        result = self._call(func, args)
        if not isinstance(result, str):
            msg = f"expected str, got {type(result).__name__}"
            raise ScriptError(msg)
        return result

    @staticmethod
    def _call(func: Any, args: tuple[str, ...]) -> Any:
        try:
            return func(*args)
        except (Exception, SystemExit) as exc:
            msg = f"{type(exc).__name__}: {exc}"
            raise ScriptError(msg) from exc


def _package_prefixes(name: str) -> list[str]:
    """``a.b.c`` -> ``["a", "a.b", "a.b.c"]``."""
    parts = name.split(".")
    return [".".join(parts[: i + 1]) for i in range(len(parts))]


_engine: PythonScriptEngine | None = None
_engine_lock = threading.Lock()


def get_script_engine() -> PythonScriptEngine:
    """Return the process-wide script engine, creating it on first use."""
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = PythonScriptEngine()
                logger.debug("Initialized Python script engine")
    return _engine
