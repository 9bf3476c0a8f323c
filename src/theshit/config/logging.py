"""structlog configuration for theshit.

The shell function evaluates whatever ``theshit fix`` prints on stdout, so
every log line goes to stderr. Human output stays short (no timestamps) since
it lands in the terminal right above the corrected command; ``--log-json``
adds timestamps and the hook's shell for bug reports.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SHELL_ENV_VAR = "SH_SHELL"

# Libraries that log on their own at INFO/DEBUG.
QUIET_LOGGERS = ("psutil", "asyncio")


def add_hook_shell(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Record which shell function invoked us, when one did."""
    shell = os.environ.get(SHELL_ENV_VAR)
    if shell:
        event_dict.setdefault("shell", shell)
    return event_dict


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records to a single stderr handler.

    Args:
        verbose: DEBUG for the ``theshit`` loggers; WARNING otherwise.
        log_json: One JSON object per line instead of console lines.
    """
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_json:
        shared += [
            structlog.processors.TimeStamper(fmt="iso"),
            add_hook_shell,
            structlog.processors.format_exc_info,
        ]

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("theshit").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
