"""
Logging setup for toyen.

Every module logs through a structlog bound logger. Records are routed through
the standard library to a rich handler on stderr, which keeps stdout free for
``toyen build --dry-run``. Interactive terminals get the coloured console
renderer; pipes and CI logs get one JSON object per event.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _renderers(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer(sort_keys=True)]
    return [structlog.dev.ConsoleRenderer(colors=True)]


def setup_logging(config: Config | None = None, json_output: bool | None = None) -> None:
    """Route toyen's logs to stderr.

    Safe to call more than once; each call replaces the previous setup.

    Args:
        config: Supplies the log level. INFO when omitted.
        json_output: Force JSON (True) or console (False) rendering. Defaults
            to JSON unless stderr is a terminal.
    """
    level_name = config.log_level if config else "INFO"
    level = logging.getLevelName(level_name)
    if json_output is None:
        json_output = not sys.stderr.isatty()

    handler = RichHandler(
        console=Console(stderr=True),
        # structlog already stamps the time and level.
        show_time=False,
        show_level=False,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=level == logging.DEBUG,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, *_renderers(json_output)],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a logger for ``name``, usually the calling module's ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach key-value pairs (such as the run id) to every later event."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
