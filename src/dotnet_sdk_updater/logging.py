"""Structured logging for updater runs.

Events are rendered as JSON by default.  Inside a GitHub Actions job they are
rendered as plain key/value lines so the job log stays readable, and local
development runs get a colored console.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from dotnet_sdk_updater.config import Settings, get_settings


def _renderer(settings: Settings) -> Processor:
    if settings.is_development:
        return structlog.dev.ConsoleRenderer(colors=True)
    if settings.github_actions:
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger for one run.

    The workflow run (repository and run id) is bound to every event when
    it is known.
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    # Request lines from the feed and API clients are noise at INFO.
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if settings.repository:
        structlog.contextvars.bind_contextvars(repository=settings.repository)
    if settings.run_id:
        structlog.contextvars.bind_contextvars(run_id=settings.run_id)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)
