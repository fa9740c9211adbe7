"""Structured logging for scenematch.

structlog renders both its own loggers and stdlib ``logging.getLogger``
loggers through one formatter. Per-request fields (``request_id``, and any
others the middleware binds) live in structlog's contextvars, so every event
logged while a request is in flight carries them, including events from
provider searches running concurrently under ``asyncio.gather``.
"""

import logging
import sys

import structlog

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "google_genai", "aiohttp.access", "aiosqlite")


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Emit one JSON object per line instead of console output
    """
    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level.upper())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def set_request_context(request_id: str, **fields) -> None:
    """Bind ``request_id`` (plus any extra fields) to every event in this context."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, **fields)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
