"""structlog configuration for routergen.

Output modes:
- Human (default): colored console output to stderr
- JSON (--log-json): Structured JSON lines to stderr
- File (--log-file): JSON lines appended to a diagnostic log, independent of
  the stderr mode and always at DEBUG
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

LOGGER_NAME = "routergen"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Safe to call more than once; handlers are replaced, never stacked.

    Args:
        verbose: Enable DEBUG-level stderr output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer on stderr.
        log_file: Optional path receiving every routergen record as JSON.
    """
    stderr_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(stderr_level)
    handler.setFormatter(_formatter(shared_processors, renderer))

    root_logger = logging.getLogger()
    for old in root_logger.handlers[:]:
        root_logger.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(stderr_level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            _formatter(shared_processors, structlog.processors.JSONRenderer())
        )
        root_logger.addHandler(file_handler)
        app_logger.setLevel(logging.DEBUG)


def _formatter(
    shared_processors: list[structlog.types.Processor],
    renderer: structlog.types.Processor,
) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
