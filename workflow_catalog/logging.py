"""
Centralized structured logging configuration.
Call `setup_logging()` once from the CLI before running a command.

Diagnostics go to stderr so that command output and the
generated files stay separate from the log stream.
"""

import logging
import sys

import structlog


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """
    Configure structlog for the catalog tooling.

    Args:
        level: Minimum log level, as a number (10=DEBUG, 20=INFO) or a name ("DEBUG").
        json_output: If True, emit machine-readable JSON logs (for CI annotations).
                     If False, emit human-readable console logs.

    Raises:
        ValueError: If `level` is a name logging does not know.
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
