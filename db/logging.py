from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(log_level: str, log_format: str = "json") -> None:
    """
    Route stdlib logging (alembic, sqlalchemy) and structlog events to stderr.

    stdout is kept for the seed summary and `--emit-sql` output.
    """
    level = logging.getLevelName(log_level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    processors: list[structlog.typing.Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger("db")
