"""Route investctl's logs to stderr through structlog.

Service modules log with plain ``logging.getLogger(__name__)``; telemetry
logs through structlog.  Both end up in one stderr handler whose
:class:`structlog.stdlib.ProcessorFormatter` adds the bound operation
context (``operation``, ``investment_id``) and renders either console
lines or, with ``--log-json``, one JSON object per line.

stdout stays reserved for command results.
"""

from __future__ import annotations

import logging.config
import sys
from typing import Any

import structlog

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def logging_config(*, verbose: bool, log_json: bool) -> dict[str, Any]:
    """Build the :func:`logging.config.dictConfig` mapping for one invocation.

    ``investctl`` logs at DEBUG under ``--verbose`` and WARNING otherwise;
    SQLAlchemy and everything else stay at WARNING.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "investctl": {
                "()": structlog.stdlib.ProcessorFormatter,
                "foreign_pre_chain": _PRE_CHAIN,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(log_json),
                ],
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "investctl",
            },
        },
        "loggers": {
            "investctl": {"level": "DEBUG" if verbose else "WARNING"},
            "sqlalchemy": {"level": "WARNING"},
        },
        "root": {"level": "WARNING", "handlers": ["stderr"]},
    }


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and point structlog at it."""
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    logging.config.dictConfig(logging_config(verbose=verbose, log_json=log_json))
