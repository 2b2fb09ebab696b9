#!/usr/bin/env python3
"""
Structured logging setup for the recipe analysis pipeline.
Events from this package go through one stdlib handler whose formatter
renders structlog and plain logging records alike.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog
from structlog.stdlib import LoggerFactory, ProcessorFormatter

from .config import AnalyzerConfig

PACKAGE_LOGGER = "recipe_nutrition"

# Applied to structlog events and to records from plain logging calls
SHARED_PROCESSORS = (
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
)


def _render_chain(log_format: str) -> list:
    if log_format == "json":
        return [
            ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [
        ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(),
    ]


def configure_logging(config: Optional[AnalyzerConfig] = None,
                      stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure structured logging with Structlog.

    Args:
        config: Log level and format; read from the environment when omitted
        stream: Destination for log lines, stderr by default

    Returns:
        The package's stdlib logger
    """
    config = config or AnalyzerConfig.from_env()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ProcessorFormatter(
        processors=_render_chain(config.log_format),
        foreign_pre_chain=list(SHARED_PROCESSORS),
    ))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    package_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return package_logger
