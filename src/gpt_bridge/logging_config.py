"""Logging setup: structlog rendered through the stdlib root logger.

stdout carries the MCP protocol stream, so the only handler writes to
stderr.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Chatty per-request loggers of the HTTP and protocol stacks
_QUIET_LOGGERS = ('httpx', 'httpcore', 'openai', 'mcp')


def add_server_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict['server'] = 'gpt5-server'
    return event_dict


def _renderer(log_format: str) -> Processor:
    if log_format.lower() == 'json':
        return structlog.processors.JSONRenderer()
    # stderr is captured by the MCP host rather than shown on a tty
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(log_level: str = 'INFO', log_format: str = 'console') -> None:
    """Route structlog and stdlib records to stderr.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: ``json`` for one JSON object per line, otherwise
            key=value console output
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    pre_chain: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        add_server_name,
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=_renderer(log_format), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
