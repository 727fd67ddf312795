"""
Opt-in log formatting for applications using the SDK.

SDK modules log through ``logging.getLogger(__name__)`` and never touch
handlers. ``setup_logging`` attaches a single structlog-formatted handler
(console output at DEBUG, JSON lines otherwise) to a chosen logger, leaving any
handlers the host application installed in place.
"""

import logging
import sys
from typing import IO, List, Optional

import structlog

from .config import settings

NOISY_LOGGERS = ("httpcore", "httpx", "web3", "urllib3")


class _GteLogHandler(logging.StreamHandler):
    """Marker type so repeated setup replaces only our own handler."""


def _pre_chain(json_output: bool) -> List[structlog.types.Processor]:
    chain: List[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_output:
        chain.append(structlog.processors.format_exc_info)
    return chain


def build_formatter(json_output: bool = True) -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering stdlib records as JSON lines or colored console output."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_pre_chain(json_output),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(
    log_level: Optional[str] = None,
    *,
    stream: Optional[IO[str]] = None,
    logger_name: Optional[str] = None,
) -> logging.Handler:
    """Attach SDK log formatting to ``logger_name`` (the root logger by default).

    Args:
        log_level: Override log level (default: from settings.log_level)
        stream: Destination stream (default: stderr, keeping stdout for command output)
        logger_name: Logger to configure, e.g. ``"gte_sdk"`` to format only SDK records

    Returns the installed handler. Calling again replaces it.
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    handler = _GteLogHandler(stream or sys.stderr)
    handler.setFormatter(build_formatter(json_output=level != logging.DEBUG))

    target = logging.getLogger(logger_name)
    for existing in [h for h in target.handlers if isinstance(h, _GteLogHandler)]:
        target.removeHandler(existing)
    target.addHandler(handler)
    target.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return handler
