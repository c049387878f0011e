"""Route all log output through structlog.

linkfmt modules log with plain ``logging.getLogger(__name__)``. The root
handler installed here renders those records, and any native structlog
events, with one processor chain: human-readable console lines by
default, one JSON object per line with ``--log-json``. Values bound via
:func:`structlog.contextvars.bound_contextvars` (such as the document
being converted) are merged into every line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

APP_LOGGER = "linkfmt"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _formatter(*, log_json: bool, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Install the linkfmt log handler on the root logger.

    Args:
        verbose: Let ``linkfmt.*`` DEBUG records through; otherwise only
            WARNING and above are shown.
        log_json: Render JSON lines instead of console lines.
        stream: Where to write (default: stderr).
    """
    out = stream or sys.stderr

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(_formatter(log_json=log_json, colors=out.isatty()))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
