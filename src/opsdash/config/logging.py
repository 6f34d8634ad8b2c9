"""structlog configuration for opsdash.

Everything logs to stderr so stdout stays clean for ``--json`` and
``--quiet`` output. Stdlib loggers (``logging.getLogger(__name__)``) are
routed through the same processor chain as structlog loggers.

Human mode renders with ``ConsoleRenderer``; ``--log-json`` emits one JSON
object per line. Either way each line carries the workspace name when one
is given.
"""

from __future__ import annotations

import logging
import sys
from decimal import Decimal
from typing import Any

import structlog

OPSDASH_LOGGER = "opsdash"

# Third-party loggers that stay at WARNING even with -v.
_QUIET_LOGGERS = ("asyncio", "pluggy")


def _money_to_float(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render Decimal amounts (milestones, totals) as plain numbers."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = float(value)
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    workspace: str | None = None,
) -> None:
    """Configure structlog processors and route all output to stderr.

    Args:
        verbose: DEBUG for ``opsdash.*`` loggers; WARNING otherwise.
        log_json: JSON lines instead of the console renderer.
        workspace: Bound into every log line as ``workspace``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _money_to_float,
    ]

    renderer: structlog.types.Processor
    if log_json:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(OPSDASH_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if workspace:
        structlog.contextvars.bind_contextvars(workspace=workspace)
