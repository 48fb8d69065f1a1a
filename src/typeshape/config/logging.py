"""structlog configuration for typeshape.

Library modules log through stdlib ``logging.getLogger(__name__)`` and attach
schema context with ``extra=``; the formatter installed here lifts the
:data:`LOG_EXTRAS` keys into the structured event so ``--log-json`` lines
carry them as fields:

    {"event": "No coercion path matched", "schema": "fromisoformat",
     "resolution": "unrecognized", "logger": "typeshape.domain.interpreter", ...}

Two output modes:
- Human (default): console renderer to stderr, colored on a TTY
- JSON (--log-json): one JSON object per line to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "typeshape"

# ``extra=`` keys typeshape modules attach to their records.
LOG_EXTRAS: tuple[str, ...] = ("schema", "resolution", "ref", "reason")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route typeshape's records through a single structlog-rendered handler.

    Safe to call repeatedly: the root handler is replaced, never stacked.

    Args:
        verbose: Let ``typeshape`` debug records through (swallowed
            conversion failures, rejected documents). Otherwise WARNING+.
        log_json: Render JSON lines instead of the console format.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(allow=LOG_EXTRAS),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]

    final_processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_json:
        # Tracebacks from swallowed conversion failures become a string field.
        final_processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

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
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=final_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
