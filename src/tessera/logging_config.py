"""structlog configuration for applications built on tessera.

Library modules log through the standard ``logging`` module and nothing is
configured on import. Applications (and tests) call :func:`configure_logging` to
render those records, and any structlog events, through structlog processors.
"""

import logging
import sys

import structlog

__all__ = ["configure_logging"]

HANDLER_NAME = "tessera"
"""Name of the root handler installed by :func:`configure_logging`."""


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Configure structlog processors and route output to stderr.

    A stderr handler is added to the root logger and the root level is set to
    WARNING. Handlers installed by the host application are left in place; only
    the handler from an earlier call is replaced, so repeated calls do not stack.

    Args:
        verbose: Emit tessera's DEBUG events (resolution and dispatch). When False,
            only WARNING and above.
        log_json: Render JSON lines instead of the human-readable console format.
    """
    tessera_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
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

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("tessera").setLevel(tessera_level)
