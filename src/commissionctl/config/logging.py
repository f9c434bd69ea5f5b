"""structlog setup for commissionctl.

Fee lines own stdout, so every log record goes to stderr, rendered either
for a human (``ConsoleRenderer``) or as one JSON object per line
(``--log-json``). Module loggers use plain ``logging.getLogger(__name__)``;
the service layer emits structured events through ``structlog.get_logger``.
Both paths share the same pre-chain.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "commissionctl"

# HTTP client chatter from the fee schedule fetch.
_HTTP_LOGGERS = ("urllib3", "requests")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
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


def _stderr_handler(log_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route commissionctl logging to stderr.

    Safe to call more than once: the root logger always ends up with a
    single handler. ``verbose`` lowers the ``commissionctl`` logger to DEBUG;
    the root and HTTP client loggers stay at WARNING either way.
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
