"""structlog configuration for apienvelope.

Library modules log through stdlib loggers under ``apienvelope``; this
module routes them. Switches come from :class:`EnvelopeSettings`, so an
embedding application can drive them with ``APIENVELOPE_*`` variables:
- Human (default): console-rendered output to stderr
- JSON (``log_json``): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

from apienvelope.config.settings import EnvelopeSettings

PACKAGE_LOGGER = "apienvelope"


def _package_level(settings: EnvelopeSettings, verbose: bool) -> int:
    if verbose:
        return logging.DEBUG
    return logging.getLevelNamesMapping()[settings.log_level]


def configure_logging(
    settings: EnvelopeSettings | None = None,
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        settings: Source of ``verbose``, ``log_json`` and ``log_level``.
            Built from the environment when omitted.
        verbose: Override ``settings.verbose``. When True the package
            logger runs at DEBUG, otherwise at ``settings.log_level``.
        log_json: Override ``settings.log_json``.
    """
    settings = settings or EnvelopeSettings()
    verbose = settings.verbose if verbose is None else verbose
    log_json = settings.log_json if log_json is None else log_json

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
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
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(_package_level(settings, verbose))
