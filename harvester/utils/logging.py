"""Logging for the harvester: structlog events on stderr.

Every component logs named events through :func:`get_logger`.  The ones a
run produces are ``harvester_configured`` at startup, ``page_fetched`` per
page (INFO when ``verbose``, otherwise DEBUG), ``page_archive_failed`` when
a detached write fails, ``item_count_mismatch`` and ``traversal_complete``
at the end of the chain, ``item_verify_start``/``item_verify_completed``
per item in verbose runs, and ``verification_stage_failed`` when the
verification stage is abandoned.

``configure_logging`` renders them as coloured console lines when stderr is
a terminal, or as JSON lines in production (``APP_ENV=production``) or when
``json_output`` is set.  httpx and httpcore go through the same formatter
but stay at WARNING unless the level is DEBUG.  stdout is left to the
exported collection.
"""

import logging
import os
import sys

import structlog

# Third-party loggers that are chatty at INFO (one line per request).
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Route structlog and stdlib logging to stderr at *log_level*.

    Args:
        log_level: Logging level string; the CLI passes DEBUG for --verbose.
        json_output: Force JSON lines. Otherwise JSON is used only when
                     APP_ENV is "production".

    Returns:
        A configured structlog BoundLogger.
    """
    app_env = os.environ.get("APP_ENV", "development")
    use_json = json_output or app_env == "production"

    # Order matters: contextvars first, then level/timestamps, then exception
    # formatting.
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    level = logging.getLevelName(log_level.upper())

    structlog.configure(
        processors=[
            *shared_processors,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    # httpx logs every request at INFO; only surface it when debugging.
    if level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger.

    If structlog has not been configured yet, calls configure_logging() with defaults.

    Args:
        name: Logger name, typically the module name.

    Returns:
        A structlog BoundLogger bound with the given name.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
