import logging
from typing import Any

import structlog
from structlog.types import Processor


def setup_logging(json_logs: bool = False, log_level: str = "INFO"):
    """Configure structlog for the obskit package"""

    # Leave an application-provided structlog configuration alone
    if structlog.is_configured():
        return

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if (isinstance(handler, logging.StreamHandler) and
            isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)):
            return

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        timestamper,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        # Format the exception only for JSON logs, as we want to pretty-print them when
        # using the ConsoleRenderer
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    log_renderer: structlog.types.Processor
    if json_logs:
        log_renderer = structlog.processors.JSONRenderer()
    else:
        log_renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        # These run ONLY on `logging` entries that do NOT originate within
        # structlog.
        foreign_pre_chain=shared_processors,
        # These run on ALL entries after the pre_chain is done.
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            log_renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())


class ObsKitStructLogger:
    """
    Structured logger for the obskit package.

    Wraps a structlog logger; ``bind`` returns a new logger carrying the extra
    key/value pairs so that components can tag every event they emit.
    """

    def __init__(self, log_name: str = "obskit", logger: Any = None):
        self.name = log_name
        self.logger = logger if logger is not None else structlog.stdlib.get_logger(log_name)

    def bind(self, **new_values: Any) -> "ObsKitStructLogger":
        """Return a child logger with ``new_values`` bound to every event."""
        return ObsKitStructLogger(self.name, self.logger.bind(**new_values))

    def debug(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.debug(event, *args, **kw)

    def info(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.info(event, *args, **kw)

    def warning(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.warning(event, *args, **kw)

    warn = warning

    def error(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.error(event, *args, **kw)

    def exception(self, event: str | None = None, *args: Any, **kw: Any):
        self.logger.exception(event, *args, **kw)


def get_obskit_logger(log_name: str = "obskit") -> ObsKitStructLogger:
    """Return a structured logger; components bind their own ``component`` key."""
    return ObsKitStructLogger(log_name)


def init_logger(settings):
    """
    Initialize structured logging from an ``ObsKitSettings`` instance.

    Args:
        settings: Settings object exposing ``log_level`` and ``json_logs``

    Returns:
        ObsKitStructLogger: Configured structured logger instance
    """
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)
    return ObsKitStructLogger("obskit")
