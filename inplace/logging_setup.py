import logging
import sys
from typing import Optional, TextIO

import structlog

LOGGER_NAME = "inplace"

def configure_logging(log_level_str: str = "warning", json_output: bool = False, stream: Optional[TextIO] = None):
    # routes the plugin's structlog events through the stdlib "inplace" logger.
    # hosts usually own logging; call this only when running standalone.
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)
    stream = stream or sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[structlog.stdlib.add_log_level],
    ))

    plugin_logger = logging.getLogger(LOGGER_NAME)
    plugin_logger.handlers.clear()
    plugin_logger.addHandler(handler)
    plugin_logger.setLevel(log_level)
    plugin_logger.propagate = False

    structlog.get_logger(__name__).info("logging_configured", level=log_level_str, json=json_output)
