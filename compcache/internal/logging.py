import logging
import logging.handlers
import os
import sys
from pathlib import Path
import structlog

_LOGGING_CONFIGURED = False

def _foreign_pre_chain():
    return [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

def setup_logging(log_level_name: str = "INFO", log_file_path: Path = None, console_output: bool = False):
    """
    Configure logging for compcache.
    - Uses structlog for structured logging on top of the stdlib logging handlers.
    - Writes JSON logs to a rotating file if log_file_path ends with '.json',
      plain console-rendered lines otherwise.
    - Can optionally send human-readable logs to stderr, keeping stdout for command output.
    - Log level can be set with the COMPCACHE_LOG_LEVEL environment variable or function argument.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return # Prevent re-configuring logging

    # Determine log level
    effective_log_level_name = os.environ.get("COMPCACHE_LOG_LEVEL", log_level_name).upper()
    log_level = getattr(logging, effective_log_level_name, logging.INFO)

    handlers = []

    if log_file_path:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=5,
        )
        file_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer() if log_file_path.name.endswith('.json') else structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=_foreign_pre_chain(),
        ))
        handlers.append(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(),
            foreign_pre_chain=_foreign_pre_chain(),
        ))
        handlers.append(console_handler)

    # If no handlers, create a NullHandler to prevent "No handlers could be found for logger" messages
    if not handlers:
        handlers.append(logging.NullHandler())

    # Mute noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter, # Key to integrate with stdlib handlers
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )
    _LOGGING_CONFIGURED = True

def get_logger(name: str | None = None):
    return structlog.get_logger(name)
