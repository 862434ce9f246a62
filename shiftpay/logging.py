import logging
import sys

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Route structlog events as JSON lines through stdlib logging on stderr."""
    level = level.upper()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        # stdout is reserved for command output
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s")


def bind_command(command: str) -> None:
    """Tag every event logged while ``command`` runs."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
