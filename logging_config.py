"""
Structured logging for the demand signals API

Events are rendered as one JSON object per line. Each one carries the service
name, and events logged while handling a request also carry the request id
and the endpoint that served it.
"""

import logging
import sys
from typing import Any, Callable, Dict, List

import structlog
from flask import g, has_request_context, request

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

# Third-party loggers that only add noise at INFO
QUIET_LOGGERS = ("werkzeug",)


def service_name_processor(service: str) -> Processor:
    """Build a processor that stamps ``service`` on every event"""
    def add_service_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict
    return add_service_name


def add_request_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the current request's id, endpoint and path"""
    if not has_request_context():
        return event_dict
    event_dict.setdefault("request_id", getattr(g, "request_id", None))
    event_dict["endpoint"] = request.endpoint
    event_dict["method"] = request.method
    event_dict["path"] = request.path
    return event_dict


def build_processors(service: str) -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        service_name_processor(service),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_request_context,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(app_name: str = "demand-signals", log_level: str = "INFO") -> None:
    """
    Configure structlog and the standard library loggers the services use.

    Args:
        app_name: Service name written into every structured event
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=build_processors(app_name),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger("services").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Structured logger, usually named after the calling module"""
    return structlog.get_logger(name or __name__)
