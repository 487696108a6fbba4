"""
Structured logging configuration with trace IDs
"""
import contextvars
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from marketplace.config import settings

# Context variable to store trace ID across a request
trace_id_var = contextvars.ContextVar("trace_id", default=None)

SERVICE_NAME = "marketplace-messaging"

EXTRA_FIELDS = ("user_id", "listing_id", "other_user_id", "message_id", "count", "duration_ms")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with trace ID and domain fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME

        trace_id = get_trace_id()
        if trace_id:
            log_record["trace_id"] = trace_id

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)


class TraceIdFilter(logging.Filter):
    """Expose the trace ID to plain-text format strings"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id() or "-"
        return True


def _build_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    return logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(trace_id)s] %(message)s")


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None, log_file: Optional[str] = None):
    """Configure root logging; safe to call more than once"""
    level = level or settings.LOG_LEVEL
    json_output = settings.LOG_JSON if json_output is None else json_output
    log_file = log_file or settings.LOG_FILE

    formatter = _build_formatter(json_output)
    root_logger = logging.getLogger()

    # Drop handlers from a previous call
    for handler in list(root_logger.handlers):
        if getattr(handler, "_marketplace", False):
            root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(TraceIdFilter())
        handler._marketplace = True
        root_logger.addHandler(handler)

    root_logger.setLevel(level.upper())

    # Reduce noise from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return root_logger


def get_trace_id() -> Optional[str]:
    """Get current trace ID"""
    return trace_id_var.get()


def set_trace_id(trace_id: str):
    """Set trace ID for current context"""
    trace_id_var.set(trace_id)


def generate_trace_id() -> str:
    """Generate a new trace ID"""
    return str(uuid.uuid4())
