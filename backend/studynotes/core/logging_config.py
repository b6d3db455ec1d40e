import logging
import sys
from opentelemetry import trace
from ..config import Settings


def current_trace_id():
    """Short trace id of the recording span, or None"""
    span = trace.get_current_span()
    if not span.is_recording():
        return None
    span_context = span.get_span_context()
    if not span_context.trace_id:
        return None
    return format(span_context.trace_id, '032x')[:16]  # First 16 chars for readability


class TraceIdFormatter(logging.Formatter):
    """
    Formatter that appends the OpenTelemetry trace ID when a span is active

    With telemetry disabled no span is ever recording, so the output is the
    plain format.
    """

    def __init__(self, fmt=None, datefmt=None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._traced = logging.Formatter(fmt=f"{fmt} [trace_id=%(trace_id)s]", datefmt=datefmt)

    def format(self, record):
        trace_id = current_trace_id()
        if trace_id:
            record.trace_id = trace_id
            return self._traced.format(record)
        return super().format(record)


def setup_logging(settings: Settings):
    """Configure logging for the application"""
    log_level = settings.log_level.upper()
    
    handler = logging.StreamHandler(sys.stdout)
    formatter = TraceIdFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)
    
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[handler]
    )
    
    # Set specific log levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    
    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {log_level}")
