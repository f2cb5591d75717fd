"""Request-id aware logging.

Every request gets a correlation id (taken from ``X-Request-ID`` when the
caller sends one) that is attached to each log record emitted while the
request is handled, so one customer's journey can be traced across the
services it touches.

Usage:
    from app.core.logging_context import set_request_id

    set_request_id("req-abc123")
    logger.info("Booking created")  # -> ... [req-abc123] Booking created
"""

import logging
import uuid
from contextvars import ContextVar

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(request_id)s] %(message)s"


def set_request_id(request_id: str | None = None) -> str:
    """Set the correlation id for the current async context and return it."""
    value = request_id or uuid.uuid4().hex[:12]
    _request_id.set(value)
    return value


def get_request_id() -> str:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()  # type: ignore[attr-defined]
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger()
    for handler in root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())
