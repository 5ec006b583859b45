"""Logging setup: stderr, optional log file, optional HTTP log sink."""
import logging
import queue
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Dict, Optional

import requests

# Keys copied from a LogRecord's ``extra`` into the sink payload, with their wire names.
_EVENT_FIELDS = {
    "event": "event",
    "request_id": "requestId",
    "city": "city",
    "error": "error",
}


class HttpLogHandler(logging.Handler):
    """
    Ships log records as JSON events to an HTTP ingestion endpoint.

    Records are posted synchronously, so the handler is meant to sit behind a
    QueueListener rather than on the event loop thread.
    """

    def __init__(self, url: str, token: str, timeout: float = 5.0, level: int = logging.NOTSET):
        super().__init__(level)
        self.url = url
        self.token = token
        self.timeout = timeout

    def build_payload(self, record: logging.LogRecord) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for attr, key in _EVENT_FIELDS.items():
            value = getattr(record, attr, None)
            if value is not None:
                payload[key] = value
        payload.setdefault("event", "log")
        payload["level"] = record.levelname
        payload["message"] = record.getMessage()
        payload["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        return payload

    def emit(self, record: logging.LogRecord) -> None:
        try:
            response = requests.post(
                self.url,
                json=self.build_payload(record),
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    sink_token: Optional[str] = None,
    sink_url: Optional[str] = None,
) -> Optional[QueueListener]:
    """
    Configure the root logger.

    stdout carries the protocol stream, so console output goes to stderr.

    Returns:
        The started QueueListener feeding the HTTP sink, or None when no sink
        token is configured. Callers stop it on shutdown to flush pending events.
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    listener = None
    if sink_token and sink_url:
        events: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
        listener = QueueListener(events, HttpLogHandler(sink_url, sink_token))
        queue_handler = QueueHandler(events)
        queue_handler.setFormatter(logging.Formatter("%(message)s"))
        # The sink's own HTTP client logs would feed back into the sink.
        queue_handler.addFilter(lambda record: not record.name.startswith(("urllib3", "requests")))
        handlers.append(queue_handler)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    if listener is not None:
        listener.start()
    return listener


def log_event(level: int, event: str, message: str, **fields: Any) -> None:
    """Emit one structured event; ``fields`` may carry request_id, city and error."""
    extra = {"event": event}
    extra.update({key: value for key, value in fields.items() if value is not None})
    logging.log(level, message, extra=extra)
