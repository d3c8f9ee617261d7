"""Process logging setup for the exporter.

Two modes are supported:

* plain text (default) -- a conventional ``StreamHandler`` with a
  human-readable format.
* structured -- each record is rendered by :class:`JSONFormatter` as a
  single-line JSON object that log aggregators can index directly.
  Enable with ``EXPORTER_STRUCTURED_LOGGING=true``.

Output schema per line in structured mode::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "WARNING",
        "logger": "kpi_exporter.dispatcher",
        "message": "Unexpected export for topic 'foo.kpis'",
        "topic": "foo.kpis",          // present when passed via extra=
        "exc_info": "Traceback ..."   // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from kpi_exporter.config import ExporterSettings

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON.

    Besides the standard fields, only ``topic`` is carried over from the
    record's extras: every export log line concerns one topic, and that is
    the field log aggregators filter on when a single feed misbehaves.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Render *record* as a single JSON line."""
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Export call sites attach the topic via ``extra={"topic": ...}``.
        topic = getattr(record, "topic", None)
        if topic is not None:
            payload["topic"] = topic

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: ExporterSettings) -> logging.Handler:
    """Install a single handler on the root logger according to *settings*.

    Existing root handlers are removed so repeated calls do not duplicate
    output.  Returns the installed handler.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if settings.structured_logging:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))

    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else settings.log_level)

    if settings.structured_logging:
        logging.getLogger(__name__).info("Structured JSON logging enabled")
    return handler
