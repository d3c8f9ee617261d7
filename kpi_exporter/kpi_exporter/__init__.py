"""Translate topic-tagged KPI payloads into labeled Prometheus gauges."""

from kpi_exporter.config import ExporterSettings, load_settings
from kpi_exporter.dispatcher import (
    ConsumeSummary,
    Dispatcher,
    ExportResult,
    ExportStatus,
    TelemetryEnvelope,
    TopicRoute,
    create_default_dispatcher,
)
from kpi_exporter.errors import DecodeError, ExportError, LabelArityError, MappingError
from kpi_exporter.registry import MetricKind, MetricRegistry, SeriesHandle

__version__ = "0.1.0"

__all__ = [
    "ConsumeSummary",
    "DecodeError",
    "Dispatcher",
    "ExportError",
    "ExportResult",
    "ExportStatus",
    "ExporterSettings",
    "LabelArityError",
    "MappingError",
    "MetricKind",
    "MetricRegistry",
    "SeriesHandle",
    "TelemetryEnvelope",
    "TopicRoute",
    "create_default_dispatcher",
    "load_settings",
]
