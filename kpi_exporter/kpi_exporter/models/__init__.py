"""Decoded record models for the export engine."""

from kpi_exporter.models.kpi import (
    ImporterKPI,
    OnosKPI,
    PortStat,
    SliceData,
    VolthaContext,
    VolthaKPI,
    VolthaMetadata,
    VolthaMetrics,
)

__all__ = [
    "ImporterKPI",
    "OnosKPI",
    "PortStat",
    "SliceData",
    "VolthaContext",
    "VolthaKPI",
    "VolthaMetadata",
    "VolthaMetrics",
]
