"""Per-source mappers from decoded KPI records to registry updates."""

from kpi_exporter.mappers.base import BaseMapper
from kpi_exporter.mappers.importer import ImporterMapper
from kpi_exporter.mappers.onos import OnosMapper
from kpi_exporter.mappers.voltha import TITLE_RULES, TitleRule, UpdateMode, VolthaMapper

__all__ = [
    "BaseMapper",
    "ImporterMapper",
    "OnosMapper",
    "TITLE_RULES",
    "TitleRule",
    "UpdateMode",
    "VolthaMapper",
]
