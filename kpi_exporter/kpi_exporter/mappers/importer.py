"""Importer KPI mapper.  Accepts records but publishes nothing yet."""

from __future__ import annotations

import logging

from kpi_exporter.mappers.base import BaseMapper
from kpi_exporter.models.kpi import ImporterKPI

logger = logging.getLogger(__name__)


class ImporterMapper(BaseMapper):
    """No-op mapper kept so the ``importer.kpis`` route is always safe to call."""

    @property
    def source(self) -> str:
        return "importer"

    def map(self, record: ImporterKPI) -> int:  # type: ignore[override]
        # TODO: publish importer gauges once the importer payload schema is settled.
        logger.info("Importer KPI received with %d fields; no metrics mapped", len(record.model_extra or {}))
        return 0
