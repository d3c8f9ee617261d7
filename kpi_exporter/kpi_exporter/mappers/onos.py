"""ONOS KPI mapper: six gauges per port, keyed by device and port."""

from __future__ import annotations

import logging

from kpi_exporter.mappers.base import BaseMapper
from kpi_exporter.metrics import ONOS_METRICS
from kpi_exporter.models.kpi import OnosKPI

logger = logging.getLogger(__name__)

# (metric key, PortStat attribute)
_PORT_FIELDS: tuple[tuple[str, str], ...] = (
    ("tx_bytes", "tx_bytes"),
    ("rx_bytes", "rx_bytes"),
    ("tx_packets", "tx_packets"),
    ("rx_packets", "rx_packets"),
    ("tx_drop_packets", "tx_packets_drop"),
    ("rx_drop_packets", "rx_packets_drop"),
)


class OnosMapper(BaseMapper):
    """Set the ``onos_*`` gauges for every port of a device."""

    metrics = ONOS_METRICS

    @property
    def source(self) -> str:
        return "onos"

    def map(self, record: OnosKPI) -> int:  # type: ignore[override]
        updates = 0
        for port in record.ports:
            labels = (record.device_id, port.port_id)
            for key, attr in _PORT_FIELDS:
                self._handle(key).set(labels, getattr(port, attr))
                updates += 1

        logger.debug("Mapped %d ports of device %s", len(record.ports), record.device_id)
        return updates
