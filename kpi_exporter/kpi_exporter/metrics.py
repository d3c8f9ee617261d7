"""Canonical metric families published by the exporter.

Every family has a fixed name, help text and ordered label-name schema.
Mappers address families through a short *key* (``"tx_bytes"``,
``"rx_drop_packets"``, ...) so the per-title rules can stay independent
of the source prefix.
"""

from __future__ import annotations

from dataclasses import dataclass

from kpi_exporter.registry import MetricKind, MetricRegistry, SeriesHandle


@dataclass(frozen=True)
class MetricDefinition:
    """A single metric family definition."""

    key: str
    name: str
    description: str
    label_names: tuple[str, ...]
    kind: MetricKind = MetricKind.GAUGE

    def register(self, registry: MetricRegistry) -> SeriesHandle:
        """Register this family in *registry* (idempotent)."""
        return registry.register(self.name, self.description, self.label_names, self.kind)


# ---------------------------------------------------------------------------
# Voltha KPIs
# ---------------------------------------------------------------------------

VOLTHA_LABELS: tuple[str, ...] = (
    "logical_device_id",
    "serial_number",
    "device_id",
    "interface_id",
    "pon_id",
    "port_number",
    "title",
)

VOLTHA_TX_BYTES = MetricDefinition(
    key="tx_bytes",
    name="voltha_tx_bytes_total",
    description="Number of total bytes transmitted",
    label_names=VOLTHA_LABELS,
)

VOLTHA_RX_BYTES = MetricDefinition(
    key="rx_bytes",
    name="voltha_rx_bytes_total",
    description="Number of total bytes received",
    label_names=VOLTHA_LABELS,
)

VOLTHA_TX_PACKETS = MetricDefinition(
    key="tx_packets",
    name="voltha_tx_packets_total",
    description="Number of total packets transmitted",
    label_names=VOLTHA_LABELS,
)

VOLTHA_RX_PACKETS = MetricDefinition(
    key="rx_packets",
    name="voltha_rx_packets_total",
    description="Number of total packets received",
    label_names=VOLTHA_LABELS,
)

VOLTHA_TX_ERROR_PACKETS = MetricDefinition(
    key="tx_error_packets",
    name="voltha_tx_error_packets_total",
    description="Number of total transmitted packets error",
    label_names=VOLTHA_LABELS,
)

VOLTHA_RX_ERROR_PACKETS = MetricDefinition(
    key="rx_error_packets",
    name="voltha_rx_error_packets_total",
    description="Number of total received packets error",
    label_names=VOLTHA_LABELS,
)

VOLTHA_METRICS: list[MetricDefinition] = [
    VOLTHA_TX_BYTES,
    VOLTHA_RX_BYTES,
    VOLTHA_TX_PACKETS,
    VOLTHA_RX_PACKETS,
    VOLTHA_TX_ERROR_PACKETS,
    VOLTHA_RX_ERROR_PACKETS,
]

# ---------------------------------------------------------------------------
# ONOS KPIs
# ---------------------------------------------------------------------------

ONOS_LABELS: tuple[str, ...] = ("device_id", "port_id")

ONOS_TX_BYTES = MetricDefinition(
    key="tx_bytes",
    name="onos_tx_bytes_total",
    description="Number of total bytes transmitted",
    label_names=ONOS_LABELS,
)

ONOS_RX_BYTES = MetricDefinition(
    key="rx_bytes",
    name="onos_rx_bytes_total",
    description="Number of total bytes received",
    label_names=ONOS_LABELS,
)

ONOS_TX_PACKETS = MetricDefinition(
    key="tx_packets",
    name="onos_tx_packets_total",
    description="Number of total packets transmitted",
    label_names=ONOS_LABELS,
)

ONOS_RX_PACKETS = MetricDefinition(
    key="rx_packets",
    name="onos_rx_packets_total",
    description="Number of total packets received",
    label_names=ONOS_LABELS,
)

ONOS_TX_DROP_PACKETS = MetricDefinition(
    key="tx_drop_packets",
    name="onos_tx_drop_packets_total",
    description="Number of total transmitted packets dropped",
    label_names=ONOS_LABELS,
)

ONOS_RX_DROP_PACKETS = MetricDefinition(
    key="rx_drop_packets",
    name="onos_rx_drop_packets_total",
    description="Number of total received packets dropped",
    label_names=ONOS_LABELS,
)

ONOS_METRICS: list[MetricDefinition] = [
    ONOS_TX_BYTES,
    ONOS_RX_BYTES,
    ONOS_TX_PACKETS,
    ONOS_RX_PACKETS,
    ONOS_TX_DROP_PACKETS,
    ONOS_RX_DROP_PACKETS,
]

# ---------------------------------------------------------------------------
# Exporter self-observability
# ---------------------------------------------------------------------------

UNKNOWN_TITLES = MetricDefinition(
    key="unknown_titles",
    name="kpi_exporter_unknown_titles_total",
    description="Number of KPI slices dropped because their title has no mapping rule",
    label_names=("source", "title"),
    kind=MetricKind.COUNTER,
)


def register_all(registry: MetricRegistry, definitions: list[MetricDefinition]) -> dict[str, SeriesHandle]:
    """Register *definitions* and return their handles keyed by ``key``."""
    return {definition.key: definition.register(registry) for definition in definitions}
