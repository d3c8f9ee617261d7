"""Voltha KPI mapper.

Each slice in a :class:`~kpi_exporter.models.kpi.VolthaKPI` is routed by
its ``title`` through :data:`TITLE_RULES`, a closed lookup table.  A rule
fixes three things for its titles:

* **mode** -- ``set`` for titles that report cumulative absolute
  counters, ``add`` for titles that report per-interval deltas, or
  ``ignore``.
* **labels** -- the full port context, or ``"NA"`` placeholders for the
  interface, PON and port labels when the record carries no port context.
* **fields** -- which record field feeds which metric family.  Directional
  rules pick a different field set when ``context.upstream == "True"``.

Titles without a rule are dropped.  Whether that is logged at warning
level and counted is configurable; by default it is a debug line only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from kpi_exporter.mappers.base import BaseMapper
from kpi_exporter.metrics import UNKNOWN_TITLES, VOLTHA_METRICS
from kpi_exporter.models.kpi import SliceData, VolthaKPI
from kpi_exporter.registry import MetricRegistry, SeriesHandle

logger = logging.getLogger(__name__)

NOT_APPLICABLE = "NA"
UPSTREAM = "True"


class UpdateMode(str, Enum):
    """How a rule writes its values into the registry."""

    SET = "set"
    ADD = "add"
    IGNORE = "ignore"


# (metric key, VolthaMetrics attribute)
FieldMap = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class TitleRule:
    """Mapping rule for one or more voltha slice titles."""

    mode: UpdateMode
    context_labels: bool = True
    fields: FieldMap = ()
    upstream_fields: FieldMap | None = None

    def fields_for(self, upstream: str) -> FieldMap:
        """Return the field map to apply given the slice's upstream flag."""
        if self.upstream_fields is not None and upstream == UPSTREAM:
            return self.upstream_fields
        return self.fields


_PORT_COUNTERS: FieldMap = (
    ("tx_bytes", "tx_bytes"),
    ("rx_bytes", "rx_bytes"),
    ("tx_packets", "tx_packets"),
    ("rx_packets", "rx_packets"),
    ("tx_error_packets", "tx_error_packets"),
    ("rx_error_packets", "rx_error_packets"),
)

_ABSOLUTE = TitleRule(mode=UpdateMode.SET, fields=_PORT_COUNTERS)

# Bridge port history reports interval deltas with no port context.
_BRIDGE_PORT_HISTORY = TitleRule(
    mode=UpdateMode.ADD,
    context_labels=False,
    fields=(("rx_packets", "packets"), ("rx_bytes", "octets")),
    upstream_fields=(("tx_packets", "packets"), ("tx_bytes", "octets")),
)

_IGNORED = TitleRule(mode=UpdateMode.IGNORE)

TITLE_RULES: dict[str, TitleRule] = {
    "Ethernet": _ABSOLUTE,
    "PON": _ABSOLUTE,
    "FEC_History": _ABSOLUTE,
    "Ethernet_Bridge_Port_History": _BRIDGE_PORT_HISTORY,
    "Ethernet_UNI_History": _IGNORED,
    "voltha.internal": _IGNORED,
}


def _label_values(data: SliceData, rule: TitleRule) -> tuple[str, ...]:
    meta = data.metadata
    if rule.context_labels:
        interface_id = meta.context.interface_id
        pon_id = meta.context.pon_id
        port_number = meta.context.port_number
    else:
        interface_id = pon_id = port_number = NOT_APPLICABLE
    return (
        meta.logical_device_id,
        meta.serial_number,
        meta.device_id,
        interface_id,
        pon_id,
        port_number,
        meta.title,
    )


class VolthaMapper(BaseMapper):
    """Map voltha KPI slices onto the ``voltha_*`` gauges.

    Parameters
    ----------
    registry:
        The metric registry to write into.  The six voltha gauges are
        registered on construction.
    warn_unknown_titles:
        Log dropped slices with an unknown title at warning level instead
        of debug.
    count_unknown_titles:
        Also increment ``kpi_exporter_unknown_titles_total`` for each
        dropped slice.
    """

    metrics = VOLTHA_METRICS

    def __init__(
        self,
        registry: MetricRegistry,
        *,
        warn_unknown_titles: bool = False,
        count_unknown_titles: bool = False,
    ) -> None:
        super().__init__(registry)
        self._warn_unknown_titles = warn_unknown_titles
        self._unknown_titles: SeriesHandle | None = None
        if count_unknown_titles:
            self._unknown_titles = UNKNOWN_TITLES.register(registry)

    @property
    def source(self) -> str:
        return "voltha"

    def map(self, record: VolthaKPI) -> int:  # type: ignore[override]
        updates = 0
        for data in record.slice_datas:
            title = data.metadata.title
            rule = TITLE_RULES.get(title)
            if rule is None:
                self._drop_unknown(title)
                continue
            if rule.mode is UpdateMode.IGNORE:
                continue

            labels = _label_values(data, rule)
            for key, attr in rule.fields_for(data.metadata.context.upstream):
                handle = self._handle(key)
                value: float = getattr(data.metrics, attr)
                if rule.mode is UpdateMode.SET:
                    handle.set(labels, value)
                else:
                    handle.add(labels, value)
                updates += 1

        logger.debug("Mapped %d voltha slices into %d updates", len(record.slice_datas), updates)
        return updates

    def _drop_unknown(self, title: str) -> None:
        level = logging.WARNING if self._warn_unknown_titles else logging.DEBUG
        logger.log(level, "Dropping voltha slice with unmapped title %r", title)
        if self._unknown_titles is not None:
            self._unknown_titles.add((self.source, title), 1)
