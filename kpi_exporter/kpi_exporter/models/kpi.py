"""Decoded KPI records for each telemetry source family.

Field aliases are the keys used on the wire; the Python attribute names
are accepted too.  Missing fields and JSON ``null`` fall back to zero
values and unknown keys are ignored.  Types are strict: a counter must be
a JSON number (not a boolean or a numeric string) and a label must be a
JSON string, otherwise validation fails.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, model_validator


class _WireModel(BaseModel):
    """Base for wire records: ``null`` anywhere means the field's zero value."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _null_as_default(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ---------------------------------------------------------------------------
# Voltha
# ---------------------------------------------------------------------------


class VolthaContext(_WireModel):
    """Port context of a voltha slice.  All values arrive as strings."""

    interface_id: StrictStr = Field(default="", alias="intf_id")
    pon_id: StrictStr = Field(default="", alias="pon_id")
    port_number: StrictStr = Field(default="", alias="port_no")
    upstream: StrictStr = Field(default="", alias="upstream", description="'True' for upstream counters.")


class VolthaMetadata(_WireModel):
    """Identity of the device and record type a slice reports on."""

    title: StrictStr = Field(default="", alias="title")
    logical_device_id: StrictStr = Field(default="", alias="logical_device_id")
    serial_number: StrictStr = Field(default="", alias="serial_no")
    device_id: StrictStr = Field(default="", alias="device_id")
    context: VolthaContext = Field(default_factory=VolthaContext, alias="context")


class VolthaMetrics(_WireModel):
    """Counter values of a slice.  Which fields are populated depends on the title."""

    tx_bytes: StrictFloat = Field(default=0.0, alias="tx_bytes")
    rx_bytes: StrictFloat = Field(default=0.0, alias="rx_bytes")
    tx_packets: StrictFloat = Field(default=0.0, alias="tx_packets")
    rx_packets: StrictFloat = Field(default=0.0, alias="rx_packets")
    tx_error_packets: StrictFloat = Field(default=0.0, alias="tx_error_packets")
    rx_error_packets: StrictFloat = Field(default=0.0, alias="rx_error_packets")
    packets: StrictFloat = Field(default=0.0, alias="packets")
    octets: StrictFloat = Field(default=0.0, alias="octets")


class SliceData(_WireModel):
    metadata: VolthaMetadata = Field(default_factory=VolthaMetadata, alias="metadata")
    metrics: VolthaMetrics = Field(default_factory=VolthaMetrics, alias="metrics")


class VolthaKPI(_WireModel):
    """A ``voltha.kpis`` message: an ordered batch of slices."""

    type: StrictStr = Field(default="", alias="type")
    ts: StrictFloat = Field(default=0.0, alias="ts")
    slice_datas: list[SliceData] = Field(default_factory=list, alias="slice_data")


# ---------------------------------------------------------------------------
# ONOS
# ---------------------------------------------------------------------------


class PortStat(_WireModel):
    """Per-port counters reported by ONOS."""

    port_id: StrictStr = Field(default="", alias="portId")
    rx_packets: StrictFloat = Field(default=0.0, alias="pktRx")
    tx_packets: StrictFloat = Field(default=0.0, alias="pktTx")
    rx_bytes: StrictFloat = Field(default=0.0, alias="bytesRx")
    tx_bytes: StrictFloat = Field(default=0.0, alias="bytesTx")
    rx_packets_drop: StrictFloat = Field(default=0.0, alias="pktRxDrp")
    tx_packets_drop: StrictFloat = Field(default=0.0, alias="pktTxDrp")


class OnosKPI(_WireModel):
    """An ``onos.kpis`` message: port statistics for one device."""

    type: StrictStr = Field(default="", alias="type")
    ts: StrictFloat = Field(default=0.0, alias="ts")
    device_id: StrictStr = Field(default="", alias="deviceId")
    ports: list[PortStat] = Field(default_factory=list, alias="ports")


# ---------------------------------------------------------------------------
# Importer
# ---------------------------------------------------------------------------


class ImporterKPI(_WireModel):
    """An ``importer.kpis`` message.

    No fields are mapped yet; whatever the importer sends is retained as
    extra attributes so it can be inspected in logs.
    """

    model_config = ConfigDict(extra="allow")
