"""Payload decoders, one per telemetry source family.

Decoders are pure: they turn raw bytes into a validated record or raise
:class:`pydantic.ValidationError`.  They know nothing about topics or
the metric registry; the dispatcher wraps their failures into
:class:`~kpi_exporter.errors.DecodeError`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from pydantic import BaseModel

from kpi_exporter.models.kpi import ImporterKPI, OnosKPI, VolthaKPI

RecordT = TypeVar("RecordT", bound=BaseModel)

Decoder = Callable[[bytes], BaseModel]


def _decode(model: type[RecordT], payload: bytes) -> RecordT:
    return model.model_validate_json(payload)


def decode_voltha(payload: bytes) -> VolthaKPI:
    """Decode a ``voltha.kpis`` payload."""
    return _decode(VolthaKPI, payload)


def decode_onos(payload: bytes) -> OnosKPI:
    """Decode an ``onos.kpis`` payload."""
    return _decode(OnosKPI, payload)


def decode_importer(payload: bytes) -> ImporterKPI:
    """Decode an ``importer.kpis`` payload.  Any JSON object is accepted."""
    return _decode(ImporterKPI, payload)
