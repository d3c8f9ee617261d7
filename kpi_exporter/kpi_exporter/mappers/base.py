"""Abstract base class for mapper implementations.

A mapper consumes one decoded record and issues registry updates for
it.  Mappers hold no per-message state; the only thing they keep between
calls is the set of :class:`~kpi_exporter.registry.SeriesHandle` objects
they registered at construction.
"""

from __future__ import annotations

import abc
from typing import ClassVar

from pydantic import BaseModel

from kpi_exporter.errors import MappingError
from kpi_exporter.metrics import MetricDefinition, register_all
from kpi_exporter.registry import MetricRegistry, SeriesHandle


class BaseMapper(abc.ABC):
    """Abstract base for all mappers.

    Subclasses must implement :attr:`source` and :meth:`map`, and list the
    metrics they write in :attr:`metrics`; those are registered on
    construction.

    Parameters
    ----------
    registry:
        The process-wide metric registry updates are written to.
    """

    metrics: ClassVar[list[MetricDefinition]] = []

    def __init__(self, registry: MetricRegistry) -> None:
        self._handles: dict[str, SeriesHandle] = register_all(registry, self.metrics)

    @property
    @abc.abstractmethod
    def source(self) -> str:
        """Short name of the telemetry source family, e.g. ``"voltha"``."""

    @abc.abstractmethod
    def map(self, record: BaseModel) -> int:
        """Project *record* onto the registry.

        Returns
        -------
        int
            Number of series updates issued.
        """

    def _handle(self, key: str) -> SeriesHandle:
        try:
            return self._handles[key]
        except KeyError:
            raise MappingError(f"{self.source} mapper has no metric registered for '{key}'") from None
