"""Metric registry adapter over ``prometheus_client``.

The :class:`MetricRegistry` is created once at process start and handed
to the dispatcher and every mapper.  It owns a private
:class:`prometheus_client.CollectorRegistry` rather than the process-wide
default one, so several registries can coexist (one per test, for
example) and nothing is hidden in module globals.

Each metric name is bound to a fixed, ordered label-name schema at
registration time.  Update sites address a series by the ordered tuple of
label *values*; supplying the wrong number of values is a programming
error and raises :class:`~kpi_exporter.errors.LabelArityError`.

Concurrency: handle creation is serialised by a registry lock.  Updates
go straight to the ``prometheus_client`` child, whose value cell is
mutex-protected, so concurrent ``set``/``add`` on the same series never
lose updates.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from enum import Enum

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Gauge, generate_latest

from kpi_exporter.errors import LabelArityError

logger = logging.getLogger(__name__)


class MetricKind(str, Enum):
    """Storage type of a registered metric."""

    GAUGE = "gauge"
    COUNTER = "counter"


class SeriesHandle:
    """A registered metric family addressed by ordered label values.

    Obtain instances from :meth:`MetricRegistry.register`; do not
    construct directly.
    """

    def __init__(
        self,
        name: str,
        help_text: str,
        label_names: tuple[str, ...],
        kind: MetricKind,
        metric: Gauge | Counter,
    ) -> None:
        self.name = name
        self.help_text = help_text
        self.label_names = label_names
        self.kind = kind
        self._metric = metric

    def _child(self, label_values: Sequence[str]) -> Gauge | Counter:
        values = tuple(label_values)
        if len(values) != len(self.label_names):
            raise LabelArityError(self.name, self.label_names, values)
        return self._metric.labels(*values)

    def set(self, label_values: Sequence[str], value: float) -> None:
        """Overwrite the series identified by *label_values* with *value*."""
        if self.kind is not MetricKind.GAUGE:
            raise TypeError(f"Metric '{self.name}' is a {self.kind.value} and cannot be set")
        self._child(label_values).set(value)

    def add(self, label_values: Sequence[str], delta: float) -> None:
        """Accumulate *delta* onto the series, starting from 0 when unseen."""
        self._child(label_values).inc(delta)

    def __repr__(self) -> str:
        return f"SeriesHandle(name={self.name!r}, labels={self.label_names!r}, kind={self.kind.value})"


class MetricRegistry:
    """Lookup from metric name to a live :class:`SeriesHandle`.

    Parameters
    ----------
    collector_registry:
        Optional ``prometheus_client`` registry to register metrics into.
        When ``None``, a fresh private registry is created.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, collector_registry: CollectorRegistry | None = None) -> None:
        if collector_registry is None:
            collector_registry = CollectorRegistry(auto_describe=True)
        self._collector_registry = collector_registry
        self._handles: dict[str, SeriesHandle] = {}
        self._lock = threading.Lock()

    @property
    def collector_registry(self) -> CollectorRegistry:
        """The underlying ``prometheus_client`` registry, for scrape wiring."""
        return self._collector_registry

    def register(
        self,
        name: str,
        help_text: str,
        label_names: Sequence[str],
        kind: MetricKind = MetricKind.GAUGE,
    ) -> SeriesHandle:
        """Register a metric family and return its handle.

        Registering the same name again with an identical label schema and
        kind returns the existing handle.

        Raises
        ------
        ValueError
            If *name* is already registered with a different label schema
            or kind.
        """
        labels = tuple(label_names)
        with self._lock:
            existing = self._handles.get(name)
            if existing is not None:
                if existing.label_names != labels or existing.kind is not kind:
                    raise ValueError(
                        f"Metric '{name}' is already registered as {existing.kind.value} "
                        f"with labels {existing.label_names}; cannot re-register as "
                        f"{kind.value} with labels {labels}"
                    )
                return existing

            metric_cls = Gauge if kind is MetricKind.GAUGE else Counter
            metric = metric_cls(name, help_text, labels, registry=self._collector_registry)
            handle = SeriesHandle(name, help_text, labels, kind, metric)
            self._handles[name] = handle

        logger.debug("Registered %s '%s' with labels %s", kind.value, name, labels)
        return handle

    def get(self, name: str) -> SeriesHandle | None:
        """Look up a handle by metric name.  Returns ``None`` if unknown."""
        with self._lock:
            return self._handles.get(name)

    @property
    def names(self) -> list[str]:
        """All registered metric names, sorted."""
        with self._lock:
            return sorted(self._handles)

    def sample_value(self, name: str, label_values: Sequence[str]) -> float | None:
        """Return the current value of one series, or ``None`` if never written."""
        handle = self.get(name)
        if handle is None:
            return None
        values = tuple(label_values)
        if len(values) != len(handle.label_names):
            raise LabelArityError(name, handle.label_names, values)

        sample_name = name
        if handle.kind is MetricKind.COUNTER and not name.endswith("_total"):
            sample_name = f"{name}_total"
        return self._collector_registry.get_sample_value(sample_name, dict(zip(handle.label_names, values)))

    def render(self) -> bytes:
        """Return every registered series in Prometheus text exposition format."""
        return generate_latest(self._collector_registry)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)
