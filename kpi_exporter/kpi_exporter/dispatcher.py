"""Topic dispatcher -- the single entry point of the export engine.

The :class:`Dispatcher` holds a table of :class:`TopicRoute` entries,
each pairing a topic name with a decoder and a mapper.  An inbound
``(topic, payload)`` pair is matched by exact topic name, decoded in
full, and only then handed to the mapper, so a malformed payload never
produces partial updates.

Error policy:

* unknown topic -- warning log, no mutation, ``UNRECOGNIZED_TOPIC``
  status.  Never raised.
* decode failure -- error log, :class:`~kpi_exporter.errors.DecodeError`
  raised to the caller.
* mapping failure -- error log, :class:`~kpi_exporter.errors.MappingError`
  raised to the caller.

Neither error is fatal: :meth:`Dispatcher.consume` shows the intended
consumption loop, which skips a bad message and carries on.

Quick start::

    from kpi_exporter import MetricRegistry, create_default_dispatcher

    registry = MetricRegistry()
    dispatcher = create_default_dispatcher(registry)
    dispatcher.export("onos.kpis", payload)
    body = registry.render()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from kpi_exporter.config import ExporterSettings, load_settings
from kpi_exporter.decoders import Decoder, decode_importer, decode_onos, decode_voltha
from kpi_exporter.errors import DecodeError, ExportError, MappingError
from kpi_exporter.mappers.base import BaseMapper
from kpi_exporter.registry import MetricRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TelemetryEnvelope:
    """One message as delivered by the transport."""

    topic: str
    payload: bytes


@dataclass(frozen=True)
class TopicRoute:
    """Decoder and mapper pair serving one topic."""

    topic: str
    decoder: Decoder
    mapper: BaseMapper


class ExportStatus(str, Enum):
    """Outcome of a non-failing export call."""

    EXPORTED = "exported"
    UNRECOGNIZED_TOPIC = "unrecognized_topic"


class ExportResult(BaseModel):
    """The outcome of a single :meth:`Dispatcher.export` call."""

    topic: str = Field(..., description="Topic the payload arrived on.")
    status: ExportStatus = Field(..., description="Whether the payload was routed.")
    updates: int = Field(default=0, ge=0, description="Number of registry updates issued by the mapper.")


class ConsumeSummary(BaseModel):
    """Aggregated outcome of :meth:`Dispatcher.consume`."""

    exported: int = Field(default=0, description="Messages decoded and mapped.")
    unrecognized: int = Field(default=0, description="Messages on a topic with no route.")
    failed: int = Field(default=0, description="Messages skipped after a decode or mapping error.")
    updates: int = Field(default=0, description="Total registry updates issued.")

    @property
    def total(self) -> int:
        """Number of messages seen."""
        return self.exported + self.unrecognized + self.failed


class Dispatcher:
    """Route telemetry payloads to their decoder and mapper by topic.

    The dispatcher keeps no per-message state and may be called from many
    threads at once; all shared state lives in the mappers' registry.
    """

    def __init__(self) -> None:
        self._routes: dict[str, TopicRoute] = {}

    def register_route(self, route: TopicRoute) -> None:
        """Register a route.

        Raises
        ------
        ValueError
            If a route for the same topic is already registered.
        """
        if route.topic in self._routes:
            raise ValueError(f"Topic '{route.topic}' is already routed. Unregister the existing route first.")
        self._routes[route.topic] = route
        logger.debug("Registered route for topic '%s' -> %s", route.topic, route.mapper.source)

    def unregister_route(self, topic: str) -> None:
        """Remove the route for *topic*.

        Raises
        ------
        KeyError
            If *topic* has no route.
        """
        if topic not in self._routes:
            raise KeyError(f"Topic '{topic}' is not routed.")
        del self._routes[topic]
        logger.debug("Unregistered route for topic '%s'", topic)

    @property
    def routes(self) -> list[str]:
        """All routed topics, sorted."""
        return sorted(self._routes)

    def export(self, topic: str, payload: bytes) -> ExportResult:
        """Decode *payload* according to *topic* and apply its metric updates.

        Parameters
        ----------
        topic:
            Name of the topic the payload was received on.
        payload:
            Raw JSON document.

        Returns
        -------
        ExportResult
            ``EXPORTED`` with the update count, or ``UNRECOGNIZED_TOPIC``.

        Raises
        ------
        DecodeError
            If the payload does not decode for the matched topic.  No
            metric has been touched.
        MappingError
            If the mapper hit an invariant violation.
        """
        route = self._routes.get(topic)
        if route is None:
            logger.warning("Unexpected export for topic '%s'; no route registered", topic, extra={"topic": topic})
            return ExportResult(topic=topic, status=ExportStatus.UNRECOGNIZED_TOPIC)

        try:
            record = route.decoder(payload)
        except ValueError as exc:
            logger.error("Failed to decode payload on topic '%s': %s", topic, exc, extra={"topic": topic})
            raise DecodeError(topic, exc) from exc

        try:
            updates = route.mapper.map(record)
        except MappingError as exc:
            if exc.topic is None:
                exc.topic = topic
            logger.error(
                "Failed to map %s record on topic '%s': %s",
                route.mapper.source,
                topic,
                exc,
                extra={"topic": topic},
            )
            raise

        return ExportResult(topic=topic, status=ExportStatus.EXPORTED, updates=updates)

    def consume(self, envelopes: Iterable[TelemetryEnvelope]) -> ConsumeSummary:
        """Export *envelopes* in order, skipping any that fail.

        Each failure has already been logged by :meth:`export`; it is
        counted here and the loop moves on to the next message.
        """
        summary = ConsumeSummary()
        for envelope in envelopes:
            try:
                result = self.export(envelope.topic, envelope.payload)
            except ExportError as exc:
                logger.debug("Skipping message on topic '%s': %s", exc.topic, type(exc).__name__)
                summary.failed += 1
                continue

            if result.status is ExportStatus.UNRECOGNIZED_TOPIC:
                summary.unrecognized += 1
            else:
                summary.exported += 1
                summary.updates += result.updates

        logger.info(
            "Consumed %d messages: %d exported, %d unrecognized, %d failed",
            summary.total,
            summary.exported,
            summary.unrecognized,
            summary.failed,
        )
        return summary


def create_default_dispatcher(
    registry: MetricRegistry,
    settings: ExporterSettings | None = None,
) -> Dispatcher:
    """Create a :class:`Dispatcher` with the voltha, onos and importer routes.

    Parameters
    ----------
    registry:
        The process-wide metric registry.  Every metric family the
        built-in mappers publish is registered here.
    settings:
        Topic names and unknown-title policy.  Loaded from the environment
        when ``None``.
    """
    from kpi_exporter.mappers.importer import ImporterMapper
    from kpi_exporter.mappers.onos import OnosMapper
    from kpi_exporter.mappers.voltha import VolthaMapper

    settings = settings or load_settings()

    dispatcher = Dispatcher()
    dispatcher.register_route(
        TopicRoute(
            topic=settings.voltha_topic,
            decoder=decode_voltha,
            mapper=VolthaMapper(
                registry,
                warn_unknown_titles=settings.warn_unknown_titles,
                count_unknown_titles=settings.count_unknown_titles,
            ),
        )
    )
    dispatcher.register_route(TopicRoute(topic=settings.onos_topic, decoder=decode_onos, mapper=OnosMapper(registry)))
    dispatcher.register_route(
        TopicRoute(topic=settings.importer_topic, decoder=decode_importer, mapper=ImporterMapper(registry))
    )
    return dispatcher
