"""Exception hierarchy for the export engine.

An unrecognised topic is deliberately *not* an exception: it is an
expected operational condition reported through
:class:`~kpi_exporter.dispatcher.ExportStatus`.  Everything raised from
here is recoverable; the caller skips the offending message and keeps
consuming.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for failures while exporting a single message.

    ``topic`` is ``None`` when raised below the dispatcher; the dispatcher
    fills it in before the error reaches the caller.
    """

    def __init__(self, message: str, topic: str | None = None) -> None:
        super().__init__(message)
        self.topic = topic


class DecodeError(ExportError):
    """The payload for a recognised topic could not be decoded.

    Attributes
    ----------
    topic:
        The topic the payload arrived on.
    cause:
        The underlying parse or validation failure.
    """

    def __init__(self, topic: str, cause: Exception) -> None:
        super().__init__(f"Failed to decode payload for topic '{topic}': {cause}", topic)
        self.cause = cause


class MappingError(ExportError):
    """A mapper could not project a decoded record onto the registry."""


class LabelArityError(ValueError):
    """Label values do not match the label names a metric was registered with.

    This signals a programming error at the update site, never bad input
    data, so it is not an :class:`ExportError`.
    """

    def __init__(self, name: str, expected: tuple[str, ...], got: tuple[str, ...]) -> None:
        super().__init__(
            f"Metric '{name}' expects {len(expected)} label values {expected}, "
            f"got {len(got)}: {got}"
        )
        self.name = name
        self.expected = expected
        self.got = got
