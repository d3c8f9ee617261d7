"""Shared fixtures for the export engine tests."""

from __future__ import annotations

import pytest

from kpi_exporter.config import ExporterSettings
from kpi_exporter.dispatcher import Dispatcher, create_default_dispatcher
from kpi_exporter.registry import MetricRegistry


@pytest.fixture
def registry() -> MetricRegistry:
    """A fresh registry per test, backed by its own CollectorRegistry."""
    return MetricRegistry()


@pytest.fixture
def settings() -> ExporterSettings:
    return ExporterSettings(_env_file=None)


@pytest.fixture
def dispatcher(registry: MetricRegistry, settings: ExporterSettings) -> Dispatcher:
    return create_default_dispatcher(registry, settings)
