"""Export engine configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VOLTHA_TOPIC = "voltha.kpis"
ONOS_TOPIC = "onos.kpis"
IMPORTER_TOPIC = "importer.kpis"


class ExporterEnv(str, Enum):
    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class ExporterSettings(BaseSettings):
    """Exporter settings loaded from environment variables with EXPORTER_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="EXPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    env: ExporterEnv = ExporterEnv.DEV
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    structured_logging: bool = False

    # Topic routing
    voltha_topic: str = VOLTHA_TOPIC
    onos_topic: str = ONOS_TOPIC
    importer_topic: str = IMPORTER_TOPIC

    # Unknown voltha titles are dropped either way; these only control
    # how loudly.
    warn_unknown_titles: bool = False
    count_unknown_titles: bool = False

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @field_validator("voltha_topic", "onos_topic", "importer_topic")
    @classmethod
    def topic_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Topic names must not be empty")
        return v

    @model_validator(mode="after")
    def _validate_distinct_topics(self) -> Self:
        topics = [self.voltha_topic, self.onos_topic, self.importer_topic]
        if len(set(topics)) != len(topics):
            raise ValueError(f"Topic names must be distinct, got {topics}")
        return self


def load_settings(**overrides: object) -> ExporterSettings:
    """Load settings from environment, with optional overrides for testing."""
    settings = ExporterSettings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings for environment: %s", settings.env.value)

    return settings
