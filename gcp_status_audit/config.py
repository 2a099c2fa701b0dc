"""Runtime configuration for the status audit.

Values come from ``GCP_STATUS_AUDIT_*`` environment variables when loaded via
:func:`load_settings`; constructing :class:`Settings` directly only uses the
keyword arguments, which keeps tests independent of the caller's environment.
"""
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

ENV_PREFIX = "GCP_STATUS_AUDIT_"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # load_settings() passes environment values in as kwargs.
        return (init_settings,)

    request_timeout: float = Field(default=30.0, gt=0)
    max_workers: int = Field(default=4, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level


def load_settings(
    environ: Optional[Mapping[str, str]] = None, **overrides: object
) -> Settings:
    """Build :class:`Settings` from *environ* (default ``os.environ``).

    Keyword *overrides* that are not ``None`` win over environment values,
    which is how command line flags are applied.
    """

    environ = os.environ if environ is None else environ
    values: dict[str, object] = {}
    for name in Settings.model_fields:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    values.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**values)


__all__ = ["ENV_PREFIX", "Settings", "load_settings"]
