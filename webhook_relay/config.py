from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    DotEnvSettingsSource,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

TARGET_ENV_PREFIX = "RELAY_TARGET_"
ROUTE_TARGETS_FIELD = "route_targets"


class PrefixedTargetsSource(PydanticBaseSettingsSource):
    """Collects every ``RELAY_TARGET_<PATH>`` variable into one mapping.

    The ``.env`` file is read first so that real environment variables win,
    matching how the other settings are resolved.
    """

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # Values are produced as a whole in __call__.
        return None, field_name, False

    def _candidates(self) -> dict[str, str]:
        values: dict[str, str] = {}
        env_file = self.config.get("env_file")
        if isinstance(env_file, (str, Path)) and Path(env_file).is_file():
            for name, value in dotenv_values(env_file).items():
                if value is not None:
                    values[name] = value
        values.update(os.environ)
        return values

    def __call__(self) -> dict[str, Any]:
        targets = {
            name[len(TARGET_ENV_PREFIX) :]: value
            for name, value in self._candidates().items()
            if name.startswith(TARGET_ENV_PREFIX)
        }
        if not targets:
            return {}
        return {"RELAY_TARGETS": targets}


class _SkipRouteTargets:
    """Keeps the prefixed-target mapping out of the plain env and .env lookups.

    Only ``PrefixedTargetsSource`` (or init kwargs) may populate it.
    """

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        if field_name == ROUTE_TARGETS_FIELD:
            return None, field_name, False
        return super().get_field_value(field, field_name)  # type: ignore[misc]


class RelayEnvSettingsSource(_SkipRouteTargets, EnvSettingsSource):
    pass


class RelayDotEnvSettingsSource(_SkipRouteTargets, DotEnvSettingsSource):
    pass


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", frozen=True, extra="ignore")

    routes_json: str = Field(default="", alias="RELAY_ROUTES_JSON")
    routes_csv: str = Field(default="", alias="RELAY_ROUTES")
    route_targets: dict[str, str] = Field(default_factory=dict, alias="RELAY_TARGETS")

    target_timeout_ms: int = Field(default=10000, alias="TARGET_TIMEOUT_MS")
    port: int = Field(default=3000, alias="PORT")
    host: str = Field(default="0.0.0.0", alias="HOST")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def target_timeout_seconds(self) -> float:
        return self.target_timeout_ms / 1000.0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            PrefixedTargetsSource(settings_cls),
            RelayEnvSettingsSource(settings_cls),
            RelayDotEnvSettingsSource(settings_cls),
            file_secret_settings,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
