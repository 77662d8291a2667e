"""paramguard configuration via environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from paramguard.security.exposure import (
    ExposureConfig,
    log_no_exposure,
    raise_no_exposure,
    resolve_map_factory,
    set_default_config,
)

_HOOKS = {
    "ignore": None,
    "log": log_no_exposure,
    "raise": raise_no_exposure,
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PARAMGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- No-exposure safety net ---
    NO_EXPOSE_ACTION: Literal["ignore", "log", "raise"] = "log"

    # --- Output maps ---
    MAP_FACTORY: str = "builtins.dict"

    # --- Web adapter ---
    AUDIT_UNEXPOSED: bool = True

    @field_validator("NO_EXPOSE_ACTION", mode="before")
    @classmethod
    def _lower_action(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("MAP_FACTORY")
    @classmethod
    def _check_factory(cls, v: str) -> str:
        resolve_map_factory(v)
        return v

    def to_exposure_config(self) -> ExposureConfig:
        return ExposureConfig(
            map_factory=resolve_map_factory(self.MAP_FACTORY),
            on_no_expose=_HOOKS[self.NO_EXPOSE_ACTION],
        )

    def apply(self) -> ExposureConfig:
        """Install these settings as the process-wide exposure default."""
        return set_default_config(self.to_exposure_config())


settings = Settings()
