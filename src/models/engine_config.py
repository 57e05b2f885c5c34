"""
EngineConfig model - Construction options for the cognition engine.

Uses Pydantic v2 for validation. Accepts both snake_case field names and
the camelCase aliases used by browser-side callers.
"""

import os
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils.constants import (
    DEFAULT_PHASE_SECONDS,
    MIN_PHASE_SECONDS,
    MAX_PHASE_SECONDS,
    PHASE_SECONDS_ENV,
)


class EngineConfig(BaseModel):
    """
    Engine configuration.

    phase_seconds is clamped to [3, 7] rather than rejected; a missing,
    None or zero value falls back to the default of 5.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    phase_seconds: float = Field(
        default=DEFAULT_PHASE_SECONDS,
        alias="phaseSeconds",
        allow_inf_nan=False,
    )

    @field_validator("phase_seconds", mode="before")
    @classmethod
    def _default_when_empty(cls, value: Any) -> Any:
        if value is None or value == 0:
            return DEFAULT_PHASE_SECONDS
        return value

    @field_validator("phase_seconds")
    @classmethod
    def _clamp_phase_seconds(cls, value: float) -> float:
        return max(MIN_PHASE_SECONDS, min(MAX_PHASE_SECONDS, value))

    @property
    def phase_duration_ms(self) -> float:
        """Length of the phase ramp in milliseconds."""
        return self.phase_seconds * 1000.0

    @classmethod
    def from_env(cls) -> 'EngineConfig':
        """
        Build config from environment variables.

        Reads HELIX_PHASE_SECONDS; unset means the default.
        """
        raw = os.getenv(PHASE_SECONDS_ENV)
        if raw is None or not raw.strip():
            return cls()
        return cls(phase_seconds=raw)

    @classmethod
    def coerce(
        cls,
        config: Union['EngineConfig', Mapping[str, Any], None],
    ) -> 'EngineConfig':
        """
        Normalize the accepted config shapes into an EngineConfig.

        Args:
            config: EngineConfig, mapping of options, or None

        Returns:
            EngineConfig instance
        """
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        return cls.model_validate(dict(config))


def load_config(config: Optional[Mapping[str, Any]] = None) -> EngineConfig:
    """
    Load engine config.

    Convenience function: explicit options win, otherwise the environment.
    """
    if config is not None:
        return EngineConfig.coerce(config)
    return EngineConfig.from_env()
