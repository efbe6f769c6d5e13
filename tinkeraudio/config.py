from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfigError

_LOGGER = logging.getLogger("tinkeraudio.config")

WaveKind = Literal["square", "sine", "triangle", "sawtooth"]
WAVE_KINDS: tuple[WaveKind, ...] = get_args(WaveKind)

SAMPLE_RATE = 44_100
MAX_AMPLITUDE = 2**15
DEFAULT_VOLUME = 0.08
DEFAULT_NOTE_DURATIONS: tuple[float, ...] = (0.15, 0.2, 0.3, 0.4)

SAMPLE_RATE_ENV = "TINKERAUDIO_SAMPLE_RATE"
VOLUME_ENV = "TINKERAUDIO_VOLUME"
WAVE_ENV = "TINKERAUDIO_WAVE"

# Env var -> config field
_ENV_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        SAMPLE_RATE_ENV: "sample_rate",
        VOLUME_ENV: "volume",
        WAVE_ENV: "wave",
    }
)


def wave_kind(value: str) -> WaveKind:
    normalized = value.strip().lower()
    for kind in WAVE_KINDS:
        if kind == normalized:
            return kind
    raise InvalidConfigError(f"Unknown wave kind: {value!r}. Valid: {list(WAVE_KINDS)}")


class Compat(BaseModel):
    """Switches that restore bit-exact behaviour of the legacy Tinkering Audio form.

    Every flag defaults to False, which selects the corrected behaviour.

    legacy_waveforms: triangle/sawtooth phase ignores the sample rate and the
        result is pre-scaled by max_amplitude * volume.
    legacy_echo_boundary: the delayed copy is only added where i - delay > 0.
    legacy_normalize: normalisation scale is max(buffer) // 32767.
    legacy_amplitude_scale: amplitude scaling is left unclamped.
    legacy_clamp: the encoder clamps to +/-max_amplitude, so +32768 wraps.
    """

    legacy_waveforms: bool = False
    legacy_echo_boundary: bool = False
    legacy_normalize: bool = False
    legacy_amplitude_scale: bool = False
    legacy_clamp: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def all_legacy(cls) -> "Compat":
        return cls(**{name: True for name in cls.model_fields})


class EngineConfig(BaseModel):
    """Immutable settings shared by every synthesis and effect call."""

    sample_rate: int = Field(default=SAMPLE_RATE, gt=0)
    volume: float = Field(default=DEFAULT_VOLUME, ge=0.0, le=1.0)
    max_amplitude: int = Field(default=MAX_AMPLITUDE, gt=0)
    wave: WaveKind = "square"

    base_frequency: float = Field(default=440.0, gt=0.0)
    scale_start: int = -16
    scale_end: int = 8
    scale_step: int = Field(default=2, gt=0)

    note_durations: tuple[float, ...] = DEFAULT_NOTE_DURATIONS
    lead_in: float = Field(default=0.1, ge=0.0)

    compat: Compat = Compat()

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("wave", mode="before")
    @classmethod
    def _lower_wave(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("note_durations")
    @classmethod
    def _check_durations(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("note_durations must not be empty")
        if any(duration < 0 for duration in value):
            raise ValueError("note_durations must be non-negative")
        return value

    @property
    def amplitude(self) -> float:
        """Peak contribution of a unit waveform: max_amplitude * volume."""
        return self.max_amplitude * self.volume

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """Create a config from a mapping (e.g., parsed JSON)."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise InvalidConfigError(str(exc)) from exc

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "EngineConfig":
        """Defaults, overlaid with TINKERAUDIO_* variables, then explicit overrides."""
        source = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            raw = source.get(env_name)
            if raw:
                _LOGGER.debug("Config %s=%r from %s", field_name, raw, env_name)
                data[field_name] = raw
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_dict(data)

    def with_compat(self, compat: Compat) -> "EngineConfig":
        return self.model_copy(update={"compat": compat})

    def with_wave(self, wave: WaveKind) -> "EngineConfig":
        return self.model_copy(update={"wave": wave_kind(wave)})
