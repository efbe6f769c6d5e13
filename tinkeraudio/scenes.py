"""Ambient scene presets built from the engine primitives.

A scene is a random melody in a fixed wave shape, optionally laid over a
white-noise bed, darkened with a low-pass filter and given an echo tail.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Literal, get_args

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field
from scipy.signal import butter, lfilter  # type: ignore[import]

from .config import EngineConfig, WaveKind
from .effects import echo, overlay, scale_amplitude
from .encoder import clamp_samples
from .errors import InvalidArgumentError
from .melody import generate_random_melody
from .samples import FloatArray, SampleArray, ensure_sample_buffer
from .synth import noise_samples

_LOGGER = logging.getLogger("tinkeraudio.scenes")

SceneName = Literal["village", "forest", "cave", "ocean"]
SCENE_NAMES: tuple[SceneName, ...] = get_args(SceneName)


class ScenePreset(BaseModel):
    wave: WaveKind
    note_count: int = Field(ge=0)
    echo_seconds: int = Field(default=0, ge=0)
    noise_level: float = Field(default=0.0, ge=0.0)
    lowpass_hz: float | None = Field(default=None, gt=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


SCENES: Mapping[SceneName, ScenePreset] = MappingProxyType(
    {
        "village": ScenePreset(wave="sine", note_count=12),
        "forest": ScenePreset(
            wave="triangle", note_count=16, echo_seconds=1, noise_level=0.3, lowpass_hz=3000.0
        ),
        "cave": ScenePreset(wave="square", note_count=8, echo_seconds=1, lowpass_hz=900.0),
        "ocean": ScenePreset(
            wave="sine", note_count=6, echo_seconds=2, noise_level=1.0, lowpass_hz=500.0
        ),
    }
)


def scene_preset(name: str) -> ScenePreset:
    try:
        return SCENES[name]  # type: ignore[index]
    except KeyError as exc:
        raise InvalidArgumentError(
            f"Unknown scene: {name!r}. Valid: {list(SCENE_NAMES)}"
        ) from exc


def _quantize(value: float, step: float = 0.001) -> float:
    return round(value / step) * step


@lru_cache(maxsize=64)
def _butter_cached(normalized_cutoff: float) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    coeffs = butter(2, normalized_cutoff, btype="low", output="ba")
    assert isinstance(coeffs, tuple)
    assert len(coeffs) == 2
    b_raw, a_raw = coeffs
    assert isinstance(b_raw, np.ndarray)
    assert isinstance(a_raw, np.ndarray)
    return b_raw, a_raw


def apply_lowpass(signal: FloatArray, cutoff: float, sample_rate: int) -> FloatArray:
    """Second-order Butterworth low-pass (causal)."""
    nyquist = sample_rate / 2
    normalized = min(max(cutoff / nyquist, 0.001), 0.99)
    b, a = _butter_cached(_quantize(normalized))
    filtered = lfilter(b, a, signal)
    return np.asarray(filtered, dtype=np.float64)


def compose_scene(
    name: str,
    config: EngineConfig,
    rng: np.random.Generator | None = None,
) -> SampleArray:
    preset = scene_preset(name)
    local_rng = rng or np.random.default_rng()

    mixed = generate_random_melody(preset.note_count, config.with_wave(preset.wave), local_rng)
    if preset.noise_level > 0:
        bed = noise_samples(mixed.size, config, local_rng)
        mixed = overlay(mixed, scale_amplitude(bed, preset.noise_level, config))
    if preset.lowpass_hz is not None and mixed.size:
        filtered = apply_lowpass(mixed.astype(np.float64), preset.lowpass_hz, config.sample_rate)
        mixed = ensure_sample_buffer(filtered)
    if preset.echo_seconds:
        mixed = echo(mixed, preset.echo_seconds, config)

    _LOGGER.debug("Scene %s: %d samples", name, mixed.size)
    return clamp_samples(mixed, config)
