"""Periodic waveform functions.

Each function maps a frequency and an array of sample positions to amplitude
contributions. Square and sine return unit amplitudes; triangle and sawtooth
do too unless ``config.compat.legacy_waveforms`` is set, in which case they
reproduce the legacy Tinkering Audio formulas: the phase is taken over raw sample
positions (no division by the sample rate) and the result is pre-scaled by
``max_amplitude * volume``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Callable, TypeAlias

import numpy as np

from .config import WAVE_KINDS, EngineConfig, WaveKind
from .errors import InvalidArgumentError
from .samples import FloatArray, IntArray

WaveFn: TypeAlias = Callable[[float, IntArray, EngineConfig], FloatArray]


def _check_frequency(frequency: float) -> float:
    if not math.isfinite(frequency) or frequency <= 0:
        raise InvalidArgumentError(f"frequency must be positive, got {frequency!r}")
    return float(frequency)


def _check_positions(positions: IntArray) -> IntArray:
    array = np.asarray(positions, dtype=np.int64).reshape(-1)
    if array.size and int(array.min()) < 0:
        raise InvalidArgumentError("sample positions must be non-negative")
    return array


def _phase(frequency: float, positions: IntArray, config: EngineConfig) -> FloatArray:
    """Angular phase 2*pi*f*n/sr."""
    return 2.0 * np.pi * frequency * (positions / float(config.sample_rate))


def square_wave(frequency: float, positions: IntArray, config: EngineConfig) -> FloatArray:
    frequency = _check_frequency(frequency)
    positions = _check_positions(positions)
    value = np.sin(_phase(frequency, positions, config))
    # Zero crossings fall into the negative half.
    return np.where(value > 0, 1.0, -1.0)


def sine_wave(frequency: float, positions: IntArray, config: EngineConfig) -> FloatArray:
    frequency = _check_frequency(frequency)
    positions = _check_positions(positions)
    return np.sin(_phase(frequency, positions, config))


def triangle_wave(frequency: float, positions: IntArray, config: EngineConfig) -> FloatArray:
    frequency = _check_frequency(frequency)
    positions = _check_positions(positions)
    if config.compat.legacy_waveforms:
        scale = 2.0 * config.amplitude / np.pi
        phase = 2.0 * np.pi * frequency * positions.astype(np.float64)
    else:
        scale = 2.0 / np.pi
        phase = _phase(frequency, positions, config)
    # Rounding can push sin a hair outside [-1, 1].
    return scale * np.arcsin(np.clip(np.sin(phase), -1.0, 1.0))


def sawtooth_wave(frequency: float, positions: IntArray, config: EngineConfig) -> FloatArray:
    frequency = _check_frequency(frequency)
    positions = _check_positions(positions)
    if config.compat.legacy_waveforms:
        scale = 2.0 * config.amplitude / np.pi
        phase = np.pi * frequency * positions.astype(np.float64)
    else:
        scale = 2.0 / np.pi
        phase = np.pi * frequency * (positions / float(config.sample_rate))

    tangent = np.tan(phase)
    singular = tangent == 0.0
    cotangent = np.divide(1.0, tangent, out=np.zeros_like(tangent), where=~singular)
    value = -scale * np.arctan(cotangent)
    # cot is undefined at the singularity; those samples are silent.
    value[singular] = 0.0
    return np.where(np.isfinite(value), value, 0.0)


WAVE_FUNCTIONS: Mapping[WaveKind, WaveFn] = MappingProxyType(
    {
        "square": square_wave,
        "sine": sine_wave,
        "triangle": triangle_wave,
        "sawtooth": sawtooth_wave,
    }
)


def wave_function(kind: WaveKind) -> WaveFn:
    try:
        return WAVE_FUNCTIONS[kind]
    except KeyError as exc:
        raise InvalidArgumentError(
            f"Unknown wave kind: {kind!r}. Valid: {list(WAVE_KINDS)}"
        ) from exc


def evaluate(kind: WaveKind, frequency: float, position: int, config: EngineConfig) -> float:
    """Single-sample form of the wave function for `kind`."""
    if position < 0:
        raise InvalidArgumentError(f"sample position must be non-negative, got {position!r}")
    values = wave_function(kind)(frequency, np.array([position], dtype=np.int64), config)
    return float(values[0])
