"""Raw sample buffer synthesis: silence, tones and white noise."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .config import EngineConfig, WaveKind
from .samples import SampleArray, sample_count, wrap_int16
from .waveforms import wave_function

_LOGGER = logging.getLogger("tinkeraudio.synth")


def generate_silence(duration: float, config: EngineConfig) -> SampleArray:
    """All-zero buffer of int(duration * sample_rate) samples."""
    return np.zeros(sample_count(duration, config.sample_rate), dtype=np.int64)


def generate_tone(
    duration: float,
    wave: WaveKind,
    frequencies: Sequence[float],
    config: EngineConfig,
) -> SampleArray:
    """Sum of one waveform per frequency, scaled by max_amplitude * volume.

    Each contribution is truncated to an integer and the running sum lives in
    a signed 16-bit register, so overflow wraps around instead of clamping.
    Clamping happens later, in the encoder.
    """
    num_samples = sample_count(duration, config.sample_rate)
    wave_fn = wave_function(wave)
    positions = np.arange(num_samples, dtype=np.int64)
    total = np.zeros(num_samples, dtype=np.int64)

    for frequency in frequencies:
        contribution = config.amplitude * wave_fn(frequency, positions, config)
        contribution = np.where(np.isfinite(contribution), contribution, 0.0)
        total += wrap_int16(np.trunc(contribution).astype(np.int64))

    _LOGGER.debug(
        "Tone %s %.3fs (%d samples) at %s Hz",
        wave,
        duration,
        num_samples,
        ", ".join(f"{frequency:.2f}" for frequency in frequencies),
    )
    return wrap_int16(total)


def noise_samples(
    num_samples: int,
    config: EngineConfig,
    rng: np.random.Generator,
) -> SampleArray:
    # integers(-1, 1) draws from {-1, 0}, the legacy noise range.
    draws = rng.integers(-1, 1, size=num_samples)
    return np.trunc(draws * config.volume * config.max_amplitude).astype(np.int64)


def generate_white_noise(
    duration: float,
    config: EngineConfig,
    rng: np.random.Generator | None = None,
) -> SampleArray:
    """Noise whose samples are either 0 or -max_amplitude * volume."""
    local_rng = rng or np.random.default_rng()
    return noise_samples(sample_count(duration, config.sample_rate), config, local_rng)
