"""Pure transformations over sample buffers.

None of these mutate their input; each returns a fresh int64 buffer.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from .config import EngineConfig
from .encoder import clamp_samples
from .errors import InvalidArgumentError
from .samples import INT16_MAX, SampleArray, SampleNumbers, ensure_sample_buffer

_LOGGER = logging.getLogger("tinkeraudio.effects")


def splice(first: SampleNumbers, second: SampleNumbers) -> SampleArray:
    """Concatenate two buffers, first then second."""
    return np.concatenate((ensure_sample_buffer(first), ensure_sample_buffer(second)))


def overlay(first: SampleNumbers, second: SampleNumbers) -> SampleArray:
    """Sample-wise sum, the shorter buffer padded with silence."""
    a = ensure_sample_buffer(first)
    b = ensure_sample_buffer(second)
    output = np.zeros(max(a.size, b.size), dtype=np.int64)
    output[: a.size] += a
    output[: b.size] += b
    return output


def echo(buffer: SampleNumbers, delay_seconds: int, config: EngineConfig) -> SampleArray:
    """Add a copy of the buffer delayed by `delay_seconds` whole seconds.

    The output is extended by the delay so the tail of the echo is kept.
    Under ``compat.legacy_echo_boundary`` the first input sample is never
    echoed (legacy test ``i - delay > 0``).
    """
    if not math.isfinite(delay_seconds) or delay_seconds != int(delay_seconds):
        raise InvalidArgumentError(f"echo delay must be whole seconds, got {delay_seconds!r}")
    if delay_seconds < 0:
        raise InvalidArgumentError(f"echo delay must be non-negative, got {delay_seconds!r}")

    samples = ensure_sample_buffer(buffer)
    delay = int(delay_seconds) * config.sample_rate
    output = np.zeros(samples.size + delay, dtype=np.int64)
    output[: samples.size] += samples

    first_echoed = 1 if config.compat.legacy_echo_boundary else 0
    if samples.size > first_echoed:
        output[delay + first_echoed :] += samples[first_echoed:]
    return output


def normalize(buffer: SampleNumbers, config: EngineConfig) -> SampleArray:
    """Scale the buffer so its loudest sample reaches full 16-bit scale.

    ``compat.legacy_normalize`` restores the legacy integer ratio
    ``max(buffer) // 32767``, which silences any buffer quieter than full scale.
    """
    samples = ensure_sample_buffer(buffer)
    if samples.size == 0:
        return samples

    if config.compat.legacy_normalize:
        peak = max(0, int(samples.max()))
        return samples * (peak // INT16_MAX)

    peak = int(np.abs(samples).max())
    if peak == 0:
        return samples
    return np.rint(samples * (INT16_MAX / peak)).astype(np.int64)


def resample(buffer: SampleNumbers, factor: float) -> SampleArray:
    """Change the number of samples by `factor` (output length ~ len * factor).

    Shrinking averages blocks of round(1 / factor) samples; growing steps
    through the input by 1 / factor and repeats samples.
    """
    if not math.isfinite(factor) or factor <= 0:
        raise InvalidArgumentError(f"resample factor must be positive, got {factor!r}")

    samples = ensure_sample_buffer(buffer)
    if factor == 1.0 or samples.size == 0:
        return samples.copy()

    if factor < 1.0:
        block = max(1, round(1.0 / factor))
        if block == 1:
            return samples.copy()
        starts = np.arange(0, samples.size, block)
        sums = np.add.reduceat(samples, starts)
        counts = np.diff(np.append(starts, samples.size))
        resampled = np.rint(sums / counts).astype(np.int64)
    else:
        length = int(samples.size * factor)
        indices = (np.arange(length) / factor).astype(np.int64)
        resampled = samples[np.minimum(indices, samples.size - 1)]

    _LOGGER.debug("Resampled %d -> %d samples (x%.3f)", samples.size, resampled.size, factor)
    return resampled


def scale_amplitude(buffer: SampleNumbers, factor: float, config: EngineConfig) -> SampleArray:
    """Multiply every sample by `factor`, then clamp to the 16-bit range.

    ``compat.legacy_amplitude_scale`` skips the clamp, matching the legacy form
    whose clamp compared each value with itself.
    """
    if not math.isfinite(factor):
        raise InvalidArgumentError(f"amplitude factor must be finite, got {factor!r}")
    scaled = ensure_sample_buffer(buffer) * float(factor)
    if config.compat.legacy_amplitude_scale:
        return ensure_sample_buffer(scaled)
    return clamp_samples(scaled, config)
