from __future__ import annotations

import logging
from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .config import EngineConfig
from .errors import InvalidArgumentError
from .samples import INT16_MAX, INT16_MIN, SampleArray, SampleNumbers, ensure_sample_buffer

_LOGGER = logging.getLogger("tinkeraudio.encoder")

PCM16_DTYPE = np.dtype("<i2")


class PcmStream(BaseModel):
    """Little-endian 16-bit PCM bytes plus the header fields a writer needs."""

    data: bytes
    sample_rate: int = Field(gt=0)
    channel_count: int = Field(default=1, ge=1)
    bit_depth: Literal[16] = 16

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def frame_count(self) -> int:
        return len(self.data) // (2 * self.channel_count)

    @property
    def duration(self) -> float:
        return self.frame_count / self.sample_rate

    def to_samples(self) -> SampleArray:
        return np.frombuffer(self.data, dtype=PCM16_DTYPE).astype(np.int64)


def clamp_samples(buffer: SampleNumbers, config: EngineConfig | None = None) -> SampleArray:
    """Saturate samples into the signed 16-bit range.

    With ``compat.legacy_clamp`` the bounds are +/-max_amplitude (32768), and
    a value clamped to +32768 wraps to -32768 when narrowed, as in the legacy
    form.
    """
    samples = ensure_sample_buffer(buffer)
    if config is not None and config.compat.legacy_clamp:
        bound = config.max_amplitude
        clipped = np.clip(samples, -bound, bound)
        return clipped.astype(np.int16).astype(np.int64)
    return np.clip(samples, INT16_MIN, INT16_MAX)


def encode16(
    buffer: SampleNumbers,
    sample_rate: int,
    channel_count: int = 1,
    config: EngineConfig | None = None,
) -> PcmStream:
    if sample_rate <= 0:
        raise InvalidArgumentError(f"sample rate must be positive, got {sample_rate!r}")
    if channel_count < 1:
        raise InvalidArgumentError(f"channel count must be at least 1, got {channel_count!r}")
    clamped = clamp_samples(buffer, config)
    data = clamped.astype(PCM16_DTYPE).tobytes()
    _LOGGER.debug(
        "Encoded %d samples (%d bytes) at %d Hz, %d channel(s)",
        clamped.size,
        len(data),
        sample_rate,
        channel_count,
    )
    return PcmStream(data=data, sample_rate=sample_rate, channel_count=channel_count)
