from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from . import effects
from .config import EngineConfig, WaveKind
from .encoder import PcmStream, encode16
from .melody import generate_random_melody
from .samples import SampleArray, SampleNumbers
from .scale import scale_from_config
from .scenes import compose_scene
from .synth import generate_silence, generate_tone, generate_white_noise

_LOGGER = logging.getLogger("tinkeraudio.engine")


class Engine:
    """Synthesis session bound to one immutable config.

    The scale and note-duration set are built once here. Every method returns
    a new buffer owned by the caller; a seeded `rng` makes the random
    methods reproducible.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.scale: tuple[float, ...] = scale_from_config(self.config)
        self.durations: tuple[float, ...] = tuple(self.config.note_durations)
        self._rng = rng or np.random.default_rng()
        _LOGGER.debug(
            "Engine ready: %d notes, wave=%s, volume=%.3f",
            len(self.scale),
            self.config.wave,
            self.config.volume,
        )

    # -- synthesis -----------------------------------------------------------

    def silence(self, duration: float) -> SampleArray:
        return generate_silence(duration, self.config)

    def tone(
        self,
        duration: float,
        frequencies: Sequence[float],
        wave: WaveKind | None = None,
    ) -> SampleArray:
        return generate_tone(duration, wave or self.config.wave, frequencies, self.config)

    def white_noise(self, duration: float) -> SampleArray:
        return generate_white_noise(duration, self.config, self._rng)

    def random_melody(self, note_count: int, wave: WaveKind | None = None) -> SampleArray:
        return generate_random_melody(
            note_count,
            self.config,
            self._rng,
            wave=wave,
            scale=self.scale,
            durations=self.durations,
        )

    def scene(self, name: str) -> SampleArray:
        return compose_scene(name, self.config, self._rng)

    # -- effects -------------------------------------------------------------

    def splice(self, first: SampleNumbers, second: SampleNumbers) -> SampleArray:
        return effects.splice(first, second)

    def echo(self, buffer: SampleNumbers, delay_seconds: int) -> SampleArray:
        return effects.echo(buffer, delay_seconds, self.config)

    def normalize(self, buffer: SampleNumbers) -> SampleArray:
        return effects.normalize(buffer, self.config)

    def resample(self, buffer: SampleNumbers, factor: float) -> SampleArray:
        return effects.resample(buffer, factor)

    def scale_amplitude(self, buffer: SampleNumbers, factor: float) -> SampleArray:
        return effects.scale_amplitude(buffer, factor, self.config)

    # -- output --------------------------------------------------------------

    def encode(self, buffer: SampleNumbers, channel_count: int = 1) -> PcmStream:
        return encode16(buffer, self.config.sample_rate, channel_count, self.config)
