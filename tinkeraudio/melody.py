from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .config import EngineConfig, WaveKind
from .errors import InvalidArgumentError
from .samples import SampleArray
from .scale import scale_from_config
from .synth import generate_silence, generate_tone

_LOGGER = logging.getLogger("tinkeraudio.melody")


class MelodyNote(BaseModel):
    frequency: float = Field(gt=0.0)
    duration: float = Field(ge=0.0)

    model_config = ConfigDict(frozen=True, extra="forbid")


def _random_element(items: Sequence[float], rng: np.random.Generator) -> float:
    return items[int(rng.integers(0, len(items)))]


def draw_melody(
    note_count: int,
    scale: Sequence[float],
    durations: Sequence[float],
    rng: np.random.Generator,
) -> tuple[MelodyNote, ...]:
    """Pick a frequency, then a duration, uniformly at random for each note."""
    if note_count < 0:
        raise InvalidArgumentError(f"note count must be non-negative, got {note_count!r}")
    if len(scale) == 0:
        raise InvalidArgumentError("cannot draw notes from an empty scale")
    if len(durations) == 0:
        raise InvalidArgumentError("cannot draw notes from an empty duration set")

    notes: list[MelodyNote] = []
    for _ in range(note_count):
        frequency = _random_element(scale, rng)
        duration = _random_element(durations, rng)
        notes.append(MelodyNote(frequency=frequency, duration=duration))
    return tuple(notes)


def render_melody(
    notes: Sequence[MelodyNote],
    config: EngineConfig,
    wave: WaveKind | None = None,
) -> SampleArray:
    """Lead-in silence followed by one single-frequency tone per note."""
    kind = wave or config.wave
    parts = [generate_silence(config.lead_in, config)]
    parts.extend(generate_tone(note.duration, kind, [note.frequency], config) for note in notes)
    return np.concatenate(parts)


def generate_random_melody(
    note_count: int,
    config: EngineConfig,
    rng: np.random.Generator | None = None,
    *,
    wave: WaveKind | None = None,
    scale: Sequence[float] | None = None,
    durations: Sequence[float] | None = None,
) -> SampleArray:
    local_rng = rng or np.random.default_rng()
    notes = draw_melody(
        note_count,
        scale_from_config(config) if scale is None else scale,
        config.note_durations if durations is None else durations,
        local_rng,
    )
    melody = render_melody(notes, config, wave)
    _LOGGER.debug("Melody of %d notes, %d samples", len(notes), melody.size)
    return melody
