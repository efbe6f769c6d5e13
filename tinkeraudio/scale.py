from __future__ import annotations

import logging
import math

from .config import EngineConfig
from .errors import InvalidArgumentError

_LOGGER = logging.getLogger("tinkeraudio.scale")

SEMITONES_PER_OCTAVE = 12


def note_frequency(base_frequency: float, steps: int) -> float:
    """Equal-temperament frequency `steps` semitones away from `base_frequency`."""
    return base_frequency * 2 ** (steps / SEMITONES_PER_OCTAVE)


def populate_notes(
    base_frequency: float,
    start_steps: int,
    end_steps: int,
    step_increment: int,
) -> tuple[float, ...]:
    """Frequencies for steps in [start_steps, end_steps), ascending by step_increment."""
    if not math.isfinite(base_frequency) or base_frequency <= 0:
        raise InvalidArgumentError(f"base frequency must be positive, got {base_frequency!r}")
    if step_increment <= 0:
        raise InvalidArgumentError(f"step increment must be positive, got {step_increment!r}")
    notes = tuple(
        note_frequency(base_frequency, step)
        for step in range(start_steps, end_steps, step_increment)
    )
    _LOGGER.debug(
        "Built %d notes from %.2f Hz over steps [%d, %d) by %d",
        len(notes),
        base_frequency,
        start_steps,
        end_steps,
        step_increment,
    )
    return notes


def scale_from_config(config: EngineConfig) -> tuple[float, ...]:
    return populate_notes(
        config.base_frequency,
        config.scale_start,
        config.scale_end,
        config.scale_step,
    )
