from __future__ import annotations

import numpy as np
import pytest
from pydantic import ValidationError

from tinkeraudio.config import EngineConfig
from tinkeraudio.errors import InvalidArgumentError
from tinkeraudio.melody import MelodyNote, draw_melody, generate_random_melody, render_melody
from tinkeraudio.scale import populate_notes
from tinkeraudio.synth import generate_tone

CONFIG = EngineConfig()
SCALE = populate_notes(440, -16, 8, 2)
DURATIONS = (0.15, 0.2, 0.3, 0.4)


def test_draws_come_from_scale_and_duration_set() -> None:
    notes = draw_melody(50, SCALE, DURATIONS, np.random.default_rng(1))
    assert len(notes) == 50
    assert all(note.frequency in SCALE for note in notes)
    assert all(note.duration in DURATIONS for note in notes)


def test_melody_length_is_sum_of_truncated_terms() -> None:
    notes = draw_melody(12, SCALE, DURATIONS, np.random.default_rng(42))
    melody = generate_random_melody(12, CONFIG, np.random.default_rng(42))
    expected = int(0.1 * 44_100) + sum(int(note.duration * 44_100) for note in notes)
    assert melody.size == expected


def test_melody_is_bit_reproducible_for_a_seed() -> None:
    first = generate_random_melody(12, CONFIG, np.random.default_rng(7))
    second = generate_random_melody(12, CONFIG, np.random.default_rng(7))
    assert np.array_equal(first, second)


def test_melody_starts_with_lead_in_silence() -> None:
    melody = generate_random_melody(3, CONFIG, np.random.default_rng(0))
    assert not melody[: int(0.1 * 44_100)].any()


def test_zero_notes_is_only_the_lead_in() -> None:
    melody = generate_random_melody(0, CONFIG, np.random.default_rng(0))
    assert melody.size == int(0.1 * 44_100)


def test_render_concatenates_tones_in_draw_order() -> None:
    notes = (
        MelodyNote(frequency=440.0, duration=0.2),
        MelodyNote(frequency=330.0, duration=0.15),
    )
    melody = render_melody(notes, CONFIG, wave="sine")
    lead = int(0.1 * 44_100)
    first = generate_tone(0.2, "sine", [440.0], CONFIG)
    second = generate_tone(0.15, "sine", [330.0], CONFIG)
    assert np.array_equal(melody[lead : lead + first.size], first)
    assert np.array_equal(melody[lead + first.size :], second)


def test_render_defaults_to_config_wave() -> None:
    notes = (MelodyNote(frequency=441.0, duration=0.1),)
    melody = render_melody(notes, CONFIG.with_wave("square"))
    tone = melody[int(0.1 * 44_100) :]
    assert set(np.unique(tone)) == {-2621, 2621}


def test_empty_scale_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        generate_random_melody(4, CONFIG, np.random.default_rng(0), scale=())


def test_empty_duration_set_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        draw_melody(4, SCALE, (), np.random.default_rng(0))


def test_negative_note_count_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        draw_melody(-1, SCALE, DURATIONS, np.random.default_rng(0))


def test_melody_note_validates_frequency() -> None:
    with pytest.raises(ValidationError):
        MelodyNote(frequency=0.0, duration=0.2)


def test_scale_and_durations_accept_numpy_arrays() -> None:
    scale = np.array([440.0, 550.0])
    durations = np.array([0.1, 0.2])
    notes = draw_melody(5, scale, durations, np.random.default_rng(2))
    assert len(notes) == 5
    assert all(note.frequency in (440.0, 550.0) for note in notes)
    melody = generate_random_melody(2, CONFIG, np.random.default_rng(2), scale=scale)
    assert melody.size > int(0.1 * 44_100)


def test_empty_numpy_sets_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        draw_melody(3, np.array([]), DURATIONS, np.random.default_rng(0))
    with pytest.raises(InvalidArgumentError):
        draw_melody(3, SCALE, np.array([]), np.random.default_rng(0))
