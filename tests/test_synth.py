from __future__ import annotations

import math

import numpy as np
import pytest

from tinkeraudio.config import Compat, EngineConfig
from tinkeraudio.errors import InvalidArgumentError
from tinkeraudio.synth import generate_silence, generate_tone, generate_white_noise

CONFIG = EngineConfig()


@pytest.mark.parametrize("duration", [0.0, 0.1, 0.15, 0.3, 1.0, 2.5])
def test_silence_length_and_content(duration: float) -> None:
    silence = generate_silence(duration, CONFIG)
    assert silence.size == math.floor(duration * 44_100)
    assert silence.dtype == np.int64
    assert not silence.any()


@pytest.mark.parametrize("duration", [-0.1, float("nan"), float("inf")])
def test_invalid_duration_rejected(duration: float) -> None:
    with pytest.raises(InvalidArgumentError):
        generate_silence(duration, CONFIG)
    with pytest.raises(InvalidArgumentError):
        generate_tone(duration, "sine", [440.0], CONFIG)
    with pytest.raises(InvalidArgumentError):
        generate_white_noise(duration, CONFIG, np.random.default_rng(0))


def test_sine_tone_is_truncated_scaled_wave() -> None:
    tone = generate_tone(0.01, "sine", [441.0], CONFIG)
    positions = np.arange(441)
    expected = np.trunc(
        CONFIG.max_amplitude * CONFIG.volume * np.sin(2.0 * np.pi * 441.0 * (positions / 44_100))
    ).astype(np.int64)
    assert tone.size == 441
    assert np.array_equal(tone, expected)


def test_square_tone_amplitude() -> None:
    tone = generate_tone(0.01, "square", [441.0], CONFIG)
    assert set(np.unique(tone)) == {-2621, 2621}


def test_tone_sums_frequencies() -> None:
    single = generate_tone(0.05, "sine", [300.0], CONFIG)
    other = generate_tone(0.05, "sine", [500.0], CONFIG)
    both = generate_tone(0.05, "sine", [300.0, 500.0], CONFIG)
    assert np.array_equal(both, single + other)


def test_tone_accumulator_wraps_instead_of_clamping() -> None:
    loud = EngineConfig(volume=0.75)
    tone = generate_tone(0.01, "square", [441.0, 441.0], loud)
    # 2 * 24576 = 49152 wraps to -16384; -49152 wraps to 16384.
    assert tone[10] == -16_384
    assert tone[60] == 16_384


def test_empty_frequency_set_is_silence() -> None:
    tone = generate_tone(0.2, "triangle", [], CONFIG)
    assert tone.size == int(0.2 * 44_100)
    assert not tone.any()


def test_tone_rejects_bad_frequency() -> None:
    with pytest.raises(InvalidArgumentError):
        generate_tone(0.1, "sine", [440.0, 0.0], CONFIG)


def test_legacy_waveform_tone_stays_in_16_bit_range() -> None:
    legacy = CONFIG.with_compat(Compat(legacy_waveforms=True))
    for kind in ("triangle", "sawtooth"):
        tone = generate_tone(0.05, kind, [440.0], legacy)
        assert tone.min() >= -32_768
        assert tone.max() <= 32_767


def test_white_noise_uses_narrow_range() -> None:
    noise = generate_white_noise(0.5, CONFIG, np.random.default_rng(3))
    assert noise.size == int(0.5 * 44_100)
    assert set(np.unique(noise)) == {-2621, 0}


def test_white_noise_is_reproducible_with_seed() -> None:
    first = generate_white_noise(0.2, CONFIG, np.random.default_rng(11))
    second = generate_white_noise(0.2, CONFIG, np.random.default_rng(11))
    assert np.array_equal(first, second)


def test_volume_scales_noise() -> None:
    quiet = EngineConfig(volume=0.5)
    noise = generate_white_noise(0.1, quiet, np.random.default_rng(0))
    assert noise.min() == -16_384
