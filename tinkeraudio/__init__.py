from __future__ import annotations

from .audio import default_output_path, save_wav, write_wav
from .config import (
    MAX_AMPLITUDE,
    SAMPLE_RATE,
    WAVE_KINDS,
    Compat,
    EngineConfig,
    WaveKind,
)
from .effects import echo, normalize, overlay, resample, scale_amplitude, splice
from .encoder import PcmStream, clamp_samples, encode16
from .engine import Engine
from .errors import InvalidArgumentError, InvalidConfigError, TinkerAudioError
from .logging_utils import configure_logging as _configure_logging
from .melody import MelodyNote, draw_melody, generate_random_melody, render_melody
from .samples import SampleArray, ensure_sample_buffer
from .scale import note_frequency, populate_notes, scale_from_config
from .scenes import SCENE_NAMES, SCENES, SceneName, ScenePreset, compose_scene
from .synth import generate_silence, generate_tone, generate_white_noise
from .waveforms import WAVE_FUNCTIONS, evaluate, wave_function

__all__ = [
    "MAX_AMPLITUDE",
    "SAMPLE_RATE",
    "SCENES",
    "SCENE_NAMES",
    "WAVE_FUNCTIONS",
    "WAVE_KINDS",
    "Compat",
    "Engine",
    "EngineConfig",
    "InvalidArgumentError",
    "InvalidConfigError",
    "MelodyNote",
    "PcmStream",
    "SampleArray",
    "SceneName",
    "ScenePreset",
    "TinkerAudioError",
    "WaveKind",
    "clamp_samples",
    "compose_scene",
    "default_output_path",
    "draw_melody",
    "echo",
    "encode16",
    "ensure_sample_buffer",
    "evaluate",
    "generate_random_melody",
    "generate_silence",
    "generate_tone",
    "generate_white_noise",
    "normalize",
    "note_frequency",
    "overlay",
    "populate_notes",
    "render_melody",
    "resample",
    "save_wav",
    "scale_amplitude",
    "scale_from_config",
    "splice",
    "wave_function",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
