from __future__ import annotations

import logging
import tempfile
import uuid
from pathlib import Path
from typing import Callable, cast

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

from .encoder import PCM16_DTYPE, PcmStream
from .logging_utils import debug_enabled, log_exception

_LOGGER = logging.getLogger("tinkeraudio.audio")


def default_output_path(directory: str | Path | None = None) -> Path:
    """A fresh UUID-named .wav path, in the temp directory by default."""
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    return base / f"{uuid.uuid4()}.wav"


def _frames(pcm: PcmStream) -> NDArray[np.int16]:
    samples = np.frombuffer(pcm.data, dtype=PCM16_DTYPE).astype(np.int16)
    usable = pcm.frame_count * pcm.channel_count
    if usable != samples.size:
        _LOGGER.info(
            "Dropping %d trailing sample(s) that do not fill a %d-channel frame",
            samples.size - usable,
            pcm.channel_count,
        )
    frames = samples[:usable]
    if pcm.channel_count == 1:
        return frames
    return frames.reshape(-1, pcm.channel_count)


def write_wav(path: str | Path, pcm: PcmStream) -> Path:
    """Write an encoded PCM stream to a 16-bit WAV file."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    write_fn = getattr(sf, "write", None)
    assert callable(write_fn)
    write_audio = cast(Callable[..., None], write_fn)
    write_audio(target, _frames(pcm), pcm.sample_rate, subtype="PCM_16")
    _LOGGER.debug("Wrote %d frames to %s", pcm.frame_count, target)
    return target


def save_wav(path: str | Path, pcm: PcmStream) -> Path:
    try:
        return write_wav(path, pcm)
    except Exception as exc:
        _LOGGER.warning("save_wav failed: %s", exc, exc_info=debug_enabled())
        log_exception("save_wav", exc)
        raise
