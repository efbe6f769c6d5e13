from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidArgumentError

SampleArray: TypeAlias = NDArray[np.int64]
IntArray: TypeAlias = NDArray[np.int64]
FloatArray: TypeAlias = NDArray[np.float64]
SampleNumbers: TypeAlias = NDArray[Any] | Sequence[int] | Sequence[float]

INT16_MIN = -32_768
INT16_MAX = 32_767

# Largest floats that survive a cast to int64.
_INT64_FLOAT_MIN = -(2.0**63)
_INT64_FLOAT_MAX = float(np.nextafter(2.0**63, 0.0))


def ensure_sample_buffer(buffer: SampleNumbers) -> SampleArray:
    """Coerce any numeric sequence to a 1-D int64 sample buffer.

    Floating point input is rounded to the nearest integer. NaN becomes
    silence; infinities and values beyond int64 saturate at the int64 bounds.
    """

    array = np.asarray(buffer)
    if array.size == 0:
        return np.zeros(0, dtype=np.int64)
    if array.dtype.kind == "b" or array.dtype.kind not in "iuf":
        raise InvalidArgumentError(f"sample buffer must be numeric, got dtype {array.dtype}")
    if array.dtype.kind == "f":
        cleaned = np.nan_to_num(
            array.astype(np.float64),
            nan=0.0,
            posinf=_INT64_FLOAT_MAX,
            neginf=_INT64_FLOAT_MIN,
        )
        bounded = np.clip(np.rint(cleaned), _INT64_FLOAT_MIN, _INT64_FLOAT_MAX)
        return bounded.astype(np.int64).reshape(-1)
    return array.astype(np.int64).reshape(-1)


def sample_count(duration: float, sample_rate: int) -> int:
    """Number of samples in `duration` seconds, truncated toward zero."""

    if not math.isfinite(duration) or duration < 0:
        raise InvalidArgumentError(f"duration must be a non-negative number, got {duration!r}")
    return int(duration * sample_rate)


def wrap_int16(values: NDArray[np.int64]) -> SampleArray:
    """Two's-complement wrap into the signed 16-bit range."""

    return values.astype(np.int16).astype(np.int64)
