from __future__ import annotations


class TinkerAudioError(Exception):
    """Base error for the tinkeraudio library."""


class InvalidArgumentError(TinkerAudioError):
    """Raised when a synthesis or effect call receives an unusable argument."""


class InvalidConfigError(TinkerAudioError):
    """Raised when an engine config cannot be parsed or validated."""
