"""Command line front end: synthesise, apply effects, encode, write a WAV.

Usage:
    tinkeraudio melody --notes 12 --wave sawtooth -o melody.wav
    tinkeraudio noise --duration 12
    tinkeraudio tone --frequency 440 --frequency 660 --duration 2 --echo 1
    tinkeraudio scene ocean --seed 7
    tinkeraudio info
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np
from rich.console import Console

from .audio import default_output_path, save_wav
from .config import WAVE_KINDS, Compat, EngineConfig
from .effects import echo, normalize, resample, scale_amplitude
from .engine import Engine
from .logging_utils import (
    configure_logging,
    debug_enabled,
    get_log_path,
    log_exception,
    setup_file_logger,
)
from .samples import SampleArray
from .scenes import SCENE_NAMES
from .spinner import Spinner, render_error

_LOGGER = logging.getLogger("tinkeraudio.cli")
_CONSOLE = Console()


def _add_synth_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--wave", choices=WAVE_KINDS, default=None)
    parser.add_argument("--volume", type=float, default=None, help="0.0 - 1.0")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-o", "--output", type=str, default=None)
    parser.add_argument("--echo", type=int, default=0, metavar="SECONDS")
    parser.add_argument("--gain", type=float, default=None, metavar="FACTOR")
    parser.add_argument("--normalize", action="store_true")
    parser.add_argument("--resample", type=float, default=None, metavar="FACTOR")
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Reproduce the legacy Tinkering Audio arithmetic.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tinkeraudio")
    parser.add_argument("--log-file", action="store_true", help="Also log to the log file.")
    sub = parser.add_subparsers(dest="command", required=True)

    melody = sub.add_parser("melody", help="Render a random melody.")
    melody.add_argument("--notes", type=int, default=12)
    _add_synth_options(melody)

    noise = sub.add_parser("noise", help="Render white noise.")
    noise.add_argument("--duration", type=float, default=12.0)
    _add_synth_options(noise)

    tone = sub.add_parser("tone", help="Render a tone from one or more frequencies.")
    tone.add_argument("--frequency", type=float, action="append", required=True)
    tone.add_argument("--duration", type=float, default=1.0)
    _add_synth_options(tone)

    scene = sub.add_parser("scene", help="Render an ambient scene preset.")
    scene.add_argument("name", choices=SCENE_NAMES)
    _add_synth_options(scene)

    sub.add_parser("info", help="Show the active config, scale and log location.")
    return parser


def _engine_from_args(args: argparse.Namespace) -> Engine:
    config = EngineConfig.from_env(
        wave=args.wave,
        volume=args.volume,
        compat=Compat.all_legacy() if args.legacy else None,
    )
    return Engine(config, rng=np.random.default_rng(args.seed))


def _render(engine: Engine, args: argparse.Namespace) -> SampleArray:
    match args.command:
        case "melody":
            return engine.random_melody(args.notes)
        case "noise":
            return engine.white_noise(args.duration)
        case "tone":
            return engine.tone(args.duration, args.frequency)
        case "scene":
            return engine.scene(args.name)
        case _:
            raise ValueError(f"Not a synthesis command: {args.command!r}")


def _apply_effects(engine: Engine, buffer: SampleArray, args: argparse.Namespace) -> SampleArray:
    config = engine.config
    if args.echo:
        buffer = echo(buffer, args.echo, config)
    if args.gain is not None:
        buffer = scale_amplitude(buffer, args.gain, config)
    if args.normalize:
        buffer = normalize(buffer, config)
    if args.resample is not None:
        buffer = resample(buffer, args.resample)
    return buffer


def _info_report(config: EngineConfig) -> list[str]:
    engine = Engine(config)
    notes = ", ".join(f"{note:.2f}" for note in engine.scale)
    durations = ", ".join(f"{duration:g}" for duration in engine.durations)
    return [
        f"Sample rate: {config.sample_rate} Hz",
        f"Volume: {config.volume}",
        f"Wave: {config.wave}",
        f"Scale ({len(engine.scale)} notes): {notes}",
        f"Note durations: {durations} s",
        f"Log file: {get_log_path()}",
        "Hints:",
        "- Set TINKERAUDIO_VOLUME / TINKERAUDIO_WAVE / TINKERAUDIO_SAMPLE_RATE to change defaults.",
        "- Set TINKERAUDIO_DEBUG=1 to include tracebacks in warnings.",
    ]


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        parser = build_parser()
        args = parser.parse_args(argv)
        if args.log_file:
            setup_file_logger("tinkeraudio")

        if args.command == "info":
            for line in _info_report(EngineConfig.from_env()):
                _CONSOLE.print(line)
            return 0

        engine = _engine_from_args(args)
        with Spinner(f"Rendering {args.command}"):
            buffer = _apply_effects(engine, _render(engine, args), args)
            pcm = engine.encode(buffer)
        target = Path(args.output) if args.output else default_output_path()
        path = save_wav(target, pcm)
        _CONSOLE.print(
            f"Wrote {args.command} to {path} ({pcm.duration:.2f}s, sr={pcm.sample_rate})"
        )
        return 0
    except Exception as exc:
        _LOGGER.warning("tinkeraudio CLI failed: %s", exc, exc_info=debug_enabled())
        log_exception("tinkeraudio CLI", exc)
        render_error("tinkeraudio CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
