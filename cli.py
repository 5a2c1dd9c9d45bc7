#!/usr/bin/env python3
"""Command-line front end for the WAVE codec.

Usage:
    python cli.py inspect input.wav            # print the decoded summary
    python cli.py tone out.wav --duration 2    # write a square-wave tone
    python cli.py reencode input.wav new.wav   # decode then re-encode
"""

import argparse
import json
import logging
import sys

from wavecodec import config
from wavecodec.errors import WaveError
from wavecodec.tone import square_wave_file
from services.storage import read_wave_file, write_wave_file


logger = logging.getLogger("wavecodec.cli")


def cmd_inspect(args):
    wave = read_wave_file(args.path)
    print(json.dumps(wave.summary(), indent=2))


def cmd_tone(args):
    wave = square_wave_file(
        sample_rate=args.sample_rate,
        duration_seconds=args.duration,
        amplitude=args.amplitude,
        half_period=args.half_period,
        channels=args.channels,
        bits_per_sample=args.bits,
    )
    size = write_wave_file(args.out, wave)
    print(f"{args.out}: {wave.samples_per_channel} frames, {size} bytes")


def cmd_reencode(args):
    wave = read_wave_file(args.src)
    size = write_wave_file(args.dst, wave)
    print(f"{args.dst}: {size} bytes")


def build_parser():
    parser = argparse.ArgumentParser(description="Decode, inspect and generate PCM WAVE files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log codec stages")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("inspect", help="Decode a WAVE file and print its summary")
    p.add_argument("path")
    p.set_defaults(func=cmd_inspect)

    p = sub.add_parser("tone", help="Write a square-wave tone")
    p.add_argument("out")
    p.add_argument("--sample-rate", type=int, default=config.audio.sample_rate)
    p.add_argument("--channels", type=int, default=config.audio.channels)
    p.add_argument("--bits", type=int, choices=(8, 16, 32), default=config.audio.bits_per_sample)
    p.add_argument("--duration", type=float, default=config.tone.duration_seconds, help="Seconds")
    p.add_argument("--amplitude", type=int, default=config.tone.amplitude)
    p.add_argument("--half-period", type=int, default=config.tone.half_period,
                   help="Samples between sign flips")
    p.set_defaults(func=cmd_tone)

    p = sub.add_parser("reencode", help="Decode a WAVE file and write it back out")
    p.add_argument("src")
    p.add_argument("dst")
    p.set_defaults(func=cmd_reencode)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        args.func(args)
    except WaveError as e:
        logger.error(f"{e.kind}: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
