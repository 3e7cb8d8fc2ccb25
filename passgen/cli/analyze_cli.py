#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from passgen.cli.common import EXIT_OK, add_common_arguments, run_guarded
from passgen.core import strength
from passgen.core.credential_service import analyze
from passgen.core.error_dialect import INVALID_COUNT, INVALID_PIN, make_error
from passgen.core.models import StrengthAnalysis


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Estimate entropy, strength level and offline crack time",
        epilog="With no VALUE and no --words, one line is read from stdin so the secret stays out of shell history.",
    )
    parser.add_argument("value", nargs="?", default=None, help="password or username to score")
    parser.add_argument("--pin", action="store_true", help="score VALUE as a numeric PIN (log2(10) bits per digit)")
    parser.add_argument("--words", type=int, default=0, help="score a passphrase of this many words instead of VALUE")
    parser.add_argument("--with-number", action="store_true", help="(--words) passphrase carries a 0-99 number")
    parser.add_argument(
        "--wordlist-size",
        type=int,
        default=None,
        help="(--words) wordlist size; defaults to the bundled list",
    )
    parser.add_argument(
        "--legacy-thresholds",
        action="store_true",
        help="use the 28/36/60/80-bit level cut points instead of 30/50/70/90",
    )
    parser.add_argument(
        "--guesses-per-second",
        type=float,
        default=strength.DEFAULT_GUESSES_PER_SECOND,
        help="attacker guess rate for the crack-time estimate (default: 1e10)",
    )
    add_common_arguments(parser, with_count=False)
    return parser.parse_args(argv)


def _format_report(analysis: StrengthAnalysis) -> tuple[str, ...]:
    return (
        f"entropy: {analysis.entropy_bits:.1f} bits",
        f"level: {analysis.level.label}",
        f"crack time: {analysis.crack_time_label}",
    )


def _read_value(args: argparse.Namespace) -> str:
    if args.value is not None:
        return args.value
    line = sys.stdin.readline()
    return line.rstrip("\r\n")


def _run(args: argparse.Namespace) -> int:
    thresholds = strength.LEGACY_THRESHOLDS if args.legacy_thresholds else strength.DEFAULT_THRESHOLDS
    tuning = {"thresholds": thresholds, "guesses_per_second": args.guesses_per_second}

    if args.words:
        if args.words < 0:
            raise make_error(INVALID_COUNT, "--words must be > 0")
        result = analyze(
            args.words,
            includes_number=args.with_number,
            wordlist_size=args.wordlist_size,
            **tuning,
        )
    else:
        value = _read_value(args)
        if args.pin:
            if not value.isdigit():
                raise make_error(INVALID_PIN, "PIN must contain only digits")
            result = strength.analyze_pin(value, **tuning)
        else:
            result = analyze(value, **tuning)

    lines = _format_report(result)
    if args.show_meta:
        lines = lines + (result.as_meta(),)
    for line in lines:
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    return run_guarded(_run, parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
