#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import Any, Dict

from passgen.cli.common import EXIT_OK, add_common_arguments, run_guarded
from passgen.core import strength
from passgen.core.adapters import build_password_request
from passgen.core.bulk import generate_bulk
from passgen.core.export import write_delimited_file
from passgen.core.models import PASSWORD_DEFAULT_LENGTH


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Password generator backed by the OS CSPRNG")

    parser.add_argument(
        "-l",
        "--length",
        type=int,
        default=PASSWORD_DEFAULT_LENGTH,
        help="password length (clamped to 4-128)",
    )
    parser.add_argument("--no-uppercase", action="store_true", help="exclude A-Z")
    parser.add_argument("--no-lowercase", action="store_true", help="exclude a-z")
    parser.add_argument("--no-numbers", action="store_true", help="exclude 0-9")
    parser.add_argument("--no-symbols", action="store_true", help="exclude symbols")
    parser.add_argument("--symbols", default=None, help="custom symbol set replacing the default symbols")
    parser.add_argument("--exclude-ambiguous", action="store_true", help="drop look-alike characters 0 O 1 l I |")
    parser.add_argument("--exclude-brackets", action="store_true", help="drop brackets, slashes and quotes")
    parser.add_argument("--min-numbers", type=int, default=0, help="minimum digits (0-10)")
    parser.add_argument("--min-symbols", type=int, default=0, help="minimum symbols (0-10)")
    parser.add_argument("--begin-with-letter", action="store_true", help="first character is always a letter")
    parser.add_argument(
        "--no-repeating",
        action="store_true",
        help="never reuse a character (length is clamped to the pool size)",
    )
    parser.add_argument("--csv", default="", metavar="PATH", help="also write the outputs to a CSV file")
    add_common_arguments(parser)

    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {
        "length": args.length,
        "uppercase": not args.no_uppercase,
        "lowercase": not args.no_lowercase,
        "numbers": not args.no_numbers,
        "symbols": not args.no_symbols,
        "custom_symbols": args.symbols,
        "exclude_ambiguous": args.exclude_ambiguous,
        "exclude_brackets": args.exclude_brackets,
        "min_numbers": args.min_numbers,
        "min_symbols": args.min_symbols,
        "begin_with_letter": args.begin_with_letter,
        "no_repeating": args.no_repeating,
    }


def _run(args: argparse.Namespace) -> int:
    request = build_password_request(_settings_from_args(args))
    result = generate_bulk(args.count, request)
    if args.csv:
        target = write_delimited_file(args.csv, result.outputs)
        print(f"wrote {len(result)} password(s) to {target}", file=sys.stderr)
    analyses = tuple(strength.analyze(value) for value in result.outputs) if args.show_meta else ()
    for line in result.as_lines(analyses):
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    return run_guarded(_run, parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
