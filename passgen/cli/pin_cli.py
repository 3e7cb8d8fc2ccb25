#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from passgen.cli.common import EXIT_OK, add_common_arguments, render_credentials, run_guarded
from passgen.core.adapters import build_pin_request
from passgen.core.bulk import generate_credentials
from passgen.core.credential_service import analyze
from passgen.core.models import PIN_DEFAULT_LENGTH


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Numeric PIN generator")
    parser.add_argument("-l", "--length", type=int, default=PIN_DEFAULT_LENGTH, help="PIN length (clamped to 4-12)")
    parser.add_argument("--no-repeated-digits", action="store_true", help="every digit appears at most once")
    parser.add_argument(
        "--no-sequential-digits",
        action="store_true",
        help="reject runs like 123 or 987",
    )
    add_common_arguments(parser)
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> int:
    request = build_pin_request(
        {
            "length": args.length,
            "no_repeated_digits": args.no_repeated_digits,
            "no_sequential_digits": args.no_sequential_digits,
        }
    )
    credentials = generate_credentials(args.count, request)
    analyses = tuple(analyze(c) for c in credentials) if args.show_meta else ()
    for line in render_credentials(credentials, analyses):
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    return run_guarded(_run, parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
