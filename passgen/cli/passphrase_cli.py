#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from passgen.cli.common import EXIT_OK, add_common_arguments, render_credentials, run_guarded
from passgen.core.adapters import build_passphrase_request
from passgen.core.bulk import generate_credentials
from passgen.core.credential_service import analyze
from passgen.core.error_dialect import WORDLIST_UNAVAILABLE, make_error
from passgen.core.models import (
    PASSPHRASE_CAPITALIZE_CHOICES,
    PASSPHRASE_DEFAULT_WORDS,
    PASSPHRASE_SEPARATORS,
)
from passgen.core.passphrase_engine import load_wordlist


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Word-based passphrase generator")
    parser.add_argument(
        "-w",
        "--words",
        type=int,
        default=PASSPHRASE_DEFAULT_WORDS,
        help="number of words (clamped to 3-8)",
    )
    parser.add_argument(
        "--separator",
        choices=PASSPHRASE_SEPARATORS,
        default="-",
        help="token separator; 'digit' puts a random digit between tokens",
    )
    parser.add_argument(
        "--capitalize",
        choices=PASSPHRASE_CAPITALIZE_CHOICES,
        default="first",
        help="word casing (default: first)",
    )
    parser.add_argument("--include-number", action="store_true", help="insert a 0-99 number at a random position")
    parser.add_argument(
        "--wordlist",
        default="",
        metavar="PATH",
        help="newline-separated lowercase wordlist to use instead of the bundled one",
    )
    add_common_arguments(parser)
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> int:
    request = build_passphrase_request(
        {
            "word_count": args.words,
            "separator": args.separator,
            "capitalize": args.capitalize,
            "include_number": args.include_number,
        }
    )
    wordlist = load_wordlist(args.wordlist) if args.wordlist else None
    credentials = generate_credentials(args.count, request, wordlist=wordlist)
    if not all(c.ok for c in credentials):
        raise make_error(WORDLIST_UNAVAILABLE, "the passphrase wordlist could not be loaded")
    analyses = tuple(analyze(c) for c in credentials) if args.show_meta else ()
    for line in render_credentials(credentials, analyses):
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    return run_guarded(_run, parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
