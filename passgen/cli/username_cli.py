#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys

from passgen.cli.common import EXIT_OK, add_common_arguments, run_guarded
from passgen.core import strength
from passgen.core.adapters import build_username_request
from passgen.core.bulk import generate_bulk
from passgen.core.username_schemes import DEFAULT_STYLE, STYLE_CHOICES


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Username generator")
    parser.add_argument("--style", choices=STYLE_CHOICES, default=DEFAULT_STYLE, help="username recipe")
    parser.add_argument("--include-number", action="store_true", help="append a 0-99 number where the style allows")
    parser.add_argument("--length", type=int, default=8, help="(random) character count, clamped to 4-32")
    parser.add_argument("--syllables", type=int, default=3, help="(pronounceable) syllable count, clamped to 2-6")
    parser.add_argument("--digits", type=int, default=4, help="(word_numbers) digit count, clamped to 1-8")
    parser.add_argument("--prefix", action="store_true", help="(gaming) add the xX prefix")
    parser.add_argument("--suffix", action="store_true", help="(gaming) add the Xx suffix")
    parser.add_argument("--word", default="", help="(custom_word) word to build the username around")
    add_common_arguments(parser)
    return parser.parse_args(argv)


def _run(args: argparse.Namespace) -> int:
    request = build_username_request(
        {
            "style": args.style,
            "include_number": args.include_number,
            "length": args.length,
            "syllables": args.syllables,
            "digits": args.digits,
            "include_prefix": args.prefix,
            "include_suffix": args.suffix,
            "custom_word": args.word,
        }
    )
    result = generate_bulk(args.count, request)
    analyses = tuple(strength.analyze(value) for value in result.outputs) if args.show_meta else ()
    for line in result.as_lines(analyses):
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    return run_guarded(_run, parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
