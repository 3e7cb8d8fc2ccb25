#!/usr/bin/env python3
from __future__ import annotations

import sys

from passgen import __version__
from passgen.cli.analyze_cli import main as analyze_main
from passgen.cli.passphrase_cli import main as passphrase_main
from passgen.cli.password_cli import main as password_main
from passgen.cli.pin_cli import main as pin_main
from passgen.cli.username_cli import main as username_main

_PASSWORD_ALIASES = frozenset({"password", "pass", "pw"})
_PIN_ALIASES = frozenset({"pin"})
_PASSPHRASE_ALIASES = frozenset({"passphrase", "phrase", "words"})
_USERNAME_ALIASES = frozenset({"username", "user", "uname"})
_ANALYZE_ALIASES = frozenset({"analyze", "analyse", "strength"})


def _print_help() -> None:
    print(
        "PassGen unified CLI\n"
        "\n"
        "Usage:\n"
        "  passgen [password flags]\n"
        "  passgen password [password flags]\n"
        "  passgen pin [pin flags]\n"
        "  passgen passphrase [passphrase flags]\n"
        "  passgen username [username flags]\n"
        "  passgen analyze [VALUE] [analyze flags]\n"
        "\n"
        "Examples:\n"
        "  passgen -n 5 -l 24 --min-symbols 2\n"
        "  passgen password -n 20 --csv passwords.csv\n"
        "  passgen pin -l 6 --no-sequential-digits\n"
        "  passgen passphrase -w 5 --separator digit --show-meta\n"
        "  passgen username --style gaming --prefix --suffix\n"
    )


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return password_main([])

    command = args[0].lower()
    tail = args[1:]

    if command in ("-h", "--help", "help"):
        _print_help()
        return 0
    if command in ("-V", "--version", "version"):
        print(f"passgen {__version__}")
        return 0
    if command in _PASSWORD_ALIASES:
        return password_main(tail)
    if command in _PIN_ALIASES:
        return pin_main(tail)
    if command in _PASSPHRASE_ALIASES:
        return passphrase_main(tail)
    if command in _USERNAME_ALIASES:
        return username_main(tail)
    if command in _ANALYZE_ALIASES:
        return analyze_main(tail)
    if command.startswith("-"):
        return password_main(args)
    print(
        f"unknown command: {args[0]!r}. Use 'passgen --help' for usage.",
        file=sys.stderr,
    )
    return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
