from __future__ import annotations

import argparse
import sys
from typing import Callable, Sequence

from passgen.core.error_dialect import (
    CSPRNG_UNAVAILABLE,
    INVALID_REQUEST,
    error_detail_from_exception,
    format_error_text,
)
from passgen.core.log import DEFAULT_LOG_LEVEL, LOG_LEVEL_CHOICES, configure_logging
from passgen.core.models import BulkResult, GeneratedCredential, StrengthAnalysis
from passgen.core.secure_random import CsprngUnavailableError

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2


def add_common_arguments(parser: argparse.ArgumentParser, *, with_count: bool = True) -> None:
    if with_count:
        parser.add_argument("-n", "--count", type=int, default=1, help="number of outputs to print (1-100)")
    parser.add_argument(
        "--show-meta",
        "--meta",
        action="store_true",
        help="Append entropy, strength level and crack-time estimate per output.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default=DEFAULT_LOG_LEVEL,
        help=f"diagnostic log level on stderr (default: {DEFAULT_LOG_LEVEL})",
    )


def render_credentials(
    credentials: Sequence[GeneratedCredential],
    analyses: Sequence[StrengthAnalysis] = (),
) -> tuple[str, ...]:
    if not credentials:
        return ()
    result = BulkResult(outputs=tuple(c.value for c in credentials), kind=credentials[0].kind)
    return result.as_lines(tuple(analyses))


def _report_failure(exc: BaseException, default_code: str) -> int:
    print(format_error_text(exc, default_code=default_code), file=sys.stderr)
    detail = error_detail_from_exception(exc, default_code=default_code)
    return EXIT_FATAL if detail.fatal else EXIT_USAGE


def run_guarded(action: Callable[[argparse.Namespace], int], args: argparse.Namespace) -> int:
    configure_logging(args.log_level)
    try:
        return action(args)
    except CsprngUnavailableError as exc:
        return _report_failure(exc, CSPRNG_UNAVAILABLE)
    except ValueError as exc:
        return _report_failure(exc, INVALID_REQUEST)


__all__ = [
    "EXIT_FATAL",
    "EXIT_OK",
    "EXIT_USAGE",
    "add_common_arguments",
    "render_credentials",
    "run_guarded",
]
