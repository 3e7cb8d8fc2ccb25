"""Error codes shared by the generators, the exporter and the CLIs.

Every request-level failure is a ``PassGenError`` carrying one of the codes
below, so callers can branch on ``exc.code`` instead of parsing messages.
Codes in ``FATAL_CODES`` describe a broken environment (no CSPRNG, no
wordlist, unwritable export target) rather than a bad request.
"""

from __future__ import annotations

from dataclasses import dataclass

INVALID_REQUEST = "invalid_request"
INVALID_CONFIG = "invalid_config"
UNKNOWN_FIELD = "unknown_field"
INVALID_TYPE = "invalid_type"
INVALID_CHOICE = "invalid_choice"
UNKNOWN_KIND = "unknown_kind"
INVALID_COUNT = "invalid_count"
INVALID_PIN = "invalid_pin"
INVALID_EXPORT = "invalid_export"
INVALID_WORDLIST = "invalid_wordlist"
WORDLIST_UNAVAILABLE = "wordlist_unavailable"
EXPORT_WRITE_FAILED = "export_write_failed"
CSPRNG_UNAVAILABLE = "csprng_unavailable"

FATAL_CODES = frozenset({CSPRNG_UNAVAILABLE, WORDLIST_UNAVAILABLE, EXPORT_WRITE_FAILED})


@dataclass(frozen=True)
class ErrorDetail:
    code: str
    message: str

    @property
    def fatal(self) -> bool:
        return self.code in FATAL_CODES


class PassGenError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        self.code = _normalize_code(code)
        self.message = message.strip() or "unspecified error"
        super().__init__(self.message)

    def as_detail(self) -> ErrorDetail:
        return ErrorDetail(code=self.code, message=self.message)


def _normalize_code(code: str) -> str:
    # Codes are snake_case identifiers; anything else collapses to the generic code.
    normalized = "".join(
        ch if ch.isalnum() or ch == "_" else "_"
        for ch in code.strip().lower()
        if ch.isalnum() or ch in "_- ."
    ).strip("_")
    return normalized or INVALID_REQUEST


def error_detail_from_exception(exc: BaseException, *, default_code: str = INVALID_REQUEST) -> ErrorDetail:
    if isinstance(exc, PassGenError):
        return exc.as_detail()
    return ErrorDetail(code=_normalize_code(default_code), message=str(exc).strip() or "unspecified error")


def make_error(code: str, message: str) -> PassGenError:
    return PassGenError(code=code, message=message)


def format_error_text(exc: BaseException, *, default_code: str = INVALID_REQUEST) -> str:
    detail = error_detail_from_exception(exc, default_code=default_code)
    return f"{detail.code}: {detail.message}"


__all__ = [
    "CSPRNG_UNAVAILABLE",
    "EXPORT_WRITE_FAILED",
    "FATAL_CODES",
    "INVALID_CHOICE",
    "INVALID_CONFIG",
    "INVALID_COUNT",
    "INVALID_EXPORT",
    "INVALID_PIN",
    "INVALID_REQUEST",
    "INVALID_TYPE",
    "INVALID_WORDLIST",
    "UNKNOWN_FIELD",
    "UNKNOWN_KIND",
    "WORDLIST_UNAVAILABLE",
    "ErrorDetail",
    "PassGenError",
    "error_detail_from_exception",
    "format_error_text",
    "make_error",
]
