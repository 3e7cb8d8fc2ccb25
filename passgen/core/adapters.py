from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping

from passgen.core.error_dialect import (
    INVALID_CHOICE,
    INVALID_CONFIG,
    INVALID_TYPE,
    UNKNOWN_FIELD,
    make_error,
)
from passgen.core.models import (
    PASSPHRASE_CAPITALIZE_CHOICES,
    PASSPHRASE_MAX_WORDS,
    PASSPHRASE_MIN_WORDS,
    PASSPHRASE_SEPARATORS,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MAX_MIN_COUNT,
    PASSWORD_MIN_LENGTH,
    PIN_MAX_LENGTH,
    PIN_MIN_LENGTH,
    USERNAME_MAX_CUSTOM_WORD_LENGTH,
    USERNAME_MAX_DIGITS,
    USERNAME_MAX_RANDOM_LENGTH,
    USERNAME_MAX_SYLLABLES,
    USERNAME_MIN_DIGITS,
    USERNAME_MIN_RANDOM_LENGTH,
    USERNAME_MIN_SYLLABLES,
    PassphraseRequest,
    PasswordRequest,
    PinRequest,
    UsernameRequest,
)

logger = logging.getLogger(__name__)

MAX_CUSTOM_SYMBOLS_LENGTH = 64


def _allowed_field_names(model_type: type[Any]) -> set[str]:
    return {field.name for field in fields(model_type)}


_PASSWORD_FIELDS = _allowed_field_names(PasswordRequest)
_PIN_FIELDS = _allowed_field_names(PinRequest)
_PASSPHRASE_FIELDS = _allowed_field_names(PassphraseRequest)
_USERNAME_FIELDS = _allowed_field_names(UsernameRequest)


def _ensure_object(payload: Mapping[str, Any] | Any, label: str) -> Mapping[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise make_error(INVALID_CONFIG, f"{label} settings must be a mapping")
    return payload


def _reject_unknown_fields(payload: Mapping[str, Any], allowed: set[str], label: str) -> None:
    unknown = sorted(set(payload.keys()) - allowed)
    if unknown:
        raise make_error(UNKNOWN_FIELD, f"{label} settings have unknown fields: {', '.join(unknown)}")


def _parse_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise make_error(INVALID_TYPE, f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise make_error(INVALID_TYPE, f"{field} must be an integer")
        try:
            return int(raw)
        except ValueError as exc:
            raise make_error(INVALID_TYPE, f"{field} must be an integer") from exc
    raise make_error(INVALID_TYPE, f"{field} must be an integer")


def _parse_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise make_error(INVALID_TYPE, f"{field} must be a boolean")


def _parse_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise make_error(INVALID_TYPE, f"{field} must be a string")
    return value


def _parse_choice(value: Any, field: str, choices: tuple[str, ...]) -> str:
    text = _parse_str(value, field)
    if text not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise make_error(INVALID_CHOICE, f"{field} must be one of: {allowed}")
    return text


def clamp(value: int, low: int, high: int, field: str) -> int:
    """Pull ``value`` into ``[low, high]``; out-of-range values are not an error."""
    bounded = min(max(value, low), high)
    if bounded != value:
        logger.info("%s=%d outside [%d, %d]; using %d", field, value, low, high, bounded)
    return bounded


def _bounded_int(data: Mapping[str, Any], field: str, default: int, low: int, high: int) -> int:
    return clamp(_parse_int(data.get(field, default), field), low, high, field)


def build_password_request(payload: Mapping[str, Any] | Any = None) -> PasswordRequest:
    data = _ensure_object(payload, "password")
    _reject_unknown_fields(data, _PASSWORD_FIELDS, "password")
    defaults = PasswordRequest()

    custom_symbols = data.get("custom_symbols", defaults.custom_symbols)
    if custom_symbols is not None:
        custom_symbols = _parse_str(custom_symbols, "custom_symbols")
        if len(custom_symbols) > MAX_CUSTOM_SYMBOLS_LENGTH:
            raise make_error(
                INVALID_CONFIG,
                f"custom_symbols must be <= {MAX_CUSTOM_SYMBOLS_LENGTH} characters",
            )
        if not custom_symbols:
            custom_symbols = None

    return PasswordRequest(
        length=_bounded_int(data, "length", defaults.length, PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH),
        uppercase=_parse_bool(data.get("uppercase", defaults.uppercase), "uppercase"),
        lowercase=_parse_bool(data.get("lowercase", defaults.lowercase), "lowercase"),
        numbers=_parse_bool(data.get("numbers", defaults.numbers), "numbers"),
        symbols=_parse_bool(data.get("symbols", defaults.symbols), "symbols"),
        exclude_ambiguous=_parse_bool(data.get("exclude_ambiguous", defaults.exclude_ambiguous), "exclude_ambiguous"),
        exclude_brackets=_parse_bool(data.get("exclude_brackets", defaults.exclude_brackets), "exclude_brackets"),
        custom_symbols=custom_symbols,
        min_numbers=_bounded_int(data, "min_numbers", defaults.min_numbers, 0, PASSWORD_MAX_MIN_COUNT),
        min_symbols=_bounded_int(data, "min_symbols", defaults.min_symbols, 0, PASSWORD_MAX_MIN_COUNT),
        begin_with_letter=_parse_bool(data.get("begin_with_letter", defaults.begin_with_letter), "begin_with_letter"),
        no_repeating=_parse_bool(data.get("no_repeating", defaults.no_repeating), "no_repeating"),
    )


def build_pin_request(payload: Mapping[str, Any] | Any = None) -> PinRequest:
    data = _ensure_object(payload, "pin")
    _reject_unknown_fields(data, _PIN_FIELDS, "pin")
    defaults = PinRequest()
    return PinRequest(
        length=_bounded_int(data, "length", defaults.length, PIN_MIN_LENGTH, PIN_MAX_LENGTH),
        no_repeated_digits=_parse_bool(
            data.get("no_repeated_digits", defaults.no_repeated_digits),
            "no_repeated_digits",
        ),
        no_sequential_digits=_parse_bool(
            data.get("no_sequential_digits", defaults.no_sequential_digits),
            "no_sequential_digits",
        ),
    )


def build_passphrase_request(payload: Mapping[str, Any] | Any = None) -> PassphraseRequest:
    data = _ensure_object(payload, "passphrase")
    _reject_unknown_fields(data, _PASSPHRASE_FIELDS, "passphrase")
    defaults = PassphraseRequest()
    return PassphraseRequest(
        word_count=_bounded_int(data, "word_count", defaults.word_count, PASSPHRASE_MIN_WORDS, PASSPHRASE_MAX_WORDS),
        separator=_parse_choice(data.get("separator", defaults.separator), "separator", PASSPHRASE_SEPARATORS),
        capitalize=_parse_choice(
            data.get("capitalize", defaults.capitalize),
            "capitalize",
            PASSPHRASE_CAPITALIZE_CHOICES,
        ),
        include_number=_parse_bool(data.get("include_number", defaults.include_number), "include_number"),
    )


def build_username_request(payload: Mapping[str, Any] | Any = None) -> UsernameRequest:
    data = _ensure_object(payload, "username")
    _reject_unknown_fields(data, _USERNAME_FIELDS, "username")
    defaults = UsernameRequest()

    custom_word = _parse_str(data.get("custom_word", defaults.custom_word), "custom_word")
    if len(custom_word) > USERNAME_MAX_CUSTOM_WORD_LENGTH:
        raise make_error(
            INVALID_CONFIG,
            f"custom_word must be <= {USERNAME_MAX_CUSTOM_WORD_LENGTH} characters",
        )

    return UsernameRequest(
        style=_parse_str(data.get("style", defaults.style), "style").strip().lower(),
        include_number=_parse_bool(data.get("include_number", defaults.include_number), "include_number"),
        length=_bounded_int(
            data, "length", defaults.length, USERNAME_MIN_RANDOM_LENGTH, USERNAME_MAX_RANDOM_LENGTH
        ),
        syllables=_bounded_int(
            data, "syllables", defaults.syllables, USERNAME_MIN_SYLLABLES, USERNAME_MAX_SYLLABLES
        ),
        digits=_bounded_int(data, "digits", defaults.digits, USERNAME_MIN_DIGITS, USERNAME_MAX_DIGITS),
        include_prefix=_parse_bool(data.get("include_prefix", defaults.include_prefix), "include_prefix"),
        include_suffix=_parse_bool(data.get("include_suffix", defaults.include_suffix), "include_suffix"),
        custom_word=custom_word,
    )


__all__ = [
    "MAX_CUSTOM_SYMBOLS_LENGTH",
    "build_passphrase_request",
    "build_password_request",
    "build_pin_request",
    "build_username_request",
    "clamp",
]
