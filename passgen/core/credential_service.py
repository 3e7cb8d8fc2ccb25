from __future__ import annotations

import logging
from typing import Optional, Union

from passgen.core import strength
from passgen.core.error_dialect import INVALID_REQUEST, UNKNOWN_KIND, make_error
from passgen.core.models import (
    GeneratedCredential,
    GenerationKind,
    PassphraseRequest,
    PasswordRequest,
    PinRequest,
    StrengthAnalysis,
    UsernameRequest,
)
from passgen.core.passphrase_engine import PassphraseGenerator, Wordlist, default_wordlist
from passgen.core.password_engine import generate_password, generate_pin
from passgen.core.secure_random import DEFAULT_RANDOM, RandomSource
from passgen.core.username_schemes import generate_username

logger = logging.getLogger(__name__)

AnyRequest = Union[PasswordRequest, PinRequest, PassphraseRequest, UsernameRequest]

_REQUEST_TYPES = {
    GenerationKind.PASSWORD: PasswordRequest,
    GenerationKind.PIN: PinRequest,
    GenerationKind.PASSPHRASE: PassphraseRequest,
    GenerationKind.USERNAME: UsernameRequest,
}


def resolve_kind(kind: Union[GenerationKind, str]) -> GenerationKind:
    if isinstance(kind, GenerationKind):
        return kind
    try:
        return GenerationKind(str(kind).strip().lower())
    except ValueError:
        choices = ", ".join(k.value for k in GenerationKind)
        raise make_error(UNKNOWN_KIND, f"unknown generation kind {kind!r} (expected one of: {choices})") from None


def kind_for_request(request: AnyRequest) -> GenerationKind:
    for kind, request_type in _REQUEST_TYPES.items():
        if isinstance(request, request_type):
            return kind
    raise make_error(INVALID_REQUEST, f"unsupported request type: {type(request).__name__}")


def generate(
    kind: Union[GenerationKind, str],
    request: Optional[AnyRequest] = None,
    rng: Optional[RandomSource] = None,
    *,
    wordlist: Optional[Wordlist] = None,
) -> GeneratedCredential:
    resolved = resolve_kind(kind)
    request_type = _REQUEST_TYPES[resolved]
    if request is None:
        request = request_type()
    if not isinstance(request, request_type):
        raise make_error(
            INVALID_REQUEST,
            f"{resolved.value} generation expects {request_type.__name__}, got {type(request).__name__}",
        )
    source = rng if rng is not None else DEFAULT_RANDOM

    if resolved is GenerationKind.PASSWORD:
        return generate_password(request, source)
    if resolved is GenerationKind.PIN:
        return generate_pin(request, source)
    if resolved is GenerationKind.PASSPHRASE:
        if wordlist is None:
            wordlist = default_wordlist()
        return PassphraseGenerator(wordlist, source).generate(request)
    return generate_username(request, source)


def generate_value(
    kind: Union[GenerationKind, str],
    request: Optional[AnyRequest] = None,
    rng: Optional[RandomSource] = None,
    *,
    wordlist: Optional[Wordlist] = None,
) -> str:
    return generate(kind, request, rng, wordlist=wordlist).value


def embedded_wordlist_size() -> int:
    wordlist = default_wordlist()
    return len(wordlist) if wordlist is not None else 0


def analyze(
    subject: Union[GeneratedCredential, str, int],
    *,
    includes_number: bool = False,
    wordlist_size: Optional[int] = None,
    thresholds: strength.StrengthThresholds = strength.DEFAULT_THRESHOLDS,
    guesses_per_second: float = strength.DEFAULT_GUESSES_PER_SECOND,
) -> StrengthAnalysis:
    """Estimate strength for a credential, a raw string, or a passphrase word count."""
    tuning = {"thresholds": thresholds, "guesses_per_second": guesses_per_second}

    if isinstance(subject, GeneratedCredential):
        if not subject.ok:
            logger.info("strength requested for a failed %s generation", subject.kind.value)
        return strength.analyze_credential(subject, **tuning)

    if isinstance(subject, bool):
        raise make_error(INVALID_REQUEST, "analyze expects a credential, a string, or a word count")
    if isinstance(subject, int):
        size = wordlist_size if wordlist_size is not None else embedded_wordlist_size()
        return strength.analyze_passphrase(subject, size, includes_number, **tuning)
    if isinstance(subject, str):
        return strength.analyze(subject, **tuning)
    raise make_error(INVALID_REQUEST, "analyze expects a credential, a string, or a word count")


__all__ = [
    "AnyRequest",
    "analyze",
    "embedded_wordlist_size",
    "generate",
    "generate_value",
    "kind_for_request",
    "resolve_kind",
]
