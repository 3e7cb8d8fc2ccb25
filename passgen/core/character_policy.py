from __future__ import annotations

import logging
import string
from dataclasses import dataclass, replace
from typing import Tuple

from passgen.core.models import FALLBACK_LOWERCASE, PasswordRequest
from passgen.core.secure_random import RandomSource

logger = logging.getLogger(__name__)

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
NUMBERS = string.digits
DEFAULT_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
AMBIGUOUS = "0O1lI|"
BRACKETS = "{}[]()\\/'\""


def remove_chars(chars: str, to_remove: str) -> str:
    return "".join(ch for ch in chars if ch not in to_remove)


def dedupe_chars(chars: str) -> str:
    return "".join(dict.fromkeys(chars))


@dataclass(frozen=True)
class CharacterPolicy:
    """Filtered character classes and the pool assembled from them.

    ``request`` is the effective request: when the lowercase fallback kicks
    in it has ``lowercase=True`` so downstream consumers see what was really
    generated.
    """

    request: PasswordRequest
    uppercase: str
    lowercase: str
    numbers: str
    symbols: str
    pool: str
    fallbacks: Tuple[str, ...] = ()

    @property
    def letters(self) -> str:
        return self.uppercase + self.lowercase

    @property
    def classes(self) -> Tuple[str, ...]:
        out = []
        if self.uppercase:
            out.append("uppercase")
        if self.lowercase:
            out.append("lowercase")
        if self.numbers:
            out.append("numbers")
        if self.symbols:
            out.append("symbols")
        return tuple(out)


def _symbol_class(request: PasswordRequest) -> str:
    chars = dedupe_chars(request.custom_symbols) if request.custom_symbols else DEFAULT_SYMBOLS
    if request.exclude_brackets:
        chars = remove_chars(chars, BRACKETS)
    if request.exclude_ambiguous:
        chars = remove_chars(chars, AMBIGUOUS)
    return chars


def _filtered(chars: str, request: PasswordRequest) -> str:
    if request.exclude_ambiguous:
        return remove_chars(chars, AMBIGUOUS)
    return chars


def build_character_policy(request: PasswordRequest) -> CharacterPolicy:
    uppercase = _filtered(UPPERCASE, request) if request.uppercase else ""
    lowercase = _filtered(LOWERCASE, request) if request.lowercase else ""
    numbers = _filtered(NUMBERS, request) if request.numbers else ""
    symbols = _symbol_class(request) if request.symbols else ""

    pool = uppercase + lowercase + numbers + symbols
    if pool:
        return CharacterPolicy(
            request=request,
            uppercase=uppercase,
            lowercase=lowercase,
            numbers=numbers,
            symbols=symbols,
            pool=pool,
        )

    logger.info("no usable character class selected; falling back to lowercase letters")
    effective = replace(request, uppercase=False, lowercase=True, numbers=False, symbols=False)
    lowercase = _filtered(LOWERCASE, effective)
    return CharacterPolicy(
        request=effective,
        uppercase="",
        lowercase=lowercase,
        numbers="",
        symbols="",
        pool=lowercase,
        fallbacks=(FALLBACK_LOWERCASE,),
    )


def build_required_characters(policy: CharacterPolicy, rng: RandomSource) -> Tuple[str, ...]:
    """Draw the characters that satisfy ``min_numbers`` and ``min_symbols``.

    Each draw is independent and with replacement from the filtered class; the
    no-repeat rule is applied later, when the characters are placed.
    """
    required: list[str] = []
    if policy.numbers:
        for _ in range(max(0, policy.request.min_numbers)):
            required.append(policy.numbers[rng.uniform_int(len(policy.numbers))])
    if policy.symbols:
        for _ in range(max(0, policy.request.min_symbols)):
            required.append(policy.symbols[rng.uniform_int(len(policy.symbols))])
    return tuple(required)


__all__ = [
    "AMBIGUOUS",
    "BRACKETS",
    "CharacterPolicy",
    "DEFAULT_SYMBOLS",
    "LOWERCASE",
    "NUMBERS",
    "UPPERCASE",
    "build_character_policy",
    "build_required_characters",
    "dedupe_chars",
    "remove_chars",
]
