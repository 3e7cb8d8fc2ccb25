from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from passgen.core import username_lexicon as lexicon
from passgen.core.models import (
    USERNAME_MAX_CUSTOM_WORD_LENGTH,
    GeneratedCredential,
    GenerationKind,
    UsernameRequest,
)
from passgen.core.secure_random import DEFAULT_RANDOM, RandomSource

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "adjective_noun"
USERNAME_NUMBER_SPACE = 100


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def rand_digits(rng: RandomSource, n: int) -> str:
    return "".join(str(rng.uniform_int(10)) for _ in range(n))


def rand_chars(rng: RandomSource, n: int, charset: str) -> str:
    return "".join(charset[rng.uniform_int(len(charset))] for _ in range(n))


def optional_number(rng: RandomSource, include: bool) -> str:
    return str(rng.uniform_int(USERNAME_NUMBER_SPACE)) if include else ""


def scheme_adjective_noun(request: UsernameRequest, rng: RandomSource) -> str:
    adj = capitalize(rng.choice(lexicon.ADJECTIVES))
    noun = capitalize(rng.choice(lexicon.NOUNS))
    return adj + noun + optional_number(rng, request.include_number)


def scheme_gaming(request: UsernameRequest, rng: RandomSource) -> str:
    adj = rng.choice(lexicon.ADJECTIVES)
    noun = rng.choice(lexicon.NOUNS)
    prefix = lexicon.GAMING_PREFIX if request.include_prefix else ""
    suffix = lexicon.GAMING_SUFFIX if request.include_suffix else ""
    number = optional_number(rng, request.include_number)
    return prefix + capitalize(adj) + capitalize(noun) + number + suffix


def scheme_pronounceable(request: UsernameRequest, rng: RandomSource) -> str:
    syllables = []
    for _ in range(max(1, request.syllables)):
        syllables.append(rng.choice(lexicon.CONSONANTS) + rng.choice(lexicon.VOWELS))
    return capitalize("".join(syllables)) + optional_number(rng, request.include_number)


def scheme_word_numbers(request: UsernameRequest, rng: RandomSource) -> str:
    return rng.choice(lexicon.NOUNS) + rand_digits(rng, max(1, request.digits))


def scheme_random(request: UsernameRequest, rng: RandomSource) -> str:
    return rand_chars(rng, max(1, request.length), lexicon.RANDOM_USERNAME_CHARSET)


def scheme_professional(request: UsernameRequest, rng: RandomSource) -> str:
    first = rng.choice(lexicon.FIRST_NAMES)
    last = rng.choice(lexicon.LAST_NAMES)
    pattern = rng.uniform_int(3)
    if pattern == 0:
        return f"{first}.{last}"
    if pattern == 1:
        return first[0] + last
    return first + last[0]


def scheme_custom_word(request: UsernameRequest, rng: RandomSource) -> str:
    word = lexicon.normalize_token(request.custom_word)[:USERNAME_MAX_CUSTOM_WORD_LENGTH]
    if not word:
        logger.info("custom-word username requested without a usable word; using a random noun")
        word = rng.choice(lexicon.NOUNS)
    if rng.uniform_int(2) == 0:
        parts = [rng.choice(lexicon.ADJECTIVES), word]
    else:
        parts = [word, rng.choice(lexicon.NOUNS)]
    return "".join(capitalize(p) for p in parts) + optional_number(rng, request.include_number)


@dataclass(frozen=True)
class Scheme:
    name: str
    builder: Callable[[UsernameRequest, RandomSource], str]


_SCHEMES: List[Scheme] = [
    Scheme("adjective_noun", scheme_adjective_noun),
    Scheme("gaming", scheme_gaming),
    Scheme("pronounceable", scheme_pronounceable),
    Scheme("word_numbers", scheme_word_numbers),
    Scheme("random", scheme_random),
    Scheme("professional", scheme_professional),
    Scheme("custom_word", scheme_custom_word),
]

SCHEMES: Dict[str, Scheme] = {s.name: s for s in _SCHEMES}
STYLE_CHOICES = tuple(SCHEMES)


def resolve_scheme(style: str) -> Scheme:
    scheme = SCHEMES.get(style)
    if scheme is None:
        logger.info("unknown username style %r; using %s", style, DEFAULT_STYLE)
        return SCHEMES[DEFAULT_STYLE]
    return scheme


def generate_username(request: UsernameRequest, rng: RandomSource = DEFAULT_RANDOM) -> GeneratedCredential:
    scheme = resolve_scheme(request.style)
    return GeneratedCredential(value=scheme.builder(request, rng), kind=GenerationKind.USERNAME)


__all__ = [
    "DEFAULT_STYLE",
    "SCHEMES",
    "STYLE_CHOICES",
    "Scheme",
    "capitalize",
    "generate_username",
    "rand_chars",
    "rand_digits",
    "resolve_scheme",
    "scheme_adjective_noun",
    "scheme_custom_word",
    "scheme_gaming",
    "scheme_professional",
    "scheme_pronounceable",
    "scheme_random",
    "scheme_word_numbers",
]
