"""Constrained password and PIN generation.

Both generators draw exclusively through a ``RandomSource`` and terminate in a
bounded number of secure draws. Over-constrained requests are accommodated by
a documented clamp or a single relaxation tier, recorded in the returned
credential's ``fallbacks`` and logged; they never raise.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from passgen.core.character_policy import (
    NUMBERS,
    build_character_policy,
    build_required_characters,
    dedupe_chars,
)
from passgen.core.models import (
    FALLBACK_LENGTH_CLAMPED,
    FALLBACK_SEQUENTIAL_RELAXED,
    GeneratedCredential,
    GenerationKind,
    PasswordRequest,
    PinRequest,
)
from passgen.core.secure_random import DEFAULT_RANDOM, RandomSource

logger = logging.getLogger(__name__)

PIN_MAX_ATTEMPTS = 1000
PIN_DIGITS = NUMBERS


# ---------------- Password ----------------

def generate_password(request: PasswordRequest, rng: RandomSource = DEFAULT_RANDOM) -> GeneratedCredential:
    policy = build_character_policy(request)
    opts = policy.request
    fallbacks = list(policy.fallbacks)

    target_length = max(0, opts.length)
    pool = dedupe_chars(policy.pool) if opts.no_repeating else policy.pool
    if opts.no_repeating and target_length > len(pool):
        logger.warning(
            "no-repeat password length %d exceeds pool size %d; clamping length",
            target_length,
            len(pool),
        )
        target_length = len(pool)
        fallbacks.append(FALLBACK_LENGTH_CLAMPED)

    required = build_required_characters(policy, rng)
    password: List[str] = []
    used: set[str] = set()

    seeded_first = False
    if opts.begin_with_letter and target_length > 0 and policy.letters:
        first = policy.letters[rng.uniform_int(len(policy.letters))]
        password.append(first)
        seeded_first = True
        if opts.no_repeating:
            used.add(first)

    for ch in required:
        if len(password) >= target_length:
            break
        if opts.no_repeating and ch in used:
            continue
        password.append(ch)
        if opts.no_repeating:
            used.add(ch)

    if opts.no_repeating:
        available = [ch for ch in pool if ch not in used]
    else:
        available = list(pool)

    while len(password) < target_length and available:
        index = rng.uniform_int(len(available))
        password.append(available[index])
        if opts.no_repeating:
            del available[index]

    # Required characters were placed first; shuffle so position is independent of insertion order.
    if seeded_first:
        value = password[0] + "".join(rng.shuffle(password[1:]))
    else:
        value = "".join(rng.shuffle(password))

    return GeneratedCredential(
        value=value,
        kind=GenerationKind.PASSWORD,
        classes=policy.classes,
        fallbacks=tuple(fallbacks),
    )


# ---------------- PIN ----------------

def forms_sequential_run(prev2: int, prev1: int, candidate: int) -> bool:
    step1 = prev1 - prev2
    step2 = candidate - prev1
    return (step1 == 1 and step2 == 1) or (step1 == -1 and step2 == -1)


def _draw_pin_digits(
    length: int,
    no_repeated_digits: bool,
    no_sequential_digits: bool,
    rng: RandomSource,
    max_attempts: int,
) -> Optional[List[int]]:
    pin: List[int] = []
    attempts = 0
    while len(pin) < length:
        if attempts >= max_attempts:
            return None
        digit = rng.uniform_int(len(PIN_DIGITS))

        if no_repeated_digits and digit in pin:
            attempts += 1
            continue
        if no_sequential_digits and len(pin) >= 2 and forms_sequential_run(pin[-2], pin[-1], digit):
            attempts += 1
            continue

        pin.append(digit)
        attempts = 0
    return pin


def generate_pin(
    request: PinRequest,
    rng: RandomSource = DEFAULT_RANDOM,
    *,
    max_attempts: int = PIN_MAX_ATTEMPTS,
) -> GeneratedCredential:
    length = max(0, request.length)
    fallbacks: List[str] = []

    if request.no_repeated_digits and length > len(PIN_DIGITS):
        logger.warning(
            "PIN length %d cannot hold distinct digits; clamping length to %d",
            length,
            len(PIN_DIGITS),
        )
        length = len(PIN_DIGITS)
        fallbacks.append(FALLBACK_LENGTH_CLAMPED)

    digits = _draw_pin_digits(
        length,
        request.no_repeated_digits,
        request.no_sequential_digits,
        rng,
        max_attempts,
    )
    if digits is None:
        # Single relaxation tier: drop the sequential rule and start over.
        logger.warning(
            "PIN constraints unsatisfied within %d attempts (length=%d); relaxing no-sequential rule",
            max_attempts,
            length,
        )
        fallbacks.append(FALLBACK_SEQUENTIAL_RELAXED)
        digits = _draw_pin_digits(length, request.no_repeated_digits, False, rng, max_attempts)
        if digits is None:
            raise RuntimeError("PIN generation exhausted its attempt budget after relaxing constraints")

    return GeneratedCredential(
        value="".join(PIN_DIGITS[d] for d in digits),
        kind=GenerationKind.PIN,
        classes=("numbers",),
        fallbacks=tuple(fallbacks),
    )


__all__ = [
    "PIN_DIGITS",
    "PIN_MAX_ATTEMPTS",
    "forms_sequential_run",
    "generate_password",
    "generate_pin",
]
