"""Entropy-based strength estimation.

The estimator reasons about the credential as observed: it looks at which
character classes actually appear and charges each one its nominal size,
regardless of the filtered pool the generator used.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Optional

from passgen.core.models import (
    PASSPHRASE_NUMBER_SPACE,
    GeneratedCredential,
    GenerationKind,
    StrengthAnalysis,
    StrengthLevel,
)

LOWERCASE_SPACE = 26
UPPERCASE_SPACE = 26
DIGIT_SPACE = 10
SYMBOL_SPACE = 32

DEFAULT_GUESSES_PER_SECOND = 10e9

SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_MONTH = 30.0
DAYS_PER_YEAR = 365.25
_LOG10_SECONDS_PER_YEAR = math.log10(SECONDS_PER_DAY * DAYS_PER_YEAR)


@dataclass(frozen=True)
class StrengthThresholds:
    """Minimum entropy (bits) for each level above WEAK."""

    fair: float = 30.0
    good: float = 50.0
    strong: float = 70.0
    very_strong: float = 90.0

    def __post_init__(self) -> None:
        cuts = (self.fair, self.good, self.strong, self.very_strong)
        if any(b < a for a, b in zip(cuts, cuts[1:])):
            raise ValueError(f"strength thresholds must be non-decreasing, got {cuts}")


DEFAULT_THRESHOLDS = StrengthThresholds()
# Earlier, looser cut points; selectable for comparison.
LEGACY_THRESHOLDS = StrengthThresholds(fair=28.0, good=36.0, strong=60.0, very_strong=80.0)


def _round_tenth(value: float) -> float:
    return math.floor(value * 10.0 + 0.5) / 10.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_pool_size(value: str) -> int:
    has_lower = has_upper = has_digit = has_symbol = False
    for ch in value:
        if ch in string.ascii_lowercase:
            has_lower = True
        elif ch in string.ascii_uppercase:
            has_upper = True
        elif ch in string.digits:
            has_digit = True
        else:
            has_symbol = True

    space = 0
    if has_lower:
        space += LOWERCASE_SPACE
    if has_upper:
        space += UPPERCASE_SPACE
    if has_digit:
        space += DIGIT_SPACE
    if has_symbol:
        space += SYMBOL_SPACE
    return max(space, 1)


def entropy_for(length: int, pool_size: int) -> float:
    if length <= 0 or pool_size <= 1:
        return 0.0
    return _round_tenth(length * math.log2(pool_size))


def calculate_entropy(value: str) -> float:
    if not value:
        return 0.0
    return entropy_for(len(value), calculate_pool_size(value))


def calculate_passphrase_entropy(word_count: int, wordlist_size: int, includes_number: bool = False) -> float:
    if word_count <= 0 or wordlist_size <= 0:
        return 0.0
    bits = word_count * math.log2(wordlist_size)
    if includes_number:
        # Value space of the number plus its insertion position.
        bits += math.log2(PASSPHRASE_NUMBER_SPACE) + math.log2(word_count + 1)
    return _round_tenth(bits)


def calculate_pin_entropy(length: int) -> float:
    return entropy_for(length, DIGIT_SPACE)


def strength_level(entropy_bits: float, thresholds: StrengthThresholds = DEFAULT_THRESHOLDS) -> StrengthLevel:
    if entropy_bits >= thresholds.very_strong:
        return StrengthLevel.VERY_STRONG
    if entropy_bits >= thresholds.strong:
        return StrengthLevel.STRONG
    if entropy_bits >= thresholds.good:
        return StrengthLevel.GOOD
    if entropy_bits >= thresholds.fair:
        return StrengthLevel.FAIR
    return StrengthLevel.WEAK


# ---------------- Crack time ----------------

def format_compact(num: float) -> str:
    if num < 10:
        return f"{num:.1f}"
    if num < 1000:
        return f"{_round_half_up(num):,}"
    if num < 1e6:
        return f"{num / 1e3:.1f}K"
    return f"{_round_half_up(num):,}"


def _format_years(years: float) -> str:
    if years < 1000:
        return f"{_round_half_up(years)} years"
    if years < 1e6:
        return f"{format_compact(years)} years"
    if years < 1e9:
        return f"{format_compact(years / 1e6)} million years"
    if years < 1e12:
        return f"{format_compact(years / 1e9)} billion years"
    if years < 1e15:
        return f"{format_compact(years / 1e12)} trillion years"
    return f"10^{math.floor(math.log10(years))} years"


def format_crack_time(seconds: float) -> str:
    if seconds < 0.001:
        return "Instant"
    if seconds < 1:
        return "Less than a second"
    if seconds < 60:
        return f"{_round_half_up(seconds)} seconds"

    minutes = seconds / SECONDS_PER_MINUTE
    if minutes < 60:
        return f"{_round_half_up(minutes)} minutes"

    hours = seconds / SECONDS_PER_HOUR
    if hours < 24:
        return f"{_round_half_up(hours)} hours"

    days = seconds / SECONDS_PER_DAY
    if days < 30:
        return f"{_round_half_up(days)} days"

    months = days / DAYS_PER_MONTH
    if months < 12:
        return f"{_round_half_up(months)} months"

    return _format_years(days / DAYS_PER_YEAR)


def crack_time_seconds_log10(entropy_bits: float, guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND) -> float:
    # Half of the 2**entropy space is searched on average.
    return (entropy_bits - 1.0) * math.log10(2.0) - math.log10(guesses_per_second)


def estimate_crack_time(entropy_bits: float, guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND) -> str:
    if entropy_bits <= 0:
        return "Instant"
    if guesses_per_second <= 0:
        raise ValueError("guesses_per_second must be > 0")
    log10_seconds = crack_time_seconds_log10(entropy_bits, guesses_per_second)
    if log10_seconds > 300:
        # Beyond float range for the tiered path; only the order of magnitude matters here.
        return f"10^{math.floor(log10_seconds - _LOG10_SECONDS_PER_YEAR)} years"
    return format_crack_time(10.0 ** log10_seconds)


# ---------------- Analysis ----------------

def analysis_for_entropy(
    entropy_bits: float,
    *,
    length: int = 0,
    word_count: Optional[int] = None,
    thresholds: StrengthThresholds = DEFAULT_THRESHOLDS,
    guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND,
) -> StrengthAnalysis:
    return StrengthAnalysis(
        entropy_bits=entropy_bits,
        level=strength_level(entropy_bits, thresholds),
        crack_time_label=estimate_crack_time(entropy_bits, guesses_per_second),
        length=length,
        word_count=word_count,
    )


def analyze(
    value: str,
    *,
    thresholds: StrengthThresholds = DEFAULT_THRESHOLDS,
    guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND,
) -> StrengthAnalysis:
    return analysis_for_entropy(
        calculate_entropy(value),
        length=len(value) if value else 0,
        thresholds=thresholds,
        guesses_per_second=guesses_per_second,
    )


def analyze_passphrase(
    word_count: int,
    wordlist_size: int,
    includes_number: bool = False,
    *,
    thresholds: StrengthThresholds = DEFAULT_THRESHOLDS,
    guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND,
) -> StrengthAnalysis:
    return analysis_for_entropy(
        calculate_passphrase_entropy(word_count, wordlist_size, includes_number),
        word_count=word_count,
        thresholds=thresholds,
        guesses_per_second=guesses_per_second,
    )


def analyze_pin(
    pin: str,
    *,
    thresholds: StrengthThresholds = DEFAULT_THRESHOLDS,
    guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND,
) -> StrengthAnalysis:
    return analysis_for_entropy(
        calculate_pin_entropy(len(pin)),
        length=len(pin),
        thresholds=thresholds,
        guesses_per_second=guesses_per_second,
    )


def analyze_credential(
    credential: GeneratedCredential,
    *,
    thresholds: StrengthThresholds = DEFAULT_THRESHOLDS,
    guesses_per_second: float = DEFAULT_GUESSES_PER_SECOND,
) -> StrengthAnalysis:
    """Pick the entropy model matching how the credential was produced."""
    tuning = {"thresholds": thresholds, "guesses_per_second": guesses_per_second}
    if not credential.ok:
        return analysis_for_entropy(0.0, **tuning)
    if credential.kind is GenerationKind.PASSPHRASE and credential.word_count is not None:
        return analyze_passphrase(
            credential.word_count,
            credential.wordlist_size,
            credential.includes_number,
            **tuning,
        )
    if credential.kind is GenerationKind.PIN:
        return analyze_pin(credential.value, **tuning)
    return analyze(credential.value, **tuning)


__all__ = [
    "DEFAULT_GUESSES_PER_SECOND",
    "DEFAULT_THRESHOLDS",
    "LEGACY_THRESHOLDS",
    "StrengthThresholds",
    "analysis_for_entropy",
    "analyze",
    "analyze_credential",
    "analyze_passphrase",
    "analyze_pin",
    "calculate_entropy",
    "calculate_passphrase_entropy",
    "calculate_pin_entropy",
    "calculate_pool_size",
    "entropy_for",
    "estimate_crack_time",
    "format_compact",
    "format_crack_time",
    "strength_level",
]
