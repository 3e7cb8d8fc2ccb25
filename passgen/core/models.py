from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


PASSWORD_MIN_LENGTH = 4
PASSWORD_MAX_LENGTH = 128
PASSWORD_DEFAULT_LENGTH = 16
PASSWORD_MAX_MIN_COUNT = 10

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 12
PIN_DEFAULT_LENGTH = 4

PASSPHRASE_MIN_WORDS = 3
PASSPHRASE_MAX_WORDS = 8
PASSPHRASE_DEFAULT_WORDS = 4
PASSPHRASE_SEPARATORS = ("-", "_", " ", "digit")
PASSPHRASE_CAPITALIZE_CHOICES = ("none", "first", "all")
# Inserted numbers are drawn from [0, PASSPHRASE_NUMBER_SPACE).
PASSPHRASE_NUMBER_SPACE = 100

USERNAME_MIN_RANDOM_LENGTH = 4
USERNAME_MAX_RANDOM_LENGTH = 32
USERNAME_MIN_SYLLABLES = 2
USERNAME_MAX_SYLLABLES = 6
USERNAME_MIN_DIGITS = 1
USERNAME_MAX_DIGITS = 8
USERNAME_MAX_CUSTOM_WORD_LENGTH = 24

BULK_MIN_COUNT = 1
BULK_MAX_COUNT = 100

FALLBACK_LOWERCASE = "lowercase_fallback"
FALLBACK_LENGTH_CLAMPED = "length_clamped"
FALLBACK_SEQUENTIAL_RELAXED = "sequential_relaxed"
FALLBACK_WORDLIST_MISSING = "wordlist_missing"


class GenerationKind(str, Enum):
    PASSWORD = "password"
    PIN = "pin"
    PASSPHRASE = "passphrase"
    USERNAME = "username"


class StrengthLevel(IntEnum):
    WEAK = 0
    FAIR = 1
    GOOD = 2
    STRONG = 3
    VERY_STRONG = 4

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]

    @property
    def key(self) -> str:
        return self.name.lower().replace("_", "-")


_LEVEL_LABELS = {
    StrengthLevel.WEAK: "Weak",
    StrengthLevel.FAIR: "Fair",
    StrengthLevel.GOOD: "Good",
    StrengthLevel.STRONG: "Strong",
    StrengthLevel.VERY_STRONG: "Very Strong",
}


@dataclass(frozen=True)
class PasswordRequest:
    length: int = PASSWORD_DEFAULT_LENGTH
    uppercase: bool = True
    lowercase: bool = True
    numbers: bool = True
    symbols: bool = True
    exclude_ambiguous: bool = False
    exclude_brackets: bool = False
    custom_symbols: Optional[str] = None
    min_numbers: int = 0
    min_symbols: int = 0
    begin_with_letter: bool = False
    no_repeating: bool = False


@dataclass(frozen=True)
class PinRequest:
    length: int = PIN_DEFAULT_LENGTH
    no_repeated_digits: bool = False
    no_sequential_digits: bool = False


@dataclass(frozen=True)
class PassphraseRequest:
    word_count: int = PASSPHRASE_DEFAULT_WORDS
    separator: str = "-"
    capitalize: str = "first"
    include_number: bool = False


@dataclass(frozen=True)
class UsernameRequest:
    style: str = "adjective_noun"
    include_number: bool = False
    length: int = 8
    syllables: int = 3
    digits: int = 4
    include_prefix: bool = False
    include_suffix: bool = False
    custom_word: str = ""


@dataclass(frozen=True)
class GeneratedCredential:
    value: str
    kind: GenerationKind
    classes: Tuple[str, ...] = ()
    word_count: Optional[int] = None
    includes_number: bool = False
    wordlist_size: int = 0
    fallbacks: Tuple[str, ...] = ()
    ok: bool = True

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StrengthAnalysis:
    entropy_bits: float
    level: StrengthLevel
    crack_time_label: str
    length: int = 0
    word_count: Optional[int] = None

    def as_meta(self) -> str:
        return f"[entropy={self.entropy_bits:.1f} bits level={self.level.key} crack_time='{self.crack_time_label}']"


@dataclass(frozen=True)
class BulkResult:
    outputs: Tuple[str, ...]
    kind: GenerationKind = GenerationKind.PASSWORD

    def __len__(self) -> int:
        return len(self.outputs)

    def as_lines(self, analyses: Tuple[StrengthAnalysis, ...] = ()) -> Tuple[str, ...]:
        if len(analyses) != len(self.outputs):
            return self.outputs
        return tuple(f"{value}\t{analysis.as_meta()}" for value, analysis in zip(self.outputs, analyses))
