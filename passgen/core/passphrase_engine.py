from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import List, Optional, Tuple

from passgen.core.error_dialect import INVALID_WORDLIST, WORDLIST_UNAVAILABLE, PassGenError
from passgen.core.models import (
    FALLBACK_WORDLIST_MISSING,
    PASSPHRASE_NUMBER_SPACE,
    GeneratedCredential,
    GenerationKind,
    PassphraseRequest,
)
from passgen.core.secure_random import DEFAULT_RANDOM, RandomSource

logger = logging.getLogger(__name__)

WORDLIST_ERROR_SENTINEL = "error-loading-wordlist"
DIGIT_SEPARATOR = "digit"
MAX_WORDLIST_FILE_BYTES = 1024 * 1024
MAX_WORD_LENGTH = 32
_PACKAGED_WORDLIST = "data/wordlist.txt"


class WordlistUnavailableError(PassGenError):
    """A wordlist that cannot be read or fails validation.

    A bad user-supplied list is a request error (``invalid_wordlist``); a
    missing embedded list is fatal (``wordlist_unavailable``).
    """

    def __init__(self, message: str, code: str = INVALID_WORDLIST) -> None:
        super().__init__(code, message)


@dataclass(frozen=True)
class Wordlist:
    words: Tuple[str, ...]
    source: str = "embedded"

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: object) -> bool:
        return word in self.words


def parse_wordlist(text: str, source: str) -> Wordlist:
    words: List[str] = []
    seen: set[str] = set()
    for raw_line in text.splitlines():
        w = raw_line.strip().lstrip("\ufeff")
        if not w:
            continue
        if any(ch.isspace() for ch in w):
            raise WordlistUnavailableError(f"wordlist entry contains whitespace: {w!r}")
        if len(w) > MAX_WORD_LENGTH:
            raise WordlistUnavailableError(f"wordlist entry too long: {w!r}")
        if not (w.isascii() and w.isalpha() and w.islower()):
            raise WordlistUnavailableError(f"wordlist entry must be lowercase ASCII letters: {w!r}")
        if w in seen:
            raise WordlistUnavailableError(f"wordlist contains duplicate word: {w!r}")
        seen.add(w)
        words.append(w)
    if not words:
        raise WordlistUnavailableError(f"wordlist is empty: {source}")
    return Wordlist(words=tuple(words), source=source)


def load_wordlist(path: str | Path) -> Wordlist:
    p = Path(path).expanduser()
    try:
        st = p.stat()
    except FileNotFoundError as exc:
        raise WordlistUnavailableError(f"wordlist file not found: {p}") from exc
    except OSError as exc:
        raise WordlistUnavailableError(f"Unable to stat wordlist file '{p}': {exc}") from exc
    if not p.is_file():
        raise WordlistUnavailableError(f"wordlist path is not a file: {p}")
    if st.st_size > MAX_WORDLIST_FILE_BYTES:
        raise WordlistUnavailableError(f"wordlist file too large: {p} ({st.st_size} bytes)")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise WordlistUnavailableError(f"Unable to read wordlist file '{p}': {exc}") from exc
    return parse_wordlist(text, str(p))


@lru_cache(maxsize=1)
def load_embedded_wordlist() -> Wordlist:
    try:
        text = resources.files("passgen").joinpath(_PACKAGED_WORDLIST).read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise WordlistUnavailableError(
            f"embedded wordlist could not be read: {exc}", code=WORDLIST_UNAVAILABLE
        ) from exc
    return parse_wordlist(text, "embedded")


def default_wordlist() -> Optional[Wordlist]:
    try:
        return load_embedded_wordlist()
    except WordlistUnavailableError as exc:
        logger.error("embedded wordlist unavailable: %s", exc)
        return None


def apply_capitalization(word: str, mode: str) -> str:
    if mode == "first":
        return word[:1].upper() + word[1:]
    if mode == "all":
        return word.upper()
    return word


class PassphraseGenerator:
    def __init__(self, wordlist: Optional[Wordlist], rng: RandomSource = DEFAULT_RANDOM) -> None:
        self.wordlist = wordlist
        self.rng = rng

    def _join(self, tokens: List[str], separator: str) -> str:
        if separator != DIGIT_SEPARATOR:
            return separator.join(tokens)
        out = tokens[:1]
        for token in tokens[1:]:
            out.append(str(self.rng.uniform_int(10)))
            out.append(token)
        return "".join(out)

    def generate(self, request: PassphraseRequest) -> GeneratedCredential:
        wordlist = self.wordlist
        if wordlist is None or len(wordlist) == 0:
            logger.error("passphrase requested but no wordlist is loaded")
            return GeneratedCredential(
                value=WORDLIST_ERROR_SENTINEL,
                kind=GenerationKind.PASSPHRASE,
                word_count=request.word_count,
                includes_number=request.include_number,
                fallbacks=(FALLBACK_WORDLIST_MISSING,),
                ok=False,
            )
        words = wordlist.words

        tokens = [
            apply_capitalization(words[self.rng.uniform_int(len(words))], request.capitalize)
            for _ in range(max(0, request.word_count))
        ]

        if request.include_number:
            # Insertion index is uniform over [0, word_count]: before, between, or after the words.
            position = self.rng.uniform_int(len(tokens) + 1)
            number = self.rng.uniform_int(PASSPHRASE_NUMBER_SPACE)
            tokens.insert(position, str(number))

        return GeneratedCredential(
            value=self._join(tokens, request.separator),
            kind=GenerationKind.PASSPHRASE,
            word_count=request.word_count,
            includes_number=request.include_number,
            wordlist_size=len(wordlist),
        )


def generate_passphrase(
    request: PassphraseRequest,
    wordlist: Optional[Wordlist] = None,
    rng: RandomSource = DEFAULT_RANDOM,
) -> GeneratedCredential:
    if wordlist is None:
        wordlist = default_wordlist()
    return PassphraseGenerator(wordlist, rng).generate(request)


__all__ = [
    "DIGIT_SEPARATOR",
    "PassphraseGenerator",
    "WORDLIST_ERROR_SENTINEL",
    "Wordlist",
    "WordlistUnavailableError",
    "apply_capitalization",
    "default_wordlist",
    "generate_passphrase",
    "load_embedded_wordlist",
    "load_wordlist",
    "parse_wordlist",
]
