from __future__ import annotations

import re
from typing import List


def normalize_token(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", s.strip().lower())


def dedupe_keep_order(words: List[str]) -> List[str]:
    seen = set()
    out = []
    for w in words:
        n = normalize_token(w)
        if not n or n in seen:
            continue
        seen.add(n)
        out.append(w.strip())
    return out


ADJECTIVES = dedupe_keep_order(
    """
swift bold calm dark epic fast glad keen loud mild neat pure rare safe true warm wise cool free kind
brave quick sharp smart royal noble magic cyber cosmic ninja super ultra mega hyper alpha omega prime
elite lucky happy silent shadow golden silver crystal phantom mystic ancient digital electric quantum
stellar atomic sonic
""".split()
)

NOUNS = dedupe_keep_order(
    """
wolf hawk lion bear fox owl tiger eagle dragon phoenix knight wizard ninja hunter rider pilot ranger
warrior guardian storm flame frost spark blade shield arrow star moon sun coder hacker gamer player
master chief captain legend hero shadow phantom spirit ghost raven cobra viper panther falcon
""".split()
)

CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"
RANDOM_USERNAME_CHARSET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

FIRST_NAMES = "alex sam jordan taylor morgan casey riley drew jamie quinn".split()
LAST_NAMES = "smith jones wilson taylor brown davis miller anderson jackson white".split()

GAMING_PREFIX = "xX"
GAMING_SUFFIX = "Xx"


__all__ = [
    "ADJECTIVES",
    "CONSONANTS",
    "FIRST_NAMES",
    "GAMING_PREFIX",
    "GAMING_SUFFIX",
    "LAST_NAMES",
    "NOUNS",
    "RANDOM_USERNAME_CHARSET",
    "VOWELS",
    "dedupe_keep_order",
    "normalize_token",
]
