from __future__ import annotations

import unittest

from passgen.core import username_lexicon as lexicon
from passgen.core.models import GenerationKind, UsernameRequest
from passgen.core.username_schemes import (
    STYLE_CHOICES,
    generate_username,
    resolve_scheme,
)


def _make(**kwargs) -> str:
    return generate_username(UsernameRequest(**kwargs)).value


class UsernameSchemeTests(unittest.TestCase):
    def test_every_style_produces_a_value(self) -> None:
        self.assertEqual(len(STYLE_CHOICES), 7)
        for style in STYLE_CHOICES:
            credential = generate_username(UsernameRequest(style=style))
            self.assertTrue(credential.value)
            self.assertEqual(credential.kind, GenerationKind.USERNAME)

    def test_adjective_noun_shape(self) -> None:
        for _ in range(30):
            self.assertRegex(_make(style="adjective_noun"), r"^[A-Z][a-z]+[A-Z][a-z]+$")
            self.assertRegex(_make(style="adjective_noun", include_number=True), r"^[A-Z][a-z]+[A-Z][a-z]+\d{1,2}$")

    def test_gaming_prefix_and_suffix(self) -> None:
        value = _make(style="gaming", include_prefix=True, include_suffix=True)
        self.assertTrue(value.startswith(lexicon.GAMING_PREFIX))
        self.assertTrue(value.endswith(lexicon.GAMING_SUFFIX))
        plain = _make(style="gaming")
        self.assertRegex(plain, r"^[A-Z][a-z]+[A-Z][a-z]+$")

    def test_pronounceable_alternates_consonants_and_vowels(self) -> None:
        for _ in range(20):
            value = _make(style="pronounceable", syllables=4).lower()
            self.assertEqual(len(value), 8)
            for i, ch in enumerate(value):
                expected = lexicon.CONSONANTS if i % 2 == 0 else lexicon.VOWELS
                self.assertIn(ch, expected)

    def test_word_numbers(self) -> None:
        value = _make(style="word_numbers", digits=6)
        self.assertTrue(value[-6:].isdigit())
        self.assertIn(value[:-6], lexicon.NOUNS)

    def test_random_uses_charset_and_length(self) -> None:
        value = _make(style="random", length=12)
        self.assertEqual(len(value), 12)
        self.assertTrue(set(value).issubset(set(lexicon.RANDOM_USERNAME_CHARSET)))

    def test_professional_patterns(self) -> None:
        firsts = set(lexicon.FIRST_NAMES)
        lasts = set(lexicon.LAST_NAMES)
        for _ in range(30):
            value = _make(style="professional")
            if "." in value:
                first, last = value.split(".")
                self.assertIn(first, firsts)
                self.assertIn(last, lasts)
            else:
                flast = value[0] in {f[0] for f in firsts} and value[1:] in lasts
                firstl = value[:-1] in firsts and value[-1] in {l[0] for l in lasts}
                self.assertTrue(flast or firstl, value)

    def test_custom_word_is_normalized_and_kept(self) -> None:
        for _ in range(10):
            self.assertIn("Mycat", _make(style="custom_word", custom_word="  My Cat! "))

    def test_empty_custom_word_falls_back_to_noun(self) -> None:
        with self.assertLogs("passgen.core.username_schemes", level="INFO"):
            value = _make(style="custom_word", custom_word="!!!")
        self.assertRegex(value, r"^[A-Z][a-z]+[A-Z][a-z]+$")

    def test_unknown_style_falls_back_to_adjective_noun(self) -> None:
        with self.assertLogs("passgen.core.username_schemes", level="INFO"):
            scheme = resolve_scheme("nonexistent")
        self.assertEqual(scheme.name, "adjective_noun")

    def test_normalize_token_strips_non_alphanumerics(self) -> None:
        self.assertEqual(lexicon.normalize_token(" Hello, World_42 "), "helloworld42")


if __name__ == "__main__":
    unittest.main()
