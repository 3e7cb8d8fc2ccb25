from __future__ import annotations

import unittest

from passgen.core.character_policy import (
    AMBIGUOUS,
    BRACKETS,
    DEFAULT_SYMBOLS,
    NUMBERS,
    build_character_policy,
    build_required_characters,
)
from passgen.core.models import FALLBACK_LOWERCASE, PasswordRequest

from fake_random import SeededRandom


class CharacterPolicyTests(unittest.TestCase):
    def test_default_pool_concatenates_all_classes(self) -> None:
        policy = build_character_policy(PasswordRequest())
        self.assertEqual(len(DEFAULT_SYMBOLS), 26)
        self.assertEqual(len(policy.pool), 26 + 26 + 10 + 26)
        self.assertEqual(policy.classes, ("uppercase", "lowercase", "numbers", "symbols"))
        self.assertEqual(policy.fallbacks, ())

    def test_exclude_ambiguous_filters_every_class(self) -> None:
        policy = build_character_policy(PasswordRequest(exclude_ambiguous=True))
        self.assertFalse(set(AMBIGUOUS) & set(policy.pool))
        self.assertNotIn("|", policy.symbols)
        self.assertEqual(len(policy.numbers), 8)

    def test_exclude_brackets_filters_symbols(self) -> None:
        policy = build_character_policy(PasswordRequest(exclude_brackets=True))
        self.assertFalse(set(BRACKETS) & set(policy.symbols))
        self.assertIn("!", policy.symbols)

    def test_custom_symbols_replace_defaults_and_collapse_duplicates(self) -> None:
        policy = build_character_policy(PasswordRequest(custom_symbols="!!{{#~", exclude_brackets=True))
        self.assertEqual(policy.symbols, "!#~")

    def test_no_classes_falls_back_to_lowercase(self) -> None:
        request = PasswordRequest(uppercase=False, lowercase=False, numbers=False, symbols=False)
        with self.assertLogs("passgen.core.character_policy", level="INFO"):
            policy = build_character_policy(request)
        self.assertEqual(policy.pool, "abcdefghijklmnopqrstuvwxyz")
        self.assertTrue(policy.request.lowercase)
        self.assertEqual(policy.fallbacks, (FALLBACK_LOWERCASE,))
        self.assertEqual(policy.classes, ("lowercase",))

    def test_fully_filtered_symbols_fall_back_to_lowercase(self) -> None:
        request = PasswordRequest(
            uppercase=False,
            lowercase=False,
            numbers=False,
            custom_symbols="{}[]",
            exclude_brackets=True,
        )
        with self.assertLogs("passgen.core.character_policy", level="INFO"):
            policy = build_character_policy(request)
        self.assertEqual(policy.fallbacks, (FALLBACK_LOWERCASE,))
        self.assertFalse(policy.request.symbols)

    def test_symbol_only_request_filtered_empty_uses_filtered_lowercase(self) -> None:
        request = PasswordRequest(
            uppercase=False,
            lowercase=False,
            numbers=False,
            symbols=True,
            custom_symbols="|",
            exclude_ambiguous=True,
        )
        with self.assertLogs("passgen.core.character_policy", level="INFO"):
            policy = build_character_policy(request)
        self.assertEqual(policy.fallbacks, (FALLBACK_LOWERCASE,))
        self.assertEqual(policy.symbols, "")
        self.assertNotIn("l", policy.pool)
        self.assertEqual(len(policy.pool), 25)

    def test_letters_cover_enabled_letter_classes(self) -> None:
        policy = build_character_policy(PasswordRequest(uppercase=False))
        self.assertEqual(policy.letters, "abcdefghijklmnopqrstuvwxyz")

    def test_required_characters_follow_minimums(self) -> None:
        policy = build_character_policy(PasswordRequest(min_numbers=3, min_symbols=2))
        required = build_required_characters(policy, SeededRandom(3))
        self.assertEqual(len(required), 5)
        self.assertTrue(all(ch in NUMBERS for ch in required[:3]))
        self.assertTrue(all(ch in DEFAULT_SYMBOLS for ch in required[3:]))

    def test_required_characters_skip_disabled_classes(self) -> None:
        policy = build_character_policy(PasswordRequest(numbers=False, symbols=False, min_numbers=4, min_symbols=4))
        self.assertEqual(build_required_characters(policy, SeededRandom(1)), ())


if __name__ == "__main__":
    unittest.main()
