from __future__ import annotations

import unittest
from unittest.mock import patch

from passgen.core.credential_service import generate
from passgen.core.models import PasswordRequest
from passgen.core.secure_random import (
    UINT32_SPACE,
    CsprngUnavailableError,
    SecureRandom,
    assert_csprng_ready,
    secure_random_bytes,
)

# chi-square critical value for 9 degrees of freedom at p = 0.0001
_CHI_SQUARE_LIMIT_DF9 = 33.72


class SecureRandomBytesTests(unittest.TestCase):
    def test_wraps_os_errors(self) -> None:
        with patch("passgen.core.secure_random.os.urandom", side_effect=OSError("rng unavailable")):
            with self.assertRaisesRegex(CsprngUnavailableError, "OS CSPRNG failure requesting 4 byte\\(s\\)"):
                secure_random_bytes(4)

    def test_rejects_short_reads(self) -> None:
        with patch("passgen.core.secure_random.os.urandom", return_value=b"\x00"):
            with self.assertRaisesRegex(CsprngUnavailableError, "unexpected byte count"):
                secure_random_bytes(2)

    def test_rejects_non_positive_count(self) -> None:
        with self.assertRaises(ValueError):
            secure_random_bytes(0)

    def test_unavailable_error_is_an_os_error(self) -> None:
        self.assertTrue(issubclass(CsprngUnavailableError, OSError))

    def test_assert_ready_propagates_failure(self) -> None:
        with patch("passgen.core.secure_random.os.urandom", side_effect=OSError("gone")):
            with self.assertRaises(CsprngUnavailableError):
                assert_csprng_ready()

    def test_generation_never_falls_back_when_source_fails(self) -> None:
        with patch("passgen.core.secure_random.os.urandom", side_effect=OSError("gone")):
            with self.assertRaises(CsprngUnavailableError):
                generate("password", PasswordRequest())


class UniformIntTests(unittest.TestCase):
    def test_non_positive_bound_returns_zero_without_drawing(self) -> None:
        rng = SecureRandom()
        with patch("passgen.core.secure_random.secure_random_bytes") as mocked:
            self.assertEqual(rng.uniform_int(0), 0)
            self.assertEqual(rng.uniform_int(-5), 0)
        mocked.assert_not_called()

    def test_bound_above_word_size_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SecureRandom().uniform_int(UINT32_SPACE + 1)

    def test_full_word_bound_is_accepted(self) -> None:
        value = SecureRandom().uniform_int(UINT32_SPACE)
        self.assertTrue(0 <= value < UINT32_SPACE)

    def test_values_in_biased_tail_are_redrawn(self) -> None:
        # 2**32 % 3 == 1, so only 0xFFFFFFFF lies at or above the acceptance limit.
        rng = SecureRandom()
        with patch.object(SecureRandom, "_next_uint32", side_effect=[0xFFFFFFFF, 5]) as mocked:
            self.assertEqual(rng.uniform_int(3), 2)
        self.assertEqual(mocked.call_count, 2)

    def test_draws_from_four_secure_bytes(self) -> None:
        with patch("passgen.core.secure_random.secure_random_bytes", return_value=b"\x00\x00\x00\x07") as mocked:
            self.assertEqual(SecureRandom().uniform_int(10), 7)
        mocked.assert_called_once_with(4)

    def test_distribution_is_uniform(self) -> None:
        rng = SecureRandom()
        buckets = 10
        draws = 20_000
        counts = [0] * buckets
        for _ in range(draws):
            counts[rng.uniform_int(buckets)] += 1
        expected = draws / buckets
        statistic = sum((c - expected) ** 2 / expected for c in counts)
        self.assertLess(statistic, _CHI_SQUARE_LIMIT_DF9)


class ShuffleAndChoiceTests(unittest.TestCase):
    def test_shuffle_returns_new_permutation(self) -> None:
        original = list(range(50))
        shuffled = SecureRandom().shuffle(original)
        self.assertEqual(original, list(range(50)))
        self.assertIsNot(shuffled, original)
        self.assertEqual(sorted(shuffled), original)

    def test_shuffle_handles_short_sequences(self) -> None:
        rng = SecureRandom()
        self.assertEqual(rng.shuffle([]), [])
        self.assertEqual(rng.shuffle("a"), ["a"])

    def test_choice_rejects_empty_sequence(self) -> None:
        with self.assertRaises(ValueError):
            SecureRandom().choice([])

    def test_choice_returns_member(self) -> None:
        self.assertIn(SecureRandom().choice("xyz"), "xyz")


if __name__ == "__main__":
    unittest.main()
