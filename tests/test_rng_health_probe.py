from __future__ import annotations

import unittest
from unittest.mock import patch

from tools import rng_health_probe


class CyclingSource:
    """Visits every bucket in turn: a perfectly flat histogram."""

    def __init__(self) -> None:
        self._next = 0

    def uniform_int(self, exclusive_max: int) -> int:
        value = self._next % exclusive_max
        self._next += 1
        return value


class StuckSource:
    def uniform_int(self, exclusive_max: int) -> int:
        return 0


_HEALTHY_BLOCKS = [b"\x00", b"\xff", b"\x0f", b"\xf0"]


class RngHealthProbeTests(unittest.TestCase):
    def test_run_probe_accepts_healthy_sources(self) -> None:
        with (
            patch("tools.rng_health_probe.assert_csprng_ready"),
            patch("tools.rng_health_probe.secure_random_bytes", side_effect=_HEALTHY_BLOCKS),
        ):
            report = rng_health_probe._run_probe(
                samples=4,
                chunk_bytes=1,
                min_ones_ratio=0.2,
                max_ones_ratio=0.8,
                buckets=4,
                draws=40,
                rng=CyclingSource(),
            )
        self.assertEqual(report.ones_ratio, 0.5)
        self.assertEqual(report.collisions, 0)
        self.assertEqual(report.chi_square, 0.0)
        self.assertGreaterEqual(report.collision_bound, 2)

    def test_run_probe_rejects_biased_sampler(self) -> None:
        with (
            patch("tools.rng_health_probe.assert_csprng_ready"),
            patch("tools.rng_health_probe.secure_random_bytes", side_effect=_HEALTHY_BLOCKS),
        ):
            with self.assertRaisesRegex(RuntimeError, "chi-square"):
                rng_health_probe._run_probe(
                    samples=4,
                    chunk_bytes=1,
                    min_ones_ratio=0.2,
                    max_ones_ratio=0.8,
                    buckets=2,
                    draws=40,
                    rng=StuckSource(),
                )

    def test_run_probe_rejects_bad_one_bit_ratio(self) -> None:
        with (
            patch("tools.rng_health_probe.assert_csprng_ready"),
            patch("tools.rng_health_probe.secure_random_bytes", return_value=b"\x00"),
        ):
            with self.assertRaisesRegex(RuntimeError, "one-bit ratio"):
                rng_health_probe._run_probe(
                    samples=8,
                    chunk_bytes=1,
                    min_ones_ratio=0.4,
                    max_ones_ratio=0.6,
                    buckets=2,
                    draws=10,
                    rng=CyclingSource(),
                )

    def test_run_probe_rejects_too_few_draws(self) -> None:
        with patch("tools.rng_health_probe.assert_csprng_ready"):
            with self.assertRaisesRegex(ValueError, "at least 5 per bucket"):
                rng_health_probe._run_probe(
                    samples=4,
                    chunk_bytes=1,
                    min_ones_ratio=0.2,
                    max_ones_ratio=0.8,
                    buckets=10,
                    draws=20,
                )

    def test_chi_square_limit_tracks_table_values(self) -> None:
        self.assertAlmostEqual(rng_health_probe.chi_square_limit(9), 27.88, delta=0.5)
        self.assertAlmostEqual(rng_health_probe.chi_square_limit(93), 140.9, delta=1.0)

    def test_chi_square_statistic(self) -> None:
        self.assertEqual(rng_health_probe.chi_square_statistic([5, 5, 5, 5]), 0.0)
        self.assertEqual(rng_health_probe.chi_square_statistic([10, 0]), 10.0)


if __name__ == "__main__":
    unittest.main()
