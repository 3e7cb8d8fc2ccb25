#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from passgen.core.secure_random import RandomSource, SecureRandom, assert_csprng_ready, secure_random_bytes

# z-score for a one-sided p ~= 0.001; a healthy source trips this about once per thousand runs.
DEFAULT_CHI_SQUARE_Z = 3.09


@dataclass(frozen=True)
class ProbeReport:
    ones_ratio: float
    collisions: int
    collision_bound: int
    chi_square: float
    chi_square_limit: float
    buckets: int
    draws: int


def _estimated_collision_upper_bound(samples: int, chunk_bytes: int) -> int:
    space_size = 1 << (8 * chunk_bytes)
    expected = (samples * (samples - 1)) / (2.0 * space_size)
    return max(2, int(math.ceil(expected * 20.0 + 5.0)))


def chi_square_statistic(counts: list[int]) -> float:
    total = sum(counts)
    if not counts or total <= 0:
        raise ValueError("chi-square needs at least one observation")
    expected = total / len(counts)
    return sum((observed - expected) ** 2 / expected for observed in counts)


def chi_square_limit(degrees_of_freedom: int, z: float = DEFAULT_CHI_SQUARE_Z) -> float:
    """Upper chi-square quantile via the Wilson-Hilferty cube approximation."""
    if degrees_of_freedom <= 0:
        raise ValueError("degrees of freedom must be > 0")
    k = float(degrees_of_freedom)
    term = 1.0 - 2.0 / (9.0 * k) + z * math.sqrt(2.0 / (9.0 * k))
    return k * term ** 3


def _bucket_counts(rng: RandomSource, buckets: int, draws: int) -> list[int]:
    counts = [0] * buckets
    for _ in range(draws):
        counts[rng.uniform_int(buckets)] += 1
    return counts


def _check_bytes(samples: int, chunk_bytes: int, min_ones_ratio: float, max_ones_ratio: float) -> tuple[float, int, int]:
    seen: set[bytes] = set()
    one_bits = 0
    for _ in range(samples):
        block = secure_random_bytes(chunk_bytes)
        seen.add(block)
        one_bits += sum(bin(byte).count("1") for byte in block)

    ones_ratio = one_bits / (samples * chunk_bytes * 8)
    if not (min_ones_ratio <= ones_ratio <= max_ones_ratio):
        raise RuntimeError(
            f"RNG health probe failed: one-bit ratio {ones_ratio:.6f} outside [{min_ones_ratio:.6f}, {max_ones_ratio:.6f}]"
        )
    collisions = samples - len(seen)
    bound = _estimated_collision_upper_bound(samples, chunk_bytes)
    if collisions > bound:
        raise RuntimeError(f"RNG health probe failed: block collisions exceed birthday bound ({collisions} > {bound})")
    return ones_ratio, collisions, bound


def _run_probe(
    *,
    samples: int,
    chunk_bytes: int,
    min_ones_ratio: float,
    max_ones_ratio: float,
    buckets: int,
    draws: int,
    z: float = DEFAULT_CHI_SQUARE_Z,
    rng: RandomSource | None = None,
) -> ProbeReport:
    assert_csprng_ready()

    if samples <= 0:
        raise ValueError("samples must be > 0")
    if chunk_bytes <= 0:
        raise ValueError("chunk-bytes must be > 0")
    if not (0.0 <= min_ones_ratio < max_ones_ratio <= 1.0):
        raise ValueError("ones-ratio bounds must satisfy 0 <= min < max <= 1")
    if buckets < 2:
        raise ValueError("buckets must be >= 2")
    if draws < buckets * 5:
        raise ValueError("draws must be at least 5 per bucket for a meaningful chi-square test")

    ones_ratio, collisions, bound = _check_bytes(samples, chunk_bytes, min_ones_ratio, max_ones_ratio)

    counts = _bucket_counts(rng if rng is not None else SecureRandom(), buckets, draws)
    statistic = chi_square_statistic(counts)
    limit = chi_square_limit(buckets - 1, z)
    if statistic > limit:
        raise RuntimeError(
            f"RNG health probe failed: uniform_int chi-square {statistic:.2f} exceeds {limit:.2f} "
            f"over {buckets} buckets"
        )

    return ProbeReport(
        ones_ratio=ones_ratio,
        collisions=collisions,
        collision_bound=bound,
        chi_square=statistic,
        chi_square_limit=limit,
        buckets=buckets,
        draws=draws,
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Sanity probe for the OS CSPRNG and the unbiased integer sampler built on it. "
            "Not a cryptographic certification."
        )
    )
    parser.add_argument("--samples", type=int, default=4096, help="random blocks to sample (default: 4096)")
    parser.add_argument("--chunk-bytes", type=int, default=32, help="bytes per sampled block (default: 32)")
    parser.add_argument("--min-ones-ratio", type=float, default=0.47, help="lower one-bit ratio bound (default: 0.47)")
    parser.add_argument("--max-ones-ratio", type=float, default=0.53, help="upper one-bit ratio bound (default: 0.53)")
    parser.add_argument(
        "--buckets",
        type=int,
        default=94,
        help="uniform_int range for the chi-square test (default: 94, the full password pool)",
    )
    parser.add_argument("--draws", type=int, default=94_000, help="uniform_int draws for the chi-square test")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        report = _run_probe(
            samples=args.samples,
            chunk_bytes=args.chunk_bytes,
            min_ones_ratio=args.min_ones_ratio,
            max_ones_ratio=args.max_ones_ratio,
            buckets=args.buckets,
            draws=args.draws,
        )
    except (OSError, RuntimeError, ValueError) as exc:
        print(f"[rng] probe failed: {exc}", file=sys.stderr)
        return 1

    print(f"[rng] samples={args.samples} chunk_bytes={args.chunk_bytes}")
    print(f"[rng] one_bit_ratio={report.ones_ratio:.6f}")
    print(f"[rng] collisions={report.collisions} (bound={report.collision_bound})")
    print(f"[rng] chi_square={report.chi_square:.2f} (limit={report.chi_square_limit:.2f}, buckets={report.buckets})")
    print("[rng] probe ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
