"""Core generation engines, strength estimation, and service APIs for PassGen."""

from __future__ import annotations


def generate(kind, request, rng=None):
    from passgen.core.credential_service import generate as _generate

    return _generate(kind, request, rng=rng)


def analyze(subject, **kwargs):
    from passgen.core.credential_service import analyze as _analyze

    return _analyze(subject, **kwargs)


def generate_bulk(count, request, rng=None):
    from passgen.core.bulk import generate_bulk as _generate_bulk

    return _generate_bulk(count, request, rng=rng)


__all__ = ["analyze", "generate", "generate_bulk"]
