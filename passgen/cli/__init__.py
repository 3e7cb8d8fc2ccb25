"""Command-line front ends for PassGen."""
