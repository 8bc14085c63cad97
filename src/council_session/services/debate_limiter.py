"""Debate cycle limit policy. Pure functions, no state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DebateLimitConfig:
    default_limit: int
    extended_limit: int


def resolve_debate_limit(config: DebateLimitConfig, extended_requested: bool) -> int:
    """Return the extended cap iff extended debate was requested."""
    return config.extended_limit if extended_requested else config.default_limit


def has_reached_debate_limit(current_cycles: int, limit: int) -> bool:
    """True once ``current_cycles`` is at or beyond ``limit``.

    A limit of 0 counts as reached before any cycle has run.
    """
    return current_cycles >= limit
