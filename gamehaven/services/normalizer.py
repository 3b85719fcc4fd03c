"""Bucket raw BGG numbers into the catalog's filter categories.

Boundary placement is part of the contract: catalog filter counts must
stay reproducible, so playtime uses inclusive upper bounds and weight
uses strict ones.
"""

from __future__ import annotations

from gamehaven.models.game import DifficultyLevel, PlayTime

DEFAULT_AGE = "10+"

# (inclusive upper bound in minutes, label), ascending
_PLAY_TIME_BUCKETS: tuple[tuple[int, PlayTime], ...] = (
    (15, "0-15 Minutes"),
    (30, "15-30 Minutes"),
    (45, "30-45 Minutes"),
    (60, "45-60 Minutes"),
    (120, "60+ Minutes"),
    (180, "2+ Hours"),
)
_LONGEST_PLAY_TIME: PlayTime = "3+ Hours"

# (exclusive upper bound on the 1–5 weight scale, label), ascending
_WEIGHT_BUCKETS: tuple[tuple[float, DifficultyLevel], ...] = (
    (1.5, "1 - Light"),
    (2.5, "2 - Medium Light"),
    (3.5, "3 - Medium"),
    (4.5, "4 - Medium Heavy"),
)
_HEAVIEST: DifficultyLevel = "5 - Heavy"


def play_time_bucket(minutes: int | float) -> PlayTime:
    for upper, label in _PLAY_TIME_BUCKETS:
        if minutes <= upper:
            return label
    return _LONGEST_PLAY_TIME


def difficulty_bucket(weight: float) -> DifficultyLevel:
    for upper, label in _WEIGHT_BUCKETS:
        if weight < upper:
            return label
    return _HEAVIEST


def age_bucket(min_age: int | None) -> str:
    """``12`` → ``"12+"``; unknown ages fall back to ``"10+"``."""
    if min_age is None:
        return DEFAULT_AGE
    return f"{min_age}+"
