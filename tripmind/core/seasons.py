"""Calendar helpers shared by prompt construction and image search."""
from __future__ import annotations

from datetime import date
from typing import Literal, Optional

Season = Literal["winter", "spring", "summer", "autumn"]

HIGH_SEASON_MONTHS = frozenset({1, 6, 7, 8, 12})
HIGH_SEASON_MULTIPLIER = 1.15
LOW_SEASON_MULTIPLIER = 0.9


def season_for_month(month: int) -> Season:
    """Map a calendar month (1-12) to its season bucket.

    Jan-Feb is winter, Mar-May spring, Jun-Aug summer and Sep-Dec autumn.
    """

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    if month <= 2:
        return "winter"
    if month <= 5:
        return "spring"
    if month <= 8:
        return "summer"
    return "autumn"


def season_for_date(start: Optional[date]) -> Optional[Season]:
    if start is None:
        return None
    return season_for_month(start.month)


def is_high_season(start: Optional[date]) -> bool:
    """Peak travel months are June to August plus December and January."""

    return start is not None and start.month in HIGH_SEASON_MONTHS


def adjusted_budget(budget: float, start: Optional[date]) -> float:
    """Scale the traveller's budget to reflect seasonal pricing."""

    multiplier = HIGH_SEASON_MULTIPLIER if is_high_season(start) else LOW_SEASON_MULTIPLIER
    return budget * multiplier
