"""Pytest configuration for the TripMind project."""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that import tripmind works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from typing import Any, Dict

import pytest


@pytest.fixture
def trip_payload() -> Dict[str, Any]:
    """Return a representative decoded model payload for a two-day trip."""

    return {
        "summary": "Paris rewards slow mornings and late dinners.",
        "budget_breakdown": {"flights": 250, "stay": 600, "food": 200, "activities": 120, "misc": 30},
        "accommodation": {
            "name": "Hotel Le Marais",
            "price_per_night": 150,
            "description": "Boutique rooms a short walk from the Seine.",
        },
        "itinerary": [
            {
                "day": 1,
                "summary": "Louvre Museum and Tuileries",
                "estimated_cost": 80,
                "details": [
                    {"time": "Morning", "activity": "Visit Eiffel Tower today"},
                    {"time": "Evening", "activity": "Dinner near the river"},
                ],
            },
            {
                "day": 2,
                "summary": "Montmartre",
                "estimated_cost": 60,
                "details": [{"time": "Afternoon", "activity": "Climb to Sacré-Cœur Basilica"}],
            },
        ],
    }
