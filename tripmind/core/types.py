"""Shared type aliases used across the trip models."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field

NonNegMoney = Annotated[float, Field(ge=0)]
Lat = Annotated[float, Field(ge=-90, le=90)]
Lng = Annotated[float, Field(ge=-180, le=180)]
DayNumber = Annotated[int, Field(ge=1)]
