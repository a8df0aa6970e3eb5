"""Immutable data model for one simulated day of building consumption."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple


@dataclass(frozen=True)
class Category:
    """Share of the daily total attributed to one load category."""

    name: str
    kwh: float


@dataclass(frozen=True)
class Consumer:
    """Single tracked load (device group) with its daily consumption."""

    name: str
    kwh: float


@dataclass(frozen=True)
class EnergyDay:
    """
    Snapshot of one day's consumption, categorisation and rankings.

    Built once by the simulator and read by every renderer and exporter.
    Sequences are coerced to tuples so the snapshot cannot be changed in place.
    """

    building_name: str
    report_date: date
    hourly_kwh: Tuple[float, ...]
    category_breakdown: Tuple[Category, ...]
    top_consumers: Tuple[Consumer, ...]
    price_czk_per_kwh: float

    def __post_init__(self):
        object.__setattr__(self, 'hourly_kwh', tuple(float(v) for v in self.hourly_kwh))
        object.__setattr__(self, 'category_breakdown', tuple(self.category_breakdown))
        object.__setattr__(self, 'top_consumers', tuple(self.top_consumers))

        if self.price_czk_per_kwh <= 0:
            raise ValueError(f"Price per kWh must be positive, got {self.price_czk_per_kwh}")
