"""
Day Statistics Module

Derived values shared by the report sections and the receipt printer:
totals, averages, peak hour, ranked hours and the checklist alerts.
Nothing here is stored on the EnergyDay; every call recomputes from it.
"""

from dataclasses import dataclass
from typing import List, Tuple

from src.simulation.models import EnergyDay

HOURS_PER_DAY = 24
NIGHT_HOURS = 6

# Alert thresholds, relative to the 24-hour average
NIGHT_LOAD_RATIO = 0.75
EXTREME_PEAK_RATIO = 2.0
TABLE_PEAK_RATIO = 1.5

TOP_HOURS_LIMIT = 10


@dataclass(frozen=True)
class Alert:
    """Checklist line with its pass/fail state."""

    text: str
    ok: bool


def total_kwh(day: EnergyDay) -> float:
    """Sum of the hourly samples."""
    total = 0.0
    for kwh in day.hourly_kwh:
        total += kwh
    return total


def average_kwh(day: EnergyDay) -> float:
    """Average hourly consumption over a full 24-hour day."""
    total = total_kwh(day)
    if not total > 0:
        raise ValueError(f"Cannot compute averages for a day with total consumption {total}")
    return total / HOURS_PER_DAY


def peak_hour(day: EnergyDay) -> Tuple[int, float]:
    """
    Return (hour, kWh) of the highest sample.

    The earliest hour wins when several hours share the maximum.
    An empty day reports (0, 0.0).
    """
    peak_value = 0.0
    peak_at = 0
    for hour, kwh in enumerate(day.hourly_kwh):
        if kwh > peak_value:
            peak_value = kwh
            peak_at = hour
    return peak_at, peak_value


def night_average_kwh(day: EnergyDay) -> float:
    """Average of hours 00-05; missing night samples count as zero."""
    night = day.hourly_kwh[:NIGHT_HOURS]
    return sum(night) / float(NIGHT_HOURS)


def top_hours(day: EnergyDay, limit: int = TOP_HOURS_LIMIT) -> List[Tuple[int, float]]:
    """Hours ranked by consumption (descending, earlier hour first on ties)."""
    rows = list(enumerate(day.hourly_kwh))
    rows.sort(key=lambda row: row[1], reverse=True)
    return rows[:limit]


def is_table_peak(kwh: float, average: float) -> bool:
    """Whether an hour is annotated as a peak in the hourly table."""
    return kwh > average * TABLE_PEAK_RATIO


def evaluate_alerts(day: EnergyDay) -> List[Alert]:
    """
    Evaluate the five checklist lines for a day.

    Returns:
        Alerts in display order: night load, extreme peak, completeness,
        then two standing recommendations that always pass.
    """
    average = average_kwh(day)
    _, peak_value = peak_hour(day)
    night_high = night_average_kwh(day) > average * NIGHT_LOAD_RATIO

    return [
        Alert("Noční zátěž v normě", not night_high),
        Alert(
            f"Žádná extrémní špička (> {EXTREME_PEAK_RATIO:.1f}× průměr)",
            not peak_value > average * EXTREME_PEAK_RATIO,
        ),
        Alert(
            f"Křivka bez výpadků ({HOURS_PER_DAY}/{HOURS_PER_DAY})",
            len(day.hourly_kwh) == HOURS_PER_DAY,
        ),
        Alert("Doporučení: zkontrolovat HVAC plán", True),
        Alert("Doporučení: audit osvětlení (zóny)", True),
    ]
