"""
Energy Data Simulator

Builds one reproducible day of office-building consumption:
- 24 hourly samples (time-of-day base load + workday wave + noise + rare spikes)
- Fixed-share category breakdown of the daily total
- Ranked top consumers taken from a fixed-share device list

The generator is consumed strictly in hour order: one draw for noise, one
draw for the spike decision and a third draw only when a spike fires.
Changing that order changes every later hour.
"""

import math
from datetime import date
from typing import List, Sequence, Tuple

from loguru import logger

from src.simulation.models import Category, Consumer, EnergyDay
from src.simulation.random_source import DEFAULT_SEED, SeededRNG

DEFAULT_BUILDING_NAME = "Kancelářská budova A (menší)"
DEFAULT_PRICE_CZK_PER_KWH = 3.20

HOURS_PER_DAY = 24
MIN_HOURLY_KWH = 3.0

# Base load (kWh/h) by time-of-day band
BASE_NIGHT = 6.5
BASE_MORNING_RAMP = 3.0
BASE_WORKDAY = 16.0
BASE_EVENING = 10.0

WAVE_AMPLITUDE = 7.0
WORKDAY_START_HOUR = 8
WORKDAY_END_HOUR = 18

SPIKE_PROBABILITY = 0.08
SPIKE_MIN_KWH = 5.0
SPIKE_RANGE_KWH = 10.0

# (name, share of daily total) in display order; shares sum to 1.0
CATEGORY_SHARES: Tuple[Tuple[str, float], ...] = (
    ("HVAC (chlazení + VZT)", 0.42),
    ("Osvětlení", 0.22),
    ("IT + serverovna", 0.18),
    ("Zásuvky / kuchyňky", 0.10),
    ("Ostatní", 0.08),
)

# Raw device list before ranking; truncated to TOP_CONSUMER_LIMIT
CONSUMER_SHARES: Tuple[Tuple[str, float], ...] = (
    ("Chiller / tepelné čerpadlo", 0.22),
    ("VZT jednotky", 0.17),
    ("Osvětlení open-space", 0.15),
    ("Serverovna UPS", 0.14),
    ("EV nabíjení", 0.10),
    ("Výtahy", 0.05),
    ("Ostatní", 0.17),
)

TOP_CONSUMER_LIMIT = 6


def base_load(hour: int) -> float:
    """Deterministic base load for an hour of the day (before wave, noise, spike)."""
    if hour < 6 or hour >= 23:
        return BASE_NIGHT
    if hour < WORKDAY_START_HOUR:
        return BASE_NIGHT + BASE_MORNING_RAMP
    if hour <= WORKDAY_END_HOUR:
        return BASE_WORKDAY
    return BASE_EVENING


def workday_wave(hour: int) -> float:
    """Half-sine bump across working hours 8-18, zero elsewhere."""
    if WORKDAY_START_HOUR <= hour <= WORKDAY_END_HOUR:
        return WAVE_AMPLITUDE * math.sin((hour - 8.0) / 10.0 * math.pi)
    return 0.0


def simulate_hourly(rng: SeededRNG) -> List[float]:
    """
    Draw the 24 hourly samples from the generator.

    Args:
        rng: Freshly seeded generator, consumed in place

    Returns:
        List of 24 kWh values, each clamped to MIN_HOURLY_KWH
    """
    hourly = []
    for hour in range(HOURS_PER_DAY):
        noise = (rng.next_unit() - 0.5) * 2.0

        spike = 0.0
        if rng.next_unit() < SPIKE_PROBABILITY:
            spike = SPIKE_MIN_KWH + rng.next_unit() * SPIKE_RANGE_KWH
            logger.debug(f"Load spike at {hour:02d}:00 (+{spike:.2f} kWh)")

        kwh = base_load(hour) + workday_wave(hour) + noise + spike
        hourly.append(max(MIN_HOURLY_KWH, kwh))

    return hourly


def _require_positive_total(total: float):
    if not total > 0:
        raise ValueError(
            f"Total daily consumption must be greater than zero to split into shares, got {total}"
        )


def derive_categories(
    total: float,
    shares: Sequence[Tuple[str, float]] = CATEGORY_SHARES
) -> List[Category]:
    """Split the daily total into categories, keeping the declared order."""
    _require_positive_total(total)
    return [Category(name=name, kwh=total * share) for name, share in shares]


def derive_top_consumers(
    total: float,
    shares: Sequence[Tuple[str, float]] = CONSUMER_SHARES,
    limit: int = TOP_CONSUMER_LIMIT
) -> List[Consumer]:
    """
    Rank fixed-share consumers by consumption and keep the largest ones.

    Sorting is stable, so equal consumptions keep their declared order.
    """
    _require_positive_total(total)
    raw = [Consumer(name=name, kwh=total * share) for name, share in shares]
    ranked = sorted(raw, key=lambda consumer: consumer.kwh, reverse=True)
    return ranked[:limit]


def simulate(
    seed: int = DEFAULT_SEED,
    reference_date: date = None,
    building_name: str = DEFAULT_BUILDING_NAME,
    price_czk_per_kwh: float = DEFAULT_PRICE_CZK_PER_KWH
) -> EnergyDay:
    """
    Simulate one day of consumption for the report.

    Args:
        seed: Generator seed; the same seed always yields the same day
        reference_date: Date printed on the report (defaults to today)
        building_name: Building label for the header
        price_czk_per_kwh: Energy price used for cost estimates

    Returns:
        Fully populated EnergyDay
    """
    if price_czk_per_kwh <= 0:
        raise ValueError(f"Price per kWh must be greater than zero, got {price_czk_per_kwh}")

    if reference_date is None:
        reference_date = date.today()

    rng = SeededRNG(seed)
    hourly = simulate_hourly(rng)

    total = 0.0
    for kwh in hourly:
        total += kwh

    day = EnergyDay(
        building_name=building_name,
        report_date=reference_date,
        hourly_kwh=hourly,
        category_breakdown=derive_categories(total),
        top_consumers=derive_top_consumers(total),
        price_czk_per_kwh=price_czk_per_kwh,
    )

    logger.info(
        f"Simulated {reference_date:%d.%m.%Y} for '{building_name}' "
        f"(seed {seed:#x}): {total:.1f} kWh"
    )
    return day
