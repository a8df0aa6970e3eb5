"""Tests for derived day statistics and checklist alerts."""

from datetime import date
from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).parent.parent))

from src.analysis.day_statistics import (
    average_kwh,
    evaluate_alerts,
    is_table_peak,
    night_average_kwh,
    peak_hour,
    top_hours,
    total_kwh,
)
from src.simulation.energy_simulator import derive_categories, derive_top_consumers, simulate
from src.simulation.models import EnergyDay


def make_day(hourly, price=3.2):
    total = sum(hourly) or 1.0
    return EnergyDay(
        building_name="Test",
        report_date=date(2024, 1, 1),
        hourly_kwh=hourly,
        category_breakdown=derive_categories(total),
        top_consumers=derive_top_consumers(total),
        price_czk_per_kwh=price,
    )


def test_high_night_load_fails_night_check():
    """Hours 0-5 averaging above 0.75x the daily average flag the night check."""
    day = make_day([20.0] * 6 + [10.0] * 18)

    assert average_kwh(day) == pytest.approx(12.5)
    assert night_average_kwh(day) == pytest.approx(20.0)

    alerts = evaluate_alerts(day)
    assert alerts[0].text == "Noční zátěž v normě"
    assert alerts[0].ok is False
    assert all(alert.ok for alert in alerts[1:])


def test_extreme_peak_detected():
    hourly = [5.0] * 24
    hourly[12] = 100.0
    alerts = evaluate_alerts(make_day(hourly))

    assert alerts[1].text == "Žádná extrémní špička (> 2.0× průměr)"
    assert alerts[1].ok is False
    assert alerts[0].ok is True


def test_incomplete_curve_fails_completeness():
    alerts = evaluate_alerts(make_day([10.0] * 23))

    assert alerts[2].text == "Křivka bez výpadků (24/24)"
    assert alerts[2].ok is False


def test_recommendations_always_pass():
    alerts = evaluate_alerts(make_day([20.0] * 6 + [10.0] * 18))

    assert len(alerts) == 5
    assert [alert.ok for alert in alerts[3:]] == [True, True]


def test_reference_seed_passes_every_check():
    day = simulate(0xC0FFEE, date(2024, 3, 15))
    assert all(alert.ok for alert in evaluate_alerts(day))


def test_peak_hour_prefers_earliest_tie():
    hourly = [4.0] * 24
    hourly[9] = 30.0
    hourly[15] = 30.0

    assert peak_hour(make_day(hourly)) == (9, 30.0)


def test_top_hours_for_reference_seed():
    day = simulate(0xC0FFEE, date(2024, 3, 15))

    assert [hour for hour, _ in top_hours(day)] == [18, 12, 13, 15, 11, 14, 16, 10, 17, 19]
    assert peak_hour(day)[0] == 18


def test_top_hours_ties_keep_hour_order():
    rows = top_hours(make_day([7.0] * 24), limit=10)
    assert [hour for hour, _ in rows] == list(range(10))


def test_totals_and_table_peak_threshold():
    day = make_day([10.0] * 24)

    assert total_kwh(day) == pytest.approx(240.0)
    assert average_kwh(day) == pytest.approx(10.0)
    assert is_table_peak(15.1, 10.0)
    assert not is_table_peak(15.0, 10.0)


def test_zero_total_day_is_rejected():
    day = make_day([0.0] * 24)

    with pytest.raises(ValueError):
        average_kwh(day)
    with pytest.raises(ValueError):
        evaluate_alerts(day)
