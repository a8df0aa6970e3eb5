"""
Data Export

Writes the simulated day as JSON (full snapshot) and CSV tables (hourly
curve, category breakdown) for use outside the report.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

import pandas as pd
from loguru import logger

from src.analysis.day_statistics import average_kwh, evaluate_alerts, is_table_peak, peak_hour, total_kwh
from src.simulation.models import EnergyDay
from src.utils.run_logger import convert_to_json_serializable


def energy_day_to_dict(day: EnergyDay) -> Dict[str, Any]:
    """Snapshot plus derived summary values, JSON-ready."""
    hour, peak = peak_hour(day)
    total = total_kwh(day)

    payload = asdict(day)
    payload['summary'] = {
        'total_kwh': total,
        'average_kwh': average_kwh(day),
        'estimated_cost_czk': total * day.price_czk_per_kwh,
        'peak_hour': hour,
        'peak_kwh': peak,
    }
    payload['alerts'] = [asdict(alert) for alert in evaluate_alerts(day)]
    return convert_to_json_serializable(payload)


def hourly_dataframe(day: EnergyDay) -> pd.DataFrame:
    """One row per hour with consumption, cost and the table peak flag."""
    df = pd.DataFrame({
        'hour': range(len(day.hourly_kwh)),
        'kwh': list(day.hourly_kwh),
    })
    df['label'] = df['hour'].map(lambda h: f"{h:02d}:00")
    df['cost_czk'] = df['kwh'] * day.price_czk_per_kwh

    average = average_kwh(day)
    df['is_peak'] = df['kwh'].map(lambda kwh: is_table_peak(kwh, average))

    return df[['hour', 'label', 'kwh', 'cost_czk', 'is_peak']]


def category_dataframe(day: EnergyDay) -> pd.DataFrame:
    """Category breakdown with percentage shares."""
    df = pd.DataFrame(
        [(category.name, category.kwh) for category in day.category_breakdown],
        columns=['category', 'kwh'],
    )
    total = df['kwh'].sum()
    df['share_pct'] = df['kwh'] / total * 100.0 if total > 0 else 0.0
    return df


def export_energy_day(day: EnergyDay, output_dir: Path) -> Dict[str, Path]:
    """
    Write JSON and CSV exports of a day.

    Args:
        day: Simulated day
        output_dir: Destination directory (created if missing)

    Returns:
        Mapping of export name to written path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        'json': output_dir / "energy_day.json",
        'hourly_csv': output_dir / "hourly_consumption.csv",
        'category_csv': output_dir / "category_breakdown.csv",
    }

    with open(paths['json'], 'w', encoding='utf-8') as f:
        json.dump(energy_day_to_dict(day), f, indent=2, ensure_ascii=False)

    hourly_dataframe(day).to_csv(paths['hourly_csv'], index=False, encoding='utf-8')
    category_dataframe(day).to_csv(paths['category_csv'], index=False, encoding='utf-8')

    for name, path in paths.items():
        logger.info(f"Saved {name} export to: {path}")

    return paths
