"""
Text Panels

Header summary, hourly table and the checklist of alerts.
"""

from loguru import logger

from src.analysis.day_statistics import (
    average_kwh,
    evaluate_alerts,
    is_table_peak,
    peak_hour,
    top_hours,
    total_kwh,
)
from src.reporting.layout import Region
from src.reporting.surface import BLACK, TABLE_SEPARATOR_GREY, DrawingSurface, draw_section_frame
from src.simulation.models import EnergyDay

HEADER_TITLE = "Denní energetický report"
TABLE_TITLE = "Tabulka (výběr hodin)"
CHECKLIST_TITLE = "Checklist / Alerts"

TABLE_COLUMNS = ("Hod", "kWh", "Kč", "Pozn.")
TABLE_COLUMN_OFFSETS = (10, 80, 160, 280)
TABLE_TIP = "Tip: nejvyšší hodiny často souvisí s HVAC/EV."

TEXT_FONT_SIZE = 12
ALERT_FONT_SIZE = 13


def format_date(day: EnergyDay) -> str:
    """Report date as dd.mm.yyyy."""
    return day.report_date.strftime("%d.%m.%Y")


def draw_header(day: EnergyDay, area: Region, surface: DrawingSurface):
    """Title, building, date and a summary box with total, cost and peak."""
    draw_section_frame(surface, area, HEADER_TITLE)

    surface.draw_text(area.left + 10, area.top + 50, day.building_name, 14, True)
    surface.draw_text(area.left + 10, area.top + 72, f"Datum: {format_date(day)}", TEXT_FONT_SIZE)

    box = Region(area.left + 10, area.top + 96, area.right - 10, area.top + 96 + 78)
    surface.draw_rect(box)

    total = total_kwh(day)
    cost = total * day.price_czk_per_kwh
    hour, peak = peak_hour(day)

    surface.draw_text(box.left + 10, box.top + 10, f"Celkem: {total:.1f} kWh", 14, True)
    surface.draw_text(
        box.left + 10, box.top + 30,
        f"Odhad nákladů: {cost:.0f} Kč ({day.price_czk_per_kwh:.2f} Kč/kWh)",
        TEXT_FONT_SIZE
    )
    surface.draw_text(
        box.left + 10, box.top + 50,
        f"Špička: {peak:.1f} kWh @ {hour:02d}:00",
        TEXT_FONT_SIZE
    )


def draw_table(day: EnergyDay, area: Region, surface: DrawingSurface):
    """Ten highest hours with cost and a peak note."""
    draw_section_frame(surface, area, TABLE_TITLE)

    average = average_kwh(day)
    price = day.price_czk_per_kwh
    surface.draw_text(
        area.left + 10, area.top + 50,
        f"Průměr: {average:.1f} kWh/h   Cena: {price:.2f} Kč/kWh",
        TEXT_FONT_SIZE
    )

    columns = [area.left + offset for offset in TABLE_COLUMN_OFFSETS]
    for x, heading in zip(columns, TABLE_COLUMNS):
        surface.draw_text(x, area.top + 70, heading, TEXT_FONT_SIZE, True)
    surface.draw_line(area.left + 10, area.top + 88, area.right - 10, area.top + 88, BLACK, 1)

    rows = top_hours(day)
    y = area.top + 92
    for index, (hour, kwh) in enumerate(rows):
        cells = (
            f"{hour:02d}:00",
            f"{kwh:.1f}",
            f"{kwh * price:.0f}",
            "peak" if is_table_peak(kwh, average) else "",
        )
        for x, cell in zip(columns, cells):
            if cell:
                surface.draw_text(x, y, cell, TEXT_FONT_SIZE)

        if index < len(rows) - 1:
            surface.draw_line(area.left + 10, y + 18, area.right - 10, y + 18,
                              TABLE_SEPARATOR_GREY, 1)
        y += 20

    surface.draw_text(area.left + 10, area.bottom - 20, TABLE_TIP, TEXT_FONT_SIZE)

    logger.debug(f"Table drawn: {len(rows)} rows, average {average:.2f} kWh/h")


def _draw_check_mark(surface: DrawingSurface, x: int, y: int):
    surface.draw_line(x + 2, y + 9, x + 5, y + 13, BLACK, 2)
    surface.draw_line(x + 5, y + 13, x + 11, y + 3, BLACK, 2)


def _draw_cross(surface: DrawingSurface, x: int, y: int):
    surface.draw_line(x + 2, y + 3, x + 11, y + 13, BLACK, 2)
    surface.draw_line(x + 11, y + 3, x + 2, y + 13, BLACK, 2)


def draw_checklist(day: EnergyDay, area: Region, surface: DrawingSurface):
    """Pass/fail lines; failed checks get a cross and bold text."""
    draw_section_frame(surface, area, CHECKLIST_TITLE)

    alerts = evaluate_alerts(day)
    box_x = area.left + 10
    y = area.top + 60
    for alert in alerts:
        surface.draw_rect(Region(box_x, y + 2, box_x + 12, y + 14))
        if alert.ok:
            _draw_check_mark(surface, box_x, y)
        else:
            _draw_cross(surface, box_x, y)
        surface.draw_text(area.left + 30, y + 2, alert.text, ALERT_FONT_SIZE, not alert.ok)
        y += 26

    failed = [alert.text for alert in alerts if not alert.ok]
    if failed:
        logger.warning(f"Checklist failures: {', '.join(failed)}")
