"""
Chart Sections

Line chart of the hourly curve, bar chart of the top consumers and pie chart
of the category breakdown. Each renderer reads the EnergyDay and draws into
its own region; none of them keeps state between calls.
"""

import math

from loguru import logger

from src.analysis.day_statistics import peak_hour
from src.reporting.layout import Region
from src.reporting.surface import (
    BLACK,
    GRID_GREY,
    PIE_PATTERNS,
    ROW_SEPARATOR_GREY,
    DrawingSurface,
    draw_section_frame,
)
from src.simulation.models import EnergyDay

LINE_CHART_TITLE = "Časová osa (kWh/h)"
BAR_CHART_TITLE = "Top spotřebiče (kWh/den)"
PIE_CHART_TITLE = "Rozpad kategorií (podíl)"

AXIS_FONT_SIZE = 10
LABEL_FONT_SIZE = 12
LEGEND_FONT_SIZE = 11

GRID_STEPS = 5
Y_AXIS_FLOOR = 10.0
Y_AXIS_STEP = 5.0
HOUR_TICKS = (0, 6, 12, 18, 23)
LAST_HOUR = 23

BAR_ROW_PITCH = 28
BAR_HEIGHT = 18
BAR_TRACK_OFFSET = 170
VALUE_COLUMN_WIDTH = 60

PIE_RADIUS = 70


def line_chart_y_max(hourly) -> float:
    """Y-axis ceiling: the larger of 10 kWh and the maximum, rounded up to a multiple of 5."""
    highest = max([Y_AXIS_FLOOR] + list(hourly))
    return math.ceil(highest / Y_AXIS_STEP) * Y_AXIS_STEP


def _hour_x(plot: Region, hour: int) -> int:
    return plot.left + plot.width * hour // LAST_HOUR


def _value_y(plot: Region, value: float, y_max: float) -> int:
    return plot.top + int(plot.height * (1.0 - value / y_max))


def draw_line_chart(day: EnergyDay, area: Region, surface: DrawingSurface):
    """Hourly consumption curve with grid, hour ticks and a peak marker."""
    draw_section_frame(surface, area, LINE_CHART_TITLE)

    plot = Region(area.left + 36, area.top + 60, area.right - 16, area.top + 210)
    surface.draw_rect(plot)

    y_max = line_chart_y_max(day.hourly_kwh)

    # Horizontal grid, top (100%) to bottom (0%)
    for step in range(GRID_STEPS + 1):
        y = plot.top + plot.height * step // GRID_STEPS
        surface.draw_line(plot.left, y, plot.right, y, GRID_GREY, 1)
        label = f"{y_max * (1.0 - step / GRID_STEPS):.0f}"
        label_width, _ = surface.measure_text(label, AXIS_FONT_SIZE)
        surface.draw_text(plot.left - 8 - label_width, y - 6, label, AXIS_FONT_SIZE)

    for hour in HOUR_TICKS:
        x = _hour_x(plot, hour)
        surface.draw_line(x, plot.bottom, x, plot.bottom + 4, BLACK, 1)
        surface.draw_text(x - 8, plot.bottom + 6, f"{hour:02d}", AXIS_FONT_SIZE)

    points = [
        (_hour_x(plot, hour), _value_y(plot, kwh, y_max))
        for hour, kwh in enumerate(day.hourly_kwh)
    ]
    for (x1, y1), (x2, y2) in zip(points, points[1:]):
        surface.draw_line(x1, y1, x2, y2, BLACK, 2)

    if points:
        hour, peak = peak_hour(day)
        px, py = points[hour]
        surface.fill_ellipse(Region(px - 3, py - 3, px + 3, py + 3), BLACK)
        surface.draw_text(px + 6, py - 10, f"peak {peak:.1f}", AXIS_FONT_SIZE)

    logger.debug(f"Line chart drawn: {len(points)} points, y-axis max {y_max:.0f}")


def draw_bar_chart(day: EnergyDay, area: Region, surface: DrawingSurface):
    """Horizontal bars for the ranked consumers, scaled to the largest one."""
    draw_section_frame(surface, area, BAR_CHART_TITLE)

    consumers = day.top_consumers
    max_kwh = max([1.0] + [consumer.kwh for consumer in consumers])

    track_x = area.left + BAR_TRACK_OFFSET
    track_width = area.right - track_x - 10 - VALUE_COLUMN_WIDTH

    y = area.top + 60
    for index, consumer in enumerate(consumers):
        surface.draw_text(area.left + 10, y + 2, consumer.name, LABEL_FONT_SIZE)

        surface.draw_rect(Region(track_x, y, track_x + track_width, y + BAR_HEIGHT))
        filled = int(track_width * (consumer.kwh / max_kwh))
        surface.fill_rect(Region(track_x, y, track_x + filled, y + BAR_HEIGHT), BLACK)

        value = f"{consumer.kwh:.1f}"
        value_width, _ = surface.measure_text(value, LABEL_FONT_SIZE)
        surface.draw_text(area.right - 10 - value_width, y + 2, value, LABEL_FONT_SIZE)

        if index < len(consumers) - 1:
            separator_y = y + BAR_ROW_PITCH - 2
            surface.draw_line(area.left + 10, separator_y, area.right - 10, separator_y,
                              ROW_SEPARATOR_GREY, 1)
        y += BAR_ROW_PITCH

    logger.debug(f"Bar chart drawn: {len(consumers)} consumers")


def pie_pattern(index: int) -> str:
    """Fill pattern for a slice; patterns repeat once the categories outnumber them."""
    return PIE_PATTERNS[index % len(PIE_PATTERNS)]


def draw_pie_chart(day: EnergyDay, area: Region, surface: DrawingSurface):
    """Category shares as a patterned pie with a numbered legend."""
    draw_section_frame(surface, area, PIE_CHART_TITLE)

    total = sum(category.kwh for category in day.category_breakdown)
    if not total > 0:
        raise ValueError(f"Category breakdown must sum to a positive total, got {total}")

    cx = area.left + 100
    cy = area.top + 170

    angle = -90.0
    for index, category in enumerate(day.category_breakdown):
        end_angle = angle + category.kwh / total * 360.0
        surface.select_pattern(pie_pattern(index))
        surface.draw_pie(cx, cy, PIE_RADIUS, angle, end_angle)
        angle = end_angle

    legend_x = area.left + 200
    legend_y = area.top + 90
    for index, category in enumerate(day.category_breakdown):
        share_pct = 100.0 * category.kwh / total
        surface.select_pattern(pie_pattern(index))
        surface.draw_rect(Region(legend_x, legend_y, legend_x + 12, legend_y + 12), hatched=True)
        surface.draw_text(
            legend_x + 18, legend_y - 1,
            f"{index + 1}) {category.name}  {share_pct:.0f}%",
            LEGEND_FONT_SIZE
        )
        legend_y += 22

    surface.select_pattern(None)
    surface.draw_text(legend_x, legend_y + 4, "Pozn.: vzory = index 1..N", LEGEND_FONT_SIZE)

    logger.debug(f"Pie chart drawn: {len(day.category_breakdown)} slices")
