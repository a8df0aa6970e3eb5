"""
Report Composer

Builds the EnergyDay once, lays out the canvas and runs every section
renderer in a fixed order on the supplied drawing surface.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger

from src.reporting.charts import draw_bar_chart, draw_line_chart, draw_pie_chart
from src.reporting.layout import Region, compute_regions
from src.reporting.panels import draw_checklist, draw_header, draw_table
from src.reporting.surface import WHITE, DrawingSurface
from src.simulation.energy_simulator import (
    DEFAULT_BUILDING_NAME,
    DEFAULT_PRICE_CZK_PER_KWH,
    simulate,
)
from src.simulation.models import EnergyDay
from src.simulation.random_source import DEFAULT_SEED

SectionRenderer = Callable[[EnergyDay, Region, DrawingSurface], None]

# Drawing order; names match the ReportRegions attributes
SECTION_RENDERERS: Tuple[Tuple[str, SectionRenderer], ...] = (
    ('header', draw_header),
    ('line', draw_line_chart),
    ('bar', draw_bar_chart),
    ('pie', draw_pie_chart),
    ('table', draw_table),
    ('checklist', draw_checklist),
)


@dataclass(frozen=True)
class ReportParameters:
    """Explicit inputs of one report build."""

    seed: int = DEFAULT_SEED
    reference_date: date = field(default_factory=date.today)
    canvas_width: int = 600
    canvas_height: int = 1700
    margin: int = 10
    top_offset: int = 0
    price_czk_per_kwh: float = DEFAULT_PRICE_CZK_PER_KWH
    building_name: str = DEFAULT_BUILDING_NAME

    @classmethod
    def from_settings(
        cls,
        settings: Dict[str, Any],
        reference_date: Optional[date] = None,
        **overrides
    ) -> 'ReportParameters':
        """
        Build parameters from the validated ``report`` config block.

        Args:
            settings: Output of config.get_report_settings()
            reference_date: Report date (defaults to today)
            **overrides: Values that take precedence over the config (e.g. CLI flags)
        """
        values = {
            'seed': settings['seed'],
            'canvas_width': settings['canvas_width'],
            'canvas_height': settings['canvas_height'],
            'margin': settings['margin'],
            'top_offset': settings['top_offset'],
            'price_czk_per_kwh': settings['price_czk_per_kwh'],
            'building_name': settings.get('building_name') or DEFAULT_BUILDING_NAME,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        if reference_date is not None:
            values['reference_date'] = reference_date
        return cls(**values)


def compose(surface: DrawingSurface, params: ReportParameters) -> EnergyDay:
    """
    Render the complete report onto a surface.

    Args:
        surface: Target drawing surface
        params: Seed, date, canvas geometry and pricing for this build

    Returns:
        The EnergyDay every section was drawn from
    """
    regions = compute_regions(
        params.canvas_width, params.canvas_height, params.margin, params.top_offset
    )

    day = simulate(
        seed=params.seed,
        reference_date=params.reference_date,
        building_name=params.building_name,
        price_czk_per_kwh=params.price_czk_per_kwh,
    )

    surface.fill_rect(Region(0, 0, params.canvas_width, params.canvas_height), WHITE)

    for name, renderer in SECTION_RENDERERS:
        renderer(day, getattr(regions, name), surface)
        logger.debug(f"Rendered section '{name}'")

    logger.info(f"Composed report with {len(SECTION_RENDERERS)} sections")
    return day
