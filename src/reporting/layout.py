"""
Layout Engine

Splits the report canvas into six vertically stacked sections separated by a
margin. Pure arithmetic: recompute whenever the canvas size changes.
"""

from dataclasses import dataclass
from typing import List, Tuple

from loguru import logger

# Section heights in pixels, top to bottom
SECTION_HEIGHTS: Tuple[Tuple[str, int], ...] = (
    ('header', 190),
    ('line', 260),
    ('bar', 250),
    ('pie', 300),
    ('table', 320),
    ('checklist', 240),
)


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle in canvas pixels (right/bottom exclusive)."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def overlaps(self, other: 'Region') -> bool:
        return (
            self.left < other.right and other.left < self.right
            and self.top < other.bottom and other.top < self.bottom
        )


@dataclass(frozen=True)
class ReportRegions:
    header: Region
    line: Region
    bar: Region
    pie: Region
    table: Region
    checklist: Region

    def ordered(self) -> List[Tuple[str, Region]]:
        """Sections in drawing order as (name, region) pairs."""
        return [(name, getattr(self, name)) for name, _ in SECTION_HEIGHTS]

    @property
    def bottom(self) -> int:
        return self.checklist.bottom


def required_canvas_height(margin: int, top_offset: int = 0) -> int:
    """Canvas height needed to show every section plus the bottom margin."""
    stacked = sum(height for _, height in SECTION_HEIGHTS)
    return top_offset + margin * (len(SECTION_HEIGHTS) + 1) + stacked


def compute_regions(
    canvas_width: int,
    canvas_height: int,
    margin: int,
    top_offset: int = 0
) -> ReportRegions:
    """
    Compute the region of every report section.

    Args:
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        margin: Gap around and between sections
        top_offset: Extra space reserved above the header (toolbar row)

    Returns:
        ReportRegions with non-overlapping, top-to-bottom ordered sections
    """
    if margin <= 0:
        raise ValueError(f"Margin must be greater than zero, got {margin}")
    if canvas_width <= 2 * margin:
        raise ValueError(
            f"Canvas width {canvas_width} leaves no room between margins of {margin}"
        )
    if canvas_height <= 0:
        raise ValueError(f"Canvas height must be greater than zero, got {canvas_height}")
    if top_offset < 0:
        raise ValueError(f"Top offset cannot be negative, got {top_offset}")

    left = margin
    right = canvas_width - margin
    top = margin + top_offset

    regions = {}
    for name, height in SECTION_HEIGHTS:
        regions[name] = Region(left, top, right, top + height)
        top += height + margin

    layout = ReportRegions(**regions)

    if layout.bottom > canvas_height:
        logger.warning(
            f"Report sections extend to {layout.bottom}px, beyond canvas height {canvas_height}px"
        )

    return layout
