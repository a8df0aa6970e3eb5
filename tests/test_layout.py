"""Tests for the report layout engine."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).parent.parent))

from src.reporting.layout import (
    SECTION_HEIGHTS,
    Region,
    compute_regions,
    required_canvas_height,
)


@pytest.mark.parametrize(
    "width, height, margin, top_offset",
    [(600, 1700, 10, 40), (600, 1100, 10, 0), (1024, 2000, 25, 0), (41, 10, 20, 5)],
)
def test_regions_stack_without_overlap(width, height, margin, top_offset):
    regions = compute_regions(width, height, margin, top_offset)
    ordered = [region for _, region in regions.ordered()]

    assert ordered[0].top == margin + top_offset
    for region in ordered:
        assert region.left == margin
        assert region.width == width - 2 * margin

    for upper, lower in zip(ordered, ordered[1:]):
        assert lower.top == upper.bottom + margin
        assert not upper.overlaps(lower)

    for i, first in enumerate(ordered):
        for second in ordered[i + 1:]:
            assert not first.overlaps(second)


def test_fixed_section_heights():
    regions = compute_regions(600, 1700, 10)

    assert [(name, region.height) for name, region in regions.ordered()] == list(SECTION_HEIGHTS)
    assert regions.header == Region(10, 10, 590, 200)
    assert regions.line == Region(10, 210, 590, 470)
    assert regions.checklist.bottom == 1620


def test_required_height_matches_layout():
    regions = compute_regions(600, 1700, 10, 40)

    assert required_canvas_height(10, 40) == regions.bottom + 10 == 1670


def test_overflow_is_allowed():
    """Sections are not clipped when the canvas is shorter than the report."""
    regions = compute_regions(600, 500, 10)
    assert regions.bottom > 500


@pytest.mark.parametrize(
    "width, height, margin, top_offset",
    [(600, 1700, 0, 0), (600, 1700, -5, 0), (20, 1700, 10, 0), (600, 0, 10, 0), (600, 1700, 10, -1)],
)
def test_invalid_canvas_is_rejected(width, height, margin, top_offset):
    with pytest.raises(ValueError):
        compute_regions(width, height, margin, top_offset)


def test_region_overlap_helper():
    assert Region(0, 0, 10, 10).overlaps(Region(5, 5, 15, 15))
    assert not Region(0, 0, 10, 10).overlaps(Region(10, 0, 20, 10))
