"""
Matplotlib Drawing Surface

Rasterizes report primitives onto a single figure (Agg backend, no display).
One canvas pixel maps to one point at 72 dpi and the y-axis is inverted so
renderers can work in screen coordinates.
"""

from pathlib import Path
from typing import Optional, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.font_manager import FontProperties
from matplotlib.patches import Ellipse, Rectangle, Wedge
from matplotlib.textpath import TextToPath
from loguru import logger

from src.reporting.layout import Region
from src.reporting.surface import BLACK, WHITE, Color, DrawingSurface

HATCHES = {
    'forward_diagonal': '///',
    'backward_diagonal': '\\\\\\',
    'horizontal': '---',
    'vertical': '|||',
}

FONT_FAMILY = "DejaVu Sans"


def _rgb(color: Color) -> Tuple[float, float, float]:
    return tuple(np.asarray(color, dtype=float) / 255.0)


class MatplotlibSurface(DrawingSurface):
    """Drawing surface backed by a matplotlib figure."""

    def __init__(self, width: int, height: int, dpi: int = 72):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.dpi = dpi
        self._pattern: Optional[str] = None
        self._text_path = TextToPath()

        self.figure = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_axis_off()

    def _font(self, size: int, bold: bool) -> FontProperties:
        return FontProperties(family=FONT_FAMILY, size=size, weight='bold' if bold else 'normal')

    def _hatch(self) -> Optional[str]:
        if self._pattern is None:
            return None
        return HATCHES[self._pattern]

    def fill_rect(self, rect: Region, color: Color = WHITE):
        self.ax.add_patch(Rectangle(
            (rect.left, rect.top), rect.width, rect.height,
            facecolor=_rgb(color), edgecolor='none', linewidth=0
        ))

    def draw_rect(self, rect: Region, color: Color = BLACK, hatched: bool = False):
        self.ax.add_patch(Rectangle(
            (rect.left, rect.top), rect.width, rect.height,
            facecolor='white' if hatched else 'none', edgecolor=_rgb(color), linewidth=1,
            hatch=self._hatch() if hatched else None
        ))

    def draw_line(self, x1, y1, x2, y2, color: Color = BLACK, width: int = 1):
        self.ax.plot([x1, x2], [y1, y2], color=_rgb(color), linewidth=width,
                     solid_capstyle='butt')

    def fill_ellipse(self, rect: Region, color: Color = BLACK):
        center = ((rect.left + rect.right) / 2.0, (rect.top + rect.bottom) / 2.0)
        self.ax.add_patch(Ellipse(center, rect.width, rect.height, facecolor=_rgb(color)))

    def draw_pie(self, cx, cy, radius, start_angle, end_angle):
        # With the inverted y-axis, increasing angles sweep clockwise on screen
        self.ax.add_patch(Wedge(
            (cx, cy), radius, start_angle, end_angle,
            facecolor='white', edgecolor='black', linewidth=1, hatch=self._hatch()
        ))

    def draw_text(self, x, y, text: str, size: int = 14, bold: bool = False):
        self.ax.text(x, y, text, fontproperties=self._font(size, bold),
                     ha='left', va='top', color='black')

    def measure_text(self, text: str, size: int = 14, bold: bool = False) -> Tuple[float, float]:
        width, height, descent = self._text_path.get_text_width_height_descent(
            text, self._font(size, bold), ismath=False
        )
        return width, height + descent

    def select_pattern(self, pattern: Optional[str]):
        if pattern is not None and pattern not in HATCHES:
            raise ValueError(f"Unknown fill pattern '{pattern}'. Available: {', '.join(HATCHES)}")
        self._pattern = pattern

    def save(self, save_path: Path) -> Path:
        """Write the canvas to a PNG file and release the figure."""
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(save_path, dpi=self.dpi, facecolor='white')
        self.close()
        logger.info(f"Saved report image to: {save_path}")
        return save_path

    def close(self):
        plt.close(self.figure)

    def __enter__(self) -> 'MatplotlibSurface':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
