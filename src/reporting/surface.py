"""
Drawing Surface

Primitive drawing operations the section renderers are written against.
Coordinates are canvas pixels with y growing downwards; angles are degrees
measured clockwise from 3 o'clock (so -90 is 12 o'clock).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from src.reporting.layout import Region

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
GRID_GREY: Color = (200, 200, 200)
ROW_SEPARATOR_GREY: Color = (210, 210, 210)
TABLE_SEPARATOR_GREY: Color = (220, 220, 220)

# Fill patterns available to pie slices and legend swatches
PIE_PATTERNS = ('forward_diagonal', 'backward_diagonal', 'horizontal', 'vertical')

TITLE_FONT_SIZE = 18


class DrawingSurface(ABC):
    """Canvas capability consumed by the renderers."""

    @abstractmethod
    def fill_rect(self, rect: Region, color: Color = WHITE):
        """Fill a rectangle without an outline."""

    @abstractmethod
    def draw_rect(self, rect: Region, color: Color = BLACK, hatched: bool = False):
        """Outline a rectangle; fill it with the selected pattern when hatched."""

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: Color = BLACK, width: int = 1):
        """Straight segment between two points."""

    @abstractmethod
    def fill_ellipse(self, rect: Region, color: Color = BLACK):
        """Filled ellipse inscribed in a rectangle."""

    @abstractmethod
    def draw_pie(self, cx: float, cy: float, radius: float,
                 start_angle: float, end_angle: float):
        """Outlined wedge filled with the selected pattern."""

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, size: int = 14, bold: bool = False):
        """Text anchored at its top-left corner."""

    @abstractmethod
    def measure_text(self, text: str, size: int = 14, bold: bool = False) -> Tuple[float, float]:
        """Return (width, height) of rendered text."""

    @abstractmethod
    def select_pattern(self, pattern: Optional[str]):
        """Select the fill pattern used by draw_pie and hatched rectangles."""


def draw_section_frame(surface: DrawingSurface, area: Region, title: str):
    """White background, bold title and a rule under it."""
    surface.fill_rect(area, WHITE)
    surface.draw_text(area.left + 10, area.top + 10, title, TITLE_FONT_SIZE, True)
    surface.draw_line(area.left + 10, area.top + 36, area.right - 10, area.top + 36, BLACK, 1)


@dataclass(frozen=True)
class DrawCall:
    op: str
    args: Dict[str, Any]


class RecordingSurface(DrawingSurface):
    """
    Surface that records every primitive instead of drawing it.

    Text is measured with a fixed advance per character, which is enough
    for layout decisions such as right alignment.
    """

    CHAR_WIDTH_RATIO = 0.55

    def __init__(self):
        self.calls: List[DrawCall] = []
        self.pattern: Optional[str] = None

    def _record(self, op: str, **args):
        self.calls.append(DrawCall(op, args))

    def of(self, op: str) -> List[DrawCall]:
        """All recorded calls of one operation, in call order."""
        return [call for call in self.calls if call.op == op]

    def texts(self) -> List[str]:
        return [call.args['text'] for call in self.of('draw_text')]

    def fill_rect(self, rect, color=WHITE):
        self._record('fill_rect', rect=rect, color=color)

    def draw_rect(self, rect, color=BLACK, hatched=False):
        self._record('draw_rect', rect=rect, color=color,
                     pattern=self.pattern if hatched else None)

    def draw_line(self, x1, y1, x2, y2, color=BLACK, width=1):
        self._record('draw_line', x1=x1, y1=y1, x2=x2, y2=y2, color=color, width=width)

    def fill_ellipse(self, rect, color=BLACK):
        self._record('fill_ellipse', rect=rect, color=color)

    def draw_pie(self, cx, cy, radius, start_angle, end_angle):
        self._record('draw_pie', cx=cx, cy=cy, radius=radius,
                     start_angle=start_angle, end_angle=end_angle, pattern=self.pattern)

    def draw_text(self, x, y, text, size=14, bold=False):
        self._record('draw_text', x=x, y=y, text=text, size=size, bold=bold)

    def measure_text(self, text, size=14, bold=False):
        return round(len(text) * size * self.CHAR_WIDTH_RATIO), size

    def select_pattern(self, pattern):
        self.pattern = pattern
        self._record('select_pattern', pattern=pattern)
