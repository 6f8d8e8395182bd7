"""
Burst - a star with tendrils fanned out to both side edges.

Theme colors are used by position: 0 background, 1 core disc, 2 star,
3 tendrils.

RNG draw order:
  1. palette index
  2. outer radius factor (uniform)
  3. half point count
  4. tendril spacing
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from ..color import Color
from ..config import BurstConfig
from ..drawing import Drawing, Path

logger = logging.getLogger(__name__)

TAU = 2.0 * math.pi


@dataclass
class BurstLayout:
    theme_index: int
    theme: List[Color]
    center: Tuple[float, float]
    radius: float        # min(cx, cy)
    inner: float
    outer: float
    points: int          # always even
    spacing: float

    def star(self) -> Path:
        """Closed star alternating outer and inner vertices, first tip at 12 o'clock."""
        cx, cy = self.center
        dt = TAU / self.points
        path = Path()
        for i in range(self.points):
            tb = dt * i - TAU / 4.0
            ta = tb - dt / 2.0
            path.line_to(cx + self.outer * math.cos(ta), cy + self.outer * math.sin(ta))
            path.line_to(cx + self.inner * math.cos(tb), cy + self.inner * math.sin(tb))
        return path.close()

    def tendrils(self, width: float) -> Path:
        """Curves from the inner radius out to evenly spaced points on both edges."""
        cx, cy = self.center
        r = self.radius
        dt = TAU / self.points
        nh = self.points // 2
        top = cy - nh * self.spacing / 2.0
        path = Path()
        for i in range(nh + 1):
            t = dt * i - TAU / 4.0
            y = top + self.spacing * i
            path.move_to(cx + self.inner * math.cos(t), cy + self.inner * math.sin(t))
            path.curve_to(cx + 1.5 * r * math.cos(t), cy + 1.5 * r * math.sin(t),
                          width - r, y, width, y)
        for i in range(nh + 1):
            t = 0.75 * TAU - dt * i
            y = top + self.spacing * i
            path.move_to(cx + self.inner * math.cos(t), cy + self.inner * math.sin(t))
            path.curve_to(cx + 1.5 * r * math.cos(t), cy + 1.5 * r * math.sin(t),
                          r, y, 0.0, y)
        return path


class BurstFamily:
    """Star burst centered on the canvas."""

    name = "burst"
    description = "Star with a core disc and tendrils reaching both edges"

    def layout(self, opts, settings: BurstConfig) -> BurstLayout:
        width, height = opts.size()
        rng = opts.rng()

        index, theme = opts.themes().pick(rng)

        cx = width / 2.0
        cy = height / 2.0
        r = min(cx, cy)
        inner = r * settings.inner_ratio
        outer = inner * (1.1 + rng.uniform() * 0.4)

        n = 2 * rng.integer(*settings.half_points_range)
        spacing = float(rng.integer(*settings.spacing_range))

        logger.debug("burst: theme=%d points=%d outer=%.1f spacing=%.0f", index, n, outer, spacing)
        return BurstLayout(index, list(theme), (cx, cy), r, inner, outer, n, spacing)

    def render(self, opts, drawing: Drawing, settings: BurstConfig) -> None:
        lay = self.layout(opts, settings)
        theme = lay.theme
        cx, cy = lay.center

        drawing.paint(theme[0])
        drawing.fill(lay.star(), theme[2])
        drawing.stroke(lay.tendrils(drawing.width), theme[3], width=settings.tendril_width)
        drawing.fill(Path().circle(cx, cy, lay.inner), theme[1])
