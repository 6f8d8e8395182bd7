"""
Series - a single random series on the centered grid, filled down from the top
edge like a hanging hill.

RNG draw order:
  1. palette index
  2. background coin flip
  3. nw, then nh
  4. one row per column, left to right
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..color import Color
from ..config import SeriesConfig
from ..drawing import Drawing, Path
from ..grid import GRID_DASH, GRID_LINE_WIDTH, CenteredGrid
from ..smoothing import hill_region
from ..theme import color_contrasting_with, select_background

logger = logging.getLogger(__name__)


@dataclass
class SeriesLayout:
    theme_index: int
    background: Color
    pool: List[Color]
    grid: CenteredGrid
    series: List[Tuple[int, int]]

    def points(self) -> List[Tuple[float, float]]:
        """Waypoints from the left edge, through every sample, to the right edge."""
        grid = self.grid
        pts = [(0.0, grid.y_of(self.series[0][1]))]
        pts.extend((grid.x_of(i), grid.y_of(j)) for i, j in self.series)
        pts.append((grid.width, grid.y_of(self.series[-1][1])))
        return pts


class SeriesFamily:
    """Translucent region hanging from the top edge down to a random series."""

    name = "series"
    description = "One random sample per column filled as a translucent hill"

    def layout(self, opts, settings: SeriesConfig) -> SeriesLayout:
        width, height = opts.size()
        rng = opts.rng()

        index, theme = opts.themes().pick(rng)
        background, pool = select_background(rng, theme)

        nw = rng.integer(*settings.nw_range)
        nh = rng.integer(*settings.nh_range)
        grid = CenteredGrid(width, height, nw, nh)
        series = grid.gen_series(rng)

        logger.debug("series: theme=%d %r bg=%s", index, grid, background)
        return SeriesLayout(index, background, pool, grid, series)

    def render(self, opts, drawing: Drawing, settings: SeriesConfig) -> None:
        lay = self.layout(opts, settings)
        grid = lay.grid

        drawing.paint(lay.background)
        if settings.show_grid:
            overlay = color_contrasting_with(lay.background).with_alpha(settings.grid_alpha)
            drawing.stroke(grid.overlay(), overlay, width=GRID_LINE_WIDTH, dash=GRID_DASH)

        points = lay.points()
        if settings.smooth:
            region = hill_region(points, baseline=0.0, pitch=grid.dw)
        else:
            region = Path().move_to(0.0, 0.0)
            for x, y in points:
                region.line_to(x, y)
            region.line_to(grid.width, 0.0).close()

        drawing.fill(region, lay.pool[0].with_alpha(settings.fill_alpha))
