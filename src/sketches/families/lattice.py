"""
Lattice - solid vertical rules crossed by dashed horizontal ones.

RNG draw order: palette index, nx, ny.
"""

import logging

from ..config import LatticeConfig
from ..drawing import Drawing, Path
from ..grid import CenteredGrid

logger = logging.getLogger(__name__)


class LatticeFamily:
    name = "lattice"
    description = "Vertical rules crossed by dashed horizontals on the centered grid"

    def layout(self, opts, settings: LatticeConfig):
        """(theme index, theme, grid)."""
        width, height = opts.size()
        rng = opts.rng()

        index, theme = opts.themes().pick(rng)
        nx = rng.integer(*settings.nx_range)
        ny = rng.integer(*settings.ny_range)
        grid = CenteredGrid(width, height, nx, ny)
        logger.debug("lattice: theme=%d %r", index, grid)
        return index, list(theme), grid

    def render(self, opts, drawing: Drawing, settings: LatticeConfig) -> None:
        _, theme, grid = self.layout(opts, settings)

        verticals = Path()
        for i in grid.columns():
            x = grid.x_of(i)
            verticals.move_to(x, 0.0).line_to(x, grid.height)

        horizontals = Path()
        for j in range(grid.nh):
            y = grid.y_of(j)
            horizontals.move_to(0.0, y).line_to(grid.width, y)

        drawing.paint(theme[0])
        drawing.stroke(verticals, theme[1], width=settings.line_width)
        drawing.stroke(horizontals, theme[1], width=settings.line_width, dash=settings.dash)
