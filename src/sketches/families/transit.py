"""
Transit - subway-map strands threaded through colored station nodes.

RNG draw order (changing it changes every image for a given seed):
  1. palette index
  2. background/foreground coin flip
  3. nx, then ny
  4. node policy, column by column
  5. strand jitter, column by column
"""

import logging
from dataclasses import dataclass
from typing import List

from ..color import Color
from ..config import TransitConfig
from ..drawing import Drawing, Path
from ..geometry import Point
from ..grid import InsetGrid, draw_overlay
from ..nodes import Column, build_vline, get_policy, policy_summary, select_nodes
from ..smoothing import smooth_stroke, straight_stroke
from ..theme import segment_theme

logger = logging.getLogger(__name__)


@dataclass
class TransitLayout:
    theme_index: int
    background: Color
    foreground: Color
    pool: List[Color]
    grid: InsetGrid
    radius: float
    columns: List[Column]
    strands: List[List[Point]]  # empty where a column has no nodes


class TransitFamily:
    """Vertical bus wires with node discs, one strand per grid column."""

    name = "transit"
    description = "Subway-map strands through station nodes on an inset grid"

    def layout(self, opts, settings: TransitConfig) -> TransitLayout:
        width, height = opts.size()
        rng = opts.rng()

        index, theme = opts.themes().pick(rng)
        background, foreground, pool = segment_theme(rng, theme)

        nx = rng.integer(*settings.nx_range)
        ny = rng.integer(*settings.ny_range)
        grid = InsetGrid(width, height, nx, ny)
        r = min(grid.dx, grid.dy) / 3.0

        policy = get_policy(settings.policy, settings.density)
        columns = select_nodes(rng, grid, pool, policy)
        strands = [
            build_vline(rng, grid, r * settings.jitter, grid.x_of(i), nodes) if nodes else []
            for i, nodes in enumerate(columns)
        ]
        logger.debug("transit: theme=%d %r policy=%s %s",
                     index, grid, policy.name, policy_summary(columns))
        return TransitLayout(index, background, foreground, pool, grid, r, columns, strands)

    def render(self, opts, drawing: Drawing, settings: TransitConfig) -> None:
        lay = self.layout(opts, settings)
        grid = lay.grid

        drawing.paint(lay.background)
        if settings.show_grid:
            draw_overlay(drawing, grid, lay.foreground)

        wires = Path()
        for strand in lay.strands:
            if not strand:
                continue
            if settings.smooth:
                smooth_stroke(strand, wires)
            else:
                straight_stroke(strand, wires)

        dx, dy = settings.shadow_offset
        shadow = Color.black().with_alpha(settings.shadow_alpha)
        drawing.stroke(wires.translated(dx, dy), shadow, width=settings.line_width, cap="round")
        drawing.stroke(wires, lay.foreground, width=settings.line_width, cap="round")

        for i, nodes in enumerate(lay.columns):
            for node in nodes:
                disc = Path().circle(grid.x_of(i), grid.y_of(node.row), lay.radius)
                drawing.fill_and_stroke(disc, node.color, lay.foreground, width=settings.line_width)
