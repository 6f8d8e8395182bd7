"""
Grid Model - maps integer cell coordinates onto the canvas.

Two conventions, chosen explicitly by the generator family:

  CenteredGrid  dw = width / nw, sample x = dw/2 + dw*i
                One sample per column, cells fill the canvas edge to edge.

  InsetGrid     dx = width / (nx + 1), column x = dx * (i + 1)
                Leaves a half-pitch-or-more margin on all four sides.
                Used by the node-graph generators.
"""

from typing import List, Tuple

from .drawing import Path
from .errors import InvalidParameterError

GRID_LINE_WIDTH = 1.0
GRID_DASH = (1.0, 4.0)


def _check_dimensions(width: float, height: float, nx: int, ny: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidParameterError(f"grid canvas must be positive: {width}x{height}")
    if nx < 1 or ny < 1:
        raise InvalidParameterError(f"grid needs at least one cell per axis: {nx}x{ny}")


class CenteredGrid:
    """Centered-cell convention: each cell's center is its sample point."""

    def __init__(self, width: float, height: float, nw: int, nh: int):
        _check_dimensions(width, height, nw, nh)
        self.width = float(width)
        self.height = float(height)
        self.nw = nw
        self.nh = nh
        self.dw = self.width / nw
        self.dh = self.height / nh

    def x_of(self, i: int) -> float:
        return self.dw / 2.0 + self.dw * i

    def y_of(self, j: int) -> float:
        return self.dh / 2.0 + self.dh * j

    def columns(self) -> range:
        return range(self.nw)

    def gen_series(self, rng) -> List[Tuple[int, int]]:
        """One random row per column. Consumes nw integer draws, left to right."""
        return [(i, rng.integer(0, self.nh)) for i in self.columns()]

    def overlay(self) -> Path:
        """Vertical line through every column center, horizontal through every row."""
        path = Path()
        for i in range(self.nw):
            x = self.x_of(i)
            path.move_to(x, 0.0).line_to(x, self.height)
        for j in range(self.nh):
            y = self.y_of(j)
            path.move_to(0.0, y).line_to(self.width, y)
        return path

    def __eq__(self, other) -> bool:
        return isinstance(other, CenteredGrid) and (
            (self.width, self.height, self.nw, self.nh)
            == (other.width, other.height, other.nw, other.nh)
        )

    def __repr__(self) -> str:
        return f"CenteredGrid({self.nw}x{self.nh}, dw={self.dw:.3f}, dh={self.dh:.3f})"


class InsetGrid:
    """Inset convention: nx columns and ny rows strictly inside the canvas."""

    def __init__(self, width: float, height: float, nx: int, ny: int):
        _check_dimensions(width, height, nx, ny)
        self.width = float(width)
        self.height = float(height)
        self.nx = nx
        self.ny = ny
        self.dx = self.width / (nx + 1)
        self.dy = self.height / (ny + 1)

    def x_of(self, i: int) -> float:
        return (i + 1) * self.dx

    def y_of(self, j: int) -> float:
        return (j + 1) * self.dy

    def x_range(self) -> range:
        return range(self.nx)

    def y_range(self) -> range:
        return range(self.ny)

    def overlay(self) -> Path:
        path = Path()
        for i in self.x_range():
            x = self.x_of(i)
            path.move_to(x, 0.0).line_to(x, self.height)
        for j in self.y_range():
            y = self.y_of(j)
            path.move_to(0.0, y).line_to(self.width, y)
        return path

    def __eq__(self, other) -> bool:
        return isinstance(other, InsetGrid) and (
            (self.width, self.height, self.nx, self.ny)
            == (other.width, other.height, other.nx, other.ny)
        )

    def __repr__(self) -> str:
        return f"InsetGrid({self.nx}x{self.ny}, dx={self.dx:.3f}, dy={self.dy:.3f})"


def draw_overlay(drawing, grid, color) -> None:
    """Dashed debug overlay for either grid convention."""
    drawing.stroke(grid.overlay(), color, width=GRID_LINE_WIDTH, dash=GRID_DASH)
