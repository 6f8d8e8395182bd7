"""
Node/Path Generators - populate grid columns with colored nodes and thread a
strand through each column.

A node is a (color, row) pick inside one column of an InsetGrid. Node lists
are strictly increasing in row. Policies draw from the RNG column by column,
left to right, with no memory between columns.

build_vline turns one column's nodes into the waypoints of a "bus wire": the
strand jitters sideways by +/- r at each node run, runs straight between
adjacent rows and steps back to the column line across gaps.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence

from .color import Color
from .errors import InvalidParameterError
from .geometry import Point
from .grid import InsetGrid

DEFAULT_DENSITY = 0.25


@dataclass(frozen=True)
class Node:
    color: Color
    row: int


Column = List[Node]


def _start_row(rng, ny: int) -> int:
    # First node lands in the top half
    return rng.integer(0, max(1, ny // 2))


class NodeSelectionPolicy(Protocol):
    """Strategy that fills one grid column with nodes."""

    name: str

    def column(self, rng, ny: int, colors: Sequence[Color]) -> Column:
        ...


class RandomWalkPolicy:
    """Walk down the column in random strides, one palette color per node.

    Stops at the bottom row, or when the pool runs out unless cycle_colors
    is set, in which case colors repeat from the start of the pool.
    """

    def __init__(self, cycle_colors: bool = False):
        self.cycle_colors = cycle_colors
        self.name = "walk-cycle" if cycle_colors else "walk"

    def column(self, rng, ny: int, colors: Sequence[Color]) -> Column:
        picks: Column = []
        if not colors:
            return picks
        row = _start_row(rng, ny)
        while row < ny and (self.cycle_colors or len(picks) < len(colors)):
            picks.append(Node(colors[len(picks) % len(colors)], row))
            row += rng.integer(1, max(2, ny))
        return picks


class BernoulliPolicy:
    """Always place a node at the start row, then each later row with p=density."""

    name = "bernoulli"

    def __init__(self, density: float = DEFAULT_DENSITY):
        if not 0.0 <= density <= 1.0:
            raise InvalidParameterError(f"density must be in [0, 1]: {density}")
        self.density = density

    def column(self, rng, ny: int, colors: Sequence[Color]) -> Column:
        picks: Column = []
        if not colors:
            return picks
        start = _start_row(rng, ny)
        picks.append(Node(colors[0], start))
        for row in range(start + 1, ny):
            if rng.chance(self.density):
                picks.append(Node(colors[len(picks) % len(colors)], row))
        return picks


def get_policy(name: str, density: Optional[float] = None) -> NodeSelectionPolicy:
    """Look up a policy by configuration name."""
    if name == "walk":
        return RandomWalkPolicy()
    if name == "walk-cycle":
        return RandomWalkPolicy(cycle_colors=True)
    if name == "bernoulli":
        return BernoulliPolicy(DEFAULT_DENSITY if density is None else density)
    raise InvalidParameterError(f"unknown node policy: {name}")


POLICY_NAMES = ("walk", "walk-cycle", "bernoulli")


def select_nodes(
    rng,
    grid: InsetGrid,
    colors: Sequence[Color],
    policy: Optional[NodeSelectionPolicy] = None,
) -> List[Column]:
    """Node list for every column, left to right."""
    policy = policy or RandomWalkPolicy()
    return [policy.column(rng, grid.ny, colors) for _ in grid.x_range()]


def build_vline(rng, grid: InsetGrid, r: float, x: float, nodes: Sequence[Node]) -> List[Point]:
    """Waypoints of the strand for one column.

    RNG use: one coin flip up front, then one per gap between nodes.
    """
    if not nodes:
        raise ValueError("build_vline needs at least one node")

    half = grid.dy / 2.0
    last_row = grid.ny - 1
    pts: List[Point] = []

    cx = x + rng.pick(-r, r)
    j = nodes[0].row
    if j == 0:
        pts.append(Point(cx, half))
        pts.append(Point(cx, grid.y_of(j)))
    else:
        y = grid.y_of(j)
        pts.append(Point(x, half))
        pts.append(Point(x, y - grid.dy))
        pts.append(Point(cx, y))

    for a, b in zip(nodes, nodes[1:]):
        if b.row - a.row == 1:
            pts.append(Point(cx, grid.y_of(b.row)))
        else:
            pts.append(Point(x, grid.y_of(a.row) + grid.dy))
            pts.append(Point(x, grid.y_of(b.row) - grid.dy))
            cx = x + rng.pick(-r, r)
            pts.append(Point(cx, grid.y_of(b.row)))

    j = nodes[-1].row
    if j == last_row:
        pts.append(Point(cx, grid.y_of(last_row) + half))
    else:
        pts.append(Point(x, grid.y_of(j) + grid.dy))
        pts.append(Point(x, grid.y_of(last_row) + half))
    return pts


def policy_summary(columns: Sequence[Column]) -> Dict[str, int]:
    """Node counts for logging."""
    counts = [len(c) for c in columns]
    return {
        "columns": len(counts),
        "nodes": sum(counts),
        "empty": sum(1 for n in counts if n == 0),
    }
