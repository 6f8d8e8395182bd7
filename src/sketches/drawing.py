"""
Drawing model - surface-independent record of path construction and paint.

Sketches never touch pixels. They build Paths out of move/line/curve/close
commands and append fill/stroke requests carrying resolved Colors to a
Drawing. A renderer (see render.py) replays the ops onto a real surface.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .color import Color

# Control-point ratio for approximating a quarter circle with one cubic Bezier
KAPPA = 0.5523

LINE_CAPS = ("butt", "round")


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CurveTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float


@dataclass(frozen=True)
class ClosePath:
    pass


Command = Union[MoveTo, LineTo, CurveTo, ClosePath]


def _moved(cmd: Command, dx: float, dy: float) -> Command:
    if isinstance(cmd, MoveTo):
        return MoveTo(cmd.x + dx, cmd.y + dy)
    if isinstance(cmd, LineTo):
        return LineTo(cmd.x + dx, cmd.y + dy)
    if isinstance(cmd, CurveTo):
        return CurveTo(
            cmd.x1 + dx, cmd.y1 + dy,
            cmd.x2 + dx, cmd.y2 + dy,
            cmd.x3 + dx, cmd.y3 + dy,
        )
    return cmd


class Path:
    """An ordered list of path-construction commands.

    Like a cairo path, line_to without a current point starts a new subpath.
    """

    def __init__(self, commands: Optional[Iterable[Command]] = None):
        self.commands: List[Command] = list(commands or [])

    # --- Construction ---

    def move_to(self, x: float, y: float) -> "Path":
        self.commands.append(MoveTo(x, y))
        return self

    def line_to(self, x: float, y: float) -> "Path":
        if self.current_point is None:
            return self.move_to(x, y)
        self.commands.append(LineTo(x, y))
        return self

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> "Path":
        if self.current_point is None:
            self.move_to(x1, y1)
        self.commands.append(CurveTo(x1, y1, x2, y2, x3, y3))
        return self

    def close(self) -> "Path":
        self.commands.append(ClosePath())
        return self

    def polyline(self, points: Sequence[Tuple[float, float]]) -> "Path":
        """Straight segments through points, starting a new subpath."""
        if not points:
            raise ValueError("polyline needs at least one point")
        x, y = points[0]
        self.move_to(x, y)
        for x, y in points[1:]:
            self.line_to(x, y)
        return self

    def rectangle(self, x: float, y: float, w: float, h: float) -> "Path":
        self.move_to(x, y)
        self.line_to(x + w, y)
        self.line_to(x + w, y + h)
        self.line_to(x, y + h)
        return self.close()

    def circle(self, cx: float, cy: float, r: float) -> "Path":
        """Closed circle from four quarter-arc Beziers."""
        c = r * KAPPA
        self.move_to(cx + r, cy)
        self.curve_to(cx + r, cy + c, cx + c, cy + r, cx, cy + r)
        self.curve_to(cx - c, cy + r, cx - r, cy + c, cx - r, cy)
        self.curve_to(cx - r, cy - c, cx - c, cy - r, cx, cy - r)
        self.curve_to(cx + c, cy - r, cx + r, cy - c, cx + r, cy)
        return self.close()

    def extend(self, other: "Path") -> "Path":
        self.commands.extend(other.commands)
        return self

    def translated(self, dx: float, dy: float) -> "Path":
        return Path(_moved(cmd, dx, dy) for cmd in self.commands)

    # --- Inspection ---

    @property
    def current_point(self) -> Optional[Tuple[float, float]]:
        start = None
        point = None
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                start = point = (cmd.x, cmd.y)
            elif isinstance(cmd, LineTo):
                point = (cmd.x, cmd.y)
            elif isinstance(cmd, CurveTo):
                point = (cmd.x3, cmd.y3)
            else:
                point = start
        return point

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self):
        return iter(self.commands)

    def __eq__(self, other) -> bool:
        return isinstance(other, Path) and self.commands == other.commands

    def __repr__(self) -> str:
        return f"Path({len(self.commands)} commands)"


@dataclass
class DrawOp:
    """One paint request: fill and/or stroke a path."""

    path: Path
    fill: Optional[Color] = None
    stroke: Optional[Color] = None
    line_width: float = 1.0
    dash: Optional[Tuple[float, ...]] = None
    cap: str = "butt"


@dataclass
class Drawing:
    """Ordered paint requests for a width x height canvas."""

    width: int
    height: int
    ops: List[DrawOp] = field(default_factory=list)

    def paint(self, color: Color) -> None:
        """Flood the whole canvas."""
        self.fill(Path().rectangle(0.0, 0.0, self.width, self.height), color)

    def fill(self, path: Path, color: Color) -> None:
        self.ops.append(DrawOp(path=path, fill=color))

    def stroke(
        self,
        path: Path,
        color: Color,
        width: float = 1.0,
        dash: Optional[Sequence[float]] = None,
        cap: str = "butt",
    ) -> None:
        if cap not in LINE_CAPS:
            raise ValueError(f"unknown line cap: {cap}")
        self.ops.append(DrawOp(
            path=path,
            stroke=color,
            line_width=width,
            dash=tuple(dash) if dash else None,
            cap=cap,
        ))

    def fill_and_stroke(self, path: Path, fill: Color, stroke: Color, width: float = 1.0) -> None:
        self.ops.append(DrawOp(path=path, fill=fill, stroke=stroke, line_width=width))
