"""
Iso - isometric boxes standing on a floor lattice.

World axes: the floor is the y = 0 plane spanned by x (columns) and z (rows),
and boxes grow towards -y. Points are projected with the first two rows of
ISOMETRIC; the scene is then scaled and centered to fit the canvas.

Painter's order: boxes are painted farthest first along the view axis (the
cross product of the two projection rows, pointing into the screen) and only
faces whose outward normal points at the viewer are drawn.

RNG draw order:
  1. palette index
  2. column count, then row count
  3. per cell (row-major): fill chance, then height and color index if filled
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from ..color import Color
from ..config import IsoConfig
from ..drawing import Drawing, Path

logger = logging.getLogger(__name__)

_F = 1.0 / math.sqrt(6.0)

ISOMETRIC = np.array([
    [math.sqrt(3.0) * _F, _F, math.sqrt(2.0) * _F],
    [0.0, 2.0 * _F, -math.sqrt(2.0) * _F],
    [-math.sqrt(2.0) * _F, _F, math.sqrt(2.0) * _F],
])

VIEW_AXIS = np.cross(ISOMETRIC[0], ISOMETRIC[1])
VIEW_AXIS = VIEW_AXIS / np.linalg.norm(VIEW_AXIS)

# Fraction of the canvas left free around the fitted scene
MARGIN = 0.1
# Gap between neighbouring boxes as a fraction of the cell
INSET = 0.1

FLOOR_ALPHA = 0.6


def project(points) -> np.ndarray:
    """World (n, 3) points to unscaled screen (n, 2) points."""
    return np.asarray(points, dtype=float) @ ISOMETRIC[:2].T


def depth(points) -> float:
    """Mean distance along the view axis. Larger is farther away."""
    return float(np.mean(np.asarray(points, dtype=float) @ VIEW_AXIS))


def faces_towards_viewer(normals) -> np.ndarray:
    return np.asarray(normals, dtype=float) @ VIEW_AXIS < 0.0


@dataclass(frozen=True)
class Box:
    column: int
    row: int
    height: int   # in cells
    color: Color


def box_faces(x0: float, x1: float, z0: float, z1: float, h: float) -> List[Tuple[np.ndarray, np.ndarray]]:
    """(outward normal, 4x3 corners) for each face of an axis-aligned box on the floor."""
    top = -h
    return [
        (np.array([0.0, -1.0, 0.0]), np.array([[x0, top, z0], [x1, top, z0], [x1, top, z1], [x0, top, z1]])),
        (np.array([0.0, 1.0, 0.0]), np.array([[x0, 0.0, z0], [x0, 0.0, z1], [x1, 0.0, z1], [x1, 0.0, z0]])),
        (np.array([1.0, 0.0, 0.0]), np.array([[x1, 0.0, z0], [x1, 0.0, z1], [x1, top, z1], [x1, top, z0]])),
        (np.array([-1.0, 0.0, 0.0]), np.array([[x0, 0.0, z0], [x0, top, z0], [x0, top, z1], [x0, 0.0, z1]])),
        (np.array([0.0, 0.0, 1.0]), np.array([[x0, 0.0, z1], [x0, top, z1], [x1, top, z1], [x1, 0.0, z1]])),
        (np.array([0.0, 0.0, -1.0]), np.array([[x0, 0.0, z0], [x1, 0.0, z0], [x1, top, z0], [x0, top, z0]])),
    ]


def shade(color: Color, normal: np.ndarray) -> Color:
    """Tops are lit, z-facing walls fall into shadow."""
    axis = int(np.argmax(np.abs(normal)))
    if axis == 1:
        return color.brighter()
    if axis == 2:
        return color.darker()
    return color


@dataclass
class IsoLayout:
    theme_index: int
    columns: int
    rows: int
    cell: float
    boxes: List[Box]

    def box_corners(self, box: Box) -> Tuple[float, float, float, float, float]:
        gap = self.cell * INSET
        x0 = box.column * self.cell + gap
        z0 = box.row * self.cell + gap
        size = self.cell - 2.0 * gap
        return x0, x0 + size, z0, z0 + size, box.height * self.cell

    def scene_points(self) -> np.ndarray:
        """Every world point that has to fit on the canvas."""
        w = self.columns * self.cell
        d = self.rows * self.cell
        pts = [[0.0, 0.0, 0.0], [w, 0.0, 0.0], [0.0, 0.0, d], [w, 0.0, d]]
        for box in self.boxes:
            x0, x1, z0, z1, h = self.box_corners(box)
            for x in (x0, x1):
                for z in (z0, z1):
                    pts.append([x, -h, z])
        return np.array(pts)

    def fit(self, width: float, height: float) -> Tuple[float, np.ndarray]:
        """(scale, offset) mapping projected points into the canvas."""
        screen = project(self.scene_points())
        lo = screen.min(axis=0)
        hi = screen.max(axis=0)
        extent = np.maximum(hi - lo, 1e-9)
        scale = float(min(width * (1.0 - 2.0 * MARGIN) / extent[0],
                          height * (1.0 - 2.0 * MARGIN) / extent[1]))
        offset = np.array([width / 2.0, height / 2.0]) - (lo + hi) / 2.0 * scale
        return scale, offset

    def ordered_boxes(self) -> List[Box]:
        """Farthest first."""
        def key(box):
            x0, x1, z0, z1, h = self.box_corners(box)
            return depth([[(x0 + x1) / 2.0, -h / 2.0, (z0 + z1) / 2.0]])
        return sorted(self.boxes, key=key, reverse=True)


class IsoFamily:
    """Shaded isometric solids on a dotted floor."""

    name = "iso"
    description = "Isometric boxes standing on a floor lattice"

    def layout(self, opts, settings: IsoConfig) -> IsoLayout:
        rng = opts.rng()
        index, theme = opts.themes().pick(rng)

        columns = rng.integer(*settings.columns_range)
        rows = rng.integer(*settings.rows_range)
        boxes = []
        for row in range(rows):
            for column in range(columns):
                if not rng.chance(settings.fill_chance):
                    continue
                h = rng.integer(*settings.height_range)
                color = theme[rng.integer(1, len(theme))]
                boxes.append(Box(column, row, h, color))

        logger.debug("iso: theme=%d %dx%d boxes=%d", index, columns, rows, len(boxes))
        return IsoLayout(index, columns, rows, settings.cell, boxes)

    def render(self, opts, drawing: Drawing, settings: IsoConfig) -> None:
        lay = self.layout(opts, settings)
        scale, offset = lay.fit(drawing.width, drawing.height)

        def to_canvas(points) -> np.ndarray:
            return project(points) * scale + offset

        drawing.paint(Color.from_hex(settings.background))

        w = lay.columns * lay.cell
        d = lay.rows * lay.cell
        floor = Path()
        for i in range(lay.columns + 1):
            (ax, ay), (bx, by) = to_canvas([[i * lay.cell, 0.0, 0.0], [i * lay.cell, 0.0, d]])
            floor.move_to(ax, ay).line_to(bx, by)
        for j in range(lay.rows + 1):
            (ax, ay), (bx, by) = to_canvas([[0.0, 0.0, j * lay.cell], [w, 0.0, j * lay.cell]])
            floor.move_to(ax, ay).line_to(bx, by)
        drawing.stroke(floor, Color.white().with_alpha(FLOOR_ALPHA))

        for box in lay.ordered_boxes():
            faces = box_faces(*lay.box_corners(box))
            visible = faces_towards_viewer([n for n, _ in faces])
            outline = box.color.darker(2)
            for (normal, corners), show in zip(faces, visible):
                if not show:
                    continue
                face = Path().polyline([(float(x), float(y)) for x, y in to_canvas(corners)]).close()
                drawing.fill_and_stroke(face, shade(box.color, normal), outline)
