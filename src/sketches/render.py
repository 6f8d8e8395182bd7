"""
Renderer - replay a recorded Drawing onto a Pillow image.

Curves are flattened into polylines. Opaque ops are drawn straight onto the
canvas; translucent ones go to a transparent overlay that is then
alpha-composited, so alpha is honoured the way a vector surface would.
Everything is drawn at SUPERSAMPLE times the target size and downsampled for
smooth edges.
"""

import logging
import math
from pathlib import Path as FilePath
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

from .config import FORMATS
from .drawing import ClosePath, CurveTo, Drawing, DrawOp, LineTo, MoveTo, Path
from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

SUPERSAMPLE = 2
CURVE_STEPS = 16

Polyline = List[Tuple[float, float]]

_T = np.linspace(0.0, 1.0, CURVE_STEPS + 1)[1:]


def _bezier(p0, p1, p2, p3) -> Polyline:
    t = _T[:, None]
    mt = 1.0 - t
    pts = (mt ** 3 * np.asarray(p0) + 3 * mt ** 2 * t * np.asarray(p1)
           + 3 * mt * t ** 2 * np.asarray(p2) + t ** 3 * np.asarray(p3))
    return [(float(x), float(y)) for x, y in pts]


def flatten(path: Path) -> List[Tuple[Polyline, bool]]:
    """Split path into (points, closed) subpaths with curves flattened."""
    subpaths: List[Tuple[Polyline, bool]] = []
    current: Polyline = []

    for cmd in path:
        if isinstance(cmd, MoveTo):
            if len(current) > 1:
                subpaths.append((current, False))
            current = [(cmd.x, cmd.y)]
        elif isinstance(cmd, LineTo):
            current.append((cmd.x, cmd.y))
        elif isinstance(cmd, CurveTo):
            current.extend(_bezier(current[-1], (cmd.x1, cmd.y1), (cmd.x2, cmd.y2), (cmd.x3, cmd.y3)))
        elif isinstance(cmd, ClosePath):
            if current:
                subpaths.append((current, True))
                # A new segment after close starts from the subpath's first point
                current = [current[0]]
    if len(current) > 1:
        subpaths.append((current, False))
    return subpaths


def dashed(points: Polyline, pattern: Sequence[float]) -> List[Polyline]:
    """Cut a polyline into the 'on' runs of a dash pattern."""
    if not pattern or sum(pattern) <= 0:
        return [points]
    runs: List[Polyline] = []
    index = 0
    remaining = pattern[0]
    on = True
    run: Polyline = [points[0]]

    for (ax, ay), (bx, by) in zip(points, points[1:]):
        seg = math.hypot(bx - ax, by - ay)
        pos = 0.0
        while seg - pos > remaining:
            pos += remaining
            t = pos / seg
            cut = (ax + (bx - ax) * t, ay + (by - ay) * t)
            if on:
                run.append(cut)
                runs.append(run)
            run = [cut]
            on = not on
            index = (index + 1) % len(pattern)
            remaining = pattern[index]
        remaining -= seg - pos
        if on:
            run.append((bx, by))
    if on and len(run) > 1:
        runs.append(run)
    return runs


def _scaled(points: Polyline, s: float) -> Polyline:
    return [(x * s, y * s) for x, y in points]


def _draw_op(draw: ImageDraw.ImageDraw, op: DrawOp, s: float) -> None:
    subpaths = [(_scaled(pts, s), closed) for pts, closed in flatten(op.path)]

    if op.fill is not None:
        for pts, _ in subpaths:
            if len(pts) >= 3:
                draw.polygon(pts, fill=op.fill.rgba())

    if op.stroke is not None:
        width = max(1, int(round(op.line_width * s)))
        color = op.stroke.rgba()
        dash = tuple(d * s for d in op.dash) if op.dash else None
        for pts, closed in subpaths:
            if closed:
                pts = pts + [pts[0]]
            for run in (dashed(pts, dash) if dash else [pts]):
                draw.line(run, fill=color, width=width, joint="curve")
                if op.cap == "round" and width > 2:
                    r = width / 2.0
                    for x, y in (run[0], run[-1]):
                        draw.ellipse([x - r, y - r, x + r, y + r], fill=color)


def _op_is_opaque(op: DrawOp) -> bool:
    return all(c is None or c.is_opaque for c in (op.fill, op.stroke))


def rasterize(drawing: Drawing, supersample: int = SUPERSAMPLE) -> Image.Image:
    """Render drawing to an RGBA image of drawing.width x drawing.height."""
    if supersample < 1:
        raise InvalidParameterError(f"supersample must be >= 1: {supersample}")
    size = (drawing.width * supersample, drawing.height * supersample)
    image = Image.new("RGBA", size, (0, 0, 0, 0))

    for op in drawing.ops:
        if _op_is_opaque(op):
            _draw_op(ImageDraw.Draw(image), op, supersample)
        else:
            overlay = Image.new("RGBA", size, (0, 0, 0, 0))
            _draw_op(ImageDraw.Draw(overlay), op, supersample)
            image = Image.alpha_composite(image, overlay)

    if supersample > 1:
        image = image.resize((drawing.width, drawing.height), Image.Resampling.LANCZOS)
    return image


def format_for(dest: Union[str, FilePath]) -> Optional[str]:
    """Output format implied by a file suffix, if any."""
    suffix = FilePath(dest).suffix.lower().lstrip(".")
    return suffix if suffix in FORMATS else None


def save(drawing: Drawing, dest: Union[str, FilePath], fmt: Optional[str] = None) -> FilePath:
    """Rasterize and write drawing as PNG or PDF. Returns the written path."""
    dest = FilePath(dest)
    fmt = (fmt or format_for(dest) or "png").lower()
    if fmt not in FORMATS:
        raise InvalidParameterError(f"unsupported format: {fmt}")

    dest.parent.mkdir(parents=True, exist_ok=True)
    image = rasterize(drawing)
    if fmt == "pdf":
        image.convert("RGB").save(dest, "PDF", resolution=72.0)
    else:
        image.save(dest, "PNG")
    logger.info("saved %s (%dx%d %s)", dest, drawing.width, drawing.height, fmt)
    return dest
