"""
Curve Smoothing - turn waypoint polylines into renderable Bezier geometry.

Stroke form: S-curves that ease between rows. Each segment whose endpoints
share an x is a straight line; any other segment is a cubic with both control
points on the segment's vertical midpoint.

Area form: closed regions for hills and burst silhouettes. Shallow
transitions get one cubic with half-pitch control offsets. Steep transitions
(|dy| > |dx| and |dy| >= pitch) are built from quarter-circle corners of
radius pitch/2 joined by a straight run:

  - step:     |dx| >= pitch, the run sits midway between the endpoints
  - teardrop: |dx| <  pitch, the strand bulges out by pitch/2 in its current
              heading and the mirrored corner brings it back to the endpoint
"""

from typing import List, Optional, Sequence, Tuple

from .drawing import KAPPA, Path

EPSILON = 0.001

PointLike = Tuple[float, float]


def _xy(p) -> PointLike:
    x, y = p
    return float(x), float(y)


def _sign(v: float) -> float:
    if v > 0:
        return 1.0
    if v < 0:
        return -1.0
    return 0.0


def smooth_stroke(points: Sequence, path: Optional[Path] = None) -> Path:
    """Append the stroke form of points to path (a new Path by default)."""
    if not points:
        raise ValueError("smooth_stroke needs at least one waypoint")
    path = path if path is not None else Path()
    xa, ya = _xy(points[0])
    path.move_to(xa, ya)
    for p in points[1:]:
        xb, yb = _xy(p)
        if abs(xa - xb) < EPSILON:
            path.line_to(xb, yb)
        else:
            cy = (yb - ya) / 2.0
            path.curve_to(xa, ya + cy, xb, ya + cy, xb, yb)
        xa, ya = xb, yb
    return path


def straight_stroke(points: Sequence, path: Optional[Path] = None) -> Path:
    """Unsmoothed polyline through points."""
    path = path if path is not None else Path()
    return path.polyline([_xy(p) for p in points])


def default_pitch(points: Sequence) -> float:
    """Largest horizontal step between consecutive waypoints."""
    xs = [_xy(p)[0] for p in points]
    return max((abs(b - a) for a, b in zip(xs, xs[1:])), default=0.0)


def _line_to(path: Path, x: float, y: float) -> None:
    cx, cy = path.current_point
    if abs(cx - x) >= EPSILON or abs(cy - y) >= EPSILON:
        path.line_to(x, y)


def _step(path: Path, a: PointLike, b: PointLike, r: float, c: float) -> None:
    (ax, ay), (bx, by) = a, b
    sx = _sign(bx - ax)
    sy = _sign(by - ay)
    xm = (ax + bx) / 2.0
    x0 = xm - sx * r
    _line_to(path, x0, ay)
    path.curve_to(x0 + sx * c, ay, xm, ay + sy * (r - c), xm, ay + sy * r)
    _line_to(path, xm, by - sy * r)
    path.curve_to(xm, by - sy * (r - c), xm + sx * (r - c), by, xm + sx * r, by)
    _line_to(path, bx, by)


def _teardrop(path: Path, a: PointLike, b: PointLike, r: float, c: float, sx: float) -> None:
    (ax, ay), (bx, by) = a, b
    sy = _sign(by - ay)
    path.curve_to(ax + sx * c, ay, ax + sx * r, ay + sy * (r - c), ax + sx * r, ay + sy * r)
    _line_to(path, bx + sx * r, by - sy * r)
    path.curve_to(bx + sx * r, by - sy * (r - c), bx + sx * c, by, bx, by)


def _area_segments(path: Path, points: List[PointLike], pitch: float) -> None:
    r = pitch / 2.0
    c = r * KAPPA
    heading = 1.0
    for a, b in zip(points, points[1:]):
        dx = b[0] - a[0]
        dy = b[1] - a[1]
        if pitch >= EPSILON and abs(dy) > abs(dx) and abs(dy) >= pitch:
            if abs(dx) >= pitch:
                _step(path, a, b, r, c)
                heading = _sign(dx)
            else:
                _teardrop(path, a, b, r, c, heading)
                heading = -heading
        elif pitch < EPSILON:
            _line_to(path, b[0], b[1])
        else:
            sx = _sign(dx)
            h = min(pitch, abs(dx)) / 2.0
            path.curve_to(a[0] + sx * h, a[1], b[0] - sx * h, b[1], b[0], b[1])
            if sx:
                heading = sx


def area_path(points: Sequence, pitch: Optional[float] = None) -> Path:
    """Closed area form through points.

    pitch defaults to the widest horizontal step between waypoints.
    """
    if not points:
        raise ValueError("area_path needs at least one waypoint")
    pts = [_xy(p) for p in points]
    if pitch is None:
        pitch = default_pitch(pts)
    elif pitch <= 0:
        raise ValueError(f"pitch must be positive: {pitch}")
    path = Path().move_to(*pts[0])
    _area_segments(path, pts, pitch)
    return path.close()


def hill_region(points: Sequence, baseline: float, pitch: Optional[float] = None) -> Path:
    """Area form closed against a horizontal baseline (e.g. a canvas edge)."""
    if not points:
        raise ValueError("hill_region needs at least one waypoint")
    pts = [_xy(p) for p in points]
    if pitch is None:
        pitch = default_pitch(pts)
    elif pitch <= 0:
        raise ValueError(f"pitch must be positive: {pitch}")
    path = Path().move_to(pts[0][0], baseline)
    path.line_to(*pts[0])
    _area_segments(path, pts, pitch)
    path.line_to(pts[-1][0], baseline)
    return path.close()
