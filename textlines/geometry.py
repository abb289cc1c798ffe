"""Planar geometry helpers on integer image coordinates.

Points are ``(x, y)`` pairs.  Rectangles follow the usual raster
convention: a rectangle covers the pixels ``x <= px < x + width`` and
``y <= py < y + height``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

Point = tuple[int, int]
FloatPoint = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with its top-left corner at ``(x, y)``."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """First column past the rectangle."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """First row past the rectangle."""
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, point: Sequence[float]) -> bool:
        """Whether ``point`` lies inside the rectangle (right/bottom open)."""
        px, py = point
        return self.x <= px < self.right and self.y <= py < self.bottom


def _as_int_point(point: Sequence[float]) -> Point:
    return int(round(point[0])), int(round(point[1]))


def bounding_rect(points: Iterable[Sequence[int]]) -> Rect:
    """Smallest rectangle holding every pixel in ``points``.

    An empty input gives an empty rectangle at the origin.
    """
    pts = [_as_int_point(p) for p in points]
    if not pts:
        return Rect(0, 0, 0, 0)
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    min_x, min_y = min(xs), min(ys)
    return Rect(min_x, min_y, max(xs) - min_x + 1, max(ys) - min_y + 1)


def _outcode(x: int, y: int, right: int, bottom: int) -> int:
    return (x < 0) + (x > right) * 2 + (y < 0) * 4 + (y > bottom) * 8


def clip_line(
    rect: Rect, start: Sequence[int], end: Sequence[int]
) -> tuple[Point, Point] | None:
    """Clip the segment ``start``-``end`` to ``rect``.

    Returns the clipped end points, or ``None`` when the segment lies
    wholly outside the rectangle.
    """
    if rect.width <= 0 or rect.height <= 0:
        return None
    x1, y1 = _as_int_point(start)
    x2, y2 = _as_int_point(end)
    x1 -= rect.x
    x2 -= rect.x
    y1 -= rect.y
    y2 -= rect.y
    right = rect.width - 1
    bottom = rect.height - 1

    c1 = _outcode(x1, y1, right, bottom)
    c2 = _outcode(x2, y2, right, bottom)

    if (c1 & c2) == 0 and (c1 | c2) != 0:
        if c1 & 12:
            a = 0 if c1 < 8 else bottom
            x1 += int(float(a - y1) * (x2 - x1) / (y2 - y1))
            y1 = a
            c1 = (x1 < 0) + (x1 > right) * 2
        if c2 & 12:
            a = 0 if c2 < 8 else bottom
            x2 += int(float(a - y2) * (x2 - x1) / (y2 - y1))
            y2 = a
            c2 = (x2 < 0) + (x2 > right) * 2
        if (c1 & c2) == 0 and (c1 | c2) != 0:
            if c1:
                a = 0 if c1 == 1 else right
                y1 += int(float(a - x1) * (y2 - y1) / (x2 - x1))
                x1 = a
                c1 = 0
            if c2:
                a = 0 if c2 == 1 else right
                y2 += int(float(a - x2) * (y2 - y1) / (x2 - x1))
                x2 = a
                c2 = 0

    if c1 | c2:
        return None
    return (x1 + rect.x, y1 + rect.y), (x2 + rect.x, y2 + rect.y)


def line_points(start: Sequence[float], end: Sequence[float]) -> list[Point]:
    """Pixels of the 8-connected raster line from ``start`` to ``end``.

    Coordinates are rounded to the nearest pixel first; both end points
    are included.
    """
    x, y = _as_int_point(start)
    x2, y2 = _as_int_point(end)
    dx, dy = x2 - x, y2 - y
    step_x = -1 if dx < 0 else 1
    step_y = -1 if dy < 0 else 1
    dx, dy = abs(dx), abs(dy)

    vertical = dy > dx
    if vertical:
        dx, dy = dy, dx

    err = dx - 2 * dy
    points = [(x, y)]
    for _ in range(dx):
        if err < 0:
            err += 2 * dx
            if vertical:
                x += step_x
            else:
                y += step_y
        err -= 2 * dy
        if vertical:
            y += step_y
        else:
            x += step_x
        points.append((x, y))
    return points


def _cross(o: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Iterable[Sequence[float]]) -> list[tuple]:
    """Vertices of the convex hull, without collinear points."""
    pts = sorted({(p[0], p[1]) for p in points})
    if len(pts) <= 2:
        return pts

    def half(seq: Iterable[tuple]) -> list[tuple]:
        chain: list[tuple] = []
        for p in seq:
            while len(chain) >= 2 and _cross(chain[-2], chain[-1], p) <= 0:
                chain.pop()
            chain.append(p)
        return chain

    lower = half(pts)
    upper = half(reversed(pts))
    hull = lower[:-1] + upper[:-1]
    return hull


def arc_length(points: Sequence[Sequence[float]], closed: bool) -> float:
    """Length of the polyline, including the closing edge when ``closed``."""
    pts = list(points)
    if len(pts) < 2:
        return 0.0
    total = sum(math.dist(a, b) for a, b in zip(pts, pts[1:]))
    if closed:
        total += math.dist(pts[-1], pts[0])
    return total


def _line_distance(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    length = math.dist(a, b)
    if length == 0:
        return math.dist(p, a)
    return abs(_cross(a, b, p)) / length


def _simplify_chain(chain: list[tuple], epsilon: float) -> list[tuple]:
    """Douglas-Peucker on an open chain; both ends are kept."""
    if len(chain) <= 2:
        return list(chain)
    keep = [False] * len(chain)
    keep[0] = keep[-1] = True
    stack = [(0, len(chain) - 1)]
    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        best_index, best_dist = first, -1.0
        for index in range(first + 1, last):
            dist = _line_distance(chain[index], chain[first], chain[last])
            if dist > best_dist:
                best_index, best_dist = index, dist
        if best_dist > epsilon:
            keep[best_index] = True
            stack.append((first, best_index))
            stack.append((best_index, last))
    return [p for p, kept in zip(chain, keep) if kept]


def approx_poly_dp(
    points: Sequence[Sequence[float]], epsilon: float, closed: bool
) -> list[tuple]:
    """Simplify a polyline so no dropped point is farther than ``epsilon``."""
    pts = [(p[0], p[1]) for p in points]
    if len(pts) <= 2:
        return pts
    if not closed:
        return _simplify_chain(pts, epsilon)

    origin = pts[0]
    far = max(range(len(pts)), key=lambda i: math.dist(pts[i], origin))
    if far == 0:
        return [origin]
    first = _simplify_chain(pts[: far + 1], epsilon)
    second = _simplify_chain(pts[far:] + [origin], epsilon)
    return first + second[1:-1]


def min_area_rect_corners(points: Iterable[Sequence[float]]) -> list[FloatPoint]:
    """Corners of the smallest-area rotated rectangle enclosing ``points``.

    The four corners are returned in order around the rectangle.
    """
    hull = convex_hull(points)
    if not hull:
        raise ValueError("cannot enclose an empty point set")
    if len(hull) == 1:
        p = (float(hull[0][0]), float(hull[0][1]))
        return [p, p, p, p]

    best: tuple[float, tuple] | None = None
    for a, b in zip(hull, hull[1:] + hull[:1]):
        length = math.dist(a, b)
        if length == 0:
            continue
        ux, uy = (b[0] - a[0]) / length, (b[1] - a[1]) / length
        vx, vy = -uy, ux
        us = [p[0] * ux + p[1] * uy for p in hull]
        vs = [p[0] * vx + p[1] * vy for p in hull]
        min_u, max_u, min_v, max_v = min(us), max(us), min(vs), max(vs)
        area = (max_u - min_u) * (max_v - min_v)
        if best is None or area < best[0]:
            best = (area, (ux, uy, vx, vy, min_u, max_u, min_v, max_v))

    assert best is not None
    ux, uy, vx, vy, min_u, max_u, min_v, max_v = best[1]

    def corner(u: float, v: float) -> FloatPoint:
        return (u * ux + v * vx, u * uy + v * vy)

    return [
        corner(min_u, min_v),
        corner(max_u, min_v),
        corner(max_u, max_v),
        corner(min_u, max_v),
    ]