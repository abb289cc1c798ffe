"""Closed outlines of text lines built from their two frontier polylines.

Frontier polylines use ``(row, column)`` points.  The restriction list of a
region holds every baseline twice, as ``(x, y)`` points, so restriction
``2k`` is paired with the frontiers ``2k`` (above the line) and ``2k + 1``
(below the line).
"""

from __future__ import annotations

from typing import Sequence

from textlines.geometry import (
    approx_poly_dp,
    arc_length,
    bounding_rect,
    convex_hull,
    min_area_rect_corners,
)

Point = tuple[int, int]
Polyline = Sequence[Sequence[float]]

# Columns kept on either side of a baseline when clipping a frontier.
CLIP_MARGIN = 15
# Share of the hull perimeter used as the simplification tolerance.
AUTO_TOLERANCE_RATIO = 0.005
# Value of the tolerance that asks for it to be derived from the hull.
AUTO_TOLERANCE = -1


class ContourError(Exception):
    """Raised when the frontiers do not match the baselines they belong to."""


def clipped_frontier(
    polyline: Polyline, baseline: Sequence[Sequence[int]], margin: int = CLIP_MARGIN
) -> list[tuple]:
    """Points of ``polyline`` whose column lies near the extent of ``baseline``.

    A point is kept when its column is within ``margin`` of the baseline's
    bounding rectangle.
    """
    rect = bounding_rect(baseline)
    low = rect.x - margin
    high = rect.x + rect.width + margin
    return [tuple(p) for p in polyline if low <= p[1] <= high]


def _to_int_points(points: Polyline) -> list[Point]:
    return [(int(p[0]), int(p[1])) for p in points]


def line_contour(
    upper: Polyline,
    lower: Polyline,
    approx_dist_error: float = AUTO_TOLERANCE,
    enclosing_rect: bool = False,
) -> list[Point]:
    """Simplified closed outline bounded by ``upper`` and ``lower``.

    The outline walks the upper frontier forwards and the lower one back.
    With ``approx_dist_error`` of -1 the tolerance is taken from the convex
    hull's perimeter.  With ``enclosing_rect`` the outline is replaced by the
    four corners of its smallest rotated enclosing rectangle.  An empty list
    is returned when either frontier is empty.
    """
    upper_points = _to_int_points(upper)
    lower_points = _to_int_points(lower)
    if not upper_points or not lower_points:
        return []
    contour = upper_points + lower_points[::-1]

    tolerance = approx_dist_error
    if approx_dist_error == AUTO_TOLERANCE:
        tolerance = arc_length(convex_hull(contour), True) * AUTO_TOLERANCE_RATIO

    simplified = [(int(x), int(y)) for x, y in approx_poly_dp(contour, tolerance, True)]
    if enclosing_rect:
        simplified = [(int(x), int(y)) for x, y in min_area_rect_corners(simplified)]
    return simplified


def line_contours(
    area_polylines: Sequence[Sequence[Polyline]],
    restrictions: Sequence[Sequence[Sequence[Sequence[int]]]],
    approx_dist_error: float = AUTO_TOLERANCE,
    enclosing_rect: bool = False,
) -> list[list[list[Point]]]:
    """Outline of every text line in every region.

    Raises :class:`ContourError` when a region or one of its frontiers is
    missing for a baseline.
    """
    result: list[list[list[Point]]] = []
    for region_index, region_restrictions in enumerate(restrictions):
        if len(area_polylines) <= region_index:
            raise ContourError("region mismatch between baselines and polylines")
        polylines = area_polylines[region_index]
        contours: list[list[Point]] = []
        for line_index in range(0, len(region_restrictions), 2):
            if len(polylines) <= line_index + 1:
                raise ContourError(
                    f"in region {region_index} no frontier pair for line {line_index}"
                )
            baseline = region_restrictions[line_index]
            upper = clipped_frontier(polylines[line_index], baseline)
            lower = clipped_frontier(polylines[line_index + 1], baseline)
            contours.append(line_contour(upper, lower, approx_dist_error, enclosing_rect))
        result.append(contours)
    return result