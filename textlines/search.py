"""Search areas and restriction segments around text baselines.

Baselines are sequences of ``(x, y)`` points.  Each baseline bounds two
frontiers, the one above it and the one below it.  The restriction list of
a region therefore holds every baseline twice: entries ``2k`` and
``2k + 1`` belong to baseline ``k`` and are partners of each other.
"""

from __future__ import annotations

import math
from typing import Sequence

from textlines.geometry import Point, Rect, bounding_rect, clip_line

Baseline = Sequence[Sequence[int]]
Segment = tuple[Point, Point]

# Height of the band kept above a region limit as the line's own limits.
LINE_LIMIT_HEIGHT = 40


def contour_from_baseline(
    baseline: Baseline, up_dist: int, low_dist: int
) -> list[Point]:
    """Closed contour spanning ``up_dist`` above to ``low_dist`` below a baseline.

    The upper edge is walked right to left, then the lower edge left to
    right, so the result goes round the band once.
    """
    upper = [(int(x), int(y) - up_dist) for x, y in reversed(baseline)]
    lower = [(int(x), int(y) + low_dist) for x, y in baseline]
    return upper + lower


def relative_position(point: Sequence[int], baseline: Baseline) -> int:
    """Where ``point`` lies against the nearest point of ``baseline``.

    Returns -1 when it is above (smaller y), 1 when below and 0 when level.
    """
    if not baseline:
        raise ValueError("baseline has no points")
    nearest = min(baseline, key=lambda p: math.dist(point, p))
    if point[1] < nearest[1]:
        return -1
    if point[1] > nearest[1]:
        return 1
    return 0


def baseline_segments(
    baseline: Baseline, x_offset: int = 0, y_offset: int = 0
) -> list[Segment]:
    """Consecutive point pairs of a baseline, shifted by the offsets."""
    shifted = [(int(x) + x_offset, int(y) + y_offset) for x, y in baseline]
    return list(zip(shifted, shifted[1:]))


def search_areas_from_baselines(
    regions: Sequence[Baseline],
    baselines: Sequence[Sequence[Baseline]],
    up_dist: int,
    low_dist: int,
) -> list[list[Rect]]:
    """Search rectangle of every frontier, two per baseline, for each region."""
    areas: list[list[Rect]] = []
    for index in range(len(regions)):
        region_areas: list[Rect] = []
        for baseline in baselines[index]:
            rect = bounding_rect(contour_from_baseline(baseline, up_dist, low_dist))
            region_areas.extend((rect, rect))
        areas.append(region_areas)
    return areas


def padded_search_areas(
    regions: Sequence[Baseline],
    baselines: Sequence[Sequence[Baseline]],
    up_dist: int,
    low_dist: int,
    horizontal_padding: int = 0,
) -> list[list[Rect]]:
    """Search rectangles built from the gaps between consecutive baselines.

    The first area reaches ``up_dist`` above the first baseline; each later
    baseline adds one area below the previous baseline and one above itself;
    a final area closes below the last baseline.
    """

    def grow(height: int) -> int:
        return low_dist + (height if low_dist < height else 0)

    areas: list[list[Rect]] = []
    for index in range(len(regions)):
        region_areas: list[Rect] = []
        region_baselines = baselines[index]
        if region_baselines:
            first = bounding_rect(region_baselines[0])
            region_areas.append(
                Rect(
                    first.x - horizontal_padding,
                    first.y - up_dist,
                    first.width + horizontal_padding,
                    up_dist,
                )
            )
            last = first
            for baseline in region_baselines[1:]:
                current = bounding_rect(baseline)
                region_areas.append(
                    Rect(
                        last.x - horizontal_padding,
                        last.bottom,
                        last.width + horizontal_padding,
                        last.height + grow(last.height),
                    )
                )
                region_areas.append(
                    Rect(
                        current.x - horizontal_padding,
                        current.bottom - up_dist,
                        current.width + horizontal_padding,
                        up_dist,
                    )
                )
                last = current
            last_dist = last.y + grow(last.height)
            region_areas.append(
                Rect(
                    last.x - horizontal_padding,
                    last.y,
                    last.width + horizontal_padding,
                    abs(last.y - last_dist),
                )
            )
        areas.append(region_areas)
    return areas


def duplicate_restrictions(
    baselines: Sequence[Sequence[Baseline]],
) -> list[list[list[Point]]]:
    """Restriction lists in which every baseline appears twice in a row."""
    restrictions: list[list[list[Point]]] = []
    for region_baselines in baselines:
        region: list[list[Point]] = []
        for baseline in region_baselines:
            points = [(int(x), int(y)) for x, y in baseline]
            region.append(points)
            region.append(list(points))
        restrictions.append(region)
    return restrictions


def _partner(res_index: int) -> int:
    return res_index + 1 if res_index % 2 == 0 else res_index - 1


def neighbour_segments(
    restrictions: Sequence[Baseline],
    areas: Sequence[Rect],
    res_index: int,
    x_offset: int = 0,
    y_offset: int = 0,
) -> list[Segment]:
    """Segments of other baselines that cross the search area ``res_index``.

    The restriction itself and its partner are skipped.  Segments are
    returned clipped to the area.
    """
    area = areas[res_index]
    partner = _partner(res_index)
    found: list[Segment] = []
    for index, restriction in enumerate(restrictions):
        if index in (res_index, partner):
            continue
        for start, end in baseline_segments(restriction, x_offset, y_offset):
            clipped = clip_line(area, start, end)
            if clipped is not None:
                found.append(clipped)
    return found


def segments_above(
    restrictions: Sequence[Baseline],
    areas: Sequence[Rect],
    res_index: int,
    x_offset: int = 0,
    y_offset: int = 0,
) -> list[Segment]:
    """Neighbour segments lying wholly above restriction ``res_index``."""
    own = restrictions[res_index]
    return [
        segment
        for segment in neighbour_segments(restrictions, areas, res_index, x_offset, y_offset)
        if all(relative_position(p, own) < 0 for p in segment)
    ]


def segments_below(
    restrictions: Sequence[Baseline],
    areas: Sequence[Rect],
    res_index: int,
    x_offset: int = 0,
    y_offset: int = 0,
) -> list[Segment]:
    """Neighbour segments lying wholly below restriction ``res_index``."""
    own = restrictions[res_index]
    return [
        segment
        for segment in neighbour_segments(restrictions, areas, res_index, x_offset, y_offset)
        if all(relative_position(p, own) > 0 for p in segment)
    ]


def region_limits_to_search_regions(
    region_limits: Sequence[int], rows: int
) -> tuple[list[tuple[int, int]], list[tuple[int, int]]]:
    """Split an image of ``rows`` rows at the given limits.

    Returns the search regions, consecutive ``(top, bottom)`` row pairs with
    the last reaching the final row, and the line limits: a band of
    ``LINE_LIMIT_HEIGHT`` rows ending at each inner limit.
    """
    if not region_limits:
        raise ValueError("at least one region limit is needed")
    limits = list(region_limits)
    regions = list(zip(limits, limits[1:]))
    regions.append((limits[-1], rows - 1))
    line_limits = [(limit - LINE_LIMIT_HEIGHT, limit) for limit in limits[1:-1]]
    return regions, line_limits


def is_too_far_above(current: Rect, compared_to: Rect, up_dist: int) -> bool:
    """Whether ``compared_to`` ends at least ``up_dist`` rows above ``current``."""
    return compared_to.bottom - current.y <= -up_dist


def is_too_far_below(current: Rect, compared_to: Rect, low_dist: int) -> bool:
    """Whether ``compared_to`` starts at least ``low_dist`` rows below ``current``."""
    return current.bottom - compared_to.y <= -low_dist


def overlaps(current: Rect, compared_to: Rect) -> bool:
    """Whether an edge of ``current`` falls strictly inside ``compared_to`` horizontally."""
    if compared_to.x < current.x < compared_to.right:
        return True
    return compared_to.x < current.right < compared_to.right