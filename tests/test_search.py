import pytest

from textlines.geometry import Rect, bounding_rect, clip_line
from textlines.search import (
    LINE_LIMIT_HEIGHT,
    baseline_segments,
    contour_from_baseline,
    duplicate_restrictions,
    is_too_far_above,
    is_too_far_below,
    neighbour_segments,
    overlaps,
    padded_search_areas,
    region_limits_to_search_regions,
    relative_position,
    search_areas_from_baselines,
    segments_above,
    segments_below,
)

BASELINES = [[(0, 0), (10, 0)], [(0, 20), (10, 20)], [(0, 40), (10, 40)]]


def test_contour_from_baseline_goes_round():
    baseline = [(0, 10), (5, 10)]
    contour = contour_from_baseline(baseline, 3, 2)
    assert contour == [(5, 7), (0, 7), (0, 12), (5, 12)]


def test_contour_length_is_twice_baseline():
    baseline = [(0, 10), (3, 11), (7, 9)]
    assert len(contour_from_baseline(baseline, 5, 5)) == 2 * len(baseline)


def test_relative_position():
    baseline = [(0, 10), (10, 10), (20, 30)]
    assert relative_position((1, 5), baseline) == -1
    assert relative_position((1, 15), baseline) == 1
    assert relative_position((9, 10), baseline) == 0
    assert relative_position((20, 25), baseline) == -1


def test_relative_position_empty_baseline():
    with pytest.raises(ValueError):
        relative_position((0, 0), [])


def test_baseline_segments_with_offsets():
    segments = baseline_segments([(0, 0), (5, 1), (9, 2)], 1, -1)
    assert segments == [((1, -1), (6, 0)), ((6, 0), (10, 1))]
    assert baseline_segments([(3, 3)], 0, 0) == []


def test_search_areas_from_baselines_cover_contour():
    regions = [[(0, 0), (50, 60)], [(0, 0), (1, 1)]]
    baselines = [BASELINES, []]
    areas = search_areas_from_baselines(regions, baselines, 5, 3)
    assert len(areas) == 2
    assert areas[1] == []
    assert len(areas[0]) == 2 * len(BASELINES)
    for k, baseline in enumerate(BASELINES):
        contour = contour_from_baseline(baseline, 5, 3)
        assert areas[0][2 * k] == areas[0][2 * k + 1] == bounding_rect(contour)
        assert all(areas[0][2 * k].contains(p) for p in contour)


def test_padded_search_areas_structure():
    regions = [[(0, 0)], [(0, 0)]]
    areas = padded_search_areas(regions, [BASELINES, []], 10, 5, 2)
    assert areas[1] == []
    assert len(areas[0]) == 2 * len(BASELINES)
    first = bounding_rect(BASELINES[0])
    assert areas[0][0] == Rect(first.x - 2, first.y - 10, first.width + 2, 10)
    assert all(a.height >= 0 for a in areas[0])
    last = bounding_rect(BASELINES[-1])
    assert areas[0][-1].y == last.y


def test_duplicate_restrictions():
    restrictions = duplicate_restrictions([BASELINES])
    assert len(restrictions[0]) == 2 * len(BASELINES)
    assert restrictions[0][2] == restrictions[0][3] == list(BASELINES[1])


def _setup(area):
    restrictions = duplicate_restrictions([BASELINES])[0]
    areas = [area] * len(restrictions)
    return restrictions, areas


def test_neighbour_segments_skip_self_and_partner():
    restrictions, areas = _setup(Rect(0, -5, 20, 55))
    found = neighbour_segments(restrictions, areas, 2, 0, 0)
    assert len(found) == 4
    assert all(seg[0][1] in (0, 40) for seg in found)


def test_neighbour_segments_are_clipped():
    area = Rect(0, -5, 5, 55)
    restrictions, areas = _setup(area)
    found = neighbour_segments(restrictions, areas, 0, 0, 0)
    expected = clip_line(area, (0, 20), (10, 20))
    assert expected in found
    assert all(area.contains(p) for seg in found for p in seg)


def test_neighbour_segments_outside_area():
    restrictions, areas = _setup(Rect(100, 100, 5, 5))
    assert neighbour_segments(restrictions, areas, 1, 0, 0) == []


def test_segments_above_and_below():
    restrictions, areas = _setup(Rect(0, -5, 20, 55))
    above = segments_above(restrictions, areas, 3, 0, 0)
    below = segments_below(restrictions, areas, 3, 0, 0)
    assert len(above) == 2 and len(below) == 2
    assert all(p[1] < 20 for seg in above for p in seg)
    assert all(p[1] > 20 for seg in below for p in seg)


def test_region_limits_to_search_regions():
    regions, line_limits = region_limits_to_search_regions([0, 100, 200], 300)
    assert regions == [(0, 100), (100, 200), (200, 299)]
    assert line_limits == [(100 - LINE_LIMIT_HEIGHT, 100)]


def test_region_limits_single_and_empty():
    regions, line_limits = region_limits_to_search_regions([7], 50)
    assert regions == [(7, 49)]
    assert line_limits == []
    with pytest.raises(ValueError):
        region_limits_to_search_regions([], 50)


def test_is_too_far_above_and_below():
    current = Rect(0, 100, 10, 10)
    assert is_too_far_above(current, Rect(0, 0, 10, 10), 90)
    assert not is_too_far_above(current, Rect(0, 0, 10, 10), 91)
    assert is_too_far_below(current, Rect(0, 200, 10, 10), 90)
    assert not is_too_far_below(current, Rect(0, 200, 10, 10), 91)


def test_overlaps():
    assert overlaps(Rect(5, 0, 10, 1), Rect(0, 0, 10, 1))
    assert overlaps(Rect(-5, 0, 10, 1), Rect(0, 0, 10, 1))
    assert not overlaps(Rect(0, 0, 10, 1), Rect(0, 0, 10, 1))
    assert not overlaps(Rect(20, 0, 5, 1), Rect(0, 0, 10, 1))