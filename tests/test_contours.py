import pytest

from textlines.contours import (
    ContourError,
    clipped_frontier,
    line_contour,
    line_contours,
)


def _row(row, start, stop):
    return [(row, col) for col in range(start, stop + 1)]


def test_clipped_frontier_keeps_columns_near_baseline():
    baseline = [(10, 50), (20, 50)]
    polyline = [(3, 0), (3, 7), (3, 10), (3, 15), (3, 20), (3, 23), (3, 40)]
    kept = clipped_frontier(polyline, baseline, margin=2)
    assert kept == [(3, 10), (3, 15), (3, 20)]


def test_clipped_frontier_all_within_wide_margin():
    baseline = [(10, 50), (20, 50)]
    polyline = _row(4, 5, 25)
    assert clipped_frontier(polyline, baseline, margin=100) == polyline


def test_clipped_frontier_default_margin_drops_far_points():
    baseline = [(100, 50), (120, 50)]
    polyline = [(1, 0), (1, 110), (1, 500)]
    assert clipped_frontier(polyline, baseline) == [(1, 110)]


def test_line_contour_rectangle_simplifies_to_corners():
    upper = _row(0, 0, 10)
    lower = _row(5, 0, 10)
    assert line_contour(upper, lower) == [(0, 0), (0, 10), (5, 10), (5, 0)]


def test_line_contour_empty_frontier_gives_empty():
    assert line_contour([], _row(5, 0, 10)) == []
    assert line_contour(_row(0, 0, 10), []) == []


def test_line_contour_points_come_from_input():
    upper = [(0, 0), (1, 3), (0, 6), (2, 9), (0, 12)]
    lower = [(8, 0), (7, 4), (9, 8), (8, 12)]
    contour = line_contour(upper, lower, approx_dist_error=3.0)
    assert 2 <= len(contour) <= len(upper) + len(lower)
    assert set(contour) <= set(upper) | set(lower)


def test_line_contour_truncates_float_points():
    upper = [(0.9, 0.2), (0.7, 10.8)]
    lower = [(5.6, 0.1), (5.2, 10.9)]
    contour = line_contour(upper, lower, approx_dist_error=0.0)
    assert set(contour) == {(0, 0), (0, 10), (5, 0), (5, 10)}


def test_line_contour_enclosing_rect_has_four_corners():
    upper = _row(0, 0, 10)
    lower = _row(5, 0, 10)
    corners = line_contour(upper, lower, enclosing_rect=True)
    assert len(corners) == 4
    for x, y in corners:
        assert -1 <= x <= 6
        assert -1 <= y <= 11


def test_line_contours_builds_one_contour_per_baseline():
    baseline = [(0, 3), (10, 3)]
    restrictions = [[baseline, baseline]]
    area_polylines = [[_row(0, 0, 10), _row(5, 0, 10)]]
    result = line_contours(area_polylines, restrictions)
    assert result == [[[(0, 0), (0, 10), (5, 10), (5, 0)]]]


def test_line_contours_empty_when_frontier_outside_baseline():
    baseline = [(0, 3), (10, 3)]
    restrictions = [[baseline, baseline]]
    area_polylines = [[_row(0, 200, 210), _row(5, 0, 10)]]
    assert line_contours(area_polylines, restrictions) == [[[]]]


def test_line_contours_missing_region_raises():
    baseline = [(0, 3), (10, 3)]
    with pytest.raises(ContourError):
        line_contours([], [[baseline, baseline]])


def test_line_contours_missing_lower_frontier_raises():
    baseline = [(0, 3), (10, 3)]
    with pytest.raises(ContourError):
        line_contours([[_row(0, 0, 10)]], [[baseline, baseline]])


def test_line_contours_region_without_baselines():
    assert line_contours([[]], [[]]) == [[]]