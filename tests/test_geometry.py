import math

import pytest

from flightpath_planner.core.geometry import (
    bounding_box,
    centroid,
    distance,
    interpolate,
    normalize_polygon,
    offset_point,
    path_length,
    polygon_intersections,
    rotate,
    rotate_all,
    segment_intersection,
)


def test_distance_one_degree_of_latitude():
    expected = 6_371_000.0 * math.pi / 180.0
    assert distance((0.0, 0.0), (0.0, 1.0)) == pytest.approx(expected, rel=1e-9)
    assert distance((10.0, 45.0), (10.0, 45.0)) == 0.0


def test_path_length_sums_segments():
    assert path_length([]) == 0.0
    assert path_length([(0.0, 0.0)]) == 0.0
    points = [(0.0, 0.0), (0.0, 1.0), (0.0, 2.0)]
    assert path_length(points) == pytest.approx(2 * distance((0.0, 0.0), (0.0, 1.0)))


def test_bounding_box_and_empty_guard():
    bbox = bounding_box([(1.0, 5.0), (-2.0, 3.0), (4.0, -1.0)])
    assert bbox.minimum == (-2.0, -1.0)
    assert bbox.maximum == (4.0, 5.0)
    with pytest.raises(ValueError):
        bounding_box([])


def test_segment_intersection_cases():
    assert segment_intersection((0, 0), (2, 2), (0, 2), (2, 0)) == pytest.approx((1.0, 1.0))
    # parallel
    assert segment_intersection((0, 0), (1, 0), (0, 1), (1, 1)) is None
    # lines cross outside the segment bounds
    assert segment_intersection((0, 0), (1, 0), (2, -1), (2, 1)) is None


def test_polygon_intersections_include_closing_edge():
    square = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]
    hits = polygon_intersections(((-1.0, 0.5), (2.0, 0.5)), square)
    assert [hit.edge_index for hit in hits] == [0, 2]
    assert hits[0].point == pytest.approx((0.0, 0.5))
    assert hits[1].point == pytest.approx((1.0, 0.5))

    # the probe only reaches the closing edge (vertex 2 -> vertex 0)
    triangle = [(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)]
    hits = polygon_intersections(((1.0, -1.0), (1.0, 0.5)), triangle)
    assert [hit.edge_index for hit in hits] == [2]
    assert hits[0].point == pytest.approx((1.0, 0.0))


def test_polygon_intersections_need_two_vertices():
    assert polygon_intersections(((0.0, 0.0), (1.0, 0.0)), [(0.5, 0.0)]) == []


def test_normalize_polygon_is_idempotent():
    closed = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (0.0, 0.0)]
    once = normalize_polygon(closed)
    assert once == [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    assert normalize_polygon(once) == once
    assert normalize_polygon([]) == []


def test_centroid_is_vertex_mean():
    assert centroid([(0.0, 0.0), (2.0, 0.0), (2.0, 2.0), (0.0, 2.0)]) == pytest.approx((1.0, 1.0))
    with pytest.raises(ValueError):
        centroid([])


def test_rotate_quarter_turn_and_back():
    rotated = rotate((2.0, 1.0), (1.0, 1.0), 90.0)
    assert rotated == pytest.approx((1.0, 2.0))
    points = [(0.3, 0.1), (-1.2, 4.0)]
    restored = rotate_all(rotate_all(points, (0.5, 0.5), -37.0), (0.5, 0.5), 37.0)
    for original, back in zip(points, restored):
        assert back == pytest.approx(original, abs=1e-12)


def test_offset_point_uses_meter_scales():
    north = offset_point((0.0, 0.0), 111.0, 90.0)
    assert north == pytest.approx((0.0, 0.001), abs=1e-12)
    west = offset_point((10.0, 60.0), 100.0, 180.0)
    assert west[1] == pytest.approx(60.0, abs=1e-12)
    assert west[0] == pytest.approx(10.0 - 100.0 / (0.5 * 111_320.0), rel=1e-9)


def test_interpolate_keeps_spacing_under_interval():
    a, b = (0.0, 0.0), (0.001, 0.0)
    points = interpolate(a, b, 25.0)
    assert points[0] == a
    assert points[-1] == pytest.approx(b)
    gaps = [distance(points[i], points[i + 1]) for i in range(len(points) - 1)]
    assert all(gap <= 25.0 + 1e-6 for gap in gaps)
    assert len(points) == math.ceil(distance(a, b) / 25.0) + 1
    with pytest.raises(ValueError):
        interpolate(a, b, 0.0)
