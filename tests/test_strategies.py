import pytest

from flightpath_planner.core.plan import (
    MissionRequest,
    MissionType,
    NoValidSegmentsError,
    PlannerSettings,
    StripSegment,
)
from flightpath_planner.core.planning.mapping import MappingStrategy
from flightpath_planner.core.planning.oblique import VARIANTS, ObliqueStrategy, normalize_heading
from flightpath_planner.core.planning.strip import (
    StripStrategy,
    _mercator_transformer,
    segment_heading,
    segment_polygon,
    trim_anchors,
)

AREA = [(116.3900, 39.9000), (116.3900, 39.9030), (116.3940, 39.9030), (116.3940, 39.9000)]
START = (116.3895, 39.8995)

EAST_SEGMENT = StripSegment(
    index=0,
    p1=(116.3900, 39.9000),
    p2=(116.3920, 39.9000),
    corners=((116.3900, 39.9003), (116.3920, 39.9003), (116.3920, 39.8997), (116.3900, 39.8997)),
)
NORTH_SEGMENT = StripSegment(
    index=1,
    p1=(116.3920, 39.9000),
    p2=(116.3920, 39.9020),
    corners=((116.3917, 39.9000), (116.3917, 39.9020), (116.3923, 39.9020), (116.3923, 39.9000)),
)


def _request(**overrides):
    values = dict(polygon=list(AREA), spacing=40.0, start_point=START)
    values.update(overrides)
    return MissionRequest(**values)


def test_mapping_has_single_line():
    result = MappingStrategy().generate(_request(angle=20.0, capture_interval=30.0))
    assert len(result.lines) == 1
    assert result.lines[0].path == result.path
    assert result.capture_interval == 30.0
    assert result.capture_points


def test_oblique_returns_five_ordered_variants(logger):
    request = _request(mission_type=MissionType.OBLIQUE, gimbal_yaw=45.0, lateral_offset=30.0)
    result = ObliqueStrategy(logger=logger).generate(request)
    mapping = MappingStrategy().generate(_request())

    assert len(result.lines) == len(VARIANTS) == 5
    assert result.path == mapping.path
    assert result.lines[0].path == mapping.path
    # same heading as the reference but displaced toward heading + 180 (west)
    assert len(result.lines[1].waypoints) == len(mapping.waypoints)
    assert all(moved[0] < ref[0] for moved, ref in zip(result.lines[1].waypoints, mapping.waypoints))
    for line in result.lines:
        assert line.path[0] == pytest.approx(START, abs=1e-12)
        assert line.path[-1] == pytest.approx(START, abs=1e-12)


def test_oblique_tilt_is_clamped_for_metadata(logger):
    ObliqueStrategy(logger=logger).generate(_request(gimbal_yaw=120.0, lateral_offset=float("nan")))
    assert any("tilt: 89.9deg" in msg and "lateral offset: 0.000m" in msg for msg in logger.messages("debug"))

    logger.records.clear()
    ObliqueStrategy(logger=logger).generate(_request(gimbal_yaw=-5.0))
    assert any("tilt: 0.0deg" in msg for msg in logger.messages("debug"))


def test_oblique_parallel_workers_keep_order():
    request = _request(angle=15.0, lateral_offset=20.0)
    sequential = ObliqueStrategy().generate(request)
    threaded = ObliqueStrategy(PlannerSettings(workers=4)).generate(request)
    assert [line.path for line in threaded.lines] == [line.path for line in sequential.lines]


def test_normalize_heading():
    assert normalize_heading(-90.0) == 270.0
    assert normalize_heading(540.0) == 180.0
    assert normalize_heading(0.0) == 0.0


def test_segment_heading_uses_projected_bearing():
    assert segment_heading(EAST_SEGMENT.p1, EAST_SEGMENT.p2) == pytest.approx(0.0, abs=1e-9)
    assert segment_heading(NORTH_SEGMENT.p1, NORTH_SEGMENT.p2) == pytest.approx(90.0, abs=1e-9)
    assert segment_heading((0.0, 0.0), (-1e-3, 0.0)) == pytest.approx(180.0, abs=1e-9)
    # equal degree steps at 60N are much longer north than east
    assert segment_heading((10.0, 60.0), (10.01, 60.01)) == pytest.approx(63.43, abs=0.1)


def test_segment_polygon_closes_rectangle():
    polygon = segment_polygon(EAST_SEGMENT)
    assert len(polygon) == 5
    assert polygon[0] == polygon[-1] == EAST_SEGMENT.corners[0]


def test_trim_anchors():
    assert trim_anchors([(0, 0), (1, 1), (2, 2)]) == [(1, 1)]
    assert trim_anchors([(0, 0), (1, 1)]) == []
    assert trim_anchors([(0, 0)]) == [(0, 0)]


def test_strip_merges_segments_without_anchors(logger):
    request = _request(
        polygon=[],
        spacing=20.0,
        mission_type=MissionType.STRIP,
        segments=[EAST_SEGMENT, NORTH_SEGMENT],
        capture_interval=15.0,
    )
    result = StripStrategy(logger=logger).generate(request)

    assert len(result.lines) == 2
    assert len(result.path) == sum(len(line.path) - 2 for line in result.lines)
    assert result.waypoints == result.lines[0].waypoints + result.lines[1].waypoints
    assert result.capture_points == result.lines[0].capture_points + result.lines[1].capture_points
    assert result.capture_interval == 15.0
    # untrimmed per-segment lines still carry their anchors
    assert result.lines[0].path[0] == pytest.approx(EAST_SEGMENT.p1, abs=1e-12)
    assert result.lines[1].path[-1] == pytest.approx(NORTH_SEGMENT.p2, abs=1e-12)
    assert any("Strip merge complete" in msg for msg in logger.messages("debug"))


def test_strip_parallel_workers_keep_segment_order():
    request = _request(polygon=[], spacing=20.0, mission_type=MissionType.STRIP, segments=[EAST_SEGMENT, NORTH_SEGMENT])
    sequential = StripStrategy().generate(request)
    threaded = StripStrategy(PlannerSettings(workers=2)).generate(request)
    assert threaded.path == sequential.path
    assert [line.path for line in threaded.lines] == [line.path for line in sequential.lines]


def test_strip_without_segments_fails(logger):
    with pytest.raises(NoValidSegmentsError):
        StripStrategy(logger=logger).generate(_request(mission_type=MissionType.STRIP))
    assert logger.messages("error")


def test_mercator_transformer_is_built_once():
    segment_heading(EAST_SEGMENT.p1, EAST_SEGMENT.p2)
    segment_heading(NORTH_SEGMENT.p1, NORTH_SEGMENT.p2)
    assert _mercator_transformer.cache_info().currsize == 1
