from __future__ import annotations

import pytest

from roomsketch.core import polygon
from roomsketch.errors import GeometryError
from roomsketch.models import (
    CornerPosition, DamageType, DamageZone, LShapeConfig, Point, RoomShape,
    TShapeConfig, WallDirection, polygon_area, polygon_perimeter,
)


def _tuples(points: list[Point]) -> list[tuple[float, float]]:
    return [p.as_tuple() for p in points]


def test_rectangle_vertices():
    pts = polygon.synthesize(RoomShape.RECTANGLE, 12, 14)
    assert _tuples(pts) == [(0, 0), (12, 0), (12, 14), (0, 14)]


def test_synthesis_is_deterministic():
    cfg = LShapeConfig(notch_corner=CornerPosition.NORTHEAST, notch_width_ft=4, notch_length_ft=5)
    a = polygon.synthesize(RoomShape.L_SHAPE, 12, 14, l_config=cfg)
    b = polygon.synthesize(RoomShape.L_SHAPE, 12, 14, l_config=cfg)
    assert _tuples(a) == _tuples(b)


def test_l_shape_has_six_vertices_for_every_corner():
    for corner in CornerPosition:
        cfg = LShapeConfig(notch_corner=corner, notch_width_ft=4, notch_length_ft=5)
        pts = polygon.synthesize(RoomShape.L_SHAPE, 12, 14, l_config=cfg)
        assert len(pts) == 6
        assert polygon_area(pts) == pytest.approx(12 * 14 - 4 * 5)


def test_l_shape_defaults_to_southeast_half_notch():
    pts = polygon.synthesize(RoomShape.L_SHAPE, 12, 14)
    assert len(pts) == 6
    assert (6, 7) in _tuples(pts)
    assert polygon_area(pts) == pytest.approx(12 * 14 - 6 * 7)


def test_l_shape_notch_must_fit():
    cfg = LShapeConfig(notch_corner=CornerPosition.SOUTHWEST, notch_width_ft=12, notch_length_ft=5)
    with pytest.raises(GeometryError):
        polygon.synthesize(RoomShape.L_SHAPE, 12, 14, l_config=cfg)


def test_t_shape_has_eight_vertices():
    for wall in WallDirection:
        cfg = TShapeConfig(stem_wall=wall, stem_width_ft=4, stem_length_ft=3, stem_position_ft=2)
        pts = polygon.synthesize(RoomShape.T_SHAPE, 12, 14, t_config=cfg)
        assert len(pts) == 8
        assert polygon_area(pts) == pytest.approx(12 * 14 + 4 * 3)


def test_t_shape_north_stem_goes_negative():
    cfg = TShapeConfig(stem_wall=WallDirection.NORTH, stem_width_ft=4, stem_length_ft=3, stem_position_ft=2)
    pts = polygon.synthesize(RoomShape.T_SHAPE, 12, 14, t_config=cfg)
    assert min(p.y for p in pts) == -3


def test_t_shape_stem_wider_than_wall_rejected():
    cfg = TShapeConfig(stem_wall=WallDirection.EAST, stem_width_ft=14, stem_length_ft=3, stem_position_ft=0)
    with pytest.raises(GeometryError):
        polygon.synthesize(RoomShape.T_SHAPE, 12, 14, t_config=cfg)


def test_non_positive_dimensions_rejected():
    with pytest.raises(GeometryError):
        polygon.synthesize(RoomShape.RECTANGLE, 0, 14)
    with pytest.raises(GeometryError):
        polygon.synthesize(RoomShape.RECTANGLE, 12, -1)


def test_irregular_uses_vertices_or_falls_back():
    tri = [Point(x=0, y=0), Point(x=10, y=0), Point(x=0, y=10)]
    assert _tuples(polygon.synthesize(RoomShape.IRREGULAR, 10, 10, vertices=tri)) == _tuples(tri)
    assert len(polygon.synthesize(RoomShape.IRREGULAR, 10, 10)) == 4


def test_area_and_perimeter_of_rectangle():
    pts = polygon.rectangle(12, 14)
    assert polygon_area(pts) == pytest.approx(168)
    assert polygon_perimeter(pts) == pytest.approx(52)


def test_damage_strip_along_north_wall():
    zone = DamageZone(type=DamageType.WATER, affected_walls=[WallDirection.NORTH], extent_ft=2)
    (strip,) = polygon.damage_footprints(zone, 16, 14)
    assert _tuples(strip) == [(0, 0), (16, 0), (16, 2), (0, 2)]


def test_damage_extent_clamped_to_room_depth():
    zone = DamageZone(type=DamageType.MOLD, affected_walls=[WallDirection.EAST], extent_ft=30)
    (strip,) = polygon.damage_footprints(zone, 10, 8)
    assert min(p.x for p in strip) == 0


def test_freeform_damage_uses_polygon():
    shape = [Point(x=1, y=1), Point(x=3, y=1), Point(x=2, y=4)]
    zone = DamageZone(type=DamageType.FIRE, polygon=shape, is_freeform=True,
                      affected_walls=[WallDirection.SOUTH])
    assert [_tuples(p) for p in polygon.damage_footprints(zone, 10, 10)] == [_tuples(shape)]


def test_damage_strip_along_south_wall():
    zone = DamageZone(type=DamageType.WATER, affected_walls=[WallDirection.SOUTH], extent_ft=3)
    (strip,) = polygon.damage_footprints(zone, 10, 12)
    assert sorted(p.as_tuple() for p in strip) == [(0, 9), (0, 12), (10, 9), (10, 12)]
