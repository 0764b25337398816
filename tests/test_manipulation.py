from __future__ import annotations

import pytest

from roomsketch.core import transform
from roomsketch.core.engine import SketchEngine, find_completeness_issues
from roomsketch.core.polygon import synthesize
from roomsketch.models import (
    CornerPosition, NamedPosition, PositionFrom, Room, RoomShape, TShapeConfig,
    WallDirection,
)


@pytest.fixture
def engine() -> SketchEngine:
    return SketchEngine()


def _t_room() -> Room:
    cfg = TShapeConfig(stem_wall=WallDirection.EAST, stem_width_ft=4, stem_length_ft=3,
                       stem_position_ft=2)
    return Room(name="hall", shape=RoomShape.T_SHAPE, width_ft=12, length_ft=14,
                t_shape_config=cfg, polygon=synthesize(RoomShape.T_SHAPE, 12, 14, t_config=cfg))


def test_quarter_turn_moves_stem_to_south_wall():
    turned = transform.quarter_turn(_t_room())
    assert (turned.width_ft, turned.length_ft) == (14, 12)
    assert turned.t_shape_config.stem_wall == WallDirection.SOUTH
    assert turned.t_shape_config.stem_position_ft == 8


def test_four_quarter_turns_are_identity():
    room = _t_room()
    turned = room
    for _ in range(4):
        turned = transform.quarter_turn(turned)
    assert turned.t_shape_config == room.t_shape_config
    assert (turned.width_ft, turned.length_ft) == (12, 14)


def test_rotate_room_remaps_walls(engine):
    engine.create_room(name="den", width_ft=10, length_ft=12)
    engine.add_opening(type="door", wall="east", width_ft=3, position="left")
    engine.add_opening(type="window", wall="north", width_ft=4, position=3)
    engine.mark_damage(type="water", affected_walls=["west"])

    assert engine.rotate_room(degrees=90) == "Rotated Den 90 degrees. Room is now 12' × 10'"
    room = engine.state.current_room
    door, window = room.openings
    assert door.wall == WallDirection.SOUTH
    assert door.position == NamedPosition.RIGHT
    assert window.wall == WallDirection.EAST
    assert window.position == 3
    assert window.position_from == PositionFrom.START
    assert room.damage_zones[0].affected_walls == [WallDirection.NORTH]
    assert [p.as_tuple() for p in room.polygon] == [(0, 0), (12, 0), (12, 10), (0, 10)]


def test_rotate_room_is_undoable(engine):
    engine.create_room(name="den", width_ft=10, length_ft=12)
    engine.rotate_room(degrees=180)
    engine.undo()
    assert (engine.state.current_room.width_ft, engine.state.current_room.length_ft) == (10, 12)


def test_rotate_l_shape_keeps_area(engine):
    engine.create_room(name="great room", shape="l_shape", width_ft=20, length_ft=16,
                       l_shape_config={"notch_corner": "northeast", "notch_width_ft": 8,
                                       "notch_length_ft": 6})
    engine.rotate_room(room_name="great room", degrees=-90)
    room = engine.state.current_room
    assert room.l_shape_config.notch_corner == CornerPosition.NORTHWEST
    assert (room.l_shape_config.notch_width_ft, room.l_shape_config.notch_length_ft) == (6, 8)
    assert room.area_sqft == pytest.approx(20 * 16 - 8 * 6)


def test_rotate_room_rejects_odd_angles(engine):
    engine.create_room(name="den", width_ft=10, length_ft=12)
    assert engine.rotate_room(degrees=45).startswith("Error:")
    assert engine.rotate_room(degrees=360).startswith("Error:")
    assert engine.state.undo_stack == []


def test_rotate_room_turns_wall_cursor(engine):
    engine.create_room(name="den", width_ft=10, length_ft=12)
    engine.select_wall(reference="north")
    engine.rotate_room(degrees=270)
    assert engine.state.selected_wall.direction == WallDirection.WEST


def test_copy_room(engine):
    engine.create_structure(name="Main House", type="main_dwelling")
    engine.create_room(name="bedroom", width_ft=12, length_ft=11)
    engine.add_opening(type="door", wall="south", width_ft=3)
    engine.add_object(name="Bed")
    engine.confirm_room()

    assert engine.copy_room(room_name="Bedroom") == "Copied Bedroom to Bedroom Copy"
    original, copy = engine.state.rooms
    assert copy.id != original.id
    assert copy.openings[0].id != original.openings[0].id
    assert copy.width_ft == 12
    assert copy.objects == []
    assert engine.state.structures[0].rooms[1] is copy

    assert engine.copy_room(room_name="bedroom").startswith("Error: A room named Bedroom Copy")
    assert engine.copy_room(room_name="bedroom", new_name="Guest Bedroom") == (
        "Copied Bedroom to Guest Bedroom"
    )
    assert len(engine.state.rooms) == 3


def test_copy_unknown_room(engine):
    assert engine.copy_room(room_name="attic").startswith("Error: Could not find room to copy")


def test_completeness_on_empty_sketch(engine):
    assert engine.check_sketch_completeness() == (
        "No rooms in the sketch yet. Create rooms using create_room."
    )


def test_completeness_reports_issues(engine):
    engine.create_room(name="den", width_ft=10, length_ft=12)
    engine.add_opening(type="door", wall="east", width_ft=3)
    engine.confirm_room()
    assert engine.check_sketch_completeness() == (
        "Sketch is complete! 1 room(s) with all required geometry data."
    )

    engine.create_room(name="closet", width_ft=2, length_ft=4, ceiling_height_ft=0)
    engine.update_wall_properties(reference="south", is_missing=True)
    result = engine.check_sketch_completeness()
    assert result.startswith("Found 4 issue(s) (0 errors, 2 warnings):")
    assert "- Closet: No doors or windows defined" in result
    assert "- Closet: Has 1 missing wall(s) - south" in result


def test_completeness_issue_kinds():
    room = Room(name="barn", width_ft=120, length_ft=40, ceiling_height_ft=24,
                polygon=synthesize(RoomShape.RECTANGLE, 120, 40))
    kinds = [i.type for i in find_completeness_issues([room])]
    assert kinds == ["missing_ceiling_height", "no_openings", "unusual_dimensions"]
