from __future__ import annotations

import pytest

from roomsketch.core.walls import (
    clamp_to_wall, parse_wall_reference, resolve_position, wall_endpoints, wall_length,
)
from roomsketch.errors import EntityNotFoundError
from roomsketch.models import NamedPosition, PositionFrom, WallDirection


def test_wall_length_duality():
    assert wall_length(WallDirection.NORTH, 12, 14) == 12
    assert wall_length(WallDirection.SOUTH, 12, 14) == 12
    assert wall_length(WallDirection.EAST, 12, 14) == 14
    assert wall_length(WallDirection.WEST, 12, 14) == 14


def test_named_positions():
    assert resolve_position(10, NamedPosition.LEFT, element_width=3) == pytest.approx(2.0)
    assert resolve_position(10, NamedPosition.CENTER, element_width=3) == pytest.approx(5.0)
    assert resolve_position(10, "right", element_width=3) == pytest.approx(8.0)


def test_left_and_right_are_symmetric():
    for width in (0, 2.5, 3):
        left = resolve_position(16, NamedPosition.LEFT, element_width=width)
        right = resolve_position(16, NamedPosition.RIGHT, element_width=width)
        assert left + right == pytest.approx(16)


def test_numeric_position_from_end():
    assert resolve_position(10, 3, PositionFrom.START) == 3
    assert resolve_position(10, 3, PositionFrom.END) == 7


def test_clamp_keeps_element_on_wall():
    assert clamp_to_wall(0.2, 10, 3) == pytest.approx(1.5)
    assert clamp_to_wall(9.9, 10, 3) == pytest.approx(8.5)
    assert clamp_to_wall(4, 10, 3) == 4


def test_clamp_centres_element_wider_than_wall():
    assert clamp_to_wall(5, 2, 3) == pytest.approx(1.0)


def test_wall_endpoints_start_corners():
    start, end = wall_endpoints(WallDirection.EAST, 12, 14)
    assert start.as_tuple() == (12, 0)
    assert end.as_tuple() == (12, 14)
    start, _ = wall_endpoints(WallDirection.SOUTH, 12, 14)
    assert start.as_tuple() == (0, 14)


def test_wall_reference_parsing():
    assert parse_wall_reference("North") == WallDirection.NORTH
    assert parse_wall_reference("wall_0") == WallDirection.NORTH
    assert parse_wall_reference("wall_2") == WallDirection.SOUTH
    assert parse_wall_reference("wall_5") == WallDirection.EAST


def test_unknown_wall_reference():
    with pytest.raises(EntityNotFoundError):
        parse_wall_reference("nearest")
