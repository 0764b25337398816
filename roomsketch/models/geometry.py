"""Geometric primitives and enumerations shared by rooms and walls."""

from __future__ import annotations
import math
from enum import Enum
from typing import Union

from pydantic import BaseModel


class Point(BaseModel):
    """Point on the floor plan in feet. x grows east, y grows south."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class WallDirection(str, Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


# Clockwise from north; also the order used by wall_N references.
WALL_ORDER: tuple[WallDirection, ...] = (
    WallDirection.NORTH,
    WallDirection.EAST,
    WallDirection.SOUTH,
    WallDirection.WEST,
)


class CornerPosition(str, Enum):
    NORTHEAST = "northeast"
    NORTHWEST = "northwest"
    SOUTHEAST = "southeast"
    SOUTHWEST = "southwest"


class RoomShape(str, Enum):
    RECTANGLE = "rectangle"
    L_SHAPE = "l_shape"
    T_SHAPE = "t_shape"
    IRREGULAR = "irregular"


class NamedPosition(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class PositionFrom(str, Enum):
    START = "start"  # north corner of E/W walls, west corner of N/S walls
    END = "end"


# A position along a wall: a named slot or feet from the reference corner.
Position = Union[NamedPosition, float]


class LShapeConfig(BaseModel):
    """Rectangle with one corner cut out."""
    notch_corner: CornerPosition
    notch_width_ft: float   # along the width (x) axis
    notch_length_ft: float  # along the length (y) axis


class TShapeConfig(BaseModel):
    """Main rectangle with a stem protruding from one wall."""
    stem_wall: WallDirection
    stem_width_ft: float     # measured along the wall
    stem_length_ft: float    # protrusion beyond the wall
    stem_position_ft: float  # from the wall's start corner


def polygon_area(points: list[Point]) -> float:
    """Shoelace area; orientation independent."""
    n = len(points)
    if n < 3:
        return 0.0
    acc = 0.0
    for i in range(n):
        a, b = points[i], points[(i + 1) % n]
        acc += a.x * b.y - b.x * a.y
    return abs(acc) / 2


def polygon_perimeter(points: list[Point]) -> float:
    n = len(points)
    if n < 2:
        return 0.0
    return sum(points[i].distance_to(points[(i + 1) % n]) for i in range(n))
