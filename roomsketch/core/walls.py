"""Wall-relative coordinates.

Every wall has a start corner: the west corner for north/south walls and
the north corner for east/west walls. Positions along a wall are offsets
of the element's centre from that corner. Wall lengths use the room's
bounding box; L notches and T stems are not subtracted.
"""

from __future__ import annotations
import re

from roomsketch.errors import EntityNotFoundError
from roomsketch.models import (
    NamedPosition, Point, Position, PositionFrom, WALL_ORDER, WallDirection,
)


DEFAULT_CLEARANCE_FT = 0.5

_WALL_INDEX_RE = re.compile(r"^wall_(\d+)$")


def wall_length(direction: WallDirection, width_ft: float, length_ft: float) -> float:
    if direction in (WallDirection.NORTH, WallDirection.SOUTH):
        return width_ft
    return length_ft


def wall_endpoints(direction: WallDirection, width_ft: float, length_ft: float) -> tuple[Point, Point]:
    """(start, end) corners of a wall in room-local coordinates."""
    w, l = width_ft, length_ft
    if direction == WallDirection.NORTH:
        return Point(x=0, y=0), Point(x=w, y=0)
    if direction == WallDirection.SOUTH:
        return Point(x=0, y=l), Point(x=w, y=l)
    if direction == WallDirection.EAST:
        return Point(x=w, y=0), Point(x=w, y=l)
    return Point(x=0, y=0), Point(x=0, y=l)


def resolve_position(
    wall_len: float,
    position: Position,
    position_from: PositionFrom = PositionFrom.START,
    element_width: float = 0.0,
    clearance: float = DEFAULT_CLEARANCE_FT,
) -> float:
    """Absolute offset of an element's centre from the wall's start corner."""
    if isinstance(position, str):
        position = NamedPosition(position)
        half = element_width / 2
        if position == NamedPosition.LEFT:
            return half + clearance
        if position == NamedPosition.RIGHT:
            return wall_len - half - clearance
        return wall_len / 2

    value = float(position)
    if position_from == PositionFrom.END:
        return wall_len - value
    return value


def clamp_to_wall(offset: float, wall_len: float, element_width: float) -> float:
    """Keep an element of `element_width` entirely on the wall."""
    half = element_width / 2
    lo, hi = half, wall_len - half
    if lo > hi:
        # Element wider than the wall: centre it.
        return wall_len / 2
    return max(lo, min(hi, offset))


def parse_wall_reference(reference: str) -> WallDirection:
    """Cardinal direction from "north".."west" or a cyclic "wall_N" index."""
    ref = reference.strip().lower()
    match = _WALL_INDEX_RE.match(ref)
    if match:
        return WALL_ORDER[int(match.group(1)) % len(WALL_ORDER)]
    try:
        return WallDirection(ref)
    except ValueError:
        raise EntityNotFoundError(
            f'Unknown wall reference "{reference}". Use north, east, south, west or wall_N.'
        ) from None
