"""Whole-room transforms: clockwise rotation in quarter turns.

A quarter turn maps room-local (x, y) to (length - y, x) and cycles the
walls north -> east -> south -> west. Start corners are west for
north/south walls and north for east/west walls, so offsets on a wall
that turns from east/west into south/north are measured from the other
end afterwards.
"""

from __future__ import annotations

from roomsketch.models import (
    CornerPosition, FREESTANDING, NamedPosition, Point, PositionFrom, Room,
    WALL_ORDER, WallDirection,
)


_CORNER_CW = {
    CornerPosition.NORTHWEST: CornerPosition.NORTHEAST,
    CornerPosition.NORTHEAST: CornerPosition.SOUTHEAST,
    CornerPosition.SOUTHEAST: CornerPosition.SOUTHWEST,
    CornerPosition.SOUTHWEST: CornerPosition.NORTHWEST,
}


def rotate_wall(wall: WallDirection) -> WallDirection:
    return WALL_ORDER[(WALL_ORDER.index(wall) + 1) % len(WALL_ORDER)]


def _flips(wall: WallDirection) -> bool:
    """Whether the start corner changes ends when `wall` turns clockwise."""
    return wall in (WallDirection.EAST, WallDirection.WEST)


def _flip_position(position, position_from):
    if isinstance(position, str):
        swapped = {NamedPosition.LEFT: NamedPosition.RIGHT, NamedPosition.RIGHT: NamedPosition.LEFT}
        return swapped.get(NamedPosition(position), NamedPosition(position)), position_from
    if position_from == PositionFrom.END:
        return position, PositionFrom.START
    return position, PositionFrom.END


def _turn_point(p: Point, length_ft: float) -> Point:
    return Point(x=length_ft - p.y, y=p.x)


def quarter_turn(room: Room) -> Room:
    """Copy of `room` turned 90 degrees clockwise. The polygon is not
    regenerated here."""
    r = room.model_copy(deep=True)
    w, l = room.width_ft, room.length_ft
    r.width_ft, r.length_ft = l, w

    if r.l_shape_config is not None:
        cfg = r.l_shape_config
        cfg.notch_corner = _CORNER_CW[cfg.notch_corner]
        cfg.notch_width_ft, cfg.notch_length_ft = cfg.notch_length_ft, cfg.notch_width_ft
    if r.t_shape_config is not None:
        cfg = r.t_shape_config
        if _flips(cfg.stem_wall):
            cfg.stem_position_ft = l - cfg.stem_position_ft - cfg.stem_width_ft
        cfg.stem_wall = rotate_wall(cfg.stem_wall)
    if r.vertices:
        r.vertices = [_turn_point(v, l) for v in r.vertices]

    for o in r.openings:
        if _flips(o.wall):
            o.position, o.position_from = _flip_position(o.position, o.position_from)
        o.wall = rotate_wall(o.wall)

    for f in r.features:
        if f.wall == FREESTANDING:
            # x from the west wall, y from the south wall
            x, y_s = f.x_offset_ft, f.y_offset_ft
            f.x_offset_ft = y_s
            f.y_offset_ft = w - x if x is not None else None
            continue
        wall = WallDirection(f.wall)
        if _flips(wall):
            f.position, f.position_from = _flip_position(f.position, f.position_from)
        f.wall = rotate_wall(wall)

    for z in r.damage_zones:
        z.affected_walls = [rotate_wall(d) for d in z.affected_walls]
        if z.polygon:
            z.polygon = [_turn_point(p, l) for p in z.polygon]

    for obj in r.objects:
        if obj.x_ft is not None and obj.y_ft is not None:
            obj.x_ft, obj.y_ft = l - obj.y_ft, obj.x_ft
        obj.width_ft, obj.depth_ft = obj.depth_ft, obj.width_ft

    r.wall_properties = {rotate_wall(d): props for d, props in r.wall_properties.items()}
    return r


def rotate(room: Room, degrees: int) -> Room:
    """Copy of `room` rotated clockwise by a multiple of 90 degrees."""
    turns = (degrees % 360) // 90
    rotated = room.model_copy(deep=True)
    for _ in range(turns):
        rotated = quarter_turn(rotated)
    return rotated
