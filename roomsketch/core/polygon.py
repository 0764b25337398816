"""Polygon synthesis for room topologies and damage-zone footprints.

All functions are pure. Vertices run clockwise (as drawn, with y
growing south) starting at the north-west side of the main body.
"""

from __future__ import annotations

from roomsketch.errors import GeometryError
from roomsketch.models import (
    CornerPosition, DamageZone, LShapeConfig, Point, RoomShape, TShapeConfig,
    WallDirection,
)
from roomsketch.core.walls import wall_endpoints, wall_length


# Index of each corner in the rectangle's vertex list.
_CORNER_INDEX = {
    CornerPosition.NORTHWEST: 0,
    CornerPosition.NORTHEAST: 1,
    CornerPosition.SOUTHEAST: 2,
    CornerPosition.SOUTHWEST: 3,
}

_INWARD = {
    WallDirection.NORTH: (0, 1),
    WallDirection.SOUTH: (0, -1),
    WallDirection.EAST: (-1, 0),
    WallDirection.WEST: (1, 0),
}


def rectangle(width_ft: float, length_ft: float) -> list[Point]:
    return [
        Point(x=0, y=0),
        Point(x=width_ft, y=0),
        Point(x=width_ft, y=length_ft),
        Point(x=0, y=length_ft),
    ]


def l_shape(width_ft: float, length_ft: float, config: LShapeConfig) -> list[Point]:
    """Rectangle with the notch corner replaced by three vertices."""
    w, l = width_ft, length_ft
    nw, nl = config.notch_width_ft, config.notch_length_ft
    if not (0 < nw < w) or not (0 < nl < l):
        raise GeometryError(
            f"Notch {nw:g}x{nl:g} ft must be positive and smaller than the "
            f"{w:g}x{l:g} ft bounding box"
        )

    # Each triple is: point on the incoming edge, inner corner, point on
    # the outgoing edge.
    notch = {
        CornerPosition.NORTHWEST: [(0, nl), (nw, nl), (nw, 0)],
        CornerPosition.NORTHEAST: [(w - nw, 0), (w - nw, nl), (w, nl)],
        CornerPosition.SOUTHEAST: [(w, l - nl), (w - nw, l - nl), (w - nw, l)],
        CornerPosition.SOUTHWEST: [(nw, l), (nw, l - nl), (0, l - nl)],
    }[config.notch_corner]

    points = rectangle(w, l)
    i = _CORNER_INDEX[config.notch_corner]
    points[i:i + 1] = [Point(x=x, y=y) for x, y in notch]
    return points


def t_shape(width_ft: float, length_ft: float, config: TShapeConfig) -> list[Point]:
    """Main body with a stem inserted into one wall's edge."""
    w, l = width_ft, length_ft
    s, d, p = config.stem_width_ft, config.stem_length_ft, config.stem_position_ft
    wall_len = wall_length(config.stem_wall, w, l)
    if s <= 0 or d <= 0:
        raise GeometryError("Stem width and length must be positive")
    if s >= wall_len:
        raise GeometryError(
            f"Stem width {s:g} ft must be smaller than the {config.stem_wall.value} "
            f"wall ({wall_len:g} ft)"
        )

    # Position is measured from the wall's start corner (west for N/S,
    # north for E/W) regardless of the traversal direction of the edge.
    if config.stem_wall == WallDirection.NORTH:
        stem, after = [(p, 0), (p, -d), (p + s, -d), (p + s, 0)], 0
    elif config.stem_wall == WallDirection.EAST:
        stem, after = [(w, p), (w + d, p), (w + d, p + s), (w, p + s)], 1
    elif config.stem_wall == WallDirection.SOUTH:
        stem, after = [(p + s, l), (p + s, l + d), (p, l + d), (p, l)], 2
    else:
        stem, after = [(0, p + s), (-d, p + s), (-d, p), (0, p)], 3

    points = rectangle(w, l)
    points[after + 1:after + 1] = [Point(x=x, y=y) for x, y in stem]
    return points


def synthesize(
    shape: RoomShape,
    width_ft: float,
    length_ft: float,
    l_config: LShapeConfig | None = None,
    t_config: TShapeConfig | None = None,
    vertices: list[Point] | None = None,
) -> list[Point]:
    """Vertex sequence for a room. Same inputs always give the same output."""
    if width_ft <= 0 or length_ft <= 0:
        raise GeometryError(
            f"Room dimensions must be positive (got {width_ft:g} x {length_ft:g})"
        )

    if shape == RoomShape.RECTANGLE:
        return rectangle(width_ft, length_ft)

    if shape == RoomShape.L_SHAPE:
        if l_config is None:
            l_config = LShapeConfig(
                notch_corner=CornerPosition.SOUTHEAST,
                notch_width_ft=width_ft / 2,
                notch_length_ft=length_ft / 2,
            )
        return l_shape(width_ft, length_ft, l_config)

    if shape == RoomShape.T_SHAPE:
        if t_config is None:
            t_config = TShapeConfig(
                stem_wall=WallDirection.SOUTH,
                stem_width_ft=width_ft / 3,
                stem_length_ft=length_ft / 3,
                stem_position_ft=width_ft / 3,
            )
        return t_shape(width_ft, length_ft, t_config)

    if shape == RoomShape.IRREGULAR:
        if vertices:
            if len(vertices) < 3:
                raise GeometryError("An irregular room needs at least 3 vertices")
            return [Point(x=v.x, y=v.y) for v in vertices]
        return rectangle(width_ft, length_ft)

    raise GeometryError(f"Unknown room shape: {shape}")


def damage_footprints(zone: DamageZone, width_ft: float, length_ft: float) -> list[list[Point]]:
    """
    Floor footprints of a damage zone.

    Freeform zones with a polygon return that polygon. Otherwise each
    affected wall contributes a strip `extent_ft` deep along its full
    length, clamped to the room's depth in that direction.
    """
    if zone.is_freeform and zone.polygon:
        return [[Point(x=p.x, y=p.y) for p in zone.polygon]]

    strips: list[list[Point]] = []
    for wall in zone.affected_walls:
        start, end = wall_endpoints(wall, width_ft, length_ft)
        # Unit normal pointing into the room and the depth available along it.
        nx, ny = _INWARD[wall]
        depth = length_ft if ny else width_ft
        e = min(zone.extent_ft, depth)
        strips.append([
            start,
            end,
            Point(x=end.x + nx * e, y=end.y + ny * e),
            Point(x=start.x + nx * e, y=start.y + ny * e),
        ])
    return strips
