from .geometry import (
    Point, WallDirection, WALL_ORDER, CornerPosition, RoomShape, NamedPosition,
    PositionFrom, Position, LShapeConfig, TShapeConfig,
    polygon_area, polygon_perimeter,
)
from .building import (
    Structure, StructureType, HierarchyLevel, Room, FlooringType,
    Opening, OpeningType, Feature, FeatureType, FREESTANDING,
    DamageZone, DamageType, WaterCategory, DamageSeverity, DamageSurface,
    RoomObject, Note, NoteTargetKind, Photo, WallProperties,
)
from .commands import CommandType, GeometryCommand, MoveDirection
from .parameters import EngineConfig
from .session import (
    SessionState, SessionSnapshot, SessionStats, SelectedWall, RoomRevision,
    PhotoResult, IssueSeverity, CompletenessIssue,
)

__all__ = [
    "Point", "WallDirection", "WALL_ORDER", "CornerPosition", "RoomShape",
    "NamedPosition", "PositionFrom", "Position", "LShapeConfig", "TShapeConfig",
    "polygon_area", "polygon_perimeter",
    "Structure", "StructureType", "HierarchyLevel", "Room", "FlooringType",
    "Opening", "OpeningType", "Feature", "FeatureType", "FREESTANDING",
    "DamageZone", "DamageType", "WaterCategory", "DamageSeverity", "DamageSurface",
    "RoomObject", "Note", "NoteTargetKind", "Photo", "WallProperties",
    "CommandType", "GeometryCommand", "MoveDirection",
    "EngineConfig",
    "SessionState", "SessionSnapshot", "SessionStats", "SelectedWall",
    "RoomRevision", "PhotoResult", "IssueSeverity", "CompletenessIssue",
]
