"""Building element models: structures, rooms and everything a room owns."""

from __future__ import annotations
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from .geometry import (
    LShapeConfig, NamedPosition, Point, Position, PositionFrom, RoomShape, TShapeConfig,
    WallDirection, polygon_area, polygon_perimeter,
)


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StructureType(str, Enum):
    MAIN_DWELLING = "main_dwelling"
    DETACHED_GARAGE = "detached_garage"
    ATTACHED_GARAGE = "attached_garage"
    SHED = "shed"
    GUEST_HOUSE = "guest_house"
    POOL_HOUSE = "pool_house"
    BARN = "barn"
    OTHER = "other"


class HierarchyLevel(str, Enum):
    STRUCTURE = "structure"
    ROOM = "room"
    SUBROOM = "subroom"


class FlooringType(str, Enum):
    HARDWOOD = "hardwood"
    CARPET = "carpet"
    TILE = "tile"
    VINYL = "vinyl"
    LAMINATE = "laminate"
    CONCRETE = "concrete"
    STONE = "stone"
    OTHER = "other"


class OpeningType(str, Enum):
    DOOR = "door"
    WINDOW = "window"
    ARCHWAY = "archway"
    SLIDING_DOOR = "sliding_door"
    FRENCH_DOOR = "french_door"

    @property
    def is_door(self) -> bool:
        return self in (OpeningType.DOOR, OpeningType.SLIDING_DOOR, OpeningType.FRENCH_DOOR)


class FeatureType(str, Enum):
    CLOSET = "closet"
    ALCOVE = "alcove"
    PANTRY = "pantry"
    BUMP_OUT = "bump_out"
    ISLAND = "island"
    PENINSULA = "peninsula"
    FIREPLACE = "fireplace"
    BUILT_IN = "built_in"


FREESTANDING = "freestanding"
FeatureWall = Union[WallDirection, Literal["freestanding"]]


class DamageType(str, Enum):
    WATER = "water"
    FIRE = "fire"
    SMOKE = "smoke"
    MOLD = "mold"
    WIND = "wind"
    IMPACT = "impact"


class WaterCategory(str, Enum):
    """IICRC S500: 1 clean, 2 gray, 3 black water."""
    CLEAN = "1"
    GRAY = "2"
    BLACK = "3"


class DamageSeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"
    TOTAL = "total"


class DamageSurface(str, Enum):
    CEILING = "ceiling"
    WALL = "wall"
    FLOOR = "floor"
    FLOOR_CEILING = "floor_ceiling"
    WALL_FLOOR = "wall_floor"
    WALL_CEILING = "wall_ceiling"
    ALL = "all"

    def flags(self) -> tuple[bool, bool]:
        """(floor_affected, ceiling_affected) implied by this surface."""
        floor = self in (DamageSurface.FLOOR, DamageSurface.FLOOR_CEILING,
                         DamageSurface.WALL_FLOOR, DamageSurface.ALL)
        ceiling = self in (DamageSurface.CEILING, DamageSurface.FLOOR_CEILING,
                           DamageSurface.WALL_CEILING, DamageSurface.ALL)
        return floor, ceiling


class Opening(BaseModel):
    """A door, window or archway positioned along a wall."""
    id: str = Field(default_factory=new_id)
    type: OpeningType
    wall: WallDirection
    width_ft: float
    height_ft: float
    position: Position
    position_from: PositionFrom = PositionFrom.START
    sill_height_ft: Optional[float] = None


class Feature(BaseModel):
    """Wall-embedded feature (depth = protrusion beyond the wall) or a
    freestanding one (depth = floor footprint, located by offsets)."""
    id: str = Field(default_factory=new_id)
    type: FeatureType
    wall: FeatureWall
    width_ft: float
    depth_ft: float
    position: Position = NamedPosition.CENTER
    position_from: PositionFrom = PositionFrom.START
    x_offset_ft: Optional[float] = None  # from the west wall
    y_offset_ft: Optional[float] = None  # from the south wall

    @property
    def is_freestanding(self) -> bool:
        return self.wall == FREESTANDING


class DamageZone(BaseModel):
    id: str = Field(default_factory=new_id)
    type: DamageType
    category: Optional[WaterCategory] = None
    affected_walls: list[WallDirection] = []
    floor_affected: bool = True
    ceiling_affected: bool = False
    extent_ft: float = 2.0
    severity: Optional[DamageSeverity] = None
    surface: Optional[DamageSurface] = None
    source: Optional[str] = None
    polygon: Optional[list[Point]] = None  # overrides wall+extent when freeform
    is_freeform: bool = False


class RoomObject(BaseModel):
    """A movable item documented in the room (appliance, furniture, ...)."""
    id: str = Field(default_factory=new_id)
    name: str
    type: Optional[str] = None
    x_ft: Optional[float] = None
    y_ft: Optional[float] = None
    width_ft: Optional[float] = None
    depth_ft: Optional[float] = None
    height_ft: Optional[float] = None
    condition: Optional[str] = None
    description: Optional[str] = None


class NoteTargetKind(str, Enum):
    ROOM = "room"
    WALL = "wall"
    OPENING = "opening"
    FEATURE = "feature"
    DAMAGE_ZONE = "damage_zone"
    OBJECT = "object"
    OTHER = "other"


class Note(BaseModel):
    id: str = Field(default_factory=new_id)
    target: str
    target_kind: NoteTargetKind = NoteTargetKind.OTHER
    note: str
    created_at: datetime = Field(default_factory=utcnow)


class Photo(BaseModel):
    """Metadata for a captured photo; the image itself lives elsewhere."""
    id: str = Field(default_factory=new_id)
    label: str = "Photo"
    storage_url: Optional[str] = None
    hierarchy_path: str = ""
    structure_id: Optional[str] = None
    room_id: Optional[str] = None
    captured_at: datetime = Field(default_factory=utcnow)
    annotations: list[str] = []


class WallProperties(BaseModel):
    is_exterior: bool = False
    is_missing: bool = False
    height_ft: Optional[float] = None


class Room(BaseModel):
    """A room with real-world dimensions and a derived polygon.

    The polygon uses a room-local origin at the north-west corner of the
    main body and must only ever be produced by the polygon synthesizer.
    """
    id: str = Field(default_factory=new_id)
    name: str
    shape: RoomShape = RoomShape.RECTANGLE
    width_ft: float
    length_ft: float
    ceiling_height_ft: float = 8.0
    flooring_type: Optional[FlooringType] = None
    l_shape_config: Optional[LShapeConfig] = None
    t_shape_config: Optional[TShapeConfig] = None
    vertices: Optional[list[Point]] = None  # irregular rooms only
    polygon: list[Point] = []
    openings: list[Opening] = []
    features: list[Feature] = []
    damage_zones: list[DamageZone] = []
    notes: list[Note] = []
    objects: list[RoomObject] = []
    photos: list[Photo] = []
    wall_properties: dict[WallDirection, WallProperties] = {}
    structure_id: Optional[str] = None
    parent_room_id: Optional[str] = None
    hierarchy_level: HierarchyLevel = HierarchyLevel.ROOM
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def area_sqft(self) -> float:
        return polygon_area(self.polygon)

    @property
    def perimeter_ft(self) -> float:
        return polygon_perimeter(self.polygon)

    def wall(self, direction: WallDirection) -> WallProperties:
        """Properties for a wall, created on first access."""
        if direction not in self.wall_properties:
            self.wall_properties[direction] = WallProperties()
        return self.wall_properties[direction]


class Structure(BaseModel):
    """A building or detached unit that owns rooms."""
    id: str = Field(default_factory=new_id)
    name: str
    type: StructureType = StructureType.OTHER
    description: Optional[str] = None
    stories: Optional[int] = None
    year_built: Optional[int] = None
    construction_type: Optional[str] = None
    roof_type: Optional[str] = None
    rooms: list[Room] = []
    photos: list[Photo] = []
    notes: list[Note] = []
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
