"""Command parameter records and the append-only command log entry.

Each operation of the engine accepts one of these records (or a plain
dict that validates into it). Fields prefixed ``new_`` are edits; fields
without the prefix on edit/delete records identify the target.
"""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from .building import (
    DamageSeverity, DamageSurface, DamageType, FeatureType, FeatureWall,
    FlooringType, OpeningType, StructureType, WaterCategory, new_id, utcnow,
)
from .geometry import (
    CornerPosition, LShapeConfig, NamedPosition, Point, Position, PositionFrom,
    RoomShape, TShapeConfig, WallDirection,
)


class CommandType(str, Enum):
    CREATE_STRUCTURE = "create_structure"
    EDIT_STRUCTURE = "edit_structure"
    DELETE_STRUCTURE = "delete_structure"
    SELECT_STRUCTURE = "select_structure"
    CREATE_ROOM = "create_room"
    EDIT_ROOM = "edit_room"
    DELETE_ROOM = "delete_room"
    CONFIRM_ROOM = "confirm_room"
    MODIFY_DIMENSION = "modify_dimension"
    ADD_NOTE = "add_note"
    UNDO = "undo"
    ADD_OPENING = "add_opening"
    DELETE_OPENING = "delete_opening"
    UPDATE_OPENING = "update_opening"
    MOVE_OPENING = "move_opening"
    ADD_FEATURE = "add_feature"
    DELETE_FEATURE = "delete_feature"
    MARK_DAMAGE = "mark_damage"
    EDIT_DAMAGE_ZONE = "edit_damage_zone"
    DELETE_DAMAGE_ZONE = "delete_damage_zone"
    ADD_OBJECT = "add_object"
    EDIT_OBJECT = "edit_object"
    DELETE_OBJECT = "delete_object"
    SELECT_WALL = "select_wall"
    UPDATE_WALL_PROPERTIES = "update_wall_properties"
    MOVE_WALL = "move_wall"
    ADD_PHOTO = "add_photo"
    COPY_ROOM = "copy_room"
    ROTATE_ROOM = "rotate_room"
    CHECK_SKETCH_COMPLETENESS = "check_sketch_completeness"


class GeometryCommand(BaseModel):
    """One entry of the command log. Never mutated once appended."""
    id: str = Field(default_factory=new_id)
    type: CommandType
    params: dict[str, Any] = {}
    timestamp: datetime = Field(default_factory=utcnow)
    result: str


# ---- Structures ----

class StructureRef(BaseModel):
    structure_id: Optional[str] = None
    structure_name: Optional[str] = None


class CreateStructureParams(BaseModel):
    name: str
    type: StructureType = StructureType.OTHER
    description: Optional[str] = None
    stories: Optional[int] = None
    year_built: Optional[int] = None
    construction_type: Optional[str] = None
    roof_type: Optional[str] = None


class EditStructureParams(StructureRef):
    new_name: Optional[str] = None
    new_type: Optional[StructureType] = None
    new_description: Optional[str] = None
    new_stories: Optional[int] = None
    new_year_built: Optional[int] = None
    new_construction_type: Optional[str] = None
    new_roof_type: Optional[str] = None


# ---- Rooms ----

class RoomRef(BaseModel):
    room_id: Optional[str] = None
    room_name: Optional[str] = None


class CreateRoomParams(BaseModel):
    name: str
    shape: RoomShape = RoomShape.RECTANGLE
    width_ft: float
    length_ft: float
    ceiling_height_ft: Optional[float] = None
    flooring_type: Optional[FlooringType] = None
    l_shape_config: Optional[LShapeConfig] = None
    t_shape_config: Optional[TShapeConfig] = None
    polygon: Optional[list[Point]] = None  # irregular vertices
    structure_id: Optional[str] = None
    structure_name: Optional[str] = None
    parent_room_id: Optional[str] = None
    parent_room_name: Optional[str] = None


class LShapeConfigUpdate(BaseModel):
    notch_corner: Optional[CornerPosition] = None
    notch_width_ft: Optional[float] = None
    notch_length_ft: Optional[float] = None


class TShapeConfigUpdate(BaseModel):
    stem_wall: Optional[WallDirection] = None
    stem_width_ft: Optional[float] = None
    stem_length_ft: Optional[float] = None
    stem_position_ft: Optional[float] = None


class EditRoomParams(RoomRef):
    new_name: Optional[str] = None
    new_shape: Optional[RoomShape] = None
    new_width_ft: Optional[float] = None
    new_length_ft: Optional[float] = None
    new_ceiling_height_ft: Optional[float] = None
    new_flooring_type: Optional[FlooringType] = None
    new_l_shape_config: Optional[LShapeConfigUpdate] = None
    new_t_shape_config: Optional[TShapeConfigUpdate] = None
    new_polygon: Optional[list[Point]] = None


class ConfirmRoomParams(BaseModel):
    ready_for_next: bool = True


class ModifyDimensionParams(BaseModel):
    target: str
    new_value_ft: float


class AddNoteParams(BaseModel):
    target: str = "room"
    note: str


class UndoParams(BaseModel):
    steps: int = 1


class CopyRoomParams(RoomRef):
    new_name: Optional[str] = None  # defaults to "<name>_copy"


class RotateRoomParams(RoomRef):
    degrees: int = 90  # clockwise, multiple of 90; negative turns counter-clockwise


class CompletenessParams(StructureRef):
    """Limit the check to one structure; all rooms when neither is set."""


# ---- Openings ----

class AddOpeningParams(BaseModel):
    type: OpeningType
    wall: WallDirection
    width_ft: float
    height_ft: Optional[float] = None
    position: Position = NamedPosition.CENTER
    position_from: PositionFrom = PositionFrom.START
    sill_height_ft: Optional[float] = None


class DeleteOpeningParams(BaseModel):
    opening_index: Optional[int] = None
    opening_id: Optional[str] = None
    wall: Optional[WallDirection] = None
    type: Optional[OpeningType] = None


class UpdateOpeningParams(BaseModel):
    opening_id: Optional[str] = None
    wall: Optional[WallDirection] = None
    opening_index: Optional[int] = None  # within `wall` when a wall is given
    width_ft: Optional[float] = None
    height_ft: Optional[float] = None
    sill_height_ft: Optional[float] = None
    type: Optional[OpeningType] = None
    position: Optional[Position] = None
    position_from: Optional[PositionFrom] = None


class MoveOpeningParams(RoomRef):
    wall: WallDirection
    opening_index: int = 0  # among the openings on `wall`
    new_position_ft: Optional[float] = None
    position: Optional[NamedPosition] = None
    offset_ft: Optional[float] = None


# ---- Features ----

class AddFeatureParams(BaseModel):
    type: FeatureType
    wall: FeatureWall
    width_ft: float
    depth_ft: float
    position: Position = NamedPosition.CENTER
    position_from: PositionFrom = PositionFrom.START
    x_offset_ft: Optional[float] = None
    y_offset_ft: Optional[float] = None


class DeleteFeatureParams(BaseModel):
    feature_index: Optional[int] = None
    feature_id: Optional[str] = None
    wall: Optional[FeatureWall] = None
    type: Optional[FeatureType] = None


# ---- Damage ----

class MarkDamageParams(BaseModel):
    type: DamageType
    category: Optional[WaterCategory] = None
    affected_walls: list[WallDirection] = []
    floor_affected: Optional[bool] = None
    ceiling_affected: Optional[bool] = None
    extent_ft: Optional[float] = None
    severity: Optional[DamageSeverity] = None
    surface: Optional[DamageSurface] = None
    source: Optional[str] = None
    polygon: Optional[list[Point]] = None
    is_freeform: Optional[bool] = None


class EditDamageZoneParams(BaseModel):
    damage_index: Optional[int] = None
    damage_id: Optional[str] = None
    wall: Optional[WallDirection] = None
    type: Optional[DamageType] = None
    new_type: Optional[DamageType] = None
    new_category: Optional[WaterCategory] = None
    new_affected_walls: Optional[list[WallDirection]] = None
    new_floor_affected: Optional[bool] = None
    new_ceiling_affected: Optional[bool] = None
    new_extent_ft: Optional[float] = None
    new_severity: Optional[DamageSeverity] = None
    new_surface: Optional[DamageSurface] = None
    new_source: Optional[str] = None
    new_polygon: Optional[list[Point]] = None
    new_is_freeform: Optional[bool] = None


class DeleteDamageZoneParams(BaseModel):
    damage_index: Optional[int] = None
    damage_id: Optional[str] = None
    wall: Optional[WallDirection] = None
    type: Optional[DamageType] = None


# ---- Objects ----

class AddObjectParams(BaseModel):
    name: str
    type: Optional[str] = None
    x_ft: Optional[float] = None
    y_ft: Optional[float] = None
    width_ft: Optional[float] = None
    depth_ft: Optional[float] = None
    height_ft: Optional[float] = None
    condition: Optional[str] = None
    description: Optional[str] = None


class ObjectRef(BaseModel):
    object_index: Optional[int] = None
    object_id: Optional[str] = None
    object_name: Optional[str] = None
    type: Optional[str] = None


class EditObjectParams(ObjectRef):
    new_name: Optional[str] = None
    new_type: Optional[str] = None
    new_x_ft: Optional[float] = None
    new_y_ft: Optional[float] = None
    new_width_ft: Optional[float] = None
    new_depth_ft: Optional[float] = None
    new_height_ft: Optional[float] = None
    new_condition: Optional[str] = None
    new_description: Optional[str] = None


# ---- Walls ----

class MoveDirection(str, Enum):
    IN = "in"
    OUT = "out"
    LEFT = "left"
    RIGHT = "right"


class WallRef(RoomRef):
    reference: Optional[str] = None  # north/east/south/west or wall_N


class SelectWallParams(RoomRef):
    reference: str


class UpdateWallPropertiesParams(WallRef):
    length_ft: Optional[float] = None
    height_ft: Optional[float] = None
    is_exterior: Optional[bool] = None
    is_missing: Optional[bool] = None


class MoveWallParams(WallRef):
    offset_ft: float
    direction: MoveDirection = MoveDirection.OUT


# ---- Photos ----

class AddPhotoParams(BaseModel):
    label: str = "Photo"
    storage_url: Optional[str] = None
    annotations: list[str] = []
