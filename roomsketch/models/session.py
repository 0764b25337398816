"""Session state: everything the command engine owns between calls."""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .building import Photo, Room, Structure, new_id, utcnow
from .commands import CommandType, GeometryCommand
from .geometry import WallDirection


class SelectedWall(BaseModel):
    """Cursor left by select_wall for later wall operations."""
    room_id: str
    direction: WallDirection


class RoomRevision(BaseModel):
    """Audit record for an in-place edit of a confirmed room."""
    id: str = Field(default_factory=new_id)
    room_id: str
    command: CommandType
    before: Room
    timestamp: datetime = Field(default_factory=utcnow)


class SessionState(BaseModel):
    """
    Holds all state of one sketching session.

    The draft room is the only room under undo tracking; `undo_stack`
    holds full snapshots of it. Confirmed rooms are shared by reference
    with their structure's room list.
    """
    structures: list[Structure] = []
    current_structure_id: Optional[str] = None
    rooms: list[Room] = []
    current_room: Optional[Room] = None
    undo_stack: list[Room] = []
    command_history: list[GeometryCommand] = []
    revisions: list[RoomRevision] = []
    selected_wall: Optional[SelectedWall] = None

    def get_structure(self, structure_id: str | None) -> Structure | None:
        if structure_id is None:
            return None
        for s in self.structures:
            if s.id == structure_id:
                return s
        return None

    @property
    def current_structure(self) -> Structure | None:
        return self.get_structure(self.current_structure_id)

    def all_rooms(self) -> list[Room]:
        """Confirmed rooms plus the draft when it is not confirmed yet."""
        rooms = list(self.rooms)
        draft = self.current_room
        if draft is not None and all(r.id != draft.id for r in rooms):
            rooms.append(draft)
        return rooms


class SessionStats(BaseModel):
    """Summary counts over all rooms of the session."""
    structures: int = 0
    rooms: int = 0
    openings: int = 0
    features: int = 0
    damage_zones: int = 0
    total_area_sqft: float = 0.0
    total_perimeter_ft: float = 0.0

    @classmethod
    def from_state(cls, state: SessionState) -> SessionStats:
        rooms = state.all_rooms()
        return cls(
            structures=len(state.structures),
            rooms=len(rooms),
            openings=sum(len(r.openings) for r in rooms),
            features=sum(len(r.features) for r in rooms),
            damage_zones=sum(len(r.damage_zones) for r in rooms),
            total_area_sqft=round(sum(r.area_sqft for r in rooms), 2),
            total_perimeter_ft=round(sum(r.perimeter_ft for r in rooms), 2),
        )


class SessionSnapshot(BaseModel):
    """Read-only copy of the session for rendering or persistence."""
    structures: list[Structure]
    current_structure_id: Optional[str]
    rooms: list[Room]
    current_room: Optional[Room]
    selected_wall: Optional[SelectedWall]
    command_history: list[GeometryCommand]
    revisions: list[RoomRevision]
    undo_depth: int
    current_path: str
    stats: SessionStats


class PhotoResult(BaseModel):
    success: bool
    message: str
    photo: Optional[Photo] = None


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class CompletenessIssue(BaseModel):
    """Something a room still needs before an estimate can be built."""
    type: str
    room_id: str
    room_name: str
    message: str
    severity: IssueSeverity
