"""Typed parsing of the free-form target strings used by commands."""

from __future__ import annotations
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from roomsketch.errors import UnknownTargetError
from roomsketch.models import FeatureType, NoteTargetKind, OpeningType, WallDirection


class DimensionKind(str, Enum):
    ROOM_WIDTH = "room_width"
    ROOM_LENGTH = "room_length"
    CEILING_HEIGHT = "ceiling_height"
    OPENING = "opening"
    FEATURE = "feature"


class DimensionTarget(BaseModel):
    kind: DimensionKind
    index: Optional[int] = None


_INDEXED_RE = re.compile(r"^(opening|feature)_(\d+)$")

_VALID_FORMS = "room_width, room_length, ceiling_height, opening_N, or feature_N"


def parse_dimension_target(target: str) -> DimensionTarget:
    raw = target.strip().lower()
    match = _INDEXED_RE.match(raw)
    if match:
        return DimensionTarget(kind=DimensionKind(match.group(1)), index=int(match.group(2)))
    if raw in (DimensionKind.ROOM_WIDTH.value, DimensionKind.ROOM_LENGTH.value,
               DimensionKind.CEILING_HEIGHT.value):
        return DimensionTarget(kind=DimensionKind(raw))
    raise UnknownTargetError(f"Unknown target: {target}. Use {_VALID_FORMS}")


_WALL_NAMES = {d.value for d in WallDirection}
_OPENING_NAMES = {t.value for t in OpeningType}
_FEATURE_NAMES = {t.value for t in FeatureType}


def note_target_kind(target: str) -> NoteTargetKind:
    """Best-effort classification; anything unrecognised is OTHER."""
    raw = target.strip().lower().replace(" ", "_")
    if raw in ("room", ""):
        return NoteTargetKind.ROOM
    parts = raw.split("_")
    if "wall" in parts and (_WALL_NAMES & set(parts) or re.match(r"^wall_\d+$", raw)):
        return NoteTargetKind.WALL
    if raw.startswith("opening") or raw in _OPENING_NAMES:
        return NoteTargetKind.OPENING
    if raw.startswith("feature") or raw in _FEATURE_NAMES:
        return NoteTargetKind.FEATURE
    if raw.startswith("damage"):
        return NoteTargetKind.DAMAGE_ZONE
    if raw.startswith("object"):
        return NoteTargetKind.OBJECT
    return NoteTargetKind.OTHER
