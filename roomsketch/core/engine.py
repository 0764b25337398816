"""Command engine: turns structured sketch commands into session state.

Every public operation takes a parameter record (a pydantic model, a
plain dict, or keyword arguments) and returns a human-readable result
string. Failures come back as ``Error:`` strings; no exception crosses
the operation boundary and failed commands leave no trace in the state
or the command log.
"""

from __future__ import annotations
import functools
import logging
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from roomsketch.errors import (
    EntityNotFoundError, GeometryError, InvalidParametersError, NoChangesError,
    NothingToUndoError, PreconditionError, SketchError,
)
from roomsketch.models import (
    CommandType, CompletenessIssue, DamageZone, EngineConfig, Feature, FREESTANDING,
    GeometryCommand, HierarchyLevel, IssueSeverity, LShapeConfig, MoveDirection,
    NamedPosition, Note, Opening, Photo, PhotoResult, Point, PositionFrom, Room,
    RoomObject, RoomRevision, RoomShape, SelectedWall, SessionSnapshot, SessionState,
    SessionStats, Structure, TShapeConfig, WallDirection,
)
from roomsketch.models.building import new_id, utcnow
from roomsketch.models.commands import (
    AddFeatureParams, AddNoteParams, AddObjectParams, AddOpeningParams,
    AddPhotoParams, CompletenessParams, ConfirmRoomParams, CopyRoomParams,
    CreateRoomParams, CreateStructureParams, DeleteDamageZoneParams,
    DeleteFeatureParams, DeleteOpeningParams,
    EditDamageZoneParams, EditObjectParams, EditRoomParams, EditStructureParams,
    MarkDamageParams, ModifyDimensionParams, MoveOpeningParams, MoveWallParams,
    ObjectRef, RoomRef, RotateRoomParams, SelectWallParams, StructureRef,
    UndoParams, UpdateOpeningParams, UpdateWallPropertiesParams, WallRef,
)
from roomsketch.core import polygon, transform
from roomsketch.core.formatting import format_dimension as fmt
from roomsketch.core.formatting import format_room_name, normalize_room_name
from roomsketch.core.resolver import resolve_index
from roomsketch.core.targets import DimensionKind, note_target_kind, parse_dimension_target
from roomsketch.core.walls import (
    clamp_to_wall, parse_wall_reference, resolve_position, wall_length,
)

logger = logging.getLogger(__name__)

_NO_DRAFT = "No room started. Please create a room first."


def command(
    kind: CommandType,
    params_model: type[BaseModel],
    error_result: Callable[[str], Any] = str,
):
    """
    Mark an engine method as a command operation.

    The wrapper validates the parameter record, converts SketchError into
    a result via `error_result`, and appends a GeometryCommand to the log
    when the operation succeeds.
    """
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self: SketchEngine, params: Any = None, **kwargs: Any):
            logger.debug("command %s params=%r kwargs=%r", kind.value, params, kwargs)
            try:
                validated = _validate(params_model, params, kwargs)
                result = method(self, validated)
            except SketchError as exc:
                logger.warning("command %s failed: %s", kind.value, exc)
                return error_result(exc.render())

            message = result if isinstance(result, str) else result.message
            self.state.command_history.append(GeometryCommand(
                type=kind,
                params=validated.model_dump(mode="json", exclude_none=True),
                result=message,
            ))
            logger.info("command %s: %s", kind.value, message)
            return result

        wrapper.command_type = kind
        wrapper.params_model = params_model
        return wrapper
    return decorator


def _validate(model: type[BaseModel], params: Any, extra: dict[str, Any]) -> BaseModel:
    if isinstance(params, model) and not extra:
        # Nested records must not stay shared with the caller.
        return params.model_copy(deep=True)
    if isinstance(params, BaseModel):
        data = params.model_dump(exclude_unset=True)
    elif params is None:
        data = {}
    elif isinstance(params, dict):
        data = dict(params)
    else:
        # Scalar shorthand for single-argument commands, e.g. undo(2).
        data = {next(iter(model.model_fields)): params}
    data.update(extra)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'params'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidParametersError(f"Invalid parameters for {model.__name__}: {problems}") from None


class SketchEngine:
    """
    Session-scoped owner of structures, rooms, undo stack and command log.

    Single-threaded: callers invoke one operation at a time.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.state = SessionState()

    # ------------------------------------------------------------------
    # Structures
    # ------------------------------------------------------------------

    @command(CommandType.CREATE_STRUCTURE, CreateStructureParams)
    def create_structure(self, p: CreateStructureParams) -> str:
        name = p.name.strip()
        if not name:
            raise InvalidParametersError("Structure name must not be empty")
        structure = Structure(
            name=name,
            type=p.type,
            description=p.description,
            stories=p.stories,
            year_built=p.year_built,
            construction_type=p.construction_type,
            roof_type=p.roof_type,
        )
        self.state.structures.append(structure)
        self.state.current_structure_id = structure.id
        return (
            f"Created structure {structure.name} ({_label(p.type.value)}). "
            f"New rooms will be added to it."
        )

    @command(CommandType.EDIT_STRUCTURE, EditStructureParams)
    def edit_structure(self, p: EditStructureParams) -> str:
        structure = self._resolve_structure(p, "edit")
        changes: list[tuple[str, Any, str]] = []
        if p.new_name is not None:
            name = p.new_name.strip()
            if not name:
                raise InvalidParametersError("Structure name must not be empty")
            changes.append(("name", name, f"name to {name}"))
        if p.new_type is not None:
            changes.append(("type", p.new_type, f"type to {_label(p.new_type.value)}"))
        if p.new_description is not None:
            changes.append(("description", p.new_description, "description"))
        if p.new_stories is not None:
            changes.append(("stories", p.new_stories, f"stories to {p.new_stories}"))
        if p.new_year_built is not None:
            changes.append(("year_built", p.new_year_built, f"year built to {p.new_year_built}"))
        if p.new_construction_type is not None:
            changes.append(("construction_type", p.new_construction_type,
                            f"construction to {p.new_construction_type}"))
        if p.new_roof_type is not None:
            changes.append(("roof_type", p.new_roof_type, f"roof to {p.new_roof_type}"))
        if not changes:
            raise NoChangesError()

        old_name = structure.name
        for field, value, _ in changes:
            setattr(structure, field, value)
        structure.updated_at = utcnow()
        return f"Updated structure {old_name}: {', '.join(c[2] for c in changes)}"

    @command(CommandType.DELETE_STRUCTURE, StructureRef)
    def delete_structure(self, p: StructureRef) -> str:
        structure = self._resolve_structure(p, "delete")
        state = self.state

        removed = [r for r in state.rooms if r.structure_id == structure.id]
        state.rooms = [r for r in state.rooms if r.structure_id != structure.id]
        draft = state.current_room
        if draft is not None and draft.structure_id == structure.id:
            if all(r.id != draft.id for r in removed):
                removed.append(draft)
            self._clear_draft()
        removed_ids = {r.id for r in removed}
        if state.selected_wall is not None and state.selected_wall.room_id in removed_ids:
            state.selected_wall = None

        state.structures = [s for s in state.structures if s.id != structure.id]
        if state.current_structure_id == structure.id:
            state.current_structure_id = None
        return f"Deleted structure {structure.name} and {len(removed)} room(s)"

    @command(CommandType.SELECT_STRUCTURE, StructureRef)
    def select_structure(self, p: StructureRef) -> str:
        if p.structure_id is None and p.structure_name is None:
            raise InvalidParametersError("Specify structure_name or structure_id to select")
        structure = self._resolve_structure(p, "select")
        self.state.current_structure_id = structure.id
        return f"Selected structure {structure.name} ({len(structure.rooms)} room(s))"

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    @command(CommandType.CREATE_ROOM, CreateRoomParams)
    def create_room(self, p: CreateRoomParams) -> str:
        if p.structure_id is not None or p.structure_name is not None:
            structure = self._resolve_structure(
                StructureRef(structure_id=p.structure_id, structure_name=p.structure_name),
                "assign the room to",
            )
        else:
            structure = self.state.current_structure

        parent: Room | None = None
        if p.parent_room_id is not None or p.parent_room_name is not None:
            parent = self._find_room(p.parent_room_id, p.parent_room_name)
            if parent is None:
                raise EntityNotFoundError("Could not find the parent room for this sub-room.")

        ceiling = p.ceiling_height_ft
        if ceiling is None:
            ceiling = self.config.default_ceiling_height_ft
        if ceiling < 0:
            raise GeometryError("Ceiling height cannot be negative")

        vertices = p.polygon if p.shape == RoomShape.IRREGULAR else None
        points = polygon.synthesize(
            p.shape, p.width_ft, p.length_ft, p.l_shape_config, p.t_shape_config, vertices,
        )
        name = normalize_room_name(p.name)
        if not name:
            raise InvalidParametersError("Room name must contain letters or digits")

        if self.state.current_room is not None:
            self._checkpoint()

        room = Room(
            name=name,
            shape=p.shape,
            width_ft=p.width_ft,
            length_ft=p.length_ft,
            ceiling_height_ft=ceiling,
            flooring_type=p.flooring_type,
            l_shape_config=p.l_shape_config if p.shape == RoomShape.L_SHAPE else None,
            t_shape_config=p.t_shape_config if p.shape == RoomShape.T_SHAPE else None,
            vertices=vertices,
            polygon=points,
            structure_id=structure.id if structure else None,
            parent_room_id=parent.id if parent else None,
            hierarchy_level=HierarchyLevel.SUBROOM if parent else HierarchyLevel.ROOM,
        )
        self.state.current_room = room
        self.state.selected_wall = None

        result = f"Created {format_room_name(name)}: {fmt(p.width_ft)} × {fmt(p.length_ft)}"
        if p.shape != RoomShape.RECTANGLE:
            result += f" ({_label(p.shape.value)})"
        if parent is not None:
            result += f" inside {format_room_name(parent.name)}"
        if structure is not None:
            result += f" in {structure.name}"
        return result

    @command(CommandType.EDIT_ROOM, EditRoomParams)
    def edit_room(self, p: EditRoomParams) -> str:
        room, is_draft = self._resolve_room(p, "edit")
        updated = room.model_copy(deep=True)
        changes: list[str] = []
        geometry_changed = False

        if p.new_name:
            name = normalize_room_name(p.new_name)
            if not name:
                raise InvalidParametersError("Room name must contain letters or digits")
            updated.name = name
            changes.append(f"name to {format_room_name(name)}")
        if p.new_shape is not None:
            updated.shape = p.new_shape
            geometry_changed = True
            changes.append(f"shape to {p.new_shape.value}")
        if p.new_width_ft is not None:
            updated.width_ft = p.new_width_ft
            geometry_changed = True
            changes.append(f"width to {fmt(p.new_width_ft)}")
        if p.new_length_ft is not None:
            updated.length_ft = p.new_length_ft
            geometry_changed = True
            changes.append(f"length to {fmt(p.new_length_ft)}")
        if p.new_ceiling_height_ft is not None:
            if p.new_ceiling_height_ft < 0:
                raise GeometryError("Ceiling height cannot be negative")
            updated.ceiling_height_ft = p.new_ceiling_height_ft
            changes.append(f"ceiling height to {fmt(p.new_ceiling_height_ft)}")
        if p.new_flooring_type is not None:
            updated.flooring_type = p.new_flooring_type
            changes.append(f"flooring to {p.new_flooring_type.value}")
        if p.new_l_shape_config is not None:
            updated.l_shape_config = _merge_config(
                LShapeConfig, updated.l_shape_config, p.new_l_shape_config, "L-shape")
            geometry_changed = True
            cfg = updated.l_shape_config
            changes.append(
                f"L-shape notch to {cfg.notch_corner.value} "
                f"{fmt(cfg.notch_width_ft)} × {fmt(cfg.notch_length_ft)}"
            )
        if p.new_t_shape_config is not None:
            updated.t_shape_config = _merge_config(
                TShapeConfig, updated.t_shape_config, p.new_t_shape_config, "T-shape")
            geometry_changed = True
            cfg = updated.t_shape_config
            changes.append(
                f"T-shape stem to {cfg.stem_wall.value} wall "
                f"{fmt(cfg.stem_width_ft)} × {fmt(cfg.stem_length_ft)}"
            )
        if p.new_polygon is not None:
            updated.vertices = p.new_polygon
            geometry_changed = True
            changes.append(f"outline to {len(p.new_polygon)} points")

        if not changes:
            raise NoChangesError()
        if geometry_changed:
            _regenerate(updated)

        self._commit(room, updated, is_draft, CommandType.EDIT_ROOM)
        return f"Updated {format_room_name(room.name)}: {', '.join(changes)}"

    @command(CommandType.DELETE_ROOM, RoomRef)
    def delete_room(self, p: RoomRef) -> str:
        room, _ = self._resolve_room(p, "delete")
        state = self.state
        self._detach_confirmed(room.id)
        if state.current_room is not None and state.current_room.id == room.id:
            self._clear_draft()
        if state.selected_wall is not None and state.selected_wall.room_id == room.id:
            state.selected_wall = None
        return f"Deleted {format_room_name(room.name)}"

    @command(CommandType.CONFIRM_ROOM, ConfirmRoomParams)
    def confirm_room(self, p: ConfirmRoomParams) -> str:
        draft = self.state.current_room
        if draft is None:
            raise PreconditionError("No room to confirm. Please create a room first.")

        draft.updated_at = utcnow()
        confirmed = draft.model_copy(deep=True)
        _upsert(self.state.rooms, confirmed)
        structure = self.state.get_structure(confirmed.structure_id)
        if structure is not None:
            _upsert(structure.rooms, confirmed)
            structure.updated_at = confirmed.updated_at

        # Commit boundary: history from before the confirm cannot be undone.
        self.state.undo_stack = []
        if p.ready_for_next:
            self.state.current_room = None
            self.state.selected_wall = None
        return f"{format_room_name(confirmed.name)} confirmed and saved"

    @command(CommandType.MODIFY_DIMENSION, ModifyDimensionParams)
    def modify_dimension(self, p: ModifyDimensionParams) -> str:
        draft = self._require_draft()
        target = parse_dimension_target(p.target)
        value = p.new_value_ft
        updated = draft.model_copy(deep=True)

        if target.kind == DimensionKind.ROOM_WIDTH:
            updated.width_ft = value
            _regenerate(updated)
            message = f"Updated room width to {fmt(value)}"
        elif target.kind == DimensionKind.ROOM_LENGTH:
            updated.length_ft = value
            _regenerate(updated)
            message = f"Updated room length to {fmt(value)}"
        elif target.kind == DimensionKind.CEILING_HEIGHT:
            if value < 0:
                raise GeometryError("Ceiling height cannot be negative")
            updated.ceiling_height_ft = value
            message = f"Updated ceiling height to {fmt(value)}"
        elif target.kind == DimensionKind.OPENING:
            _positive(value, "Opening width")
            opening = _at(updated.openings, target.index, "opening")
            opening.width_ft = value
            message = f"Updated {opening.type.value} width to {fmt(value)}"
        elif target.kind == DimensionKind.FEATURE:
            _positive(value, "Feature width")
            feature = _at(updated.features, target.index, "feature")
            feature.width_ft = value
            message = f"Updated {feature.type.value} width to {fmt(value)}"
        else:
            raise AssertionError(f"unhandled dimension target {target.kind}")

        self._commit(draft, updated, True, CommandType.MODIFY_DIMENSION)
        return message

    @command(CommandType.ADD_NOTE, AddNoteParams)
    def add_note(self, p: AddNoteParams) -> str:
        # Notes are additive and deliberately outside undo tracking.
        note = Note(target=p.target, target_kind=note_target_kind(p.target), note=p.note)
        draft = self.state.current_room
        if draft is not None:
            draft.notes.append(note)
            draft.updated_at = utcnow()
        elif self.state.current_structure is not None:
            structure = self.state.current_structure
            structure.notes.append(note)
            structure.updated_at = utcnow()
        else:
            raise PreconditionError(_NO_DRAFT)
        return f'Added note to {p.target}: "{p.note}"'

    @command(CommandType.UNDO, UndoParams)
    def undo(self, p: UndoParams) -> str:
        stack = self.state.undo_stack
        if not stack:
            raise NothingToUndoError()
        steps = max(1, min(p.steps, len(stack)))
        restored = stack[len(stack) - steps]
        self.state.undo_stack = stack[:len(stack) - steps]
        self.state.current_room = restored
        wall = self.state.selected_wall
        if wall is not None and (restored is None or wall.room_id != restored.id):
            self.state.selected_wall = None
        return f"Undid {steps} action(s)"

    # ------------------------------------------------------------------
    # Openings
    # ------------------------------------------------------------------

    @command(CommandType.ADD_OPENING, AddOpeningParams)
    def add_opening(self, p: AddOpeningParams) -> str:
        draft = self._require_draft()
        _positive(p.width_ft, "Opening width")

        height = p.height_ft
        if not height:
            height = self.config.door_height_ft if p.type.is_door else self.config.window_height_ft
        sill = p.sill_height_ft
        if sill is None and p.type.value == "window":
            sill = self.config.window_sill_height_ft

        position, position_from = self._place(
            p.wall, p.position, p.position_from, p.width_ft, draft)

        self._checkpoint()
        draft.openings.append(Opening(
            type=p.type,
            wall=p.wall,
            width_ft=p.width_ft,
            height_ft=height,
            position=position,
            position_from=position_from,
            sill_height_ft=sill,
        ))
        draft.updated_at = utcnow()
        return (
            f"Added {fmt(p.width_ft)} {p.type.value} on {p.wall.value} wall "
            f"({_describe_position(p.position, p.position_from)})"
        )

    @command(CommandType.DELETE_OPENING, DeleteOpeningParams)
    def delete_opening(self, p: DeleteOpeningParams) -> str:
        draft = self._require_draft()
        filters = []
        if p.wall is not None and p.type is not None:
            filters.append((f"{p.wall.value} wall {p.type.value}",
                            lambda o: o.wall == p.wall and o.type == p.type))
        if p.wall is not None:
            filters.append((f"{p.wall.value} wall", lambda o: o.wall == p.wall))
        if p.type is not None:
            filters.append((f"type {p.type.value}", lambda o: o.type == p.type))
        i = resolve_index(draft.openings, label="opening", action="delete",
                          index=p.opening_index, entity_id=p.opening_id, filters=filters)

        self._checkpoint()
        opening = draft.openings.pop(i)
        draft.updated_at = utcnow()
        return f"Deleted {opening.type.value} on {opening.wall.value} wall"

    @command(CommandType.UPDATE_OPENING, UpdateOpeningParams)
    def update_opening(self, p: UpdateOpeningParams) -> str:
        draft = self._require_draft()
        index = None
        filters = []
        if p.wall is not None and p.opening_index is not None:
            on_wall = [i for i, o in enumerate(draft.openings) if o.wall == p.wall]
            if not 0 <= p.opening_index < len(on_wall):
                raise EntityNotFoundError(
                    f"Opening index {p.opening_index} not found. The {p.wall.value} wall "
                    f"has {len(on_wall)} opening(s)."
                )
            index = on_wall[p.opening_index]
        else:
            index = p.opening_index
            if p.wall is not None:
                filters.append((f"{p.wall.value} wall", lambda o: o.wall == p.wall))
        i = resolve_index(draft.openings, label="opening", action="update",
                          index=index, entity_id=p.opening_id, filters=filters)

        opening = draft.openings[i]
        changes: list[tuple[str, Any, str]] = []
        if p.width_ft is not None:
            _positive(p.width_ft, "Opening width")
            changes.append(("width_ft", p.width_ft, f"width to {fmt(p.width_ft)}"))
        if p.height_ft is not None:
            changes.append(("height_ft", p.height_ft, f"height to {fmt(p.height_ft)}"))
        if p.sill_height_ft is not None:
            changes.append(("sill_height_ft", p.sill_height_ft, f"sill height to {fmt(p.sill_height_ft)}"))
        if p.type is not None:
            changes.append(("type", p.type, f"type to {p.type.value}"))
        if p.position is not None:
            changes.append(("position", p.position,
                            f"position to {_describe_position(p.position, p.position_from)}"))
        if p.position_from is not None:
            changes.append(("position_from", p.position_from, f"measured from {p.position_from.value}"))
        if not changes:
            raise NoChangesError()

        self._checkpoint()
        for field, value, _ in changes:
            setattr(opening, field, value)
        draft.updated_at = utcnow()
        return (
            f"Updated {opening.type.value} on {opening.wall.value} wall: "
            f"{', '.join(c[2] for c in changes)}"
        )

    @command(CommandType.MOVE_OPENING, MoveOpeningParams)
    def move_opening(self, p: MoveOpeningParams) -> str:
        room, is_draft = self._resolve_room(p, "move an opening in")
        on_wall = [i for i, o in enumerate(room.openings) if o.wall == p.wall]
        if not on_wall:
            raise EntityNotFoundError(f"No openings found on the {p.wall.value} wall.")
        if not 0 <= p.opening_index < len(on_wall):
            raise EntityNotFoundError(
                f"Opening index {p.opening_index} not found. The {p.wall.value} wall "
                f"has {len(on_wall)} opening(s)."
            )
        i = on_wall[p.opening_index]
        opening = room.openings[i]
        wall_len = wall_length(p.wall, room.width_ft, room.length_ft)
        clearance = self.config.position_clearance_ft

        if p.new_position_ft is not None:
            target = p.new_position_ft
        elif p.position is not None:
            target = resolve_position(wall_len, p.position, PositionFrom.START,
                                      opening.width_ft, clearance)
        elif p.offset_ft is not None:
            current = resolve_position(wall_len, opening.position, opening.position_from,
                                       opening.width_ft, clearance)
            target = current + p.offset_ft
        else:
            raise InvalidParametersError("Specify new_position_ft, position, or offset_ft.")
        target = clamp_to_wall(target, wall_len, opening.width_ft)

        updated = room.model_copy(deep=True)
        updated.openings[i].position = target
        updated.openings[i].position_from = PositionFrom.START
        self._commit(room, updated, is_draft, CommandType.MOVE_OPENING)
        return f"Moved {opening.type.value} on {p.wall.value} wall to {target:.1f}' from start."

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    @command(CommandType.ADD_FEATURE, AddFeatureParams)
    def add_feature(self, p: AddFeatureParams) -> str:
        draft = self._require_draft()
        _positive(p.width_ft, "Feature width")
        _positive(p.depth_ft, "Feature depth")

        position, position_from = p.position, p.position_from
        if p.wall != FREESTANDING:
            position, position_from = self._place(
                WallDirection(p.wall), p.position, p.position_from, p.width_ft, draft)

        self._checkpoint()
        draft.features.append(Feature(
            type=p.type,
            wall=p.wall,
            width_ft=p.width_ft,
            depth_ft=p.depth_ft,
            position=position,
            position_from=position_from,
            x_offset_ft=p.x_offset_ft,
            y_offset_ft=p.y_offset_ft,
        ))
        draft.updated_at = utcnow()

        if p.wall == FREESTANDING:
            where = "freestanding"
            parts = []
            if p.y_offset_ft is not None:
                parts.append(f"{fmt(p.y_offset_ft)} from south wall")
            if p.x_offset_ft is not None:
                parts.append(f"{fmt(p.x_offset_ft)} from west wall")
            if parts:
                where = f"freestanding, {', '.join(parts)}"
        else:
            where = f"on {_wall_name(p.wall)} wall"
        return f"Added {fmt(p.width_ft)} × {fmt(p.depth_ft)} {p.type.value} {where}"

    @command(CommandType.DELETE_FEATURE, DeleteFeatureParams)
    def delete_feature(self, p: DeleteFeatureParams) -> str:
        draft = self._require_draft()
        filters = []
        if p.wall is not None:
            filters.append((f"{_wall_name(p.wall)} wall", lambda f: f.wall == p.wall))
        if p.type is not None:
            filters.append((f"type {p.type.value}", lambda f: f.type == p.type))
        i = resolve_index(draft.features, label="feature", action="delete",
                          index=p.feature_index, entity_id=p.feature_id, filters=filters)

        self._checkpoint()
        feature = draft.features.pop(i)
        draft.updated_at = utcnow()
        where = "" if feature.is_freestanding else f" on {_wall_name(feature.wall)} wall"
        return f"Deleted {feature.type.value}{where}"

    # ------------------------------------------------------------------
    # Damage zones
    # ------------------------------------------------------------------

    @command(CommandType.MARK_DAMAGE, MarkDamageParams)
    def mark_damage(self, p: MarkDamageParams) -> str:
        draft = self._require_draft()
        is_freeform = bool(p.is_freeform)
        if is_freeform and not p.polygon:
            raise InvalidParametersError("A freeform damage zone needs a polygon")
        extent = p.extent_ft if p.extent_ft is not None else self.config.default_damage_extent_ft
        if extent < 0:
            raise GeometryError("Damage extent cannot be negative")

        floor, ceiling = p.surface.flags() if p.surface is not None else (True, False)
        if p.floor_affected is not None:
            floor = p.floor_affected
        if p.ceiling_affected is not None:
            ceiling = p.ceiling_affected

        zone = DamageZone(
            type=p.type,
            category=p.category,
            affected_walls=p.affected_walls,
            floor_affected=floor,
            ceiling_affected=ceiling,
            extent_ft=extent,
            severity=p.severity,
            surface=p.surface,
            source=p.source,
            polygon=p.polygon,
            is_freeform=is_freeform,
        )
        self._checkpoint()
        draft.damage_zones.append(zone)
        draft.updated_at = utcnow()

        category = f"Category {p.category.value} " if p.category else ""
        if is_freeform:
            where = f"as freeform zone ({len(p.polygon)} points)"
        elif p.affected_walls:
            walls = ", ".join(w.value for w in p.affected_walls)
            where = f"on {walls} wall(s), {fmt(extent)} extent"
        else:
            where = f"{fmt(extent)} extent"
        surfaces = [s for s, hit in (("floor", floor), ("ceiling", ceiling)) if hit]
        surface_str = f", affecting {' and '.join(surfaces)}" if surfaces else ""
        return f"Marked {category}{p.type.value} damage {where}{surface_str}"

    @command(CommandType.EDIT_DAMAGE_ZONE, EditDamageZoneParams)
    def edit_damage_zone(self, p: EditDamageZoneParams) -> str:
        draft = self._require_draft()
        i = resolve_index(draft.damage_zones, label="damage zone", action="edit",
                          index=p.damage_index, entity_id=p.damage_id,
                          filters=_damage_filters(p.wall, p.type))
        zone = draft.damage_zones[i]

        changes: list[tuple[str, Any, str]] = []
        if p.new_type is not None:
            changes.append(("type", p.new_type, f"type to {p.new_type.value}"))
        if p.new_category is not None:
            changes.append(("category", p.new_category, f"category to {p.new_category.value}"))
        if p.new_affected_walls is not None:
            walls = ", ".join(w.value for w in p.new_affected_walls)
            changes.append(("affected_walls", p.new_affected_walls, f"affected walls to {walls}"))
        if p.new_surface is not None:
            changes.append(("surface", p.new_surface, f"surface to {p.new_surface.value}"))
            floor, ceiling = p.new_surface.flags()
            if p.new_floor_affected is None:
                changes.append(("floor_affected", floor, f"floor affected to {floor}"))
            if p.new_ceiling_affected is None:
                changes.append(("ceiling_affected", ceiling, f"ceiling affected to {ceiling}"))
        if p.new_floor_affected is not None:
            changes.append(("floor_affected", p.new_floor_affected,
                            f"floor affected to {p.new_floor_affected}"))
        if p.new_ceiling_affected is not None:
            changes.append(("ceiling_affected", p.new_ceiling_affected,
                            f"ceiling affected to {p.new_ceiling_affected}"))
        if p.new_extent_ft is not None:
            if p.new_extent_ft < 0:
                raise GeometryError("Damage extent cannot be negative")
            changes.append(("extent_ft", p.new_extent_ft, f"extent to {fmt(p.new_extent_ft)}"))
        if p.new_severity is not None:
            changes.append(("severity", p.new_severity, f"severity to {p.new_severity.value}"))
        if p.new_source:
            changes.append(("source", p.new_source, f'source to "{p.new_source}"'))
        if p.new_polygon is not None:
            changes.append(("polygon", p.new_polygon, f"polygon to {len(p.new_polygon)} points"))
        if p.new_is_freeform is not None:
            changes.append(("is_freeform", p.new_is_freeform, f"freeform to {p.new_is_freeform}"))
        if not changes:
            raise NoChangesError()

        freeform = p.new_is_freeform if p.new_is_freeform is not None else zone.is_freeform
        shape = p.new_polygon if p.new_polygon is not None else zone.polygon
        if freeform and not shape:
            raise InvalidParametersError("A freeform damage zone needs a polygon")

        self._checkpoint()
        old_type = zone.type
        for field, value, _ in changes:
            setattr(zone, field, value)
        draft.updated_at = utcnow()
        return f"Updated {old_type.value} damage zone: {', '.join(c[2] for c in changes)}"

    @command(CommandType.DELETE_DAMAGE_ZONE, DeleteDamageZoneParams)
    def delete_damage_zone(self, p: DeleteDamageZoneParams) -> str:
        draft = self._require_draft()
        i = resolve_index(draft.damage_zones, label="damage zone", action="delete",
                          index=p.damage_index, entity_id=p.damage_id,
                          filters=_damage_filters(p.wall, p.type))
        self._checkpoint()
        zone = draft.damage_zones.pop(i)
        draft.updated_at = utcnow()
        return f"Deleted {zone.type.value} damage zone"

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    @command(CommandType.ADD_OBJECT, AddObjectParams)
    def add_object(self, p: AddObjectParams) -> str:
        draft = self._require_draft()
        name = p.name.strip()
        if not name:
            raise InvalidParametersError("Object name must not be empty")
        self._checkpoint()
        draft.objects.append(RoomObject(name=name, **p.model_dump(exclude={"name"})))
        draft.updated_at = utcnow()
        where = ""
        if p.x_ft is not None and p.y_ft is not None:
            where = f" at {fmt(p.x_ft)}, {fmt(p.y_ft)}"
        return f"Added {name} to {format_room_name(draft.name)}{where}"

    @command(CommandType.EDIT_OBJECT, EditObjectParams)
    def edit_object(self, p: EditObjectParams) -> str:
        draft = self._require_draft()
        i = self._resolve_object(draft, p, "edit")
        obj = draft.objects[i]
        changes: list[tuple[str, Any, str]] = []
        for field in ("name", "type", "x_ft", "y_ft", "width_ft", "depth_ft",
                      "height_ft", "condition", "description"):
            value = getattr(p, f"new_{field}")
            if value is not None:
                shown = fmt(value) if field.endswith("_ft") else value
                changes.append((field, value, f"{field.replace('_ft', '')} to {shown}"))
        if not changes:
            raise NoChangesError()

        self._checkpoint()
        old_name = obj.name
        for field, value, _ in changes:
            setattr(obj, field, value)
        draft.updated_at = utcnow()
        return f"Updated {old_name}: {', '.join(c[2] for c in changes)}"

    @command(CommandType.DELETE_OBJECT, ObjectRef)
    def delete_object(self, p: ObjectRef) -> str:
        draft = self._require_draft()
        i = self._resolve_object(draft, p, "delete")
        self._checkpoint()
        obj = draft.objects.pop(i)
        draft.updated_at = utcnow()
        return f"Deleted {obj.name}"

    # ------------------------------------------------------------------
    # Walls
    # ------------------------------------------------------------------

    @command(CommandType.SELECT_WALL, SelectWallParams)
    def select_wall(self, p: SelectWallParams) -> str:
        room, _ = self._resolve_room(p, "select a wall in")
        direction = parse_wall_reference(p.reference)
        self.state.selected_wall = SelectedWall(room_id=room.id, direction=direction)

        props = room.wall_properties.get(direction)
        flags = ""
        if props is not None:
            tags = [t for t, on in (("exterior", props.is_exterior), ("missing", props.is_missing)) if on]
            if tags:
                flags = f" - {', '.join(tags)}"
        length = wall_length(direction, room.width_ft, room.length_ft)
        return (
            f"Selected {direction.value} wall of {format_room_name(room.name)} "
            f"({fmt(length)}){flags}"
        )

    @command(CommandType.UPDATE_WALL_PROPERTIES, UpdateWallPropertiesParams)
    def update_wall_properties(self, p: UpdateWallPropertiesParams) -> str:
        room, is_draft, direction = self._resolve_wall(p, "update")
        updated = room.model_copy(deep=True)
        props = updated.wall(direction)
        changes: list[str] = []

        if p.length_ft is not None:
            if direction in (WallDirection.NORTH, WallDirection.SOUTH):
                updated.width_ft = p.length_ft
                changes.append(f"length to {fmt(p.length_ft)} (room width now {fmt(p.length_ft)})")
            else:
                updated.length_ft = p.length_ft
                changes.append(f"length to {fmt(p.length_ft)} (room length now {fmt(p.length_ft)})")
            _regenerate(updated)
        if p.height_ft is not None:
            _positive(p.height_ft, "Wall height")
            props.height_ft = p.height_ft
            changes.append(f"height to {fmt(p.height_ft)}")
        if p.is_exterior is not None:
            props.is_exterior = p.is_exterior
            changes.append("exterior" if p.is_exterior else "interior")
        if p.is_missing is not None:
            props.is_missing = p.is_missing
            changes.append("missing/open" if p.is_missing else "present")
        if not changes:
            raise NoChangesError()

        self._commit(room, updated, is_draft, CommandType.UPDATE_WALL_PROPERTIES)
        self.state.selected_wall = SelectedWall(room_id=room.id, direction=direction)
        return (
            f"Updated {direction.value} wall of {format_room_name(room.name)}: "
            f"{', '.join(changes)}"
        )

    @command(CommandType.MOVE_WALL, MoveWallParams)
    def move_wall(self, p: MoveWallParams) -> str:
        room, is_draft, direction = self._resolve_wall(p, "move")
        delta = _signed_wall_offset(direction, p.direction, p.offset_ft)

        updated = room.model_copy(deep=True)
        if direction in (WallDirection.NORTH, WallDirection.SOUTH):
            new_value = updated.length_ft + delta
            axis = "length"
        else:
            new_value = updated.width_ft + delta
            axis = "width"
        if new_value <= 0:
            raise GeometryError(
                f"Moving the {direction.value} wall {p.direction.value} by {fmt(abs(p.offset_ft))} "
                f"would collapse the room's {axis}"
            )
        setattr(updated, f"{axis}_ft", new_value)
        _regenerate(updated)

        self._commit(room, updated, is_draft, CommandType.MOVE_WALL)
        self.state.selected_wall = SelectedWall(room_id=room.id, direction=direction)
        return (
            f"Moved {direction.value} wall {p.direction.value} {fmt(abs(p.offset_ft))}: "
            f"{format_room_name(room.name)} is now {fmt(updated.width_ft)} × {fmt(updated.length_ft)}"
        )

    # ------------------------------------------------------------------
    # Whole-room manipulation
    # ------------------------------------------------------------------

    @command(CommandType.COPY_ROOM, CopyRoomParams)
    def copy_room(self, p: CopyRoomParams) -> str:
        source, _ = self._resolve_room(p, "copy")
        name = normalize_room_name(p.new_name) if p.new_name is not None else f"{source.name}_copy"
        if not name:
            raise InvalidParametersError("Room name must contain letters or digits")
        if self._find_room(None, name) is not None:
            raise InvalidParametersError(f"A room named {format_room_name(name)} already exists")

        copy = source.model_copy(deep=True)
        copy.id = new_id()
        copy.name = name
        for item in (*copy.openings, *copy.features, *copy.damage_zones, *copy.notes):
            item.id = new_id()
        # Contents and photos belong to the original room only.
        copy.objects = []
        copy.photos = []
        copy.created_at = copy.updated_at = utcnow()

        # The copy is saved directly, outside the draft's undo history.
        _upsert(self.state.rooms, copy)
        structure = self._structure_for(copy)
        if structure is not None:
            _upsert(structure.rooms, copy)
            structure.updated_at = copy.updated_at
        return f"Copied {format_room_name(source.name)} to {format_room_name(name)}"

    @command(CommandType.ROTATE_ROOM, RotateRoomParams)
    def rotate_room(self, p: RotateRoomParams) -> str:
        degrees = p.degrees % 360
        if p.degrees % 90 != 0 or degrees == 0:
            raise InvalidParametersError("Rooms rotate by 90, 180 or 270 degrees")
        room, is_draft = self._resolve_room(p, "rotate")
        updated = transform.rotate(room, degrees)
        _regenerate(updated)

        self._commit(room, updated, is_draft, CommandType.ROTATE_ROOM)
        cursor = self.state.selected_wall
        if cursor is not None and cursor.room_id == room.id:
            direction = cursor.direction
            for _ in range(degrees // 90):
                direction = transform.rotate_wall(direction)
            self.state.selected_wall = SelectedWall(room_id=room.id, direction=direction)
        return (
            f"Rotated {format_room_name(room.name)} {degrees} degrees. Room is now "
            f"{fmt(updated.width_ft)} × {fmt(updated.length_ft)}"
        )

    @command(CommandType.CHECK_SKETCH_COMPLETENESS, CompletenessParams)
    def check_sketch_completeness(self, p: CompletenessParams) -> str:
        rooms = self.state.all_rooms()
        if p.structure_id is not None or p.structure_name:
            structure = self._resolve_structure(p, "check")
            rooms = [r for r in rooms if r.structure_id == structure.id]
        if not rooms:
            return "No rooms in the sketch yet. Create rooms using create_room."

        issues = find_completeness_issues(rooms)
        if not issues:
            return f"Sketch is complete! {len(rooms)} room(s) with all required geometry data."
        errors = sum(1 for i in issues if i.severity == IssueSeverity.ERROR)
        warnings = sum(1 for i in issues if i.severity == IssueSeverity.WARNING)
        listing = "\n".join(f"- {i.message}" for i in issues)
        return f"Found {len(issues)} issue(s) ({errors} errors, {warnings} warnings):\n{listing}"

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    @command(CommandType.ADD_PHOTO, AddPhotoParams,
             error_result=lambda message: PhotoResult(success=False, message=message))
    def add_photo(self, p: AddPhotoParams) -> PhotoResult:
        draft = self.state.current_room
        structure = self._structure_for(draft) if draft is not None else self.state.current_structure
        if draft is None and structure is None:
            raise PreconditionError("Create a structure or room before capturing photos.")

        path = self.current_path()
        photo = Photo(
            label=p.label,
            storage_url=p.storage_url,
            annotations=p.annotations,
            hierarchy_path=path,
            structure_id=structure.id if structure else None,
            room_id=draft.id if draft else None,
        )
        owner = draft if draft is not None else structure
        owner.photos.append(photo)
        owner.updated_at = utcnow()
        return PhotoResult(
            success=True,
            message=f'Photo "{p.label}" attached to {path}',
            photo=photo.model_copy(deep=True),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_room_by_name(self, name: str) -> Room | None:
        room = self._find_room(None, name)
        return room.model_copy(deep=True) if room is not None else None

    def current_path(self) -> str:
        """Display path such as "Main House > Kitchen > Pantry"."""
        draft = self.state.current_room
        structure = self._structure_for(draft) if draft is not None else self.state.current_structure
        parts: list[str] = []
        if structure is not None:
            parts.append(structure.name)
        if draft is not None:
            if draft.parent_room_id is not None:
                parent = self._find_room(draft.parent_room_id, None)
                if parent is not None:
                    parts.append(format_room_name(parent.name))
            parts.append(format_room_name(draft.name))
        return " > ".join(parts)

    def damage_footprints(self, room_name: str | None = None) -> dict[str, list[list[Point]]]:
        """Footprints of every damage zone of a room (default: the draft)."""
        room = self._find_room(None, room_name) if room_name else self.state.current_room
        if room is None:
            return {}
        return {
            zone.id: polygon.damage_footprints(zone, room.width_ft, room.length_ft)
            for zone in room.damage_zones
        }

    def snapshot(self) -> SessionSnapshot:
        state = self.state.model_copy(deep=True)
        return SessionSnapshot(
            structures=state.structures,
            current_structure_id=state.current_structure_id,
            rooms=state.rooms,
            current_room=state.current_room,
            selected_wall=state.selected_wall,
            command_history=state.command_history,
            revisions=state.revisions,
            undo_depth=len(state.undo_stack),
            current_path=self.current_path(),
            stats=SessionStats.from_state(state),
        )

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    def reset_session(self) -> None:
        self.state = SessionState()
        logger.info("session reset")

    def load_from_claim_data(self, structures: list[Any], rooms: list[Any]) -> str:
        """Replace structures and rooms with persisted records.

        Bypasses the command log. The draft, undo stack and wall cursor
        are cleared.
        """
        try:
            loaded_structures = [Structure.model_validate(_plain(s)) for s in structures]
            loaded_rooms = self._hydrate_rooms(rooms)
        except ValidationError as exc:
            logger.warning("hydration rejected: %s", exc)
            return f"Error: Could not load claim data: {exc.error_count()} invalid field(s)"
        except SketchError as exc:
            logger.warning("hydration rejected: %s", exc)
            return exc.render()

        state = self.state
        state.structures = loaded_structures
        state.rooms = loaded_rooms
        state.current_structure_id = None
        self._clear_draft()
        state.selected_wall = None
        self._link_structures()
        logger.info("loaded %d structure(s), %d room(s)", len(loaded_structures), len(loaded_rooms))
        return f"Loaded {len(loaded_structures)} structure(s) and {len(loaded_rooms)} room(s)"

    def load_rooms(self, rooms: list[Any]) -> str:
        """Replace the confirmed rooms, keeping structures and the draft."""
        try:
            loaded = self._hydrate_rooms(rooms)
        except ValidationError as exc:
            logger.warning("hydration rejected: %s", exc)
            return f"Error: Could not load rooms: {exc.error_count()} invalid field(s)"
        except SketchError as exc:
            logger.warning("hydration rejected: %s", exc)
            return exc.render()
        self.state.rooms = loaded
        self._link_structures()
        logger.info("loaded %d room(s)", len(loaded))
        return f"Loaded {len(loaded)} room(s)"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_draft(self) -> Room:
        if self.state.current_room is None:
            raise PreconditionError(_NO_DRAFT)
        return self.state.current_room

    def _checkpoint(self) -> None:
        """Push a snapshot of the draft before it is mutated."""
        self.state.undo_stack.append(self.state.current_room.model_copy(deep=True))

    def _clear_draft(self) -> None:
        self.state.current_room = None
        self.state.undo_stack = []

    def _commit(self, room: Room, updated: Room, is_draft: bool, kind: CommandType) -> None:
        """Store an edited copy of `room` as the draft or in place."""
        updated.updated_at = utcnow()
        if is_draft:
            self._checkpoint()
            self.state.current_room = updated
            return
        # Confirmed rooms are shared with their structure; edit in place
        # and keep an audit record since undo does not reach them.
        self.state.revisions.append(RoomRevision(
            room_id=room.id, command=kind, before=room.model_copy(deep=True)))
        for field in Room.model_fields:
            setattr(room, field, getattr(updated, field))

    def _place(self, wall, position, position_from, width, room):
        if not self.config.clamp_initial_placement:
            return position, position_from
        wall_len = wall_length(wall, room.width_ft, room.length_ft)
        offset = resolve_position(wall_len, position, position_from, width,
                                  self.config.position_clearance_ft)
        return clamp_to_wall(offset, wall_len, width), PositionFrom.START

    def _find_room(self, room_id: str | None, name: str | None) -> Room | None:
        rooms = self.state.all_rooms()
        if room_id is not None:
            for r in rooms:
                if r.id == room_id:
                    return r
        if name:
            wanted = normalize_room_name(name)
            for r in rooms:
                if r.name == wanted:
                    return r
        return None

    def _resolve_room(self, ref: RoomRef, action: str) -> tuple[Room, bool]:
        """(room, is_draft). Id first, then name, then the draft."""
        draft = self.state.current_room
        if ref.room_id is not None or ref.room_name:
            room = self._find_room(ref.room_id, ref.room_name)
            if room is None:
                tried = [f"id {ref.room_id}" if ref.room_id else "", f"name {ref.room_name}" if ref.room_name else ""]
                raise EntityNotFoundError(
                    f"Could not find room to {action} (tried {', '.join(t for t in tried if t)})."
                )
            if draft is not None and room.id == draft.id:
                return draft, True
            return room, False
        if draft is None:
            raise EntityNotFoundError(
                f"Could not find room to {action}. Please specify a room name or create a room first."
            )
        return draft, True

    def _resolve_structure(self, ref: StructureRef, action: str) -> Structure:
        structures = self.state.structures
        if ref.structure_id is not None:
            for s in structures:
                if s.id == ref.structure_id:
                    return s
        if ref.structure_name:
            wanted = ref.structure_name.strip().lower()
            for s in structures:
                if s.name.lower() == wanted:
                    return s
        if ref.structure_id is None and not ref.structure_name:
            if self.state.current_structure is not None:
                return self.state.current_structure
            raise EntityNotFoundError(
                f"Could not find structure to {action}. No structure is selected."
            )
        tried = [t for t in (ref.structure_id and f"id {ref.structure_id}",
                             ref.structure_name and f"name {ref.structure_name}") if t]
        raise EntityNotFoundError(f"Could not find structure to {action} (tried {', '.join(tried)}).")

    def _resolve_wall(self, ref: WallRef, action: str) -> tuple[Room, bool, WallDirection]:
        cursor = self.state.selected_wall
        if ref.reference:
            room, is_draft = self._resolve_room(ref, f"{action} a wall in")
            direction = parse_wall_reference(ref.reference)
        else:
            if cursor is None:
                raise PreconditionError("No wall selected. Specify a wall or select one first.")
            if ref.room_id is not None or ref.room_name:
                room, is_draft = self._resolve_room(ref, f"{action} a wall in")
            else:
                room, is_draft = self._resolve_room(RoomRef(room_id=cursor.room_id), f"{action} a wall in")
            direction = cursor.direction
        return room, is_draft, direction

    def _resolve_object(self, room: Room, ref: ObjectRef, action: str) -> int:
        filters = []
        if ref.object_name:
            wanted = ref.object_name.strip().lower()
            filters.append((f"name {ref.object_name}", lambda o: o.name.lower() == wanted))
        if ref.type:
            wanted_type = ref.type.strip().lower()
            filters.append((f"type {ref.type}", lambda o: (o.type or "").lower() == wanted_type))
        return resolve_index(room.objects, label="object", action=action,
                             index=ref.object_index, entity_id=ref.object_id, filters=filters)

    def _structure_for(self, room: Room) -> Structure | None:
        return self.state.get_structure(room.structure_id)

    def _detach_confirmed(self, room_id: str) -> None:
        self.state.rooms = [r for r in self.state.rooms if r.id != room_id]
        for s in self.state.structures:
            s.rooms = [r for r in s.rooms if r.id != room_id]

    def _link_structures(self) -> None:
        for s in self.state.structures:
            s.rooms = [r for r in self.state.rooms if r.structure_id == s.id]

    def _hydrate_rooms(self, rooms: list[Any]) -> list[Room]:
        loaded = [Room.model_validate(_plain(r)) for r in rooms]
        for room in loaded:
            if not room.polygon:
                _regenerate(room)
        return loaded


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def _regenerate(room: Room) -> None:
    room.polygon = polygon.synthesize(
        room.shape, room.width_ft, room.length_ft,
        room.l_shape_config, room.t_shape_config, room.vertices,
    )


def _merge_config(model, current, update, label):
    merged = current.model_dump() if current is not None else {}
    merged.update(update.model_dump(exclude_none=True))
    try:
        return model.model_validate(merged)
    except ValidationError:
        missing = [f for f in model.model_fields if f not in merged]
        raise InvalidParametersError(
            f"{label} configuration is incomplete; missing {', '.join(missing)}"
        ) from None


def _upsert(rooms: list[Room], room: Room) -> None:
    for i, existing in enumerate(rooms):
        if existing.id == room.id:
            rooms[i] = room
            return
    rooms.append(room)


def _at(items: list, index: int, label: str):
    if not 0 <= index < len(items):
        raise EntityNotFoundError(
            f"No {label} at index {index}; the room has {len(items)} {label}(s)."
        )
    return items[index]


def _positive(value: float, what: str) -> None:
    if value <= 0:
        raise GeometryError(f"{what} must be positive")


def _damage_filters(wall, damage_type):
    filters = []
    if wall is not None:
        filters.append((f"{wall.value} wall", lambda d: wall in d.affected_walls))
    if damage_type is not None:
        filters.append((f"type {damage_type.value}", lambda d: d.type == damage_type))
    return filters


def _signed_wall_offset(wall: WallDirection, direction: MoveDirection, offset: float) -> float:
    """Change in room size when `wall` moves by `offset` in `direction`."""
    if direction == MoveDirection.OUT:
        return offset
    if direction == MoveDirection.IN:
        return -offset
    if wall == WallDirection.EAST:
        return offset if direction == MoveDirection.RIGHT else -offset
    if wall == WallDirection.WEST:
        return offset if direction == MoveDirection.LEFT else -offset
    raise InvalidParametersError(
        f"Use in or out to move the {wall.value} wall; left and right apply to east and west walls."
    )


def _describe_position(position, position_from) -> str:
    if isinstance(position, str):
        return NamedPosition(position).value
    corner = "end" if position_from == PositionFrom.END else "start"
    return f"{fmt(position)} from {corner} of wall"


def _wall_name(wall) -> str:
    return wall.value if isinstance(wall, WallDirection) else str(wall)


def _label(value: str) -> str:
    return value.replace("_", " ").replace("l shape", "L-shape").replace("t shape", "T-shape")


def _plain(record: Any) -> Any:
    return record.model_dump() if isinstance(record, BaseModel) else record


MIN_CEILING_FT = 6.0
MAX_CEILING_FT = 20.0
MIN_SIDE_FT = 3.0
MAX_SIDE_FT = 100.0


def find_completeness_issues(rooms: list[Room]) -> list[CompletenessIssue]:
    """Flag rooms whose geometry likely needs another look before estimating."""
    issues: list[CompletenessIssue] = []

    def flag(room: Room, kind: str, message: str, severity: IssueSeverity) -> None:
        issues.append(CompletenessIssue(
            type=kind, room_id=room.id, room_name=room.name,
            message=f"{format_room_name(room.name)}: {message}", severity=severity,
        ))

    for room in rooms:
        if not MIN_CEILING_FT <= room.ceiling_height_ft <= MAX_CEILING_FT:
            flag(room, "missing_ceiling_height",
                 f"Ceiling height ({fmt(room.ceiling_height_ft)}) may need verification",
                 IssueSeverity.WARNING)
        missing = [d.value for d, props in room.wall_properties.items() if props.is_missing]
        if missing:
            flag(room, "missing_wall",
                 f"Has {len(missing)} missing wall(s) - {', '.join(missing)}", IssueSeverity.INFO)
        if not room.openings:
            flag(room, "no_openings", "No doors or windows defined", IssueSeverity.INFO)
        size = f"{fmt(room.width_ft)} x {fmt(room.length_ft)}"
        if room.width_ft < MIN_SIDE_FT or room.length_ft < MIN_SIDE_FT:
            flag(room, "unusual_dimensions", f"Very small dimensions ({size})", IssueSeverity.WARNING)
        if room.width_ft > MAX_SIDE_FT or room.length_ft > MAX_SIDE_FT:
            flag(room, "unusual_dimensions", f"Very large dimensions ({size})", IssueSeverity.WARNING)
    return issues
