"""FastAPI route definitions."""

from __future__ import annotations
from typing import Any

from fastapi import APIRouter, Body, HTTPException

from roomsketch.models import PhotoResult, Room, SessionSnapshot
from roomsketch.services.sketch_service import SketchService, UnknownCommandError
from roomsketch.api.schemas import (
    CommandInfo, CommandResponse, LoadRequest, MessageResponse,
)

router = APIRouter()

# Shared service instance
_service = SketchService()


@router.post("/commands/{name}", response_model=CommandResponse)
async def run_command(name: str, params: dict[str, Any] = Body(default={})) -> CommandResponse:
    """Execute one sketch command. Command errors are reported in the body."""
    try:
        result = _service.execute(name, params)
    except UnknownCommandError:
        raise HTTPException(status_code=404, detail=f"Unknown command: {name}")

    if isinstance(result, PhotoResult):
        return CommandResponse(command=name, success=result.success,
                               message=result.message, photo=result.photo)
    return CommandResponse(command=name, success=not result.startswith("Error:"), message=result)


@router.get("/commands", response_model=list[CommandInfo])
async def list_commands() -> list[CommandInfo]:
    """List all available commands with their parameter schemas."""
    return [CommandInfo(**c) for c in _service.list_commands()]


@router.get("/session", response_model=SessionSnapshot)
async def get_session() -> SessionSnapshot:
    return _service.snapshot()


@router.post("/session/reset", response_model=MessageResponse)
async def reset_session() -> MessageResponse:
    _service.reset()
    return MessageResponse(message="Session reset")


@router.post("/session/load", response_model=MessageResponse)
async def load_session(request: LoadRequest) -> MessageResponse:
    return MessageResponse(message=_service.load(request.structures, request.rooms))


@router.get("/rooms/{name}", response_model=Room)
async def get_room(name: str) -> Room:
    room = _service.get_room(name)
    if room is None:
        raise HTTPException(status_code=404, detail=f"Room not found: {name}")
    return room


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
