"""API request/response schemas."""

from __future__ import annotations
from typing import Any, Optional

from pydantic import BaseModel

from roomsketch.models import Photo


class CommandResponse(BaseModel):
    """Result of one command. Failures carry an ``Error:`` message."""
    command: str
    success: bool
    message: str
    photo: Optional[Photo] = None


class CommandInfo(BaseModel):
    name: str
    params: dict[str, Any]


class LoadRequest(BaseModel):
    """Persisted claim data to hydrate the session from."""
    structures: list[dict[str, Any]] = []
    rooms: list[dict[str, Any]] = []


class MessageResponse(BaseModel):
    message: str
