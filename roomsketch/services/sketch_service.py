"""High-level sketch service: facade for the API layer and tool dispatcher."""

from __future__ import annotations
from typing import Any

from roomsketch.models import EngineConfig, PhotoResult, Room, SessionSnapshot
from roomsketch.core.engine import SketchEngine
from roomsketch.core.registry import CommandRegistry, create_default_registry


class UnknownCommandError(LookupError):
    """No command is registered under the requested name."""


class SketchService:
    """Owns one engine session and dispatches named commands to it."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.engine = SketchEngine(config)
        self.registry: CommandRegistry = create_default_registry(self.engine)

    def execute(self, name: str, params: dict[str, Any] | None = None) -> str | PhotoResult:
        handler = self.registry.get(name)
        if handler is None:
            raise UnknownCommandError(name)
        return handler.func(params or {})

    def list_commands(self) -> list[dict[str, Any]]:
        return [
            {"name": h.name, "params": h.params_schema()}
            for h in self.registry.list_commands()
        ]

    def snapshot(self) -> SessionSnapshot:
        return self.engine.snapshot()

    def get_room(self, name: str) -> Room | None:
        return self.engine.get_room_by_name(name)

    def reset(self) -> None:
        self.engine.reset_session()

    def load(self, structures: list[dict[str, Any]], rooms: list[dict[str, Any]]) -> str:
        return self.engine.load_from_claim_data(structures, rooms)
