"""Command registry: maps tool names to engine operations."""

from __future__ import annotations
from typing import Any, Callable

from pydantic import BaseModel

from roomsketch.core.engine import SketchEngine
from roomsketch.models import CommandType


class CommandHandler(BaseModel):
    """A registered operation and the record its parameters validate into."""
    name: str
    params_model: type[BaseModel]
    func: Callable[..., Any]

    def params_schema(self) -> dict[str, Any]:
        return self.params_model.model_json_schema()


class CommandRegistry:
    """
    Central registry of sketch commands.

    Handlers are registered at startup. The tool dispatcher looks them
    up by name; unknown names resolve to None.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, func: Callable[..., Any], params_model: type[BaseModel]) -> None:
        self._handlers[name] = CommandHandler(name=name, params_model=params_model, func=func)

    def unregister(self, name: str) -> None:
        self._handlers.pop(name, None)

    def get(self, name: str) -> CommandHandler | None:
        return self._handlers.get(name)

    def list_commands(self) -> list[CommandHandler]:
        return list(self._handlers.values())

    def __contains__(self, name: str) -> bool:
        return name in self._handlers


def create_default_registry(engine: SketchEngine) -> CommandRegistry:
    """Register every command operation of `engine` under its command type."""
    registry = CommandRegistry()
    for kind in CommandType:
        func = getattr(engine, kind.value)
        registry.register(kind.value, func, func.params_model)
    return registry
