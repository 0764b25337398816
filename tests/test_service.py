from __future__ import annotations

import pytest

from roomsketch.models import CommandType, EngineConfig
from roomsketch.services.sketch_service import SketchService, UnknownCommandError


def test_every_command_type_is_registered():
    service = SketchService()
    assert {c["name"] for c in service.list_commands()} == {k.value for k in CommandType}


def test_execute_dispatches_by_name():
    service = SketchService(EngineConfig(default_ceiling_height_ft=9))
    assert service.execute("create_room", {"name": "den", "width_ft": 10, "length_ft": 12}) == (
        "Created Den: 10' × 12'"
    )
    assert service.engine.state.current_room.ceiling_height_ft == 9
    assert service.execute("undo") == "Nothing to undo"


def test_unknown_command():
    with pytest.raises(UnknownCommandError):
        SketchService().execute("teleport", {})


def test_reset_keeps_registry_bound_to_engine():
    service = SketchService()
    service.execute("create_room", {"name": "den", "width_ft": 10, "length_ft": 12})
    service.reset()
    assert service.snapshot().current_room is None
    service.execute("create_room", {"name": "office", "width_ft": 9, "length_ft": 9})
    assert service.get_room("office").width_ft == 9
