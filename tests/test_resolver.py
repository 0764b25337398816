from __future__ import annotations

from dataclasses import dataclass

import pytest

from roomsketch.core.resolver import resolve_index
from roomsketch.errors import EntityNotFoundError


@dataclass
class Item:
    id: str
    wall: str
    kind: str


ITEMS = [
    Item(id="a", wall="north", kind="door"),
    Item(id="b", wall="east", kind="window"),
    Item(id="c", wall="east", kind="door"),
]


def _by_wall(wall):
    return (f"{wall} wall", lambda i: i.wall == wall)


def _by_kind(kind):
    return (f"type {kind}", lambda i: i.kind == kind)


def test_index_wins_when_in_range():
    assert resolve_index(ITEMS, label="opening", action="delete", index=2, entity_id="a") == 2


def test_out_of_range_index_falls_through_to_id():
    assert resolve_index(ITEMS, label="opening", action="delete", index=9, entity_id="b") == 1


def test_first_filter_with_a_match_wins():
    i = resolve_index(ITEMS, label="opening", action="delete",
                      filters=[_by_wall("south"), _by_kind("door")])
    assert i == 0


def test_sole_item_fallback():
    assert resolve_index(ITEMS[:1], label="opening", action="delete") == 0


def test_no_fallback_once_a_discriminator_was_given():
    with pytest.raises(EntityNotFoundError) as exc:
        resolve_index(ITEMS[:1], label="opening", action="delete", entity_id="zzz")
    assert "id zzz" in str(exc.value)


def test_ambiguous_without_discriminator():
    with pytest.raises(EntityNotFoundError) as exc:
        resolve_index(ITEMS, label="opening", action="update")
    assert "3 opening(s)" in str(exc.value)
