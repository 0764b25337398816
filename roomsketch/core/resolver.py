"""Disambiguation of edit/delete targets from partial identifying fields."""

from __future__ import annotations
from typing import Callable, Protocol, Sequence, TypeVar

from roomsketch.errors import EntityNotFoundError


class HasId(Protocol):
    id: str


T = TypeVar("T", bound=HasId)

# (description used in error messages, predicate)
Filter = tuple[str, Callable[[T], bool]]


def resolve_index(
    items: Sequence[T],
    *,
    label: str,
    action: str,
    index: int | None = None,
    entity_id: str | None = None,
    filters: Sequence[Filter] = (),
    sole_fallback: bool = True,
) -> int:
    """
    Position of the target entity in `items`.

    Discriminators are tried in a fixed order: index, id, then each
    filter in the order given. The first one with a match wins, taking
    the first match in list order. When the caller supplied no
    discriminator at all, a list holding exactly one item resolves to it.
    """
    tried: list[str] = []

    if index is not None:
        tried.append(f"index {index}")
        if 0 <= index < len(items):
            return index

    if entity_id is not None:
        tried.append(f"id {entity_id}")
        for i, item in enumerate(items):
            if item.id == entity_id:
                return i

    for description, predicate in filters:
        tried.append(description)
        for i, item in enumerate(items):
            if predicate(item):
                return i

    if not tried and sole_fallback and len(items) == 1:
        return 0

    if tried:
        raise EntityNotFoundError(
            f"Could not find {label} to {action} (tried {', '.join(tried)})."
        )
    raise EntityNotFoundError(
        f"Could not find {label} to {action}: the room has {len(items)} {label}(s). "
        f"Please specify the {label} index, id, wall or type."
    )
