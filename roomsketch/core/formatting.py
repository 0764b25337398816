"""Human-readable names and dimensions for result strings."""

from __future__ import annotations
import math
import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def normalize_room_name(name: str) -> str:
    """"Master Bedroom" -> "master_bedroom"."""
    return _NON_ALNUM_RE.sub("_", name.lower()).strip("_")


def format_room_name(name: str) -> str:
    """"master_bedroom" -> "Master Bedroom"."""
    return " ".join(word.capitalize() for word in name.split("_") if word)


def format_dimension(feet: float) -> str:
    """12.5 -> 12' 6\""""
    whole = math.floor(feet)
    inches = round((feet - whole) * 12)
    if inches == 12:
        whole, inches = whole + 1, 0
    if inches == 0:
        return f"{whole}'"
    return f"{whole}' {inches}\""
