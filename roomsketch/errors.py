"""Error hierarchy for sketch commands.

Operations raise these internally; the command boundary converts them
to ``Error:``-prefixed result strings so nothing is thrown across it.
"""

from __future__ import annotations


class SketchError(Exception):
    """Base class for recoverable command failures."""

    prefix = "Error: "

    def render(self) -> str:
        return f"{self.prefix}{self}"


class PreconditionError(SketchError):
    """The operation needs state that does not exist yet (e.g. no draft room)."""


class EntityNotFoundError(SketchError):
    """The disambiguation chain found no matching entity."""


class NoChangesError(SketchError):
    """An edit was requested without any recognized field set."""

    def __init__(self, message: str = "No changes specified. Please provide at least one property to update.") -> None:
        super().__init__(message)


class UnknownTargetError(SketchError):
    """A target string matched none of the known patterns."""


class NothingToUndoError(SketchError):
    prefix = ""

    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class GeometryError(SketchError, ValueError):
    """Malformed numeric input to the polygon synthesizer."""


class InvalidParametersError(SketchError):
    """The parameter record failed validation."""
