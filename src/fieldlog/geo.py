"""Known-location to coordinates lookup."""

from __future__ import annotations

from typing import Protocol

from fieldlog.lexicon import Lexicon


class CoordinateResolver(Protocol):
    """Resolve a recognized location name to (longitude, latitude)."""

    def resolve(self, location: str) -> tuple[float, float] | None:
        ...


class StaticCoordinateResolver:
    """Resolver backed by the coordinates in a lexicon's location table."""

    def __init__(self, lexicon: Lexicon):
        self._table = {
            loc.name: loc.coordinates for loc in lexicon.locations if loc.coordinates is not None
        }

    def resolve(self, location: str) -> tuple[float, float] | None:
        return self._table.get(location)


class NullCoordinateResolver:
    """Resolver that never knows any coordinates."""

    def resolve(self, location: str) -> tuple[float, float] | None:
        return None
