"""Map layout settings and the pairing of tilesets with their first GIDs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Orientation(Enum):
    """The way tiles are laid out in a map."""

    ORTHOGONAL = "orthogonal"
    ISOMETRIC = "isometric"
    STAGGERED = "staggered"
    HEXAGONAL = "hexagonal"

    @classmethod
    def parse(cls, text: str) -> Orientation:
        """Parse an orientation name as written in a map file."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                "failed to parse orientation, valid options are `orthogonal`, "
                "`isometric`, `staggered` and `hexagonal` "
                f"but got `{text}` instead"
            ) from None

    def __str__(self) -> str:
        return self.value


class StaggerAxis(Enum):
    """Which axis is staggered in staggered and hexagonal maps."""

    X = "x"
    Y = "y"

    @classmethod
    def parse(cls, text: str) -> StaggerAxis:
        """Parse ``x`` or ``y``."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                "failed to parse stagger axis, valid options are `x`, `y` "
                f"but got `{text}` instead"
            ) from None

    @classmethod
    def default(cls) -> StaggerAxis:
        """The axis used when a map does not name one."""
        return cls.Y


class StaggerIndex(Enum):
    """Whether odd or even rows or columns are shifted by half a tile."""

    EVEN = "even"
    ODD = "odd"

    @classmethod
    def parse(cls, text: str) -> StaggerIndex:
        """Parse ``even`` or ``odd``."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                "failed to parse stagger index, valid options are `even`, `odd` "
                f"but got `{text}` instead"
            ) from None

    @classmethod
    def default(cls) -> StaggerIndex:
        """The index used when a map does not name one."""
        return cls.ODD


@dataclass(frozen=True)
class MapTilesetGid:
    """A tileset together with the first global tile ID assigned to it in a map."""

    first_gid: int
    tileset: Any