"""Wang sets: terrain brushes made of colors and Wang tiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from xml.etree.ElementTree import Element

from .properties import (
    I64_RANGE,
    U32_RANGE,
    Color,
    Properties,
    _child_elements,
    _parse_float,
    _parse_int,
    parse_properties,
)
from .util import InvalidWangIdEncodingError, required_attr


class WangSetType(Enum):
    """How a Wang set's terrain brush connects tiles."""

    CORNER = "corner"
    EDGE = "edge"
    MIXED = "mixed"


def _wang_set_type(text: str) -> WangSetType:
    if text == "corner":
        return WangSetType.CORNER
    if text == "edge":
        return WangSetType.EDGE
    return WangSetType.MIXED


def _u8_or_zero(text: str) -> int:
    try:
        return _parse_int(text, 0, 255)
    except ValueError:
        return 0


def _optional_tile(text: str) -> int | None:
    """A tile reference: negative values mean no tile."""
    value = _parse_int(text, *I64_RANGE)
    return value & U32_RANGE[1] if value >= 0 else None


@dataclass(frozen=True)
class WangId:
    """The eight color indices of a Wang tile's corners and edges."""

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        values = tuple(self.values)
        if len(values) != 8:
            raise ValueError("a Wang ID holds exactly eight values")
        object.__setattr__(self, "values", values)

    @classmethod
    def parse(cls, text: str) -> WangId:
        """Parse a comma separated list of eight values, optionally in brackets."""
        parts = text.lstrip("[").rstrip("]").split(",")
        if len(parts) != 8:
            raise InvalidWangIdEncodingError(text)
        return cls(tuple(_u8_or_zero(part) for part in parts))


@dataclass(frozen=True)
class WangTile:
    """A tile's Wang ID within a Wang set."""

    wang_id: WangId


@dataclass
class WangColor:
    """A color usable on the corners and edges of Wang tiles."""

    name: str
    color: Color
    tile: int | None
    probability: float
    properties: Properties = field(default_factory=dict)


@dataclass
class WangSet:
    """A named set of Wang colors and the tiles that use them."""

    name: str
    wang_set_type: WangSetType
    tile: int | None
    wang_colors: list[WangColor] = field(default_factory=list)
    wang_tiles: dict[int, WangTile] = field(default_factory=dict)
    properties: Properties = field(default_factory=dict)


def parse_wang_tile(element: Element) -> tuple[int, WangTile]:
    """Read a ``<wangtile>`` element into its tile ID and Wang tile."""
    tile_id = required_attr(element, "tileid", lambda text: _parse_int(text, *U32_RANGE))
    wang_id = required_attr(element, "wangid", WangId.parse)
    return tile_id, WangTile(wang_id=wang_id)


def parse_wang_color(element: Element) -> WangColor:
    """Read a ``<wangcolor>`` element."""
    name = required_attr(element, "name")
    color = required_attr(element, "color", Color.parse)
    tile = required_attr(element, "tile", _optional_tile)
    probability = required_attr(element, "probability", _parse_float)
    properties: Properties = {}
    for child in _child_elements(element, "properties"):
        properties = parse_properties(child)
    return WangColor(
        name=name,
        color=color,
        tile=tile,
        probability=probability,
        properties=properties,
    )


def parse_wang_set(element: Element) -> WangSet:
    """Read a ``<wangset>`` element with its colors, tiles and properties."""
    wang_set = WangSet(
        name=required_attr(element, "name"),
        wang_set_type=required_attr(element, "type", _wang_set_type),
        tile=required_attr(element, "tile", _optional_tile),
    )
    for child in element:
        if not isinstance(child.tag, str):
            continue
        tag = child.tag.rpartition("}")[2].rpartition(":")[2]
        if tag == "wangcolor":
            wang_set.wang_colors.append(parse_wang_color(child))
        elif tag == "wangtile":
            tile_id, wang_tile = parse_wang_tile(child)
            wang_set.wang_tiles[tile_id] = wang_tile
        elif tag == "properties":
            wang_set.properties = parse_properties(child)
    return wang_set