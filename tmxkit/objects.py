"""Objects placed on object layers, their shapes and the templates they share."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union
from xml.etree.ElementTree import Element

from .mapinfo import MapTilesetGid
from .properties import (
    I32_RANGE,
    U32_RANGE,
    Color,
    Properties,
    _parse_float,
    _parse_int,
    parse_properties,
)
from .util import (
    EMPTY_GID,
    InvalidObjectDataError,
    MalformedAttributesError,
    TiledError,
    get_tileset_for_gid,
    local_name,
    optional_attr,
)

_USIZE_RANGE = (0, 2**64 - 1)

FLIPPED_HORIZONTALLY_FLAG = 0x80000000
FLIPPED_VERTICALLY_FLAG = 0x40000000
FLIPPED_DIAGONALLY_FLAG = 0x20000000
ALL_FLIP_FLAGS = (
    FLIPPED_HORIZONTALLY_FLAG | FLIPPED_VERTICALLY_FLAG | FLIPPED_DIAGONALLY_FLAG
)


def _i32(text: str) -> int:
    return _parse_int(text, *I32_RANGE)


def _u32(text: str) -> int:
    return _parse_int(text, *U32_RANGE)


def _usize(text: str) -> int:
    return _parse_int(text, *_USIZE_RANGE)


@dataclass(frozen=True)
class MapTilesetLocation:
    """A tileset held by the map, given by its index in the map's tileset list."""

    index: int


@dataclass(frozen=True)
class TemplateTilesetLocation:
    """A tileset that belongs to a template."""

    tileset: Any


TilesetLocation = Union[MapTilesetLocation, TemplateTilesetLocation]


@dataclass(frozen=True)
class ObjectTileData:
    """The tile an object shows, with how it is flipped."""

    tileset_location: TilesetLocation
    id: int
    flip_h: bool = False
    flip_v: bool = False
    flip_d: bool = False

    @classmethod
    def from_bits(
        cls,
        bits: int,
        tilesets: Sequence[MapTilesetGid],
        for_tileset: Any = None,
    ) -> ObjectTileData | None:
        """Decode a GID with its flip flags; None for an empty or unknown tile."""
        flags = bits & ALL_FLIP_FLAGS
        gid = bits & ~ALL_FLIP_FLAGS & 0xFFFFFFFF
        if gid == EMPTY_GID:
            return None
        location: TilesetLocation
        if for_tileset is not None:
            location = TemplateTilesetLocation(for_tileset)
            tile_id = gid - 1
        else:
            found = get_tileset_for_gid(tilesets, gid)
            if found is None:
                return None
            index, entry = found
            location = MapTilesetLocation(index)
            tile_id = gid - entry.first_gid
        return cls(
            tileset_location=location,
            id=tile_id,
            flip_h=bool(flags & FLIPPED_HORIZONTALLY_FLAG),
            flip_v=bool(flags & FLIPPED_VERTICALLY_FLAG),
            flip_d=bool(flags & FLIPPED_DIAGONALLY_FLAG),
        )

    def tileset(self, map_tilesets: Sequence[Any]) -> Any:
        """Return the tileset this tile points to, given the map's tilesets."""
        if isinstance(self.tileset_location, MapTilesetLocation):
            return map_tilesets[self.tileset_location.index]
        return self.tileset_location.tileset


class HorizontalAlignment(Enum):
    """Horizontal alignment of a text object."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlignment(Enum):
    """Vertical alignment of a text object."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Rect:
    """A rectangle."""

    width: float
    height: float


@dataclass(frozen=True)
class Ellipse:
    """An ellipse inside the given bounds."""

    width: float
    height: float


@dataclass(frozen=True)
class Polyline:
    """An open line through points relative to the object position."""

    points: tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class Polygon:
    """A closed polygon through points relative to the object position."""

    points: tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class Point:
    """A single point."""

    x: float
    y: float


@dataclass(frozen=True)
class Text:
    """A text box."""

    text: str
    width: float
    height: float
    font_family: str = "sans-serif"
    pixel_size: int = 16
    wrap: bool = False
    color: Color = Color(red=0, green=0, blue=0, alpha=255)
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikeout: bool = False
    kerning: bool = True
    halign: HorizontalAlignment = HorizontalAlignment.LEFT
    valign: VerticalAlignment = VerticalAlignment.TOP


ObjectShape = Union[Rect, Ellipse, Polyline, Polygon, Point, Text]


@dataclass
class ObjectData:
    """An object: position, shape, optional tile and custom properties."""

    id: int
    tile: ObjectTileData | None
    name: str
    user_type: str
    x: float
    y: float
    rotation: float
    visible: bool
    shape: ObjectShape
    properties: Properties = field(default_factory=dict)


@dataclass
class Template:
    """An object and an optional tileset shared by several objects."""

    tileset: Any
    object: ObjectData


TemplateLoader = Callable[[Path], Template]


def parse_points(text: str) -> tuple[tuple[float, float], ...]:
    """Parse space separated ``x,y`` pairs."""
    points = []
    for pair in text.split(" "):
        parts = pair.split(",")
        if len(parts) != 2:
            raise MalformedAttributesError(
                "one of a polyline's points does not have an x and y coordinate"
            )
        try:
            points.append((_parse_float(parts[0]), _parse_float(parts[1])))
        except ValueError as err:
            raise MalformedAttributesError(
                "one of polyline's points does not have numeric coordinates"
            ) from err
    return tuple(points)


def _shape_points(element: Element) -> tuple[tuple[float, float], ...]:
    raw = optional_attr(element, "points")
    if raw is None:
        raise MalformedAttributesError("Missing attribute: points")
    return parse_points(raw)


_HALIGN_ERROR = (
    "`halign` property did not contain a valid value of "
    "'left', 'center', 'right' or 'justify'"
)
_VALIGN_ERROR = (
    "`valign` property did not contain a valid value of 'top', 'center' or 'bottom'"
)


def parse_text(element: Element, width: float, height: float) -> Text:
    """Read a ``<text>`` element into a text shape of the given size."""
    font_family = optional_attr(element, "fontfamily")
    pixel_size = optional_attr(element, "pixelsize", _usize)
    wrap = optional_attr(element, "wrap", _i32)
    color = optional_attr(element, "color", Color.parse)
    bold = optional_attr(element, "bold", _i32)
    italic = optional_attr(element, "italic", _i32)
    underline = optional_attr(element, "underline", _i32)
    strikeout = optional_attr(element, "strikeout", _i32)
    kerning = optional_attr(element, "kerning", _i32)

    halign_raw = optional_attr(element, "halign")
    try:
        halign = HorizontalAlignment(halign_raw) if halign_raw is not None else (
            HorizontalAlignment.LEFT
        )
    except ValueError:
        raise MalformedAttributesError(_HALIGN_ERROR) from None
    valign_raw = optional_attr(element, "valign")
    try:
        valign = VerticalAlignment(valign_raw) if valign_raw is not None else (
            VerticalAlignment.TOP
        )
    except ValueError:
        raise MalformedAttributesError(_VALIGN_ERROR) from None

    if element.text is None:
        raise InvalidObjectDataError(
            "Text attribute contained anything but characters as content"
        )

    return Text(
        text=element.text,
        width=width,
        height=height,
        font_family=font_family if font_family is not None else "sans-serif",
        pixel_size=pixel_size if pixel_size is not None else 16,
        wrap=wrap == 1,
        color=color if color is not None else Color(red=0, green=0, blue=0, alpha=255),
        bold=bold == 1,
        italic=italic == 1,
        underline=underline == 1,
        strikeout=strikeout == 1,
        kerning=kerning is None or kerning == 1,
        halign=halign,
        valign=valign,
    )


def _first(*values: Any) -> Any:
    return next((value for value in values if value is not None), None)


def parse_object(
    element: Element,
    tilesets: Sequence[MapTilesetGid] | None = None,
    for_tileset: Any = None,
    base_path: str | os.PathLike[str] = ".",
    template_loader: TemplateLoader | None = None,
) -> ObjectData:
    """Read an ``<object>`` element, filling unset values from its template.

    ``tilesets`` may be None when the object cannot hold a tile, such as
    collision shapes. ``template_loader`` is called with the template's path,
    resolved against ``base_path``.
    """
    object_id = optional_attr(element, "id", _u32)
    gid_bits = optional_attr(element, "gid", _u32)
    name = optional_attr(element, "name")
    user_type = optional_attr(element, "type")
    user_class = optional_attr(element, "class")
    width = optional_attr(element, "width", _parse_float)
    height = optional_attr(element, "height", _parse_float)
    visible = optional_attr(element, "visible", lambda text: _i32(text) == 1)
    rotation = optional_attr(element, "rotation", _parse_float)
    template_ref = optional_attr(element, "template")
    x = optional_attr(element, "x", _parse_float)
    y = optional_attr(element, "y", _parse_float)
    x = 0.0 if x is None else x
    y = 0.0 if y is None else y

    tile = None
    if gid_bits is not None and tilesets is not None:
        tile = ObjectTileData.from_bits(gid_bits, tilesets, for_tileset)

    template: Template | None = None
    if template_ref is not None:
        if template_loader is None:
            raise TiledError(
                f"object uses template {template_ref!r} but no template loader was given"
            )
        template = template_loader(Path(base_path) / template_ref)
        source = template.object
        visible = _first(visible, source.visible)
        rotation = _first(rotation, source.rotation)
        name = _first(name, source.name)
        user_type = _first(user_type, source.user_type)
        tile = _first(tile, source.tile)

    width = 0.0 if width is None else width
    height = 0.0 if height is None else height

    shape: ObjectShape | None = None
    properties: Properties = {}
    for child in element:
        if not isinstance(child.tag, str):
            continue
        tag = local_name(child.tag)
        if tag == "ellipse":
            shape = Ellipse(width=width, height=height)
        elif tag == "polyline":
            shape = Polyline(points=_shape_points(child))
        elif tag == "polygon":
            shape = Polygon(points=_shape_points(child))
        elif tag == "point":
            shape = Point(x=x, y=y)
        elif tag == "text":
            shape = parse_text(child, width, height)
        elif tag == "properties":
            properties = parse_properties(child)

    if template is not None:
        if shape is None:
            shape = template.object.shape
        for key, value in template.object.properties.items():
            properties.setdefault(key, value)

    return ObjectData(
        id=0 if object_id is None else object_id,
        tile=tile,
        name=name or "",
        user_type=_first(user_type, user_class) or "",
        x=x,
        y=y,
        rotation=0.0 if rotation is None else rotation,
        visible=True if visible is None else visible,
        shape=shape if shape is not None else Rect(width=width, height=height),
        properties=properties,
    )