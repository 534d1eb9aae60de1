"""Shared helpers: error types, XML attribute access and GID lookups."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar
from xml.etree.ElementTree import Element

T = TypeVar("T")

EMPTY_GID = 0
"""The global tile ID that stands for an empty tile."""


class TiledError(Exception):
    """Base class of every error raised while loading Tiled data."""


class MalformedAttributesError(TiledError):
    """An attribute is missing or holds a value that cannot be parsed."""


class PrematureEndError(TiledError):
    """The document ended before the expected element was complete."""


class InvalidPropertyValueError(TiledError):
    """A custom property's value does not match its declared type."""


class UnknownPropertyTypeError(TiledError):
    """A custom property declares a type that is not known."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"unknown property type: {type_name!r}")
        self.type_name = type_name


class InvalidObjectDataError(TiledError):
    """An object element holds content that cannot be interpreted."""


class InvalidWangIdEncodingError(TiledError):
    """A Wang ID string does not hold exactly eight values."""

    def __init__(self, read_string: str) -> None:
        super().__init__(f"invalid wang id encoding: {read_string!r}")
        self.read_string = read_string


class _HasFirstGid(Protocol):
    first_gid: int


def local_name(tag: str) -> str:
    """Return a tag or attribute name without its namespace or prefix."""
    if tag.startswith("{"):
        tag = tag.rpartition("}")[2]
    return tag.rpartition(":")[2]


def _find_attr(element: Element, name: str) -> str | None:
    found = None
    for key, value in element.attrib.items():
        if local_name(key) == name:
            found = value
    return found


def _convert(raw: str, name: str, convert: Callable[[str], T], optional: bool) -> T:
    try:
        return convert(raw)
    except (ValueError, TypeError, TiledError) as err:
        kind = "optional attribute" if optional else "attribute"
        raise MalformedAttributesError(f"Error parsing {kind} '{name}'") from err


def required_attr(element: Element, name: str, convert: Callable[[str], T] = str) -> T:
    """Return the converted value of an attribute that must be present."""
    raw = _find_attr(element, name)
    if raw is None:
        raise MalformedAttributesError(f"Missing attribute: {name}")
    return _convert(raw, name, convert, optional=False)


def optional_attr(
    element: Element, name: str, convert: Callable[[str], T] = str
) -> T | None:
    """Return the converted value of an attribute, or None if it is absent."""
    raw = _find_attr(element, name)
    if raw is None:
        return None
    return _convert(raw, name, convert, optional=True)


def floor_div(a: int, b: int) -> int:
    """Integer division rounding towards negative infinity."""
    return a // b


def get_tileset_for_gid(
    tilesets: Sequence[Any], gid: int
) -> tuple[int, Any] | None:
    """Return the index and entry of the last tileset whose first GID is at most ``gid``."""
    for index in reversed(range(len(tilesets))):
        entry = tilesets[index]
        if entry.first_gid <= gid:
            return index, entry
    return None