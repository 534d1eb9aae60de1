"""Colors and custom property values attached to Tiled elements."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from .util import (
    InvalidPropertyValueError,
    MalformedAttributesError,
    UnknownPropertyTypeError,
    local_name,
    optional_attr,
    required_attr,
)

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_HEX_BYTE_PATTERN = re.compile(r"\+?[0-9A-Fa-f]+")

I32_RANGE = (-(2**31), 2**31 - 1)
U32_RANGE = (0, 2**32 - 1)
I64_RANGE = (-(2**63), 2**63 - 1)


def _parse_int(text: str, low: int, high: int) -> int:
    """Parse a decimal integer strictly, rejecting whitespace and out-of-range values."""
    if not _INT_PATTERN.fullmatch(text) or (low >= 0 and text.startswith("-")):
        raise ValueError(f"invalid digit found in string {text!r}")
    value = int(text)
    if not low <= value <= high:
        raise ValueError(f"number {text!r} does not fit in the target type")
    return value


def _parse_float(text: str) -> float:
    """Parse a floating point number, rejecting whitespace and digit separators."""
    if not text.isascii() or any(char.isspace() or char == "_" for char in text):
        raise ValueError(f"invalid float literal {text!r}")
    return float(text)


def _parse_bool(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"provided string was not `true` or `false`: {text!r}")


def _child_elements(element: Element, name: str) -> Iterator[Element]:
    """Yield the direct children of ``element`` whose local tag name is ``name``."""
    for child in element:
        if isinstance(child.tag, str) and local_name(child.tag) == name:
            yield child


@dataclass(frozen=True)
class Color:
    """An RGBA color with 8 bits per channel."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse ``#RRGGBB`` or ``#AARRGGBB``; the leading ``#`` is optional."""
        digits = text[1:] if text.startswith("#") else text
        if not digits.isascii() or len(digits) not in (6, 8):
            raise ValueError(f"invalid color {text!r}")
        pairs = [digits[start : start + 2] for start in range(0, len(digits), 2)]
        if not all(_HEX_BYTE_PATTERN.fullmatch(pair) for pair in pairs):
            raise ValueError(f"invalid color {text!r}")
        values = [int(pair, 16) for pair in pairs]
        if len(values) == 8 // 2:
            alpha, red, green, blue = values
            return cls(red=red, green=green, blue=blue, alpha=alpha)
        red, green, blue = values
        return cls(red=red, green=green, blue=blue)


class PropertyValue:
    """Base class of every custom property value."""

    __slots__ = ()


@dataclass(frozen=True)
class BoolValue(PropertyValue):
    """A ``bool`` property."""

    value: bool


@dataclass(frozen=True)
class FloatValue(PropertyValue):
    """A ``float`` property."""

    value: float


@dataclass(frozen=True)
class IntValue(PropertyValue):
    """An ``int`` property (32-bit signed)."""

    value: int


@dataclass(frozen=True)
class ColorValue(PropertyValue):
    """A ``color`` property."""

    value: Color


@dataclass(frozen=True)
class StringValue(PropertyValue):
    """A ``string`` property."""

    value: str


@dataclass(frozen=True)
class FileValue(PropertyValue):
    """A ``file`` property, holding a path relative to the map or tileset."""

    value: str


@dataclass(frozen=True)
class ObjectValue(PropertyValue):
    """An ``object`` property: the referenced object's ID, or 0 if unset."""

    value: int


@dataclass(frozen=True)
class ClassValue(PropertyValue):
    """A ``class`` property: a type name and the members that were set."""

    property_type: str
    properties: dict[str, PropertyValue] = field(default_factory=dict)


Properties = dict[str, PropertyValue]

_SCALAR_PARSERS: dict[str, tuple[Callable[[object], PropertyValue], Callable[[str], object]]] = {
    "bool": (BoolValue, _parse_bool),
    "float": (FloatValue, _parse_float),
    "int": (IntValue, lambda text: _parse_int(text, *I32_RANGE)),
    "object": (ObjectValue, lambda text: _parse_int(text, *U32_RANGE)),
}


def property_value(property_type: str, value: str) -> PropertyValue:
    """Build the property value of the given declared type from its text."""
    match property_type:
        case "string":
            return StringValue(value)
        case "file":
            return FileValue(value)
        case "color" if len(value.encode("utf-8")) > 1:
            try:
                return ColorValue(Color.parse(value))
            except ValueError as err:
                raise InvalidPropertyValueError("Couldn't parse color") from err
        case _ if property_type in _SCALAR_PARSERS:
            wrap, parse = _SCALAR_PARSERS[property_type]
            try:
                return wrap(parse(value))
            except ValueError as err:
                raise InvalidPropertyValueError(str(err)) from err
        case _:
            raise UnknownPropertyTypeError(property_type)


def parse_properties(element: Element) -> Properties:
    """Read the ``<property>`` children of a ``<properties>`` element."""
    properties: Properties = {}
    for child in _child_elements(element, "property"):
        name, value = _parse_property(child)
        properties[name] = value
    return properties


def _parse_property(element: Element) -> tuple[str, PropertyValue]:
    property_type = optional_attr(element, "type")
    value = optional_attr(element, "value")
    class_name = optional_attr(element, "propertytype")
    name = required_attr(element, "name")
    if property_type is None:
        property_type = "string"

    if property_type == "class":
        return name, ClassValue(
            property_type=class_name or "",
            properties=_nested_properties(element),
        )

    if value is None:
        # A missing value attribute means a multi-line string held as text.
        if element.text is None:
            raise MalformedAttributesError(f"property '{name}' is missing a value")
        value = element.text
    return name, property_value(property_type, value)


def _nested_properties(element: Element) -> Properties:
    """Return the members of a class property, if a ``<properties>`` element comes first."""
    if (element.text or "").strip():
        return {}
    first = next(
        (child for child in element if isinstance(child.tag, str)),
        None,
    )
    if first is not None and local_name(first.tag) == "properties":
        return parse_properties(first)
    return {}