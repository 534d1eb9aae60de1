from xml.etree.ElementTree import fromstring

import pytest

from tmxkit.properties import (
    BoolValue,
    ClassValue,
    Color,
    ColorValue,
    FileValue,
    FloatValue,
    IntValue,
    ObjectValue,
    StringValue,
    parse_properties,
    property_value,
)
from tmxkit.util import (
    InvalidPropertyValueError,
    MalformedAttributesError,
    UnknownPropertyTypeError,
)


def test_color_with_alpha():
    assert Color.parse("#12345678") == Color(alpha=0x12, red=0x34, green=0x56, blue=0x78)


def test_color_without_alpha_is_opaque():
    assert Color.parse("#123456") == Color(alpha=0xFF, red=0x12, green=0x34, blue=0x56)


def test_color_without_hash():
    assert Color.parse("ff0000") == Color(red=255, green=0, blue=0, alpha=255)


@pytest.mark.parametrize("text", ["#12345", "zz0000", "#", "", "#1234567", "#-10000"])
def test_color_invalid(text):
    with pytest.raises(ValueError):
        Color.parse(text)


@pytest.mark.parametrize(
    ("kind", "text", "expected"),
    [
        ("bool", "true", BoolValue(True)),
        ("bool", "false", BoolValue(False)),
        ("float", "32.1", FloatValue(32.1)),
        ("int", "3", IntValue(3)),
        ("int", "-2147483648", IntValue(-(2**31))),
        ("object", "3", ObjectValue(3)),
        ("string", "hello", StringValue("hello")),
        ("file", "a/b.png", FileValue("a/b.png")),
        ("color", "#12345678", ColorValue(Color(alpha=0x12, red=0x34, green=0x56, blue=0x78))),
    ],
)
def test_property_value(kind, text, expected):
    assert property_value(kind, text) == expected


@pytest.mark.parametrize(
    ("kind", "text"),
    [
        ("bool", "True"),
        ("bool", "1"),
        ("float", "abc"),
        ("float", " 1.0"),
        ("int", "2147483648"),
        ("int", "1.5"),
        ("int", "1_0"),
        ("object", "-1"),
        ("color", "#zz"),
    ],
)
def test_property_value_invalid(kind, text):
    with pytest.raises(InvalidPropertyValueError):
        property_value(kind, text)


def test_unknown_property_type():
    with pytest.raises(UnknownPropertyTypeError) as info:
        property_value("weird", "x")
    assert info.value.type_name == "weird"


def test_too_short_color_is_unknown_type():
    with pytest.raises(UnknownPropertyTypeError):
        property_value("color", "")


def test_class_as_plain_value_is_unknown():
    with pytest.raises(UnknownPropertyTypeError):
        property_value("class", "x")


def test_parse_properties_default_type_is_string():
    element = fromstring('<properties><property name="key" value="value1"/></properties>')
    assert parse_properties(element) == {"key": StringValue("value1")}


def test_parse_properties_color_property():
    element = fromstring(
        '<properties><property name="key" type="color" value="#12345678"/></properties>'
    )
    assert parse_properties(element) == {
        "key": ColorValue(Color(alpha=0x12, red=0x34, green=0x56, blue=0x78))
    }


def test_parse_properties_bool_property():
    element = fromstring(
        '<properties><property name="an object group property" type="bool" value="true"/>'
        "</properties>"
    )
    assert parse_properties(element)["an object group property"] == BoolValue(True)


def test_parse_properties_object_property():
    element = fromstring(
        '<properties><property name="object property" type="object" value="3"/></properties>'
    )
    assert parse_properties(element)["object property"] == ObjectValue(3)


def test_parse_properties_class_property():
    element = fromstring(
        "<properties>"
        '<property name="class property" type="class" propertytype="test_type">'
        "  <properties>"
        '    <property name="test_property_1" type="int" value="3"/>'
        "  </properties>"
        "</property>"
        "</properties>"
    )
    value = parse_properties(element)["class property"]
    assert value.property_type == "test_type"
    assert value.properties["test_property_1"] == IntValue(3)


def test_parse_properties_class_without_members():
    element = fromstring(
        '<properties><property name="c" type="class" propertytype="t"/></properties>'
    )
    assert parse_properties(element) == {"c": ClassValue(property_type="t", properties={})}


def test_parse_properties_multiline_string():
    element = fromstring(
        '<properties><property name="prop3">Line 1\nLine 2\nLine 3,\n  etc\n   </property>'
        "</properties>"
    )
    assert parse_properties(element) == {
        "prop3": StringValue("Line 1\nLine 2\nLine 3,\n  etc\n   ")
    }


def test_parse_properties_missing_value():
    element = fromstring('<properties><property name="x" type="int"/></properties>')
    with pytest.raises(MalformedAttributesError):
        parse_properties(element)


def test_parse_properties_missing_name():
    element = fromstring('<properties><property value="x"/></properties>')
    with pytest.raises(MalformedAttributesError):
        parse_properties(element)


def test_parse_properties_ignores_other_children():
    element = fromstring(
        '<properties><other name="a" value="b"/><property name="c" value="d"/></properties>'
    )
    assert parse_properties(element) == {"c": StringValue("d")}


def test_parse_properties_invalid_value_propagates():
    element = fromstring(
        '<properties><property name="n" type="int" value="many"/></properties>'
    )
    with pytest.raises(InvalidPropertyValueError):
        parse_properties(element)