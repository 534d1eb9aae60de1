# tmxkit

tmxkit turns elements of the Tiled map editor's XML formats into Python
values. It works on `xml.etree.ElementTree.Element` objects that you have
already parsed, and needs only the standard library.

## What it covers

- **Custom properties** (`tmxkit.properties`): `parse_properties` reads a
  `<properties>` element into a dict of typed values. The value types are
  `BoolValue`, `FloatValue`, `IntValue`, `ColorValue`, `StringValue`,
  `FileValue`, `ObjectValue` and `ClassValue`, the last holding a type name
  and nested properties. `property_value` builds one value from a declared
  type and its text. A property without a `value` attribute takes its text
  content, so multi-line strings work. `Color.parse` reads `#RRGGBB` and
  `#AARRGGBB` colours (the `#` is optional).
- **Wang sets** (`tmxkit.wangset`): `parse_wang_set`, `parse_wang_color` and
  `parse_wang_tile` build `WangSet`, `WangColor` and `WangTile` values.
  `WangId.parse` reads the eight-value Wang ID, with or without brackets;
  values that are not numbers from 0 to 255 become 0. `WangSetType` is
  `CORNER`, `EDGE` or `MIXED` (the default for any other type name).
- **Map settings** (`tmxkit.mapinfo`): the enumerations `Orientation`,
  `StaggerAxis` and `StaggerIndex`, each with a `parse` class method that
  reads the attribute text exactly as Tiled writes it. `StaggerAxis.default()`
  is `Y` and `StaggerIndex.default()` is `ODD`. `MapTilesetGid` pairs a
  tileset with its first global tile ID.
- **Objects** (`tmxkit.objects`): `parse_object` turns an `<object>` element
  into `ObjectData`, with its shape, tile reference, flip flags and
  properties. The shape is one of `Rect`, `Ellipse`, `Polyline`, `Polygon`,
  `Point` or `Text`; `parse_points` and `parse_text` are available on their
  own. `ObjectTileData.from_bits` decodes a GID with its flip flags against a
  list of `MapTilesetGid`, giving a `MapTilesetLocation` or, for a template's
  tileset, a `TemplateTilesetLocation`. An object that names a template takes
  its unset values, its shape and any missing properties from the `Template`
  that your `template_loader` function returns for the resolved path.
- **Resource readers** (`tmxkit.reader`): the abstract `ResourceReader`,
  `FilesystemResourceReader`, which opens files on disk in binary mode, and
  `CallableResourceReader`, which wraps any function that returns a binary
  stream, so data can be served from memory or from an archive.
- **Helpers** (`tmxkit.util`): `required_attr` and `optional_attr` fetch and
  convert attributes, `local_name` strips namespaces and prefixes,
  `get_tileset_for_gid` finds the tileset a GID belongs to, and `floor_div`
  divides rounding towards negative infinity.

## Example

```python
import xml.etree.ElementTree as ET

from tmxkit.properties import parse_properties, StringValue

element = ET.fromstring(
    '<properties><property name="greeting" value="hello"/></properties>'
)
props = parse_properties(element)
assert props["greeting"] == StringValue("hello")
```

```python
from tmxkit.mapinfo import Orientation

assert Orientation.parse("isometric") is Orientation.ISOMETRIC
```

## Errors

Parsing failures raise subclasses of `tmxkit.util.TiledError`:

- `MalformedAttributesError` for missing or unreadable attributes.
- `InvalidPropertyValueError` and `UnknownPropertyTypeError` for bad custom
  properties.
- `InvalidObjectDataError` for a `<text>` element without text content.
- `InvalidWangIdEncodingError` for a Wang ID that is not eight values.
- `TiledError` itself when an object names a template but no
  `template_loader` was given.

`PrematureEndError` is defined for callers that read documents themselves;
the parsers here do not raise it. `Color.parse` and the `parse` methods of
the map enumerations raise `ValueError` on bad input.

## What it does not do

tmxkit does not load whole `.tmx` maps or `.tsx` tilesets, and it has no
layers, tile layer data decoding (base64, CSV, compression), images or
animations. It does not read template files or cache resources: you supply
the `template_loader` for `parse_object` and choose how to read files, for
example with a `ResourceReader`. There is no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```