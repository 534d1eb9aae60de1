"""Parsers for Tiled map editor XML elements: custom properties, Wang sets, objects and map settings."""

__version__ = "0.1.0"