"""Animated baseline bounce for the last glyph of a text field."""

__version__ = "0.1.0"
