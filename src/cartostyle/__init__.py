"""Cartostyle: thematic classification engine for map layer styling."""

__version__ = "0.1.0"
