"""Procedural cratered terrain heightmap generator."""

__version__ = "0.1.0"
