"""Automotive glass part image catalog built from a filename convention."""

__version__ = "0.1.0"
