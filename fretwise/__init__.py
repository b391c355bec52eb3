"""Fretwise - music theory engine for fretted instruments."""

__version__ = "0.1.0"
