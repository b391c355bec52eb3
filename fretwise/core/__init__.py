"""Core components for the Fretwise application."""

from .config import ConfigManager

__all__ = ["ConfigManager"]
