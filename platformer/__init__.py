"""Tile, level and entity-kind logic for a 2D side-scrolling platformer, without graphics."""

__version__ = "0.1.0"