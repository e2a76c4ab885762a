"""Tile Poster - photo-to-poster compositor with procedural tile overlays."""

__version__ = "0.1.0"
