"""Grid-based raycasting engine that renders textured walls from .cub scene files."""

__version__ = "0.1.0"