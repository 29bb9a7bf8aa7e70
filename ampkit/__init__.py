"""Vector math, bounding volumes, Morton codes, spatial regions and LOD clipmaps."""

__version__ = "0.1.0"

__all__ = ["bounds", "clipmap", "morton", "region", "vecmath"]