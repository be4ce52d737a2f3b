"""
Squarified treemap layout.

Partitions a rectangle into tiles whose areas are proportional to item
weights while keeping every tile as close to square as possible.
Tiles convert to Shapely polygons for downstream geometry work.
"""

from .adjacency import build_adjacency_graph, is_connected
from .errors import EmptyRowError, SquarifyLayoutError
from .metrics import score_layout, validate_tiling
from .rect_model import Rect, WeightedRect
from .squarify import SquarifyLayout, squarify, squarify_rects, treemap_polygons

__all__ = [
    "SquarifyLayout",
    "squarify",
    "squarify_rects",
    "treemap_polygons",
    "Rect",
    "WeightedRect",
    "SquarifyLayoutError",
    "EmptyRowError",
    "score_layout",
    "validate_tiling",
    "build_adjacency_graph",
    "is_connected",
]
