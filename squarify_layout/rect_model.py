"""
Rectangle model for treemap layouts.

Rectangles use a top-left origin with ``width`` and ``height`` extents.
Items handed to the layout engine may be plain objects exposing
attributes or mutable mappings; the helpers at the bottom of this
module read and write both shapes.
"""

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from shapely.geometry import Polygon, box


@dataclass
class Rect:
    """An axis-aligned rectangle."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def shorter_edge(self) -> float:
        return min(self.width, self.height)

    @property
    def aspect_ratio(self) -> float:
        """Longer side over shorter side (1.0 = perfect square)."""
        if self.width == 0 or self.height == 0:
            return float("inf")
        return max(self.width / self.height, self.height / self.width)

    def to_polygon(self) -> Polygon:
        """Convert to a Shapely Polygon."""
        return box(self.x, self.y, self.x + self.width, self.y + self.height)

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    def copy(self) -> "Rect":
        return Rect(self.x, self.y, self.width, self.height)

    @staticmethod
    def from_polygon(polygon: Polygon) -> "Rect":
        """Create a Rect from the bounding box of a Shapely geometry."""
        minx, miny, maxx, maxy = polygon.bounds
        return Rect(minx, miny, maxx - minx, maxy - miny)

    @staticmethod
    def coerce(obj: Any) -> "Rect":
        """
        Read the geometry of *obj* into a new Rect.

        *obj* may be a Rect, a mapping with ``x``, ``y``, ``width`` and
        ``height`` keys, or any object exposing those attributes.
        """
        if isinstance(obj, Rect):
            return Rect(obj.x, obj.y, obj.width, obj.height)
        if isinstance(obj, Mapping):
            return Rect(obj["x"], obj["y"], obj["width"], obj["height"])
        return Rect(obj.x, obj.y, obj.width, obj.height)

    def __repr__(self) -> str:
        return (
            f"Rect(x={self.x:.2f}, y={self.y:.2f}, "
            f"width={self.width:.2f}, height={self.height:.2f})"
        )


@dataclass(repr=False)
class WeightedRect(Rect):
    """A weighted item that carries its assigned geometry.

    Construct with keywords, e.g. ``WeightedRect(weight=3)``; geometry
    defaults to zero until a layout fills it in.
    """

    weight: float = 0.0

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["weight"] = self.weight
        return d

    def __repr__(self) -> str:
        return (
            f"WeightedRect(weight={self.weight}, x={self.x:.2f}, "
            f"y={self.y:.2f}, width={self.width:.2f}, height={self.height:.2f})"
        )


# ---------------------------------------------------------------------------
# Item accessors
# ---------------------------------------------------------------------------

def weight_of(item: Any) -> float:
    """Return the ``weight`` of an attribute-style or mapping item."""
    if isinstance(item, Mapping):
        return item["weight"]
    return item.weight


def assign_geometry(item: Any, x: float, y: float,
                    width: float, height: float) -> None:
    """Write a rectangle onto *item* in place."""
    if isinstance(item, MutableMapping):
        item["x"] = x
        item["y"] = y
        item["width"] = width
        item["height"] = height
    else:
        item.x = x
        item.y = y
        item.width = width
        item.height = height
