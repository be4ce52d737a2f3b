"""
Squarified treemap layout.

Implements the squarify algorithm of Bruls, Huizing and van Wijk: items
are sorted by descending weight and greedily grouped into rows.  A row
keeps growing while adding the next item does not worsen the worst
aspect ratio in the row; it is then laid out as a strip along the
shorter edge of the remaining bounds, and the bounds shrink by that
strip.

Preconditions (not validated): weights are finite and non-negative,
bounds have finite, non-negative width and height.
"""

import sys
from collections import deque
from typing import Any, Iterable, List, Optional, Sequence

from shapely.geometry import Polygon

from .errors import EmptyRowError
from .rect_model import Rect, WeightedRect, assign_geometry, weight_of


class SquarifyLayout:
    """
    Stateful layout engine.

    The remaining weight sum and item count live on the instance for
    the duration of one :meth:`squarify` call, so an instance may be
    reused sequentially but must not be shared between threads.
    """

    def __init__(self):
        self._total_remaining_weight_sum: float = 0.0
        self._items_remaining: int = 0

    @property
    def total_remaining_weight_sum(self) -> float:
        return self._total_remaining_weight_sum

    @property
    def items_remaining(self) -> int:
        return self._items_remaining

    # --- public API -------------------------------------------------------

    def squarify(self, items: Iterable[Any], bounds: Any) -> None:
        """
        Size and position *items* inside *bounds*.

        Parameters
        ----------
        items : iterable
            Objects exposing a numeric ``weight`` attribute, or mutable
            mappings with a ``"weight"`` key.  Each one gets ``x``, ``y``,
            ``width`` and ``height`` written onto it.  The caller's
            sequence is not reordered.
        bounds : Rect, mapping or object
            Region to fill.  It is copied; the caller's object is left
            untouched.
        """
        pending = deque(sorted(items, key=weight_of, reverse=True))
        remaining = Rect.coerce(bounds)

        self._total_remaining_weight_sum = self.sum_weights(pending)
        self._items_remaining = len(pending)

        last_aspect_ratio: Optional[float] = float("inf")
        shorter_edge = remaining.shorter_edge
        row: List[Any] = []

        while pending:
            row.append(pending.popleft())
            aspect_ratio = self.calculate_worst_aspect_ratio_in_row(
                row, shorter_edge, remaining
            )

            accept = aspect_ratio is None or (
                last_aspect_ratio is not None
                and aspect_ratio <= last_aspect_ratio
            )
            if accept:
                last_aspect_ratio = aspect_ratio
                # a zero-length edge cannot be balanced, one item per row
                draw_row = not pending or shorter_edge == 0
            else:
                pending.appendleft(row.pop())
                draw_row = True

            if draw_row:
                remaining = self.layout_row(row, shorter_edge, remaining)
                last_aspect_ratio = float("inf")
                shorter_edge = remaining.shorter_edge
                row = []

    # --- row selection ----------------------------------------------------

    def calculate_worst_aspect_ratio_in_row(
        self,
        row: Sequence[Any],
        shorter_edge: float,
        bounds: Rect,
    ) -> Optional[float]:
        """
        Worst aspect ratio any item of *row* would get if laid out now.

        Returns ``None`` when the row would have no area at all (every
        item in it weighs nothing while other weight remains); such a
        row is always accepted by the selection loop.
        """
        if not row:
            raise EmptyRowError()

        if shorter_edge == 0:
            return sys.float_info.max

        total_area = bounds.width * bounds.height
        length_squared = shorter_edge * shorter_edge

        # nothing left to weigh: every remaining item gets the same area
        if self._total_remaining_weight_sum == 0:
            one_item_area = total_area / self._items_remaining
            row_area_squared = (one_item_area * len(row)) ** 2
            return max(
                (length_squared * one_item_area) / row_area_squared,
                row_area_squared / (length_squared * one_item_area),
            )

        min_area = float("inf")
        max_area = 0.0
        sum_of_areas = 0.0
        for item in row:
            area = total_area * (weight_of(item) / self._total_remaining_weight_sum)
            min_area = min(min_area, area)
            max_area = max(max_area, area)
            sum_of_areas += area

        if sum_of_areas == 0:
            return None
        if min_area == 0:
            return float("inf")

        # max(w^2 * r+ / s^2, s^2 / (w^2 * r-))
        sum_squared = sum_of_areas * sum_of_areas
        return max(
            (length_squared * max_area) / sum_squared,
            sum_squared / (length_squared * min_area),
        )

    # --- row layout -------------------------------------------------------

    def layout_row(
        self,
        row: Sequence[Any],
        shorter_edge: float,
        bounds: Rect,
    ) -> Rect:
        """Place *row* as one strip of *bounds* and return the leftover bounds."""
        horizontal = shorter_edge == bounds.width
        longer_edge = bounds.height if horizontal else bounds.width
        sum_of_row_weights = self.sum_weights(row)

        if self._total_remaining_weight_sum == 0:
            common_item_edge = longer_edge * len(row) / self._items_remaining
        else:
            common_item_edge = longer_edge * (
                sum_of_row_weights / self._total_remaining_weight_sum
            )

        position = 0.0
        for item in row:
            # a weightless row is split evenly
            if sum_of_row_weights == 0:
                ratio = 1 / len(row)
            else:
                ratio = weight_of(item) / sum_of_row_weights
            item_edge = shorter_edge * ratio

            if horizontal:
                assign_geometry(
                    item,
                    bounds.x + position,
                    bounds.y,
                    item_edge,
                    common_item_edge,
                )
            else:
                assign_geometry(
                    item,
                    bounds.x,
                    bounds.y + position,
                    max(0.0, common_item_edge),
                    max(0.0, item_edge),
                )
            position += item_edge
            self._items_remaining -= 1

        self._total_remaining_weight_sum -= sum_of_row_weights
        return self.update_bounds_for_next_row(bounds, common_item_edge)

    # --- bounds reduction -------------------------------------------------

    @staticmethod
    def update_bounds_for_next_row(bounds: Rect, modifier: float) -> Rect:
        """Shrink *bounds* along its longer axis, keeping the far edge fixed."""
        if bounds.width > bounds.height:
            new_width = max(0.0, bounds.width - modifier)
            bounds.x -= new_width - bounds.width
            bounds.width = new_width
        else:
            new_height = max(0.0, bounds.height - modifier)
            bounds.y -= new_height - bounds.height
            bounds.height = new_height
        return bounds

    @staticmethod
    def sum_weights(items: Iterable[Any]) -> float:
        return sum(weight_of(item) for item in items)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def squarify(items: Iterable[Any], bounds: Any) -> None:
    """Lay out *items* inside *bounds* in place using a fresh engine."""
    SquarifyLayout().squarify(items, bounds)


def squarify_rects(weights: Iterable[float], bounds: Any) -> List[WeightedRect]:
    """
    Lay out *weights* inside *bounds* and return one rectangle per weight.

    The result is in input order: ``result[i]`` belongs to ``weights[i]``.
    """
    rects = [WeightedRect(weight=w) for w in weights]
    squarify(rects, bounds)
    return rects


def treemap_polygons(
    weights: Iterable[float],
    width: float,
    height: float,
    origin_x: float = 0.0,
    origin_y: float = 0.0,
) -> List[Polygon]:
    """
    Partition a *width* x *height* rectangle into one polygon per weight.

    Parameters
    ----------
    weights : iterable of float
        Relative size of each tile.
    width, height : float
        Overall dimensions.
    origin_x, origin_y : float
        Top-left corner of the bounding rectangle.

    Returns
    -------
    list[Polygon]
        One Shapely Polygon per weight, in input order.
    """
    bounds = Rect(origin_x, origin_y, width, height)
    return [r.to_polygon() for r in squarify_rects(weights, bounds)]
