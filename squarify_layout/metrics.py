"""
Quality metrics for treemap layouts.

Evaluates a finished layout on three axes:
  1. **Area accuracy**: how close each tile's area is to its weight share.
  2. **Shape quality**: how square the tiles are.
  3. **Coverage**: how much of the bounds the tiles fill.

Plus overlap detection and a pass/fail tiling check.  Tiles may be any
object or mapping :meth:`Rect.coerce` accepts.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from shapely.ops import unary_union

from . import config
from .rect_model import Rect, weight_of

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Individual scoring components
# ---------------------------------------------------------------------------

def worst_aspect_ratio(rects: Sequence[Any]) -> float:
    """Largest aspect ratio among tiles with non-zero area (1.0 if none)."""
    ratios = [r.aspect_ratio for r in map(Rect.coerce, rects) if r.area > 0]
    return max(ratios, default=1.0)


def area_accuracy_score(items: Sequence[Any], bounds: Any) -> float:
    """
    Score ∈ [0, 1].  1.0 means every tile got exactly its weight share.

    Uses: ``1 - mean(|actual - expected| / expected)`` with each error
    capped at 100 %.  With zero total weight the expected share is
    uniform.
    """
    if not items:
        return 0.0
    total_area = Rect.coerce(bounds).area
    total_weight = sum(weight_of(i) for i in items)

    errors = []
    for item in items:
        if total_weight == 0:
            expected = total_area / len(items)
        else:
            expected = total_area * weight_of(item) / total_weight
        if expected <= 0:
            continue
        err = abs(Rect.coerce(item).area - expected) / expected
        errors.append(min(err, 1.0))
    if not errors:
        return 1.0
    return max(0.0, 1.0 - (sum(errors) / len(errors)))


def shape_quality_score(rects: Sequence[Any],
                        max_aspect_ratio: Optional[float] = None) -> float:
    """
    Score ∈ [0, 1].  1.0 means every tile is close to square.

    Tiles up to ``config.GOOD_ASPECT_RATIO`` cost nothing; the penalty
    rises linearly to 0.5 at *max_aspect_ratio* and is 1.0 beyond it.
    Zero-area tiles have no shape and are skipped.
    """
    limit = max_aspect_ratio or config.MAX_ASPECT_RATIO
    good = config.GOOD_ASPECT_RATIO
    penalties = []
    for r in map(Rect.coerce, rects):
        if r.area <= 0:
            continue
        ar = r.aspect_ratio
        if ar <= good:
            penalties.append(0.0)
        elif ar <= limit:
            penalties.append((ar - good) / (limit - good) * 0.5)
        else:
            penalties.append(1.0)
    if not penalties:
        return 1.0
    return max(0.0, 1.0 - (sum(penalties) / len(penalties)))


def coverage_ratio(rects: Sequence[Any], bounds: Any) -> float:
    """
    Ratio ∈ [0, 1] of the bounds area covered by the union of tiles.
    """
    boundary = Rect.coerce(bounds)
    if boundary.area <= 0:
        return 0.0
    polys = [r.to_polygon() for r in map(Rect.coerce, rects) if r.area > 0]
    if not polys:
        return 0.0
    merged = unary_union(polys)
    covered = merged.intersection(boundary.to_polygon()).area
    return max(0.0, min(1.0, covered / boundary.area))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def detect_overlaps(rects: Sequence[Any],
                    tolerance: Optional[float] = None) -> List[Tuple[int, int]]:
    """
    Return ``(i, j)`` index pairs of tiles whose interiors overlap.

    Tiles sharing only an edge (zero-area intersection) are **not**
    considered overlapping.
    """
    tol = config.TOLERANCE if tolerance is None else tolerance
    polys = [Rect.coerce(r).to_polygon() for r in rects]
    overlaps = []
    for i in range(len(polys)):
        if polys[i].area <= 0:
            continue
        for j in range(i + 1, len(polys)):
            if polys[j].area <= 0:
                continue
            if polys[i].intersection(polys[j]).area > tol:
                overlaps.append((i, j))
    return overlaps


def validate_tiling(rects: Sequence[Any], bounds: Any,
                    tolerance: Optional[float] = None) -> bool:
    """
    True when *rects* tile *bounds*: no overlaps, nothing outside the
    bounds, and the tile areas add up to the bounds area.

    The tolerance is absolute for edges and relative to the bounds
    area for areas.
    """
    tol = config.TOLERANCE if tolerance is None else tolerance
    boundary = Rect.coerce(bounds)
    tiles = [Rect.coerce(r) for r in rects]

    overlaps = detect_overlaps(tiles, tol * max(boundary.area, 1.0))
    if overlaps:
        logger.debug(f"Tiling rejected: {len(overlaps)} overlapping pairs, first {overlaps[0]}")
        return False

    for i, t in enumerate(tiles):
        if (t.x < boundary.x - tol or t.y < boundary.y - tol
                or t.x + t.width > boundary.x + boundary.width + tol
                or t.y + t.height > boundary.y + boundary.height + tol):
            logger.debug(f"Tiling rejected: tile {i} {t!r} leaves bounds {boundary!r}")
            return False

    total = sum(t.area for t in tiles)
    if abs(total - boundary.area) > tol * max(boundary.area, 1.0):
        logger.debug(f"Tiling rejected: tile area {total:.6f} != bounds area {boundary.area:.6f}")
        return False
    return True


# ---------------------------------------------------------------------------
# Combined score
# ---------------------------------------------------------------------------

def score_layout(
    items: Sequence[Any],
    bounds: Any,
    weights: Optional[Dict[str, float]] = None,
) -> Dict[str, float]:
    """
    Compute the total score for a finished layout.

    Parameters
    ----------
    items : sequence
        Laid-out items carrying ``weight`` and geometry.
    bounds : Rect, mapping or object
        The bounds the layout was computed for.
    weights : dict, optional
        Override default component weights.  Keys: ``area``, ``shape``,
        ``coverage``.

    Returns
    -------
    dict
        ``total``, ``area``, ``shape``, ``coverage`` scores.
    """
    w = weights or config.SCORE_WEIGHTS

    s_area = area_accuracy_score(items, bounds)
    s_shape = shape_quality_score(items)
    s_cov = coverage_ratio(items, bounds)

    total = (
        w.get("area", 0.0) * s_area
        + w.get("shape", 0.0) * s_shape
        + w.get("coverage", 0.0) * s_cov
    )

    return {
        "total": round(total, 4),
        "area": round(s_area, 4),
        "shape": round(s_shape, 4),
        "coverage": round(s_cov, 4),
    }
