"""Tests for layout quality metrics and tiling validation."""
import logging

import pytest

from squarify_layout import Rect, WeightedRect, score_layout, squarify, validate_tiling
from squarify_layout.metrics import (
    area_accuracy_score,
    coverage_ratio,
    detect_overlaps,
    shape_quality_score,
    worst_aspect_ratio,
)


def _tile(x, y, w, h, weight=1):
    return {"weight": weight, "x": x, "y": y, "width": w, "height": h}


@pytest.fixture
def worked_example():
    items = [WeightedRect(weight=w) for w in (3, 2, 1)]
    bounds = Rect(0, 0, 100, 100)
    squarify(items, bounds)
    return items, bounds


# ============================================================================
# Area accuracy
# ============================================================================

class TestAreaAccuracy:
    def test_squarify_output_is_exact(self, worked_example):
        items, bounds = worked_example
        assert area_accuracy_score(items, bounds) == pytest.approx(1.0)

    def test_partial_error(self):
        tiles = [_tile(0, 0, 10, 5), _tile(0, 5, 10, 2.5)]
        # second tile has half its share: error 0.5, mean 0.25
        assert area_accuracy_score(tiles, Rect(0, 0, 10, 10)) == pytest.approx(0.75)

    def test_zero_total_weight_expects_uniform_share(self):
        tiles = [_tile(0, 0, 30, 30, 0), _tile(30, 0, 30, 30, 0), _tile(60, 0, 30, 30, 0)]
        assert area_accuracy_score(tiles, Rect(0, 0, 90, 30)) == pytest.approx(1.0)

    def test_zero_weight_tiles_skipped(self):
        tiles = [_tile(0, 0, 10, 10, 1), _tile(10, 0, 0, 10, 0)]
        assert area_accuracy_score(tiles, Rect(0, 0, 10, 10)) == pytest.approx(1.0)

    def test_empty(self):
        assert area_accuracy_score([], Rect(0, 0, 10, 10)) == 0.0


# ============================================================================
# Shape quality
# ============================================================================

class TestShapeQuality:
    def test_squares(self):
        assert shape_quality_score([_tile(0, 0, 5, 5), _tile(5, 0, 5, 5)]) == 1.0

    def test_too_elongated(self):
        assert shape_quality_score([_tile(0, 0, 3, 1)]) == 0.0

    def test_moderate_ratio(self):
        score = shape_quality_score([_tile(0, 0, 2, 1)])
        assert score == pytest.approx(1.0 - (0.5 / 0.7) * 0.5)

    def test_custom_limit(self):
        assert shape_quality_score([_tile(0, 0, 3, 1)], max_aspect_ratio=4.0) == pytest.approx(
            1.0 - (1.5 / 2.5) * 0.5
        )

    def test_zero_area_skipped(self):
        assert shape_quality_score([_tile(0, 0, 0, 5)]) == 1.0

    def test_worst_aspect_ratio(self, worked_example):
        items, _ = worked_example
        assert worst_aspect_ratio(items) == pytest.approx(2.0)
        assert worst_aspect_ratio([]) == 1.0


# ============================================================================
# Coverage and overlaps
# ============================================================================

class TestCoverage:
    def test_full_coverage(self, worked_example):
        items, bounds = worked_example
        assert coverage_ratio(items, bounds) == pytest.approx(1.0)

    def test_half_coverage(self):
        assert coverage_ratio([_tile(0, 0, 5, 10)], Rect(0, 0, 10, 10)) == pytest.approx(0.5)

    def test_outside_tiles_not_counted(self):
        assert coverage_ratio([_tile(10, 0, 10, 10)], Rect(0, 0, 10, 10)) == pytest.approx(0.0)

    def test_zero_area_bounds(self):
        assert coverage_ratio([_tile(0, 0, 5, 5)], Rect(0, 0, 0, 10)) == 0.0


class TestOverlaps:
    def test_shared_edge_is_not_overlap(self):
        assert detect_overlaps([_tile(0, 0, 5, 5), _tile(5, 0, 5, 5)]) == []

    def test_overlap_detected(self):
        tiles = [_tile(0, 0, 5, 5), _tile(5, 0, 5, 5), _tile(4, 4, 2, 2)]
        assert detect_overlaps(tiles) == [(0, 2), (1, 2)]

    def test_zero_area_tiles_ignored(self):
        assert detect_overlaps([_tile(0, 0, 5, 5), _tile(2, 0, 0, 5)]) == []


# ============================================================================
# Tiling validation
# ============================================================================

class TestValidateTiling:
    def test_valid(self, worked_example):
        items, bounds = worked_example
        assert validate_tiling(items, bounds) is True

    def test_overlap_rejected(self, caplog):
        tiles = [_tile(0, 0, 10, 6), _tile(0, 4, 10, 4)]
        with caplog.at_level(logging.DEBUG, logger="squarify_layout.metrics"):
            assert validate_tiling(tiles, Rect(0, 0, 10, 10)) is False
        assert "overlapping" in caplog.text

    def test_gap_rejected(self, caplog):
        tiles = [_tile(0, 0, 10, 5), _tile(0, 6, 10, 4)]
        with caplog.at_level(logging.DEBUG, logger="squarify_layout.metrics"):
            assert validate_tiling(tiles, Rect(0, 0, 10, 10)) is False
        assert "tile area" in caplog.text

    def test_outside_rejected(self, caplog):
        tiles = [_tile(0, 0, 10, 5), _tile(0, 5, 12, 5)]
        with caplog.at_level(logging.DEBUG, logger="squarify_layout.metrics"):
            assert validate_tiling(tiles, Rect(0, 0, 10, 10)) is False
        assert "leaves bounds" in caplog.text


# ============================================================================
# Combined score
# ============================================================================

class TestScoreLayout:
    def test_output_structure(self, worked_example):
        items, bounds = worked_example
        score = score_layout(items, bounds)
        assert set(score) == {"total", "area", "shape", "coverage"}

    def test_worked_example_scores(self, worked_example):
        items, bounds = worked_example
        score = score_layout(items, bounds)
        assert score["area"] == pytest.approx(1.0)
        assert score["coverage"] == pytest.approx(1.0)
        # only the 100 x 50 strip (ratio 2.0) is penalised
        assert score["shape"] == pytest.approx(1.0 - (0.5 / 0.7) * 0.5 / 3, abs=1e-4)
        expected = 0.40 * score["area"] + 0.35 * score["shape"] + 0.25 * score["coverage"]
        assert score["total"] == pytest.approx(expected, abs=1e-3)

    def test_custom_weights(self, worked_example):
        items, bounds = worked_example
        score = score_layout(items, bounds, weights={"area": 1.0})
        assert score["total"] == pytest.approx(score["area"])
