"""Unit tests for the covering engine (coverage, scanner, expander, cover).

Tests:
    - CoverageTracker marks inclusive rectangles, never reverts
    - first_uncovered: row-major order, transparent skip, wraparound, None when done
    - expand: right before down, hard stops (color, transparency, coverage, bounds)
    - cover_box: exact/quantized/pink fills, transparent origin
    - cover_all_pixels: one rectangle per opaque pixel in row-major order
"""

import pytest

from png2svg.vectorizer.box import Box
from png2svg.vectorizer.coverage import CoverageTracker
from png2svg.vectorizer.pixel_image import PixelImage

from conftest import BLUE, CLEAR, GREEN, RED


# ============================================================================
# COVERAGE TRACKER
# ============================================================================

def test_coverage_starts_empty():
    tracker = CoverageTracker(3, 2)
    assert tracker.shape == (2, 3)
    assert tracker.count() == 0
    assert not tracker.is_covered(2, 1)


def test_coverage_marks_inclusive_rectangle():
    tracker = CoverageTracker(4, 4)
    tracker.mark_covered(1, 1, 2, 3)

    assert tracker.count() == 6
    assert tracker.is_covered(1, 1)
    assert tracker.is_covered(2, 3)
    assert not tracker.is_covered(0, 1)
    assert not tracker.is_covered(3, 3)


def test_coverage_is_monotonic():
    tracker = CoverageTracker(2, 2)
    tracker.mark_covered(0, 0, 1, 1)
    tracker.mark_covered(0, 0, 0, 0)
    assert tracker.count() == 4


def test_coverage_mask_is_read_only():
    tracker = CoverageTracker(2, 2)
    with pytest.raises(ValueError):
        tracker.mask[0, 0] = True


# ============================================================================
# SCANNER
# ============================================================================

def test_first_uncovered_row_major(make_grid):
    pi = PixelImage(make_grid([
        [CLEAR, CLEAR, CLEAR],
        [CLEAR, RED, RED],
    ]))
    assert pi.first_uncovered(0, 0) == (1, 1)


def test_first_uncovered_skips_covered(make_grid):
    pi = PixelImage(make_grid([[RED, RED, BLUE]]))
    pi.coverage.mark_covered(0, 0, 1, 0)
    assert pi.first_uncovered(0, 0) == (2, 0)


def test_first_uncovered_wraps_around(make_grid):
    pi = PixelImage(make_grid([
        [RED, CLEAR],
        [CLEAR, CLEAR],
    ]))
    assert pi.first_uncovered(1, 1) == (0, 0)


def test_first_uncovered_wraps_to_hint_row_prefix(make_grid):
    pi = PixelImage(make_grid([
        [CLEAR, CLEAR, CLEAR],
        [RED, CLEAR, CLEAR],
    ]))
    assert pi.first_uncovered(2, 1) == (0, 1)


def test_first_uncovered_none_when_all_covered(make_grid):
    pi = PixelImage(make_grid([[RED, BLUE]]))
    pi.coverage.mark_covered(0, 0, 1, 0)
    assert pi.first_uncovered(1, 0) is None
    assert pi.done(0, 0)


def test_first_uncovered_none_for_transparent_grid(make_grid):
    pi = PixelImage(make_grid([[CLEAR, CLEAR], [CLEAR, CLEAR]]))
    assert pi.first_uncovered() is None


def test_first_uncovered_out_of_range_hint(make_grid):
    pi = PixelImage(make_grid([[CLEAR, RED]]))
    assert pi.first_uncovered(10, 10) == (1, 0)


def test_first_uncovered_same_result_for_any_hint_before_target(make_grid):
    """Hints at or before the first pending pixel all find the same pixel."""
    pi = PixelImage(make_grid([
        [RED, RED, RED],
        [RED, BLUE, RED],
        [RED, RED, RED],
    ]))
    pi.coverage.mark_covered(0, 0, 2, 0)
    pi.coverage.mark_covered(0, 1, 0, 1)
    for hint in [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1)]:
        assert pi.first_uncovered(*hint) == (1, 1)


# ============================================================================
# BOX CREATION AND EXPANSION
# ============================================================================

def test_create_box_is_single_pixel(make_grid):
    pi = PixelImage(make_grid([[RED, (1, 2, 3, 200)]]))
    box = pi.create_box(1, 0)
    assert (box.x0, box.y0, box.x1, box.y1) == (1, 0, 1, 0)
    assert box.rgb == (1, 2, 3)
    assert box.alpha == 200
    assert box.area == 1


def test_expand_right_then_down(make_grid):
    pi = PixelImage(make_grid([
        [RED, RED, RED],
        [RED, RED, RED],
        [RED, RED, BLUE],
    ]))
    box = pi.create_box(0, 0)
    assert pi.expand(box)
    # Full width is taken first, so row 2 (with BLUE) stops downward growth
    assert (box.x0, box.y0, box.x1, box.y1) == (0, 0, 2, 1)


def test_expand_prefers_width_over_height(make_grid):
    pi = PixelImage(make_grid([
        [RED, RED],
        [RED, BLUE],
        [RED, BLUE],
    ]))
    box = pi.create_box(0, 0)
    pi.expand(box)
    assert (box.width, box.height) == (2, 1)


def test_expand_single_pixel_returns_false(make_grid):
    pi = PixelImage(make_grid([[RED, BLUE], [BLUE, RED]]))
    box = pi.create_box(0, 0)
    assert not pi.expand(box)
    assert box.area == 1


def test_expand_stops_at_transparent(make_grid):
    pi = PixelImage(make_grid([[RED, CLEAR, RED]]))
    box = pi.create_box(0, 0)
    assert not pi.expand(box)
    assert box.x1 == 0


def test_expand_stops_at_covered(make_grid):
    pi = PixelImage(make_grid([[RED, RED, RED]]))
    pi.coverage.mark_covered(1, 0, 1, 0)
    box = pi.create_box(0, 0)
    assert not pi.expand(box)


def test_expand_requires_exact_color(make_grid):
    pi = PixelImage(make_grid([[(16, 32, 48, 255), (17, 32, 48, 255)]]))
    box = pi.create_box(0, 0)
    assert not pi.expand(box)


def test_expand_ignores_alpha_differences(make_grid):
    pi = PixelImage(make_grid([[(255, 0, 0, 128), RED]]))
    box = pi.create_box(0, 0)
    assert pi.expand(box)
    assert box.width == 2


def test_expand_down_checks_full_width(make_grid):
    pi = PixelImage(make_grid([
        [RED, RED, RED],
        [RED, RED, CLEAR],
    ]))
    box = pi.create_box(0, 0)
    pi.expand(box)
    assert (box.width, box.height) == (3, 1)


def test_expand_stays_in_bounds(make_grid):
    pi = PixelImage(make_grid([[RED, RED], [RED, RED]]))
    box = pi.create_box(1, 1)
    assert not pi.expand(box)
    assert (box.x1, box.y1) == (1, 1)


# ============================================================================
# COVER
# ============================================================================

def test_cover_box_exact_color(make_grid):
    pi = PixelImage(make_grid([[(0x12, 0x34, 0x56, 255)]]))
    rect = pi.cover_box(pi.create_box(0, 0))
    assert rect.fill == "#123456"
    assert (rect.x, rect.y, rect.width, rect.height) == (0, 0, 1, 1)
    assert pi.coverage.is_covered(0, 0)
    assert len(pi.document) == 1


def test_cover_box_quantized_color(make_grid):
    pi = PixelImage(make_grid([[(0x12, 0x34, 0x56, 255)]]))
    rect = pi.cover_box(pi.create_box(0, 0), quantize=True)
    assert rect.fill == "#135"


def test_cover_box_pink_only_when_larger_than_one_pixel(make_grid):
    pi = PixelImage(make_grid([[RED, RED, BLUE]]))

    box = pi.create_box(0, 0)
    pi.expand(box)
    assert pi.cover_box(box, pink=True).fill == "#bb3388"

    single = pi.create_box(2, 0)
    pi.expand(single)
    assert pi.cover_box(single, pink=True).fill == "#0000ff"


def test_cover_box_pink_quantized(make_grid):
    pi = PixelImage(make_grid([[GREEN, GREEN]]))
    box = pi.create_box(0, 0)
    pi.expand(box)
    assert pi.cover_box(box, pink=True, quantize=True).fill == "#b38"


def test_cover_box_transparent_origin_is_not_emitted(make_grid):
    pi = PixelImage(make_grid([[CLEAR]]))
    box = Box(0, 0, 0, 0, 0, 0, 0, 0)
    assert pi.cover_box(box) is None
    assert len(pi.document) == 0
    assert pi.coverage.is_covered(0, 0)


def test_cover_all_pixels_one_rect_per_opaque_pixel(make_grid):
    pi = PixelImage(make_grid([
        [RED, CLEAR, RED],
        [BLUE, BLUE, CLEAR],
    ]))
    assert pi.cover_all_pixels() == 4

    rects = pi.document.rectangles
    assert [(r.x, r.y) for r in rects] == [(0, 0), (2, 0), (0, 1), (1, 1)]
    assert all(r.width == 1 and r.height == 1 for r in rects)
    assert pi.done()


def test_cover_all_pixels_skips_already_covered(make_grid):
    pi = PixelImage(make_grid([[RED, RED, RED]]))
    pi.coverage.mark_covered(0, 0, 1, 0)
    assert pi.cover_all_pixels() == 1
    assert pi.document.rectangles[0].x == 2
