"""
test_geometry.py
----------------
Tests for the float rectangle and its overlap predicates.
"""

from dino_deputy.systems.collision.geometry import Rect, overlaps, overlaps_horizontally


class TestOverlaps:

    def test_overlapping_rects(self):
        assert overlaps(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_touching_edges_do_not_overlap(self):
        a = Rect(0, 0, 10, 10)
        assert not overlaps(a, Rect(10, 0, 10, 10))
        assert not overlaps(a, Rect(0, 10, 10, 10))

    def test_containment_overlaps(self):
        assert overlaps(Rect(0, 0, 100, 100), Rect(40, 40, 5, 5))

    def test_overlap_is_symmetric(self):
        a, b = Rect(0, 0, 10, 10), Rect(9.5, 9.5, 1, 1)
        assert overlaps(a, b) and overlaps(b, a)

    def test_horizontal_only(self):
        a = Rect(0, 0, 10, 10)
        far_below = Rect(5, 500, 10, 10)
        assert overlaps_horizontally(a, far_below)
        assert not overlaps(a, far_below)
        assert not overlaps_horizontally(a, Rect(10, 0, 5, 5))


class TestRectProperties:

    def test_edges_and_center(self):
        r = Rect(10, 20, 30, 40)
        assert (r.right, r.bottom) == (40, 60)
        assert (r.center_x, r.center_y) == (25, 40)
