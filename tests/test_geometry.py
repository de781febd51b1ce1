from unittest import TestCase

from Nodes.R_tree.Geometry_Utils import (
    distributions, overlap_increase, sort_entries, union_all, X_AXIS, Y_AXIS,
)
from Nodes.R_entry import DataEntry
from Nodes.R_tree.Point import Point
from Nodes.R_tree.Rectangle_R import EMPTY, UNIT_SQUARE, Rectangle


class TestRectangle(TestCase):
    """Tests for the rectangle value type"""

    def test_from_corner_matches_bounds(self):
        r = Rectangle.from_corner(Point(10, 0), 2, 3)
        self.assertEqual(Rectangle(10, 0, 12, 3), r)
        self.assertEqual(Point(10, 0), r.left_upper_corner)
        self.assertEqual(Point(12, 3), r.right_lower_corner)
        self.assertEqual(2, r.width)
        self.assertEqual(3, r.height)

    def test_negative_extent_rejected(self):
        with self.assertRaises(ValueError):
            Rectangle(5, 0, 4, 1)
        with self.assertRaises(ValueError):
            Rectangle.from_corner(Point(0, 0), 1, -1)

    def test_area_and_margin(self):
        r = Rectangle(0, 0, 4, 5)
        self.assertEqual(20, r.area())
        self.assertEqual(18, r.margin())
        self.assertEqual(1, UNIT_SQUARE.area())

    def test_union_covers_both(self):
        a = Rectangle(0, 0, 2, 2)
        b = Rectangle(5, 1, 6, 8)
        self.assertEqual(Rectangle(0, 0, 6, 8), a.union(b))
        self.assertEqual(a.union(b), b.union(a))

    def test_union_with_empty_returns_other(self):
        a = Rectangle(3, 3, 4, 7)
        self.assertIs(a, EMPTY.union(a))
        self.assertIs(a, a.union(EMPTY))
        self.assertTrue(EMPTY.is_empty)

    def test_enlarge_to_contain_keeps_degenerate_rectangles(self):
        a = Rectangle(0, 0, 1, 1)
        p = Rectangle(5, 5, 5, 5)
        self.assertEqual(a, a.union(p))
        self.assertEqual(Rectangle(0, 0, 5, 5), a.enlarge_to_contain(p))

    def test_intersects_is_edge_inclusive(self):
        a = Rectangle(0, 0, 2, 2)
        self.assertTrue(a.intersects(Rectangle(2, 2, 3, 3)))
        self.assertTrue(a.intersects(Rectangle(1, 1, 1.5, 1.5)))
        self.assertFalse(a.intersects(Rectangle(2.01, 0, 3, 2)))
        self.assertFalse(a.intersects(Rectangle(0, 3, 2, 4)))

    def test_contains_point_and_rectangle(self):
        a = Rectangle(0, 0, 2, 2)
        self.assertTrue(a.contains(Point(2, 2)))
        self.assertTrue(a.contains(Point(1, 0)))
        self.assertFalse(a.contains(Point(2.5, 1)))
        self.assertTrue(a.contains(Rectangle(0, 0, 2, 2)))
        self.assertTrue(a.contains(Rectangle(0.5, 0.5, 1, 1)))
        self.assertFalse(a.contains(Rectangle(1, 1, 3, 1.5)))

    def test_intersection_area_clamps_each_axis(self):
        a = Rectangle(0, 0, 4, 5)
        self.assertEqual(2, a.intersection_area(Rectangle(2, 4, 5, 6)))
        # se solapan en x pero no en y
        self.assertEqual(0, a.intersection_area(Rectangle(1, 7, 3, 9)))
        # tocarse por el borde no aporta área
        self.assertEqual(0, a.intersection_area(Rectangle(4, 0, 6, 5)))

    def test_enlargement_area(self):
        a = Rectangle(0, 0, 2, 2)
        self.assertEqual(0, a.enlargement_area(Rectangle(1, 1, 2, 2)))
        self.assertEqual(2, a.enlargement_area(Rectangle(2, 0, 3, 2)))

    def test_distance_squared_to_center(self):
        a = Rectangle(0, 0, 2, 2)
        b = Rectangle(3, 4, 5, 6)
        self.assertEqual(Point(1, 1), a.center)
        self.assertEqual(25, a.distance_squared_to_center(b))
        self.assertEqual(0, a.distance_squared_to_center(a))

    def test_of_point_is_centered(self):
        r = Rectangle.of_point(Point(1, 1), size=0.5)
        self.assertEqual(Rectangle(0.75, 0.75, 1.25, 1.25), r)
        self.assertTrue(r.contains(Point(1, 1)))

    def test_bounding(self):
        rects = [Rectangle(0, 0, 1, 1), Rectangle(4, -2, 5, 0), Rectangle(2, 2, 3, 6)]
        self.assertEqual(Rectangle(0, -2, 5, 6), Rectangle.bounding(rects))
        with self.assertRaises(ValueError):
            Rectangle.bounding([])


class TestGeometryUtils(TestCase):
    """Tests for the helpers used by the tree engine"""

    def test_union_all_of_nothing_is_empty(self):
        self.assertEqual(EMPTY, union_all([]))
        self.assertEqual(Rectangle(0, 0, 3, 3), union_all([Rectangle(0, 0, 1, 1), Rectangle(2, 2, 3, 3)]))

    def test_overlap_increase(self):
        # Arrange
        a = Rectangle(0, 0, 4, 5)
        b = Rectangle(2, 4, 5, 6)
        new = Rectangle(4, 3, 5, 4)

        # Act / Assert
        self.assertEqual(1, overlap_increase(a, [b], new))
        self.assertEqual(2, overlap_increase(b, [a], new))

    def test_sort_entries_by_lower_and_upper_edge(self):
        e1 = DataEntry(Rectangle(0, 5, 10, 6), 'e1')
        e2 = DataEntry(Rectangle(1, 0, 2, 1), 'e2')
        e3 = DataEntry(Rectangle(3, 2, 4, 3), 'e3')
        entries = [e1, e2, e3]

        self.assertEqual([e1, e2, e3], sort_entries(entries, X_AXIS))
        self.assertEqual([e2, e3, e1], sort_entries(entries, X_AXIS, by_upper=True))
        self.assertEqual([e2, e3, e1], sort_entries(entries, Y_AXIS))

    def test_distributions_respect_minimum(self):
        entries = list(range(6))  # M = 5, m = 2 -> 6 entradas
        splits = list(distributions(entries, 2, 5))

        self.assertEqual([2, 3, 4], [s for s, _, _ in splits])
        for _, g1, g2 in splits:
            self.assertGreaterEqual(len(g1), 2)
            self.assertGreaterEqual(len(g2), 2)
            self.assertEqual(entries, g1 + g2)
