"""
Unit tests for geometry primitives and oriented bounding boxes.

Tests:
- Vector and Point arithmetic
- Rectangle construction and containment
- Transform inversion
- Bounds padding, containment, union, intersection
"""

import math
import pytest

from models import (
    Bounds, InvalidGeometryError, Point, Rectangle, Size, Transform, Vector,
)


def assert_bounds_equal(a: Bounds, b: Bounds):
    assert a.offset.x == pytest.approx(b.offset.x)
    assert a.offset.y == pytest.approx(b.offset.y)
    assert a.size.width == pytest.approx(b.size.width)
    assert a.size.height == pytest.approx(b.size.height)
    assert a.angle == pytest.approx(b.angle)


class TestVectorAndPoint:
    """Tests for Vector and Point."""

    def test_point_difference_is_vector(self):
        """Test that subtracting points yields a displacement."""
        delta = Point(5, 7) - Point(2, 3)
        assert delta == Vector(3, 4)
        assert delta.magnitude == pytest.approx(5.0)

    def test_point_minus_vector_is_point(self):
        """Test that subtracting a vector moves the point."""
        assert Point(5, 7) - Vector(1, 1) == Point(4, 6)

    def test_normalized(self):
        """Test normalizing a vector."""
        unit = Vector(3, 4).normalized()
        assert unit.x == pytest.approx(0.6)
        assert unit.y == pytest.approx(0.8)

    def test_normalize_zero_vector_fails(self):
        """Test that a zero vector has no direction."""
        with pytest.raises(InvalidGeometryError):
            Vector(0, 0).normalized()

    def test_distance(self):
        assert Point(0, 0).distance(Point(3, 4)) == pytest.approx(5.0)


class TestRectangle:
    """Tests for Rectangle."""

    def test_from_corners_normalizes(self):
        """Test that any two opposite corners give the same rectangle."""
        rect = Rectangle.from_corners(Point(10, 20), Point(0, 5))
        assert rect == Rectangle(0, 5, 10, 15)

    def test_contains_is_inclusive(self):
        """Test containment includes the edges."""
        rect = Rectangle(0, 0, 10, 10)
        assert rect.contains(Point(0, 0))
        assert rect.contains(Point(10, 10))
        assert not rect.contains(Point(10.1, 5))

    def test_expand(self):
        """Test growing a rectangle on every side."""
        assert Rectangle(0, 0, 10, 4).expand(2) == Rectangle(-2, -2, 14, 8)

    def test_union(self):
        """Test union of two rectangles."""
        union = Rectangle(0, 0, 5, 5).union(Rectangle(3, -2, 10, 4))
        assert union == Rectangle(0, -2, 13, 7)


class TestTransform:
    """Tests for Transform."""

    def test_inverse_round_trip(self):
        """Test that a transform followed by its inverse is the identity."""
        transform = Transform.rotation(0.6).then_translate(Vector(12, -4))
        point = Point(3.5, 7.25)
        back = transform.inverse().transform_point(transform.transform_point(point))
        assert back.x == pytest.approx(point.x)
        assert back.y == pytest.approx(point.y)

    def test_singular_transform_has_no_inverse(self):
        """Test that a degenerate transform cannot be inverted."""
        with pytest.raises(InvalidGeometryError):
            Transform(0, 0, 0, 0, 1, 1).inverse()


class TestBounds:
    """Tests for the oriented bounding box."""

    def test_union_with_itself(self):
        """Test union(A, A) == A for an axis-aligned box."""
        bounds = Bounds.at(Point(1, 2), Size(3, 4))
        assert_bounds_equal(bounds.union(bounds), bounds)

    @pytest.mark.parametrize("angle", [0.0, 0.3, math.pi / 2, 2.5, -1.0])
    def test_contains_center(self, angle):
        """Test that a box contains its own centre at any rotation."""
        bounds = Bounds(Vector(10, 5), Size(20, 4), angle)
        assert bounds.contains(bounds.center())

    def test_center_of_rotated_box(self):
        """Test the centre is rotated with the box."""
        bounds = Bounds(Vector(0, 0), Size(10, 2), math.pi / 2)
        center = bounds.center()
        assert center.x == pytest.approx(-1.0)
        assert center.y == pytest.approx(5.0)

    def test_contains_with_invalid_transform(self):
        """Test that a box with no invertible transform contains nothing."""
        bounds = Bounds(Vector(0, 0), Size(10, 10), float("nan"))
        assert not bounds.contains(Point(5, 5))

    def test_padding_axis_aligned(self):
        """Test padding an axis-aligned box."""
        bounds = Bounds.at(Point(0, 0), Size(10, 4))
        bounds.add_padding(3)
        assert_bounds_equal(bounds, Bounds.at(Point(-3, -3), Size(16, 10)))

    def test_padding_follows_rotation(self):
        """Test padding grows a rotated box on its rotated sides."""
        bounds = Bounds(Vector(0, 0), Size(10, 0), math.pi / 2)
        bounds.add_padding(1)

        assert bounds.offset.x == pytest.approx(1.0)
        assert bounds.offset.y == pytest.approx(-1.0)
        assert bounds.contains(Point(0, -0.5))
        assert bounds.contains(Point(0.9, 10.9))
        assert not bounds.contains(Point(1.5, 5))
        assert not bounds.contains(Point(0, 11.5))

    def test_union_is_axis_aligned(self):
        """Test that union discards rotation."""
        rotated = Bounds(Vector(0, 0), Size(10, 10), math.pi / 4)
        union = rotated.union(rotated)
        half_diagonal = 10 / math.sqrt(2)

        assert union.angle == 0.0
        assert union.offset.x == pytest.approx(-half_diagonal)
        assert union.offset.y == pytest.approx(0.0)
        assert union.size.width == pytest.approx(2 * half_diagonal)
        assert union.size.height == pytest.approx(2 * half_diagonal)

    def test_union_uses_independent_axes(self):
        """Test union takes min and max per axis over all corners."""
        a = Bounds.at(Point(0, 10), Size(5, 5))
        b = Bounds.at(Point(10, 0), Size(5, 5))
        assert_bounds_equal(a.union(b), Bounds.at(Point(0, 0), Size(15, 15)))

    def test_intersects_and_contained(self):
        """Test the rectangle predicates used by drag selection."""
        bounds = Bounds.at(Point(0, 0), Size(10, 10))

        enclosing = Rectangle(-1, -1, 12, 12)
        assert bounds.is_contained(enclosing)
        assert bounds.intersects(enclosing)

        overlapping = Rectangle(5, 5, 10, 10)
        assert bounds.intersects(overlapping)
        assert not bounds.is_contained(overlapping)

        disjoint = Rectangle(20, 20, 5, 5)
        assert not bounds.intersects(disjoint)
        assert not bounds.is_contained(disjoint)

    def test_translate(self):
        """Test moving a box keeps size and angle."""
        moved = Bounds(Vector(1, 1), Size(2, 3), 0.5) + Vector(4, -1)
        assert_bounds_equal(moved, Bounds(Vector(5, 0), Size(2, 3), 0.5))
