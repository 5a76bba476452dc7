"""
2D geometry primitives and oriented bounding boxes.

Bounds is the oriented bounding box used for hit-testing, rubber-band
selection and outlines. It is a rectangle of a given size in a local frame
that is rotated and then translated into world space.
"""

from dataclasses import dataclass, field
import math

from .errors import InvalidGeometryError


# Below this determinant a transform is treated as non-invertible
_DEGENERATE_EPSILON = 1e-12


@dataclass(frozen=True)
class Vector:
    """A 2D displacement."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector":
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vector":
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector":
        """Unit vector in the same direction; a zero vector has no direction."""
        mag = self.magnitude
        if mag == 0.0 or not math.isfinite(mag):
            raise InvalidGeometryError(f"cannot normalize vector {self}")
        return self / mag

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Point:
    """A 2D position."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, vector: Vector) -> "Point":
        return Point(self.x + vector.x, self.y + vector.y)

    def __sub__(self, other):
        # Point - Point is a displacement, Point - Vector is a point
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        return Point(self.x - other.x, self.y - other.y)

    def distance(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_vector(self) -> Vector:
        return Vector(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle with its top-left corner at (x, y)."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Rectangle":
        """Normalized rectangle spanned by two opposite corners."""
        return cls(
            min(a.x, b.x),
            min(a.y, b.y),
            abs(a.x - b.x),
            abs(a.y - b.y),
        )

    @classmethod
    def with_size(cls, size: Size) -> "Rectangle":
        return cls(0.0, 0.0, size.width, size.height)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def top_left(self) -> Point:
        return Point(self.x, self.y)

    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains(self, point: Point) -> bool:
        return (self.x <= point.x <= self.right and
                self.y <= point.y <= self.bottom)

    def expand(self, amount: float) -> "Rectangle":
        """Grow by `amount` on every side."""
        return Rectangle(
            self.x - amount,
            self.y - amount,
            self.width + 2.0 * amount,
            self.height + 2.0 * amount,
        )

    def union(self, other: "Rectangle") -> "Rectangle":
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return Rectangle(x, y, max(self.right, other.right) - x, max(self.bottom, other.bottom) - y)

    def translated(self, vector: Vector) -> "Rectangle":
        return Rectangle(self.x + vector.x, self.y + vector.y, self.width, self.height)


@dataclass(frozen=True)
class Transform:
    """
    2D affine transform.

    Maps (x, y) to (x*m11 + y*m21 + dx, x*m12 + y*m22 + dy).
    """
    m11: float = 1.0
    m12: float = 0.0
    m21: float = 0.0
    m22: float = 1.0
    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def rotation(cls, angle: float) -> "Transform":
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return cls(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

    @classmethod
    def translation(cls, vector: Vector) -> "Transform":
        return cls(dx=vector.x, dy=vector.y)

    def then_translate(self, vector: Vector) -> "Transform":
        return Transform(self.m11, self.m12, self.m21, self.m22,
                         self.dx + vector.x, self.dy + vector.y)

    def determinant(self) -> float:
        return self.m11 * self.m22 - self.m12 * self.m21

    def inverse(self) -> "Transform":
        det = self.determinant()
        if not math.isfinite(det) or abs(det) < _DEGENERATE_EPSILON:
            raise InvalidGeometryError(f"transform is not invertible (det={det})")
        inv = 1.0 / det
        return Transform(
            self.m22 * inv,
            -self.m12 * inv,
            -self.m21 * inv,
            self.m11 * inv,
            (self.m21 * self.dy - self.m22 * self.dx) * inv,
            (self.dx * self.m12 - self.m11 * self.dy) * inv,
        )

    def transform_point(self, point: Point) -> Point:
        return Point(
            point.x * self.m11 + point.y * self.m21 + self.dx,
            point.x * self.m12 + point.y * self.m22 + self.dy,
        )

    def transform_vector(self, vector: Vector) -> Vector:
        """Apply the linear part only."""
        return Vector(
            vector.x * self.m11 + vector.y * self.m21,
            vector.x * self.m12 + vector.y * self.m22,
        )


@dataclass
class Bounds:
    """
    Rectangular bounding box with arbitrary rotation.

    The local rectangle spans (0, 0)-(width, height); world space is reached
    by rotating by `angle` (radians) and then translating by `offset`.
    """
    offset: Vector = field(default_factory=Vector)
    size: Size = field(default_factory=Size)
    angle: float = 0.0

    @classmethod
    def at(cls, top_left: Point, size: Size, angle: float = 0.0) -> "Bounds":
        return cls(top_left.to_vector(), size, angle)

    @classmethod
    def from_rectangle(cls, rectangle: Rectangle) -> "Bounds":
        return cls(Vector(rectangle.x, rectangle.y), rectangle.size, 0.0)

    def transform(self) -> Transform:
        return Transform.rotation(self.angle).then_translate(self.offset)

    def add_padding(self, padding: float) -> None:
        """Grow by `padding` on every (rotated) side, in place."""
        self.offset = self.offset - self.transform().transform_vector(Vector(padding, padding))
        self.size = Size(self.size.width + 2.0 * padding, self.size.height + 2.0 * padding)

    def corners(self) -> list[Point]:
        """World-space corners, clockwise from the local origin."""
        transform = self.transform()
        return [
            transform.transform_point(point)
            for point in (
                Point(0.0, 0.0),
                Point(self.size.width, 0.0),
                Point(self.size.width, self.size.height),
                Point(0.0, self.size.height),
            )
        ]

    def center(self) -> Point:
        local = Point(self.size.width / 2.0, self.size.height / 2.0)
        return self.transform().transform_point(local)

    def contains(self, point: Point) -> bool:
        try:
            inverse = self.transform().inverse()
        except InvalidGeometryError:
            return False
        local = inverse.transform_point(point)
        return Rectangle.with_size(self.size).contains(local)

    def union(self, other: "Bounds") -> "Bounds":
        """
        Smallest axis-aligned box containing both boxes.

        The rotation of either input is discarded; the result always has
        angle 0.
        """
        points = self.corners() + other.corners()
        min_x = min(point.x for point in points)
        min_y = min(point.y for point in points)
        max_x = max(point.x for point in points)
        max_y = max(point.y for point in points)
        return Bounds.from_rectangle(Rectangle(min_x, min_y, max_x - min_x, max_y - min_y))

    def intersects(self, rect: Rectangle) -> bool:
        """True unless every corner lies on the outer side of one edge of `rect`."""
        corners = self.corners()
        for inside in _INSIDE_EDGE_TESTS:
            if not any(inside(point, rect) for point in corners):
                return False
        return True

    def is_contained(self, rect: Rectangle) -> bool:
        """True when no corner lies outside `rect`."""
        corners = self.corners()
        for outside in _OUTSIDE_EDGE_TESTS:
            if any(outside(point, rect) for point in corners):
                return False
        return True

    def translated(self, vector: Vector) -> "Bounds":
        return Bounds(self.offset + vector, self.size, self.angle)

    def __add__(self, vector: Vector) -> "Bounds":
        return self.translated(vector)


# One predicate per side of an axis-aligned rectangle: left, top, right, bottom
_INSIDE_EDGE_TESTS = (
    lambda point, rect: point.x > rect.x,
    lambda point, rect: point.y > rect.y,
    lambda point, rect: point.x < rect.right,
    lambda point, rect: point.y < rect.bottom,
)

_OUTSIDE_EDGE_TESTS = (
    lambda point, rect: point.x < rect.x,
    lambda point, rect: point.y < rect.y,
    lambda point, rect: point.x > rect.right,
    lambda point, rect: point.y > rect.bottom,
)
