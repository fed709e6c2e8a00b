from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle in device units, origin bottom-left, y up."""

    min: Point = Point()
    max: Point = Point()

    @classmethod
    def from_bounds(cls, x0: float, y0: float, x1: float, y1: float) -> "Rectangle":
        return cls(Point(x0, y0), Point(x1, y1))

    def size(self) -> Point:
        return Point(self.max.x - self.min.x, self.max.y - self.min.y)

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def offset(self, delta: Point) -> "Rectangle":
        return Rectangle(self.min.add(delta), self.max.add(delta))

    def contains(self, other: "Rectangle") -> bool:
        return (
            other.min.x >= self.min.x
            and other.min.y >= self.min.y
            and other.max.x <= self.max.x
            and other.max.y <= self.max.y
        )

    def path(self) -> tuple[Point, ...]:
        return (
            self.min,
            Point(self.max.x, self.min.y),
            self.max,
            Point(self.min.x, self.max.y),
            self.min,
        )
