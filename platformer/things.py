"""Geometry primitives and the static things placed in a level: signs and doors."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum


def _components(other: object) -> tuple[float, float] | None:
    if isinstance(other, Vec2):
        return other.x, other.y
    if isinstance(other, (int, float)) and not isinstance(other, bool):
        return float(other), float(other)
    return None


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector. Arithmetic works with vectors and scalars."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: object) -> Vec2:
        parts = _components(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x + parts[0], self.y + parts[1])

    __radd__ = __add__

    def __sub__(self, other: object) -> Vec2:
        parts = _components(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x - parts[0], self.y - parts[1])

    def __rsub__(self, other: object) -> Vec2:
        parts = _components(other)
        if parts is None:
            return NotImplemented
        return Vec2(parts[0] - self.x, parts[1] - self.y)

    def __mul__(self, other: object) -> Vec2:
        parts = _components(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x * parts[0], self.y * parts[1])

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Vec2:
        parts = _components(other)
        if parts is None:
            return NotImplemented
        return Vec2(self.x / parts[0], self.y / parts[1])

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def floor(self) -> Vec2:
        """Round both components down."""
        return Vec2(float(math.floor(self.x)), float(math.floor(self.y)))

    def ceil(self) -> Vec2:
        """Round both components up."""
        return Vec2(float(math.ceil(self.x)), float(math.ceil(self.y)))


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def offset(self, by: Vec2) -> Rect:
        """Return this rectangle moved by a vector."""
        return Rect(self.x + by.x, self.y + by.y, self.w, self.h)

    def overlaps(self, other: Rect) -> bool:
        """True if the rectangles intersect; touching edges count."""
        return (
            self.left <= other.right
            and self.right >= other.left
            and self.top <= other.bottom
            and self.bottom >= other.top
        )

    def combine_with(self, other: Rect) -> Rect:
        """Return the smallest rectangle holding both rectangles."""
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        w = max(self.right, other.right) - x
        h = max(self.bottom, other.bottom) - y
        return Rect(x, y, w, h)

    def center(self) -> Vec2:
        return Vec2(self.x + self.w / 2.0, self.y + self.h / 2.0)

    def point(self) -> Vec2:
        return Vec2(self.x, self.y)

    def size(self) -> Vec2:
        return Vec2(self.w, self.h)


SIGN_LINES = 4


@dataclass
class Sign:
    """A readable sign holding exactly four lines of text."""

    pos: Vec2
    lines: tuple[str, str, str, str]
    read: bool = field(default=False)

    def __post_init__(self) -> None:
        self.lines = tuple(self.lines)
        if len(self.lines) != SIGN_LINES:
            raise ValueError(f"a sign holds exactly {SIGN_LINES} lines, got {len(self.lines)}")


class DoorKind(IntEnum):
    """How a door moves the player; the value is its stored code."""

    DOOR = 0
    TELEPORTER = 1
    SEAMLESS_TELEPORTER = 2

    @classmethod
    def from_code(cls, code: int) -> DoorKind:
        """Decode a stored door kind, raising ValueError for unknown codes."""
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"unknown door kind code: {code!r}") from None


@dataclass(frozen=True)
class Door:
    """A door leading from one position to another."""

    kind: DoorKind
    pos: Vec2
    dest: Vec2