"""Small fixed-size float vectors used by the scene maths."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, Union

DEGREES_TO_RADIANS = math.pi / 180.0
DIVIDE_BY_ZERO_TOLERANCE = 1.0e-07


def _is_scalar(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class _Vector:
    """Shared behaviour of the fixed-size vectors."""

    __slots__ = ()
    _fields: tuple[str, ...] = ()

    def _set_all(self, values) -> None:
        for name, value in zip(self._fields, values):
            setattr(self, name, float(value))

    def __iter__(self) -> Iterator[float]:
        return (getattr(self, name) for name in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index: int) -> float:
        return getattr(self, self._fields[index])

    def __setitem__(self, index: int, value: float) -> None:
        setattr(self, self._fields[index], float(value))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return tuple(self) == tuple(other)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        return "( " + ", ".join(f"{value:g}" for value in self) + " )"

    def _new(self, values):
        return type(self)(*values)

    def __neg__(self):
        return self._new(-value for value in self)

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._new(a + b for a, b in zip(self, other))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._new(a - b for a, b in zip(self, other))

    def __mul__(self, other):
        if _is_scalar(other):
            return self._new(other * value for value in self)
        if type(other) is type(self):
            return self._new(a * b for a, b in zip(self, other))
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self._new(other * value for value in self)
        return NotImplemented

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        r = 1.0 / other
        return self * r

    def __iadd__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        self._set_all(a + b for a, b in zip(self, other))
        return self

    def __isub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        self._set_all(a - b for a, b in zip(self, other))
        return self

    def __imul__(self, other):
        if _is_scalar(other):
            self._set_all(other * value for value in self)
            return self
        if type(other) is type(self):
            self._set_all(a * b for a, b in zip(self, other))
            return self
        return NotImplemented

    def __itruediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        r = 1.0 / other
        self._set_all(r * value for value in self)
        return self

    def to_list(self) -> list[float]:
        """Components as a plain list, in x, y, z, w order."""
        return list(self)


class Vec2(_Vector):
    """Two-component vector: Vec2(), Vec2(s), Vec2(v2) or Vec2(x, y)."""

    __slots__ = ("x", "y")
    _fields = ("x", "y")

    def __init__(self, *args) -> None:
        if not args:
            values = (0.0, 0.0)
        elif len(args) == 1 and isinstance(args[0], Vec2):
            values = tuple(args[0])
        elif len(args) == 1 and _is_scalar(args[0]):
            values = (args[0], args[0])
        elif len(args) == 2 and all(_is_scalar(a) for a in args):
            values = args
        else:
            raise TypeError(f"cannot build Vec2 from {args!r}")
        self._set_all(values)

    def to_list(self) -> list[float]:
        return [self.x, self.y]


class Vec3(_Vector):
    """Three-component vector: Vec3(), Vec3(s), Vec3(v3), Vec3(v2, z) or Vec3(x, y, z)."""

    __slots__ = ("x", "y", "z")
    _fields = ("x", "y", "z")

    def __init__(self, *args) -> None:
        if not args:
            values = (0.0, 0.0, 0.0)
        elif len(args) == 1 and isinstance(args[0], Vec3):
            values = tuple(args[0])
        elif len(args) == 1 and _is_scalar(args[0]):
            values = (args[0],) * 3
        elif len(args) == 2 and isinstance(args[0], Vec2) and _is_scalar(args[1]):
            values = (args[0].x, args[0].y, args[1])
        elif len(args) == 3 and all(_is_scalar(a) for a in args):
            values = args
        else:
            raise TypeError(f"cannot build Vec3 from {args!r}")
        self._set_all(values)

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]


class Vec4(_Vector):
    """Four-component vector.

    Accepts Vec4(), Vec4(s), Vec4(v4), Vec4(v3[, s]), Vec4(v2, z, w) or
    Vec4(x, y, z, w). Built from a Vec3, the w component is always 0.
    """

    __slots__ = ("x", "y", "z", "w")
    _fields = ("x", "y", "z", "w")

    def __init__(self, *args) -> None:
        if not args:
            values = (0.0, 0.0, 0.0, 0.0)
        elif len(args) == 1 and isinstance(args[0], Vec4):
            values = tuple(args[0])
        elif len(args) == 1 and _is_scalar(args[0]):
            values = (args[0],) * 4
        elif (
            len(args) in (1, 2)
            and isinstance(args[0], Vec3)
            and all(_is_scalar(a) for a in args[1:])
        ):
            v = args[0]
            values = (v.x, v.y, v.z, 0.0)
        elif (
            len(args) == 3
            and isinstance(args[0], Vec2)
            and _is_scalar(args[1])
            and _is_scalar(args[2])
        ):
            values = (args[0].x, args[0].y, args[1], args[2])
        elif len(args) == 4 and all(_is_scalar(a) for a in args):
            values = args
        else:
            raise TypeError(f"cannot build Vec4 from {args!r}")
        self._set_all(values)

    def __mul__(self, other):
        if isinstance(other, Vec4):
            # The w product takes the other vector's z, as the scene code expects.
            return Vec4(self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.z)
        return super().__mul__(other)

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z, self.w]

    def xyz(self) -> Vec3:
        """The first three components as a Vec3."""
        return Vec3(self.x, self.y, self.z)


AnyVec = Union[Vec2, Vec3, Vec4]


def dot(u: AnyVec, v: AnyVec) -> float:
    """Dot product of two vectors of the same kind.

    For Vec4 the w terms are added rather than multiplied.
    """
    if type(u) is not type(v) or not isinstance(u, _Vector):
        raise TypeError("dot needs two vectors of the same kind")
    if isinstance(u, Vec4):
        return u.x * v.x + u.y * v.y + u.z * v.z + u.w + v.w
    return sum(a * b for a, b in zip(u, v))


def length(v: AnyVec) -> float:
    """Euclidean length, the square root of dot(v, v)."""
    return math.sqrt(dot(v, v))


def normalize(v: AnyVec) -> AnyVec:
    """The vector divided by its length; a zero vector raises ZeroDivisionError."""
    return v / length(v)


def cross(a: Union[Vec3, Vec4], b: Union[Vec3, Vec4]) -> Vec3:
    """Cross product of the xyz parts; always a Vec3."""
    for operand in (a, b):
        if not isinstance(operand, (Vec3, Vec4)):
            raise TypeError("cross needs Vec3 or Vec4 operands")
    if type(a) is not type(b):
        raise TypeError("cross needs two vectors of the same kind")
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )