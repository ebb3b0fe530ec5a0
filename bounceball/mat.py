"""Square float matrices (2x2, 3x3, 4x4) stored as rows of vectors."""

from __future__ import annotations

from typing import Iterator, Union

from bounceball.vec import Vec2, Vec3, Vec4, _is_scalar


class _Matrix:
    """Shared behaviour of the square matrices.

    A matrix holds one vector per row; ``m[i]`` is that row and
    ``m[i][j]`` the element in row ``i``, column ``j``.
    """

    __slots__ = ("_rows",)
    _size = 0
    _vec: type = Vec2

    def __init__(self, *args) -> None:
        n = self._size
        vec = self._vec
        if not args or (len(args) == 1 and _is_scalar(args[0])):
            d = float(args[0]) if args else 1.0
            self._rows = [
                vec(*(d if i == j else 0.0 for j in range(n))) for i in range(n)
            ]
        elif len(args) == 1 and type(args[0]) is type(self):
            self._rows = [vec(row) for row in args[0]]
        elif len(args) == n and all(isinstance(a, vec) for a in args):
            self._rows = [vec(row) for row in args]
        elif len(args) == n * n and all(_is_scalar(a) for a in args):
            self._rows = [vec(*args[i * n:(i + 1) * n]) for i in range(n)]
        else:
            raise TypeError(f"cannot build {type(self).__name__} from {args!r}")

    def __iter__(self) -> Iterator:
        return iter(self._rows)

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int):
        return self._rows[index]

    def __setitem__(self, index: int, row) -> None:
        if not isinstance(row, self._vec):
            raise TypeError(f"row must be a {self._vec.__name__}")
        self._rows[index] = self._vec(row)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(a == b for a, b in zip(self, other))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        body = ", ".join(repr(row) for row in self)
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        return "\n" + "".join(f"{row}\n" for row in self)

    def _from_rows(self, rows):
        return type(self)(*(self._vec(*row) for row in rows))

    def _matrix_product(self, other: "_Matrix") -> list[list[float]]:
        columns = list(zip(*other))
        return [
            [sum(a * b for a, b in zip(row, column)) for column in columns]
            for row in self
        ]

    def _vector_product(self, v):
        return self._vec(*(sum(a * b for a, b in zip(row, v)) for row in self))

    def _flat(self) -> list[float]:
        return [value for row in self for value in row]

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a + b for a, b in zip(self, other)))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(*(a - b for a, b in zip(self, other)))

    def __neg__(self):
        return type(self)(*(-row for row in self))

    def __mul__(self, other):
        if _is_scalar(other):
            return type(self)(*(other * row for row in self))
        if type(other) is type(self):
            return self._from_rows(self._matrix_product(other))
        if type(other) is self._vec:
            return self._vector_product(other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self * other
        return NotImplemented

    def __matmul__(self, other):
        if type(other) is type(self) or type(other) is self._vec:
            return self * other
        return NotImplemented

    def __truediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        r = 1.0 / other
        return self * r

    def __iadd__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        for row, addend in zip(self._rows, other):
            row += addend
        return self

    def __isub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        for row, subtrahend in zip(self._rows, other):
            row -= subtrahend
        return self

    def __imul__(self, other):
        if _is_scalar(other):
            for row in self._rows:
                row *= other
            return self
        if type(other) is type(self):
            self._rows = [self._vec(*row) for row in self._matrix_product(other)]
            return self
        return NotImplemented

    def __imatmul__(self, other):
        if type(other) is type(self):
            self *= other
            return self
        return NotImplemented

    def __itruediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        r = 1.0 / other
        self *= r
        return self


class Mat2(_Matrix):
    """2x2 matrix: Mat2(), Mat2(d), Mat2(m), Mat2(row0, row1) or four scalars."""

    __slots__ = ()
    _size = 2
    _vec = Vec2

    def flatten(self) -> list[float]:
        """All elements, row after row."""
        return self._flat()


class Mat3(_Matrix):
    """3x3 matrix: Mat3(), Mat3(d), Mat3(m), Mat3(row0, row1, row2) or nine scalars."""

    __slots__ = ()
    _size = 3
    _vec = Vec3

    def flatten(self) -> list[float]:
        """All elements, row after row."""
        return self._flat()


class Mat4(_Matrix):
    """4x4 matrix: Mat4(), Mat4(d), Mat4(m), four Vec4 rows or sixteen scalars."""

    __slots__ = ()
    _size = 4
    _vec = Vec4

    def flatten(self) -> list[float]:
        """All elements, row after row."""
        return self._flat()


AnyMat = Union[Mat2, Mat3, Mat4]


def matrix_comp_mult(a: AnyMat, b: AnyMat) -> AnyMat:
    """Element-by-element product of two matrices of the same size."""
    if type(a) is not type(b) or not isinstance(a, _Matrix):
        raise TypeError("matrix_comp_mult needs two matrices of the same kind")
    return a._from_rows(
        [x * y for x, y in zip(row_a, row_b)] for row_a, row_b in zip(a, b)
    )


def transpose(a: AnyMat) -> AnyMat:
    """The matrix with rows and columns exchanged."""
    if not isinstance(a, _Matrix):
        raise TypeError("transpose needs a matrix")
    return a._from_rows(zip(*a))