"""Triangle meshes for the cube, the subdivided sphere and OFF models."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence, TypeVar, Union

from bounceball.state import BUNNY_SCALE
from bounceball.vec import Vec2, Vec3, Vec4, cross, length, normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CUBE_CORNERS = (
    (-0.5, -0.5, 0.5),
    (0.5, -0.5, 0.5),
    (0.5, 0.5, 0.5),
    (-0.5, 0.5, 0.5),
    (-0.5, -0.5, -0.5),
    (0.5, -0.5, -0.5),
    (0.5, 0.5, -0.5),
    (-0.5, 0.5, -0.5),
)

_CUBE_INDICES = (
    0, 1, 2, 0, 2, 3,  # front
    1, 5, 6, 1, 6, 2,  # right
    5, 4, 7, 5, 7, 6,  # back
    4, 0, 3, 4, 3, 7,  # left
    3, 2, 6, 3, 6, 7,  # top
    4, 5, 1, 4, 1, 0,  # bottom
)

_OCTAHEDRON = (
    (0.0, 1.0, 0.0),
    (0.0, -1.0, 0.0),
    (1.0, 0.0, 0.0),
    (-1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0),
    (0.0, 0.0, -1.0),
)

_OCTAHEDRON_FACES = (
    0, 2, 4, 0, 4, 3, 0, 3, 5, 0, 5, 2,
    1, 4, 2, 1, 3, 4, 1, 5, 3, 1, 2, 5,
)


@dataclass
class Vertex:
    """One vertex as uploaded for drawing: position, normal and texture coordinate."""

    position: Vec4
    normal: Vec3
    tex_coord: Vec2 = field(default_factory=Vec2)


@dataclass
class Mesh:
    """A list of vertices, taken three at a time as triangles."""

    vertices: list[Vertex] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    @property
    def positions(self) -> list[Vec4]:
        return [vertex.position for vertex in self.vertices]

    @property
    def normals(self) -> list[Vec3]:
        return [vertex.normal for vertex in self.vertices]

    @property
    def tex_coords(self) -> list[Vec2]:
        return [vertex.tex_coord for vertex in self.vertices]


def _triples(items: Iterable[T]) -> Iterator[tuple[T, T, T]]:
    it = iter(items)
    return zip(it, it, it)


def _xyz(p: Union[Vec3, Vec4]) -> Vec3:
    return Vec3(p.x, p.y, p.z)


def face_normals(positions: Sequence[Union[Vec3, Vec4]]) -> list[Vec3]:
    """One normal per vertex: each triangle's unit face normal, three times.

    A degenerate triangle gets the zero vector. Raises ValueError when the
    number of positions is not a multiple of three.
    """
    if len(positions) % 3:
        raise ValueError("positions must come in groups of three")
    normals: list[Vec3] = []
    for a, b, c in _triples(positions):
        n = cross(_xyz(b) - _xyz(a), _xyz(c) - _xyz(a))
        n = normalize(n) if length(n) > 0.0 else Vec3()
        normals.extend((n, Vec3(n), Vec3(n)))
    return normals


def cube_mesh() -> Mesh:
    """A unit cube centred on the origin, flat shaded, 36 vertices."""
    corners = [Vec4(x, y, z, 1.0) for x, y, z in _CUBE_CORNERS]
    positions = [Vec4(corners[i]) for i in _CUBE_INDICES]
    normals = face_normals(positions)
    mesh = Mesh([Vertex(p, n, Vec2(0.0, 0.0)) for p, n in zip(positions, normals)])
    logger.info("Cube initialized with %d vertices", len(mesh))
    return mesh


def _unit_point(v: Vec4) -> Vec4:
    norm = max(math.sqrt(v.x * v.x + v.y * v.y + v.z * v.z), 1e-5)
    return Vec4(v.x / norm, v.y / norm, v.z / norm, 1.0)


def _sphere_vertex(position: Vec4) -> Vertex:
    n = normalize(_xyz(position))
    theta = math.acos(max(-1.0, min(1.0, n.y)))
    phi = math.atan2(n.z, n.x)
    u = (phi + math.pi) / (2 * math.pi)
    v = theta / math.pi
    return Vertex(Vec4(position), n, Vec2(u, v))


def _subdivide(a: Vec4, b: Vec4, c: Vec4, depth: int) -> Iterator[tuple[Vec4, Vec4, Vec4]]:
    if depth == 0:
        yield a, b, c
        return
    ab = _unit_point(a + b)
    bc = _unit_point(b + c)
    ca = _unit_point(c + a)
    yield from _subdivide(a, ab, ca, depth - 1)
    yield from _subdivide(ab, b, bc, depth - 1)
    yield from _subdivide(ca, bc, c, depth - 1)
    yield from _subdivide(ab, bc, ca, depth - 1)


def sphere_mesh(subdivisions: int) -> Mesh:
    """A unit sphere made by subdividing an octahedron, with spherical UVs.

    Raises ValueError for a negative subdivision level.
    """
    if subdivisions < 0:
        raise ValueError("subdivisions must not be negative")
    corners = [Vec4(x, y, z, 1.0) for x, y, z in _OCTAHEDRON]
    vertices = [
        _sphere_vertex(point)
        for i, j, k in _triples(_OCTAHEDRON_FACES)
        for triangle in _subdivide(corners[i], corners[j], corners[k], subdivisions)
        for point in triangle
    ]
    mesh = Mesh(vertices)
    logger.info("Sphere initialized with %d vertices", len(mesh))
    return mesh


def _take(tokens: Iterator[str], convert: Callable[[str], T], what: str) -> T:
    try:
        token = next(tokens)
    except StopIteration:
        raise ValueError(f"OFF data ends before {what}") from None
    try:
        return convert(token)
    except ValueError:
        raise ValueError(f"bad {what} in OFF data: {token!r}") from None


def load_off_model(path: Union[str, Path], target_size: float = BUNNY_SCALE) -> Mesh:
    """Load the triangles of an OFF file, centred and scaled to ``target_size``.

    The largest bounding-box side becomes ``target_size``. Faces that are not
    triangles, or that use out-of-range indices, are skipped. Raises OSError
    when the file cannot be read and ValueError when its content is unusable.
    """
    with open(path, encoding="utf-8", errors="replace") as handle:
        words = handle.read().split()
    if not words or words[0] != "OFF":
        raise ValueError("invalid OFF file format")
    tokens = iter(words[1:])
    num_verts = _take(tokens, int, "vertex count")
    num_faces = _take(tokens, int, "face count")
    _take(tokens, int, "edge count")
    if num_verts <= 0 or num_faces <= 0:
        raise ValueError("invalid mesh data in OFF file")
    logger.info("Loading model with %d vertices and %d faces", num_verts, num_faces)

    points = [
        tuple(_take(tokens, float, "vertex coordinate") for _ in range(3))
        for _ in range(num_verts)
    ]
    axes = list(zip(*points))
    lows = [min(axis) for axis in axes]
    highs = [max(axis) for axis in axes]
    center = [(lo + hi) * 0.5 for lo, hi in zip(lows, highs)]
    extent = max(hi - lo for lo, hi in zip(lows, highs))
    if extent == 0.0:
        raise ValueError("OFF model has no extent")
    factor = target_size / extent

    positions: list[Vec4] = []
    for _ in range(num_faces):
        count = _take(tokens, int, "face size")
        indices = [_take(tokens, int, "face index") for _ in range(count)]
        if count == 3 and all(0 <= i < num_verts for i in indices):
            positions.extend(
                Vec4(*(factor * (c - m) for c, m in zip(points[i], center)), 1.0)
                for i in indices
            )

    if not positions:
        raise ValueError("OFF model has no usable triangles")
    normals = face_normals(positions)
    mesh = Mesh([Vertex(p, n, Vec2(0.0, 0.0)) for p, n in zip(positions, normals)])
    logger.info("Model loaded with %d vertices", len(mesh))
    return mesh