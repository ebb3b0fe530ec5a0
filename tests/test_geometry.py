import math

import pytest

from bounceball.geometry import (
    Mesh,
    Vertex,
    cube_mesh,
    face_normals,
    load_off_model,
    sphere_mesh,
)
from bounceball.state import BUNNY_SCALE
from bounceball.vec import Vec2, Vec3, Vec4, dot, length

OFF_TEXT = """OFF
4 2 0
0 0 0
2 0 0
0 4 0
0 0 1
3 0 1 2
4 0 1 2 3
"""


def write(tmp_path, text, name="model.off"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_cube_has_36_vertices():
    assert len(cube_mesh()) == 36


def test_cube_positions_are_corners():
    for p in cube_mesh().positions:
        assert {abs(p.x), abs(p.y), abs(p.z)} == {0.5}
        assert p.w == 1.0


def test_cube_normals_are_outward_axis_vectors():
    mesh = cube_mesh()
    positions = mesh.positions
    normals = mesh.normals
    for start in range(0, len(positions), 3):
        tri = positions[start:start + 3]
        centroid = Vec3(
            sum(p.x for p in tri) / 3, sum(p.y for p in tri) / 3, sum(p.z for p in tri) / 3
        )
        n = normals[start]
        assert sorted(abs(c) for c in n) == [0.0, 0.0, 1.0]
        assert dot(n, centroid) > 0
        assert normals[start + 1] == n
        assert normals[start + 2] == n


def test_sphere_level_zero_is_octahedron():
    mesh = sphere_mesh(0)
    assert len(mesh) == 24
    corners = {tuple(p.xyz().to_list()) for p in mesh.positions}
    assert len(corners) == 6


def test_sphere_subdivision_quadruples_vertices():
    assert len(sphere_mesh(1)) == 4 * len(sphere_mesh(0))
    assert len(sphere_mesh(2)) == 4 * len(sphere_mesh(1))


def test_sphere_points_lie_on_unit_sphere():
    for vertex in sphere_mesh(2):
        assert math.isclose(length(vertex.position.xyz()), 1.0, rel_tol=1e-9)
        assert vertex.position.w == 1.0
        assert vertex.normal.to_list() == pytest.approx(vertex.position.xyz().to_list())


def test_sphere_tex_coords_in_unit_square():
    for t in sphere_mesh(1).tex_coords:
        assert 0.0 <= t.x <= 1.0
        assert 0.0 <= t.y <= 1.0


def test_sphere_north_pole_has_v_zero():
    poles = [v for v in sphere_mesh(1) if v.normal.y == pytest.approx(1.0)]
    assert poles
    assert all(v.tex_coord.y == pytest.approx(0.0) for v in poles)


def test_sphere_negative_subdivisions():
    with pytest.raises(ValueError):
        sphere_mesh(-1)


def test_face_normals_counter_clockwise():
    normals = face_normals([Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0)])
    assert [n.to_list() for n in normals] == [[0.0, 0.0, 1.0]] * 3


def test_face_normals_reversed_winding_flips():
    ccw = face_normals([Vec4(0, 0, 0, 1), Vec4(1, 0, 0, 1), Vec4(0, 1, 0, 1)])
    cw = face_normals([Vec4(0, 0, 0, 1), Vec4(0, 1, 0, 1), Vec4(1, 0, 0, 1)])
    assert cw[0] == -ccw[0]


def test_face_normals_degenerate_is_zero():
    normals = face_normals([Vec3(1, 1, 1)] * 3)
    assert all(length(n) == 0.0 for n in normals)


def test_face_normals_needs_triples():
    with pytest.raises(ValueError):
        face_normals([Vec3(), Vec3(), Vec3(), Vec3()])


def test_load_off_keeps_only_triangles(tmp_path):
    mesh = load_off_model(write(tmp_path, OFF_TEXT))
    assert len(mesh) == 3
    assert all(t == Vec2(0.0, 0.0) for t in mesh.tex_coords)


def test_load_off_scaled_and_centred(tmp_path):
    mesh = load_off_model(write(tmp_path, OFF_TEXT))
    ys = [p.y for p in mesh.positions]
    xs = [p.x for p in mesh.positions]
    assert max(ys) - min(ys) == pytest.approx(BUNNY_SCALE)
    assert max(ys) + min(ys) == pytest.approx(0.0)
    assert max(xs) + min(xs) == pytest.approx(0.0)


def test_load_off_target_size(tmp_path):
    mesh = load_off_model(write(tmp_path, OFF_TEXT), target_size=2.0)
    ys = [p.y for p in mesh.positions]
    assert max(ys) - min(ys) == pytest.approx(2.0)


def test_load_off_normals(tmp_path):
    mesh = load_off_model(write(tmp_path, OFF_TEXT))
    assert all(n.to_list() == pytest.approx([0.0, 0.0, 1.0]) for n in mesh.normals)


def test_load_off_out_of_range_faces_only(tmp_path):
    text = "OFF\n3 1 0\n0 0 0\n1 0 0\n0 1 0\n3 0 1 7\n"
    with pytest.raises(ValueError):
        load_off_model(write(tmp_path, text))


def test_load_off_bad_header(tmp_path):
    with pytest.raises(ValueError):
        load_off_model(write(tmp_path, "PLY\n3 1 0\n"))


def test_load_off_no_vertices(tmp_path):
    with pytest.raises(ValueError):
        load_off_model(write(tmp_path, "OFF\n0 1 0\n"))


def test_load_off_truncated(tmp_path):
    with pytest.raises(ValueError):
        load_off_model(write(tmp_path, "OFF\n3 1 0\n0 0 0\n1 0\n"))


def test_load_off_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_off_model(tmp_path / "absent.off")


def test_mesh_views_match_vertices():
    vertex = Vertex(Vec4(1, 2, 3, 1), Vec3(0, 1, 0), Vec2(0.5, 0.25))
    mesh = Mesh([vertex])
    assert mesh.positions == [vertex.position]
    assert mesh.normals == [vertex.normal]
    assert mesh.tex_coords == [vertex.tex_coord]
    assert list(mesh) == [vertex]