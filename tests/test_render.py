import pytest

from bounceball.render import (
    DrawCommand,
    build_frame,
    grid_lines,
    light_direction,
    model_matrix,
    object_draw,
    rainbow_color,
    screen_to_world,
    trajectory_draws,
)
from bounceball.mat import Mat4
from bounceball.state import (
    COLOR_PALETTE,
    DrawingMode,
    GridMode,
    ObjectType,
    RenderMode,
    SceneState,
    TrajectoryMode,
    TrajectoryPoint,
)
from bounceball.vec import Vec2, Vec4, length, normalize, Vec3


def with_points(state, count):
    for i in range(count):
        state.trajectory_points.append(TrajectoryPoint(Vec2(100 + 10 * i, 200), float(i)))
    return state


def test_rainbow_at_zero():
    color = rainbow_color(0.0)
    assert color.x == pytest.approx(0.5)
    assert color.w == 1.0


def test_rainbow_is_periodic():
    assert rainbow_color(1.25).to_list() == pytest.approx(rainbow_color(0.25).to_list())


def test_rainbow_in_range():
    for step in range(20):
        color = rainbow_color(step / 7.0)
        assert all(0.0 <= c <= 1.0 for c in color)


def test_screen_to_world_centre_and_corners():
    state = SceneState()
    assert screen_to_world(state, 400, 300).to_list() == pytest.approx([0.0, 0.0])
    assert screen_to_world(state, 0, 0).to_list() == pytest.approx([-10.0, 7.5])
    assert screen_to_world(state, 800, 600).to_list() == pytest.approx([10.0, -7.5])


def test_grid_none_is_empty():
    assert grid_lines(GridMode.NONE) == []


def test_grid_points_in_bounds():
    basic = grid_lines(GridMode.BASIC)
    detailed = grid_lines(GridMode.DETAILED)
    assert len(basic) % 2 == 0
    assert len(detailed) > len(basic)
    for p in basic + detailed:
        assert -10 <= p.x <= 10 and -10 <= p.y <= 10
        assert p.z == 0.0 and p.w == 1.0


def test_model_matrix_places_origin():
    state = SceneState()
    model = model_matrix(state, ObjectType.SPHERE, Vec2(3, -2), 0.5)
    assert (model @ Vec4(0, 0, 0, 1)).to_list() == pytest.approx([3, -2, 0, 1])


def test_zoom_scales_position():
    near = model_matrix(SceneState(), ObjectType.CUBE, Vec2(3, -2), 0.5)
    far = model_matrix(SceneState(zoom_scale=2.0), ObjectType.CUBE, Vec2(3, -2), 0.5)
    p1 = near @ Vec4(0, 0, 0, 1)
    p2 = far @ Vec4(0, 0, 0, 1)
    assert p2.xyz().to_list() == pytest.approx((2 * p1.xyz()).to_list())


def test_unloaded_bunny_uses_cube_matrix():
    state = SceneState(bunny_loaded=False, cube_rotation=15.0)
    bunny = model_matrix(state, ObjectType.BUNNY, Vec2(1, 1), 0.3)
    cube = model_matrix(state, ObjectType.CUBE, Vec2(1, 1), 0.3)
    assert bunny.flatten() == pytest.approx(cube.flatten())


def test_object_draw_bunny_kind_depends_on_load():
    draw = object_draw(SceneState(), ObjectType.BUNNY, Vec2(10, 10), 60.0, Vec4(1))
    loaded = object_draw(SceneState(bunny_loaded=True), ObjectType.BUNNY, Vec2(10, 10), 60.0, Vec4(1))
    assert draw.object_type is ObjectType.CUBE
    assert loaded.object_type is ObjectType.BUNNY


def test_light_fixed():
    direction = light_direction(SceneState(), Mat4(2.0))
    assert direction.to_list() == [0.5, 1.0, 0.75]


def test_light_follows_object():
    state = SceneState(light_follows_object=True)
    direction = light_direction(state, Mat4(3.0))
    assert length(direction) == pytest.approx(1.0)
    assert direction.to_list() == pytest.approx(normalize(Vec3(0.5, 1.0, 0.75)).to_list())


def test_program_choice():
    gouraud = SceneState(use_gouraud=True)
    textured = SceneState(use_gouraud=True, render_mode=RenderMode.TEXTURE)
    assert object_draw(gouraud, ObjectType.SPHERE, Vec2(), 10.0, Vec4(1)).program == "gouraud"
    assert object_draw(textured, ObjectType.SPHERE, Vec2(), 10.0, Vec4(1)).program == "phong"


def test_wireframe_modes():
    state = SceneState(render_mode=RenderMode.WIREFRAME)
    main = object_draw(state, ObjectType.CUBE, Vec2(), 10.0, Vec4(1))
    ghost = object_draw(state, ObjectType.CUBE, Vec2(), 10.0, Vec4(1), True)
    assert (main.wireframe, main.line_width) == (True, 2.0)
    assert (ghost.wireframe, ghost.line_width) == (True, 1.0)
    textured = SceneState(drawing_mode=DrawingMode.WIREFRAME, render_mode=RenderMode.TEXTURE)
    assert object_draw(textured, ObjectType.CUBE, Vec2(), 10.0, Vec4(1)).wireframe is False
    shaded = SceneState(drawing_mode=DrawingMode.WIREFRAME)
    assert object_draw(shaded, ObjectType.CUBE, Vec2(), 10.0, Vec4(1)).wireframe is True


def test_material_and_texture_flags():
    state = SceneState(use_metallic=True, render_mode=RenderMode.TEXTURE)
    sphere = object_draw(state, ObjectType.SPHERE, Vec2(), 10.0, Vec4(1))
    cube = object_draw(state, ObjectType.CUBE, Vec2(), 10.0, Vec4(1))
    assert sphere.shininess == state.metallic_shininess
    assert sphere.specular_strength == state.metallic_specular_strength
    assert sphere.use_texture is True
    assert cube.use_texture is False


def test_trajectory_none_or_short():
    assert trajectory_draws(with_points(SceneState(), 20)) == []
    short = with_points(SceneState(trajectory_mode=TrajectoryMode.LINE), 1)
    assert trajectory_draws(short) == []


def test_trajectory_line_mode():
    state = with_points(SceneState(trajectory_mode=TrajectoryMode.LINE), 20)
    draws = trajectory_draws(state)
    line = draws[0]
    assert line.primitive == "line_strip"
    assert len(line.vertices) == 20
    assert line.line_width == 2.0
    ghosts = draws[1:]
    assert ghosts
    assert all(d.primitive == "triangles" and d.object_type is state.current_object for d in ghosts)
    alphas = [d.color.w for d in ghosts]
    assert alphas == sorted(alphas)


def test_trajectory_ghosts_shrink():
    state = with_points(SceneState(trajectory_mode=TrajectoryMode.LINE), 30)
    scales = [d.model[0][0] for d in trajectory_draws(state)[1:]]
    assert all(a > b for a, b in zip(scales, scales[1:]))


def test_strobe_shows_fewer_objects():
    line = trajectory_draws(with_points(SceneState(trajectory_mode=TrajectoryMode.LINE), 20))
    strobe = trajectory_draws(with_points(SceneState(trajectory_mode=TrajectoryMode.STROBE), 20))
    assert all(d.primitive == "triangles" for d in strobe)
    assert 0 < len(strobe) < len(line) - 1


def test_build_frame_order():
    state = SceneState(color_index=3, grid_mode=GridMode.BASIC)
    frame = build_frame(state)
    assert frame[0].primitive == "clear"
    assert frame[0].color == state.background_color
    assert frame[1].primitive == "lines"
    assert frame[1].color == state.grid_color
    assert frame[-1].color == Vec4(*COLOR_PALETTE[3])
    assert isinstance(frame[-1], DrawCommand) and frame[-1].object_type is ObjectType.SPHERE


def test_build_frame_rainbow():
    state = SceneState(rainbow_mode=True, current_time=2.0)
    frame = build_frame(state)
    assert len(frame) == 2
    assert frame[-1].color.to_list() == pytest.approx(rainbow_color(0.6).to_list())