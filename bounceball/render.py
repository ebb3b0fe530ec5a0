"""Turning the scene state into a list of draw commands for one frame."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from bounceball.mat import Mat4
from bounceball.state import (
    BALL_SIZE,
    COLOR_PALETTE,
    DrawingMode,
    GridMode,
    ObjectType,
    RenderMode,
    SceneState,
    TrajectoryMode,
)
from bounceball.transforms import rotate_x, rotate_y, rotate_z, scale, translate
from bounceball.vec import Vec2, Vec3, Vec4, normalize

_WORLD_LIGHT_DIR = (0.5, 1.0, 0.75)
_TRAJECTORY_LINE_COLOR = (0.7, 0.7, 0.7, 0.5)
_MAX_TRAJECTORY_OBJECTS = 10


@dataclass
class DrawCommand:
    """One thing to draw, with the shader settings it needs.

    ``primitive`` is "clear", "lines", "line_strip" or "triangles".
    ``program`` names the shading program: "phong" or "gouraud".
    """

    primitive: str
    program: str = "phong"
    model: Mat4 = field(default_factory=Mat4)
    color: Vec4 = field(default_factory=Vec4)
    object_type: Optional[ObjectType] = None
    vertices: list[Vec4] = field(default_factory=list)
    wireframe: bool = False
    line_width: float = 1.0
    light_dir: Optional[Vec3] = None
    shininess: Optional[float] = None
    specular_strength: Optional[float] = None
    use_texture: bool = False
    lighting: tuple[bool, bool, bool] = (True, True, True)


def _current_program(state: SceneState) -> str:
    return "gouraud" if state.use_gouraud else "phong"


def _palette_color(index: int) -> Vec4:
    return Vec4(*COLOR_PALETTE[index])


def rainbow_color(t: float) -> Vec4:
    """An opaque colour cycling through the rainbow once per unit of ``t``."""
    t = math.fmod(t, 1.0)
    r = 0.5 + 0.5 * math.sin(t * 6.28318)
    g = 0.5 + 0.5 * math.sin((t + 0.33333) * 6.28318)
    b = 0.5 + 0.5 * math.sin((t + 0.66666) * 6.28318)
    return Vec4(r, g, b, 1.0)


def screen_to_world(state: SceneState, screen_x: float, screen_y: float) -> Vec2:
    """Map window pixels onto the z = 0 plane, x in -10..10 and y in 7.5..-7.5."""
    ndc_x = (2.0 * screen_x / state.window_width) - 1.0
    ndc_y = 1.0 - (2.0 * screen_y / state.window_height)
    return Vec2(ndc_x * 10.0, ndc_y * 7.5)


def grid_lines(grid_mode: GridMode) -> list[Vec4]:
    """Line end points of the world-space grid, two per line."""
    if grid_mode is GridMode.NONE:
        return []
    spacing = 2 if grid_mode is GridMode.BASIC else 1
    coords = range(-10, 11, spacing)
    horizontal = [p for y in coords for p in (Vec4(-10, y, 0, 1), Vec4(10, y, 0, 1))]
    vertical = [p for x in coords for p in (Vec4(x, -10, 0, 1), Vec4(x, 10, 0, 1))]
    return horizontal + vertical


def model_matrix(
    state: SceneState, object_type: ObjectType, world_pos: Vec2, scaled_size: float
) -> Mat4:
    """The model matrix placing an object of the given kind and size.

    A bunny that is not loaded is placed as a cube.
    """
    zoom = state.zoom_scale
    base = scale(zoom, zoom, zoom) @ translate(world_pos.x, world_pos.y, 0.0)
    s = scaled_size
    if object_type is ObjectType.SPHERE:
        return base @ scale(s, s, s)
    if object_type is ObjectType.BUNNY and state.bunny_loaded:
        b = s * 0.15
        return base @ scale(b, b, b) @ rotate_y(state.bunny_rotation) @ rotate_x(90.0)
    return (
        base
        @ scale(s, s, s)
        @ rotate_y(state.cube_rotation)
        @ rotate_x(20.0)
        @ rotate_z(10.0)
    )


def light_direction(state: SceneState, model: Mat4) -> Vec3:
    """The light direction, carried along by ``model`` when it follows the object."""
    world = Vec3(*_WORLD_LIGHT_DIR)
    if not state.light_follows_object:
        return world
    return normalize((model @ Vec4(world, 0.0)).xyz())


def object_draw(
    state: SceneState,
    object_type: ObjectType,
    position: Vec2,
    size: float,
    color: Vec4,
    is_trajectory: bool = False,
) -> DrawCommand:
    """The draw command for one object at a screen position."""
    world = screen_to_world(state, position.x, position.y)
    scaled = size * (1.0 if is_trajectory else state.object_scale) * 0.01

    if state.render_mode is RenderMode.TEXTURE:
        program = "phong"
    else:
        program = _current_program(state)

    wireframe = state.render_mode is RenderMode.WIREFRAME or (
        state.drawing_mode is DrawingMode.WIREFRAME
        and state.render_mode is RenderMode.SHADING
    )
    line_width = (1.0 if is_trajectory else 2.0) if wireframe else 1.0

    drawn = object_type
    if drawn is ObjectType.BUNNY and not state.bunny_loaded:
        drawn = ObjectType.CUBE
    model = model_matrix(state, drawn, world, scaled)

    if state.use_metallic:
        shininess = state.metallic_shininess
        specular = state.metallic_specular_strength
    else:
        shininess = state.plastic_shininess
        specular = state.plastic_specular_strength

    return DrawCommand(
        primitive="triangles",
        program=program,
        model=model,
        color=Vec4(color),
        object_type=drawn,
        wireframe=wireframe,
        line_width=line_width,
        light_dir=light_direction(state, model),
        shininess=shininess,
        specular_strength=specular,
        use_texture=drawn is ObjectType.SPHERE and state.render_mode is RenderMode.TEXTURE,
        lighting=(state.use_ambient, state.use_diffuse, state.use_specular),
    )


def trajectory_draws(state: SceneState) -> list[DrawCommand]:
    """Draw commands for the recorded path: an optional line and ghost objects."""
    points = list(state.trajectory_points)
    count = len(points)
    if state.trajectory_mode is TrajectoryMode.NONE or count < 2:
        return []

    draws: list[DrawCommand] = []
    if state.trajectory_mode is TrajectoryMode.LINE:
        worlds = (screen_to_world(state, p.position.x, p.position.y) for p in points)
        draws.append(
            DrawCommand(
                primitive="line_strip",
                program=_current_program(state),
                model=Mat4(1.0),
                color=Vec4(*_TRAJECTORY_LINE_COLOR),
                vertices=[Vec4(w.x, w.y, 0.0, 1.0) for w in worlds],
                line_width=2.0,
            )
        )

    step = max(1, count // _MAX_TRAJECTORY_OBJECTS)
    base_size = BALL_SIZE * 0.6
    for i in range(step, count - 1, step):
        if state.trajectory_mode is TrajectoryMode.STROBE and i % (step * 2) != 0:
            continue
        time_factor = i / count
        size = base_size * (0.5 + 0.5 * (1.0 - time_factor))
        if state.rainbow_mode:
            color = rainbow_color(time_factor)
        else:
            color = _palette_color(state.color_index)
            color.w = 0.5 + 0.5 * time_factor
        draws.append(
            object_draw(state, state.current_object, points[i].position, size, color, True)
        )
    return draws


def build_frame(state: SceneState) -> list[DrawCommand]:
    """All draw commands of one frame, starting with the clear."""
    program = _current_program(state)
    commands = [
        DrawCommand(
            primitive="clear",
            program=program,
            color=Vec4(state.background_color),
        )
    ]
    lines = grid_lines(state.grid_mode)
    if lines:
        commands.append(
            DrawCommand(
                primitive="lines",
                program=program,
                model=Mat4(1.0),
                color=Vec4(state.grid_color),
                vertices=lines,
                line_width=1.0,
            )
        )
    commands.extend(trajectory_draws(state))

    if state.rainbow_mode:
        main_color = rainbow_color(state.current_time * 0.3)
    else:
        main_color = _palette_color(state.color_index)
    commands.append(
        object_draw(
            state,
            state.current_object,
            Vec2(state.x_pos, state.y_pos),
            BALL_SIZE,
            main_color,
        )
    )
    return commands