from collections import deque

import pytest

from bounceball.state import (
    AIR_RESISTANCE,
    COLOR_PALETTE,
    GRAVITY,
    MAX_TRAJECTORY_POINTS,
    DrawingMode,
    GridMode,
    ObjectType,
    RenderMode,
    SceneState,
    TrajectoryMode,
    help_text,
    save_screenshot,
)
from bounceball.vec import Vec4


def test_defaults_follow_source():
    state = SceneState()
    assert state.window_width == 800
    assert state.window_height == 600
    assert state.current_object is ObjectType.SPHERE
    assert state.render_mode is RenderMode.SHADING
    assert state.drawing_mode is DrawingMode.SOLID
    assert state.gravity_strength == GRAVITY
    assert (state.x_vel, state.y_vel) == (6.0, -2.0)
    assert state.background_color == Vec4(0.1, 0.1, 0.1, 1.0)


def test_constants_and_palette():
    state = SceneState()
    assert state.gravity_strength == GRAVITY == 0.35
    assert state.trajectory_points.maxlen == MAX_TRAJECTORY_POINTS == 150
    assert AIR_RESISTANCE == 0.998
    assert len(COLOR_PALETTE) == 8
    assert all(color[3] == 1.0 for color in COLOR_PALETTE)


def test_states_do_not_share_mutable_fields():
    first, second = SceneState(), SceneState()
    first.background_color.x = 0.9
    first.balls.append(object())
    assert second.background_color.x == 0.1
    assert second.balls == []


def test_trajectory_deque_is_bounded():
    state = SceneState()
    assert isinstance(state.trajectory_points, deque)
    assert state.trajectory_points.maxlen == MAX_TRAJECTORY_POINTS


def test_reset_settings_restores_display_defaults():
    state = SceneState()
    state.current_object = ObjectType.CUBE
    state.drawing_mode = DrawingMode.WIREFRAME
    state.trajectory_mode = TrajectoryMode.STROBE
    state.rainbow_mode = True
    state.multiple_objects = True
    state.simulation_speed = 2.5
    state.object_scale = 1.7
    state.grid_mode = GridMode.DETAILED
    state.background_color_index = 3
    state.background_color = Vec4(0.5, 0.5, 0.5, 1.0)
    state.zoom_scale = 2.0
    state.use_metallic = True

    state.reset_settings()

    fresh = SceneState()
    assert state.current_object is fresh.current_object
    assert state.drawing_mode is fresh.drawing_mode
    assert state.trajectory_mode is fresh.trajectory_mode
    assert state.rainbow_mode is False
    assert state.multiple_objects is False
    assert state.simulation_speed == fresh.simulation_speed
    assert state.object_scale == fresh.object_scale
    assert state.grid_mode is fresh.grid_mode
    assert state.background_color_index == 0
    assert state.background_color == fresh.background_color
    assert state.zoom_scale == fresh.zoom_scale
    # settings outside the reset stay as they were
    assert state.use_metallic is True


def test_help_text_lists_controls():
    text = help_text()
    assert text.startswith("======== Enhanced Bouncing Ball Simulation ========")
    assert "    S: Toggle between Phong and Gouraud shading" in text
    assert "    Middle: Restart simulation" in text
    assert text.endswith("=================================================\n")


def test_save_screenshot_writes_flipped_p6(tmp_path):
    bottom_row = bytes([1, 2, 3, 4, 5, 6])
    top_row = bytes([7, 8, 9, 10, 11, 12])
    target = tmp_path / "shot.ppm"
    save_screenshot(target, 2, 2, bottom_row + top_row)
    content = target.read_bytes()
    header = b"P6\n2 2\n255\n"
    assert content.startswith(header)
    assert content[len(header):] == top_row + bottom_row


def test_save_screenshot_rejects_wrong_size(tmp_path):
    with pytest.raises(ValueError):
        save_screenshot(tmp_path / "bad.ppm", 2, 2, bytes(5))


def test_save_screenshot_unwritable_path(tmp_path):
    with pytest.raises(OSError):
        save_screenshot(tmp_path / "missing" / "shot.ppm", 1, 1, bytes(3))