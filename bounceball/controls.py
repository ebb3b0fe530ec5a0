"""Keyboard, mouse and window events turned into changes of the scene state."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from bounceball.mat import Mat4
from bounceball.physics import init_ball
from bounceball.state import (
    COLOR_PALETTE,
    DrawingMode,
    ObjectType,
    RenderMode,
    SceneState,
    TrajectoryMode,
    help_text,
    save_screenshot,
)
from bounceball.texture import PPMImage, read_ppm_p3
from bounceball.transforms import look_at, perspective
from bounceball.vec import Vec3, Vec4

logger = logging.getLogger(__name__)

TEXTURE_FILES = ("earth.ppm", "basketball.ppm")

BACKGROUND_COLORS: tuple[tuple[float, float, float, float], ...] = (
    (0.1, 0.1, 0.1, 1.0),  # dark grey
    (0.05, 0.05, 0.15, 1.0),  # dark blue
    (0.15, 0.05, 0.05, 1.0),  # dark red
    (0.05, 0.15, 0.05, 1.0),  # dark green
    (0.15, 0.15, 0.05, 1.0),  # dark yellow
)

CAMERA_EYE = (0.0, 0.0, 15.0, 1.0)
CAMERA_AT = (0.0, 0.0, 0.0, 1.0)
CAMERA_UP = (0.0, 1.0, 0.0, 0.0)


class Key(Enum):
    """Keys the controls react to, numbered as the windowing layer reports them."""

    SPACE = 32
    MINUS = 45
    NUM_1 = 49
    NUM_2 = 50
    NUM_3 = 51
    EQUAL = 61
    B = 66
    C = 67
    E = 69
    G = 71
    H = 72
    I = 73  # noqa: E741
    L = 76
    M = 77
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    V = 86
    W = 87
    X = 88
    Z = 90
    ESCAPE = 256
    ENTER = 257
    HOME = 268
    F1 = 290
    F5 = 294
    F12 = 301
    KP_1 = 321
    KP_2 = 322
    KP_3 = 323
    KP_SUBTRACT = 333
    KP_ADD = 334


class MouseButton(Enum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


_LIGHTING_COMPONENTS = (
    ("use_ambient", "Ambient"),
    ("use_diffuse", "Diffuse"),
    ("use_specular", "Specular"),
)

_OBJECT_NAMES = {
    ObjectType.CUBE: "Cube",
    ObjectType.SPHERE: "Sphere",
    ObjectType.BUNNY: "Bunny",
}


def _on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


def screenshot_filename(now: datetime) -> str:
    """Screenshot file name for a moment: screenshot_YYYYMMDD_HHMMSS.ppm."""
    return now.strftime("screenshot_%Y%m%d_%H%M%S.ppm")


class Controller:
    """Applies user input to a SceneState.

    Each handler returns the message describing what changed, or None when
    the input is not one the controls react to.
    """

    def __init__(
        self,
        state: Optional[SceneState] = None,
        texture_dir: Union[str, Path] = ".",
        texture_loader: Callable[[Path], PPMImage] = read_ppm_p3,
        frame_reader: Optional[Callable[[int, int], bytes]] = None,
        screenshot_dir: Union[str, Path] = ".",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state if state is not None else SceneState()
        self.texture_dir = Path(texture_dir)
        self.texture_loader = texture_loader
        self.frame_reader = frame_reader
        self.screenshot_dir = Path(screenshot_dir)
        self.clock = clock

        self.should_close = False
        self.use_phong = True
        self.component_toggle_index = 0
        self.current_texture = 0
        self.texture: Optional[PPMImage] = None
        self.view_projection: Optional[Mat4] = None
        self.view_position = Vec3(*CAMERA_EYE[:3])

    # --- keyboard -----------------------------------------------------------

    def handle_key(self, key: Union[Key, int], shift: bool = False) -> Optional[str]:
        """React to a key press; ``shift`` tells whether Shift was held."""
        try:
            key = Key(key.value if isinstance(key, Key) else key)
        except ValueError:
            return None
        state = self.state

        if key in (Key.Q, Key.ESCAPE):
            self.should_close = True
            return "Quit"
        if key in (Key.F5, Key.HOME, Key.SPACE, Key.ENTER):
            return self._restart()
        if key is Key.C:
            if shift:
                state.rainbow_mode = not state.rainbow_mode
                return f"Rainbow mode {_on_off(state.rainbow_mode)}"
            state.color_index = (state.color_index + 1) % len(COLOR_PALETTE)
            return f"Color index: {state.color_index}"
        if key is Key.P:
            order = (TrajectoryMode.NONE, TrajectoryMode.LINE, TrajectoryMode.STROBE)
            state.trajectory_mode = order[(order.index(state.trajectory_mode) + 1) % 3]
            return f"Trajectory mode changed to {state.trajectory_mode.name.capitalize()}"
        if key is Key.G:
            if shift:
                state.gravity_strength += 0.1
            else:
                state.gravity_strength = max(0.0, state.gravity_strength - 0.1)
            return f"Gravity: {state.gravity_strength:g}"
        if key is Key.E:
            state.show_particles = not state.show_particles
            return f"Particle effects {_on_off(state.show_particles)}"
        if key is Key.R:
            state.reset_settings()
            return "Reset settings to defaults."
        if key in (Key.NUM_1, Key.KP_1):
            state.current_object = ObjectType.CUBE
            return "Switched to Cube"
        if key in (Key.NUM_2, Key.KP_2):
            state.current_object = ObjectType.SPHERE
            return "Switched to Sphere"
        if key in (Key.NUM_3, Key.KP_3):
            if state.bunny_loaded:
                state.current_object = ObjectType.BUNNY
                return "Switched to Bunny"
            return "Bunny not loaded"
        if key in (Key.H, Key.F1):
            return help_text()
        if key is Key.S:
            self.use_phong = not self.use_phong
            state.use_gouraud = not self.use_phong
            return f"Shading: {'Phong' if self.use_phong else 'Gouraud'}"
        if key is Key.O:
            attribute, label = _LIGHTING_COMPONENTS[self.component_toggle_index]
            value = not getattr(state, attribute)
            setattr(state, attribute, value)
            self.component_toggle_index = (self.component_toggle_index + 1) % 3
            return f"{label}: {_on_off(value)}"
        if key is Key.L:
            state.light_follows_object = not state.light_follows_object
            mode = "Follows object" if state.light_follows_object else "Fixed"
            return f"Light movement: {mode}"
        if key is Key.M:
            state.use_metallic = not state.use_metallic
            return f"Material: {'Metallic' if state.use_metallic else 'Plastic'}"
        if key is Key.I:
            return self.toggle_texture()
        if key is Key.T:
            state.render_mode = RenderMode((state.render_mode.value + 1) % 3)
            return f"Render Mode: {state.render_mode.name.capitalize()}"
        if key is Key.Z:
            state.zoom_scale = min(state.zoom_scale + 0.1, 3.0)
            return f"Zoom In: scale = {state.zoom_scale:g}"
        if key is Key.W:
            state.zoom_scale = max(state.zoom_scale - 0.1, 0.2)
            return f"Zoom Out: scale = {state.zoom_scale:g}"
        if key is Key.X:
            state.object_scale = max(state.object_scale - 0.1, 0.5)
            return f"Object scale: {state.object_scale:g}x"
        if key is Key.V:
            state.object_scale = min(state.object_scale + 0.1, 2.0)
            return f"Object scale: {state.object_scale:g}x"
        if key is Key.B:
            state.background_color_index = (
                state.background_color_index + 1
            ) % len(BACKGROUND_COLORS)
            state.background_color = Vec4(*BACKGROUND_COLORS[state.background_color_index])
            return "Background color changed"
        if key in (Key.EQUAL, Key.KP_ADD):
            state.simulation_speed = min(state.simulation_speed + 0.1, 3.0)
            return f"Simulation speed: {state.simulation_speed:g}x"
        if key in (Key.MINUS, Key.KP_SUBTRACT):
            state.simulation_speed = max(state.simulation_speed - 0.1, 0.1)
            return f"Simulation speed: {state.simulation_speed:g}x"
        if key is Key.F12:
            return self._screenshot()
        return None

    def _restart(self) -> str:
        init_ball(self.state)
        return "Simulation restarted."

    def _screenshot(self) -> str:
        if self.frame_reader is None:
            return "No frame available for screenshot"
        width, height = self.state.window_width, self.state.window_height
        pixels = self.frame_reader(width, height)
        path = self.screenshot_dir / screenshot_filename(self.clock())
        save_screenshot(path, width, height, pixels)
        return f"Screenshot saved to {path}"

    # --- mouse --------------------------------------------------------------

    def handle_mouse(self, button: Union[MouseButton, int]) -> Optional[str]:
        """React to a mouse button press."""
        try:
            button = MouseButton(button.value if isinstance(button, MouseButton) else button)
        except ValueError:
            return None
        state = self.state
        if button is MouseButton.LEFT:
            state.drawing_mode = (
                DrawingMode.SOLID
                if state.drawing_mode is DrawingMode.WIREFRAME
                else DrawingMode.WIREFRAME
            )
            return f"Drawing mode: {state.drawing_mode.name.capitalize()}"
        if button is MouseButton.RIGHT:
            if state.current_object is ObjectType.CUBE:
                state.current_object = ObjectType.SPHERE
            elif state.current_object is ObjectType.SPHERE:
                state.current_object = (
                    ObjectType.BUNNY if state.bunny_loaded else ObjectType.CUBE
                )
            else:
                state.current_object = ObjectType.CUBE
            return f"Object type: {_OBJECT_NAMES[state.current_object]}"
        return self._restart()

    # --- window -------------------------------------------------------------

    def resize(self, width: int, height: int) -> Mat4:
        """Record the new window size and return the combined view-projection."""
        if width <= 0 or height <= 0:
            raise ValueError("window dimensions must be positive")
        self.state.window_width = width
        self.state.window_height = height
        view = look_at(Vec4(*CAMERA_EYE), Vec4(*CAMERA_AT), Vec4(*CAMERA_UP))
        projection = perspective(45.0, width / height, 0.1, 100.0)
        self.view_projection = projection @ view
        self.view_position = Vec3(*CAMERA_EYE[:3])
        logger.info("Window resized to %dx%d", width, height)
        return self.view_projection

    # --- textures -----------------------------------------------------------

    def toggle_texture(self) -> str:
        """Switch to the other texture image and load it.

        Raises OSError or PPMError when the image cannot be read.
        """
        self.current_texture = (self.current_texture + 1) % len(TEXTURE_FILES)
        name = TEXTURE_FILES[self.current_texture]
        self.texture = self.texture_loader(self.texture_dir / name)
        return f"Switched to texture: {name}"