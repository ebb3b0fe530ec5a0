"""Scene state, constants and the small records the simulation works on."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from bounceball.vec import Vec2, Vec4

logger = logging.getLogger(__name__)

GRAVITY = 0.35
RESTITUTION = 0.92
BALL_SIZE = 60.0
BUNNY_SCALE = 15.0
MAX_TRAJECTORY_POINTS = 150
AIR_RESISTANCE = 0.998

COLOR_PALETTE: tuple[tuple[float, float, float, float], ...] = (
    (1.0, 0.3, 0.3, 1.0),  # red
    (1.0, 0.7, 0.2, 1.0),  # orange
    (1.0, 1.0, 0.3, 1.0),  # yellow
    (0.4, 1.0, 0.4, 1.0),  # green
    (0.3, 0.6, 1.0, 1.0),  # blue
    (0.9, 0.3, 1.0, 1.0),  # purple
    (1.0, 0.5, 1.0, 1.0),  # pink
    (0.2, 1.0, 1.0, 1.0),  # cyan
)

DEFAULT_BACKGROUND: tuple[float, float, float, float] = (0.1, 0.1, 0.1, 1.0)
DEFAULT_GRID_COLOR: tuple[float, float, float, float] = (0.3, 0.3, 0.3, 0.5)


class RenderMode(Enum):
    WIREFRAME = 0
    SHADING = 1
    TEXTURE = 2


class ObjectType(Enum):
    CUBE = 0
    SPHERE = 1
    BUNNY = 2


class DrawingMode(Enum):
    WIREFRAME = 0
    SOLID = 1


class TrajectoryMode(Enum):
    NONE = 0
    LINE = 1
    STROBE = 2


class GridMode(Enum):
    NONE = 0
    BASIC = 1
    DETAILED = 2


@dataclass
class BallObject:
    """One ball of the multiple-objects mode, in screen coordinates."""

    x: float
    y: float
    vx: float
    vy: float
    color_index: int
    type: ObjectType
    size: float
    launch_time: float


@dataclass
class Particle:
    """A short-lived spark thrown off on a bounce."""

    position: Vec2
    velocity: Vec2
    color: Vec4
    life: float
    size: float


@dataclass
class TrajectoryPoint:
    """A recorded position of the main object and when it was there."""

    position: Vec2
    time_stamp: float


def _trajectory_deque() -> deque:
    return deque(maxlen=MAX_TRAJECTORY_POINTS)


@dataclass
class SceneState:
    """Everything the simulation, renderer and controls share."""

    window_width: int = 800
    window_height: int = 600

    light_follows_object: bool = False
    use_metallic: bool = False
    zoom_scale: float = 1.0
    use_ambient: bool = True
    use_diffuse: bool = True
    use_specular: bool = True

    plastic_shininess: float = 16.0
    metallic_shininess: float = 64.0
    plastic_specular_strength: float = 0.3
    metallic_specular_strength: float = 0.8

    render_mode: RenderMode = RenderMode.SHADING
    use_gouraud: bool = False

    current_object: ObjectType = ObjectType.SPHERE
    drawing_mode: DrawingMode = DrawingMode.SOLID
    trajectory_mode: TrajectoryMode = TrajectoryMode.NONE
    grid_mode: GridMode = GridMode.NONE

    color_index: int = 0
    rainbow_mode: bool = False
    multiple_objects: bool = False

    x_pos: float = 0.0
    y_pos: float = 0.0
    x_vel: float = 6.0
    y_vel: float = -2.0
    initial_velocity_x: float = 6.0
    initial_velocity_y: float = -2.0
    current_time: float = 0.0
    gravity_strength: float = GRAVITY

    simulation_speed: float = 1.0
    background_color: Vec4 = field(default_factory=lambda: Vec4(*DEFAULT_BACKGROUND))
    background_color_index: int = 0
    object_scale: float = 1.0
    grid_color: Vec4 = field(default_factory=lambda: Vec4(*DEFAULT_GRID_COLOR))

    balls: list[BallObject] = field(default_factory=list)
    launch_interval: float = 1.5
    last_launch_time: float = 0.0

    particles: list[Particle] = field(default_factory=list)
    show_particles: bool = False

    trajectory_points: deque = field(default_factory=_trajectory_deque)

    bunny_loaded: bool = False
    bunny_rotation: float = 0.0
    cube_rotation: float = 0.0

    def reset_settings(self) -> None:
        """Put the display settings back to their defaults."""
        self.current_object = ObjectType.SPHERE
        self.drawing_mode = DrawingMode.SOLID
        self.trajectory_mode = TrajectoryMode.NONE
        self.rainbow_mode = False
        self.multiple_objects = False
        self.simulation_speed = 1.0
        self.object_scale = 1.0
        self.grid_mode = GridMode.NONE
        self.background_color_index = 0
        self.background_color = Vec4(*DEFAULT_BACKGROUND)
        self.zoom_scale = 1.0


_HELP_LINES = (
    "======== Enhanced Bouncing Ball Simulation ========",
    "  Assignment 3 - Shading and Texture Mapping",
    "",
    "  Basic Controls:",
    "    h, F1: Print this help message",
    "    q, Escape: Quit",
    "    Space, F5: Restart simulation",
    "",
    "  Shading Controls:",
    "    S: Toggle between Phong and Gouraud shading",
    "    O: Toggle lighting components (Ambient->Diffuse->Specular)",
    "    L: Toggle light movement (Fixed/Follow object)",
    "    M: Toggle material (Plastic/Metallic)",
    "",
    "  Display Controls:",
    "    T: Toggle display mode (Wireframe->Shading->Texture)",
    "    I: Toggle texture images",
    "    Z: Zoom in",
    "    W: Zoom out",
    "",
    "  Object Controls:",
    "    1: Switch to Cube",
    "    2: Switch to Sphere",
    "    3: Switch to Bunny",
    "    c: Change color",
    "",
    "  Mouse Controls:",
    "    Left: Toggle wireframe/solid",
    "    Right: Cycle objects",
    "    Middle: Restart simulation",
    "=================================================",
)


def help_text() -> str:
    """The help message listing the controls."""
    return "\n".join(_HELP_LINES) + "\n"


def save_screenshot(
    filename: Union[str, Path], width: int, height: int, pixels: bytes
) -> None:
    """Write RGB pixels, stored bottom row first, as a binary P6 PPM file.

    The image is flipped so the file's first row is the top of the picture.
    Raises ValueError when ``pixels`` is not ``3 * width * height`` bytes and
    OSError when the file cannot be written.
    """
    if width <= 0 or height <= 0:
        raise ValueError("screenshot dimensions must be positive")
    data = bytes(pixels)
    row_size = 3 * width
    if len(data) != row_size * height:
        raise ValueError(
            f"expected {row_size * height} bytes of pixel data, got {len(data)}"
        )
    rows = (data[y * row_size:(y + 1) * row_size] for y in reversed(range(height)))
    with open(filename, "wb") as out:
        out.write(f"P6\n{width} {height}\n255\n".encode("ascii"))
        for row in rows:
            out.write(row)
    logger.info("Screenshot saved to %s", filename)