# bounceball

A library for simulating and describing a bouncing-object scene. A sphere,
cube or loaded triangle mesh falls under gravity, loses a little speed to
air resistance, bounces off the floor and side walls of the window with
energy loss, leaves a trail of recorded positions and can throw off
particles when it hits the floor. Several extra balls can be simulated at
once.

Everything that decides *what* is drawn is plain Python data: each frame
becomes a list of `DrawCommand` objects carrying model matrices, colours,
lighting and material settings. You can feed those to any graphics layer,
or run the whole scene headless.

## Modules

| Module | Contents |
| --- | --- |
| `bounceball.vec` | `Vec2`, `Vec3`, `Vec4` with arithmetic and `to_list()`; `Vec4.xyz()`; `dot`, `length`, `normalize`, `cross` |
| `bounceball.mat` | `Mat2`, `Mat3`, `Mat4` (rows of vectors) with `flatten()`; `matrix_comp_mult`, `transpose` |
| `bounceball.transforms` | `rotate_x`, `rotate_y`, `rotate_z`, `translate`, `translate_vec`, `scale`, `scale_vec`, `ortho`, `ortho_2d`, `frustum`, `perspective`, `look_at`, `normal_matrix`, `identity` |
| `bounceball.teapot` | Utah teapot data (`INDICES`, `VERTICES`) and `patch_control_points` |
| `bounceball.state` | Enums `RenderMode`, `ObjectType`, `DrawingMode`, `TrajectoryMode`, `GridMode`; records `BallObject`, `Particle`, `TrajectoryPoint`; `SceneState`; `help_text`, `save_screenshot` |
| `bounceball.physics` | `init_ball`, `launch_ball`, `update_ball`, `update_particles` |
| `bounceball.geometry` | `Vertex`, `Mesh`, `cube_mesh`, `sphere_mesh`, `load_off_model`, `face_normals` |
| `bounceball.texture` | `PPMImage`, `PPMError`, `parse_ppm_p3`, `read_ppm_p3` |
| `bounceball.render` | `DrawCommand`, `rainbow_color`, `screen_to_world`, `grid_lines`, `model_matrix`, `light_direction`, `object_draw`, `trajectory_draws`, `build_frame` |
| `bounceball.controls` | `Key`, `MouseButton`, `Controller`, `screenshot_filename` |

The package has no runtime dependencies.

## Running the simulation

```python
import random

from bounceball.physics import init_ball, update_ball, update_particles
from bounceball.render import build_frame
from bounceball.state import SceneState

state = SceneState()          # 800x600 window, sphere, default physics
state.show_particles = True
rng = random.Random(0)
init_ball(state)

for _ in range(120):
    update_ball(state, 1 / 60, rng)
    update_particles(state, 1 / 60)

frame = build_frame(state)
for command in frame:
    print(command.primitive, command.program, command.object_type)
```

Positions are in window pixels, with y growing downwards. `update_ball`
scales the time step by `state.simulation_speed`, applies gravity and air
resistance, bounces the object off the floor (90% of the window height) and
the side walls (5% and 95% of the width), and records a new trajectory
point each time the object has moved more than 5 pixels; at most 150 are
kept. With `state.multiple_objects` set it steps the balls in
`state.balls` instead, dropping those older than 30 seconds or at rest on
the floor. `launch_ball` adds such a ball with random position, speed,
colour, kind and size. The `rng` arguments are optional and default to
the `random` module.

## Frames

`build_frame` returns, in order: a `"clear"` command with the background
colour, a `"lines"` command for the grid when `state.grid_mode` is not
`GridMode.NONE`, the trajectory commands from `trajectory_draws` (a
`"line_strip"` in `TrajectoryMode.LINE`, and up to ten smaller "ghost"
objects along the path), and finally a `"triangles"` command for the main
object. Each object command names its shading program (`"phong"` or
`"gouraud"`), carries its model matrix, light direction, shininess,
specular strength, lighting component switches, whether it is drawn as
wireframe and whether the sphere is textured.

`screen_to_world` maps window pixels onto the z = 0 plane, x in -10..10
and y in 7.5..-7.5.

## Vectors and matrices

```python
from bounceball.transforms import look_at, perspective
from bounceball.vec import Vec4

view = look_at(Vec4(0, 0, 15, 1), Vec4(0, 0, 0, 1), Vec4(0, 1, 0, 0))
projection = perspective(45.0, 800 / 600, 0.1, 100.0)
view_projection = projection @ view     # `*` works as well
row_major = view_projection.flatten()
```

Matrices are indexed by row (`m[i][j]`), multiply matrices and vectors
with `*` or `@`, and `flatten()` returns the elements row after row.
Angles given to the rotation and projection functions are in degrees.

## Meshes and textures

```python
from bounceball.geometry import cube_mesh, load_off_model, sphere_mesh
from bounceball.texture import read_ppm_p3

cube = cube_mesh()              # 36 vertices with flat face normals
sphere = sphere_mesh(2)         # subdivided octahedron with spherical UVs
bunny = load_off_model("bunny.off")   # centred, largest side scaled to 15
image = read_ppm_p3("earth.ppm")
```

A `Mesh` is a list of `Vertex` records taken three at a time as
triangles; its `positions`, `normals` and `tex_coords` properties give the
separate lists. `load_off_model` keeps only triangular faces with valid
indices and raises `ValueError` for unusable content. `read_ppm_p3` reads
ASCII (P3) PPM images into a `PPMImage` and raises `PPMError` on malformed
input. After loading a model, set `state.bunny_loaded = True` so that the
controls and renderer offer `ObjectType.BUNNY`.

## Input handling

`Controller` wraps a `SceneState` and applies each key press
(`handle_key(key, shift=False)`) or mouse press (`handle_mouse(button)`).
Keys and buttons may be given as `Key` / `MouseButton` members or as the
integer codes they stand for. Each handler returns a message describing
the change, or `None` for input it does not react to. The keys cover
quitting (sets `should_close`), restarting, colours and rainbow mode,
trajectory mode, gravity, particles, resetting settings, object choice,
help, Phong/Gouraud shading, lighting components, light movement,
material, texture switching, render mode, zoom, object scale, background
colour, simulation speed and screenshots.

`Controller.resize(width, height)` stores the new window size and returns
the combined view-projection matrix. `toggle_texture` alternates between
`earth.ppm` and `basketball.ppm` in `texture_dir`. F12 saves a screenshot
named by `screenshot_filename` through `save_screenshot` (binary P6 PPM),
but only when the controller was given a `frame_reader` that returns the
window's RGB pixels.

## What it does not do

The package opens no window, compiles no shaders and talks to no graphics
API. There is no command to run and no main loop: you supply the window,
feed its events to `Controller`, call `update_ball` with the elapsed time,
and draw the `DrawCommand` list from `build_frame` yourself. Screenshots
need pixels handed in through `frame_reader`.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.