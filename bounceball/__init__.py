"""Bouncing-object scene: vectors and matrices, physics, meshes, PPM textures, controls and draw commands."""

__version__ = "1.0.0"

__all__ = [
    "controls",
    "geometry",
    "mat",
    "physics",
    "render",
    "state",
    "teapot",
    "texture",
    "transforms",
    "vec",
]