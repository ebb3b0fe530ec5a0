"""Generators for the 4x4 transformation matrices used by the scene."""

from __future__ import annotations

import math
from typing import Union

from bounceball.mat import Mat3, Mat4
from bounceball.vec import DEGREES_TO_RADIANS, Vec3, Vec4, cross, normalize


def rotate_x(theta: float) -> Mat4:
    """Rotation about the x axis by ``theta`` degrees."""
    angle = DEGREES_TO_RADIANS * theta
    c = Mat4()
    c[2][2] = c[1][1] = math.cos(angle)
    c[2][1] = math.sin(angle)
    c[1][2] = -c[2][1]
    return c


def rotate_y(theta: float) -> Mat4:
    """Rotation about the y axis by ``theta`` degrees."""
    angle = DEGREES_TO_RADIANS * theta
    c = Mat4()
    c[2][2] = c[0][0] = math.cos(angle)
    c[0][2] = math.sin(angle)
    c[2][0] = -c[0][2]
    return c


def rotate_z(theta: float) -> Mat4:
    """Rotation about the z axis by ``theta`` degrees."""
    angle = DEGREES_TO_RADIANS * theta
    c = Mat4()
    c[0][0] = c[1][1] = math.cos(angle)
    c[1][0] = math.sin(angle)
    c[0][1] = -c[1][0]
    return c


def translate(x: float, y: float, z: float) -> Mat4:
    """Translation by (x, y, z)."""
    c = Mat4()
    c[0][3] = x
    c[1][3] = y
    c[2][3] = z
    return c


def translate_vec(v: Union[Vec3, Vec4]) -> Mat4:
    """Translation by the xyz part of a Vec3 or Vec4."""
    if not isinstance(v, (Vec3, Vec4)):
        raise TypeError("translate_vec needs a Vec3 or Vec4")
    return translate(v.x, v.y, v.z)


def scale(x: float, y: float, z: float) -> Mat4:
    """Scaling by (x, y, z) along the axes."""
    c = Mat4()
    c[0][0] = x
    c[1][1] = y
    c[2][2] = z
    return c


def scale_vec(v: Vec3) -> Mat4:
    """Scaling by the components of a Vec3."""
    if not isinstance(v, Vec3):
        raise TypeError("scale_vec needs a Vec3")
    return scale(v.x, v.y, v.z)


def ortho(
    left: float,
    right: float,
    bottom: float,
    top: float,
    z_near: float,
    z_far: float,
) -> Mat4:
    """Orthographic projection of the given box onto the unit cube."""
    c = Mat4()
    c[0][0] = 2.0 / (right - left)
    c[1][1] = 2.0 / (top - bottom)
    c[2][2] = 2.0 / (z_near - z_far)
    c[3][3] = 1.0
    c[0][3] = -(right + left) / (right - left)
    c[1][3] = -(top + bottom) / (top - bottom)
    c[2][3] = -(z_far + z_near) / (z_far - z_near)
    return c


def ortho_2d(left: float, right: float, bottom: float, top: float) -> Mat4:
    """Orthographic projection with depth range -1 to 1."""
    return ortho(left, right, bottom, top, -1.0, 1.0)


def frustum(
    left: float,
    right: float,
    bottom: float,
    top: float,
    z_near: float,
    z_far: float,
) -> Mat4:
    """Perspective projection for an off-axis viewing frustum."""
    c = Mat4()
    c[0][0] = 2.0 * z_near / (right - left)
    c[0][2] = (right + left) / (right - left)
    c[1][1] = 2.0 * z_near / (top - bottom)
    c[1][2] = (top + bottom) / (top - bottom)
    c[2][2] = -(z_far + z_near) / (z_far - z_near)
    c[2][3] = -2.0 * z_far * z_near / (z_far - z_near)
    c[3][2] = -1.0
    c[3][3] = 0.0
    return c


def perspective(fovy: float, aspect: float, z_near: float, z_far: float) -> Mat4:
    """Symmetric perspective projection; ``fovy`` is in degrees."""
    top = math.tan(fovy * DEGREES_TO_RADIANS / 2) * z_near
    right = top * aspect
    c = Mat4()
    c[0][0] = z_near / right
    c[1][1] = z_near / top
    c[2][2] = -(z_far + z_near) / (z_far - z_near)
    c[2][3] = -2.0 * z_far * z_near / (z_far - z_near)
    c[3][2] = -1.0
    c[3][3] = 0.0
    return c


def look_at(eye: Vec4, at: Vec4, up: Vec4) -> Mat4:
    """Viewing matrix for a camera at ``eye`` looking towards ``at``."""
    n = normalize(eye - at)
    u = Vec4(normalize(cross(up, n)), 0.0)
    v = Vec4(normalize(cross(n, u)), 0.0)
    t = Vec4(0.0, 0.0, 0.0, 1.0)
    c = Mat4(u, v, n, t)
    return c * translate_vec(-eye)


def normal_matrix(c: Mat4) -> Mat3:
    """Normal matrix built from the upper 3x3 part of a model-view matrix.

    A singular upper part raises ZeroDivisionError.
    """
    det = (
        c[0][0] * c[1][1] * c[2][2]
        + c[0][1] * c[1][2] * c[2][1]
        + c[0][2] * c[1][0] * c[2][1]
        - c[2][0] * c[1][1] * c[0][2]
        - c[1][0] * c[0][1] * c[2][2]
        - c[0][0] * c[1][2] * c[2][1]
    )
    d = Mat3()
    d[0][0] = (c[1][1] * c[2][2] - c[1][2] * c[2][1]) / det
    d[0][1] = -(c[1][0] * c[2][2] - c[1][2] * c[2][0]) / det
    d[0][2] = (c[1][0] * c[2][1] - c[1][1] * c[2][0]) / det
    d[1][0] = -(c[0][1] * c[2][2] - c[0][2] * c[2][1]) / det
    d[1][1] = (c[0][0] * c[2][2] - c[0][2] * c[2][0]) / det
    d[1][2] = -(c[0][0] * c[2][1] - c[0][1] * c[2][0]) / det
    d[2][0] = (c[0][1] * c[1][2] - c[0][2] * c[1][1]) / det
    d[2][1] = -(c[0][0] * c[1][2] - c[0][2] * c[1][0]) / det
    d[2][2] = (c[0][0] * c[1][1] - c[1][0] * c[0][1]) / det
    return d


def identity() -> Mat4:
    """The 4x4 identity matrix."""
    return Mat4(1.0)