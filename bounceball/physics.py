"""Time stepping for the bouncing object, extra balls and particles."""

from __future__ import annotations

import logging
import random
from typing import Optional

from bounceball.state import (
    AIR_RESISTANCE,
    BALL_SIZE,
    COLOR_PALETTE,
    MAX_TRAJECTORY_POINTS,
    RESTITUTION,
    BallObject,
    ObjectType,
    Particle,
    SceneState,
    TrajectoryPoint,
)
from bounceball.vec import Vec2, Vec4, length

logger = logging.getLogger(__name__)

_MAX_BALL_LIFETIME = 30.0
_TRAJECTORY_STEP = 5.0


def _rng(rng):
    return rng if rng is not None else random


def init_ball(state: SceneState) -> None:
    """Put the main object back at its start and clear recorded history."""
    margin = state.window_width * 0.05
    state.x_pos = margin
    state.y_pos = margin
    state.x_vel = state.initial_velocity_x
    state.y_vel = state.initial_velocity_y
    state.current_time = 0.0

    state.trajectory_points.clear()
    state.trajectory_points.append(
        TrajectoryPoint(Vec2(state.x_pos, state.y_pos), state.current_time)
    )
    state.balls.clear()
    logger.info("Ball initialized at (%g, %g)", state.x_pos, state.y_pos)


def launch_ball(state: SceneState, rng: Optional[random.Random] = None) -> BallObject:
    """Add a ball with random position, speed, colour, kind and size."""
    rng = _rng(rng)
    margin_x = state.window_width * 0.1
    margin_y = state.window_height * 0.1
    kinds = 3 if state.bunny_loaded else 2
    ball = BallObject(
        x=margin_x + margin_x * rng.randrange(100) / 100.0,
        y=margin_y + margin_y * rng.randrange(100) / 100.0,
        vx=state.initial_velocity_x * (0.8 + rng.randrange(40) / 100.0),
        vy=state.initial_velocity_y * (0.8 + rng.randrange(40) / 100.0),
        color_index=rng.randrange(len(COLOR_PALETTE)),
        type=ObjectType(rng.randrange(kinds)),
        size=BALL_SIZE * (0.6 + rng.randrange(80) / 100.0),
        launch_time=state.current_time,
    )
    state.balls.append(ball)
    logger.info("Launched ball at (%g, %g)", ball.x, ball.y)
    return ball


def _spawn_particles(state: SceneState, x: float, bottom: float, color_index: int, rng) -> None:
    for _ in range(5 + rng.randrange(6)):
        color = Vec4(*COLOR_PALETTE[color_index])
        color.w = 0.7
        state.particles.append(
            Particle(
                position=Vec2(x, bottom),
                velocity=Vec2(
                    (rng.randrange(200) - 100) / 10.0,
                    -rng.randrange(100) / 10.0 - 5.0,
                ),
                color=color,
                life=0.5 + rng.randrange(100) / 100.0,
                size=3.0 + rng.randrange(50) / 10.0,
            )
        )


def _step_ball(state: SceneState, ball: BallObject, rng) -> bool:
    """Advance one extra ball; return whether it should be kept."""
    speed = state.simulation_speed
    ball.vy += state.gravity_strength
    ball.vx *= AIR_RESISTANCE
    ball.vy *= AIR_RESISTANCE
    ball.x += ball.vx * speed
    ball.y += ball.vy * speed

    bottom = state.window_height * 0.9
    if ball.y > bottom:
        ball.vy = -ball.vy * RESTITUTION
        ball.y = bottom
        if abs(ball.vy) < 0.5:
            ball.vy = 0.0
        if state.show_particles:
            _spawn_particles(state, ball.x, bottom, ball.color_index, rng)

    left = state.window_width * 0.05
    right = state.window_width * 0.95
    if ball.x < left:
        ball.x = left
        ball.vx = -ball.vx * RESTITUTION
    if ball.x > right:
        ball.x = right
        ball.vx = -ball.vx * RESTITUTION

    lifetime = state.current_time - ball.launch_time
    energy = abs(ball.vx) + abs(ball.vy)
    resting = ball.y >= bottom - 1.0 and energy < 0.1
    return not (lifetime > _MAX_BALL_LIFETIME or resting)


def _step_main(state: SceneState, rng) -> None:
    speed = state.simulation_speed
    state.y_vel += state.gravity_strength
    state.x_vel *= AIR_RESISTANCE
    state.y_vel *= AIR_RESISTANCE
    state.x_pos += state.x_vel * speed
    state.y_pos += state.y_vel * speed

    bottom = state.window_height * 0.9
    if state.y_pos > bottom:
        state.y_vel = -state.y_vel * RESTITUTION
        state.y_pos = bottom
        if abs(state.y_vel) < 0.5:
            state.y_vel = 0.0
        if state.show_particles:
            _spawn_particles(state, state.x_pos, bottom, state.color_index, rng)

    left = state.window_width * 0.05
    right = state.window_width * 0.95
    if state.x_pos < left:
        state.x_pos = left
        state.x_vel = -state.x_vel * RESTITUTION
    if state.x_pos > right:
        state.x_pos = right
        state.x_vel = -state.x_vel * RESTITUTION

    here = Vec2(state.x_pos, state.y_pos)
    points = state.trajectory_points
    if not points or length(here - points[-1].position) > _TRAJECTORY_STEP:
        points.append(TrajectoryPoint(here, state.current_time))
        while len(points) > MAX_TRAJECTORY_POINTS:
            points.popleft()


def update_ball(
    state: SceneState, delta_time: float, rng: Optional[random.Random] = None
) -> None:
    """Advance the simulation by ``delta_time`` seconds of wall-clock time."""
    rng = _rng(rng)
    scaled = delta_time * state.simulation_speed
    state.current_time += scaled
    state.bunny_rotation += scaled * 30.0
    state.cube_rotation += scaled * 20.0

    if state.multiple_objects:
        state.balls[:] = [ball for ball in state.balls if _step_ball(state, ball, rng)]
    else:
        _step_main(state, rng)


def update_particles(state: SceneState, delta_time: float) -> None:
    """Move particles, age them, fade them and drop the expired ones."""
    speed = state.simulation_speed
    scaled = delta_time * speed
    survivors = []
    for particle in state.particles:
        particle.velocity.y += state.gravity_strength * 0.5
        particle.position += particle.velocity * speed
        particle.life -= scaled
        if particle.life > 0.0:
            particle.color.w = particle.life
            survivors.append(particle)
    state.particles[:] = survivors