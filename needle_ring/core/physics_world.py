"""
Physics World
=============

Manages the pymunk Space holding the needle and target sensor outlines and
routes their overlap callbacks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import pymunk

from needle_ring.core.config_loader import GameConfig, get_config
from needle_ring.core.geometry import RingSegment, build_from_config


# Collision types for pymunk
COLLISION_TYPE_NEEDLE = 1
COLLISION_TYPE_TARGET = 2

CollisionCallback = Callable[[pymunk.Arbiter, pymunk.Space, Any], None]


@dataclass
class SensorBody:
    """
    A segment in the physics world.

    Wraps a pymunk Body and its sensor triangles with the source geometry.
    """
    segment: RingSegment
    body: pymunk.Body
    shapes: Tuple[pymunk.Poly, ...]

    @property
    def angle(self) -> float:
        return self.body.angle

    @angle.setter
    def angle(self, value: float) -> None:
        self.body.angle = value


class PhysicsWorld:
    """
    Collision backend for the game.

    Both segments sit on dynamic bodies at the origin in a zero-gravity space;
    their shapes are sensors, so pymunk reports overlaps without applying any
    force. Angles are set directly by the game each tick.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize physics world.

        Args:
            config: Game configuration. Uses default if None.

        Raises:
            InvalidGeometry: If a segment's config is degenerate.
        """
        if config is None:
            config = get_config()

        self._config = config

        self._space = pymunk.Space()
        self._space.gravity = (0, 0)

        self._needle = self._create_sensor(build_from_config(config.needle), COLLISION_TYPE_NEEDLE)
        self._target = self._create_sensor(build_from_config(config.target), COLLISION_TYPE_TARGET)

    def _create_sensor(self, segment: RingSegment, collision_type: int) -> SensorBody:
        """Create a body carrying one sensor Poly per triangle of the segment."""
        # Infinite moment keeps the solver from ever spinning the body
        body = pymunk.Body(1.0, float("inf"))
        body.position = (0, 0)

        shapes = []
        for points in segment.triangle_points():
            shape = pymunk.Poly(body, points)
            shape.sensor = True
            shape.collision_type = collision_type
            shapes.append(shape)

        shapes_tuple = tuple(shapes)
        self._space.add(body, *shapes_tuple)
        return SensorBody(segment=segment, body=body, shapes=shapes_tuple)

    @property
    def space(self) -> pymunk.Space:
        """The pymunk Space instance."""
        return self._space

    @property
    def needle(self) -> SensorBody:
        return self._needle

    @property
    def target(self) -> SensorBody:
        return self._target

    def set_overlap_handlers(self, begin: CollisionCallback, separate: CollisionCallback) -> None:
        """
        Register needle/target overlap callbacks.

        Args:
            begin: Called when a needle piece starts touching a target piece.
            separate: Called when they stop touching.
        """
        self._space.on_collision(
            COLLISION_TYPE_NEEDLE,
            COLLISION_TYPE_TARGET,
            begin=begin,
            separate=separate
        )

    def set_angles(self, needle_angle: float, target_angle: float) -> None:
        """Move both bodies; the new overlap is reported on the next step."""
        self._needle.angle = needle_angle
        self._target.angle = target_angle

    def step(self, dt: Optional[float] = None) -> None:
        """
        Advance the space by one timestep, firing overlap callbacks.

        Args:
            dt: Timestep duration. Uses config default if None.
        """
        if dt is None:
            dt = self._config.physics.dt

        substeps = self._config.physics.substeps
        for _ in range(substeps):
            self._space.step(dt / substeps)
