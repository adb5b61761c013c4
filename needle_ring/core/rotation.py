"""
Rotation Controller
===================

Advances the needle each tick and applies the difficulty ramp.
"""

from __future__ import annotations

import math
from typing import Optional

from needle_ring.core.config_loader import GameConfig, get_config
from needle_ring.core.state import NeedleState


class RotationController:
    """
    Needle angle integration and speed changes.

    Positive speed sweeps clockwise (the angle decreases).
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._increment = config.difficulty.speed_increment
        self._cap = config.difficulty.speed_cap

    def advance(self, needle: NeedleState, dt: float) -> None:
        """Rotate the needle by one tick."""
        needle.angle -= needle.speed * dt

    def reverse(self, needle: NeedleState) -> None:
        """Flip the sweep direction."""
        needle.speed = -needle.speed

    def ramp(self, needle: NeedleState) -> None:
        """Raise |speed| by one increment, clamped to the cap, keeping the sign."""
        magnitude = min(abs(needle.speed) + self._increment, self._cap)
        needle.speed = math.copysign(magnitude, needle.speed)
