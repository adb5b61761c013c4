"""
Overlap Detector
================

Turns collision begin/separate notifications for the needle/target sensor
pair into the level-triggered ``GameState.overlapping`` flag.
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Set, Tuple

import pymunk

from needle_ring.core.state import GameState

logger = logging.getLogger(__name__)


class OverlapDetector:
    """
    Tracks which needle/target shape pairs currently touch.

    Each collision outline is made of several convex pieces, so the backend
    reports one begin/separate per piece pair. The flag is true while at least
    one pair touches. Repeated notifications for the same pair are no-ops.
    """

    def __init__(self, state: GameState):
        self._state = state
        self._pairs: Set[Tuple[Hashable, Hashable]] = set()

    @property
    def is_overlapping(self) -> bool:
        return self._state.overlapping

    @property
    def active_pairs(self) -> int:
        """Number of shape pairs currently in contact."""
        return len(self._pairs)

    def begin(self, pair: Tuple[Hashable, Hashable]) -> None:
        """Record that a shape pair started touching."""
        self._pairs.add(pair)
        self._sync()

    def end(self, pair: Tuple[Hashable, Hashable]) -> None:
        """Record that a shape pair stopped touching."""
        self._pairs.discard(pair)
        self._sync()

    def _sync(self) -> None:
        overlapping = len(self._pairs) > 0
        if overlapping != self._state.overlapping:
            logger.debug("Segments intersecting: %s", overlapping)
        self._state.overlapping = overlapping

    # pymunk callbacks

    def on_begin(self, arbiter: pymunk.Arbiter, space: pymunk.Space, data: Any) -> None:
        """
        Pymunk 7.x begin callback for needle/target sensor shapes.

        Args:
            arbiter: Collision arbiter.
            space: Physics space.
            data: User data (unused).
        """
        shape_a, shape_b = arbiter.shapes
        logger.debug("Collision started between %r and %r", shape_a, shape_b)
        self.begin(_pair_key(shape_a, shape_b))

    def on_separate(self, arbiter: pymunk.Arbiter, space: pymunk.Space, data: Any) -> None:
        """Pymunk 7.x separate callback for needle/target sensor shapes."""
        shape_a, shape_b = arbiter.shapes
        logger.debug("Collision stopped between %r and %r", shape_a, shape_b)
        self.end(_pair_key(shape_a, shape_b))


def _pair_key(shape_a: pymunk.Shape, shape_b: pymunk.Shape) -> Tuple[int, int]:
    """Order-independent identity for a shape pair."""
    a, b = id(shape_a), id(shape_b)
    return (min(a, b), max(a, b))
