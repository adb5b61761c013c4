"""
Needle Ring Core - game simulation and its supporting systems.

Main exports:
- CoreGame: Per-tick game loop (physics, overlap, commit, rotation)
- GameStateMachine: Commit resolution and scoring
- build_ring_segment / build_wedge: Ring segment geometry
- GameConfig: Configuration loaded from game_config.yaml
"""

from needle_ring.core.config_loader import GameConfig, load_config, get_config
from needle_ring.core.geometry import (
    InvalidGeometry,
    RingSegment,
    build_ring_segment,
    build_wedge,
)
from needle_ring.core.state import GamePhase, GameState, NeedleState, TargetZoneState
from needle_ring.core.rotation import RotationController
from needle_ring.core.overlap import OverlapDetector
from needle_ring.core.state_machine import CommitResult, GameStateMachine
from needle_ring.core.physics_world import PhysicsWorld
from needle_ring.core.game import CoreGame, TickResult

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "InvalidGeometry",
    "RingSegment",
    "build_ring_segment",
    "build_wedge",
    "GamePhase",
    "GameState",
    "NeedleState",
    "TargetZoneState",
    "RotationController",
    "OverlapDetector",
    "CommitResult",
    "GameStateMachine",
    "PhysicsWorld",
    "CoreGame",
    "TickResult",
]
