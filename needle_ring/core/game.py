"""
Core Game
=========

Main game orchestrator combining physics, overlap detection, rotation and the
scoring state machine in a fixed per-tick order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from needle_ring.core.config_loader import GameConfig, get_config
from needle_ring.core.overlap import OverlapDetector
from needle_ring.core.physics_world import PhysicsWorld
from needle_ring.core.rotation import RotationController
from needle_ring.core.state import GamePhase, GameState, NeedleState
from needle_ring.core.state_machine import CommitResult, GameStateMachine


@dataclass
class TickResult:
    """Result of a single game tick."""
    overlapping: bool       # Flag value the commit (if any) was judged against
    commit: Optional[CommitResult]
    score: int
    phase: GamePhase


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Physics world (collision backend)
    - Overlap detection
    - Commit resolution and scoring
    - Needle rotation

    One tick runs, in order: physics step (delivers collision events),
    commit handling, rotation update.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        on_score_text: Optional[Callable[[str], None]] = None,
        on_game_over: Optional[Callable[[], None]] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for target relocation.
            on_score_text: Called with "Score: {n}" on every increment.
            on_game_over: Called once when the round ends.

        Raises:
            InvalidGeometry: If the needle or target config is degenerate.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._on_score_text = on_score_text
        self._on_game_over = on_game_over

        self._state = GameState(needle=NeedleState(speed=config.difficulty.initial_speed))

        # Initialize subsystems
        self._physics = PhysicsWorld(config)
        self._overlap = OverlapDetector(self._state)
        self._rotation = RotationController(config)
        self._machine = GameStateMachine(config, seed=seed, rotation=self._rotation)

        self._physics.set_overlap_handlers(self._overlap.on_begin, self._overlap.on_separate)
        self._sync_bodies()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def state(self) -> GameState:
        """Live game state."""
        return self._state

    @property
    def physics(self) -> PhysicsWorld:
        """Physics world instance."""
        return self._physics

    @property
    def score(self) -> int:
        """Current score."""
        return self._state.score

    @property
    def score_text(self) -> str:
        return self._state.score_text

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._state.is_over

    def _sync_bodies(self) -> None:
        """Push state angles into the physics bodies."""
        self._physics.set_angles(self._state.needle.angle, self._state.target.angle)

    def tick(self, commit: bool = False, dt: Optional[float] = None) -> TickResult:
        """
        Advance the game by one tick.

        Args:
            commit: True if the commit key was just pressed this tick.
            dt: Timestep duration. Uses config default if None.

        Returns:
            TickResult for this tick.
        """
        if dt is None:
            dt = self._config.physics.dt

        # Collision events first so the commit sees the freshest flag
        self._physics.step(dt)
        overlapping = self._state.overlapping

        result: Optional[CommitResult] = None
        if commit:
            result = self.commit()

        if self._state.phase is GamePhase.PLAYING:
            self._rotation.advance(self._state.needle, dt)
            self._sync_bodies()

        return TickResult(
            overlapping=overlapping,
            commit=result,
            score=self._state.score,
            phase=self._state.phase
        )

    def commit(self) -> CommitResult:
        """
        Resolve a commit against the current overlap flag.

        Target relocation is pushed to the physics body immediately. Usually
        called through tick().
        """
        result = self._machine.commit(self._state)

        if result.scored:
            self._sync_bodies()
            if self._on_score_text is not None:
                self._on_score_text(result.score_text)
        elif result.game_over and self._on_game_over is not None:
            self._on_game_over()

        return result

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with world-space segment vertices, triangles and UI state.
        """
        needle = self._physics.needle.segment
        target = self._physics.target.segment
        return {
            "ring_inner_radius": self._config.ring.inner_radius,
            "ring_outer_radius": self._config.ring.outer_radius,
            "needle_vertices": needle.rotated(self._state.needle.angle),
            "needle_triangles": needle.triangles,
            "target_vertices": target.rotated(self._state.target.angle),
            "target_triangles": target.triangles,
            "score": self._state.score,
            "score_text": self._state.score_text,
            "game_over": self._state.is_over,
        }
