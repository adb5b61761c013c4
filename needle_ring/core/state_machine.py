"""
Game State Machine
==================

Resolves a player commit: reverse the needle, then either score (relocate the
target and speed up) or end the round.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from needle_ring.core.config_loader import GameConfig, get_config
from needle_ring.core.rotation import RotationController
from needle_ring.core.state import GamePhase, GameState, format_score

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    """Outcome of a single commit."""
    accepted: bool           # False once the round is over
    scored: bool
    game_over: bool          # True only on the commit that ended the round
    score_text: Optional[str] = None

    @staticmethod
    def ignored() -> "CommitResult":
        return CommitResult(False, False, False)

    @staticmethod
    def hit(score: int) -> "CommitResult":
        return CommitResult(True, True, False, format_score(score))

    @staticmethod
    def miss() -> "CommitResult":
        return CommitResult(True, False, True)


class GameStateMachine:
    """
    PLAYING -> GAME_OVER transitions driven by commits.

    Reads ``state.overlapping`` as last written by the overlap detector; never
    writes it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rotation: Optional[RotationController] = None
    ):
        """
        Initialize the state machine.

        Args:
            config: Game configuration. Uses default if None.
            seed: Seed for target relocation. Random if None.
            rotation: Controller applying reverse/ramp. Built from config if None.
        """
        if config is None:
            config = get_config()

        self._rng = random.Random(seed)
        self._rotation = rotation if rotation is not None else RotationController(config)

    def random_target_angle(self) -> float:
        """Uniform angle in [0, 2*pi)."""
        return self._rng.random() * 2.0 * math.pi

    def commit(self, state: GameState) -> CommitResult:
        """
        Apply one commit to the state.

        Args:
            state: Game state to mutate.

        Returns:
            CommitResult describing what happened.
        """
        if state.phase is not GamePhase.PLAYING:
            return CommitResult.ignored()

        self._rotation.reverse(state.needle)

        if state.overlapping:
            state.score += 1
            state.target.angle = self.random_target_angle()
            self._rotation.ramp(state.needle)
            logger.info("Score increased to %d (speed %.1f)", state.score, abs(state.needle.speed))
            return CommitResult.hit(state.score)

        state.phase = GamePhase.GAME_OVER
        logger.info("Game Over - final score %d", state.score)
        return CommitResult.miss()
