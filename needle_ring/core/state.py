"""
Game State
==========

Mutable per-round state, owned by CoreGame and handed to each tick step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GamePhase(Enum):
    """Round phase. GAME_OVER is terminal."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class NeedleState:
    """The rotating indicator."""
    angle: float = 0.0  # Radians, unbounded
    speed: float = 1.0  # Signed angular speed, rad/s


@dataclass
class TargetZoneState:
    """The wedge the needle must be inside when the player commits."""
    angle: float = 0.0


@dataclass
class GameState:
    """Everything the update loop mutates."""
    needle: NeedleState = field(default_factory=NeedleState)
    target: TargetZoneState = field(default_factory=TargetZoneState)
    score: int = 0
    overlapping: bool = False
    phase: GamePhase = GamePhase.PLAYING

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def score_text(self) -> str:
        return format_score(self.score)


def format_score(score: int) -> str:
    """Text shown in the score display."""
    return f"Score: {score}"
