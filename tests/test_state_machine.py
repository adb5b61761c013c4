"""
Tests for commit resolution, scoring and the speed ramp.
"""

import math
import random

import pytest

from needle_ring.core.config_loader import load_config
from needle_ring.core.rotation import RotationController
from needle_ring.core.state import GamePhase, GameState, NeedleState
from needle_ring.core.state_machine import GameStateMachine


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def machine(config):
    return GameStateMachine(config, seed=42)


@pytest.fixture
def state(config):
    return GameState(needle=NeedleState(speed=config.difficulty.initial_speed))


class TestCommitScenarios:
    """Single-commit outcomes from a fresh game."""

    def test_miss_ends_game(self, machine, state):
        """No overlap: game over, score stays 0."""
        state.overlapping = False

        result = machine.commit(state)

        assert state.phase is GamePhase.GAME_OVER
        assert state.score == 0
        assert result.game_over
        assert not result.scored

    def test_hit_scores_and_speeds_up(self, machine, state):
        """Overlap: score 1, |speed| 1.5, target moved, still playing."""
        state.overlapping = True
        old_target = state.target.angle

        result = machine.commit(state)

        assert state.score == 1
        assert abs(state.needle.speed) == pytest.approx(1.5)
        assert state.target.angle != old_target
        assert state.phase is GamePhase.PLAYING
        assert result.scored
        assert result.score_text == "Score: 1"

    def test_five_hits_ramp(self, machine, state):
        """Five hits from 1.0 reach 3.5 with alternating sign."""
        state.overlapping = True
        signs = []

        for _ in range(5):
            machine.commit(state)
            signs.append(math.copysign(1.0, state.needle.speed))

        assert abs(state.needle.speed) == pytest.approx(3.5)
        assert signs == [-1.0, 1.0, -1.0, 1.0, -1.0]
        assert state.score == 5

    def test_miss_still_reverses(self, machine, state):
        """The losing commit also flips the needle."""
        state.needle.speed = 2.0
        state.overlapping = False

        machine.commit(state)

        assert state.needle.speed == -2.0

    def test_overlap_flag_not_written(self, machine, state):
        """The machine only reads the overlap flag."""
        state.overlapping = True
        machine.commit(state)
        assert state.overlapping is True


class TestSpeedCap:
    """Speed magnitude never exceeds the cap."""

    def test_approaching_cap_clamps(self, machine, state):
        state.needle.speed = 9.8
        state.overlapping = True

        machine.commit(state)

        assert state.needle.speed == pytest.approx(-10.0)

    @pytest.mark.parametrize("speed", [10.0, -10.0, 12.0])
    def test_at_or_above_cap_stays_at_cap(self, machine, state, speed):
        state.needle.speed = speed
        state.overlapping = True

        machine.commit(state)

        assert abs(state.needle.speed) == pytest.approx(10.0)
        assert math.copysign(1.0, state.needle.speed) == -math.copysign(1.0, speed)

    def test_many_hits_saturate(self, machine, state, config):
        state.overlapping = True
        for _ in range(100):
            machine.commit(state)
            assert abs(state.needle.speed) <= config.difficulty.speed_cap

        assert abs(state.needle.speed) == pytest.approx(config.difficulty.speed_cap)


class TestGameOverIsTerminal:
    """Nothing changes after the round ends."""

    def test_commits_after_game_over_ignored(self, machine, state):
        state.overlapping = True
        machine.commit(state)
        state.overlapping = False
        machine.commit(state)
        assert state.phase is GamePhase.GAME_OVER

        frozen = (state.score, state.needle.speed, state.target.angle)
        for overlapping in (True, False, True):
            state.overlapping = overlapping
            result = machine.commit(state)
            assert not result.accepted
            assert not result.game_over

        assert (state.score, state.needle.speed, state.target.angle) == frozen
        assert state.phase is GamePhase.GAME_OVER


class TestCommitSequences:
    """Invariants over random commit sequences."""

    @pytest.mark.parametrize("seed", range(20))
    def test_invariants(self, config, seed):
        rng = random.Random(seed)
        machine = GameStateMachine(config, seed=seed)
        state = GameState(needle=NeedleState(speed=config.difficulty.initial_speed))
        increment = config.difficulty.speed_increment
        cap = config.difficulty.speed_cap
        transitions = 0

        for _ in range(60):
            state.overlapping = rng.random() < 0.85
            was_playing = state.phase is GamePhase.PLAYING
            before_score = state.score
            before_speed = state.needle.speed

            machine.commit(state)

            assert state.score >= before_score
            if not was_playing:
                assert state.score == before_score
                assert state.needle.speed == before_speed
                continue

            # Sign flips exactly once per accepted commit
            assert math.copysign(1.0, state.needle.speed) == -math.copysign(1.0, before_speed)
            if state.score > before_score:
                assert state.score == before_score + 1
                expected = min(abs(before_speed) + increment, cap)
                assert abs(state.needle.speed) == pytest.approx(expected)
            else:
                assert abs(state.needle.speed) == abs(before_speed)
                assert state.phase is GamePhase.GAME_OVER
                transitions += 1

        assert transitions <= 1


class TestTargetRelocation:
    """Relocated targets are uniform in [0, 2pi)."""

    def test_range(self, config):
        machine = GameStateMachine(config, seed=7)
        angles = [machine.random_target_angle() for _ in range(2000)]

        assert all(0.0 <= a < 2.0 * math.pi for a in angles)
        # Roughly uniform: every quadrant is hit
        quadrants = {int(a // (math.pi / 2)) for a in angles}
        assert quadrants == {0, 1, 2, 3}

    def test_deterministic_with_seed(self, config):
        m1 = GameStateMachine(config, seed=3)
        m2 = GameStateMachine(config, seed=3)

        assert [m1.random_target_angle() for _ in range(10)] == \
            [m2.random_target_angle() for _ in range(10)]


class TestRotationController:
    """Per-tick integration."""

    def test_advance_subtracts_speed_dt(self, config):
        rotation = RotationController(config)
        needle = NeedleState(angle=1.0, speed=2.0)

        rotation.advance(needle, 0.25)

        assert needle.angle == pytest.approx(0.5)

    def test_negative_speed_turns_other_way(self, config):
        rotation = RotationController(config)
        needle = NeedleState(angle=0.0, speed=-1.0)

        rotation.advance(needle, 0.5)

        assert needle.angle == pytest.approx(0.5)

    def test_ramp_keeps_sign(self, config):
        rotation = RotationController(config)
        needle = NeedleState(speed=-3.0)

        rotation.ramp(needle)

        assert needle.speed == pytest.approx(-3.5)
