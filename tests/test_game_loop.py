"""
Tests for the CoreGame per-tick loop.
"""

import math

import pytest

from needle_ring.core.config_loader import load_config
from needle_ring.core.game import CoreGame
from needle_ring.core.state import GamePhase


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def events():
    return {"scores": [], "game_over": 0}


@pytest.fixture
def game(config, events):
    def on_score_text(text):
        events["scores"].append(text)

    def on_game_over():
        events["game_over"] += 1

    return CoreGame(config=config, seed=42, on_score_text=on_score_text, on_game_over=on_game_over)


def _move_needle(game, angle):
    """Place the needle as if it had rotated there this tick."""
    game.state.needle.angle = angle
    game.physics.set_angles(angle, game.state.target.angle)


class TestInitialState:
    """Fresh game."""

    def test_starts_playing(self, game, config):
        assert game.state.phase is GamePhase.PLAYING
        assert game.score == 0
        assert game.score_text == "Score: 0"
        assert game.state.needle.speed == config.difficulty.initial_speed
        assert not game.state.overlapping

    def test_first_tick_reports_overlap(self, game):
        """Needle and target both start pointing up."""
        result = game.tick()

        assert result.overlapping
        assert game.state.overlapping


class TestTickOrdering:
    """Physics, then commit, then rotation."""

    def test_rotation_advances_each_tick(self, game, config):
        dt = config.physics.dt
        game.tick()
        game.tick()

        assert game.state.needle.angle == pytest.approx(-2 * config.difficulty.initial_speed * dt)
        assert game.physics.needle.angle == pytest.approx(game.state.needle.angle)

    def test_commit_uses_new_direction_same_tick(self, game, config):
        dt = config.physics.dt
        game.tick()
        angle_before = game.state.needle.angle

        game.tick(commit=True)

        # Reversed to -1.5 then advanced: angle grows by 1.5 * dt
        assert game.state.needle.speed == pytest.approx(-1.5)
        assert game.state.needle.angle == pytest.approx(angle_before + 1.5 * dt)

    def test_score_and_relocate(self, game, events):
        game.tick()
        old_target = game.state.target.angle

        result = game.tick(commit=True)

        assert result.commit is not None and result.commit.scored
        assert game.score == 1
        assert events["scores"] == ["Score: 1"]
        assert game.state.target.angle != old_target
        assert game.physics.target.angle == pytest.approx(game.state.target.angle)
        assert 0.0 <= game.state.target.angle < 2.0 * math.pi

    def test_commit_without_overlap_ends_game(self, game, events):
        _move_needle(game, math.pi)
        game.tick()

        result = game.tick(commit=True)

        assert result.phase is GamePhase.GAME_OVER
        assert game.score == 0
        assert events["game_over"] == 1
        assert events["scores"] == []

    def test_separation_processed_before_commit(self, game, events):
        """Overlap ending in the same tick as the commit counts as a miss."""
        game.tick()
        assert game.state.overlapping

        _move_needle(game, math.pi)
        result = game.tick(commit=True)

        assert not result.overlapping
        assert game.is_over
        assert game.score == 0
        assert events["game_over"] == 1

    def test_overlap_beginning_same_tick_counts(self, game):
        """A begin delivered this tick is seen by this tick's commit."""
        _move_needle(game, math.pi)
        game.tick()
        assert not game.state.overlapping

        _move_needle(game, 0.0)
        result = game.tick(commit=True)

        assert result.overlapping
        assert game.score == 1


class TestGameOver:
    """Terminal phase freezes the round."""

    def test_frozen_after_game_over(self, game, events):
        _move_needle(game, math.pi)
        game.tick(commit=True)
        assert game.is_over

        frozen = (
            game.score,
            game.state.needle.speed,
            game.state.needle.angle,
            game.state.target.angle,
        )
        for _ in range(10):
            result = game.tick(commit=True)
            assert not result.commit.accepted

        assert (
            game.score,
            game.state.needle.speed,
            game.state.needle.angle,
            game.state.target.angle,
        ) == frozen
        assert events["game_over"] == 1


def _angular_distance(a, b):
    return abs((a - b + math.pi) % (2.0 * math.pi) - math.pi)


class TestPlayedRound:
    """Commit whenever the needle is well inside the target, for several hits."""

    def test_chasing_target_scores(self, game, config):
        inside = math.radians(config.target.half_angle_deg) - 0.1
        hits = 0
        for _ in range(20000):
            # The step at the start of the tick sees the current angles
            distance = _angular_distance(game.state.needle.angle, game.state.target.angle)
            commit = distance < inside and hits < 5
            result = game.tick(commit=commit)
            if result.commit is not None and result.commit.scored:
                hits += 1
            if hits == 5:
                break

        assert hits == 5
        assert game.score == 5
        assert game.state.phase is GamePhase.PLAYING
        assert abs(game.state.needle.speed) == pytest.approx(
            config.difficulty.initial_speed + 5 * config.difficulty.speed_increment
        )


class TestRenderData:
    """Data handed to the renderer."""

    def test_render_data_fields(self, game):
        game.tick()
        data = game.get_render_data()

        assert data["needle_vertices"].shape == (4, 2)
        assert data["target_vertices"].shape == (12, 2)
        assert data["needle_triangles"].shape == (2, 3)
        assert data["target_triangles"].shape == (10, 3)
        assert data["score_text"] == "Score: 0"
        assert data["game_over"] is False
        assert data["ring_inner_radius"] == 45.0
        assert data["ring_outer_radius"] == 50.0
