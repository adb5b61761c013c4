"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class RingConfig:
    """Background ring drawn under the moving pieces."""
    inner_radius: float
    outer_radius: float
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class SegmentConfig:
    """Geometry of one annular wedge (needle or target zone)."""
    inner_radius: float
    outer_radius: float
    half_angle_deg: float
    resolution: int
    color: Tuple[int, int, int]

    @property
    def half_angle(self) -> float:
        """Half-angle in radians."""
        return math.radians(self.half_angle_deg)


@dataclass(frozen=True)
class DifficultyConfig:
    """Needle speed and ramp parameters."""
    initial_speed: float    # Signed, rad/s
    speed_increment: float  # Added to |speed| per successful score
    speed_cap: float        # |speed| never exceeds this


@dataclass(frozen=True)
class PhysicsConfig:
    """Collision backend stepping."""
    dt: float
    substeps: int


@dataclass(frozen=True)
class DisplayConfig:
    """Window and drawing parameters."""
    scale: float
    window_width: int
    window_height: int
    fullscreen_width: int
    fullscreen_height: int
    background_color: Tuple[int, int, int]
    text_color: Tuple[int, int, int]
    score_font_size: int
    game_over_font_size: int

    @property
    def fullscreen_size(self) -> Tuple[int, int]:
        return (self.fullscreen_width, self.fullscreen_height)


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable; the game reads them once at startup.
    """
    ring: RingConfig
    needle: SegmentConfig
    target: SegmentConfig
    difficulty: DifficultyConfig
    physics: PhysicsConfig
    display: DisplayConfig


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    color = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    if any(c < 0 or c > 255 for c in color):
        raise ValueError(f"Color components must be in [0, 255], got {color_data}")
    return color


def _parse_segment(segment_data: dict) -> SegmentConfig:
    """Parse a needle/target wedge section from YAML."""
    return SegmentConfig(
        inner_radius=float(segment_data["inner_radius"]),
        outer_radius=float(segment_data["outer_radius"]),
        half_angle_deg=float(segment_data["half_angle_deg"]),
        resolution=int(segment_data.get("resolution", 1)),
        color=_parse_color(segment_data["color"])
    )


def _validate_segment(name: str, segment: SegmentConfig) -> None:
    if segment.inner_radius < 0:
        raise ValueError(f"{name}.inner_radius must be >= 0, got {segment.inner_radius}")
    if segment.outer_radius <= segment.inner_radius:
        raise ValueError(
            f"{name}.outer_radius ({segment.outer_radius}) must exceed "
            f"inner_radius ({segment.inner_radius})"
        )
    if segment.half_angle_deg <= 0:
        raise ValueError(f"{name}.half_angle_deg must be > 0, got {segment.half_angle_deg}")
    if segment.resolution < 1:
        raise ValueError(f"{name}.resolution must be >= 1, got {segment.resolution}")


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.ring.outer_radius <= config.ring.inner_radius:
        raise ValueError(
            f"ring.outer_radius ({config.ring.outer_radius}) must exceed "
            f"inner_radius ({config.ring.inner_radius})"
        )

    _validate_segment("needle", config.needle)
    _validate_segment("target", config.target)

    difficulty = config.difficulty
    if difficulty.speed_increment <= 0:
        raise ValueError(f"speed_increment must be > 0, got {difficulty.speed_increment}")
    if difficulty.speed_cap <= 0:
        raise ValueError(f"speed_cap must be > 0, got {difficulty.speed_cap}")
    if difficulty.initial_speed == 0:
        raise ValueError("initial_speed must be nonzero")
    if abs(difficulty.initial_speed) > difficulty.speed_cap:
        raise ValueError(
            f"initial_speed ({difficulty.initial_speed}) exceeds "
            f"speed_cap ({difficulty.speed_cap})"
        )

    if config.physics.dt <= 0:
        raise ValueError(f"physics.dt must be > 0, got {config.physics.dt}")
    if config.physics.substeps < 1:
        raise ValueError(f"physics.substeps must be >= 1, got {config.physics.substeps}")

    if config.display.scale <= 0:
        raise ValueError(f"display.scale must be > 0, got {config.display.scale}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    ring_data = raw["ring"]
    ring = RingConfig(
        inner_radius=float(ring_data["inner_radius"]),
        outer_radius=float(ring_data["outer_radius"]),
        color=_parse_color(ring_data.get("color", [0, 0, 0]))
    )

    needle = _parse_segment(raw["needle"])
    target = _parse_segment(raw["target"])

    difficulty_data = raw["difficulty"]
    difficulty = DifficultyConfig(
        initial_speed=float(difficulty_data["initial_speed"]),
        speed_increment=float(difficulty_data["speed_increment"]),
        speed_cap=float(difficulty_data["speed_cap"])
    )

    physics_data = raw.get("physics", {})
    physics = PhysicsConfig(
        dt=float(physics_data.get("dt", 1.0 / 60.0)),
        substeps=int(physics_data.get("substeps", 1))
    )

    # Display section is optional; headless use never reads it
    display_data = raw.get("display", {})
    display = DisplayConfig(
        scale=float(display_data.get("scale", 6.0)),
        window_width=int(display_data.get("window_width", 1280)),
        window_height=int(display_data.get("window_height", 720)),
        fullscreen_width=int(display_data.get("fullscreen_width", 1920)),
        fullscreen_height=int(display_data.get("fullscreen_height", 1080)),
        background_color=_parse_color(display_data.get("background_color", [40, 40, 48])),
        text_color=_parse_color(display_data.get("text_color", [255, 255, 255])),
        score_font_size=int(display_data.get("score_font_size", 36)),
        game_over_font_size=int(display_data.get("game_over_font_size", 100))
    )

    config = GameConfig(
        ring=ring,
        needle=needle,
        target=target,
        difficulty=difficulty,
        physics=physics,
        display=display
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
