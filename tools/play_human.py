"""
Human Play Mode
================

Play Needle Ring interactively.

Controls:
    - Space: Reverse the needle (scores if it overlaps the target)
    - F12: Toggle fullscreen
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from needle_ring.core.config_loader import load_config, GameConfig
from needle_ring.core.game import CoreGame
from needle_ring.core.render_pygame import RingRenderer


class HumanPlayer:
    """
    Human-playable needle ring with a fixed-timestep game loop.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._window_size = (
            window_width or config.display.window_width,
            window_height or config.display.window_height
        )
        self._target_fps = target_fps

        self._game = CoreGame(
            config=config,
            seed=seed,
            on_score_text=self._on_score_text,
            on_game_over=self._on_game_over
        )

        # Initialize pygame
        pygame.init()
        self._screen = pygame.display.set_mode(self._window_size)
        pygame.display.set_caption("Needle Ring")
        self._clock = pygame.time.Clock()
        self._fullscreen = False

        self._renderer = RingRenderer(config)

        # State
        self._running = True
        self._commit_pending = False

        # Physics timing
        self._physics_dt = config.physics.dt
        self._physics_accumulator = 0.0
        self._last_time = time.time()

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Needle Ring ===")
        print("Space when the needle is on the red zone, F12 fullscreen, ESC to quit")
        print()

        while self._running:
            self._handle_events()
            self._update()
            self._render()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_F12:
                    self._toggle_fullscreen()
                elif event.key == pygame.K_SPACE:
                    # KEYDOWN fires once per press, so a held key commits once
                    self._commit_pending = True

    def _update(self) -> None:
        """Run as many fixed ticks as real time allows."""
        current_time = time.time()
        self._physics_accumulator += current_time - self._last_time
        self._last_time = current_time

        # Limit to prevent spiral
        if self._physics_accumulator > 0.2:
            self._physics_accumulator = 0.2

        while self._physics_accumulator >= self._physics_dt:
            self._physics_accumulator -= self._physics_dt
            self._game.tick(commit=self._commit_pending, dt=self._physics_dt)
            self._commit_pending = False

    def _toggle_fullscreen(self) -> None:
        """Switch between windowed and fullscreen."""
        self._fullscreen = not self._fullscreen
        if self._fullscreen:
            self._screen = pygame.display.set_mode(
                self._config.display.fullscreen_size, pygame.FULLSCREEN
            )
        else:
            self._screen = pygame.display.set_mode(self._window_size)

    def _on_score_text(self, text: str) -> None:
        print(f"  {text}")

    def _on_game_over(self) -> None:
        print(f"\nGAME OVER - Score: {self._game.score}")

    def _render(self) -> None:
        """Render the game."""
        self._renderer.render_to_surface(self._screen, self._game.get_render_data())
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Needle Ring interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: from config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: from config)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (e.g. DEBUG, INFO)")

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = load_config()
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
