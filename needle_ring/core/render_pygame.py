"""
Pygame Renderer
===============

Draws the ring, target zone, needle, score text and the game-over message.
Supports both display mode (human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from needle_ring.core.config_loader import GameConfig, get_config


class RingRenderer:
    """
    Renderer for the needle ring.

    World space is centred on the screen with +Y up; every world length is
    multiplied by ``display.scale``.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for RingRenderer")

        if config is None:
            config = get_config()

        self._config = config
        self._display = config.display
        self._scale = config.display.scale

        pygame.font.init()
        self._font_score = pygame.font.Font(None, config.display.score_font_size)
        self._font_game_over = pygame.font.Font(None, config.display.game_over_font_size)

        self._ring_color = config.ring.color
        self._needle_color = config.needle.color
        self._target_color = config.target.color

    def render(self, render_data: Dict[str, Any], width: int, height: int) -> np.ndarray:
        """
        Render to RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface((width, height))
        self.render_to_surface(surface, render_data)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def render_to_surface(self, surface: pygame.Surface, render_data: Dict[str, Any]) -> None:
        """Render game state to a pygame surface."""
        width, height = surface.get_size()
        center = (width / 2, height / 2)

        surface.fill(self._display.background_color)

        self._draw_ring(surface, render_data, center)

        # Target below needle
        self._draw_segment(
            surface, render_data["target_vertices"], render_data["target_triangles"],
            self._target_color, center
        )
        self._draw_segment(
            surface, render_data["needle_vertices"], render_data["needle_triangles"],
            self._needle_color, center
        )

        score = self._font_score.render(render_data["score_text"], True, self._display.text_color)
        surface.blit(score, (10, 10))

        if render_data["game_over"]:
            self._draw_game_over(surface, center)

    def _draw_ring(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any],
        center: Tuple[float, float]
    ) -> None:
        """Draw the background annulus."""
        outer = render_data["ring_outer_radius"] * self._scale
        inner = render_data["ring_inner_radius"] * self._scale
        thickness = max(1, int(round(outer - inner)))
        pygame.draw.circle(surface, self._ring_color, _int_point(center), int(round(outer)), thickness)

    def _draw_segment(
        self,
        surface: pygame.Surface,
        vertices: np.ndarray,
        triangles: np.ndarray,
        color: Tuple[int, int, int],
        center: Tuple[float, float]
    ) -> None:
        """Fill every triangle of a world-space segment."""
        points = [self._world_to_screen(v, center) for v in vertices]
        for tri in triangles:
            pygame.draw.polygon(surface, color, [points[i] for i in tri])

    def _draw_game_over(self, surface: pygame.Surface, center: Tuple[float, float]) -> None:
        text = self._font_game_over.render("Game Over", True, self._display.text_color)
        rect = text.get_rect(center=_int_point(center))
        surface.blit(text, rect)

    def _world_to_screen(self, point: np.ndarray, center: Tuple[float, float]) -> Tuple[int, int]:
        """Convert world coordinates to screen (Y is flipped)."""
        return (
            int(round(center[0] + point[0] * self._scale)),
            int(round(center[1] - point[1] * self._scale))
        )


def _int_point(point: Tuple[float, float]) -> Tuple[int, int]:
    return (int(round(point[0])), int(round(point[1])))
