from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import GameSnapshot


BACKGROUND = (17, 24, 39)
CELL_BORDER = (55, 65, 81)
PANEL_TEXT = (230, 230, 230)


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: BACKGROUND,
        1: (239, 68, 68),    # I red
        2: (59, 130, 246),   # O blue
        3: (34, 197, 94),    # T green
        4: (234, 179, 8),    # Z yellow
        5: (168, 85, 247),   # S purple
        6: (99, 102, 241),   # L indigo
        7: (236, 72, 153),   # J pink
    }
    return palette.get(abs(v), (200, 200, 200))


@dataclass
class PanelLayout:
    """Screen rectangles of the interactive side-panel widgets."""

    restart_button: pygame.Rect
    speed_slider: pygame.Rect


class Renderer:
    def __init__(self, cell_size: int = 24, margin: int = 20, panel_width: int = 200) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, board_width: int, board_height: int) -> Tuple[int, int]:
        width = self.margin * 3 + board_width * self.cell_size + self.panel_width
        height = self.margin * 2 + board_height * self.cell_size
        return width, height

    def layout(self, board_width: int) -> PanelLayout:
        x0 = self.margin * 2 + board_width * self.cell_size
        return PanelLayout(
            restart_button=pygame.Rect(x0, self.margin + 60, 120, 32),
            speed_slider=pygame.Rect(x0, self.margin + 130, self.panel_width - 20, 12),
        )

    def _font_or_default(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cells_surface(self, state: np.ndarray, cell_size: int) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * cell_size, h * cell_size))
        surf.fill(CELL_BORDER)
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(x * cell_size, y * cell_size, cell_size - 1, cell_size - 1)
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), rect)
        return surf

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot, min_speed: int, max_speed: int) -> None:
        font = self._font_or_default()
        h, w = snapshot.board.shape
        screen.fill((31, 41, 55))
        screen.blit(self._cells_surface(snapshot.board, self.cell_size), (self.margin, self.margin))

        layout = self.layout(w)
        x0 = layout.restart_button.x
        screen.blit(font.render(f"Score: {snapshot.score}", True, PANEL_TEXT), (x0, self.margin))
        if snapshot.game_over:
            screen.blit(font.render("Game Over!", True, (239, 68, 68)), (x0, self.margin + 30))

        pygame.draw.rect(screen, (59, 130, 246), layout.restart_button, border_radius=4)
        label = font.render("Restart", True, PANEL_TEXT)
        screen.blit(label, label.get_rect(center=layout.restart_button.center))

        slider = layout.speed_slider
        screen.blit(font.render(f"Speed: {snapshot.speed} rows/s", True, PANEL_TEXT), (x0, slider.y - 24))
        pygame.draw.rect(screen, CELL_BORDER, slider, border_radius=6)
        span = max(1, max_speed - min_speed)
        knob_x = slider.x + (snapshot.speed - min_speed) * slider.width // span
        pygame.draw.circle(screen, PANEL_TEXT, (knob_x, slider.centery), 8)

        help_lines = [
            "Left/Right: move",
            "Up: rotate",
            "Down: soft drop",
            "Space: hard drop",
            "R: restart, Esc: quit",
        ]
        y_text = slider.bottom + 20
        for i, txt in enumerate(help_lines):
            screen.blit(font.render(txt, True, PANEL_TEXT), (x0, y_text + i * 20))

        if snapshot.next_preview is not None:
            preview_y = y_text + len(help_lines) * 20 + 20
            screen.blit(font.render("Next:", True, PANEL_TEXT), (x0, preview_y))
            preview = self._cells_surface(snapshot.next_preview, self.cell_size)
            screen.blit(preview, (x0, preview_y + 24))

        pygame.display.flip()
