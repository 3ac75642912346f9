from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional

import pygame

from falling_blocks.game import FallingBlocksGame, GameConfig
from .renderer import Renderer
from .timers import KeyRepeater, RepeatTimer


def repeating_moves(game: FallingBlocksGame) -> Dict[int, Callable[[], object]]:
    return {
        pygame.K_LEFT: lambda: game.move(-1, 0),
        pygame.K_RIGHT: lambda: game.move(1, 0),
        pygame.K_DOWN: lambda: game.move(0, 1),
    }


def speed_at(slider: pygame.Rect, x: int, min_speed: int, max_speed: int) -> int:
    frac = (x - slider.x) / max(1, slider.width)
    return min_speed + round(min(1.0, max(0.0, frac)) * (max_speed - min_speed))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--cell-size", type=int, default=24)
    p.add_argument("--speed", type=int, default=None, help="starting gravity speed in rows per second")
    p.add_argument("--log-level", default="WARNING")
    return p


def run(config: Optional[GameConfig] = None, cell_size: int = 24, speed: Optional[int] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlocksGame(config)
        if speed is not None:
            game.set_speed(speed)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.board.width, game.board.height))
        pygame.display.set_caption("Falling Blocks")
        layout = renderer.layout(game.board.width)
        rules = game.speed_rules

        gravity = RepeatTimer(game.gravity_interval_ms, game.tick, clock=pygame.time.get_ticks)
        gravity.start()
        repeater = KeyRepeater(game.config.repeat_ms, clock=pygame.time.get_ticks)
        moves = repeating_moves(game)

        def change_speed(value: int) -> None:
            if value != game.speed:
                game.set_speed(value)
                gravity.rearm(game.gravity_interval_ms)

        def restart() -> None:
            repeater.stop()
            game.reset()
            gravity.rearm(game.gravity_interval_ms)
            gravity.start()

        dragging = False
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in moves:
                        repeater.press(event.key, moves[event.key])
                    elif event.key == pygame.K_UP:
                        game.rotate()
                    elif event.key == pygame.K_SPACE:
                        game.hard_drop()
                    elif event.key == pygame.K_r:
                        restart()
                elif event.type == pygame.KEYUP:
                    repeater.release(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if layout.restart_button.collidepoint(event.pos):
                        restart()
                    elif layout.speed_slider.inflate(0, 16).collidepoint(event.pos):
                        dragging = True
                        change_speed(speed_at(layout.speed_slider, event.pos[0], rules.min_speed, rules.max_speed))
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    dragging = False
                elif event.type == pygame.MOUSEMOTION and dragging:
                    change_speed(speed_at(layout.speed_slider, event.pos[0], rules.min_speed, rules.max_speed))

            repeater.poll()
            gravity.poll()

            renderer.draw(screen, game.snapshot(), rules.min_speed, rules.max_speed)
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = GameConfig(width=args.width, height=args.height, random_seed=args.seed)
    run(config, cell_size=args.cell_size, speed=args.speed)


if __name__ == "__main__":  # pragma: no cover
    main()
