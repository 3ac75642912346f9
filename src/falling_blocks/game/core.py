from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, Tuple

import numpy as np

from .grid import Board, PlacementResult, collides, composite, create_board
from .pieces import MAX_SHAPE_SIZE, TETROMINOES, ActivePiece, ShapeTemplate, preview_grid, validate_catalog
from .rules import ScoringRules, SpeedRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    catalog: Sequence[ShapeTemplate] = TETROMINOES
    repeat_ms: int = 100
    preview_size: int = MAX_SHAPE_SIZE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")
        self.catalog = validate_catalog(self.catalog, self.width)
        if self.repeat_ms <= 0:
            raise ValueError("repeat_ms must be positive")
        if self.preview_size < MAX_SHAPE_SIZE:
            raise ValueError(f"preview_size must be at least {MAX_SHAPE_SIZE}")


@dataclass
class GameSnapshot:
    board: np.ndarray
    next_preview: Optional[np.ndarray]
    score: int
    speed: int
    game_over: bool


class FallingBlocksGame:
    """Engine for the falling-block game.

    Owns the landed board, the active piece, the one-piece lookahead, score,
    gravity speed and the game-over flag. Every public operation runs to
    completion and is a silent no-op once the game is over.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        speed_rules: Optional[SpeedRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.speed_rules = speed_rules or SpeedRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.board: Board = create_board(self.config.height, self.config.width)
        self.active: Optional[ActivePiece] = None
        self.next: Optional[ShapeTemplate] = None
        self.score = 0
        self.speed = self.speed_rules.default_speed
        self.game_over = False
        self.lines_cleared_total = 0
        self.pieces_spawned = 0
        self.reset()

    def reset(self) -> None:
        self.board = create_board(self.config.height, self.config.width)
        self.active = None
        self.next = None
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_spawned = 0
        self.speed = self.speed_rules.default_speed
        self.game_over = False
        logger.info("new game on a %dx%d board", self.board.width, self.board.height)
        self.spawn()

    def _random_template(self) -> ShapeTemplate:
        catalog = self.config.catalog
        return catalog[self.rng.randrange(len(catalog))]

    def spawn(self) -> None:
        if self.game_over:
            return
        if self.next is None:
            template = self._random_template()
            self.next = self._random_template()
        else:
            template = self.next
            self.next = self._random_template()
        self.active = ActivePiece.spawn(template, self.board.width)
        self.pieces_spawned += 1
        logger.debug("spawned %s at x=%d, next is %s", template.name, self.active.x, self.next.name)
        # Only overlap with landed cells ends the game; poking above row 0 does not.
        if collides(self.active, self.board):
            self.game_over = True
            logger.info("game over after %d pieces, score %d", self.pieces_spawned, self.score)

    def move(self, dx: int, dy: int, rotate: bool = False) -> bool:
        """Try to translate (and optionally rotate) the active piece as one candidate.

        Returns True when the candidate was committed. A rejected downward
        move lands the piece instead; other rejections leave it untouched.
        """
        if self.game_over or self.active is None:
            return False
        candidate = self.active.moved(dx, dy)
        if rotate:
            candidate = candidate.rotated()
        if not collides(candidate, self.board):
            self.active = candidate
            return True
        if dy > 0:
            self._merge()
        return False

    def rotate(self) -> bool:
        return self.move(0, 0, rotate=True)

    def tick(self) -> bool:
        return self.move(0, 1)

    def hard_drop(self) -> int:
        """Relocate the active piece to its lowest valid row without landing it.

        The next tick finds the piece unable to fall and merges it.
        Returns the number of rows travelled.
        """
        if self.game_over or self.active is None:
            return 0
        landing = self.active
        while True:
            probe = landing.moved(0, 1)
            if collides(probe, self.board):
                break
            landing = probe
        rows = landing.y - self.active.y
        self.active = landing
        return rows

    def _merge(self) -> PlacementResult:
        assert self.active is not None
        piece = self.active
        self.active = None
        result = self.board.merge(piece)
        lines = result.lines_cleared
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)
        logger.debug("landed %s at (%d, %d)", piece.name, piece.x, piece.y)
        if lines:
            logger.info("cleared %d line(s), score %d", lines, self.score)
        self.spawn()
        return result

    def set_speed(self, speed: int) -> int:
        self.speed = self.speed_rules.clamp(speed)
        logger.debug("speed set to %d", self.speed)
        return self.speed

    @property
    def gravity_interval_ms(self) -> float:
        return self.speed_rules.gravity_interval_ms(self.speed)

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, {}

        score_before = self.score
        if action == Action.LEFT:
            self.move(-1, 0)
        elif action == Action.RIGHT:
            self.move(1, 0)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.move(0, 1)
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        info = {
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_spawned": self.pieces_spawned,
        }
        return self.get_state(), self.score - score_before, self.game_over, info

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board for rendering
        return composite(self.board, self.active)

    def next_preview(self) -> Optional[np.ndarray]:
        if self.next is None:
            return None
        return preview_grid(self.next, self.config.preview_size)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=self.get_state(),
            next_preview=self.next_preview(),
            score=self.score,
            speed=self.speed,
            game_over=self.game_over,
        )
