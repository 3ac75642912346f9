"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: Landed terrain, line clearing and the collision oracle
- ShapeTemplate / ActivePiece: Piece catalog and the falling piece
- ScoringRules / SpeedRules: Score and gravity-speed bookkeeping
- FallingBlocksGame: Engine state machine (spawn, move, rotate, drop, tick)
"""

from .grid import Board, PlacementResult, collides, composite, create_board
from .pieces import ActivePiece, ShapeTemplate, TetrominoType, TETROMINOES, preview_grid, rotate_cw
from .rules import ScoringRules, SpeedRules
from .core import Action, FallingBlocksGame, GameConfig, GameSnapshot

__all__ = [
    "Board",
    "PlacementResult",
    "collides",
    "composite",
    "create_board",
    "ActivePiece",
    "ShapeTemplate",
    "TetrominoType",
    "TETROMINOES",
    "preview_grid",
    "rotate_cw",
    "ScoringRules",
    "SpeedRules",
    "Action",
    "FallingBlocksGame",
    "GameConfig",
    "GameSnapshot",
]
