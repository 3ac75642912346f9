import random

from falling_blocks.game import FallingBlocksGame, GameConfig, TETROMINOES

I_ONLY = (TETROMINOES[0],)


def make_game(width=10, height=20, catalog=TETROMINOES, seed=0):
    config = GameConfig(width=width, height=height, catalog=catalog)
    return FallingBlocksGame(config, rng=random.Random(seed))


def land(game):
    """Tick until the active piece merges and the next one spawns."""
    spawned = game.pieces_spawned
    while game.pieces_spawned == spawned and not game.game_over:
        game.tick()


def fill_row(game, y, color=9, skip=()):
    for x in range(game.board.width):
        if x not in skip:
            game.board.grid[y, x] = color
