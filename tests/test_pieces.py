import random

import numpy as np
import pytest

from falling_blocks.game import ActivePiece, FallingBlocksGame, GameConfig, ShapeTemplate, TETROMINOES, preview_grid, rotate_cw


def test_default_catalog_has_seven_distinct_colors():
    assert [t.name for t in TETROMINOES] == ["I", "O", "T", "Z", "S", "L", "J"]
    assert sorted(t.color for t in TETROMINOES) == list(range(1, 8))


def test_rotate_cw_matches_index_formula():
    shape = np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8)
    rotated = rotate_cw(shape)
    r_count, c_count = shape.shape
    assert rotated.shape == (c_count, r_count)
    for r in range(r_count):
        for c in range(c_count):
            assert rotated[c, r_count - 1 - r] == shape[r, c]
    np.testing.assert_array_equal(rotated, [[0, 1], [1, 1], [0, 1]])


@pytest.mark.parametrize("template", TETROMINOES, ids=lambda t: t.name)
def test_four_rotations_restore_shape(template):
    piece = ActivePiece.spawn(template, 10)
    turned = piece
    for _ in range(4):
        turned = turned.rotated()
    np.testing.assert_array_equal(turned.shape, template.cells)


def test_spawn_centres_piece_on_top_row():
    i_piece = ActivePiece.spawn(TETROMINOES[0], 10)
    assert (i_piece.x, i_piece.y) == (3, 0)
    t_piece = ActivePiece.spawn(TETROMINOES[2], 10)
    assert (t_piece.x, t_piece.y) == (4, 0)
    o_piece = ActivePiece.spawn(TETROMINOES[1], 7)
    assert o_piece.x == 2


def test_active_shape_is_not_aliased_to_template():
    template = TETROMINOES[2]
    piece = ActivePiece.spawn(template, 10)
    piece.shape[0, 0] = 0
    assert template.cells[0, 0] == 1


def test_template_cells_are_read_only():
    with pytest.raises(ValueError):
        TETROMINOES[0].cells[0, 0] = 0


@pytest.mark.parametrize(
    "cells,color",
    [
        ([[0, 0], [0, 0]], 1),
        ([[1, 1, 1, 1, 1]], 1),
        ([1, 1], 1),
        ([[1]], 0),
    ],
)
def test_malformed_templates_fail_fast(cells, color):
    with pytest.raises(ValueError):
        ShapeTemplate(name="bad", cells=np.array(cells), color=color)


def test_color_ids_must_fit_the_board_dtype():
    with pytest.raises(ValueError):
        ShapeTemplate(name="I", cells=[[1, 1, 1, 1]], color=200)
    with pytest.raises(ValueError):
        ShapeTemplate(name="I", cells=[[1, 1, 1, 1]], color=128)


def test_largest_color_id_survives_merge_and_preview():
    template = ShapeTemplate(name="I", cells=[[1, 1, 1, 1]], color=127)
    game = FallingBlocksGame(GameConfig(catalog=(template,)), rng=random.Random(0))
    game.hard_drop()
    game.tick()
    np.testing.assert_array_equal(game.board.grid[19, 3:7], [127] * 4)
    np.testing.assert_array_equal(game.next_preview()[1], [127] * 4)


def test_config_rejects_empty_catalog_and_bad_sizes():
    with pytest.raises(ValueError):
        GameConfig(catalog=())
    with pytest.raises(ValueError):
        GameConfig(width=0)
    with pytest.raises(ValueError):
        GameConfig(width=3)  # the I piece no longer fits


def test_preview_grid_centres_template():
    grid = preview_grid(TETROMINOES[0])
    np.testing.assert_array_equal(grid[1], [1, 1, 1, 1])
    assert grid.sum() == 4
    grid = preview_grid(TETROMINOES[2])
    np.testing.assert_array_equal(grid[1:3, 0:3], np.array([[3, 3, 3], [0, 3, 0]]))
    assert np.count_nonzero(grid) == 4
