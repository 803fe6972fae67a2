import random

from verse_blocks.game import Cell, Piece, PieceType, Position, collides, empty_grid, rotate, stamp


def test_empty_grid_cells():
    grid = empty_grid()
    assert grid.size == 10
    for y in range(10):
        for x in range(10):
            assert grid.cell(x, y) == Cell()
    assert grid.complete_rows() == []
    assert grid.complete_cols() == []
    assert grid.filled_ratio() == 0.0


def test_collides_out_of_bounds():
    grid = empty_grid()
    i_piece = Piece(PieceType.I)
    assert not collides(grid, i_piece, Position(6, 0))
    assert collides(grid, i_piece, Position(7, 0))
    assert collides(grid, i_piece, Position(-1, 0))
    assert collides(grid, i_piece, Position(0, 10))
    vertical = rotate(i_piece)
    assert not collides(grid, vertical, Position(9, 6))
    assert collides(grid, vertical, Position(9, 7))


def test_collides_ignores_empty_shape_cells():
    grid = empty_grid()
    grid.filled[0, 0] = True
    # S = [[0,1,1],[1,1,0]]: its top-left shape cell is empty
    assert not collides(grid, Piece(PieceType.S), Position(0, 0))
    assert collides(grid, Piece(PieceType.O), Position(0, 0))


def test_stamp_returns_new_grid():
    grid = empty_grid()
    piece = Piece(PieceType.O)
    stamped = stamp(grid, piece, Position(3, 4))
    assert not grid.filled.any()
    assert stamped.cell(3, 4).filled
    assert stamped.cell(4, 5).color == piece.color
    assert stamped.filled.sum() == 4


def test_complete_lines_detected_independently():
    grid = empty_grid()
    grid.filled[2, :] = True
    grid.filled[:, 7] = True
    assert grid.complete_rows() == [2]
    assert grid.complete_cols() == [7]


def test_collides_matches_cellwise_definition():
    rng = random.Random(11)
    for _ in range(30):
        grid = empty_grid()
        for y in range(10):
            for x in range(10):
                grid.filled[y, x] = rng.random() < 0.4
        piece = Piece(rng.choice(list(PieceType)))
        for _ in range(rng.randrange(4)):
            piece = rotate(piece)
        for y in range(-2, 11):
            for x in range(-2, 11):
                expected = any(
                    not grid.is_inside(cx, cy) or grid.filled[cy, cx]
                    for cx, cy in piece.cells_at(x, y)
                )
                assert collides(grid, piece, Position(x, y)) == expected


def test_copy_is_independent():
    grid = empty_grid()
    grid.char[0, 0] = "A"
    grid.char_index[0, 0] = 0
    clone = grid.copy()
    assert clone == grid
    clone.collected[0, 0] = True
    assert not grid.cell(0, 0).collected
    assert clone != grid
