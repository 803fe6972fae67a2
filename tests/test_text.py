import random
from collections import Counter

import pytest

from verse_blocks.game import distribute, empty_grid, max_per_line, unplaced_indices
from verse_blocks.game.grid import NO_CHAR


PHRASE = "The Lord is my shepherd"


def test_max_per_line():
    assert max_per_line(23, 10) == 6
    assert max_per_line(10, 10) == 3
    assert max_per_line(100, 10) == 21


def test_assigns_every_character_once():
    grid = distribute(empty_grid(), PHRASE, random.Random(1))
    assert grid.char_indices() == set(range(len(PHRASE)))
    for y in range(10):
        for x in range(10):
            cell = grid.cell(x, y)
            if cell.char_index is None:
                assert cell.char is None
                assert not cell.collected
            else:
                assert cell.char == PHRASE[cell.char_index]
                assert not cell.collected


def test_respects_per_line_cap():
    text = "x" * 40
    cap = max_per_line(len(text), 10)
    for seed in range(10):
        grid = distribute(empty_grid(), text, random.Random(seed))
        rows = Counter()
        cols = Counter()
        for y, x in zip(*(grid.char_index != NO_CHAR).nonzero()):
            rows[int(y)] += 1
            cols[int(x)] += 1
        assert max(rows.values()) <= cap
        assert max(cols.values()) <= cap


@pytest.mark.parametrize("length", [1, 7, 23, 40, 64, 99, 100])
def test_places_every_character_on_default_board(length):
    text = "".join(chr(ord("a") + i % 26) for i in range(length))
    for seed in range(5):
        grid = distribute(empty_grid(), text, random.Random(seed))
        assert unplaced_indices(grid, text) == []


def test_full_board_phrase():
    text = "ab" * 50
    grid = distribute(empty_grid(), text, random.Random(5))
    assert (grid.char_index != NO_CHAR).all()


def test_keeps_fill_and_wipes_old_characters():
    grid = empty_grid()
    grid.filled[4, :] = True
    grid.color[4, :] = "#fff"
    first = distribute(grid, "ABCDEFGH", random.Random(2))
    first.collected[first.char_index == 0] = True

    second = distribute(first, "xyz", random.Random(3))
    assert second.filled[4, :].all()
    assert second.color[4, 0] == "#fff"
    assert second.char_indices() == {0, 1, 2}
    assert not second.collected.any()
    assert set(c for c in second.char.ravel() if c is not None) <= set("xyz")
    # input left alone
    assert first.char_indices() == set(range(8))
    assert not grid.char_indices()


def test_same_seed_same_layout():
    a = distribute(empty_grid(), PHRASE, random.Random(42))
    b = distribute(empty_grid(), PHRASE, random.Random(42))
    assert a == b


def test_unplaced_indices_reports_missing_characters():
    grid = distribute(empty_grid(), "ABCD", random.Random(0))
    grid.char[grid.char_index == 2] = None
    grid.char_index[grid.char_index == 2] = NO_CHAR
    assert unplaced_indices(grid, "ABCD") == [2]


def test_walk_follows_shuffle_of_injected_rng():
    order = list(range(100))
    random.Random(17).shuffle(order)
    grid = distribute(empty_grid(), "Q", random.Random(17))
    first = order[0]
    assert grid.cell(first % 10, first // 10).char == "Q"
    assert grid.cell(first % 10, first // 10).char_index == 0
