from __future__ import annotations

from snakebyte.board import Board


def test_in_bounds_edges() -> None:
    board = Board(20)
    assert board.in_bounds((0, 0))
    assert board.in_bounds((19, 19))
    assert not board.in_bounds((20, 5))
    assert not board.in_bounds((5, -1))


def test_occupied_by_snake() -> None:
    snake = [(3, 3), (3, 4), (3, 5)]
    assert Board.occupied_by_snake(snake, (3, 4))
    assert not Board.occupied_by_snake(snake, (4, 4))


def test_free_cells_excludes_blocked() -> None:
    board = Board(2)
    assert board.cell_count == 4
    assert board.free_cells([(0, 0), (1, 1)]) == [(1, 0), (0, 1)]
