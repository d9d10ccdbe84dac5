from __future__ import annotations

import random

import pytest

from snakebyte.board import Board
from snakebyte.errors import PlacementExhausted
from snakebyte.placement import maybe_place_power_up, place_food
from snakebyte.powerups import PowerUp, PowerUpKind


def test_food_never_lands_on_snake_or_power_up() -> None:
    board = Board(4)
    snake = [(x, y) for x in range(4) for y in range(3)]
    power_up = PowerUp(cell=(0, 3), kind=PowerUpKind.SLOW_DOWN, spawned_at_ms=0)
    rng = random.Random(7)
    for _ in range(50):
        food = place_food(board, snake, power_up, rng)
        assert food in {(1, 3), (2, 3), (3, 3)}


def test_food_on_saturated_board_raises() -> None:
    board = Board(2)
    snake = [(0, 0), (1, 0), (1, 1), (0, 1)]
    with pytest.raises(PlacementExhausted):
        place_food(board, snake, None, random.Random(1))


def test_power_up_cell_counts_as_blocked() -> None:
    board = Board(2)
    snake = [(0, 0), (1, 0), (1, 1)]
    power_up = PowerUp(cell=(0, 1), kind=PowerUpKind.INVINCIBILITY, spawned_at_ms=0)
    with pytest.raises(PlacementExhausted):
        place_food(board, snake, power_up, random.Random(1))


def test_power_up_respects_probability() -> None:
    board = Board(10)
    rng = random.Random(3)
    assert maybe_place_power_up(board, [(5, 5)], (6, 5), 0.0, rng, 0) is None

    spawned = maybe_place_power_up(board, [(5, 5)], (6, 5), 1.0, rng, 1234)
    assert spawned is not None
    assert spawned.cell not in {(5, 5), (6, 5)}
    assert spawned.kind in set(PowerUpKind)
    assert spawned.spawned_at_ms == 1234


def test_power_up_skipped_when_board_is_full() -> None:
    board = Board(2)
    snake = [(0, 0), (1, 0), (1, 1)]
    assert maybe_place_power_up(board, snake, (0, 1), 1.0, random.Random(2), 0) is None
