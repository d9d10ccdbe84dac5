"""Random, non-colliding placement of food and power-ups."""

from __future__ import annotations

from typing import Iterable, Sequence
import logging
import random

from .board import Board
from .errors import PlacementExhausted
from .powerups import PowerUp, PowerUpKind
from .utils import Cell

logger = logging.getLogger(__name__)

# rejected samples per board cell before switching to the explicit free list
SAMPLES_PER_CELL = 4


def random_open_cell(board: Board, blocked: Iterable[Cell], rng: random.Random) -> Cell:
    """Return a uniformly random cell not in blocked.

    Raises PlacementExhausted when every cell is blocked.
    """
    blocked_set = set(blocked)
    if board.cell_count - len(blocked_set) <= 0:
        raise PlacementExhausted(f"no free cell on a {board.size}x{board.size} board")

    for _ in range(board.cell_count * SAMPLES_PER_CELL):
        candidate = (rng.randrange(board.size), rng.randrange(board.size))
        if candidate not in blocked_set:
            return candidate

    free = board.free_cells(blocked_set)
    if not free:
        raise PlacementExhausted(f"no free cell on a {board.size}x{board.size} board")
    logger.debug("Sampling gave up, picking from %d free cells", len(free))
    return rng.choice(free)


def place_food(
    board: Board,
    snake: Sequence[Cell],
    power_up: PowerUp | None,
    rng: random.Random,
) -> Cell:
    """Pick a food cell clear of the snake and the current power-up."""
    blocked = set(snake)
    if power_up is not None:
        blocked.add(power_up.cell)
    return random_open_cell(board, blocked, rng)


def maybe_place_power_up(
    board: Board,
    snake: Sequence[Cell],
    food: Cell | None,
    probability: float,
    rng: random.Random,
    now_ms: float,
) -> PowerUp | None:
    """Roll for a new power-up; a returned one replaces whatever was on the board."""
    if rng.random() >= probability:
        return None

    kind = rng.choice(list(PowerUpKind))
    blocked = set(snake)
    if food is not None:
        blocked.add(food)
    try:
        cell = random_open_cell(board, blocked, rng)
    except PlacementExhausted:
        logger.debug("No room for a %s power-up, skipping spawn", kind.value)
        return None
    return PowerUp(cell=cell, kind=kind, spawned_at_ms=now_ms)
