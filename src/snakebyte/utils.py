"""Shared constants and utility helpers for SnakeByte."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Tuple
import json

GRID_CELLS = 20
CELL_SIZE = 20
HUD_HEIGHT = 64
FPS = 60
FOOD_POINTS = 10

SCREEN_WIDTH = GRID_CELLS * CELL_SIZE
SCREEN_HEIGHT = GRID_CELLS * CELL_SIZE + HUD_HEIGHT

BG_COLOR = (0, 0, 0)
GRID_COLOR = (10, 26, 10)
TEXT_COLOR = (51, 255, 51)
SHADOW_COLOR = (8, 40, 8)

GREEN = (51, 255, 51)
DARK_GREEN = (34, 204, 34)
RED = (255, 0, 0)
PINK = (255, 102, 102)
MAGENTA = (255, 0, 255)
DARK_MAGENTA = (204, 0, 204)
YELLOW = (255, 255, 0)
CYAN = (0, 255, 255)
ORANGE = (255, 165, 0)

Direction = Tuple[int, int]
Cell = Tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
DIRECTIONS: tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)

DATA_DIR = Path(".snakebyte")
SETTINGS_FILE = DATA_DIR / "settings.json"
HIGH_SCORE_FILE = DATA_DIR / "highscore.json"


def is_opposite(a: Direction, b: Direction) -> bool:
    """Return whether two directions are opposite vectors."""
    return a[0] == -b[0] and a[1] == -b[1]


def add_direction(cell: Cell, direction: Direction) -> Cell:
    """Move a cell one step along direction."""
    return (cell[0] + direction[0], cell[1] + direction[1])


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError):
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
