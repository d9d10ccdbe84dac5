"""Fixed-size grid model with pure coordinate and occupancy queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .utils import GRID_CELLS, Cell


@dataclass(frozen=True, slots=True)
class Board:
    """Square playfield of ``size`` x ``size`` cells."""

    size: int = GRID_CELLS

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"board size must be positive, got {self.size}")

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        """Check if a cell is inside the playfield."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    @staticmethod
    def occupied_by_snake(snake: Sequence[Cell], cell: Cell) -> bool:
        """Return whether any snake segment sits on cell."""
        return any(segment == cell for segment in snake)

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield (x, y)

    def free_cells(self, blocked: Iterable[Cell]) -> list[Cell]:
        """Return all cells not present in blocked."""
        blocked_set = set(blocked)
        return [cell for cell in self.cells() if cell not in blocked_set]
