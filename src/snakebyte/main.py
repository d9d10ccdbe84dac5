"""Executable entrypoint for SnakeByte."""

from __future__ import annotations

import logging
import os

from .game import SnakeGame
from .utils import DATA_DIR


def main() -> None:
    """Launch the game."""
    logging.basicConfig(
        level=os.environ.get("SNAKEBYTE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    SnakeGame(data_dir=DATA_DIR).run()


if __name__ == "__main__":
    main()
