"""High-score persistence backed by a small JSON file."""

from __future__ import annotations

from pathlib import Path
import json

from .errors import PersistenceUnavailable
from .utils import HIGH_SCORE_FILE, save_json


class JsonHighScoreStore:
    """Reads and writes ``{"high_score": N}``; any I/O trouble becomes PersistenceUnavailable."""

    def __init__(self, path: Path = HIGH_SCORE_FILE) -> None:
        self.path = path

    def load_high_score(self) -> int | None:
        """Return the saved high score, or None when nothing usable is stored."""
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            raise PersistenceUnavailable(f"cannot read {self.path}: {exc}") from exc

        value = payload.get("high_score") if isinstance(payload, dict) else None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    def save_high_score(self, value: int) -> None:
        """Store a new high score."""
        try:
            save_json(self.path, {"high_score": int(value)})
        except OSError as exc:
            raise PersistenceUnavailable(f"cannot write {self.path}: {exc}") from exc
