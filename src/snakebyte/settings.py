"""Difficulty presets, settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path

from .utils import GREEN, RED, SETTINGS_FILE, YELLOW, load_json, save_json


class Difficulty(str, Enum):
    """Selectable difficulty presets."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True, slots=True)
class DifficultyProfile:
    """Speed curve and power-up odds for one difficulty."""

    name: str
    initial_speed_ms: int
    speed_increment_ms: int
    min_speed_ms: int
    power_up_chance: float
    color: tuple[int, int, int]


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        name="Easy",
        initial_speed_ms=250,
        speed_increment_ms=3,
        min_speed_ms=100,
        power_up_chance=0.25,
        color=GREEN,
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        name="Medium",
        initial_speed_ms=180,
        speed_increment_ms=5,
        min_speed_ms=70,
        power_up_chance=0.15,
        color=YELLOW,
    ),
    Difficulty.HARD: DifficultyProfile(
        name="Hard",
        initial_speed_ms=120,
        speed_increment_ms=8,
        min_speed_ms=40,
        power_up_chance=0.08,
        color=RED,
    ),
}


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    show_grid: bool = True


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    difficulty: Difficulty = Difficulty.MEDIUM
    display: DisplaySettings = field(default_factory=DisplaySettings)

    @property
    def profile(self) -> DifficultyProfile:
        """Return the preset for the selected difficulty."""
        return DIFFICULTY_PROFILES[self.difficulty]


class SettingsManager:
    """Load, save, and mutate game settings."""

    def __init__(self, path: Path = SETTINGS_FILE) -> None:
        self.path = path
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk with safe defaults."""
        raw = load_json(self.path, {})
        settings = GameSettings()
        if not isinstance(raw, dict):
            return settings

        if raw.get("difficulty") in {e.value for e in Difficulty}:
            settings.difficulty = Difficulty(raw["difficulty"])

        display = raw.get("display", {})
        if isinstance(display, dict):
            settings.display.fullscreen = bool(display.get("fullscreen", settings.display.fullscreen))
            settings.display.show_grid = bool(display.get("show_grid", settings.display.show_grid))
        return settings

    def save(self) -> None:
        """Persist settings to disk."""
        payload = asdict(self.settings)
        payload["difficulty"] = self.settings.difficulty.value
        save_json(self.path, payload)

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Update the difficulty and persist settings."""
        self.settings.difficulty = difficulty
        self.save()

    def cycle_difficulty(self) -> Difficulty:
        """Cycle the difficulty and persist settings."""
        order = list(Difficulty)
        idx = order.index(self.settings.difficulty)
        self.settings.difficulty = order[(idx + 1) % len(order)]
        self.save()
        return self.settings.difficulty

    def toggle_grid(self) -> bool:
        """Flip grid visibility and persist settings."""
        self.settings.display.show_grid = not self.settings.display.show_grid
        self.save()
        return self.settings.display.show_grid
