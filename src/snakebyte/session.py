"""Game session lifecycle: idle, playing and game-over around the tick loop."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable
import logging
import random

from .board import Board
from .errors import PersistenceUnavailable
from .powerups import EffectEngine
from .scheduler import RepeatingTask, Scheduler
from .scores import JsonHighScoreStore
from .settings import DIFFICULTY_PROFILES, Difficulty, DifficultyProfile
from .simulation import Snapshot, TickOutcome, TickResult, World, tick
from .utils import DIRECTIONS, Direction

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Finite states of a game session."""

    IDLE = auto()
    PLAYING = auto()
    GAME_OVER = auto()


class Command(str, Enum):
    """Lifecycle commands coming from the input side."""

    START = "start"
    RESTART = "restart"
    MENU = "menu"


_TRANSITIONS: dict[tuple[SessionState, Command], SessionState] = {
    (SessionState.IDLE, Command.START): SessionState.PLAYING,
    (SessionState.GAME_OVER, Command.RESTART): SessionState.PLAYING,
    (SessionState.GAME_OVER, Command.MENU): SessionState.IDLE,
    (SessionState.PLAYING, Command.MENU): SessionState.IDLE,
}


class GameSession:
    """Owns one game at a time and drives it from the scheduler.

    The world, the effect slot and the tick task all live here. Tick
    callbacks, effect expiry and input handlers run on the same scheduler, so
    they never interleave.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        store: JsonHighScoreStore | None = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        board: Board | None = None,
        rng: random.Random | None = None,
        on_tick: Callable[[Snapshot], None] | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.store = store
        self.difficulty = difficulty
        self.board = board or Board()
        self.rng = rng or random.Random()
        self.on_tick = on_tick

        self.state = SessionState.IDLE
        self.effects = EffectEngine(scheduler)
        self.world: World | None = None
        self.last_result: TickResult | None = None
        self.won = False
        self._tick_task: RepeatingTask | None = None
        self.high_score = self._load_high_score()

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES[self.difficulty]

    @property
    def score(self) -> int:
        return self.world.score if self.world is not None else 0

    def select_difficulty(self, difficulty: Difficulty) -> bool:
        """Choose the preset for the next game; only allowed while idle."""
        if self.state != SessionState.IDLE:
            logger.debug("Ignoring difficulty change while %s", self.state.name)
            return False
        self.difficulty = difficulty
        return True

    def set_pending_direction(self, direction: Direction) -> None:
        """Buffer a direction for the next tick; the latest call wins."""
        if direction not in DIRECTIONS:
            raise ValueError(f"not a direction: {direction!r}")
        if self.state != SessionState.PLAYING or self.world is None:
            return
        self.world.pending_direction = direction

    def dispatch(self, command: Command) -> bool:
        """Apply a lifecycle command; returns False when it does not apply."""
        target = _TRANSITIONS.get((self.state, command))
        if target is None:
            logger.debug("Ignoring %s while %s", command.value, self.state.name)
            return False

        if target == SessionState.PLAYING:
            self._start()
        else:
            self._stop(target)
        return True

    def snapshot(self) -> Snapshot | None:
        """Current board view, or None before the first game."""
        if self.world is None:
            return None
        return self.world.snapshot(self.effects)

    def _start(self) -> None:
        self._cancel_timers()
        self.won = False
        self.last_result = None
        self.effects = EffectEngine(self.scheduler)
        self.world = World.fresh(self.board, self.profile, self.rng, high_score=self.high_score)
        if self.world.food is None:
            # nothing to eat from the start: the board is already full
            self.won = True
            self.state = SessionState.GAME_OVER
            logger.info("Game over (board full) before the first tick")
            return
        self.state = SessionState.PLAYING
        self._tick_task = self.scheduler.call_every(self._tick_interval, self._on_tick)
        logger.info("Game started on %s", self.profile.name)

    def _stop(self, target: SessionState) -> None:
        self._cancel_timers()
        self.state = target
        if target == SessionState.IDLE:
            self.world = None
            self.last_result = None

    def _cancel_timers(self) -> None:
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        self.effects.cancel()

    def _tick_interval(self) -> float:
        if self.world is None:
            return self.profile.initial_speed_ms
        return self.world.modifiers.current_speed_ms

    def _on_tick(self) -> None:
        if self.state != SessionState.PLAYING or self.world is None:
            return
        result = tick(self.world, self.effects, self.rng, self.scheduler.now_ms)
        self.last_result = result

        if result.new_high_score:
            self.high_score = self.world.high_score
            self._save_high_score(self.high_score)

        if result.outcome != TickOutcome.CONTINUE:
            self.won = result.outcome == TickOutcome.BOARD_FULL
            logger.info(
                "Game over (%s) with score %d",
                "board full" if self.won else result.collision,
                self.world.score,
            )
            self._stop(SessionState.GAME_OVER)

        if self.on_tick is not None:
            self.on_tick(self.world.snapshot(self.effects))

    def _load_high_score(self) -> int:
        if self.store is None:
            return 0
        try:
            value = self.store.load_high_score()
        except PersistenceUnavailable as exc:
            logger.warning("High score unavailable, starting from zero: %s", exc)
            return 0
        return value or 0

    def _save_high_score(self, value: int) -> None:
        if self.store is None:
            return
        try:
            self.store.save_high_score(value)
        except PersistenceUnavailable as exc:
            logger.warning("Could not save high score %d: %s", value, exc)
