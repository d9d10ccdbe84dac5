"""Power-up definitions and the timed effect engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging

from .scheduler import Scheduler, Timer
from .settings import DifficultyProfile
from .utils import CYAN, MAGENTA, ORANGE, YELLOW, Cell

logger = logging.getLogger(__name__)


class PowerUpKind(str, Enum):
    """Supported power-up variants."""

    SPEED_BOOST = "speed_boost"
    SLOW_DOWN = "slow_down"
    INVINCIBILITY = "invincibility"
    SCORE_MULTIPLIER = "score_multiplier"


@dataclass(frozen=True, slots=True)
class PowerUp:
    """Collectible power-up sitting on the board."""

    cell: Cell
    kind: PowerUpKind
    spawned_at_ms: float


@dataclass(slots=True)
class Modifiers:
    """Simulation parameters that food and power-ups adjust."""

    base_speed_ms: float
    current_speed_ms: float
    min_speed_ms: float
    score_multiplier: int = 1
    invincible: bool = False

    @classmethod
    def for_profile(cls, profile: DifficultyProfile) -> Modifiers:
        return cls(
            base_speed_ms=profile.initial_speed_ms,
            current_speed_ms=profile.initial_speed_ms,
            min_speed_ms=profile.min_speed_ms,
        )


@dataclass(frozen=True, slots=True)
class PowerUpEffect:
    """How one kind changes the modifiers, and how it undoes that change."""

    label: str
    symbol: str
    color: tuple[int, int, int]
    duration_ms: int
    apply: Callable[[Modifiers], None]
    revert: Callable[[Modifiers], None]
    affects_speed: bool = False


def _boost_speed(mods: Modifiers) -> None:
    mods.current_speed_ms = max(mods.min_speed_ms, mods.current_speed_ms * 0.5)


def _slow_down(mods: Modifiers) -> None:
    mods.current_speed_ms = mods.current_speed_ms * 1.5


def _restore_speed(mods: Modifiers) -> None:
    # base speed may have tightened while the effect ran
    mods.current_speed_ms = mods.base_speed_ms


def _shield_on(mods: Modifiers) -> None:
    mods.invincible = True


def _shield_off(mods: Modifiers) -> None:
    mods.invincible = False


def _double_score(mods: Modifiers) -> None:
    mods.score_multiplier = 2


def _single_score(mods: Modifiers) -> None:
    mods.score_multiplier = 1


EFFECTS: dict[PowerUpKind, PowerUpEffect] = {
    PowerUpKind.SPEED_BOOST: PowerUpEffect(
        label="Speed Boost",
        symbol="⚡",
        color=YELLOW,
        duration_ms=5000,
        apply=_boost_speed,
        revert=_restore_speed,
        affects_speed=True,
    ),
    PowerUpKind.SLOW_DOWN: PowerUpEffect(
        label="Slow Down",
        symbol="⏱",
        color=CYAN,
        duration_ms=5000,
        apply=_slow_down,
        revert=_restore_speed,
        affects_speed=True,
    ),
    PowerUpKind.INVINCIBILITY: PowerUpEffect(
        label="Invincibility",
        symbol="★",
        color=MAGENTA,
        duration_ms=5000,
        apply=_shield_on,
        revert=_shield_off,
    ),
    PowerUpKind.SCORE_MULTIPLIER: PowerUpEffect(
        label="Score x2",
        symbol="×2",
        color=ORANGE,
        duration_ms=8000,
        apply=_double_score,
        revert=_single_score,
    ),
}

_missing = set(PowerUpKind) - EFFECTS.keys()
if _missing:
    raise RuntimeError(f"power-up kinds without an effect: {sorted(k.value for k in _missing)}")


@dataclass(frozen=True, slots=True)
class ActiveEffect:
    """The effect currently occupying the single effect slot."""

    kind: PowerUpKind
    expires_at_ms: float


class EffectEngine:
    """Owns the effect slot and its expiry timer.

    Only one effect runs at a time. Activating another one cancels the running
    effect's timer and reverts what it changed before the new one applies.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self.active: ActiveEffect | None = None
        self._timer: Timer | None = None
        self._modifiers: Modifiers | None = None

    def activate(self, kind: PowerUpKind, modifiers: Modifiers) -> ActiveEffect:
        """Apply a consumed power-up, superseding any running effect."""
        if self.active is not None and self._modifiers is not None:
            logger.debug("Effect %s superseded by %s", self.active.kind.value, kind.value)
            self._clear_timer()
            EFFECTS[self.active.kind].revert(self._modifiers)

        effect = EFFECTS[kind]
        effect.apply(modifiers)
        self._modifiers = modifiers
        self.active = ActiveEffect(kind=kind, expires_at_ms=self.scheduler.now_ms + effect.duration_ms)
        self._timer = self.scheduler.call_later(effect.duration_ms, self._expire)
        logger.info("Effect %s active for %d ms", kind.value, effect.duration_ms)
        return self.active

    def cancel(self) -> None:
        """Drop the running effect without touching the modifiers."""
        self._clear_timer()
        self.active = None
        self._modifiers = None

    @property
    def speed_effect_active(self) -> bool:
        return self.active is not None and EFFECTS[self.active.kind].affects_speed

    def remaining_ms(self) -> float:
        """Milliseconds left on the running effect, zero when idle."""
        if self.active is None:
            return 0.0
        return max(0.0, self.active.expires_at_ms - self.scheduler.now_ms)

    def _expire(self) -> None:
        self._timer = None
        if self.active is None or self._modifiers is None:
            return
        logger.info("Effect %s expired", self.active.kind.value)
        EFFECTS[self.active.kind].revert(self._modifiers)
        self.active = None
        self._modifiers = None

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
