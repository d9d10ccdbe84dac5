"""Per-tick state transition: movement, growth, collisions, scoring and speed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
import random

from .board import Board
from .errors import PlacementExhausted
from .placement import maybe_place_power_up, place_food
from .powerups import EffectEngine, Modifiers, PowerUp, PowerUpKind
from .settings import DifficultyProfile
from .utils import FOOD_POINTS, RIGHT, Cell, Direction, add_direction, is_opposite

logger = logging.getLogger(__name__)


class TickOutcome(Enum):
    """What a single tick decided about the game."""

    CONTINUE = auto()
    GAME_OVER = auto()
    BOARD_FULL = auto()


@dataclass(slots=True)
class TickResult:
    """Outcome of one tick plus the events that happened during it."""

    outcome: TickOutcome = TickOutcome.CONTINUE
    ate_food: bool = False
    collision: str | None = None
    consumed: PowerUpKind | None = None
    spawned: PowerUp | None = None
    new_high_score: bool = False


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the board handed to renderers."""

    snake: tuple[Cell, ...]
    food: Cell | None
    power_up: PowerUp | None
    invincible: bool
    direction: Direction
    score: int
    high_score: int
    speed_ms: float
    active_effect: PowerUpKind | None = None
    effect_remaining_ms: float = 0.0


@dataclass(slots=True)
class World:
    """Everything one game owns; discarded when a new game starts."""

    board: Board
    profile: DifficultyProfile
    modifiers: Modifiers
    snake: list[Cell]
    direction: Direction = RIGHT
    pending_direction: Direction | None = None
    food: Cell | None = None
    power_up: PowerUp | None = None
    score: int = 0
    high_score: int = 0
    ticks: int = 0

    @classmethod
    def fresh(
        cls,
        board: Board,
        profile: DifficultyProfile,
        rng: random.Random,
        high_score: int = 0,
    ) -> World:
        """Build the opening position: one segment in the centre heading right.

        On a board with no room for food the world comes back with food None.
        """
        centre = (board.size // 2, board.size // 2)
        world = cls(
            board=board,
            profile=profile,
            modifiers=Modifiers.for_profile(profile),
            snake=[centre],
            high_score=high_score,
        )
        try:
            world.food = place_food(board, world.snake, None, rng)
        except PlacementExhausted:
            logger.info("No room for food on a %dx%d board", board.size, board.size)
        return world

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def snapshot(self, effects: EffectEngine | None = None) -> Snapshot:
        active = effects.active.kind if effects is not None and effects.active is not None else None
        return Snapshot(
            snake=tuple(self.snake),
            food=self.food,
            power_up=self.power_up,
            invincible=self.modifiers.invincible,
            direction=self.direction,
            score=self.score,
            high_score=self.high_score,
            speed_ms=self.modifiers.current_speed_ms,
            active_effect=active,
            effect_remaining_ms=effects.remaining_ms() if effects is not None else 0.0,
        )


def commit_direction(world: World) -> Direction:
    """Apply the buffered direction unless it would reverse the snake."""
    pending = world.pending_direction
    world.pending_direction = None
    if pending is not None and not is_opposite(pending, world.direction):
        world.direction = pending
    return world.direction


def tick(world: World, effects: EffectEngine, rng: random.Random, now_ms: float) -> TickResult:
    """Advance the world by one step.

    The snake list is only replaced when the tick survives, so a game-over
    world still shows the position that caused it.
    """
    world.ticks += 1
    direction = commit_direction(world)
    new_head = add_direction(world.head, direction)

    if not world.board.in_bounds(new_head):
        logger.debug("Wall hit at %s on tick %d", new_head, world.ticks)
        return TickResult(outcome=TickOutcome.GAME_OVER, collision="wall")

    body = [new_head, *world.snake]
    mods = world.modifiers
    result = TickResult(ate_food=new_head == world.food)

    if result.ate_food:
        world.score += FOOD_POINTS * mods.score_multiplier
        if world.score > world.high_score:
            world.high_score = world.score
            result.new_high_score = True

        try:
            world.food = _regenerate_food(world, body, rng)
        except PlacementExhausted:
            logger.info("Board full at score %d", world.score)
            world.snake = body
            world.food = None
            result.outcome = TickOutcome.BOARD_FULL
            return result

        spawned = maybe_place_power_up(
            world.board, body, world.food, world.profile.power_up_chance, rng, now_ms
        )
        if spawned is not None:
            world.power_up = spawned
            result.spawned = spawned

        mods.base_speed_ms = max(mods.min_speed_ms, mods.base_speed_ms - world.profile.speed_increment_ms)
        if not effects.speed_effect_active:
            mods.current_speed_ms = mods.base_speed_ms
    else:
        body.pop()

    if not mods.invincible and new_head in body[1:]:
        logger.debug("Self collision at %s on tick %d", new_head, world.ticks)
        result.outcome = TickOutcome.GAME_OVER
        result.collision = "self"
        return result

    if world.power_up is not None and new_head == world.power_up.cell:
        effects.activate(world.power_up.kind, mods)
        result.consumed = world.power_up.kind
        world.power_up = None

    world.snake = body
    return result


def _regenerate_food(world: World, body: list[Cell], rng: random.Random) -> Cell:
    try:
        return place_food(world.board, body, world.power_up, rng)
    except PlacementExhausted:
        if world.power_up is None:
            raise
    # the power-up holds the last free cell; give it up for the food
    world.power_up = None
    return place_food(world.board, body, None, rng)
