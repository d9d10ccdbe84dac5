from __future__ import annotations

import random

from snakebyte.board import Board
from snakebyte.powerups import EffectEngine, Modifiers, PowerUp, PowerUpKind
from snakebyte.scheduler import Scheduler
from snakebyte.settings import DIFFICULTY_PROFILES, Difficulty
from snakebyte.simulation import TickOutcome, World, commit_direction, tick
from snakebyte.utils import DOWN, LEFT, RIGHT, UP


def _world(snake, direction=RIGHT, food=(0, 0), size=20, difficulty=Difficulty.MEDIUM) -> World:
    profile = DIFFICULTY_PROFILES[difficulty]
    return World(
        board=Board(size),
        profile=profile,
        modifiers=Modifiers.for_profile(profile),
        snake=list(snake),
        direction=direction,
        food=food,
    )


def _engine() -> tuple[Scheduler, EffectEngine]:
    scheduler = Scheduler()
    return scheduler, EffectEngine(scheduler)


def test_eating_food_grows_and_scores() -> None:
    world = _world([(10, 10)], RIGHT, food=(11, 10))
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.CONTINUE
    assert result.ate_food
    assert world.snake == [(11, 10), (10, 10)]
    assert world.score == 10
    assert world.food not in world.snake
    assert world.food is not None


def test_plain_move_drops_tail() -> None:
    world = _world([(5, 5), (5, 6)], UP, food=(0, 0))
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.CONTINUE
    assert not result.ate_food
    assert world.snake == [(5, 4), (5, 5)]
    assert world.score == 0


def test_score_multiplier_doubles_food_points() -> None:
    world = _world([(10, 10)], RIGHT, food=(11, 10))
    _, effects = _engine()
    effects.activate(PowerUpKind.SCORE_MULTIPLIER, world.modifiers)
    tick(world, effects, random.Random(1), 0)
    assert world.score == 20


def _coiled() -> list[tuple[int, int]]:
    # head at (5,5) turning left runs into the third segment at (4,5)
    return [(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)]


def test_self_collision_ends_game() -> None:
    world = _world(_coiled(), UP)
    world.pending_direction = LEFT
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.GAME_OVER
    assert result.collision == "self"
    assert world.snake == _coiled()


def test_invincibility_ignores_self_collision() -> None:
    world = _world(_coiled(), UP)
    world.pending_direction = LEFT
    _, effects = _engine()
    effects.activate(PowerUpKind.INVINCIBILITY, world.modifiers)
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.CONTINUE
    assert world.snake[0] == (4, 5)
    assert len(world.snake) == 5


def test_invincibility_does_not_stop_walls() -> None:
    world = _world([(19, 3)], RIGHT)
    _, effects = _engine()
    effects.activate(PowerUpKind.INVINCIBILITY, world.modifiers)
    result = tick(world, effects, random.Random(1), 0)
    assert result.outcome == TickOutcome.GAME_OVER
    assert result.collision == "wall"


def test_wall_collision_leaves_board_untouched() -> None:
    world = _world([(19, 7), (18, 7)], RIGHT, food=(0, 0))
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.GAME_OVER
    assert result.collision == "wall"
    assert world.snake == [(19, 7), (18, 7)]


def test_moving_into_vacated_tail_is_safe() -> None:
    # a 2x2 loop: the head steps onto the cell the tail leaves this tick
    world = _world([(5, 5), (5, 6), (6, 6), (6, 5)], RIGHT, food=(0, 0))
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)
    assert result.outcome == TickOutcome.CONTINUE
    assert world.snake == [(6, 5), (5, 5), (5, 6), (6, 6)]


def test_reverse_request_is_dropped() -> None:
    world = _world([(5, 5), (4, 5)], RIGHT)
    world.pending_direction = LEFT
    assert commit_direction(world) == RIGHT
    assert world.pending_direction is None


def test_food_speeds_up_base_and_current() -> None:
    world = _world([(10, 10)], RIGHT, food=(11, 10))
    _, effects = _engine()
    tick(world, effects, random.Random(1), 0)
    assert world.modifiers.base_speed_ms == 175
    assert world.modifiers.current_speed_ms == 175


def test_base_speed_never_drops_below_minimum() -> None:
    world = _world([(10, 10)], RIGHT, food=(11, 10), difficulty=Difficulty.HARD)
    world.modifiers.base_speed_ms = 44
    _, effects = _engine()
    tick(world, effects, random.Random(1), 0)
    assert world.modifiers.base_speed_ms == 40


def test_boost_expiry_reverts_to_new_base_speed() -> None:
    world = _world([(10, 10)], RIGHT, food=(12, 10))
    scheduler, effects = _engine()
    effects.activate(PowerUpKind.SPEED_BOOST, world.modifiers)
    assert world.modifiers.current_speed_ms == 90

    rng = random.Random(1)
    tick(world, effects, rng, 0)
    tick(world, effects, rng, 0)
    # the boost keeps the current speed while base tightens underneath
    assert world.modifiers.base_speed_ms == 175
    assert world.modifiers.current_speed_ms == 90

    scheduler.advance(5000)
    assert world.modifiers.current_speed_ms == 175


def test_power_up_pickup_activates_effect() -> None:
    world = _world([(10, 10)], RIGHT, food=(0, 0))
    world.power_up = PowerUp(cell=(11, 10), kind=PowerUpKind.INVINCIBILITY, spawned_at_ms=0)
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.consumed == PowerUpKind.INVINCIBILITY
    assert world.power_up is None
    assert world.modifiers.invincible
    assert effects.active.kind == PowerUpKind.INVINCIBILITY


def test_filling_the_board_is_a_win() -> None:
    world = _world([(0, 0), (0, 1), (1, 1)], UP, food=(1, 0), size=2)
    world.pending_direction = RIGHT
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.BOARD_FULL
    assert result.ate_food
    assert len(world.snake) == 4
    assert world.food is None


def test_last_free_cell_taken_from_power_up() -> None:
    world = _world([(0, 0), (0, 1)], UP, food=(1, 0), size=2)
    world.pending_direction = RIGHT
    world.power_up = PowerUp(cell=(1, 1), kind=PowerUpKind.SLOW_DOWN, spawned_at_ms=0)
    _, effects = _engine()
    result = tick(world, effects, random.Random(1), 0)

    assert result.outcome == TickOutcome.CONTINUE
    assert world.food == (1, 1)
    assert world.power_up is None


def test_length_and_head_invariants_over_random_play() -> None:
    rng = random.Random(99)
    world = World.fresh(Board(12), DIFFICULTY_PROFILES[Difficulty.EASY], rng)
    _, effects = _engine()
    for _ in range(400):
        before = len(world.snake)
        shielded = world.modifiers.invincible
        world.pending_direction = rng.choice([UP, DOWN, LEFT, RIGHT])
        result = tick(world, effects, rng, 0)
        if result.outcome != TickOutcome.CONTINUE:
            break
        assert len(world.snake) == before + (1 if result.ate_food else 0)
        if not shielded:
            assert world.snake[0] not in world.snake[1:]
        assert world.food not in world.snake


def test_fresh_world_without_free_cell_has_no_food() -> None:
    world = World.fresh(Board(1), DIFFICULTY_PROFILES[Difficulty.MEDIUM], random.Random(1))
    assert world.snake == [(0, 0)]
    assert world.food is None
    assert world.ticks == 0
