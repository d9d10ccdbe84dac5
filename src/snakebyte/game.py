"""pygame front end: keyboard input, the frame loop and rendering."""

from __future__ import annotations

from pathlib import Path
import pygame

from .menu import Menu, MenuItem
from .powerups import EFFECTS
from .scheduler import Scheduler
from .scores import JsonHighScoreStore
from .session import Command, GameSession, SessionState
from .settings import DIFFICULTY_PROFILES, Difficulty, SettingsManager
from .simulation import Snapshot
from .utils import (
    BG_COLOR,
    CELL_SIZE,
    DARK_GREEN,
    DARK_MAGENTA,
    DOWN,
    FPS,
    GREEN,
    GRID_CELLS,
    GRID_COLOR,
    HUD_HEIGHT,
    LEFT,
    MAGENTA,
    PINK,
    RED,
    RIGHT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHADOW_COLOR,
    TEXT_COLOR,
    UP,
    YELLOW,
    Cell,
    Direction,
)

KEY_DIRECTIONS: dict[int, Direction] = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}
CONFIRM_KEYS = (pygame.K_SPACE, pygame.K_RETURN)

# eye offsets (px inside the head cell) per heading
EYES: dict[Direction, tuple[tuple[int, int], tuple[int, int]]] = {
    RIGHT: ((13, 5), (13, 12)),
    LEFT: ((4, 5), (4, 12)),
    UP: ((5, 4), (12, 4)),
    DOWN: ((5, 13), (12, 13)),
}


def direction_for_key(key: int) -> Direction | None:
    """Translate a key code into a steering direction."""
    return KEY_DIRECTIONS.get(key)


class SnakeGame:
    """Window, event pump and renderer around a :class:`GameSession`."""

    def __init__(self, data_dir: Path) -> None:
        pygame.init()
        pygame.font.init()

        self.settings_manager = SettingsManager(data_dir / "settings.json")
        self.settings = self.settings_manager.settings

        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else 0
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        pygame.display.set_caption("SnakeByte")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 44, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 22, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 15)
        self.symbol_font = pygame.font.SysFont("dejavusans", 12, bold=True)

        self.main_menu = Menu(
            title="SNAKE",
            items=[
                *(
                    MenuItem(profile.name, difficulty.value, profile.color)
                    for difficulty, profile in DIFFICULTY_PROFILES.items()
                ),
                MenuItem("Exit", "exit"),
            ],
        )
        self.main_menu.select(self.settings.difficulty.value)

        self.scheduler = Scheduler(start_ms=pygame.time.get_ticks())
        self.session = GameSession(
            self.scheduler,
            store=JsonHighScoreStore(data_dir / "highscore.json"),
            difficulty=self.settings.difficulty,
        )
        self.running = True

    def run(self) -> None:
        """Main event/update/render loop."""
        while self.running:
            self.clock.tick(FPS)
            self._handle_events()
            if not self.running:
                break
            self.scheduler.advance(pygame.time.get_ticks())
            self._render()

        pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return
            if event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def handle_key(self, key: int) -> None:
        """Route one key press according to the session state."""
        state = self.session.state
        if state == SessionState.IDLE:
            self._handle_menu_input(key)
        elif state == SessionState.PLAYING:
            direction = direction_for_key(key)
            if direction is not None:
                self.session.set_pending_direction(direction)
            elif key in (pygame.K_ESCAPE, pygame.K_m):
                self.session.dispatch(Command.MENU)
            elif key == pygame.K_g:
                self.settings_manager.toggle_grid()
        elif state == SessionState.GAME_OVER:
            if key in CONFIRM_KEYS:
                self.session.dispatch(Command.RESTART)
            elif key in (pygame.K_ESCAPE, pygame.K_m):
                self.session.dispatch(Command.MENU)

    def _handle_menu_input(self, key: int) -> None:
        if key in (pygame.K_UP, pygame.K_w):
            self.main_menu.move(-1)
            return
        if key in (pygame.K_DOWN, pygame.K_s):
            self.main_menu.move(1)
            return
        if key == pygame.K_ESCAPE:
            self.running = False
            return
        if key not in CONFIRM_KEYS:
            return

        action = self.main_menu.current_action()
        if action == "exit":
            self.running = False
            return
        difficulty = Difficulty(action)
        self.settings_manager.set_difficulty(difficulty)
        self.session.select_difficulty(difficulty)
        self.session.dispatch(Command.START)

    def _render(self) -> None:
        snapshot = self.session.snapshot()
        if self.session.state == SessionState.IDLE or snapshot is None:
            self.main_menu.render(
                self.screen,
                self.title_font,
                self.body_font,
                footer=f"HIGH: {self.session.high_score:04d}",
            )
        else:
            self._render_playfield(snapshot)
            if self.session.state == SessionState.GAME_OVER:
                self._render_game_over(snapshot)
        pygame.display.flip()

    def _render_playfield(self, snapshot: Snapshot) -> None:
        self.screen.fill(BG_COLOR)
        self._render_hud(snapshot)

        field = self.screen.subsurface(pygame.Rect(0, HUD_HEIGHT, SCREEN_WIDTH, SCREEN_WIDTH))
        if self.settings.display.show_grid:
            self._draw_grid(field)

        if snapshot.food is not None:
            self._fill_cell(field, snapshot.food, RED, 2)
            self._fill_cell(field, snapshot.food, PINK, 4, shrink=12)

        if snapshot.power_up is not None:
            effect = EFFECTS[snapshot.power_up.kind]
            rect = self._fill_cell(field, snapshot.power_up.cell, effect.color, 2)
            symbol = self.symbol_font.render(effect.symbol, True, BG_COLOR)
            field.blit(symbol, symbol.get_rect(center=rect.center))

        for idx, segment in enumerate(snapshot.snake):
            if snapshot.invincible:
                color = MAGENTA if idx == 0 else DARK_MAGENTA
            else:
                color = GREEN if idx == 0 else DARK_GREEN
            self._fill_cell(field, segment, color, 1)

        head = snapshot.snake[0]
        for ex, ey in EYES[snapshot.direction]:
            pygame.draw.rect(field, BG_COLOR, (head[0] * CELL_SIZE + ex, head[1] * CELL_SIZE + ey, 3, 3))

        pygame.draw.rect(field, GREEN, field.get_rect(), 4)

    @staticmethod
    def _fill_cell(
        surface: pygame.Surface,
        cell: Cell,
        color: tuple[int, int, int],
        inset: int,
        shrink: int | None = None,
    ) -> pygame.Rect:
        size = CELL_SIZE - (shrink if shrink is not None else inset * 2)
        rect = pygame.Rect(cell[0] * CELL_SIZE + inset, cell[1] * CELL_SIZE + inset, size, size)
        pygame.draw.rect(surface, color, rect)
        return rect

    @staticmethod
    def _draw_grid(surface: pygame.Surface) -> None:
        extent = GRID_CELLS * CELL_SIZE
        for i in range(GRID_CELLS + 1):
            pygame.draw.line(surface, GRID_COLOR, (i * CELL_SIZE, 0), (i * CELL_SIZE, extent), 1)
            pygame.draw.line(surface, GRID_COLOR, (0, i * CELL_SIZE), (extent, i * CELL_SIZE), 1)

    def _render_hud(self, snapshot: Snapshot) -> None:
        profile = self.session.profile
        score = self.body_font.render(f"SCORE: {snapshot.score:04d}", True, TEXT_COLOR)
        high = self.body_font.render(f"HIGH: {snapshot.high_score:04d}", True, TEXT_COLOR)
        label = self.small_font.render(f"[{profile.name.upper()}]", True, profile.color)
        self.screen.blit(score, (12, 8))
        self.screen.blit(high, (SCREEN_WIDTH - high.get_width() - 12, 8))
        self.screen.blit(label, (12, 38))

        if snapshot.active_effect is not None:
            effect = EFFECTS[snapshot.active_effect]
            seconds = snapshot.effect_remaining_ms / 1000
            text = self.small_font.render(f"{effect.label} {seconds:.1f}s", True, effect.color)
            self.screen.blit(text, (SCREEN_WIDTH - text.get_width() - 12, 38))

    def _render_game_over(self, snapshot: Snapshot) -> None:
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        self.screen.blit(overlay, (0, 0))

        headline = "BOARD CLEARED" if self.session.won else "GAME OVER"
        line1 = self.title_font.render(headline, True, YELLOW if self.session.won else RED)
        shadow = self.title_font.render(headline, True, SHADOW_COLOR)
        line2 = self.body_font.render(f"SCORE: {snapshot.score}", True, TEXT_COLOR)
        prompt = self.small_font.render("Space/Enter: restart   Esc/M: menu", True, TEXT_COLOR)

        centre_x = SCREEN_WIDTH // 2
        centre_y = SCREEN_HEIGHT // 2
        self.screen.blit(shadow, (centre_x - line1.get_width() // 2 + 3, centre_y - 67))
        self.screen.blit(line1, (centre_x - line1.get_width() // 2, centre_y - 70))
        self.screen.blit(line2, (centre_x - line2.get_width() // 2, centre_y - 10))
        self.screen.blit(prompt, (centre_x - prompt.get_width() // 2, centre_y + 30))
