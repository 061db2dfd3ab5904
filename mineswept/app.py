"""The game window: event loop, input dispatch, audio and presentation."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

import pygame

from mineswept.layout import (
    GAME_SCREEN_HEIGHT,
    GAME_SCREEN_WIDTH,
    MENU_HEIGHT,
    GridLayout,
    screen_to_game,
    window_scale,
)
from mineswept.menu import Action, MenuState, Popup
from mineswept.render import Renderer
from mineswept.savefile import SaveFileError
from mineswept.session import Session, Sound

ASSETS_DIR = Path("data")
TARGET_FPS = 60
MUSIC_VOLUME = 0.33
_EFFECTS = ((Sound.HIT, "hit.mp3", 0.7), (Sound.ACTION, "action.mp3", 0.5))


class App:
    """A running game window with its session, menus and audio."""

    def __init__(self, mobile: bool = False) -> None:
        pygame.init()
        pygame.display.set_caption("Minesweeper")
        self.window = pygame.display.set_mode(
            (GAME_SCREEN_WIDTH, GAME_SCREEN_HEIGHT), pygame.RESIZABLE
        )
        self.canvas = pygame.Surface((GAME_SCREEN_WIDTH, GAME_SCREEN_HEIGHT))
        self.mobile = mobile
        self.session = Session(mobile)
        self.renderer = Renderer(ASSETS_DIR)
        self.menu = MenuState(mobile, self.renderer.measure)
        self.running = True
        self.fullscreen = False
        self.music_playing = False
        self._music_loaded = False
        self._effects: dict[Sound, pygame.mixer.Sound] = {}
        self._init_audio()

    @property
    def layout(self) -> GridLayout:
        """Placement of the current grid on the canvas."""
        return GridLayout.for_grid(self.session.size)

    def _init_audio(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error:
            return
        for sound, name, volume in _EFFECTS:
            path = ASSETS_DIR / name
            if not path.is_file():
                continue
            try:
                effect = pygame.mixer.Sound(str(path))
            except pygame.error:
                continue
            effect.set_volume(volume)
            self._effects[sound] = effect
        music = ASSETS_DIR / "music.mp3"
        if music.is_file():
            try:
                pygame.mixer.music.load(str(music))
                pygame.mixer.music.set_volume(MUSIC_VOLUME)
                self._music_loaded = True
            except pygame.error:
                self._music_loaded = False

    def _start_music(self) -> None:
        if self._music_loaded:
            pygame.mixer.music.play(-1)
        self.music_playing = True

    def _toggle_music(self) -> None:
        if self.music_playing:
            if self._music_loaded:
                pygame.mixer.music.pause()
            self.music_playing = False
        else:
            if self._music_loaded:
                pygame.mixer.music.unpause()
            self.music_playing = True

    def _toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        try:
            pygame.display.toggle_fullscreen()
        except pygame.error:
            pass

    def _apply(self, action: Action) -> None:
        kind = action.kind
        if kind is Action.Kind.CONTINUE:
            self.session.randomize()
        elif kind is Action.Kind.DISMISS_WELCOME:
            self._start_music()
        elif kind is Action.Kind.NEW_GAME:
            self.session.reset_to_initial_size()
        elif kind is Action.Kind.CUSTOM_GAME:
            self.session.set_custom_size(action.argument)
        elif kind is Action.Kind.SAVE:
            try:
                self.session.save(action.argument)
            except OSError:
                pass
        elif kind is Action.Kind.LOAD:
            try:
                self.session.load(action.argument)
            except (OSError, SaveFileError):
                pass
        elif kind is Action.Kind.QUIT:
            self.running = False
        elif kind is Action.Kind.TOGGLE_MUSIC:
            self._toggle_music()

    def _to_game(self, pos: tuple[int, int]) -> tuple[float, float]:
        width, height = self.window.get_size()
        return screen_to_game(pos[0], pos[1], width, height)

    def _cell(self, x: float, y: float) -> tuple[int, int]:
        cell = self.layout.cell_at(x, y)
        return cell if cell is not None else (-1, -1)

    def _press(self, button: int, pos: tuple[int, int]) -> None:
        x, y = self._to_game(pos)
        if button == 1:
            action = self.menu.click(x, y, self.session.waiting)
            if action is not None:
                self._apply(action)
                return
        if self.menu.modal or self.session.waiting or y < MENU_HEIGHT:
            return
        row, col = self._cell(x, y)
        if self.mobile:
            if button == 1 and self.session.board.is_valid(row, col):
                self.session.tap_press(row, col)
            return
        left, _, right = pygame.mouse.get_pressed()[:3]
        if button == 1:
            self.session.left_click(row, col, right_down=right)
        elif button == 3:
            self.session.right_click(row, col, left_down=left)

    def _release(self, button: int, pos: tuple[int, int]) -> None:
        if not self.mobile or button != 1 or self.menu.modal:
            return
        x, y = self._to_game(pos)
        self.session.tap_release(*self._cell(x, y))

    def _key(self, event: pygame.event.Event) -> None:
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if getattr(event, "mod", 0) & pygame.KMOD_ALT:
                self._toggle_fullscreen()
            action = self.menu.key_enter()
            if action is not None:
                self._apply(action)
        elif event.key == pygame.K_BACKSPACE:
            self.menu.key_backspace()

    def handle_event(self, event: pygame.event.Event) -> None:
        """Dispatch one window event."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self._key(event)
        elif event.type == pygame.TEXTINPUT:
            self.menu.text(event.text)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            self._press(event.button, event.pos)
        elif event.type == pygame.MOUSEBUTTONUP:
            self._release(event.button, event.pos)

    def update(self, dt: float) -> None:
        """Advance timers, long taps and sound playback by dt seconds."""
        if not self.menu.modal:
            if self.menu.popup is not Popup.WELCOME:
                self.session.tick(dt)
            if self.mobile:
                self.session.tap_hold()
        for sound in self.session.drain_sounds():
            effect = self._effects.get(sound)
            if effect is not None:
                effect.play()

    def _present(self) -> None:
        self.renderer.draw(self.canvas, self.session, self.menu, self.layout)
        width, height = self.window.get_size()
        self.window.fill((0, 0, 0))
        if width > 0 and height > 0:
            scale = window_scale(width, height)
            size = (round(GAME_SCREEN_WIDTH * scale), round(GAME_SCREEN_HEIGHT * scale))
            scaled = pygame.transform.smoothscale(self.canvas, size)
            self.window.blit(scaled, ((width - size[0]) // 2, (height - size[1]) // 2))
        pygame.display.flip()

    def run(self) -> None:
        """Run the event loop until the window is closed or Quit is chosen."""
        clock = pygame.time.Clock()
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            self.update(clock.tick(TARGET_FPS) / 1000.0)
            self._present()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game."""
    parser = argparse.ArgumentParser(prog="mineswept", description="Minesweeper.")
    parser.add_argument(
        "--mobile", action="store_true", help="use touch controls and the small grid sizes"
    )
    args = parser.parse_args(argv)
    try:
        App(mobile=args.mobile).run()
    finally:
        pygame.quit()
    return 0