"""Menu bar, dropdowns and popup dialogs, reduced to the actions they request."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from mineswept.layout import GAME_SCREEN_HEIGHT, GAME_SCREEN_WIDTH, Rect

Measure = Callable[[str, int], float]

MENU_FONT_SIZE = 30
MENU_BUTTON_HEIGHT = 30
MENU_ITEM_HEIGHT = 35
MENU_GAP = 20
GRID_SIZE_INPUT_LIMIT = 31
FILENAME_INPUT_LIMIT = 255

_GRID_SIZE_CHARS = frozenset("0123456789xX")


def _approximate_measure(text: str, font_size: int) -> float:
    """Rough text width used when no real font is available."""
    return len(text) * font_size // 2


@dataclass(frozen=True)
class Action:
    """Something the menu asks the game to do, with its text argument if any."""

    class Kind(enum.Enum):
        CONSUMED = "consumed"
        CONTINUE = "continue"
        DISMISS_WELCOME = "dismiss_welcome"
        NEW_GAME = "new_game"
        CUSTOM_GAME = "custom_game"
        SAVE = "save"
        LOAD = "load"
        QUIT = "quit"
        TOGGLE_MUSIC = "toggle_music"

    kind: Kind
    argument: str = ""


class Popup(enum.Enum):
    """Dialogs that can be shown over the board."""

    WELCOME = "welcome"
    HELP = "help"
    CUSTOM_GAME = "custom_game"
    SAVE = "save"
    LOAD = "load"


_DIALOGS = (Popup.CUSTOM_GAME, Popup.SAVE, Popup.LOAD)
_MODAL = (Popup.HELP, *_DIALOGS)


@dataclass
class TextField:
    """A single-line text input with a length limit and optional character filter."""

    limit: int
    allowed: frozenset[str] | None = None
    value: str = ""

    def type(self, chars: Iterable[str]) -> None:
        """Append the accepted characters while there is room."""
        for char in chars:
            if self.allowed is not None and char not in self.allowed:
                continue
            if len(self.value) < self.limit:
                self.value += char

    def backspace(self) -> None:
        """Remove the last character, if any."""
        self.value = self.value[:-1]

    def clear(self) -> None:
        """Empty the field."""
        self.value = ""


class _Menu(enum.Enum):
    FILE = "file"
    OPTIONS = "options"
    HELP = "help"


def _consumed() -> Action:
    return Action(Action.Kind.CONSUMED)


class MenuState:
    """Which menus and popups are open, and how clicks and keys act on them."""

    def __init__(self, mobile: bool = False, measure: Measure | None = None) -> None:
        self.mobile = mobile
        self.measure: Measure = measure if measure is not None else _approximate_measure
        self.popup: Popup | None = Popup.WELCOME
        self.grid_size_field = TextField(GRID_SIZE_INPUT_LIMIT, _GRID_SIZE_CHARS)
        self.filename_field = TextField(FILENAME_INPUT_LIMIT)
        self._open: _Menu | None = None
        self.layout()

    @property
    def file_open(self) -> bool:
        return self._open is _Menu.FILE

    @property
    def options_open(self) -> bool:
        return self._open is _Menu.OPTIONS

    @property
    def help_open(self) -> bool:
        return self._open is _Menu.HELP

    @property
    def modal(self) -> bool:
        """Whether a popup that blocks all game input is shown."""
        return self.popup in _MODAL

    @property
    def popup_rect(self) -> Rect | None:
        """Frame of the help or input dialog currently shown."""
        if self.popup in _DIALOGS:
            width, height = 400, 200
        elif self.popup is Popup.HELP:
            width, height = 500, 400
        else:
            return None
        return Rect(
            (GAME_SCREEN_WIDTH - width) / 2, (GAME_SCREEN_HEIGHT - height) / 2, width, height
        )

    @property
    def ok_rect(self) -> Rect | None:
        """The OK button of the help or input dialog currently shown."""
        frame = self.popup_rect
        if frame is None:
            return None
        return Rect(frame.x + (frame.width - 100) / 2, frame.bottom - 60, 100, 30)

    @property
    def input_rect(self) -> Rect | None:
        """The text box of the input dialog currently shown."""
        frame = self.popup_rect
        if frame is None or self.popup not in _DIALOGS:
            return None
        return Rect(frame.x + 30, frame.y + 110, frame.width - 60, 30)

    @property
    def active_field(self) -> TextField | None:
        """The text field the current dialog edits."""
        if self.popup is Popup.CUSTOM_GAME:
            return self.grid_size_field
        if self.popup in (Popup.SAVE, Popup.LOAD):
            return self.filename_field
        return None

    def layout(self) -> None:
        """Recompute the menu bar and dropdown rectangles from the text widths."""
        measure = self.measure
        self.file_rect = Rect(
            110, 7, measure("File", MENU_FONT_SIZE) + 30, MENU_BUTTON_HEIGHT
        )
        labels = ("New Game", "Custom Game", "Save Game", "Load Game", "Quit")
        width = max(measure(label, MENU_FONT_SIZE) for label in labels) + 30
        y = self.file_rect.bottom

        def next_item() -> Rect:
            nonlocal y
            rect = Rect(self.file_rect.x, y, width, MENU_ITEM_HEIGHT)
            y += MENU_ITEM_HEIGHT
            return rect

        self.new_game_rect = next_item()
        self.custom_game_rect: Rect | None = None if self.mobile else next_item()
        self.save_game_rect = next_item()
        self.load_game_rect = next_item()
        self.quit_rect = next_item()

        self.options_rect = Rect(
            self.file_rect.right + MENU_GAP,
            7,
            measure("Options", MENU_FONT_SIZE) + 30,
            MENU_BUTTON_HEIGHT,
        )
        self.toggle_music_rect = Rect(
            self.options_rect.x,
            self.options_rect.bottom,
            measure("Toggle Music", MENU_FONT_SIZE) + 30,
            MENU_ITEM_HEIGHT,
        )
        self.help_rect = Rect(
            self.options_rect.right + MENU_GAP,
            7,
            measure("Help", MENU_FONT_SIZE) + 30,
            MENU_BUTTON_HEIGHT,
        )
        self.about_rect = Rect(
            self.help_rect.x,
            self.help_rect.bottom,
            measure("About", MENU_FONT_SIZE) + 30,
            MENU_ITEM_HEIGHT,
        )

    def _toggle(self, menu: _Menu) -> Action:
        self._open = None if self._open is menu else menu
        return _consumed()

    def _open_dialog(self, popup: Popup) -> Action:
        self.popup = popup
        if popup is Popup.CUSTOM_GAME:
            self.grid_size_field.clear()
        else:
            self.filename_field.clear()
        return _consumed()

    def _submit(self) -> Action:
        popup = self.popup
        self.popup = None
        if popup is Popup.CUSTOM_GAME:
            text = self.grid_size_field.value
            self.grid_size_field.clear()
            return Action(Action.Kind.CUSTOM_GAME, text) if text else _consumed()
        name = self.filename_field.value
        if not name:
            return _consumed()
        kind = Action.Kind.SAVE if popup is Popup.SAVE else Action.Kind.LOAD
        return Action(kind, name)

    def _file_choice(self, x: float, y: float) -> Action:
        self._open = None
        if self.new_game_rect.contains(x, y):
            return Action(Action.Kind.NEW_GAME)
        if self.custom_game_rect is not None and self.custom_game_rect.contains(x, y):
            return self._open_dialog(Popup.CUSTOM_GAME)
        if self.save_game_rect.contains(x, y):
            return self._open_dialog(Popup.SAVE)
        if self.load_game_rect.contains(x, y):
            return self._open_dialog(Popup.LOAD)
        if self.quit_rect.contains(x, y):
            return Action(Action.Kind.QUIT)
        return _consumed()

    def click(self, x: float, y: float, waiting: bool = False) -> Action | None:
        """Handle a left click on the canvas; None when the menu did not take it."""
        frame = self.popup_rect
        ok = self.ok_rect
        if self.popup is Popup.CUSTOM_GAME and frame is not None and ok is not None:
            if ok.contains(x, y):
                return self._submit()
            if not frame.contains(x, y):
                self.popup = None
                self.grid_size_field.clear()
            return _consumed()
        if waiting:
            return Action(Action.Kind.CONTINUE)
        if self.popup is Popup.WELCOME:
            self.popup = None
            return Action(Action.Kind.DISMISS_WELCOME)
        for menu, rect in (
            (_Menu.FILE, self.file_rect),
            (_Menu.OPTIONS, self.options_rect),
            (_Menu.HELP, self.help_rect),
        ):
            if rect.contains(x, y):
                return self._toggle(menu)
        if self._open is _Menu.FILE:
            return self._file_choice(x, y)
        if self._open is _Menu.OPTIONS:
            self._open = None
            if self.toggle_music_rect.contains(x, y):
                return Action(Action.Kind.TOGGLE_MUSIC)
            return _consumed()
        if self.popup in (Popup.SAVE, Popup.LOAD) and frame is not None and ok is not None:
            if not frame.contains(x, y):
                self.popup = None
                return _consumed()
            if ok.contains(x, y):
                return self._submit()
            return None
        if self.popup is Popup.HELP:
            self.popup = None
            return _consumed()
        if self._open is _Menu.HELP:
            self._open = None
            if self.about_rect.contains(x, y):
                self.popup = Popup.HELP
            return _consumed()
        return None

    def text(self, chars: Iterable[str]) -> None:
        """Feed typed characters to the dialog being shown."""
        field = self.active_field
        if field is not None:
            field.type(chars)

    def key_backspace(self) -> None:
        """Delete the last character of the dialog being shown."""
        field = self.active_field
        if field is not None:
            field.backspace()

    def key_enter(self) -> Action | None:
        """Confirm the dialog being shown; None when no dialog takes the key."""
        if self.popup in _DIALOGS:
            return self._submit()
        return None