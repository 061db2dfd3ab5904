"""Drawing the board, status text, popups and menu bar onto the game canvas."""

from __future__ import annotations

import os
from pathlib import Path

import pygame

from mineswept.board import Board, Cell, CellState
from mineswept.layout import GAME_SCREEN_HEIGHT, GAME_SCREEN_WIDTH, GridLayout, Rect
from mineswept.menu import MenuState, Popup
from mineswept.session import Session

RAYWHITE = (245, 245, 245)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
LIGHTGRAY = (200, 200, 200)
GRAY = (130, 130, 130)
DARKGRAY = (80, 80, 80)
HIDDEN_CELL = (0, 255, 255)
OPEN_CELL = (135, 206, 235)
OVERLAY = (0, 0, 0, 128)

_NUMBER_COLOURS = (
    (0, 0, 255),
    (0, 128, 0),
    (255, 0, 0),
    (0, 0, 128),
    (128, 0, 0),
    (0, 128, 128),
    (0, 0, 0),
    (128, 128, 128),
)

_DESKTOP_TIPS = (
    "1. The four corner cells are always safe - no mines there!",
    "2. Left-click to reveal a cell, right-click to place/remove a flag",
    "3. Numbers show how many mines are adjacent to that cell",
    "4. When you lose, you can try again with the same grid size",
    "5. Try to reach and beat the 20x20 grid to complete the game!",
    "6. After marking the flags, use both mouse buttons on a number to reveal adjacent cells",
)

_MOBILE_TIPS = (
    "1. The four corner cells are always safe - no mines there!",
    "2. Numbers show how many mines are adjacent to that cell",
    "3. When you lose, you can try again with the same grid size",
    "4. Try to reach and beat the 8x8 grid to complete the game!",
    "5. Tap a cell to reveal it",
    "6. Hold a cell for 0.3s to place/remove a flag",
    "7. Tap a numbered cell to reveal adjacent cells",
)

_HELP_LINES = (
    "1. Left-click to reveal a cell",
    "2. Right-click to place/remove a flag",
    "3. Numbers show how many mines are adjacent",
    "4. Flag all mines to win",
    "5. Clicking a mine ends the game",
    "6. Click both left+right on a number to reveal",
    "   adjacent cells if correct flags are placed",
)

_DIALOG_TEXT = {
    Popup.CUSTOM_GAME: ("Custom Game", "Enter grid size (5/20):"),
    Popup.SAVE: ("Save Game", "Enter filename:"),
    Popup.LOAD: ("Load Game", "Enter filename:"),
}


def welcome_tips(mobile: bool) -> list[str]:
    """Tips shown in the welcome popup for the given kind of device."""
    return list(_MOBILE_TIPS if mobile else _DESKTOP_TIPS)


def status_message(session: Session) -> str | None:
    """The banner shown over a finished game, or None while playing."""
    if session.game_won:
        if session.beaten:
            return "You Won! Congratulations, you beat the game!"
        if session.mobile:
            return "You Won! Tap to continue to next level"
        return "You Won! Click to continue to next level"
    if session.game_over:
        return "You lost! Tap to try again" if session.mobile else "You lost! Click to try again"
    return None


def _pg_rect(rect: Rect) -> pygame.Rect:
    return pygame.Rect(round(rect.x), round(rect.y), round(rect.width), round(rect.height))


class Renderer:
    """Draws a session, its menus and popups onto a canvas surface."""

    def __init__(self, assets_dir: str | os.PathLike[str] | None = None) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.assets_dir = Path(assets_dir) if assets_dir is not None else None
        self._fonts: dict[int, pygame.font.Font] = {}
        self._scaled: dict[tuple[str, int, int], pygame.Surface] = {}
        self._images: dict[str, pygame.Surface | None] = {
            name: self._load(name)
            for name in ("bomb.png", "flag.png", "background.jpg", *(f"{n}.png" for n in range(1, 9)))
        }

    def _load(self, name: str) -> pygame.Surface | None:
        if self.assets_dir is None:
            return None
        path = self.assets_dir / name
        if not path.is_file():
            return None
        try:
            return pygame.image.load(str(path))
        except pygame.error:
            return None

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    def measure(self, text: str, size: int) -> int:
        """Width in pixels of text drawn at the given font size."""
        return self._font(size).size(text)[0]

    def _text(
        self, surface: pygame.Surface, text: str, x: float, y: float, size: int, colour
    ) -> None:
        surface.blit(self._font(size).render(text, True, colour), (round(x), round(y)))

    def _blit_image(
        self, surface: pygame.Surface, name: str, x: int, y: int, width: int, height: int
    ) -> bool:
        image = self._images.get(name)
        if image is None or width <= 0 or height <= 0:
            return False
        key = (name, width, height)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = self._scaled[key] = pygame.transform.scale(image, (width, height))
        surface.blit(scaled, (x, y))
        return True

    def draw(
        self,
        surface: pygame.Surface,
        session: Session,
        menu: MenuState,
        layout: GridLayout,
    ) -> None:
        """Draw one frame of the game onto the canvas."""
        if not self._blit_image(
            surface, "background.jpg", 0, 0, surface.get_width(), surface.get_height()
        ):
            surface.fill(RAYWHITE)
        self._draw_grid(surface, session.board, layout)
        message = status_message(session)
        if message is not None:
            self._draw_banner(surface, message)
        self._draw_stats(surface, session, layout)
        if menu.popup is Popup.WELCOME:
            self._draw_welcome(surface, menu.mobile)
        elif menu.popup is Popup.HELP:
            self._draw_help(surface, menu)
        elif menu.popup is not None:
            self._draw_dialog(surface, menu)
        self._draw_menu_bar(surface, menu)

    def _draw_grid(self, surface: pygame.Surface, board: Board, layout: GridLayout) -> None:
        pygame.draw.rect(surface, BLACK, _pg_rect(layout.bounds))
        for r, row in enumerate(board.cells):
            for c, cell in enumerate(row):
                self._draw_cell(surface, cell, layout.cell_rect(r, c))

    def _draw_cell(self, surface: pygame.Surface, cell: Cell, rect: Rect) -> None:
        x, y, size = round(rect.x), round(rect.y), round(rect.width)
        colour = HIDDEN_CELL if cell.state is CellState.HIDDEN else OPEN_CELL
        pygame.draw.rect(surface, colour, (x, y, size - 1, size - 1))
        inner = size - 2
        if cell.state is CellState.REVEALED:
            if cell.has_mine:
                if not self._blit_image(surface, "bomb.png", x, y, inner, inner):
                    centre = (x + inner // 2, y + inner // 2)
                    pygame.draw.circle(surface, BLACK, centre, max(1, inner // 3))
            elif cell.adjacent_mines > 0:
                name = f"{cell.adjacent_mines}.png"
                if not self._blit_image(surface, name, x, y, inner, inner):
                    label = self._font(max(8, inner)).render(
                        str(cell.adjacent_mines),
                        True,
                        _NUMBER_COLOURS[(cell.adjacent_mines - 1) % len(_NUMBER_COLOURS)],
                    )
                    surface.blit(label, label.get_rect(center=(x + inner // 2, y + inner // 2)))
        elif cell.state is CellState.FLAGGED:
            if not self._blit_image(surface, "flag.png", x, y, inner, inner):
                pole_x = x + inner // 3
                top, bottom = y + inner // 5, y + inner * 4 // 5
                pygame.draw.line(surface, BLACK, (pole_x, top), (pole_x, bottom), max(1, inner // 20))
                pygame.draw.polygon(
                    surface,
                    (220, 0, 0),
                    [(pole_x, top), (x + inner * 4 // 5, top + inner // 6), (pole_x, top + inner // 3)],
                )

    def _draw_banner(self, surface: pygame.Surface, text: str) -> None:
        font_size, padding = 40, 20
        text_width = self.measure(text, font_size)
        rect_width = text_width + padding * 2
        rect_height = font_size + padding * 2
        box = pygame.Rect(
            (GAME_SCREEN_WIDTH - rect_width) // 2,
            (GAME_SCREEN_HEIGHT - rect_height) // 2,
            rect_width,
            rect_height,
        )
        pygame.draw.rect(surface, BLACK, box, border_radius=round(rect_height * 0.15))
        label = self._font(font_size).render(text, True, WHITE)
        surface.blit(label, label.get_rect(center=box.center))

    def _draw_stats(self, surface: pygame.Surface, session: Session, layout: GridLayout) -> None:
        font_size, stats_height = 20, 30
        y = layout.offset_y - stats_height
        self._text(surface, f"Mines: {session.remaining_mines}", layout.offset_x, y, font_size, WHITE)
        timer = f"Timer: {int(session.game_time)}"
        x = layout.offset_x + layout.extent - self.measure(timer, font_size)
        self._text(surface, timer, x, y, font_size, WHITE)

    def _overlay(self, surface: pygame.Surface) -> None:
        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill(OVERLAY)
        surface.blit(shade, (0, 0))

    def _button(self, surface: pygame.Surface, rect: Rect, text: str) -> None:
        pygame.draw.rect(surface, GRAY, _pg_rect(rect))
        width = self.measure(text, 20)
        self._text(surface, text, rect.x + (rect.width - width) / 2, rect.y + 5, 20, BLACK)

    def _title(self, surface: pygame.Surface, frame: Rect, title: str) -> None:
        width = self.measure(title, 24)
        self._text(surface, title, frame.x + (frame.width - width) / 2, frame.y + 30, 24, BLACK)

    def _draw_welcome(self, surface: pygame.Surface, mobile: bool) -> None:
        self._overlay(surface)
        title = "Welcome to Minesweeper!"
        intro = "Here are some tips to help you get started:"
        tips = welcome_tips(mobile)
        padding, line_height = 30, 35
        max_width = max(
            self.measure(title, 24),
            self.measure(intro, 20),
            *(self.measure(tip, 20) for tip in tips),
        )
        width = max_width + padding * 2
        height = 450 if mobile else 400
        frame = Rect((GAME_SCREEN_WIDTH - width) / 2, (GAME_SCREEN_HEIGHT - height) / 2, width, height)
        pygame.draw.rect(surface, LIGHTGRAY, _pg_rect(frame))
        self._title(surface, frame, title)
        self._text(surface, intro, frame.x + padding, frame.y + 80, 20, BLACK)
        for index, tip in enumerate(tips):
            self._text(surface, tip, frame.x + padding, frame.y + 120 + index * line_height, 20, BLACK)
        ok_text = "Let's Play!"
        ok_width = self.measure(ok_text, 20) + 40
        ok = Rect(
            frame.x + (width - ok_width) / 2,
            frame.y + height - (80 if mobile else 60),
            ok_width,
            30,
        )
        self._button(surface, ok, ok_text)

    def _draw_help(self, surface: pygame.Surface, menu: MenuState) -> None:
        frame, ok = menu.popup_rect, menu.ok_rect
        if frame is None or ok is None:
            return
        self._overlay(surface)
        pygame.draw.rect(surface, LIGHTGRAY, _pg_rect(frame))
        self._title(surface, frame, "How to Play Minesweeper")
        for index, line in enumerate(_HELP_LINES):
            self._text(surface, line, frame.x + 30, frame.y + 80 + index * 35, 20, BLACK)
        self._button(surface, ok, "OK")

    def _draw_dialog(self, surface: pygame.Surface, menu: MenuState) -> None:
        frame, ok, box, field = menu.popup_rect, menu.ok_rect, menu.input_rect, menu.active_field
        if frame is None or ok is None or box is None or field is None:
            return
        title, prompt = _DIALOG_TEXT[menu.popup]
        self._overlay(surface)
        pygame.draw.rect(surface, LIGHTGRAY, _pg_rect(frame))
        self._title(surface, frame, title)
        self._text(surface, prompt, frame.x + 30, frame.y + 80, 20, BLACK)
        pygame.draw.rect(surface, WHITE, _pg_rect(box))
        pygame.draw.rect(surface, BLACK, _pg_rect(box), 2)
        if field.value:
            self._text(surface, field.value, box.x + 5, box.y + 5, 20, BLACK)
        self._button(surface, ok, "OK")

    def _menu_item(self, surface: pygame.Surface, rect: Rect, text: str) -> None:
        pygame.draw.rect(surface, BLACK, _pg_rect(rect))
        self._text(surface, text, rect.x + 10, rect.y + 2, 30, WHITE)

    def _draw_menu_bar(self, surface: pygame.Surface, menu: MenuState) -> None:
        pygame.draw.rect(surface, BLACK, (0, 0, GAME_SCREEN_WIDTH, 45))
        for rect, label, is_open in (
            (menu.file_rect, "File", menu.file_open),
            (menu.options_rect, "Options", menu.options_open),
            (menu.help_rect, "Help", menu.help_open),
        ):
            pygame.draw.rect(surface, DARKGRAY if is_open else BLACK, _pg_rect(rect))
            self._text(surface, label, rect.x + 10, 7, 30, WHITE)
        if menu.file_open:
            items = [(menu.new_game_rect, "New Game")]
            if menu.custom_game_rect is not None:
                items.append((menu.custom_game_rect, "Custom Game"))
            items += [
                (menu.save_game_rect, "Save Game"),
                (menu.load_game_rect, "Load Game"),
                (menu.quit_rect, "Quit"),
            ]
            for rect, label in items:
                self._menu_item(surface, rect, label)
        if menu.options_open:
            self._menu_item(surface, menu.toggle_music_rect, "Toggle Music")
        if menu.help_open:
            self._menu_item(surface, menu.about_rect, "About")