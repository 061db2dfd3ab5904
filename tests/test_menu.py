import pytest

from mineswept.menu import Action, MenuState, Popup, TextField


def measure(text, size):
    return len(text) * size // 2


def centre(rect):
    return rect.x + rect.width / 2, rect.y + rect.height / 2


@pytest.fixture
def menu():
    state = MenuState(False, measure)
    state.click(0, 300)
    return state


def open_file_item(menu, rect_name):
    menu.click(*centre(menu.file_rect))
    return menu.click(*centre(getattr(menu, rect_name)))


def test_starts_with_welcome_popup():
    state = MenuState(False, measure)
    assert state.popup is Popup.WELCOME
    assert state.modal is False


def test_click_dismisses_welcome():
    state = MenuState(False, measure)
    assert state.click(500, 500) == Action(Action.Kind.DISMISS_WELCOME)
    assert state.popup is None


def test_waiting_click_continues_before_welcome():
    state = MenuState(False, measure)
    assert state.click(500, 500, True) == Action(Action.Kind.CONTINUE)
    assert state.popup is Popup.WELCOME


def test_click_on_board_not_taken(menu):
    assert menu.click(480, 300) is None


def test_file_menu_toggles(menu):
    assert menu.click(*centre(menu.file_rect)) == Action(Action.Kind.CONSUMED)
    assert menu.file_open
    menu.click(*centre(menu.file_rect))
    assert not menu.file_open


def test_opening_one_menu_closes_others(menu):
    menu.click(*centre(menu.file_rect))
    menu.click(*centre(menu.help_rect))
    assert menu.help_open
    assert not menu.file_open


def test_new_game(menu):
    assert open_file_item(menu, "new_game_rect") == Action(Action.Kind.NEW_GAME)
    assert not menu.file_open


def test_quit(menu):
    assert open_file_item(menu, "quit_rect") == Action(Action.Kind.QUIT)


def test_click_elsewhere_closes_file_menu(menu):
    menu.click(*centre(menu.file_rect))
    assert menu.click(480, 400) == Action(Action.Kind.CONSUMED)
    assert not menu.file_open


def test_custom_game_by_enter(menu):
    open_file_item(menu, "custom_game_rect")
    assert menu.popup is Popup.CUSTOM_GAME
    assert menu.modal
    menu.text("12x12")
    assert menu.key_enter() == Action(Action.Kind.CUSTOM_GAME, "12x12")
    assert menu.popup is None
    assert menu.grid_size_field.value == ""


def test_custom_game_filters_characters(menu):
    open_file_item(menu, "custom_game_rect")
    menu.text("1a2X b")
    assert menu.grid_size_field.value == "12X"


def test_custom_game_ok_button(menu):
    open_file_item(menu, "custom_game_rect")
    menu.text("7")
    assert menu.click(*centre(menu.ok_rect)) == Action(Action.Kind.CUSTOM_GAME, "7")


def test_custom_game_empty_ok_closes(menu):
    open_file_item(menu, "custom_game_rect")
    assert menu.click(*centre(menu.ok_rect)) == Action(Action.Kind.CONSUMED)
    assert menu.popup is None


def test_custom_game_click_outside_cancels(menu):
    open_file_item(menu, "custom_game_rect")
    menu.text("9")
    assert menu.click(1, 530) == Action(Action.Kind.CONSUMED)
    assert menu.popup is None
    assert menu.grid_size_field.value == ""


def test_custom_game_click_inside_keeps_popup(menu):
    open_file_item(menu, "custom_game_rect")
    frame = menu.popup_rect
    assert menu.click(frame.x + 5, frame.y + 5) == Action(Action.Kind.CONSUMED)
    assert menu.popup is Popup.CUSTOM_GAME


def test_backspace(menu):
    open_file_item(menu, "custom_game_rect")
    menu.text("15")
    menu.key_backspace()
    assert menu.grid_size_field.value == "1"


def test_save_via_ok_button(menu):
    open_file_item(menu, "save_game_rect")
    assert menu.popup is Popup.SAVE
    menu.text("game.sav")
    assert menu.click(*centre(menu.ok_rect)) == Action(Action.Kind.SAVE, "game.sav")
    assert menu.popup is None


def test_save_empty_enter(menu):
    open_file_item(menu, "save_game_rect")
    assert menu.key_enter() == Action(Action.Kind.CONSUMED)
    assert menu.popup is None


def test_load_via_enter(menu):
    open_file_item(menu, "load_game_rect")
    menu.text("slot1")
    assert menu.key_enter() == Action(Action.Kind.LOAD, "slot1")


def test_filename_cleared_on_open(menu):
    open_file_item(menu, "save_game_rect")
    menu.text("old")
    menu.click(1, 530)
    open_file_item(menu, "load_game_rect")
    assert menu.filename_field.value == ""


def test_save_click_inside_not_taken(menu):
    open_file_item(menu, "save_game_rect")
    frame = menu.popup_rect
    assert menu.click(frame.x + 5, frame.y + 5) is None
    assert menu.popup is Popup.SAVE


def test_enter_without_dialog(menu):
    assert menu.key_enter() is None


def test_toggle_music(menu):
    menu.click(*centre(menu.options_rect))
    assert menu.click(*centre(menu.toggle_music_rect)) == Action(Action.Kind.TOGGLE_MUSIC)
    assert not menu.options_open


def test_help_popup_flow(menu):
    menu.click(*centre(menu.help_rect))
    assert menu.click(*centre(menu.about_rect)) == Action(Action.Kind.CONSUMED)
    assert menu.popup is Popup.HELP
    assert menu.modal
    assert menu.popup_rect.width == 500
    menu.click(480, 300)
    assert menu.popup is None


def test_dialog_geometry(menu):
    open_file_item(menu, "save_game_rect")
    frame, ok, box = menu.popup_rect, menu.ok_rect, menu.input_rect
    assert frame.width == 400 and frame.height == 200
    assert frame.x + frame.width / 2 == 480
    assert ok.bottom == frame.bottom - 30
    assert box.x == frame.x + 30 and box.right == frame.right - 30


def test_menu_bar_layout(menu):
    assert menu.options_rect.x == menu.file_rect.right + 20
    assert menu.help_rect.x == menu.options_rect.right + 20
    assert menu.new_game_rect.y == menu.file_rect.bottom
    assert menu.quit_rect.width == menu.new_game_rect.width
    assert menu.quit_rect.y == menu.load_game_rect.bottom


def test_mobile_has_no_custom_game():
    state = MenuState(True, measure)
    assert state.custom_game_rect is None
    assert state.save_game_rect.y == state.new_game_rect.bottom


def test_text_field_limit():
    field = TextField(3)
    field.type("abcdef")
    assert field.value == "abc"
    field.clear()
    assert field.value == ""


def test_field_limits_from_dialog(menu):
    open_file_item(menu, "custom_game_rect")
    menu.text("9" * 40)
    assert len(menu.grid_size_field.value) == 31