"""Tests for the picker state machine."""

import pytest

from theme_switcher.catalog import list_themes
from theme_switcher.picker import PickerState, filter_themes
from theme_switcher.types import PickerMode

CATALOG = ["desert", "gruvbox", "nord"]


@pytest.fixture
def state():
    return PickerState.open(CATALOG)


class TestCatalog:
    def test_sorted_and_deduplicated(self, host):
        host.themes = ["nord", "desert", "nord", "Ayu", "gruvbox", ""]
        assert list_themes(host) == ["Ayu", "desert", "gruvbox", "nord"]


class TestFilter:
    @pytest.mark.parametrize(
        "query, expected",
        [
            ("", CATALOG),
            ("o", ["gruvbox", "nord"]),
            ("O", ["gruvbox", "nord"]),
            ("ES", ["desert"]),
            ("x", []),
        ],
    )
    def test_case_insensitive_substring(self, query, expected):
        assert filter_themes(CATALOG, query) == expected

    def test_order_preserved(self):
        themes = ["zenburn", "ayu", "monokai"]
        assert filter_themes(themes, "u") == ["zenburn", "ayu"]


class TestOpen:
    def test_starts_on_current_theme(self):
        assert PickerState.open(CATALOG, "nord").selected_index == 3

    def test_unknown_current_starts_at_one(self):
        assert PickerState.open(CATALOG, "default").selected_index == 1

    def test_initial_state(self, state):
        assert state.mode == PickerMode.NORMAL
        assert state.search_query == ""
        assert state.visible_themes == CATALOG
        assert state.all_themes == tuple(CATALOG)


class TestNavigation:
    def test_move_down_and_up(self, state):
        assert state.move_down() is True
        assert state.selected_theme() == "gruvbox"
        assert state.move_up() is True
        assert state.selected_theme() == "desert"

    def test_up_at_top_is_noop(self, state):
        assert state.move_up() is False
        assert state.selected_index == 1

    def test_down_at_bottom_is_noop(self):
        state = PickerState.open(CATALOG, "nord")
        assert state.move_down() is False
        assert state.selected_index == 3

    def test_jumps(self, state):
        assert state.jump_bottom() is True
        assert state.selected_index == 3
        assert state.jump_top() is True
        assert state.selected_index == 1

    def test_jump_on_empty_list_does_not_raise(self, state):
        state.enter_search()
        state.append_char("x")
        state.exit_search()
        assert state.jump_bottom() is False
        assert state.jump_top() is False
        assert state.selected_theme() is None

    def test_navigation_ignored_while_searching(self, state):
        state.enter_search()
        assert state.move_down() is False
        assert state.jump_bottom() is False
        assert state.selected_index == 1


class TestSearch:
    def test_scenario_type_backspace_escape(self, state):
        state.enter_search()
        assert state.search_active

        state.append_char("o")
        assert state.visible_themes == ["gruvbox", "nord"]
        assert state.selected_index == 1

        state.backspace()
        assert state.visible_themes == CATALOG
        assert state.selected_index == 1

        state.exit_search()
        assert state.mode == PickerMode.NORMAL
        assert state.search_query == ""

    def test_filter_resets_selection(self):
        state = PickerState.open(CATALOG, "nord")
        state.enter_search()
        state.append_char("r")
        assert state.visible_themes == ["desert", "gruvbox", "nord"]
        assert state.selected_index == 1

    def test_exit_keeps_query(self, state):
        state.enter_search()
        state.append_char("n")
        state.exit_search()
        assert state.search_query == "n"
        assert state.visible_themes == ["nord"]

    def test_chars_ignored_outside_search(self, state):
        assert state.append_char("n") is False
        assert state.search_query == ""

    def test_only_search_alphabet_accepted(self, state):
        state.enter_search()
        assert state.append_char("-") is True
        assert state.append_char("_") is True
        assert state.append_char(" ") is False
        assert state.append_char("ab") is False
        assert state.search_query == "-_"

    def test_backspace_on_empty_query_is_noop(self, state):
        state.enter_search()
        state.selected_index = 2
        assert state.backspace() is False
        assert state.selected_index == 2

    def test_clear_from_normal_mode(self, state):
        state.enter_search()
        state.append_char("d")
        state.exit_search()

        state.clear_search()
        assert state.search_query == ""
        assert state.visible_themes == CATALOG
        assert state.selected_index == 1
        assert state.mode == PickerMode.NORMAL

    def test_all_themes_never_changes(self, state):
        state.enter_search()
        for char in "gru":
            state.append_char(char)
        assert state.all_themes == tuple(CATALOG)
