import pygame
import pytest

from game.config import config_from_args
from game.round_state import RoundPhase
from game.state_manager import StateManager
from ui.screen_game import FOOTER_H, TOP_BAR_H, GameScreen

from conftest import BAKER, BOND, BRIXTON, FixedRng

WINDOW = (1000, 600)


def _key(key, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode, mod=0)


def _click(pos):
    return [pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos),
            pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos)]


def _type(screen, text):
    for ch in text:
        screen.handle_input([_key(pygame.K_a, ch)])


@pytest.fixture
def manager(catalog, index):
    sm = StateManager(config_from_args([]), catalog, index)
    sm.game.rng = FixedRng(BRIXTON)
    return sm


@pytest.fixture
def map_image():
    image = pygame.Surface((800, 400), 0, 32)
    image.fill((240, 240, 240))
    return image


def _screen(manager, map_image, full_map_image=None):
    screen = GameScreen(manager, map_image, full_map_image)
    screen.on_enter()
    screen.render(pygame.Surface(WINDOW, 0, 32))
    return screen


@pytest.fixture
def screen(manager, map_image):
    return _screen(manager, map_image)


def test_enter_starts_a_round_and_lays_out_the_map(screen):
    assert screen.game.phase == RoundPhase.IN_PROGRESS
    assert screen.game.target == BRIXTON
    assert screen.viewer.bounds == pygame.Rect(0, TOP_BAR_H, WINDOW[0],
                                               WINDOW[1] - TOP_BAR_H - FOOTER_H)


def test_full_map_round_trip_keeps_guesses_and_view(screen, map_image):
    screen._submit("Bond Street")
    screen.viewer.zoom(6, (700, 300))
    saved_scale, saved_offset = screen.viewer.state.scale, screen.viewer.state.offset
    guessed = screen.game.guessed

    screen.handle_input([_key(pygame.K_TAB)])
    assert screen.full_map_mode
    assert screen.overlay.show_all
    assert screen.viewer.state.scale == 1.0
    assert screen.viewer.state.offset == (0.0, 0.0)
    assert screen.game.guessed == guessed

    # guesses are ignored while the whole network is on show
    screen._submit("Baker Street")
    assert BAKER not in screen.game.guessed

    screen.handle_input([_key(pygame.K_TAB)])
    assert not screen.full_map_mode
    assert not screen.overlay.show_all
    assert screen.viewer.image is map_image
    assert screen.viewer.state.scale == saved_scale
    assert screen.viewer.state.offset == pytest.approx(saved_offset)
    assert screen.game.guessed == guessed == frozenset({BOND})


def test_full_map_image_replaces_overlay(manager, map_image):
    labelled = pygame.Surface((800, 400), 0, 32)
    screen = _screen(manager, map_image, labelled)

    screen._toggle_full_map()
    assert screen.viewer.image is labelled
    assert not screen.compositor.overlay_visible
    assert not screen.overlay.show_all

    screen._toggle_full_map()
    assert screen.viewer.image is map_image
    assert screen.compositor.overlay_visible


def test_restart_leaves_full_map_first(screen):
    screen._submit("Bond Street")
    screen._toggle_full_map()
    screen.handle_input([_key(pygame.K_F5)])

    assert not screen.full_map_mode
    assert not screen.overlay.show_all
    assert not screen.buttons['full_map'].active
    assert screen.game.guessed == frozenset()
    assert screen.viewer.state.scale == 1.0


def test_printable_keys_type_and_arrows_pan(screen):
    screen.viewer.state.scale = 2.0
    _type(screen, "ba")
    assert screen.input.text == "ba"
    assert screen.game.input_text == "ba"
    assert screen.viewer.state.offset == (0.0, 0.0)

    screen.handle_input([_key(pygame.K_RIGHT)])
    assert screen.input.text == "ba"
    assert screen.viewer.state.offset[0] > 0


def test_typing_offers_suggestions_and_clicking_one_guesses(screen):
    _type(screen, "bon")
    assert [b.text for b in screen.suggestion_buttons] == ["Bond Street"]

    screen.handle_input(_click(screen.suggestion_buttons[0].rect.center))
    assert BOND in screen.game.guessed
    assert screen.input.text == ""
    assert screen.suggestion_buttons == []


def test_enter_submits_typed_guess(screen):
    _type(screen, "Baker Street")
    screen.handle_input([_key(pygame.K_RETURN)])
    assert BAKER in screen.game.guessed
    assert screen.input.text == ""


def test_escape_clears_input_then_goes_back(screen):
    _type(screen, "x")
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) is None
    assert screen.input.text == ""
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) == 'BACK'


def test_window_shorter_than_the_bars_renders(screen):
    screen.render(pygame.Surface((1000, TOP_BAR_H + FOOTER_H - 10), 0, 32))
    assert screen.viewer.bounds.height == 0
