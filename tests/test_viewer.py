import pygame
import pytest

import viewer
from juliaset import KeyDown, PointerButtonDown, PointerMove, Quit


def test_translate_quit():
    assert viewer.translate_event(pygame.event.Event(pygame.QUIT)) == Quit()


def test_translate_pointer_events():
    move = viewer.translate_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(12, 34), rel=(0, 0), buttons=(0, 0, 0)))
    assert move == PointerMove(12, 34)
    press = viewer.translate_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(1, 1), button=1))
    assert press == PointerButtonDown()


def test_translate_ignores_other_events():
    assert viewer.translate_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(1, 1), button=1)) is None


@pytest.mark.parametrize("event, expected", [
    (Quit(), True),
    (KeyDown("escape"), True),
    (KeyDown("1"), True),
    (KeyDown("a"), False),
    (PointerMove(0, 0), False),
])
def test_wants_quit(event, expected):
    assert viewer.wants_quit(event) is expected


def test_parser_defaults():
    opt = viewer.build_parser().parse_args([])
    assert opt.fps == 60
    assert not opt.show_label
    assert not opt.verbose


def test_video_driver_untouched_outside_wayland():
    environ = {"DISPLAY": ":0"}
    viewer.configure_video_driver(environ)
    assert "SDL_VIDEODRIVER" not in environ


def test_video_driver_prefers_x11_on_wayland():
    environ = {"WAYLAND_DISPLAY": "wayland-0"}
    viewer.configure_video_driver(environ)
    assert environ["SDL_VIDEODRIVER"] == "x11"


def test_video_driver_respects_user_choice():
    environ = {"WAYLAND_DISPLAY": "wayland-0", "SDL_VIDEODRIVER": "wayland"}
    viewer.configure_video_driver(environ)
    assert environ["SDL_VIDEODRIVER"] == "wayland"
