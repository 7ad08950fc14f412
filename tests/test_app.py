"""
Tests for the pygame window: input events and the painter's pass.

Runs headless through SDL's dummy video driver.
"""
import copy
import os
import sys

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core.config import DEFAULT_CONFIG
from calc_core.events import EventEmitter, EventType
from calc_core.interface.app import CalculatorApp, key_name


@pytest.fixture
def config():
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["window"]["width"] = 640
    config["window"]["height"] = 480
    return config


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def app(config, emitter):
    app = CalculatorApp(config, emitter)
    yield app
    pygame.quit()


def button_pixel(app, value):
    width, height = app.surface.get_size()
    x, y, _ = app.camera.project(app.model.button_for(value).center, width, height)
    return int(round(x)), int(round(y))


def mouse(event_type, pos):
    return pygame.event.Event(event_type, button=1, pos=pos)


def click(app, pos, release_at=None):
    app.handle_event(mouse(pygame.MOUSEBUTTONDOWN, pos))
    if release_at is not None:
        app.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=release_at))
    app.handle_event(mouse(pygame.MOUSEBUTTONUP, release_at or pos))


class TestPointerInput:

    def test_click_activates_button(self, app):
        click(app, button_pixel(app, "5"))
        assert app.controller.display == "5"

    def test_small_jitter_is_still_a_click(self, app):
        x, y = button_pixel(app, "5")
        tolerance = app.click_tolerance
        click(app, (x, y), release_at=(x + tolerance, y))
        assert app.controller.display == "5"

    def test_drag_past_tolerance_orbits_instead(self, app):
        start = app.camera.position
        x, y = button_pixel(app, "5")
        click(app, (x, y), release_at=(x + app.click_tolerance + 36, y))
        assert app.controller.display == ""
        assert app.camera.position != start

    def test_click_after_drag_works(self, app):
        x, y = button_pixel(app, "5")
        click(app, (x, y), release_at=(x + 40, y))
        click(app, button_pixel(app, "7"))
        assert app.controller.display == "7"

    def test_right_button_is_ignored(self, app):
        pos = button_pixel(app, "5")
        app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=pos))
        app.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=3, pos=pos))
        assert app.controller.display == ""

    def test_wheel_dollies_camera(self, app):
        before = (app.camera.position - app.camera.target).length()
        app.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1))
        after = (app.camera.position - app.camera.target).length()
        assert after == pytest.approx(before * 0.95)


class TestKeyboardInput:

    def test_keys_drive_calculator(self, app):
        keys = [
            (pygame.K_7, "7"),
            (pygame.K_KP_MULTIPLY, ""),
            (pygame.K_KP6, ""),
            (pygame.K_RETURN, "\r"),
        ]
        for key, text in keys:
            app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key, unicode=text))
        assert app.controller.display == "42"

    def test_backspace_deletes(self, app):
        for key, text in [(pygame.K_1, "1"), (pygame.K_2, "2"), (pygame.K_BACKSPACE, "\b")]:
            app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key, unicode=text))
        assert app.controller.display == "1"

    def test_key_name(self):
        assert key_name(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_KP_ENTER, unicode="\r")) == "Enter"
        assert key_name(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a, unicode="a")) == "a"


class TestLifecycle:

    def test_escape_stops(self, app):
        app.running = True
        app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, unicode="\x1b"))
        assert not app.running

    def test_window_close_stops(self, app):
        app.running = True
        app.handle_event(pygame.event.Event(pygame.QUIT))
        assert not app.running

    def test_resize_updates_aspect(self, app):
        app.handle_event(pygame.event.Event(pygame.VIDEORESIZE, w=800, h=400, size=(800, 400)))
        assert app.camera.aspect == pytest.approx(2.0)

    def test_run_exits_on_quit(self, config, emitter):
        seen = []
        emitter.on_all(lambda e: seen.append(e.event_type))
        app = CalculatorApp(config, emitter)
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        assert app.run() == 0
        assert seen[0] == EventType.APP_START
        assert seen[-1] == EventType.APP_EXIT


class TestRendering:

    def test_collect_sorts_far_to_near(self, app):
        width, height = app.surface.get_size()
        items = app.renderer.collect(app.model, width, height)
        depths = [item.depth for item in items]
        assert depths == sorted(depths, reverse=True)

    def test_collect_culls_back_faces(self, app):
        width, height = app.surface.get_size()
        items = app.renderer.collect(app.model, width, height)
        total_faces = 6 * len(app.model.boxes())
        assert 0 < len(items) < total_faces
        for item in items:
            assert item.face.normal.dot(app.camera.position - item.face.center) > 0
        assert "back" not in {item.face.name for item in items}
        assert "bottom" not in {item.face.name for item in items}

    def test_every_button_front_is_visible(self, app):
        width, height = app.surface.get_size()
        fronts = {
            item.box.value
            for item in app.renderer.collect(app.model, width, height)
            if item.face.name == "front"
        }
        for button in app.model.buttons:
            assert button.value in fronts

    def test_render_draws_calculator(self, app):
        app.controller.activate("8")
        app.renderer.render(app.surface, app.model)
        width, height = app.surface.get_size()
        background = tuple(app.renderer.background)
        assert tuple(app.surface.get_at((0, 0)))[:3] == background
        assert tuple(app.surface.get_at((width // 2, height // 2)))[:3] != background
