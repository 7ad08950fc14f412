"""
pygame front-end: window, input loop and redraw.
"""
from typing import Any, Dict, Optional

import pygame

from ..calculator import Calculator
from ..events import EventEmitter, EventType
from ..scene.builder import build_calculator
from ..scene.camera import OrbitControls, PerspectiveCamera
from ..scene.geometry import vec3
from ..scene.renderer import SceneRenderer
from ..scheduler import TimerQueue
from .controller import InputController


# pygame keys whose unicode text is empty or ambiguous
_KEY_NAMES = {
    pygame.K_RETURN: "Enter",
    pygame.K_KP_ENTER: "Enter",
    pygame.K_DELETE: "Delete",
    pygame.K_BACKSPACE: "Backspace",
    pygame.K_KP_PLUS: "+",
    pygame.K_KP_MINUS: "-",
    pygame.K_KP_MULTIPLY: "*",
    pygame.K_KP_DIVIDE: "/",
    pygame.K_KP_EQUALS: "=",
    pygame.K_KP0: "0",
    pygame.K_KP1: "1",
    pygame.K_KP2: "2",
    pygame.K_KP3: "3",
    pygame.K_KP4: "4",
    pygame.K_KP5: "5",
    pygame.K_KP6: "6",
    pygame.K_KP7: "7",
    pygame.K_KP8: "8",
    pygame.K_KP9: "9",
}


def key_name(event) -> str:
    """Name of the key in a KEYDOWN event, in the controller's vocabulary."""
    return _KEY_NAMES.get(event.key) or getattr(event, "unicode", "")


class CalculatorApp:
    """
    Interactive 3D calculator window.

    Left click on a button activates it; left drag orbits the camera; the
    wheel zooms. Escape or closing the window quits.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        emitter: EventEmitter,
        calculator: Optional[Calculator] = None,
    ):
        pygame.init()
        window = config["window"]
        self.config = config
        self.emitter = emitter
        self.fps = int(window["fps"])
        self.surface = pygame.display.set_mode(
            (int(window["width"]), int(window["height"])), pygame.RESIZABLE
        )
        pygame.display.set_caption(window["title"])
        self.clock = pygame.time.Clock()

        width, height = self.surface.get_size()
        cam = config["camera"]
        self.camera = PerspectiveCamera(
            fov=cam["fov"],
            aspect=width / height if height else 1.0,
            near=cam["near"],
            far=cam["far"],
            position=vec3(cam["position"]),
            target=vec3(cam["target"]),
        )
        ctl = config["controls"]
        self.controls = OrbitControls(
            self.camera,
            rotate_speed=float(ctl["rotate_speed"]),
            zoom_speed=float(ctl["zoom_speed"]),
            min_distance=float(ctl["min_distance"]),
            max_distance=float(ctl["max_distance"]),
        )
        self.controls.on_change(self._mark_dirty)
        self.click_tolerance = int(ctl["click_tolerance"])

        self.model = build_calculator(config)
        self.timers = TimerQueue(clock=pygame.time.get_ticks)
        self.calculator = calculator or Calculator(emitter)
        self.controller = InputController(
            self.calculator,
            self.model,
            emitter=emitter,
            timers=self.timers,
            camera=self.camera,
            animation=config["animation"],
        )
        self.renderer = SceneRenderer.from_config(self.camera, config)

        self.running = False
        self._dirty = True
        self._press_origin = None
        self._last_pointer = None
        self._dragging = False

    def _mark_dirty(self):
        self._dirty = True

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif self.controller.handle_key(key_name(event)):
                self._dirty = True
        elif event.type == pygame.VIDEORESIZE:
            self._on_resize(event.w, event.h)
        elif event.type == pygame.VIDEOEXPOSE:
            self._dirty = True
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._press_origin = event.pos
            self._last_pointer = event.pos
            self._dragging = False
        elif event.type == pygame.MOUSEMOTION and self._press_origin is not None:
            self._on_drag(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self._press_origin is not None and not self._dragging:
                width, height = self.surface.get_size()
                if self.controller.handle_click(event.pos[0], event.pos[1], width, height):
                    self._dirty = True
            self._press_origin = None
            self._dragging = False
        elif event.type == pygame.MOUSEWHEEL:
            self.controls.dolly(event.y)

    def _on_drag(self, pos):
        ox, oy = self._press_origin
        if not self._dragging:
            if abs(pos[0] - ox) <= self.click_tolerance and abs(pos[1] - oy) <= self.click_tolerance:
                return
            self._dragging = True
        lx, ly = self._last_pointer
        self.controls.rotate(pos[0] - lx, pos[1] - ly, self.surface.get_height())
        self._last_pointer = pos

    def _on_resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            return
        self.surface = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.renderer.resize(width, height)
        self._dirty = True

    def run(self) -> int:
        """Run until the window is closed. Returns an exit code."""
        self.running = True
        self.emitter.emit_simple(EventType.APP_START, self.config["window"]["title"])
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                if self.timers.run_due(pygame.time.get_ticks()):
                    self._dirty = True
                if self._dirty:
                    self.renderer.render(self.surface, self.model)
                    pygame.display.flip()
                    self._dirty = False
                self.clock.tick(self.fps)
        finally:
            self.timers.cancel_all()
            self.emitter.emit_simple(EventType.APP_EXIT, "Window closed")
            pygame.quit()
        return 0
