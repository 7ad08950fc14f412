"""
Input controller - the seam between raw input and the calculator.

Pointer clicks and key names are turned into button values here, classified
into tokens, and dispatched to the Calculator. The matching button gets a
short press animation through the timer queue, which never delays dispatch.
"""
from typing import Any, Dict, Optional

from ..calculator import Calculator
from ..config import DEFAULT_CONFIG
from ..events import EventEmitter, EventType
from ..scene.builder import CalculatorModel
from ..scene.camera import PerspectiveCamera
from ..scene.geometry import Box, Vec3
from ..scene.raycast import pick_button
from ..scheduler import TimerQueue
from ..tokens import classify, key_to_value


class InputController:
    """
    Routes user input to a Calculator and keeps the scene in sync with it.
    """

    def __init__(
        self,
        calculator: Calculator,
        model: CalculatorModel,
        emitter: Optional[EventEmitter] = None,
        timers: Optional[TimerQueue] = None,
        camera: Optional[PerspectiveCamera] = None,
        animation: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            calculator: The state machine to drive
            model: Scene model; its screen text mirrors the display
            emitter: Optional emitter for input events
            timers: Timer queue for press animations; None disables them
            camera: Camera used for click picking
            animation: The "animation" config section
        """
        self.calculator = calculator
        self.model = model
        self.emitter = emitter
        self.timers = timers
        self.camera = camera
        animation = animation or DEFAULT_CONFIG["animation"]
        self.press_duration = int(animation["press_duration"])
        self.press_scale = float(animation["press_scale"])
        self.press_depth = float(animation["press_depth"])
        self.sync_screen()

    @property
    def display(self) -> str:
        return self.calculator.display

    def sync_screen(self):
        """Copy the calculator display onto the screen box."""
        self.model.screen.text = self.calculator.display

    def activate(self, value: str, source: str = "button") -> bool:
        """
        Activate a button value.

        Returns:
            True if the value was recognised and dispatched
        """
        token = classify(value)
        if token is None:
            if self.emitter:
                self.emitter.emit_simple(
                    EventType.INPUT_IGNORED,
                    f"Unrecognised input {value!r}",
                    value=value,
                    source=source,
                )
            return False

        button = self.model.button_for(value)
        if button is not None:
            self.press(button)

        if self.emitter:
            self.emitter.emit_simple(
                EventType.BUTTON_ACTIVATED,
                f"{value} ({source})",
                value=value,
                source=source,
            )
        self.calculator.handle(token)
        self.sync_screen()
        return True

    def handle_key(self, key: str) -> bool:
        """
        Handle a key press by name ("5", "+", "Enter", "Delete", ...).

        Keys only act when the calculator has a button for them.
        """
        value = key_to_value(key)
        if value is None or self.model.button_for(value) is None:
            return False
        return self.activate(value, source="keyboard")

    def handle_click(self, x: float, y: float, width: int, height: int) -> bool:
        """Handle a click at pixel (x, y) in a viewport of the given size."""
        if self.camera is None:
            return False
        button = pick_button(self.camera, self.model.boxes(), x, y, width, height)
        if button is None:
            return False
        return self.activate(button.value, source="pointer")

    def press(self, button: Box):
        """Squash the button now and restore it after the press duration."""
        if self.timers is None:
            return
        depth = Vec3(0.0, 0.0, self.press_depth)
        button.scale = Vec3(button.scale.x, button.scale.y, self.press_scale)
        button.offset = button.offset - depth

        def release():
            button.scale = Vec3(button.scale.x, button.scale.y, 1.0)
            button.offset = button.offset + depth

        self.timers.schedule(self.press_duration, release, label=f"release {button.name}")
