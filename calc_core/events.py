"""
Event system for calculator input and display reporting.
Lets the presentation layer and console reporter observe the state machine
without the core knowing who is listening.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List
import threading


class EventType(Enum):
    """Types of events emitted while the calculator runs."""
    # App lifecycle
    APP_START = "app_start"
    APP_EXIT = "app_exit"
    CONFIG_LOADED = "config_loaded"

    # Input
    BUTTON_ACTIVATED = "button_activated"
    INPUT_IGNORED = "input_ignored"

    # State machine
    DISPLAY_CHANGED = "display_changed"
    CALCULATION_COMPLETE = "calculation_complete"
    CALCULATION_ERROR = "calculation_error"


@dataclass
class CalcEvent:
    """An event emitted by the calculator or its front-ends."""
    event_type: EventType
    timestamp: datetime = field(default_factory=datetime.now)
    data: Dict[str, Any] = field(default_factory=dict)
    message: str = ""

    def __str__(self) -> str:
        return f"[{self.event_type.value}] {self.message}"


class EventEmitter:
    """
    Event emitter for calculator activity.
    Allows subscribers to receive updates as input is processed.
    """

    def __init__(self, max_history: int = 100):
        self._listeners: Dict[EventType, List[Callable[[CalcEvent], None]]] = {}
        self._global_listeners: List[Callable[[CalcEvent], None]] = []
        self._lock = threading.Lock()
        self._event_history: List[CalcEvent] = []
        self._max_history = max_history

    def on(self, event_type: EventType, callback: Callable[[CalcEvent], None]):
        """
        Subscribe to a specific event type.

        Args:
            event_type: The type of event to listen for
            callback: Function to call when event occurs
        """
        with self._lock:
            if event_type not in self._listeners:
                self._listeners[event_type] = []
            self._listeners[event_type].append(callback)

    def on_all(self, callback: Callable[[CalcEvent], None]):
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event
        """
        with self._lock:
            self._global_listeners.append(callback)

    def off(self, event_type: EventType, callback: Callable[[CalcEvent], None]):
        """Remove a listener for a specific event type."""
        with self._lock:
            if event_type in self._listeners:
                try:
                    self._listeners[event_type].remove(callback)
                except ValueError:
                    pass

    def off_all(self, callback: Callable[[CalcEvent], None]):
        """Remove a global listener."""
        with self._lock:
            try:
                self._global_listeners.remove(callback)
            except ValueError:
                pass

    def emit(self, event: CalcEvent):
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        with self._lock:
            self._event_history.append(event)
            if len(self._event_history) > self._max_history:
                self._event_history.pop(0)

            specific_listeners = self._listeners.get(event.event_type, []).copy()
            global_listeners = self._global_listeners.copy()

        # Call listeners outside lock
        for listener in specific_listeners:
            try:
                listener(event)
            except Exception as e:
                print(f"[EventEmitter] Error in listener: {e}")

        for listener in global_listeners:
            try:
                listener(event)
            except Exception as e:
                print(f"[EventEmitter] Error in global listener: {e}")

    def emit_simple(self, event_type: EventType, message: str, **data):
        """
        Convenience method to emit an event with simple parameters.

        Args:
            event_type: Type of event
            message: Human-readable message
            **data: Additional event data
        """
        self.emit(CalcEvent(event_type=event_type, message=message, data=data))

    def get_history(self, limit: int = 50) -> List[CalcEvent]:
        """Get recent event history."""
        with self._lock:
            return self._event_history[-limit:]

    def clear_history(self):
        """Clear event history."""
        with self._lock:
            self._event_history.clear()
