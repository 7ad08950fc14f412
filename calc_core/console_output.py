"""
Console Output - Rich console reporting of calculator activity.

Provides:
1. ConsoleReporter: prints input, display and calculation events as they happen
2. SessionMetrics: counters shown in the exit summary
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from .events import CalcEvent, EventEmitter, EventType


class OutputMode(Enum):
    """Output mode for console reporter."""
    RICH = "rich"
    PLAIN = "plain"
    QUIET = "quiet"


@dataclass
class SessionMetrics:
    """Counters for one interactive session."""
    start_time: float = 0.0
    end_time: float = 0.0
    inputs: int = 0
    ignored_inputs: int = 0
    calculations: int = 0
    errors: int = 0
    last_display: str = ""

    @property
    def duration(self) -> float:
        """Session length in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


class ConsoleReporter:
    """
    Prints calculator events to the terminal.

    Displays:
    - [INPUT] <value>
    - [DISPLAY] <text>
    - [CALC] <expression> = <result>
    - an exit summary with session counters
    """

    def __init__(
        self,
        emitter: EventEmitter,
        mode: OutputMode = OutputMode.RICH,
        console: Optional[Console] = None,
    ):
        """
        Args:
            emitter: Emitter to subscribe to
            mode: Output mode (rich, plain, quiet)
            console: Optional Console (tests pass one that records)
        """
        self.mode = mode
        self.console = console or Console(no_color=(mode == OutputMode.PLAIN))
        self.metrics = SessionMetrics()
        self.emitter = emitter
        emitter.on_all(self._handle_event)

    def detach(self):
        """Stop receiving events."""
        self.emitter.off_all(self._handle_event)

    def _handle_event(self, event: CalcEvent):
        self._track(event)
        if self.mode == OutputMode.QUIET:
            return

        handler = {
            EventType.APP_START: self._on_app_start,
            EventType.APP_EXIT: self._on_app_exit,
            EventType.CONFIG_LOADED: self._on_config_loaded,
            EventType.BUTTON_ACTIVATED: self._on_button,
            EventType.INPUT_IGNORED: self._on_ignored,
            EventType.DISPLAY_CHANGED: self._on_display,
            EventType.CALCULATION_COMPLETE: self._on_calculation,
            EventType.CALCULATION_ERROR: self._on_error,
        }.get(event.event_type)
        if handler:
            handler(event)

    def _track(self, event: CalcEvent):
        m = self.metrics
        event_type = event.event_type
        if event_type == EventType.APP_START:
            m.start_time = time.time()
        elif event_type == EventType.APP_EXIT:
            m.end_time = time.time()
        elif event_type == EventType.BUTTON_ACTIVATED:
            m.inputs += 1
        elif event_type == EventType.INPUT_IGNORED:
            m.ignored_inputs += 1
        elif event_type == EventType.CALCULATION_COMPLETE:
            m.calculations += 1
        elif event_type == EventType.CALCULATION_ERROR:
            m.errors += 1
        elif event_type == EventType.DISPLAY_CHANGED:
            m.last_display = event.data.get("display", "")

    def _print(self, rich_text: str, plain_text: str):
        if self.mode == OutputMode.RICH:
            self.console.print(rich_text)
        else:
            self.console.print(plain_text, markup=False, highlight=False)

    # ---- handlers --------------------------------------------------------

    def _on_app_start(self, event: CalcEvent):
        if self.mode == OutputMode.RICH:
            self.console.print(Panel(event.message or "3D Calculator", box=box.ROUNDED, style="cyan"))
        else:
            self._print("", f"=== {event.message or '3D Calculator'} ===")

    def _on_config_loaded(self, event: CalcEvent):
        path = event.data.get("path", "")
        self._print(f"[dim][CONFIG] {path}[/dim]", f"[CONFIG] {path}")

    def _on_button(self, event: CalcEvent):
        value = event.data.get("value", "")
        source = event.data.get("source", "")
        self._print(f"[blue][INPUT][/blue] {value} [dim]({source})[/dim]", f"[INPUT] {value} ({source})")

    def _on_ignored(self, event: CalcEvent):
        self._print(f"[yellow][IGNORED][/yellow] {event.message}", f"[IGNORED] {event.message}")

    def _on_display(self, event: CalcEvent):
        display = event.data.get("display", "")
        self._print(f"[bold][DISPLAY][/bold] {display}", f"[DISPLAY] {display}")

    def _on_calculation(self, event: CalcEvent):
        self._print(f"[green][CALC][/green] {event.message}", f"[CALC] {event.message}")

    def _on_error(self, event: CalcEvent):
        self._print(f"[red][ERROR][/red] {event.message}", f"[ERROR] {event.message}")

    def _on_app_exit(self, event: CalcEvent):
        m = self.metrics
        if self.mode != OutputMode.RICH:
            self._print("", (
                f"Session: {m.inputs} inputs, {m.calculations} calculations, "
                f"{m.errors} errors, {m.duration:.1f}s"
            ))
            return

        table = Table(title="Session Summary", box=box.SIMPLE, show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Inputs", str(m.inputs))
        table.add_row("Ignored", str(m.ignored_inputs))
        table.add_row("Calculations", str(m.calculations))
        table.add_row("Errors", str(m.errors))
        table.add_row("Last display", m.last_display or "-")
        table.add_row("Duration", f"{m.duration:.1f}s")
        self.console.print(table)
