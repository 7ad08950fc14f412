"""
Terminal front-end: type button values at a prompt instead of clicking.

Each line is split into values ("12 + 3 =", "12+3=", "DEL") and fed through
the same InputController the 3D window uses. Slash commands control the
session.
"""
from typing import Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.panel import Panel

from ..events import EventEmitter, EventType
from ..tokens import BUTTON_VALUES, split_tokens
from .controller import InputController


class CalculatorREPL:
    """
    Interactive prompt over an InputController.
    """

    COMMANDS = {
        "display": "Show the current display",
        "state": "Show operands, operator and last result",
        "clear": "Reset the calculator",
        "help": "Show available commands",
        "exit": "Exit the REPL",
        "quit": "Exit the REPL",
    }

    def __init__(
        self,
        controller: InputController,
        emitter: Optional[EventEmitter] = None,
        console: Optional[Console] = None,
        prompt_session: Optional[PromptSession] = None,
    ):
        """
        Args:
            controller: Controller that owns the calculator
            emitter: Emitter for lifecycle events
            console: Rich console for output
            prompt_session: Optional session (tests inject one)
        """
        self.controller = controller
        self.emitter = emitter
        self.console = console or Console()
        self.prompt_session = prompt_session or PromptSession(
            history=InMemoryHistory(),
            completer=WordCompleter(
                list(BUTTON_VALUES) + [f"/{c}" for c in self.COMMANDS],
                sentence=True,
            ),
            style=Style.from_dict({'prompt': '#00aa00 bold'}),
        )
        self._command_handlers: Dict[str, Callable[[], bool]] = {
            "display": self._handle_display,
            "state": self._handle_state,
            "clear": self._handle_clear,
            "help": self._handle_help,
            "exit": self._handle_exit,
            "quit": self._handle_exit,
        }

    def feed(self, line: str) -> List[str]:
        """
        Feed one line of input.

        Returns:
            Values that were not recognised
        """
        ignored = []
        for value in split_tokens(line):
            if not self.controller.activate(value, source="repl"):
                ignored.append(value)
        return ignored

    def handle_line(self, line: str) -> bool:
        """
        Handle a line of input.

        Returns:
            False when the REPL should exit
        """
        text = line.strip()
        if not text:
            return True
        if text.startswith("/"):
            name = text[1:].split()[0].lower() if len(text) > 1 else ""
            handler = self._command_handlers.get(name)
            if handler is None:
                self.console.print(f"[red]Unknown command: /{name}[/red] (try /help)")
                return True
            return handler()
        if text.lower() in ("exit", "quit"):
            return False

        ignored = self.feed(text)
        if ignored:
            self.console.print(f"[yellow]Ignored: {' '.join(ignored)}[/yellow]")
        self._print_display()
        return True

    def get_bottom_toolbar(self):
        display = self.controller.display or " "
        return HTML(
            f'<b>Display:</b> <style bg="ansiblue">{_escape(display)}</style> | '
            f'<style fg="ansigray">/help for commands</style>'
        )

    def run(self) -> int:
        """Run the prompt loop until exit or EOF."""
        self.console.print(Panel(
            "[bold]Calculator REPL[/bold]\n\n"
            "Type digits and operators, e.g. [cyan]12 + 3 =[/cyan] or [cyan]12+3=[/cyan].\n"
            "[cyan]DEL[/cyan] removes the last entry. Use /help for commands.",
            title="Welcome",
            border_style="blue",
        ))
        if self.emitter:
            self.emitter.emit_simple(EventType.APP_START, "Calculator REPL")

        running = True
        while running:
            try:
                line = self.prompt_session.prompt(
                    "calc> ", bottom_toolbar=self.get_bottom_toolbar
                )
                running = self.handle_line(line)
            except KeyboardInterrupt:
                self.console.print("[dim]Interrupted. Type /exit to quit.[/dim]")
            except EOFError:
                running = False

        if self.emitter:
            self.emitter.emit_simple(EventType.APP_EXIT, "REPL closed")
        return 0

    # ---- commands --------------------------------------------------------

    def _print_display(self):
        self.console.print(f"[bold]{_escape_markup(self.controller.display) or '(empty)'}[/bold]")

    def _handle_display(self) -> bool:
        self._print_display()
        return True

    def _handle_state(self) -> bool:
        state = self.controller.calculator.state
        phase = self.controller.calculator.phase
        self.console.print(
            f"operand1={state.operand1!r} operator={state.operator!r} "
            f"operand2={state.operand2!r} result={state.result!r} phase={phase.value}",
            markup=False,
            highlight=False,
        )
        return True

    def _handle_clear(self) -> bool:
        self.controller.calculator.reset()
        self.controller.sync_screen()
        self._print_display()
        return True

    def _handle_help(self) -> bool:
        for name, description in self.COMMANDS.items():
            self.console.print(f"  [cyan]/{name}[/cyan]  {description}")
        return True

    def _handle_exit(self) -> bool:
        return False


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_markup(text: str) -> str:
    return text.replace("[", r"\[")
