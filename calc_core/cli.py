#!/usr/bin/env python3
"""
CLI entry point for calc3d.

This module provides the main entry point for the calc3d command.
"""
import argparse
import sys
from typing import List, Optional

import yaml

from . import __version__
from .calculator import Calculator
from .config import ConfigError, ConfigManager
from .console_output import ConsoleReporter, OutputMode
from .events import EventEmitter, EventType
from .interface.controller import InputController
from .scene.builder import build_calculator
from .tokens import split_tokens


def resolve_output_mode(args, config: dict) -> OutputMode:
    """Command-line flags win over the config's console.mode."""
    if getattr(args, "quiet", False):
        return OutputMode.QUIET
    if getattr(args, "plain", False):
        return OutputMode.PLAIN
    try:
        return OutputMode(config.get("console", {}).get("mode", "rich"))
    except ValueError:
        return OutputMode.RICH


def load_config(args) -> tuple:
    """
    Load configuration for a command.

    Returns:
        Tuple of (ConfigManager, config_dict)
    """
    cm = ConfigManager()
    config = cm.load_config(getattr(args, "config", None))
    return cm, config


def cmd_run(args, cm: ConfigManager, config: dict) -> int:
    """Open the 3D calculator window."""
    # Imported here so the terminal commands never initialise pygame
    from .interface.app import CalculatorApp

    if args.width:
        config["window"]["width"] = args.width
    if args.height:
        config["window"]["height"] = args.height

    emitter = EventEmitter()
    ConsoleReporter(emitter, resolve_output_mode(args, config))
    emitter.emit_simple(EventType.CONFIG_LOADED, "Config loaded", path=str(cm.config_path))

    app = CalculatorApp(config, emitter)
    return app.run()


def cmd_repl(args, cm: ConfigManager, config: dict) -> int:
    """Start the terminal calculator."""
    from .interface.repl import CalculatorREPL

    emitter = EventEmitter()
    mode = resolve_output_mode(args, config)
    # The REPL prints the display itself; per-event output only in verbose runs
    ConsoleReporter(emitter, mode if args.verbose else OutputMode.QUIET)

    calculator = Calculator(emitter)
    controller = InputController(calculator, build_calculator(config), emitter=emitter)
    return CalculatorREPL(controller, emitter=emitter).run()


def cmd_press(args, cm: ConfigManager, config: dict) -> int:
    """Feed button values to a fresh calculator and print the display."""
    emitter = EventEmitter()
    if args.trace:
        ConsoleReporter(emitter, resolve_output_mode(args, config))

    calculator = Calculator(emitter)
    controller = InputController(calculator, build_calculator(config), emitter=emitter)

    ignored = []
    for value in split_tokens(" ".join(args.values)):
        if not controller.activate(value, source="cli"):
            ignored.append(value)

    if ignored:
        print(f"Ignored: {' '.join(ignored)}", file=sys.stderr)
    print(controller.display)
    return 0


def cmd_config(args, cm: ConfigManager, config: dict) -> int:
    """Show, locate or write the configuration file."""
    if args.action == "path":
        print(cm.config_path or cm.get_global_config_path())
    elif args.action == "init":
        dest = args.output or str(cm.get_global_config_path())
        cm.copy_default_config(dest)
        print(f"Default config written to: {dest}")
    else:
        print(yaml.dump(config, default_flow_style=False, allow_unicode=True), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calc3d",
        description="calc3d - a calculator you operate inside a 3D scene",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
    run                       - Open the 3D calculator window (default)
    repl                      - Use the calculator from the terminal
    press <values...>         - Feed values, e.g. press 5+3= or press 12 DEL +
    config [show|path|init]   - Inspect or write the configuration
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"calc3d {__version__}"
    )
    parser.add_argument("--config", "-c", help="Path to a YAML config file")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress event output")
    parser.add_argument("--plain", action="store_true", help="Plain text output without colors")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Open the 3D calculator window (default)")
    run_parser.add_argument("--width", type=int, help="Window width in pixels")
    run_parser.add_argument("--height", type=int, help="Window height in pixels")

    repl_parser = subparsers.add_parser("repl", help="Use the calculator from the terminal")
    repl_parser.add_argument("--verbose", "-v", action="store_true", help="Print every event")

    press_parser = subparsers.add_parser("press", help="Feed values and print the display")
    press_parser.add_argument("values", nargs="+", help="Button values: 0-9 + - * / = DEL")
    press_parser.add_argument("--trace", action="store_true", help="Print every event")

    config_parser = subparsers.add_parser("config", help="Inspect or write the configuration")
    config_parser.add_argument("action", nargs="?", default="show", choices=["show", "path", "init"])
    config_parser.add_argument("--output", "-o", help="Destination for 'init'")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        args.command = "run"
        args.width = None
        args.height = None

    commands = {
        "run": cmd_run,
        "repl": cmd_repl,
        "press": cmd_press,
        "config": cmd_config,
    }

    try:
        cm, config = load_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args, cm, config)
    except ConfigError as e:
        # Bad colors and layouts surface while the scene is built
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
