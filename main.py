#!/usr/bin/env python3
"""
calc3d - run the calculator from a source checkout.

Commands:
    run                  - Open the 3D calculator window (default)
    repl                 - Use the calculator from the terminal
    press <values...>    - Feed values and print the display
    config [show|path|init]
"""
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from calc_core.cli import main


if __name__ == "__main__":
    sys.exit(main())
