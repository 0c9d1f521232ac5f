"""Play the configured adventure in the terminal.

Usage (example):
    python run.py
Then type the number of an option, or 'i' to show the inventory.
The document path comes from AF_ADVENTURE_PATH (default adventure_demo.av).
"""
from __future__ import annotations
import logging
import sys
try:
    # Force UTF-8 output on Windows consoles
    sys.stdout.reconfigure(encoding='utf-8')
    sys.stderr.reconfigure(encoding='utf-8')
except (AttributeError, OSError, ValueError):
    pass
from game.bootstrap import load_adventure_and_state
from engine.adventure.console import ConsolePresenter
from engine.adventure.errors import AdventureError
from engine.adventure.runtime import SceneRunner
from config import get_clear_lines, get_inventory_key, get_log_level


def game_loop() -> int:
    document, state = load_adventure_and_state()
    presenter = ConsolePresenter(clear_lines=get_clear_lines(), inventory_key=get_inventory_key())
    runner = SceneRunner(document, state, presenter)
    turns = runner.run()
    logging.info(f"Adventure finished after {turns} turn(s)")
    return turns


def main() -> int:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    try:
        game_loop()
    except (AdventureError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nBye.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
