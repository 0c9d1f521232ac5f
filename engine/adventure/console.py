"""Terminal presentation for the scene engine.

Renders scene text and numbered options, renders the inventory view and
collects a validated option index from the player.
"""
from __future__ import annotations
from typing import Callable, List, Optional, Tuple

from .model import GameState, Item, Variable

DELIMITER = "------"
PROMPT = "> "


def inventory_view(gs: GameState) -> Tuple[List[Item], List[Variable]]:
    """Items with a positive count and variables flagged show_always."""
    return gs.owned_items(), gs.visible_variables()


def format_items(items: List[Item]) -> str:
    return "".join(f"{item.id}({item.count}), " for item in items)


def format_variables(variables: List[Variable]) -> str:
    return ", ".join(f'{var.id}: "{var.display_value()}"' for var in variables)


class ConsolePresenter:
    """Presentation collaborator backed by input()/print().

    Both callables can be replaced, which is how the tests drive it.
    """

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None,
                 output_fn: Optional[Callable[[str], None]] = None,
                 clear_lines: int = 15, inventory_key: str = "i"):
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self.clear_lines = clear_lines
        self.inventory_key = inventory_key

    def render_scene(self, text: str, option_texts: List[str]) -> None:
        if self.clear_lines:
            self.output_fn("\n" * (self.clear_lines - 1))
        self.output_fn(text)
        self.output_fn("")
        self.output_fn(DELIMITER)
        for number, option_text in enumerate(option_texts):
            self.output_fn(f"{number}) {option_text}")

    def render_inventory(self, items: List[Item], variables: List[Variable]) -> None:
        self.output_fn(format_items(items))
        self.output_fn(format_variables(variables))

    def request_option_index(self, max_index: int, gs: GameState) -> int:
        """Block until the player enters an index in [0, max_index).

        The inventory key shows the inventory and asks again; anything else
        that is not a valid index is silently ignored.
        """
        while True:
            raw = self.input_fn(PROMPT)
            answer = raw.strip()

            if answer == self.inventory_key:
                self.render_inventory(*inventory_view(gs))
                continue

            try:
                index = int(answer)
            except ValueError:
                continue

            if 0 <= index < max_index:
                return index
