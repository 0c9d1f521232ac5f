"""Scene execution engine.

This module drives the adventure turn by turn over the current scene id
until the terminal sentinel is reached.
"""

import logging
from typing import Optional
from .model import Document, GameState, Scene, TERMINAL_SCENE
from .dsl import run_block
from .errors import AdventureError, UnresolvedReferenceError


class SceneRunner:
    """Runs scenes of a Document against an exclusively owned GameState."""

    def __init__(self, document: Document, gs: GameState, presenter):
        """Initialize the runner.

        Args:
            document: Parsed, read-only Document
            gs: GameState mutated by the interpreter
            presenter: Collaborator with render_scene, render_inventory
                and request_option_index
        """
        self.document = document
        self.gs = gs
        self.presenter = presenter
        self.turns = 0

    @property
    def is_finished(self) -> bool:
        return self.gs.current_scene_id == TERMINAL_SCENE

    def current_scene(self) -> Optional[Scene]:
        """Resolve the current scene id.

        Returns:
            The current Scene, or None once the adventure has ended

        Raises:
            UnresolvedReferenceError: If the id names no scene
        """
        if self.is_finished:
            return None

        scene = self.document.scenes.get(self.gs.current_scene_id)
        if scene is None:
            raise UnresolvedReferenceError(f"Unknown scene <{self.gs.current_scene_id}>")
        return scene

    def run_scene(self) -> None:
        """Play one turn of the current scene."""
        scene = self.current_scene()
        if scene is None:
            return

        if scene.entry is not None:
            run_block(scene.entry, self.gs)
            if self.gs.current_scene_id != scene.id:
                # The scene is still presented and its options still run
                logging.warning(
                    f"Entry block of scene '{scene.id}' moved to '{self.gs.current_scene_id}' "
                    f"before the scene was shown"
                )

        if not scene.options:
            raise AdventureError(f"Scene '{scene.id}' has no options to choose from")

        self.presenter.render_scene(scene.text, scene.option_texts())
        index = self.presenter.request_option_index(len(scene.options), self.gs)

        run_block(scene.options[index].action, self.gs)
        self.turns += 1

    def run(self) -> int:
        """Play until the adventure ends.

        Returns:
            Number of turns played
        """
        while not self.is_finished:
            self.run_scene()
        return self.turns
