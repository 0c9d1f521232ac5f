"""Bootstrap utilities: load the configured adventure and create its initial GameState."""
from __future__ import annotations
from engine.adventure.loader import load_adventure
from engine.adventure.model import Document, GameState
from config import get_adventure_path, get_strict_scene_ids


def load_adventure_and_state(path: str | None = None) -> tuple[Document, GameState]:
    document = load_adventure(path or get_adventure_path(), strict_scene_ids=get_strict_scene_ids())
    # Start position: first SCENE section in the file
    state = GameState.from_document(document)
    return document, state
