"""Central configuration for the Adventure Format player.

All tunable parameters live here (document path, screen padding, inventory
key, strictness, log level). Every value has a sensible default and can be
overridden through environment variables.
"""
from __future__ import annotations
import os


def _get_int_env(name: str, default: int, minval: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


# ---------------- Document ----------------
DEFAULT_ADVENTURE_PATH: str = "adventure_demo.av"
ENV_ADVENTURE_PATH = "AF_ADVENTURE_PATH"


def get_adventure_path() -> str:
    """Path of the document the player loads. Var: AF_ADVENTURE_PATH."""
    raw = os.getenv(ENV_ADVENTURE_PATH, "").strip()
    return raw or DEFAULT_ADVENTURE_PATH


def get_strict_scene_ids() -> bool:
    """Raise on duplicate scene ids instead of overwriting. Var: AF_STRICT_SCENE_IDS."""
    return _get_bool_env("AF_STRICT_SCENE_IDS", False)


# ---------------- Console ----------------

def get_clear_lines() -> int:
    """Blank lines printed before each scene. Var: AF_CLEAR_LINES (default 15)."""
    return _get_int_env("AF_CLEAR_LINES", 15, minval=0)


def get_inventory_key() -> str:
    """Input that shows the inventory instead of choosing. Var: AF_INVENTORY_KEY (default 'i')."""
    raw = os.getenv("AF_INVENTORY_KEY", "").strip()
    return raw or "i"


# ---------------- Logging ----------------
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_log_level() -> str:
    """Root logging level. Var: AF_LOG_LEVEL (default WARNING)."""
    raw = os.getenv("AF_LOG_LEVEL", "WARNING").strip().upper()
    return raw if raw in _LOG_LEVELS else "WARNING"


__all__ = [
    "DEFAULT_ADVENTURE_PATH", "ENV_ADVENTURE_PATH", "get_adventure_path", "get_strict_scene_ids",
    "get_clear_lines", "get_inventory_key",
    "get_log_level",
]
