"""Adventure Format engine package."""

from .model import (
    Item, Variable, Command, SceneOption, Scene, Document, GameState,
    TERMINAL_SCENE, FORMAT_BANNER,
)
from .errors import (
    AdventureError, FormatError, DuplicateDefinitionError,
    UnresolvedReferenceError, TypeMismatchError,
)
from .commands import parse_command, parse_command_line, parse_command_block
from .loader import load_adventure, parse_adventure
from .dsl import run_command, run_line, run_block
from .runtime import SceneRunner
from .console import ConsolePresenter
from .export import document_to_dict, validate_document_dict

__all__ = [
    'Item', 'Variable', 'Command', 'SceneOption', 'Scene', 'Document', 'GameState',
    'TERMINAL_SCENE', 'FORMAT_BANNER',
    'AdventureError', 'FormatError', 'DuplicateDefinitionError',
    'UnresolvedReferenceError', 'TypeMismatchError',
    'parse_command', 'parse_command_line', 'parse_command_block',
    'load_adventure', 'parse_adventure',
    'run_command', 'run_line', 'run_block',
    'SceneRunner',
    'ConsolePresenter',
    'document_to_dict', 'validate_document_dict',
]
