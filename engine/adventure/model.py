"""Adventure Format data models.

This module defines the static document structures (items, variables,
commands, scenes) produced by the loader and the mutable GameState the
interpreter works on.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple, Optional, Union, Literal

# Reserved scene id that marks the end of the adventure
TERMINAL_SCENE = "ENDING"

# Exact first line every document must carry
FORMAT_BANNER = "--- ADVENTURE FORMAT  [0.1] ---"

VarType = Literal["int", "bool", "str"]
VarValue = Union[int, bool, str]

CommandOp = Literal[
    "if_have", "if_not_have", "if_less_than", "if_more_than",  # conditionals
    "add", "remove",                                          # items
    "increment", "decrement", "set",                          # integer variables
    "jump", "end",                                            # control
]

CONDITION_OPS = ("if_have", "if_not_have", "if_less_than", "if_more_than")
ITEM_OPS = ("if_have", "if_not_have", "add", "remove")
VARIABLE_OPS = ("if_less_than", "if_more_than", "increment", "decrement", "set")


@dataclass
class Item:
    """An inventory counter declared in the ITEMS section."""
    id: str
    count: int = 0


@dataclass
class Variable:
    """A typed variable declared in the VARS section.

    The type is fixed at declaration; only integer variables can be mutated.
    """
    id: str
    var_type: VarType
    value: VarValue
    visible: bool = False  # shown in the inventory view (@ show_always)

    def is_integer(self) -> bool:
        return self.var_type == "int"

    def display_value(self) -> str:
        if self.var_type == "bool":
            return "true" if self.value else "false"
        return str(self.value)


@dataclass(frozen=True)
class Command:
    """A single parsed command.

    Examples:
        Command(op="if_have", target="key")
        Command(op="increment", target="gold", value=5)
        Command(op="jump", target="vault")
        Command(op="end")
    """
    op: CommandOp
    target: Optional[str] = None  # item, variable or scene id
    value: Optional[int] = None   # integer argument

    def is_condition(self) -> bool:
        return self.op in CONDITION_OPS


# One guarded rule (";"-separated commands) and an ordered rule table
CommandLine = Tuple[Command, ...]
CommandBlock = Tuple[CommandLine, ...]


@dataclass
class SceneOption:
    """A player choice inside a scene."""
    index: int
    text: str
    action: CommandBlock = ()


@dataclass
class Scene:
    """A scene with its text, optional entry block and options."""
    id: str = ""
    name: str = ""
    text: str = ""
    entry: Optional[CommandBlock] = None  # runs every time the scene is entered
    options: List[SceneOption] = field(default_factory=list)

    def option_texts(self) -> List[str]:
        return [option.text for option in self.options]


@dataclass
class Document:
    """The fully parsed, read-only representation of an adventure file."""
    items: Dict[str, Item] = field(default_factory=dict)
    variables: Dict[str, Variable] = field(default_factory=dict)
    scenes: Dict[str, Scene] = field(default_factory=dict)
    entry_scene: Optional[str] = None


@dataclass
class GameState:
    """Mutable runtime projection of a Document."""
    items: Dict[str, Item]
    variables: Dict[str, Variable]
    current_scene_id: str

    @classmethod
    def from_document(cls, document: Document) -> "GameState":
        """Build a fresh state with its own copies of the declared items and variables."""
        return cls(
            items={item_id: replace(item) for item_id, item in document.items.items()},
            variables={var_id: replace(var) for var_id, var in document.variables.items()},
            current_scene_id=document.entry_scene or TERMINAL_SCENE,
        )

    @property
    def is_finished(self) -> bool:
        return self.current_scene_id == TERMINAL_SCENE

    def owned_items(self) -> List[Item]:
        """Items with a positive count, in declaration order."""
        return [item for item in self.items.values() if item.count > 0]

    def visible_variables(self) -> List[Variable]:
        return [var for var in self.variables.values() if var.visible]
