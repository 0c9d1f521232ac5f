"""Rule interpreter for Adventure Format command blocks.

Every command returns a "continue" signal:
- if_have / if_not_have / if_less_than / if_more_than: the truth of the condition
- add / remove / increment / decrement / set: apply the effect, return False
- jump / end: change the current scene, return False

A command line stops at the first False; a block stops at the first line
that returns False. Rule tables therefore read as ordered guarded rules where
the first rule whose guard holds performs its action and halts the block,
and a failed guard halts the block as well.
"""

import logging
from .model import Command, CommandLine, CommandBlock, GameState, Item, Variable, TERMINAL_SCENE
from .errors import UnresolvedReferenceError, TypeMismatchError


def _get_item(gs: GameState, item_id: str) -> Item:
    item = gs.items.get(item_id)
    if item is None:
        raise UnresolvedReferenceError(f"Trying to reach unexisting item '{item_id}'")
    return item


def _get_integer_variable(gs: GameState, var_id: str, op: str) -> Variable:
    variable = gs.variables.get(var_id)
    if variable is None:
        raise UnresolvedReferenceError(f"Trying to reach unexisting variable '{var_id}'")
    if not variable.is_integer():
        raise TypeMismatchError(f"Cannot {op} {variable.var_type} variable '{var_id}'")
    return variable


def run_command(command: Command, gs: GameState) -> bool:
    """Evaluate a single command against the game state.

    Args:
        command: The command to evaluate
        gs: GameState to read and mutate

    Returns:
        True if evaluation of the enclosing line should continue
    """
    op = command.op

    if op == "if_have":
        return _get_item(gs, command.target).count > 0

    elif op == "if_not_have":
        return _get_item(gs, command.target).count == 0

    elif op == "if_less_than":
        return _get_integer_variable(gs, command.target, "compare").value < command.value

    elif op == "if_more_than":
        return _get_integer_variable(gs, command.target, "compare").value > command.value

    elif op == "add":
        _get_item(gs, command.target).count += 1
        return False

    elif op == "remove":
        item = _get_item(gs, command.target)
        # count is set to one, not decremented
        logging.debug(f"remove {item.id}: count {item.count} -> 1")
        item.count = 1
        return False

    elif op == "increment":
        _get_integer_variable(gs, command.target, op).value += command.value
        return False

    elif op == "decrement":
        _get_integer_variable(gs, command.target, op).value -= command.value
        return False

    elif op == "set":
        _get_integer_variable(gs, command.target, op).value = command.value
        return False

    elif op == "jump":
        logging.debug(f"jump {gs.current_scene_id} -> {command.target}")
        gs.current_scene_id = command.target
        return False

    elif op == "end":
        logging.debug(f"end reached from {gs.current_scene_id}")
        gs.current_scene_id = TERMINAL_SCENE
        return False

    raise ValueError(f"Unknown command op '{op}'")


def run_line(line: CommandLine, gs: GameState) -> bool:
    """Evaluate a guarded rule.

    Returns:
        False as soon as a command returns False, True if every command did
    """
    for command in line:
        if not run_command(command, gs):
            return False
    return True


def run_block(block: CommandBlock, gs: GameState) -> None:
    """Evaluate a rule table, halting at the first line that returns False."""
    for line in block:
        if not run_line(line, gs):
            break
