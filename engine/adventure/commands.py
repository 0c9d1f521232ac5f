"""Command grammar for Adventure Format `run:` blocks.

A command line is split on ';' and each piece is tokenized on whitespace:

    if have <item>            if not_have <item>
    if <var> less_than <int>  if <var> more_than <int>
    add <item>                remove <item>
    increment <var> <int>     decrement <var> <int>     set <var> <int>
    jump <scene>              end
"""

from typing import List, Optional
from .model import Command, CommandLine, CommandBlock
from .errors import FormatError

# keyword -> op
_ITEM_COMMANDS = {"add": "add", "remove": "remove"}
_VARIABLE_COMMANDS = {"increment": "increment", "decrement": "decrement", "set": "set"}
_COMPARISONS = {"less_than": "if_less_than", "more_than": "if_more_than"}


def _expect_tokens(tokens: List[str], count: int, text: str, line_number: Optional[int]) -> None:
    if len(tokens) != count:
        raise FormatError(
            f"Command '{tokens[0]}' expects {count - 1} argument(s), got {len(tokens) - 1}",
            line_number, text,
        )


def _parse_int(token: str, text: str, line_number: Optional[int]) -> int:
    try:
        return int(token)
    except ValueError:
        raise FormatError(f"Cannot parse '{token}' as int", line_number, text)


def _parse_if(tokens: List[str], text: str, line_number: Optional[int]) -> Command:
    if len(tokens) < 3:
        raise FormatError("Incomplete if statement", line_number, text)

    if tokens[1] == "have":
        _expect_tokens(tokens, 3, text, line_number)
        return Command(op="if_have", target=tokens[2])
    if tokens[1] == "not_have":
        _expect_tokens(tokens, 3, text, line_number)
        return Command(op="if_not_have", target=tokens[2])

    op = _COMPARISONS.get(tokens[2])
    if op is None:
        raise FormatError(f"There is no if statement with subcommand '{tokens[2]}'", line_number, text)
    _expect_tokens(tokens, 4, text, line_number)
    return Command(op=op, target=tokens[1], value=_parse_int(tokens[3], text, line_number))


def parse_command(text: str, line_number: Optional[int] = None) -> Command:
    """Parse a single command.

    Args:
        text: Command source, e.g. "increment gold 5"
        line_number: Source line used in error messages

    Returns:
        Parsed Command

    Raises:
        FormatError: On unknown keywords, wrong token counts or bad integers
    """
    tokens = text.split()
    if not tokens:
        raise FormatError("Empty command", line_number, text)

    keyword = tokens[0]

    if keyword == "if":
        return _parse_if(tokens, text, line_number)

    if keyword in _ITEM_COMMANDS:
        _expect_tokens(tokens, 2, text, line_number)
        return Command(op=_ITEM_COMMANDS[keyword], target=tokens[1])

    if keyword in _VARIABLE_COMMANDS:
        _expect_tokens(tokens, 3, text, line_number)
        return Command(
            op=_VARIABLE_COMMANDS[keyword],
            target=tokens[1],
            value=_parse_int(tokens[2], text, line_number),
        )

    if keyword == "jump":
        _expect_tokens(tokens, 2, text, line_number)
        return Command(op="jump", target=tokens[1])

    if keyword == "end":
        _expect_tokens(tokens, 1, text, line_number)
        return Command(op="end")

    raise FormatError(f"There is no command '{keyword}'", line_number, text)


def parse_command_line(text: str, line_number: Optional[int] = None) -> CommandLine:
    """Parse a ';'-separated guarded rule into an ordered tuple of commands."""
    return tuple(parse_command(piece, line_number) for piece in text.strip().split(";"))


def parse_command_block(lines: List[str], first_line_number: Optional[int] = None) -> CommandBlock:
    """Parse the raw lines of a `run:` block into a rule table.

    Args:
        lines: Raw block lines, one guarded rule each
        first_line_number: Source line of lines[0], if known

    Returns:
        Tuple of CommandLines in source order
    """
    block = []
    for offset, line in enumerate(lines):
        line_number = first_line_number + offset if first_line_number is not None else None
        block.append(parse_command_line(line, line_number))
    return tuple(block)
