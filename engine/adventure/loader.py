"""Adventure Format document loader.

This module turns the raw lines of an adventure file into a Document:
comment stripping, banner check, '---'-delimited sections (ITEMS, VARS,
SCENE) and the nested scene/option sub-parser.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple
from .model import Document, Item, Variable, Scene, SceneOption, FORMAT_BANNER
from .commands import parse_command_block
from .errors import FormatError, DuplicateDefinitionError

SECTION_DELIMITER = "---"

# (line number, comment-stripped text)
SourceLine = Tuple[int, str]


def load_adventure(adventure_file_path: str, strict_scene_ids: bool = False) -> Document:
    """Load an adventure document from a file.

    Args:
        adventure_file_path: Path to the .av file
        strict_scene_ids: Raise on duplicate scene ids instead of overwriting

    Returns:
        Parsed Document

    Raises:
        FileNotFoundError: If the adventure file doesn't exist
        AdventureError: If the document is malformed
    """
    adventure_path = Path(adventure_file_path)
    if not adventure_path.exists():
        raise FileNotFoundError(f"Adventure file not found: {adventure_file_path}")

    with open(adventure_path, 'r', encoding='utf-8') as f:
        lines = f.read().splitlines()

    return parse_adventure(lines, strict_scene_ids=strict_scene_ids)


def strip_comment(line: str) -> str:
    """Drop everything from the first '#' onward."""
    return line.split('#', 1)[0]


def parse_adventure(lines: Iterable[str], strict_scene_ids: bool = False) -> Document:
    """Parse the raw lines of an adventure file.

    Args:
        lines: Physical lines of the document, in order
        strict_scene_ids: Raise on duplicate scene ids instead of overwriting

    Returns:
        Parsed Document
    """
    lines = [line.rstrip('\r\n') for line in lines]
    if not lines:
        raise FormatError("Empty document, missing format banner")

    if strip_comment(lines[0]) != FORMAT_BANNER:
        raise FormatError("Bad version of Adventure Format", 1, lines[0])

    document = Document()
    section_buffer: List[SourceLine] = []

    for line_number, raw_line in enumerate(lines[1:], start=2):
        line = strip_comment(raw_line)

        if line.strip() == SECTION_DELIMITER:
            _load_section(document, section_buffer, line_number, strict_scene_ids)
            section_buffer = []
            continue

        section_buffer.append((line_number, line))

    if any(text.strip() for _, text in section_buffer):
        logging.warning(
            f"Ignoring {len(section_buffer)} line(s) after the last '{SECTION_DELIMITER}' "
            f"starting at line {section_buffer[0][0]}"
        )

    if not document.scenes:
        raise FormatError("Document declares no SCENE section")

    return document


def _load_section(document: Document, section_lines: List[SourceLine], closing_line_number: int,
                  strict_scene_ids: bool) -> None:
    """Dispatch a closed section buffer to its handler."""
    if not section_lines:
        raise FormatError("Invalid section", closing_line_number)

    header_number, header = section_lines[0]
    body = section_lines[1:]
    name = header.strip()

    logging.debug(f"Loading section {name} (lines {header_number}-{closing_line_number})")

    if name == "ITEMS:":
        _handle_items_section(document, body)
    elif name == "VARS:":
        _handle_vars_section(document, body)
    elif name == "SCENE:":
        _handle_scene_section(document, body, header_number, strict_scene_ids)
    else:
        raise FormatError(f"No handler for section '{name}'", header_number, header)


def _handle_items_section(document: Document, section_lines: List[SourceLine]) -> None:
    for line_number, line in section_lines:
        item_id = line.strip()
        if not item_id:
            continue

        if item_id in document.items:
            raise DuplicateDefinitionError(
                f"Item '{item_id}' declared more than once", line_number, line
            )
        document.items[item_id] = Item(id=item_id)


def _handle_vars_section(document: Document, section_lines: List[SourceLine]) -> None:
    for line_number, line in section_lines:
        if not line.strip():
            continue

        variable = parse_variable(line, line_number)
        if variable.id in document.variables:
            raise DuplicateDefinitionError(
                f"There is already a variable named '{variable.id}'", line_number, line
            )
        document.variables[variable.id] = variable


def parse_variable(line: str, line_number: int = None) -> Variable:
    """Parse a `name : type = default [@ flag]` declaration.

    Args:
        line: Declaration source
        line_number: Source line used in error messages

    Returns:
        Variable holding the typed default value
    """
    name, sep, rest = line.partition(':')
    name = name.strip()
    if not sep or not name:
        raise FormatError("Expected 'name : type = default' declaration", line_number, line)

    var_type, sep, rest = rest.partition('=')
    var_type = var_type.strip()
    if not sep:
        raise FormatError(f"Missing default value for variable '{name}'", line_number, line)

    default, _, flag = rest.partition('@')
    default = default.strip()

    if var_type == "int":
        try:
            value = int(default)
        except ValueError:
            raise FormatError(
                f"Couldn't load default value '{default}' of var '{name}' as int", line_number, line
            )
    elif var_type == "bool":
        if default == "true":
            value = True
        elif default == "false":
            value = False
        else:
            raise FormatError(f"Undefined bool value '{default}' for var '{name}'", line_number, line)
    elif var_type == "str":
        value = default
    else:
        raise FormatError(f"Unknown variable type <{var_type}>", line_number, line)

    return Variable(id=name, var_type=var_type, value=value, visible=flag.strip() == "show_always")


def _handle_scene_section(document: Document, section_lines: List[SourceLine], header_number: int,
                          strict_scene_ids: bool) -> None:
    """Parse one SCENE section.

    Single-line attributes (`key:value`) are set directly; `key:` opens a
    multi-line block of raw lines closed by the next blank line.
    """
    scene = Scene()

    block_name = None
    block_start = 0
    block_lines: List[str] = []

    for line_number, line in section_lines:
        stripped = line.strip()

        if block_name is not None:
            if stripped:
                block_lines.append(line)
                continue
            _handle_scene_block(scene, block_name, block_lines, block_start)
            block_name = None
            block_lines = []
            continue

        if not stripped:
            continue

        parts = stripped.split(':')
        if len(parts) == 1:
            raise FormatError("Expected 'key:value' or 'key:'", line_number, line)
        if len(parts) > 2:
            raise FormatError("More than 2 parts separated by ':'", line_number, line)

        key, value = parts[0].strip(), parts[1].strip()
        if value:
            _set_scene_attribute(scene, key, value, line_number, line)
        else:
            block_name = key
            block_start = line_number + 1

    # Section closed without a trailing blank line
    if block_name is not None:
        _handle_scene_block(scene, block_name, block_lines, block_start)

    if not scene.id:
        raise FormatError("Scene has no id", header_number)

    if scene.id in document.scenes:
        if strict_scene_ids:
            raise DuplicateDefinitionError(f"Scene '{scene.id}' declared more than once", header_number)
        logging.warning(f"Scene '{scene.id}' at line {header_number} overwrites an earlier scene")

    document.scenes[scene.id] = scene

    if document.entry_scene is None:
        document.entry_scene = scene.id


def _set_scene_attribute(scene: Scene, key: str, value: str, line_number: int, line: str) -> None:
    if key == "id":
        scene.id = value
    elif key == "name":
        scene.name = value
    else:
        raise FormatError(f"Unknown scene attribute '{key}'", line_number, line)


def _handle_scene_block(scene: Scene, name: str, lines: List[str], first_line_number: int) -> None:
    if name == "text":
        scene.text = "\n".join(lines)
    elif name == "run":
        scene.entry = parse_command_block(lines, first_line_number)
    elif name == "option":
        scene.options.append(parse_option(lines, len(scene.options), first_line_number))
    else:
        raise FormatError(f"Unknown scene attribute '{name}'", first_line_number - 1)


def parse_option(lines: List[str], index: int, first_line_number: int = None) -> SceneOption:
    """Parse the lines of an `option:` block.

    Lines before the `run:` marker must be `text:<string>`; every line after
    it belongs to the option's command block.

    Args:
        lines: Raw lines of the option block
        index: Position of the option within its scene
        first_line_number: Source line of lines[0], if known

    Returns:
        Parsed SceneOption
    """
    option = SceneOption(index=index, text="")
    run_lines = None
    run_start = None

    for offset, line in enumerate(lines):
        line_number = first_line_number + offset if first_line_number is not None else None

        if run_lines is not None:
            run_lines.append(line)
            continue

        key, _, value = line.strip().partition(':')
        key = key.strip()

        if key == "text":
            option.text = value.strip()
        elif key == "run":
            if value.strip():
                raise FormatError("Unexpected content after 'run:' marker", line_number, line)
            run_lines = []
            run_start = line_number + 1 if line_number is not None else None
        else:
            raise FormatError(f"Unknown option argument '{key}'", line_number, line)

    if run_lines is None:
        at_line = first_line_number - 1 if first_line_number is not None else None
        raise FormatError("There is no run sequence in option", at_line)

    option.action = parse_command_block(run_lines, run_start)
    return option
