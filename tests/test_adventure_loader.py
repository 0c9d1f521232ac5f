"""Test the Adventure Format loader."""

import sys
import os
import logging
import tempfile
import textwrap
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from engine.adventure.loader import load_adventure, parse_adventure, parse_variable, strip_comment
from engine.adventure.model import Command, FORMAT_BANNER
from engine.adventure.errors import FormatError, DuplicateDefinitionError

SAMPLE = textwrap.dedent("""\
    --- ADVENTURE FORMAT  [0.1] ---
    ITEMS:   # things the player can carry
    key
    lamp
    ---
    VARS:
    gold : int = 10 @ show_always
    brave : bool = false
    title : str = Sir Knight
    ---
    SCENE:
    id: start
    name: Start

    text:
    Line one.
      Line two, indented.

    run:
    increment gold 1

    option:
    text: Go to the vault
    run:
    if have key; jump vault
    end

    option:
    text: Stay
    run:
    add lamp

    ---
    SCENE:
    id: vault
    name: Vault

    text:
    Gold everywhere.

    option:
    text: Leave
    run:
    end
    ---
""")


def _parse(text, **kwargs):
    return parse_adventure(text.splitlines(), **kwargs)


def _with_sections(*sections):
    """Build a document from section bodies, each closed by '---'."""
    body = "\n---\n".join(textwrap.dedent(s).strip("\n") for s in sections)
    return f"{FORMAT_BANNER}\n{body}\n---\n"


MINIMAL_SCENE = """\
    SCENE:
    id: only
    option:
    text: Quit
    run:
    end
"""


def test_parse_sample_document():
    """Test a complete document with every section type."""
    doc = _parse(SAMPLE)

    assert list(doc.items) == ["key", "lamp"]
    assert all(item.count == 0 for item in doc.items.values())

    gold = doc.variables["gold"]
    assert gold.var_type == "int" and gold.value == 10 and gold.visible is True
    assert doc.variables["brave"].value is False
    assert doc.variables["brave"].visible is False
    assert doc.variables["title"].value == "Sir Knight"

    assert doc.entry_scene == "start"
    start = doc.scenes["start"]
    assert start.name == "Start"
    assert start.text == "Line one.\n  Line two, indented."
    assert start.entry == ((Command(op="increment", target="gold", value=1),),)

    assert [o.index for o in start.options] == [0, 1]
    assert start.options[0].text == "Go to the vault"
    assert start.options[0].action == (
        (Command(op="if_have", target="key"), Command(op="jump", target="vault")),
        (Command(op="end"),),
    )
    assert start.options[1].action == ((Command(op="add", target="lamp"),),)

    vault = doc.scenes["vault"]
    assert vault.entry is None
    assert vault.text == "Gold everywhere."


def test_parsing_is_deterministic():
    """Re-parsing identical input yields identical documents."""
    assert _parse(SAMPLE) == _parse(SAMPLE)


def test_strip_comment():
    assert strip_comment("add key # pick it up") == "add key "
    assert strip_comment("# whole line") == ""
    assert strip_comment("no comment") == "no comment"


def test_load_from_file():
    """Test loading from disk."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.av', delete=False, encoding='utf-8') as f:
        f.write(SAMPLE)
        temp_file = f.name

    try:
        doc = load_adventure(temp_file)
        assert doc.entry_scene == "start"
        assert set(doc.scenes) == {"start", "vault"}
    finally:
        os.unlink(temp_file)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_adventure("does/not/exist.av")


class TestBannerAndSections:
    """Document-level structure errors."""

    def test_bad_banner(self):
        with pytest.raises(FormatError) as exc:
            _parse("--- ADVENTURE FORMAT [0.1] ---\n" + _with_sections(MINIMAL_SCENE))
        assert exc.value.line_number == 1

    def test_empty_document(self):
        with pytest.raises(FormatError):
            parse_adventure([])

    def test_banner_with_comment(self):
        """Comments are stripped before the banner comparison."""
        text = _with_sections(MINIMAL_SCENE).replace(FORMAT_BANNER, FORMAT_BANNER + "# v0.1", 1)
        assert _parse(text).entry_scene == "only"

    def test_empty_section(self):
        text = FORMAT_BANNER + "\n---\n"
        with pytest.raises(FormatError) as exc:
            _parse(text)
        assert exc.value.line_number == 2

    def test_unknown_section(self):
        with pytest.raises(FormatError) as exc:
            _parse(_with_sections("MONSTERS:\ngoblin", MINIMAL_SCENE))
        assert "MONSTERS:" in str(exc.value)

    def test_no_scene(self):
        with pytest.raises(FormatError):
            _parse(_with_sections("ITEMS:\nkey"))

    def test_trailing_lines_ignored(self, caplog):
        """Lines after the last delimiter are not a section."""
        text = _with_sections(MINIMAL_SCENE) + "ITEMS:\nghost\n"
        with caplog.at_level(logging.WARNING):
            doc = _parse(text)
        assert "ghost" not in doc.items
        assert "Ignoring" in caplog.text


class TestItemsAndVars:
    """ITEMS and VARS sections."""

    def test_duplicate_item(self):
        with pytest.raises(DuplicateDefinitionError) as exc:
            _parse(_with_sections("ITEMS:\nlamp\nkey\nlamp", MINIMAL_SCENE))
        assert "lamp" in str(exc.value)
        assert exc.value.line_number == 5

    def test_blank_item_lines_skipped(self):
        doc = _parse(_with_sections("ITEMS:\nkey\n\n  lamp  \n", MINIMAL_SCENE))
        assert list(doc.items) == ["key", "lamp"]

    def test_duplicate_variable(self):
        with pytest.raises(DuplicateDefinitionError):
            _parse(_with_sections("VARS:\ngold: int = 1\ngold: str = x", MINIMAL_SCENE))

    def test_variable_types(self):
        assert parse_variable("hp: int=-4").value == -4
        assert parse_variable("ok : bool = true").value is True
        assert parse_variable("motto : str = carpe = diem").value == "carpe = diem"

    def test_variable_flag(self):
        assert parse_variable("gold : int = 1 @ show_always").visible is True
        assert parse_variable("gold : int = 1 @ hidden").visible is False
        assert parse_variable("gold : int = 1").visible is False

    def test_unknown_type(self):
        with pytest.raises(FormatError) as exc:
            parse_variable("speed : float = 1.5", 7)
        assert "float" in str(exc.value)
        assert exc.value.line_number == 7

    def test_bad_bool_literal(self):
        with pytest.raises(FormatError):
            parse_variable("brave : bool = True")

    def test_bad_int_default(self):
        with pytest.raises(FormatError):
            parse_variable("gold : int = ten")

    def test_malformed_declaration(self):
        with pytest.raises(FormatError):
            parse_variable("gold int 10")
        with pytest.raises(FormatError):
            parse_variable("gold : int")


class TestScenes:
    """SCENE section sub-parser."""

    def test_more_than_two_parts(self):
        with pytest.raises(FormatError) as exc:
            _parse(_with_sections("SCENE:\nid: a:b\noption:\ntext: x\nrun:\nend"))
        assert "more than 2" in str(exc.value).lower()

    def test_unknown_attribute(self):
        with pytest.raises(FormatError):
            _parse(_with_sections("SCENE:\nid: a\ncolor: red\noption:\ntext: x\nrun:\nend"))

    def test_unknown_block_attribute(self):
        with pytest.raises(FormatError):
            _parse(_with_sections("SCENE:\nid: a\nnotes:\nsomething\n"))

    def test_scene_without_id(self):
        with pytest.raises(FormatError):
            _parse(_with_sections("SCENE:\nname: Nowhere\noption:\ntext: x\nrun:\nend"))

    def test_text_keeps_colons(self):
        """Multi-line payloads are verbatim, colons included."""
        doc = _parse(_with_sections("SCENE:\nid: a\ntext:\nSign: KEEP OUT\n\noption:\ntext: x\nrun:\nend"))
        assert doc.scenes["a"].text == "Sign: KEEP OUT"

    def test_block_closed_by_section_end(self):
        """The last block is dispatched even without a trailing blank line."""
        doc = _parse(_with_sections(MINIMAL_SCENE))
        assert len(doc.scenes["only"].options) == 1

    def test_option_without_run(self):
        with pytest.raises(FormatError) as exc:
            _parse(_with_sections("SCENE:\nid: a\noption:\ntext: Nothing happens\n"))
        assert "run" in str(exc.value)

    def test_option_unknown_argument(self):
        with pytest.raises(FormatError):
            _parse(_with_sections("SCENE:\nid: a\noption:\nlabel: x\nrun:\nend"))

    def test_option_text_last_write_wins(self):
        doc = _parse(_with_sections("SCENE:\nid: a\noption:\ntext: first\ntext: second\nrun:\nend"))
        assert doc.scenes["a"].options[0].text == "second"

    def test_malformed_command_in_option(self):
        with pytest.raises(FormatError) as exc:
            _parse(_with_sections("SCENE:\nid: a\noption:\ntext: x\nrun:\nteleport home"))
        assert "teleport" in str(exc.value)
        assert exc.value.line_number == 7

    def test_entry_scene_is_first_scene(self):
        doc = _parse(_with_sections(
            "SCENE:\nid: first\noption:\ntext: x\nrun:\njump second",
            "SCENE:\nid: second\noption:\ntext: x\nrun:\nend",
        ))
        assert doc.entry_scene == "first"

    def test_duplicate_scene_overwrites(self, caplog):
        """Duplicate scene ids replace the earlier scene and log a warning."""
        with caplog.at_level(logging.WARNING):
            doc = _parse(_with_sections(
                "SCENE:\nid: a\nname: Old\noption:\ntext: x\nrun:\nend",
                "SCENE:\nid: a\nname: New\noption:\ntext: x\nrun:\nend",
            ))
        assert doc.scenes["a"].name == "New"
        assert len(doc.scenes) == 1
        assert "overwrites" in caplog.text

    def test_duplicate_scene_strict(self):
        with pytest.raises(DuplicateDefinitionError):
            _parse(_with_sections(
                "SCENE:\nid: a\noption:\ntext: x\nrun:\nend",
                "SCENE:\nid: a\noption:\ntext: x\nrun:\nend",
            ), strict_scene_ids=True)

    def test_references_not_validated_at_parse_time(self):
        """Unknown items, variables and scenes are only checked when run."""
        doc = _parse(_with_sections("SCENE:\nid: a\noption:\ntext: x\nrun:\nadd ghost; jump nowhere"))
        assert doc.scenes["a"].options[0].action[0][1] == Command(op="jump", target="nowhere")


def test_demo_adventure_loads():
    """The bundled demo document parses."""
    demo = os.path.join(os.path.dirname(__file__), '..', 'adventure_demo.av')
    doc = load_adventure(demo)
    assert doc.entry_scene == "gate"
    assert {"gate", "courtyard", "well_dark", "vault"} <= set(doc.scenes)
