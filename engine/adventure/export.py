"""Export of a parsed adventure document to a JSON-compatible dict."""

import jsonschema
from typing import Any, Dict, List, Optional
from .model import Document, Command, CommandBlock, FORMAT_BANNER
from .schema import DOCUMENT_SCHEMA


def _command_to_dict(command: Command) -> Dict[str, Any]:
    data: Dict[str, Any] = {"op": command.op}
    if command.target is not None:
        data["target"] = command.target
    if command.value is not None:
        data["value"] = command.value
    return data


def _block_to_list(block: Optional[CommandBlock]) -> Optional[List[List[Dict[str, Any]]]]:
    if block is None:
        return None
    return [[_command_to_dict(command) for command in line] for line in block]


def document_to_dict(document: Document) -> Dict[str, Any]:
    """Convert a Document to a serializable dictionary."""
    return {
        "format": FORMAT_BANNER,
        "entry_scene": document.entry_scene,
        "items": {item_id: item.count for item_id, item in document.items.items()},
        "variables": {
            var_id: {"type": var.var_type, "value": var.value, "visible": var.visible}
            for var_id, var in document.variables.items()
        },
        "scenes": {
            scene_id: {
                "id": scene.id,
                "name": scene.name,
                "text": scene.text,
                "entry": _block_to_list(scene.entry),
                "options": [
                    {"index": option.index, "text": option.text, "run": _block_to_list(option.action)}
                    for option in scene.options
                ],
            }
            for scene_id, scene in document.scenes.items()
        },
    }


def validate_document_dict(payload: dict):
    """Validate an exported document against DOCUMENT_SCHEMA."""
    jsonschema.validate(payload, DOCUMENT_SCHEMA)
    return True
