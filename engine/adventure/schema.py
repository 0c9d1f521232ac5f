"""JSON schema for the exported form of a parsed adventure document.

Defines the structure produced by export.document_to_dict so that tooling
consuming the dump can rely on it.
"""

COMMAND_SCHEMA = {
    "type": "object",
    "required": ["op"],
    "properties": {
        "op": {
            "type": "string",
            "enum": [
                "if_have", "if_not_have", "if_less_than", "if_more_than",
                "add", "remove", "increment", "decrement", "set", "jump", "end",
            ],
        },
        "target": {"type": "string", "minLength": 1},
        "value": {"type": "integer"},
    },
    "additionalProperties": False,
}

COMMAND_BLOCK_SCHEMA = {
    "type": "array",
    "items": {"type": "array", "items": COMMAND_SCHEMA, "minItems": 1},
}

DOCUMENT_SCHEMA = {
    "type": "object",
    "required": ["format", "entry_scene", "items", "variables", "scenes"],
    "properties": {
        "format": {"type": "string"},
        "entry_scene": {"type": "string", "minLength": 1},
        "items": {
            "type": "object",
            "additionalProperties": {"type": "integer", "minimum": 0},
        },
        "variables": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["type", "value", "visible"],
                "properties": {
                    "type": {"type": "string", "enum": ["int", "bool", "str"]},
                    "value": {"type": ["integer", "boolean", "string"]},
                    "visible": {"type": "boolean"},
                },
                "additionalProperties": False,
            },
        },
        "scenes": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["id", "name", "text", "entry", "options"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": "string"},
                    "text": {"type": "string"},
                    "entry": {"oneOf": [COMMAND_BLOCK_SCHEMA, {"type": "null"}]},
                    "options": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["index", "text", "run"],
                            "properties": {
                                "index": {"type": "integer", "minimum": 0},
                                "text": {"type": "string"},
                                "run": COMMAND_BLOCK_SCHEMA,
                            },
                            "additionalProperties": False,
                        },
                    },
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}
