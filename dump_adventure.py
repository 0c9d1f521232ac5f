"""Print a parsed adventure as validated JSON.

Usage (example):
    python dump_adventure.py                 # configured document
    python dump_adventure.py my_story.av
"""
from __future__ import annotations
import json
import sys
import jsonschema
from engine.adventure.errors import AdventureError
from engine.adventure.export import document_to_dict, validate_document_dict
from engine.adventure.loader import load_adventure
from config import get_adventure_path, get_strict_scene_ids


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    path = argv[0] if argv else get_adventure_path()
    try:
        document = load_adventure(path, strict_scene_ids=get_strict_scene_ids())
        payload = document_to_dict(document)
        validate_document_dict(payload)
    except (AdventureError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except jsonschema.ValidationError as e:
        print(f"Export does not match schema: {e.message}", file=sys.stderr)
        return 1
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
