import json
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentError

YAML_SUFFIXES = (".yaml", ".yml")


def format_for_path(path: Path) -> str:
    return "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json"


def load_document(path: Path) -> dict[str, Any]:
    """Load a JSON or YAML OpenAPI document. Unknown suffixes are read as JSON."""
    try:
        with path.open("r", encoding="utf-8") as f:
            if format_for_path(path) == "yaml":
                doc = yaml.safe_load(f)
            else:
                doc = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise DocumentError(f"Failed to read {path}: {e}") from e
    if not isinstance(doc, dict):
        raise DocumentError(f"{path} does not contain an object at the top level.")
    return doc


def dump_document(document: Any, *, fmt: str = "json", pretty: bool = True) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False if pretty else None)
    indent = 2 if pretty else None
    content = json.dumps(document, indent=indent, ensure_ascii=True, sort_keys=False, default=str)
    return content + ("\n" if indent else "")
