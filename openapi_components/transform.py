from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import DocumentError
from .extractor import SchemaExtractor
from .naming import SchemaContext
from .registry import ComponentRegistry, Json
from .shortener import shorten_shared_names
from .walker import JSON_MEDIA_TYPE, walk_document


@dataclass(frozen=True)
class ExtractionOptions:
    media_type: str = JSON_MEDIA_TYPE
    assign_ids: bool = True
    shorten_names: bool = True


@dataclass
class ExtractionResult:
    document: dict[str, Any]
    created: list[str] = field(default_factory=list)
    renamed: list[tuple[str, str]] = field(default_factory=list)
    usages: dict[str, list[SchemaContext]] = field(default_factory=dict)


def _existing_schemas(document: dict[str, Any]) -> dict[str, Any]:
    components = document.get("components")
    if components is None:
        components = {}
        document["components"] = components
    if not isinstance(components, dict):
        raise DocumentError("Top-level 'components' exists but is not an object; cannot add schemas.")
    schemas = components.get("schemas")
    if schemas is None:
        schemas = {}
        components["schemas"] = schemas
    if not isinstance(schemas, dict):
        raise DocumentError("components.schemas exists but is not an object; cannot add schemas.")
    return schemas


def extract_components(document: Json, *, options: Optional[ExtractionOptions] = None) -> ExtractionResult:
    """
    Hoist the inline JSON body schemas of ``document`` into components.schemas.

    The caller's document is left untouched; the rewritten copy is returned on
    the result. Existing component schemas are kept and their names are never
    reused. Raises an ExtractionError subclass instead of returning a document
    with colliding names.
    """
    options = options or ExtractionOptions()
    if not isinstance(document, dict):
        raise DocumentError("OpenAPI document must be an object at the top level.")

    out = deepcopy(document)
    schemas = _existing_schemas(out)

    registry = ComponentRegistry(reserved=schemas.keys())
    extractor = SchemaExtractor(registry, assign_ids=options.assign_ids)
    walk_document(out, extractor.extract, media_type=options.media_type)
    created = list(registry.schemas)

    renamed: list[tuple[str, str]] = []
    if options.shorten_names:
        renamed = shorten_shared_names(registry)

    schemas.update(registry.schemas)
    return ExtractionResult(document=out, created=created, renamed=renamed, usages=dict(registry.usages))
