"""Extract inline OpenAPI body schemas into named, deduplicated components."""

from .errors import (
    DocumentError,
    ExtractionError,
    FingerprintCollisionError,
    LedgerInconsistencyError,
    NameCollisionError,
)
from .extractor import SchemaExtractor
from .naming import SchemaContext, schema_name, schema_ref
from .registry import ComponentRegistry
from .shortener import shorten_shared_names
from .transform import ExtractionOptions, ExtractionResult, extract_components

__all__ = [
    "ComponentRegistry",
    "DocumentError",
    "ExtractionError",
    "ExtractionOptions",
    "ExtractionResult",
    "FingerprintCollisionError",
    "LedgerInconsistencyError",
    "NameCollisionError",
    "SchemaContext",
    "SchemaExtractor",
    "extract_components",
    "schema_name",
    "schema_ref",
    "shorten_shared_names",
]
