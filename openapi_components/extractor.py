"""
Hoist inline schemas into the component registry, bottom-up.

Children are processed before their parent, so by the time a parent is
fingerprinted its nested objects and enums are already `$ref`s. Two parents
are therefore the same type when their properties point at the same
registered names, not when their fully expanded trees happen to match.
"""

from typing import Any, Optional

from .naming import ARRAY_ITEM_SEGMENT, SchemaContext, schema_name
from .registry import ComponentRegistry, Json, canonical_json, fingerprint


def is_reference(node: Json) -> bool:
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def _schema_type(node: dict[str, Any]) -> Optional[str]:
    """
    The schema's discriminant, or None if it has none.

    OpenAPI 3.1 spells nullable types as a list; ["object", "null"] is still an object.
    """
    value = node.get("type")
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        non_null = [t for t in value if t != "null"]
        if len(non_null) == 1 and isinstance(non_null[0], str):
            return non_null[0]
        return "mixed"
    return None


class SchemaExtractor:
    def __init__(self, registry: ComponentRegistry, *, assign_ids: bool = True) -> None:
        self.registry = registry
        self.assign_ids = assign_ids

    def extract(self, node: Json, context: SchemaContext) -> Json:
        """
        Return ``node`` unchanged if it stays inline, otherwise a `$ref` to the
        registry entry that now holds it. The input node is never mutated.
        """
        if not isinstance(node, dict) or is_reference(node):
            return node

        kind = _schema_type(node)
        if kind == "object":
            node = dict(node)
            properties = node.get("properties")
            if isinstance(properties, dict):
                node["properties"] = {
                    key: sub if is_reference(sub) else self.extract(sub, context.child(key))
                    for key, sub in properties.items()
                }

        if kind == "array" and isinstance(node.get("items"), dict):
            # Array wrappers stay inline; only the item schema can be named.
            out = dict(node)
            out["items"] = self.extract(node["items"], context.child(ARRAY_ITEM_SEGMENT))
            return out

        if kind is not None and kind not in ("object", "array") and "enum" not in node:
            return node

        return self._hoist(node, context)

    def _hoist(self, node: dict[str, Any], context: SchemaContext) -> dict[str, Any]:
        canonical = canonical_json(node)
        digest = fingerprint(canonical)

        existing = self.registry.lookup(digest, canonical)
        if existing is not None:
            self.registry.record_usage(existing, context)
            return self.registry.reference(existing)

        name = schema_name(context)
        schema = dict(node)
        if self.assign_ids:
            schema["$id"] = name
        self.registry.register(name, schema, digest=digest, canonical=canonical, context=context)
        return self.registry.reference(name)
