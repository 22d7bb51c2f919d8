"""
State owned by a single extraction: the component registry, the usage ledger,
the fingerprint index and the back-reference index.

Every `{"$ref": ...}` mapping handed out by `reference()` is remembered under
its target name, so a rename patches those mappings directly instead of
searching the document for matching strings.
"""

import hashlib
import json
from typing import Any, Iterable, Optional

from .errors import FingerprintCollisionError, LedgerInconsistencyError, NameCollisionError
from .naming import SchemaContext, schema_ref

Json = Any


def canonical_json(schema: Json) -> str:
    # Key order is significant: {"a", "b"} and {"b", "a"} are different shapes.
    # YAML timestamps (date, datetime) serialize as their ISO text.
    return json.dumps(schema, sort_keys=False, separators=(",", ":"), ensure_ascii=True, default=str)


def fingerprint(canonical: str) -> str:
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ComponentRegistry:
    def __init__(self, *, reserved: Iterable[str] = ()) -> None:
        self.schemas: dict[str, dict[str, Any]] = {}
        self.usages: dict[str, list[SchemaContext]] = {}
        self.references: dict[str, list[dict[str, Any]]] = {}
        self.reserved: set[str] = set(reserved)
        self._names_by_fingerprint: dict[str, str] = {}
        self._canonical_by_fingerprint: dict[str, str] = {}

    def is_taken(self, name: str) -> bool:
        return name in self.schemas or name in self.reserved

    def lookup(self, digest: str, canonical: str) -> Optional[str]:
        """
        Return the name registered for this fingerprint, or None.

        A hit is confirmed against the stored serialization; a mismatch means
        the hash collided and is reported rather than treated as equality.
        """
        name = self._names_by_fingerprint.get(digest)
        if name is None:
            return None
        if self._canonical_by_fingerprint[digest] != canonical:
            raise FingerprintCollisionError(
                f"Fingerprint {digest} is shared by schemas that are not equal (registered as {name!r})."
            )
        return name

    def register(
        self,
        name: str,
        schema: dict[str, Any],
        *,
        digest: str,
        canonical: str,
        context: SchemaContext,
    ) -> None:
        if self.is_taken(name):
            raise NameCollisionError(
                name,
                f"Conflict in schema names: {name!r} is already registered for a different schema "
                f"(operation {context.operation_id!r}, path {'/'.join(context.path)!r}).",
            )
        self.schemas[name] = schema
        self._names_by_fingerprint[digest] = name
        self._canonical_by_fingerprint[digest] = canonical
        self.usages[name] = [context]

    def record_usage(self, name: str, context: SchemaContext) -> None:
        if name not in self.usages:
            raise LedgerInconsistencyError(f"Schema {name!r} was matched by fingerprint but has no recorded usages.")
        self.usages[name].append(context)

    def reference(self, name: str) -> dict[str, Any]:
        ref = {"$ref": schema_ref(name)}
        self.references.setdefault(name, []).append(ref)
        return ref

    def rename(self, old: str, new: str) -> None:
        """
        Move a registered schema to a new name and repoint every reference to it.

        The entry moves to the end of the registry. Content is not copied; the
        same mapping is re-keyed so references nested inside it stay live.
        """
        if old not in self.schemas:
            raise KeyError(f"Schema {old!r} is not registered.")
        schema = self.schemas.pop(old)
        if schema.get("$id") == old:
            schema["$id"] = new
        self.schemas[new] = schema
        self.usages[new] = self.usages.pop(old, [])

        refs = self.references.pop(old, [])
        for ref in refs:
            ref["$ref"] = schema_ref(new)
        self.references.setdefault(new, []).extend(refs)

        for digest, name in self._names_by_fingerprint.items():
            if name == old:
                self._names_by_fingerprint[digest] = new
                break
