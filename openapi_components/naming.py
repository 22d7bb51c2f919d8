"""
Canonical component names derived from where a schema was found.

A name is built from the operation, the payload marker, a non-2xx status and
every element of the context path, title-cased and joined with dots:

  getJob, 404, ["/v1/jobs/{jobId}", "error"] -> GetJob.404.V1.Jobs.One.Error

Segments after the first that end in "Id" are replaced with "One" so that
per-instance path parameters read as "one of".
"""

import re
from dataclasses import dataclass
from typing import Optional

ARRAY_ITEM_SEGMENT = "array-item"
PAYLOAD_SEGMENT = "Payload"
SCHEMA_REF_PREFIX = "#/components/schemas/"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class SchemaContext:
    path: tuple[str, ...]
    operation_id: Optional[str] = None
    status: Optional[str] = None
    is_payload: bool = False

    @property
    def depth(self) -> int:
        return len(self.path)

    def child(self, segment: str) -> "SchemaContext":
        return SchemaContext(
            path=self.path + (segment,),
            operation_id=self.operation_id,
            status=self.status,
            is_payload=self.is_payload,
        )


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _title_element(element: str) -> str:
    # "line-items" -> "LineItems", "jobId" -> "JobId", "{id}" -> "Id"
    joined = "".join(_upper_first(piece) for piece in element.split("-"))
    return _upper_first(_NON_ALNUM.sub("", joined))


def schema_ref(name: str) -> str:
    return f"{SCHEMA_REF_PREFIX}{name}"


def schema_name(context: SchemaContext) -> str:
    """Synthesize the canonical name for a schema found at ``context``."""
    status = str(context.status) if context.status is not None else ""
    parts: list[str] = [
        context.operation_id or "",
        PAYLOAD_SEGMENT if context.is_payload else "",
        status if status and not status.startswith("2") else "",
    ]
    for element in "/".join(context.path).split("/"):
        if element:
            parts.append(_title_element(element))

    segments: list[str] = []
    for part in parts:
        for piece in part.split("."):
            cleaned = _NON_ALNUM.sub("", _upper_first(piece))
            if cleaned:
                segments.append(_upper_first(cleaned))

    for i in range(1, len(segments)):
        if segments[i].endswith("Id"):
            segments[i] = "One"
    return ".".join(segments)
