"""Visit every JSON response and request body schema of an OpenAPI document."""

from typing import Any, Callable, Iterator

from .naming import SchemaContext
from .registry import Json

JSON_MEDIA_TYPE = "application/json"

_OPENAPI_METHOD_KEYS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)

SchemaVisitor = Callable[[Json, SchemaContext], Json]


def _media_object(container: Any, media_type: str) -> Any:
    if not isinstance(container, dict):
        return None
    content = container.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(media_type)
    if not isinstance(media, dict) or "schema" not in media:
        return None
    return media


def iter_operations(document: Json) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """Yield (url_path, method, operation) in document order."""
    if not isinstance(document, dict):
        return
    paths = document.get("paths")
    if not isinstance(paths, dict):
        return
    for url_path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method not in _OPENAPI_METHOD_KEYS or not isinstance(operation, dict):
                continue
            yield url_path, method, operation


def walk_document(document: Json, visit: SchemaVisitor, *, media_type: str = JSON_MEDIA_TYPE) -> None:
    """
    Replace each body schema in place with whatever ``visit`` returns.

    Responses are visited before the request body of the same operation,
    both in document order.
    """
    for url_path, _method, operation in iter_operations(document):
        operation_id = operation.get("operationId")
        if not isinstance(operation_id, str):
            operation_id = None

        responses = operation.get("responses")
        if isinstance(responses, dict):
            for status, response in responses.items():
                media = _media_object(response, media_type)
                if media is None:
                    continue
                context = SchemaContext(path=(url_path,), operation_id=operation_id, status=str(status))
                media["schema"] = visit(media["schema"], context)

        media = _media_object(operation.get("requestBody"), media_type)
        if media is not None:
            context = SchemaContext(path=(url_path,), operation_id=operation_id, status=None, is_payload=True)
            media["schema"] = visit(media["schema"], context)
