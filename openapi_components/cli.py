"""
Hoist inline JSON body schemas of an OpenAPI document into components.schemas.

Every object, enum and untyped schema found in a JSON response or request
body is moved into `#/components/schemas/<Name>` and replaced by a `$ref`.
Names come from where the schema was found:

  operationId[.Payload][.Status].<Path>.<Property>...

Structurally identical schemas share one component. A schema used in more
than one place is renamed after its shallowest usage.

Usage:
    extract-openapi-components openapi.json -o openapi.components.json
    extract-openapi-components openapi.yaml --verbose > out.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .documents import dump_document, format_for_path, load_document
from .transform import ExtractionOptions, ExtractionResult, extract_components
from .walker import JSON_MEDIA_TYPE


def _eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Extract inline request/response schemas of an OpenAPI document into named components."
    )
    p.add_argument(
        "entrypoint_pos",
        nargs="?",
        help="Path to the OpenAPI JSON/YAML file (positional, optional if --entrypoint is provided).",
    )
    p.add_argument(
        "--entrypoint",
        default=None,
        help="Path to the OpenAPI JSON/YAML file.",
    )
    p.add_argument(
        "-o",
        "--output",
        help="Write output to this file (default: stdout).",
        default=None,
    )
    p.add_argument(
        "--format",
        choices=["json", "yaml"],
        default=None,
        help="Output format. Defaults to the format of the entrypoint.",
    )
    p.add_argument(
        "--no-pretty",
        action="store_true",
        help="Emit compact output instead of pretty-printed output.",
    )
    p.add_argument(
        "--media-type",
        default=JSON_MEDIA_TYPE,
        help=f"Content type whose schemas are extracted (default: {JSON_MEDIA_TYPE}).",
    )
    p.add_argument(
        "--no-schema-ids",
        action="store_true",
        help="Do not add a '$id' equal to the component name to each extracted schema.",
    )
    p.add_argument(
        "--no-shorten",
        action="store_true",
        help="Keep first-seen names for schemas used in several places instead of renaming them "
        "after their shallowest usage.",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Report every extracted schema and rename on stderr.",
    )
    return p.parse_args(argv)


def _report(result: ExtractionResult) -> None:
    for name in result.created:
        _eprint(f"extracted: {name}")
    for old, new in result.renamed:
        _eprint(f"renamed: {old} -> {new}")
    shared = sum(1 for usages in result.usages.values() if len(usages) > 1)
    _eprint(f"{len(result.created)} schema(s) extracted, {shared} shared, {len(result.renamed)} renamed.")


def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    entrypoint_raw = args.entrypoint or args.entrypoint_pos
    if not entrypoint_raw:
        _eprint("error: missing entrypoint (provide a positional entrypoint or --entrypoint).")
        return 2

    entrypoint = Path(entrypoint_raw)
    if not entrypoint.exists():
        _eprint(f"error: entrypoint does not exist: {entrypoint}")
        return 2

    options = ExtractionOptions(
        media_type=str(args.media_type),
        assign_ids=not args.no_schema_ids,
        shorten_names=not args.no_shorten,
    )
    try:
        doc = load_document(entrypoint)
        result = extract_components(doc, options=options)
    except Exception as e:
        _eprint(f"error: {e}")
        return 1

    if args.verbose:
        _report(result)

    fmt = args.format or format_for_path(entrypoint)
    content = dump_document(result.document, fmt=fmt, pretty=not args.no_pretty)

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
    else:
        sys.stdout.write(content)
    return 0


def run(argv: Optional[list[str]] = None) -> None:
    raise SystemExit(main(sys.argv[1:] if argv is None else argv))
