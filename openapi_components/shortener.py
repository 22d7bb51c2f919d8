"""
Give shared schemas the name of their shallowest usage.

A schema first met deep inside one response keeps that long, context-derived
name unless it is reused. Once it is referenced from two or more places the
shallowest of those places describes it better, e.g. an address first found
at CreateUser.V1.Users.Profile.Address but also returned directly by
GetAddress becomes GetAddress.V1.Addresses.One.
"""

from .errors import NameCollisionError
from .naming import SchemaContext, schema_name
from .registry import ComponentRegistry


def _shallowest(usages: list[SchemaContext]) -> SchemaContext:
    # min() keeps the first of equally shallow contexts.
    return min(usages, key=lambda context: context.depth)


def plan_renames(registry: ComponentRegistry) -> list[tuple[str, str]]:
    """Compute (old, new) renames and check them all before anything moves."""
    taken = set(registry.schemas) | registry.reserved
    plan: list[tuple[str, str]] = []
    for name, usages in registry.usages.items():
        if len(usages) <= 1:
            continue
        new_name = schema_name(_shallowest(usages))
        if new_name == name:
            continue
        if new_name in taken:
            raise NameCollisionError(
                new_name,
                f"Conflict in schema names: cannot rename {name!r} to {new_name!r}, "
                "which is already used by another schema.",
            )
        taken.discard(name)
        taken.add(new_name)
        plan.append((name, new_name))
    return plan


def shorten_shared_names(registry: ComponentRegistry) -> list[tuple[str, str]]:
    plan = plan_renames(registry)
    for old, new in plan:
        registry.rename(old, new)
    return plan
