from __future__ import annotations

import logging
from typing import Optional

from .context import BuildContext
from .exceptions import NamingCollisionError
from .types import (
    EnumType,
    EnumValue,
    FieldDefinition,
    FieldsContainer,
    ScalarType,
    kind_of,
)

logger = logging.getLogger(__name__)


def ordering_type_name(type_name: str) -> str:
    return f"_{type_name}Ordering"


def get_sorting_fields(
    ctx: BuildContext,
    type_: FieldsContainer,
) -> list[FieldDefinition]:
    """Fields a type can be sorted by, identity fields first."""
    fields = []
    for field in type_.fields:
        definition = ctx.registry.resolve_inner(field.type)
        if isinstance(definition, ScalarType) or ctx.is_native(definition):
            fields.append(field)

    # sorted() is stable, so declaration order is kept otherwise
    return sorted(fields, key=lambda f: f.identity, reverse=True)


def add_ordering(ctx: BuildContext, type_: FieldsContainer) -> Optional[str]:
    """Derive the ordering enum of `type_` and return its name.

    Returns `None` without binding anything when the type has nothing to
    sort by.
    """
    ordering_name = ordering_type_name(type_.name)
    existing = ctx.registry.lookup(ordering_name)
    if existing is not None:
        if not isinstance(existing, EnumType):
            raise NamingCollisionError(ordering_name, "enum", kind_of(existing))
        return existing.name

    sorting_fields = get_sorting_fields(ctx, type_)
    if not sorting_fields:
        return None

    values = tuple(
        EnumValue(name=f"{field.name}{suffix}", value=f"{field.name}{suffix}")
        for field in sorting_fields
        for suffix in ctx.settings["ORDERING_SUFFIXES"]
    )

    logger.debug("Derived ordering type %s for %s", ordering_name, type_.name)
    ctx.registry.bind(ordering_name, EnumType(ordering_name, values))
    return ordering_name
