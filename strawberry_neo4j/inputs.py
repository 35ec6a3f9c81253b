from __future__ import annotations

import logging
from collections.abc import Sequence

from .context import BuildContext
from .exceptions import NamingCollisionError
from .fields import get_input_type
from .types import (
    FieldDefinition,
    InputField,
    InputObjectType,
    kind_of,
    ref,
    strip_non_null,
)

logger = logging.getLogger(__name__)


def get_input_fields(
    ctx: BuildContext,
    fields: Sequence[FieldDefinition],
) -> tuple[InputField, ...]:
    # just make everything optional
    return tuple(
        InputField(
            field.name,
            ref(get_input_type(ctx, strip_non_null(field.type))),
            field.description,
        )
        for field in fields
    )


def add_input_type(
    ctx: BuildContext,
    name: str,
    fields: Sequence[FieldDefinition],
) -> InputObjectType:
    """Bind an input type named `name` with an optional field per field given.

    An input type already bound under `name` is returned as is.
    """
    existing = ctx.registry.lookup(name)
    if existing is not None:
        if not isinstance(existing, InputObjectType):
            raise NamingCollisionError(name, "input", kind_of(existing))
        return existing

    logger.debug("Derived input type %s", name)
    input_type = InputObjectType(name, get_input_fields(ctx, fields))
    ctx.registry.bind(name, input_type)
    return input_type
