from __future__ import annotations

import logging

from .context import BuildContext
from .exceptions import NamingCollisionError
from .types import FieldDefinition, ObjectType, kind_of

logger = logging.getLogger(__name__)


def add_operation(
    ctx: BuildContext,
    root_type_name: str,
    field: FieldDefinition,
) -> None:
    """Add `field` to the root type named `root_type_name`.

    The root type is created when missing. A field with the same name already
    on the root type is kept and `field` is dropped.
    """
    root_type = ctx.registry.lookup(root_type_name)
    if root_type is None:
        ctx.registry.bind(root_type_name, ObjectType(root_type_name, (field,)))
        return

    if not isinstance(root_type, ObjectType):
        raise NamingCollisionError(root_type_name, "object", kind_of(root_type))

    if root_type.get_field(field.name) is not None:
        logger.debug("Skipping %s.%s, already defined", root_type_name, field.name)
        return

    ctx.registry.replace(root_type_name, root_type.with_field(field))
