from __future__ import annotations

import logging
from typing import Optional

from typing_extensions import assert_never

from .context import BuildContext
from .exceptions import InvalidReferenceError, NamingCollisionError
from .fields import get_input_type
from .types import (
    EnumType,
    FieldsContainer,
    GraphQLTypeDef,
    InputField,
    InputObjectType,
    InterfaceType,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    TypeReference,
    inner_type,
    kind_of,
)

logger = logging.getLogger(__name__)

LOGICAL_OPERATORS = ("AND", "OR", "NOT")


def filter_type_name(type_name: str) -> str:
    return f"_{type_name}Filter"


class FilterInputBuilder:
    """Collects the fields of a filter input type before it is bound."""

    def __init__(self, name: str, description: Optional[str] = None):
        self.name = name
        self.description = description
        self.fields: dict[str, InputField] = {}

    def field(
        self,
        name: str,
        type_: GraphQLTypeDef,
        description: Optional[str] = None,
    ) -> FilterInputBuilder:
        self.fields[name] = InputField(name, type_, description)
        return self

    def add_filter_field(
        self,
        name: str,
        is_list: bool,
        filter_type: str,
        description: Optional[str] = None,
    ) -> FilterInputBuilder:
        type_: GraphQLTypeDef = TypeReference(filter_type)
        if is_list:
            type_ = ListType(NonNullType(type_))
        return self.field(name, type_, description)

    def build(self) -> InputObjectType:
        return InputObjectType(
            self.name,
            tuple(self.fields.values()),
            description=self.description,
        )


def add_filter_type(
    ctx: BuildContext,
    type_: FieldsContainer,
    visited: Optional[set[str]] = None,
) -> str:
    """Derive the filter input type of `type_` and return its name.

    Filter types of nested object and interface types are derived as well.
    `visited` holds the filter types under construction in the current call
    tree, so a type reachable from itself refers to its own filter type by
    reference instead of recursing.
    """
    if visited is None:
        visited = set()

    filter_name = filter_type_name(type_.name)
    if filter_name in visited:
        return filter_name

    existing = ctx.registry.lookup(filter_name)
    if existing is not None:
        if not isinstance(existing, InputObjectType):
            raise NamingCollisionError(filter_name, "input", kind_of(existing))
        return existing.name

    visited.add(filter_name)
    builder = FilterInputBuilder(filter_name)
    for op in LOGICAL_OPERATORS:
        builder.field(op, ListType(NonNullType(TypeReference(filter_name))))

    for field in type_.fields:
        # TODO: support filtering on dynamic properties
        if field.dynamic_prefix is not None:
            continue
        if field.name in LOGICAL_OPERATORS:
            logger.debug(
                "Skipping %s.%s, clashes with a logical operator",
                type_.name,
                field.name,
            )
            continue

        definition = ctx.registry.resolve_inner(field.type)
        if ctx.is_native(definition):
            filter_type = inner_type(get_input_type(ctx, definition)).name
        elif isinstance(definition, (ScalarType, EnumType)):
            filter_type = definition.name
        elif isinstance(definition, (ObjectType, InterfaceType)):
            filter_type = add_filter_type(ctx, definition, visited)
        elif isinstance(definition, InputObjectType):
            raise InvalidReferenceError(
                f"{definition.name} is neither an object nor an interface"
            )
        else:
            assert_never(definition)

        if field.relationship:
            ctx.relation_operators(type_, field, filter_type, builder)
        else:
            key_type = ctx.registry.lookup(filter_type) or definition
            for op in ctx.field_operators(key_type):
                builder.add_filter_field(op.field_name(field.name), op.list, filter_type)

    logger.debug("Derived filter type %s for %s", filter_name, type_.name)
    ctx.registry.bind(filter_name, builder.build())
    return filter_name
