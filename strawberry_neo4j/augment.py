"""Generate the query and mutation fields of a graph schema.

For every domain type this adds a query field taking a filter and an
ordering, CRUD mutations and mutations connecting relationships.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .context import BuildContext
from .fields import build_field_definition, get_input_type
from .filters import add_filter_type
from .inputs import add_input_type
from .operations import add_operation
from .ordering import add_ordering
from .registry import TypeRegistry
from .sdl import print_registry, registry_from_sdl
from .types import (
    Argument,
    EnumType,
    FieldDefinition,
    FieldsContainer,
    GraphQLTypeDef,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    TypeReference,
    strip_non_null,
)

logger = logging.getLogger(__name__)


def _lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def _upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def get_scalar_fields(
    ctx: BuildContext,
    type_: FieldsContainer,
) -> list[FieldDefinition]:
    """Fields holding plain values, usable as operation arguments."""
    fields = []
    for field in type_.fields:
        if field.relationship or field.dynamic_prefix is not None:
            continue
        definition = ctx.registry.resolve_inner(field.type)
        if isinstance(definition, (ScalarType, EnumType)) or ctx.is_native(definition):
            fields.append(field)
    return fields


def get_identity_field(
    ctx: BuildContext,
    type_: FieldsContainer,
) -> Optional[FieldDefinition]:
    """First identity field in declaration order.

    Every field typed `ID` counts as an identity field, including foreign keys
    and `[ID]` lists, so types with several of them are identified by the one
    declared first.
    """
    return next((f for f in get_scalar_fields(ctx, type_) if f.identity), None)


def _required_input(ctx: BuildContext, type_: GraphQLTypeDef) -> GraphQLTypeDef:
    return NonNullType(strip_non_null(get_input_type(ctx, type_)))


def build_query_field(
    ctx: BuildContext,
    type_: ObjectType,
    scalar_fields: Sequence[FieldDefinition],
) -> FieldDefinition:
    field = build_field_definition(
        ctx,
        "",
        type_,
        scalar_fields,
        nullable_result=False,
        force_optional=lambda f: True,
    )

    arguments = [
        *field.arguments,
        Argument("filter", TypeReference(add_filter_type(ctx, type_))),
    ]
    ordering = add_ordering(ctx, type_)
    if ordering is not None:
        arguments.append(
            Argument("orderBy", ListType(NonNullType(TypeReference(ordering))))
        )
    arguments.extend([
        Argument("first", TypeReference("Int")),
        Argument("offset", TypeReference("Int")),
    ])

    return dataclasses.replace(
        field,
        name=_lower_first(type_.name),
        type=NonNullType(ListType(NonNullType(TypeReference(type_.name)))),
        arguments=tuple(arguments),
    )


def build_mutation_fields(
    ctx: BuildContext,
    type_: ObjectType,
    scalar_fields: Sequence[FieldDefinition],
    identity: Optional[FieldDefinition],
) -> list[FieldDefinition]:
    fields = [
        build_field_definition(
            ctx,
            "create",
            type_,
            scalar_fields,
            nullable_result=False,
            force_optional=lambda f: f.identity,
        ),
    ]
    if identity is None:
        return fields

    fields.extend([
        build_field_definition(
            ctx,
            "merge",
            type_,
            scalar_fields,
            nullable_result=False,
            force_optional=lambda f: not f.identity,
        ),
        build_field_definition(
            ctx,
            "update",
            type_,
            scalar_fields,
            nullable_result=True,
            force_optional=lambda f: not f.identity,
        ),
        build_field_definition(
            ctx,
            "delete",
            type_,
            [identity],
            nullable_result=True,
        ),
    ])
    return fields


def build_relation_fields(
    ctx: BuildContext,
    type_: ObjectType,
    field: FieldDefinition,
    identity: FieldDefinition,
) -> list[FieldDefinition]:
    """Mutations adding and deleting the relationships of `field`."""
    target = ctx.registry.get_fields_container(field.type)
    target_identity = get_identity_field(ctx, target)
    if target_identity is None:
        logger.debug(
            "Skipping relation mutations of %s.%s, %s has no identity field",
            type_.name,
            field.name,
            target.name,
        )
        return []

    arguments = [
        Argument(identity.name, _required_input(ctx, identity.type)),
        Argument(
            field.name,
            NonNullType(ListType(_required_input(ctx, target_identity.type))),
        ),
    ]
    suffix = f"{type_.name}{_upper_first(field.name)}"
    delete = FieldDefinition(
        f"delete{suffix}",
        TypeReference(type_.name),
        arguments=tuple(arguments),
    )

    relation_type = (
        ctx.get_type_for_relation(field.relation.name) if field.relation else None
    )
    if relation_type is not None and relation_type.relation is not None:
        excluded = {relation_type.relation.from_field, relation_type.relation.to_field}
        properties = [
            f
            for f in get_scalar_fields(ctx, relation_type)
            if f.name not in excluded
        ]
        if properties:
            input_type = add_input_type(ctx, f"_{relation_type.name}Input", properties)
            arguments.append(Argument("properties", TypeReference(input_type.name)))

    add = FieldDefinition(
        f"add{suffix}",
        TypeReference(type_.name),
        arguments=tuple(arguments),
    )
    return [add, delete]


def augment_registry(
    registry: TypeRegistry,
    settings: Optional[Mapping[str, Any]] = None,
) -> TypeRegistry:
    """Add the generated operations and derived types to `registry` in place."""
    ctx = BuildContext.create(registry, settings)
    query_name = ctx.settings["QUERY_TYPE_NAME"]
    mutation_name = ctx.settings["MUTATION_TYPE_NAME"]

    domain_types = [
        t
        for t in registry.values()
        if isinstance(t, ObjectType)
        and not t.native
        and t.relation is None
        and t.name not in {query_name, mutation_name}
    ]
    for type_ in domain_types:
        logger.debug("Augmenting %s", type_.name)
        scalar_fields = get_scalar_fields(ctx, type_)
        identity = get_identity_field(ctx, type_)

        if ctx.settings["GENERATE_QUERIES"]:
            add_operation(ctx, query_name, build_query_field(ctx, type_, scalar_fields))

        if ctx.settings["GENERATE_MUTATIONS"]:
            for field in build_mutation_fields(ctx, type_, scalar_fields, identity):
                add_operation(ctx, mutation_name, field)

        if ctx.settings["GENERATE_RELATION_MUTATIONS"] and identity is not None:
            for relationship in type_.fields:
                if not relationship.relationship or relationship.dynamic_prefix is not None:
                    continue
                for field in build_relation_fields(ctx, type_, relationship, identity):
                    add_operation(ctx, mutation_name, field)

    return registry


def augment_schema(sdl: str, settings: Optional[Mapping[str, Any]] = None) -> str:
    """Augment the types defined in `sdl` and print the resulting schema."""
    registry = augment_registry(registry_from_sdl(sdl, settings), settings)
    return print_registry(registry, settings)
