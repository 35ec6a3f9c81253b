from __future__ import annotations

from collections.abc import Callable, Sequence

from typing_extensions import assert_never

from .context import BuildContext
from .exceptions import InvalidReferenceError
from .types import (
    Argument,
    EnumType,
    FieldDefinition,
    GraphQLTypeDef,
    InputObjectType,
    InterfaceType,
    NonNullType,
    ObjectType,
    ScalarType,
    TypeReference,
    inner_type,
    ref,
    rewrap,
    strip_non_null,
    type_name,
)


def _never_optional(field: FieldDefinition) -> bool:
    return False


def get_input_type(ctx: BuildContext, type_: GraphQLTypeDef) -> GraphQLTypeDef:
    """Translate a field type into the type accepting its value as input.

    Native types are replaced by their input type, types already usable as
    input are returned as is. Wrappers are kept.
    """
    inner = ctx.registry.resolve_inner(type_)

    if ctx.is_native(inner):
        input_name = ctx.native_input_name(inner)
        input_type = ctx.registry.lookup(input_name) if input_name else None
        if not isinstance(input_type, InputObjectType):
            raise InvalidReferenceError(f"Cannot find input type for {inner.name}")
        return rewrap(type_, TypeReference(input_type.name))

    if isinstance(inner, (ScalarType, EnumType, InputObjectType)):
        return type_
    if isinstance(inner, (ObjectType, InterfaceType)):
        raise InvalidReferenceError(f"{type_name(type_)} is not allowed for input")

    assert_never(inner)


def get_arguments(
    ctx: BuildContext,
    fields: Sequence[FieldDefinition],
    force_optional: Callable[[FieldDefinition], bool] = _never_optional,
) -> tuple[Argument, ...]:
    arguments = []
    for field in fields:
        type_ = get_input_type(ctx, field.type)
        if force_optional(field):
            type_ = strip_non_null(type_)
        arguments.append(Argument(field.name, type_))
    return tuple(arguments)


def build_field_definition(
    ctx: BuildContext,
    prefix: str,
    result_type: GraphQLTypeDef,
    scalar_fields: Sequence[FieldDefinition],
    nullable_result: bool,
    force_optional: Callable[[FieldDefinition], bool] = _never_optional,
) -> FieldDefinition:
    """Build a root operation field named `<prefix><ResultType>`.

    The arguments are the input forms of `scalar_fields`, non-null unless
    `force_optional` says otherwise. Nothing is bound in the registry.
    """
    type_ = ref(result_type)
    if not nullable_result and not isinstance(type_, NonNullType):
        type_ = NonNullType(type_)

    return FieldDefinition(
        name=f"{prefix}{inner_type(result_type).name}",
        type=type_,
        arguments=get_arguments(ctx, scalar_fields, force_optional),
    )
