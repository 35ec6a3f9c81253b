"""Default filter operator policies.

`operators_for` decides which comparison fields a scalar-like field gets in a
filter type, `create_relation_filter_fields` adds the fields of relationship
fields.
"""

from __future__ import annotations

import enum
from collections.abc import Collection
from typing import TYPE_CHECKING, Callable

from typing_extensions import TypeAlias, assert_never

from .exceptions import InvalidReferenceError
from .types import (
    EnumType,
    FieldDefinition,
    FieldsContainer,
    InputObjectType,
    InterfaceType,
    NamedType,
    ObjectType,
    ScalarType,
    is_list,
)

if TYPE_CHECKING:
    from .filters import FilterInputBuilder


class FieldOperator(enum.Enum):
    EQ = ("", False)
    NEQ = ("not", False)
    IN = ("in", True)
    NIN = ("not_in", True)
    LT = ("lt", False)
    LTE = ("lte", False)
    GT = ("gt", False)
    GTE = ("gte", False)
    C = ("contains", False)
    NC = ("not_contains", False)
    SW = ("starts_with", False)
    NSW = ("not_starts_with", False)
    EW = ("ends_with", False)
    NEW = ("not_ends_with", False)

    def __init__(self, suffix: str, is_list: bool):
        self.suffix = suffix
        self.list = is_list

    def field_name(self, field_name: str) -> str:
        if self is FieldOperator.EQ:
            return field_name
        return f"{field_name}_{self.suffix}"


_EQUALITY = [FieldOperator.EQ, FieldOperator.NEQ]
_MEMBERSHIP = [*_EQUALITY, FieldOperator.IN, FieldOperator.NIN]
_COMPARISON = [
    *_MEMBERSHIP,
    FieldOperator.LT,
    FieldOperator.LTE,
    FieldOperator.GT,
    FieldOperator.GTE,
]
_STRING = [
    FieldOperator.C,
    FieldOperator.NC,
    FieldOperator.SW,
    FieldOperator.NSW,
    FieldOperator.EW,
    FieldOperator.NEW,
]


def operators_for(
    type_: NamedType,
    *,
    native_types: Collection[str] = (),
    spatial_types: Collection[str] = (),
) -> list[FieldOperator]:
    """Return the operators applying to a field filtered by `type_`.

    `native_types` and `spatial_types` hold the names (of the native types
    and of their input types) to treat as domain-native values.
    """
    if type_.name in spatial_types:
        return list(_EQUALITY)
    if type_.name in native_types:
        return list(_COMPARISON)
    if isinstance(type_, (ObjectType, InterfaceType, InputObjectType)):
        raise InvalidReferenceError(
            f"{type_.name} cannot be filtered by field operators, "
            "use the relation operators instead"
        )
    if isinstance(type_, EnumType):
        return list(_MEMBERSHIP)
    if isinstance(type_, ScalarType):
        if type_.name == "Boolean":
            return list(_EQUALITY)
        if type_.name in {"String", "ID"}:
            return [*_COMPARISON, *_STRING]
        return list(_COMPARISON)
    assert_never(type_)


ScalarOperatorPolicy: TypeAlias = Callable[[NamedType], list[FieldOperator]]


class RelationOperator(enum.Enum):
    EQ_OR_NOT_EXISTS = ""
    NOT = "_not"
    SOME = "_some"
    NONE = "_none"
    SINGLE = "_single"
    EVERY = "_every"

    def field_name(self, field_name: str) -> str:
        return f"{field_name}{self.value}"


def create_relation_filter_fields(
    type_: FieldsContainer,
    field: FieldDefinition,
    filter_type: str,
    builder: FilterInputBuilder,
) -> None:
    def add(op: RelationOperator, description: str):
        builder.add_filter_field(op.field_name(field.name), False, filter_type, description)

    if is_list(field.type):
        add(
            RelationOperator.EQ_OR_NOT_EXISTS,
            f"Filters only those `{type_.name}` for which all `{field.name}`-relationships "
            "match this filter. If `null` is passed to this field, only those "
            f"`{type_.name}` will be filtered which has no `{field.name}`-relations",
        )
        add(
            RelationOperator.NOT,
            f"Filters only those `{type_.name}` for which all `{field.name}`-relationships "
            "do not match this filter. If `null` is passed to this field, only those "
            f"`{type_.name}` will be filtered which has any `{field.name}`-relation",
        )
        add(
            RelationOperator.SOME,
            f"Filters only those `{type_.name}` for which at least one "
            f"`{field.name}`-relationship matches this filter",
        )
        add(
            RelationOperator.NONE,
            f"Filters only those `{type_.name}` for which no "
            f"`{field.name}`-relationship matches this filter",
        )
        add(
            RelationOperator.SINGLE,
            f"Filters only those `{type_.name}` for which exactly one "
            f"`{field.name}`-relationship matches this filter",
        )
        add(
            RelationOperator.EVERY,
            f"Filters only those `{type_.name}` for which all "
            f"`{field.name}`-relationships match this filter",
        )
    else:
        add(
            RelationOperator.EQ_OR_NOT_EXISTS,
            f"Filters only those `{type_.name}` for which the `{field.name}`-relationship "
            "matches this filter. If `null` is passed to this field, only those "
            f"`{type_.name}` will be filtered which has no `{field.name}`-relation",
        )
        add(
            RelationOperator.NOT,
            f"Filters only those `{type_.name}` for which the `{field.name}`-relationship "
            "does not match this filter. If `null` is passed to this field, only those "
            f"`{type_.name}` will be filtered which has a `{field.name}`-relation",
        )


RelationOperatorPolicy: TypeAlias = Callable[
    [FieldsContainer, FieldDefinition, str, "FilterInputBuilder"],
    None,
]
