"""Type definitions the augmentation works on.

Every schema type is one variant of :data:`GraphQLTypeDef`. Named variants live
in a :class:`~strawberry_neo4j.registry.TypeRegistry`, wrappers and
references only appear inside field, argument and input field types.
"""

from __future__ import annotations

import dataclasses
from typing import Optional, Union

from typing_extensions import TypeAlias, TypeGuard, assert_never


@dataclasses.dataclass(frozen=True)
class Relation:
    """Relationship metadata declared on a field."""

    name: str
    direction: str = "OUT"


@dataclasses.dataclass(frozen=True)
class RelationDefinition:
    """Relationship metadata declared on a relationship entity type."""

    name: str
    from_field: str = "from"
    to_field: str = "to"


@dataclasses.dataclass(frozen=True)
class Argument:
    name: str
    type: GraphQLTypeDef
    description: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class InputField:
    name: str
    type: GraphQLTypeDef
    description: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class FieldDefinition:
    """A field of an object or interface type.

    `relationship`, `dynamic_prefix` and `identity` are the metadata the
    derivations act on: relationship fields get relation filters, dynamic
    fields are not filterable and identity fields sort first in orderings.
    """

    name: str
    type: GraphQLTypeDef
    arguments: tuple[Argument, ...] = ()
    description: Optional[str] = None
    relationship: bool = False
    relation: Optional[Relation] = None
    dynamic_prefix: Optional[str] = None
    identity: bool = False

    def get_argument(self, name: str) -> Optional[Argument]:
        return next((a for a in self.arguments if a.name == name), None)


@dataclasses.dataclass(frozen=True)
class EnumValue:
    name: str
    value: str


@dataclasses.dataclass(frozen=True)
class ScalarType:
    name: str
    description: Optional[str] = None
    native: bool = False


@dataclasses.dataclass(frozen=True)
class EnumType:
    name: str
    values: tuple[EnumValue, ...] = ()
    description: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class ObjectType:
    name: str
    fields: tuple[FieldDefinition, ...] = ()
    interfaces: tuple[str, ...] = ()
    description: Optional[str] = None
    relation: Optional[RelationDefinition] = None
    native: bool = False

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        return next((f for f in self.fields if f.name == name), None)

    def with_field(self, field: FieldDefinition) -> ObjectType:
        return dataclasses.replace(self, fields=(*self.fields, field))


@dataclasses.dataclass(frozen=True)
class InterfaceType:
    name: str
    fields: tuple[FieldDefinition, ...] = ()
    description: Optional[str] = None

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        return next((f for f in self.fields if f.name == name), None)


@dataclasses.dataclass(frozen=True)
class InputObjectType:
    name: str
    fields: tuple[InputField, ...] = ()
    description: Optional[str] = None

    def get_field(self, name: str) -> Optional[InputField]:
        return next((f for f in self.fields if f.name == name), None)


@dataclasses.dataclass(frozen=True)
class ListType:
    of_type: GraphQLTypeDef


@dataclasses.dataclass(frozen=True)
class NonNullType:
    of_type: GraphQLTypeDef


@dataclasses.dataclass(frozen=True)
class TypeReference:
    """Placeholder for a named type, resolved by registry lookup at read time."""

    name: str


NamedType: TypeAlias = Union[
    ObjectType,
    InterfaceType,
    InputObjectType,
    EnumType,
    ScalarType,
]
FieldsContainer: TypeAlias = Union[ObjectType, InterfaceType]
GraphQLTypeDef: TypeAlias = Union[
    ObjectType,
    InterfaceType,
    InputObjectType,
    EnumType,
    ScalarType,
    ListType,
    NonNullType,
    TypeReference,
]

Int = ScalarType("Int")
Float = ScalarType("Float")
String = ScalarType("String")
Boolean = ScalarType("Boolean")
ID = ScalarType("ID")

BUILTIN_SCALARS: tuple[ScalarType, ...] = (Int, Float, String, Boolean, ID)


def inner_type(type_: GraphQLTypeDef) -> GraphQLTypeDef:
    """Strip every list and non-null wrapper."""
    while isinstance(type_, (ListType, NonNullType)):
        type_ = type_.of_type
    return type_


def strip_non_null(type_: GraphQLTypeDef) -> GraphQLTypeDef:
    return type_.of_type if isinstance(type_, NonNullType) else type_


def is_list(type_: GraphQLTypeDef) -> bool:
    return isinstance(strip_non_null(type_), ListType)


def rewrap(wrapped: GraphQLTypeDef, inner: GraphQLTypeDef) -> GraphQLTypeDef:
    """Apply the list/non-null wrappers of `wrapped` around `inner`."""
    if isinstance(wrapped, NonNullType):
        return NonNullType(rewrap(wrapped.of_type, inner))
    if isinstance(wrapped, ListType):
        return ListType(rewrap(wrapped.of_type, inner))
    return inner


def ref(type_: GraphQLTypeDef) -> GraphQLTypeDef:
    """Replace the innermost named type by a reference to it."""
    inner = inner_type(type_)
    if isinstance(inner, TypeReference):
        return type_
    return rewrap(type_, TypeReference(inner.name))


def type_name(type_: GraphQLTypeDef) -> str:
    """Print a type the way it appears in SDL, e.g. `[Movie!]!`."""
    if isinstance(type_, NonNullType):
        return f"{type_name(type_.of_type)}!"
    if isinstance(type_, ListType):
        return f"[{type_name(type_.of_type)}]"
    return type_.name


def is_fields_container(type_: GraphQLTypeDef) -> TypeGuard[FieldsContainer]:
    return isinstance(type_, (ObjectType, InterfaceType))


def kind_of(type_: NamedType) -> str:
    if isinstance(type_, ObjectType):
        return "object"
    if isinstance(type_, InterfaceType):
        return "interface"
    if isinstance(type_, InputObjectType):
        return "input"
    if isinstance(type_, EnumType):
        return "enum"
    if isinstance(type_, ScalarType):
        return "scalar"
    assert_never(type_)
