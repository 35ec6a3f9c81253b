"""Conversion between SDL, strawberry schemas and type registries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, Union, cast

from graphql import (
    DirectiveNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    TypeDefinitionNode,
    TypeNode,
    parse,
    print_schema,
    specified_scalar_types,
    value_from_ast_untyped,
)
from typing_extensions import assert_never

from .directives import DYNAMIC, ID, RELATION
from .exceptions import InvalidReferenceError
from .registry import TypeRegistry
from .settings import StrawberryNeo4jSettings, strawberry_neo4j_settings
from .types import (
    Argument,
    EnumType,
    EnumValue,
    FieldDefinition,
    GraphQLTypeDef,
    InputField,
    InputObjectType,
    InterfaceType,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    Relation,
    RelationDefinition,
    ScalarType,
    TypeReference,
    inner_type,
)

if TYPE_CHECKING:
    import strawberry

NATIVE_TYPES_SDL = """
type _Neo4jTime {
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  timezone: String
  formatted: String
}

input _Neo4jTimeInput {
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  timezone: String
  formatted: String
}

type _Neo4jDate {
  year: Int
  month: Int
  day: Int
  formatted: String
}

input _Neo4jDateInput {
  year: Int
  month: Int
  day: Int
  formatted: String
}

type _Neo4jDateTime {
  year: Int
  month: Int
  day: Int
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  timezone: String
  formatted: String
}

input _Neo4jDateTimeInput {
  year: Int
  month: Int
  day: Int
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  timezone: String
  formatted: String
}

type _Neo4jLocalTime {
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  formatted: String
}

input _Neo4jLocalTimeInput {
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  formatted: String
}

type _Neo4jLocalDateTime {
  year: Int
  month: Int
  day: Int
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  formatted: String
}

input _Neo4jLocalDateTimeInput {
  year: Int
  month: Int
  day: Int
  hour: Int
  minute: Int
  second: Int
  millisecond: Int
  microsecond: Int
  nanosecond: Int
  formatted: String
}

type _Neo4jPoint {
  x: Float
  y: Float
  z: Float
  longitude: Float
  latitude: Float
  height: Float
  crs: String
  srid: Int
}

input _Neo4jPointInput {
  x: Float
  y: Float
  z: Float
  longitude: Float
  latitude: Float
  height: Float
  crs: String
  srid: Int
}
"""


def _get_directive(
    node: Union[TypeDefinitionNode, FieldDefinitionNode],
    name: str,
) -> Optional[dict[str, Any]]:
    directives: tuple[DirectiveNode, ...] = node.directives or ()
    for directive in directives:
        if directive.name.value == name:
            return {
                arg.name.value: value_from_ast_untyped(arg.value)
                for arg in directive.arguments or ()
            }
    return None


def _build_type(node: TypeNode) -> GraphQLTypeDef:
    if isinstance(node, NonNullTypeNode):
        return NonNullType(_build_type(node.type))
    if isinstance(node, ListTypeNode):
        return ListType(_build_type(node.type))
    if isinstance(node, NamedTypeNode):
        return TypeReference(node.name.value)
    raise TypeError(f"Unexpected type node {node!r}")


def _description(node: Any) -> Optional[str]:
    return node.description.value if node.description else None


class _RegistryLoader:
    def __init__(self, definitions: list[TypeDefinitionNode], settings: StrawberryNeo4jSettings):
        self.definitions = definitions
        self.settings = settings
        self.fields_containers = {
            d.name.value
            for d in definitions
            if isinstance(d, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode))
            and not self.is_native(d.name.value)
        }

    def is_native(self, name: str) -> bool:
        return name.startswith(self.settings["NATIVE_TYPE_PREFIX"])

    def build_field(self, node: FieldDefinitionNode) -> FieldDefinition:
        type_ = _build_type(node.type)
        inner_name = inner_type(type_).name

        relation = None
        if (relation_args := _get_directive(node, RELATION)) is not None:
            relation = Relation(
                name=relation_args["name"],
                direction=relation_args.get("direction") or "OUT",
            )

        dynamic_args = _get_directive(node, DYNAMIC)
        return FieldDefinition(
            name=node.name.value,
            type=type_,
            arguments=tuple(
                Argument(arg.name.value, _build_type(arg.type), _description(arg))
                for arg in node.arguments or ()
            ),
            description=_description(node),
            relationship=relation is not None or inner_name in self.fields_containers,
            relation=relation,
            dynamic_prefix=dynamic_args["prefix"] if dynamic_args else None,
            identity=inner_name == "ID" or _get_directive(node, ID) is not None,
        )

    def build_input_field(self, node: InputValueDefinitionNode) -> InputField:
        return InputField(node.name.value, _build_type(node.type), _description(node))

    def build_relation(self, node: ObjectTypeDefinitionNode) -> Optional[RelationDefinition]:
        args = _get_directive(node, RELATION)
        if args is None:
            return None
        return RelationDefinition(
            name=args["name"],
            from_field=args.get("from") or "from",
            to_field=args.get("to") or "to",
        )

    def build_named_type(self, node: TypeDefinitionNode) -> NamedType:
        name = node.name.value
        if isinstance(node, ObjectTypeDefinitionNode):
            return ObjectType(
                name,
                tuple(self.build_field(f) for f in node.fields or ()),
                interfaces=tuple(i.name.value for i in node.interfaces or ()),
                description=_description(node),
                relation=self.build_relation(node),
                native=self.is_native(name),
            )
        if isinstance(node, InterfaceTypeDefinitionNode):
            return InterfaceType(
                name,
                tuple(self.build_field(f) for f in node.fields or ()),
                description=_description(node),
            )
        if isinstance(node, InputObjectTypeDefinitionNode):
            return InputObjectType(
                name,
                tuple(self.build_input_field(f) for f in node.fields or ()),
                description=_description(node),
            )
        if isinstance(node, EnumTypeDefinitionNode):
            return EnumType(
                name,
                tuple(EnumValue(v.name.value, v.name.value) for v in node.values or ()),
                description=_description(node),
            )
        if isinstance(node, ScalarTypeDefinitionNode):
            return ScalarType(name, _description(node), native=self.is_native(name))

        raise InvalidReferenceError(f"{name} is not supported ({node.kind})")

    def load(self, registry: TypeRegistry) -> TypeRegistry:
        for definition in self.definitions:
            registry.bind(definition.name.value, self.build_named_type(definition))
        return registry


def registry_from_sdl(
    sdl: str,
    settings: Optional[Mapping[str, Any]] = None,
    *,
    include_native_types: bool = True,
) -> TypeRegistry:
    """Build a type registry from the type definitions in `sdl`.

    Relationship, identity and dynamic field metadata is read from the
    `@relation`, `@id` and `@dynamic` directives. Directives do not need to be
    declared.
    """
    if include_native_types:
        sdl = f"{NATIVE_TYPES_SDL}\n{sdl}"

    document = parse(sdl)
    definitions = [
        d for d in document.definitions if isinstance(d, TypeDefinitionNode)
    ]
    loader = _RegistryLoader(definitions, strawberry_neo4j_settings(settings))
    return loader.load(TypeRegistry())


def registry_from_strawberry(
    schema: strawberry.Schema,
    settings: Optional[Mapping[str, Any]] = None,
    *,
    include_native_types: bool = True,
) -> TypeRegistry:
    """Build a type registry from a strawberry schema.

    Metadata is declared with the schema directives in
    :mod:`strawberry_neo4j.directives`.
    """
    return registry_from_sdl(
        schema.as_str(),
        settings,
        include_native_types=include_native_types,
    )


def to_graphql_schema(
    registry: TypeRegistry,
    settings: Optional[Mapping[str, Any]] = None,
) -> GraphQLSchema:
    """Convert a registry into a graphql-core schema.

    Fields are thunks, so references are resolved by name only when the
    schema reads them.
    """
    config = strawberry_neo4j_settings(settings)
    named: dict[str, GraphQLNamedType] = {}

    def get_type(type_: GraphQLTypeDef) -> Any:
        if isinstance(type_, NonNullType):
            return GraphQLNonNull(get_type(type_.of_type))
        if isinstance(type_, ListType):
            return GraphQLList(get_type(type_.of_type))
        try:
            return named[type_.name]
        except KeyError:
            raise InvalidReferenceError(f"{type_.name} is unknown") from None

    def output_fields(fields: tuple[FieldDefinition, ...]):
        return lambda: {
            f.name: GraphQLField(
                get_type(f.type),
                args={
                    a.name: GraphQLArgument(get_type(a.type), description=a.description)
                    for a in f.arguments
                },
                description=f.description,
            )
            for f in fields
        }

    def input_fields(fields: tuple[InputField, ...]):
        return lambda: {
            f.name: GraphQLInputField(get_type(f.type), description=f.description)
            for f in fields
        }

    def convert(type_: NamedType) -> GraphQLNamedType:
        if isinstance(type_, ObjectType):
            interfaces = type_.interfaces
            return GraphQLObjectType(
                type_.name,
                output_fields(type_.fields),
                interfaces=lambda: [
                    cast("GraphQLInterfaceType", named[i]) for i in interfaces
                ],
                description=type_.description,
            )
        if isinstance(type_, InterfaceType):
            return GraphQLInterfaceType(
                type_.name,
                output_fields(type_.fields),
                description=type_.description,
            )
        if isinstance(type_, InputObjectType):
            return GraphQLInputObjectType(
                type_.name,
                input_fields(type_.fields),
                description=type_.description,
            )
        if isinstance(type_, EnumType):
            return GraphQLEnumType(
                type_.name,
                {v.name: GraphQLEnumValue(v.value) for v in type_.values},
                description=type_.description,
            )
        if isinstance(type_, ScalarType):
            return specified_scalar_types.get(type_.name) or GraphQLScalarType(
                type_.name,
                description=type_.description,
            )
        assert_never(type_)

    for name, type_ in registry.items():
        named[name] = convert(type_)

    return GraphQLSchema(
        query=cast("Optional[GraphQLObjectType]", named.get(config["QUERY_TYPE_NAME"])),
        mutation=cast(
            "Optional[GraphQLObjectType]", named.get(config["MUTATION_TYPE_NAME"])
        ),
        types=list(named.values()),
    )


def print_registry(
    registry: TypeRegistry,
    settings: Optional[Mapping[str, Any]] = None,
) -> str:
    return print_schema(to_graphql_schema(registry, settings))
