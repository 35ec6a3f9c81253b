import pytest

from strawberry_neo4j import (
    BuildContext,
    InvalidReferenceError,
    NamingCollisionError,
    TypeRegistry,
    add_filter_type,
)
from strawberry_neo4j.filters import FilterInputBuilder
from strawberry_neo4j.types import (
    EnumType,
    FieldDefinition,
    InputObjectType,
    InterfaceType,
    ListType,
    NonNullType,
    ObjectType,
    TypeReference,
)


def _self_list(name):
    return ListType(NonNullType(TypeReference(name)))


def test_filter_type(ctx):
    movie = ctx.registry.lookup("Movie")

    assert add_filter_type(ctx, movie) == "_MovieFilter"

    filter_type = ctx.registry.lookup("_MovieFilter")
    assert isinstance(filter_type, InputObjectType)
    assert [f.name for f in filter_type.fields] == [
        "AND",
        "OR",
        "NOT",
        "id",
        "id_not",
        "id_in",
        "id_not_in",
        "id_lt",
        "id_lte",
        "id_gt",
        "id_gte",
        "id_contains",
        "id_not_contains",
        "id_starts_with",
        "id_not_starts_with",
        "id_ends_with",
        "id_not_ends_with",
        "title",
        "title_not",
        "title_in",
        "title_not_in",
        "title_lt",
        "title_lte",
        "title_gt",
        "title_gte",
        "title_contains",
        "title_not_contains",
        "title_starts_with",
        "title_not_starts_with",
        "title_ends_with",
        "title_not_ends_with",
        "released",
        "released_not",
        "released_in",
        "released_not_in",
        "released_lt",
        "released_lte",
        "released_gt",
        "released_gte",
        "genre",
        "genre_not",
        "genre_in",
        "genre_not_in",
        "publishedAt",
        "publishedAt_not",
        "publishedAt_in",
        "publishedAt_not_in",
        "publishedAt_lt",
        "publishedAt_lte",
        "publishedAt_gt",
        "publishedAt_gte",
        "location",
        "location_not",
        "actors",
        "actors_not",
        "actors_some",
        "actors_none",
        "actors_single",
        "actors_every",
        "similar",
        "similar_not",
        "similar_some",
        "similar_none",
        "similar_single",
        "similar_every",
    ]


def test_filter_field_types(ctx):
    add_filter_type(ctx, ctx.registry.lookup("Movie"))
    filter_type = ctx.registry.lookup("_MovieFilter")

    assert filter_type.get_field("title").type == TypeReference("String")
    assert filter_type.get_field("title_in").type == _self_list("String")
    assert filter_type.get_field("genre_not").type == TypeReference("Genre")
    assert filter_type.get_field("publishedAt_gt").type == TypeReference(
        "_Neo4jDateInput"
    )
    assert filter_type.get_field("location").type == TypeReference("_Neo4jPointInput")
    assert filter_type.get_field("actors_some").type == TypeReference("_PersonFilter")
    assert filter_type.get_field("actors_some").description


def test_logical_operators_reference_filter_itself(ctx):
    add_filter_type(ctx, ctx.registry.lookup("Person"))
    filter_type = ctx.registry.lookup("_PersonFilter")

    for name in ("AND", "OR", "NOT"):
        assert filter_type.get_field(name).type == _self_list("_PersonFilter")


def test_nested_filter_types_are_derived(ctx):
    add_filter_type(ctx, ctx.registry.lookup("Movie"))

    person_filter = ctx.registry.lookup("_PersonFilter")
    assert isinstance(person_filter, InputObjectType)
    assert person_filter.get_field("movies").type == TypeReference("_MovieFilter")
    assert person_filter.get_field("movies_single") is not None


def test_single_relationship_filter():
    registry = TypeRegistry([
        ObjectType("Address", (FieldDefinition("city", TypeReference("String")),)),
        ObjectType(
            "User",
            (
                FieldDefinition(
                    "address", TypeReference("Address"), relationship=True
                ),
            ),
        ),
    ])
    ctx = BuildContext.create(registry)

    add_filter_type(ctx, registry.lookup("User"))

    assert [f.name for f in registry.lookup("_UserFilter").fields] == [
        "AND",
        "OR",
        "NOT",
        "address",
        "address_not",
    ]


def test_dynamic_fields_are_not_filterable(ctx):
    add_filter_type(ctx, ctx.registry.lookup("Movie"))
    filter_type = ctx.registry.lookup("_MovieFilter")

    assert not [f for f in filter_type.fields if f.name.startswith("props")]


def test_idempotence(ctx):
    movie = ctx.registry.lookup("Movie")
    name = add_filter_type(ctx, movie)
    filter_type = ctx.registry.lookup(name)
    size = len(ctx.registry)

    assert add_filter_type(ctx, movie) == name
    assert ctx.registry.lookup(name) is filter_type
    assert len(ctx.registry) == size


def test_self_reference_terminates():
    registry = TypeRegistry([
        ObjectType(
            "Node",
            (
                FieldDefinition("id", TypeReference("ID"), identity=True),
                FieldDefinition(
                    "parent", TypeReference("Node"), relationship=True
                ),
            ),
        ),
    ])
    ctx = BuildContext.create(registry)

    assert add_filter_type(ctx, registry.lookup("Node")) == "_NodeFilter"
    filter_type = registry.lookup("_NodeFilter")
    assert filter_type.get_field("parent").type == TypeReference("_NodeFilter")
    assert filter_type.get_field("parent_not").type == TypeReference("_NodeFilter")


def test_cycle_through_several_types_terminates():
    registry = TypeRegistry([
        ObjectType("A", (FieldDefinition("b", TypeReference("B"), relationship=True),)),
        ObjectType("B", (FieldDefinition("c", TypeReference("C"), relationship=True),)),
        ObjectType("C", (FieldDefinition("a", TypeReference("A"), relationship=True),)),
    ])
    ctx = BuildContext.create(registry)

    add_filter_type(ctx, registry.lookup("A"))

    assert registry.lookup("_AFilter").get_field("b").type == TypeReference("_BFilter")
    assert registry.lookup("_BFilter").get_field("c").type == TypeReference("_CFilter")
    assert registry.lookup("_CFilter").get_field("a").type == TypeReference("_AFilter")


def test_interface_filter():
    registry = TypeRegistry([
        InterfaceType("Named", (FieldDefinition("name", TypeReference("String")),)),
        ObjectType(
            "Pet",
            (FieldDefinition("owner", TypeReference("Named"), relationship=True),),
        ),
    ])
    ctx = BuildContext.create(registry)

    add_filter_type(ctx, registry.lookup("Pet"))

    assert registry.lookup("_NamedFilter").get_field("name_starts_with") is not None


def test_naming_collision():
    registry = TypeRegistry([
        ObjectType("Movie", (FieldDefinition("title", TypeReference("String")),)),
        EnumType("_MovieFilter"),
    ])
    ctx = BuildContext.create(registry)

    with pytest.raises(NamingCollisionError, match="_MovieFilter"):
        add_filter_type(ctx, registry.lookup("Movie"))


def test_field_clashing_with_logical_operator():
    registry = TypeRegistry([
        ObjectType(
            "Gate",
            (
                FieldDefinition("AND", TypeReference("Boolean")),
                FieldDefinition("open", TypeReference("Boolean")),
            ),
        ),
    ])
    ctx = BuildContext.create(registry)

    add_filter_type(ctx, registry.lookup("Gate"))

    filter_type = registry.lookup("_GateFilter")
    assert [f.name for f in filter_type.fields] == ["AND", "OR", "NOT", "open", "open_not"]
    assert filter_type.get_field("AND").type == _self_list("_GateFilter")


def test_unknown_field_type():
    registry = TypeRegistry([
        ObjectType("Movie", (FieldDefinition("studio", TypeReference("Studio")),)),
    ])
    ctx = BuildContext.create(registry)

    with pytest.raises(InvalidReferenceError, match="Studio is unknown"):
        add_filter_type(ctx, registry.lookup("Movie"))


def test_input_object_field_is_not_filterable():
    registry = TypeRegistry([
        InputObjectType("Settings"),
        ObjectType("Movie", (FieldDefinition("settings", TypeReference("Settings")),)),
    ])
    ctx = BuildContext.create(registry)

    with pytest.raises(InvalidReferenceError, match="neither an object nor an interface"):
        add_filter_type(ctx, registry.lookup("Movie"))


def test_custom_operator_policies():
    registry = TypeRegistry([
        ObjectType(
            "Movie",
            (
                FieldDefinition("title", TypeReference("String")),
                FieldDefinition("sequel", TypeReference("Movie"), relationship=True),
            ),
        ),
    ])

    def relation_operators(type_, field, filter_type, builder):
        builder.add_filter_field(f"{field.name}_exists", False, "Boolean")

    ctx = BuildContext.create(
        registry,
        field_operators=lambda type_: [],
        relation_operators=relation_operators,
    )

    add_filter_type(ctx, registry.lookup("Movie"))

    assert [f.name for f in registry.lookup("_MovieFilter").fields] == [
        "AND",
        "OR",
        "NOT",
        "sequel_exists",
    ]


def test_builder_list_fields():
    builder = FilterInputBuilder("_MovieFilter")
    builder.add_filter_field("title_in", True, "String")
    builder.add_filter_field("title", False, "String", "Exact match")

    filter_type = builder.build()

    assert filter_type.fields[0].type == _self_list("String")
    assert filter_type.fields[1].type == TypeReference("String")
    assert filter_type.fields[1].description == "Exact match"
