from strawberry_neo4j import augment_registry, augment_schema, registry_from_sdl
from strawberry_neo4j.types import (
    ListType,
    NonNullType,
    TypeReference,
)

from .schema import MOVIES_SDL


def test_query_field(registry):
    augment_registry(registry)

    movie = registry.lookup("Query").get_field("movie")
    assert movie.type == NonNullType(ListType(NonNullType(TypeReference("Movie"))))
    assert [(a.name, a.type) for a in movie.arguments] == [
        ("id", TypeReference("ID")),
        ("title", TypeReference("String")),
        ("released", TypeReference("Int")),
        ("genre", TypeReference("Genre")),
        ("publishedAt", TypeReference("_Neo4jDateInput")),
        ("location", TypeReference("_Neo4jPointInput")),
        ("filter", TypeReference("_MovieFilter")),
        ("orderBy", ListType(NonNullType(TypeReference("_MovieOrdering")))),
        ("first", TypeReference("Int")),
        ("offset", TypeReference("Int")),
    ]


def test_root_types(registry):
    augment_registry(registry)

    assert [f.name for f in registry.lookup("Query").fields] == ["movie", "person"]
    assert [f.name for f in registry.lookup("Mutation").fields] == [
        "createMovie",
        "mergeMovie",
        "updateMovie",
        "deleteMovie",
        "addMovieActors",
        "deleteMovieActors",
        "addMovieSimilar",
        "deleteMovieSimilar",
        "createPerson",
        "mergePerson",
        "updatePerson",
        "deletePerson",
        "addPersonMovies",
        "deletePersonMovies",
    ]


def test_mutation_fields(registry):
    augment_registry(registry)
    mutation = registry.lookup("Mutation")

    create = mutation.get_field("createPerson")
    assert create.type == NonNullType(TypeReference("Person"))
    assert [(a.name, a.type) for a in create.arguments] == [
        ("id", TypeReference("ID")),
        ("name", NonNullType(TypeReference("String"))),
        ("born", TypeReference("Int")),
    ]

    update = mutation.get_field("updatePerson")
    assert update.type == TypeReference("Person")
    assert [(a.name, a.type) for a in update.arguments] == [
        ("id", NonNullType(TypeReference("ID"))),
        ("name", TypeReference("String")),
        ("born", TypeReference("Int")),
    ]

    delete = mutation.get_field("deletePerson")
    assert [a.name for a in delete.arguments] == ["id"]


def test_relation_mutations(registry):
    augment_registry(registry)
    mutation = registry.lookup("Mutation")

    add = mutation.get_field("addMovieActors")
    assert [(a.name, a.type) for a in add.arguments] == [
        ("id", NonNullType(TypeReference("ID"))),
        ("actors", NonNullType(ListType(NonNullType(TypeReference("ID"))))),
        ("properties", TypeReference("_ActedInInput")),
    ]
    assert [a.name for a in mutation.get_field("deleteMovieActors").arguments] == [
        "id",
        "actors",
    ]
    assert mutation.get_field("addMovieSimilar").get_argument("properties") is None

    properties = registry.lookup("_ActedInInput")
    assert [(f.name, f.type) for f in properties.fields] == [
        ("roles", ListType(TypeReference("String"))),
    ]


def test_type_without_identity():
    registry = registry_from_sdl(
        "type Tag { name: String } type Query { tags: [Tag] }",
        include_native_types=False,
    )

    augment_registry(registry)

    assert [f.name for f in registry.lookup("Query").fields] == ["tags", "tag"]
    assert [f.name for f in registry.lookup("Mutation").fields] == ["createTag"]


def test_first_identity_field_is_used():
    registry = registry_from_sdl(
        "type Pet { id: ID! ownerId: ID name: String } type Query { pets: [Pet] }",
        include_native_types=False,
    )

    augment_registry(registry)

    delete = registry.lookup("Mutation").get_field("deletePet")
    assert [(a.name, a.type) for a in delete.arguments] == [
        ("id", NonNullType(TypeReference("ID"))),
    ]


def test_existing_operations_are_kept():
    registry = registry_from_sdl(
        "type Tag { id: ID! } type Query { tag: String }",
        include_native_types=False,
    )

    augment_registry(registry, {"GENERATE_MUTATIONS": False})

    assert registry.lookup("Query").get_field("tag").type == TypeReference("String")
    assert "Mutation" not in registry


def test_augment_is_idempotent(registry):
    augment_registry(registry)
    size = len(registry)
    query = registry.lookup("Query")
    mutation = registry.lookup("Mutation")

    augment_registry(registry)

    assert len(registry) == size
    assert registry.lookup("Query") == query
    assert registry.lookup("Mutation") == mutation


def test_augment_schema():
    printed = augment_schema(MOVIES_SDL)

    assert "type Query {" in printed
    assert "enum _MovieOrdering {" in printed
    assert "input _ActedInInput {" in printed
    assert "createMovie(" in printed
