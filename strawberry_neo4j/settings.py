"""Code for reading augmentation settings."""

from collections.abc import Mapping
from typing import Any, Optional, cast

from typing_extensions import TypedDict


class StrawberryNeo4jSettings(TypedDict):
    """Dictionary defining the shape the augmentation settings should have.

    All settings are optional and have defaults as described in their docstrings and
    defined in `DEFAULT_NEO4J_SETTINGS`.
    """

    #: Type names starting with this prefix are domain-native types
    #: (temporal and spatial values) when loading SDL.
    NATIVE_TYPE_PREFIX: str

    #: Native type name to the name of the input type representing it.
    NATIVE_INPUT_TYPES: Mapping[str, str]

    #: Native types only comparable for (in)equality.
    NATIVE_SPATIAL_TYPES: tuple[str, ...]

    #: Name of the root query type.
    QUERY_TYPE_NAME: str

    #: Name of the root mutation type.
    MUTATION_TYPE_NAME: str

    #: If True, a query field is generated for every domain type.
    GENERATE_QUERIES: bool

    #: If True, create/merge/update/delete mutations are generated.
    GENERATE_MUTATIONS: bool

    #: If True, add/delete mutations are generated for relationship fields.
    GENERATE_RELATION_MUTATIONS: bool

    #: Suffixes of the ascending and descending ordering enum values.
    ORDERING_SUFFIXES: tuple[str, str]


DEFAULT_NEO4J_SETTINGS = StrawberryNeo4jSettings(
    NATIVE_TYPE_PREFIX="_Neo4j",
    NATIVE_INPUT_TYPES={
        "_Neo4jTime": "_Neo4jTimeInput",
        "_Neo4jDate": "_Neo4jDateInput",
        "_Neo4jDateTime": "_Neo4jDateTimeInput",
        "_Neo4jLocalTime": "_Neo4jLocalTimeInput",
        "_Neo4jLocalDateTime": "_Neo4jLocalDateTimeInput",
        "_Neo4jPoint": "_Neo4jPointInput",
    },
    NATIVE_SPATIAL_TYPES=("_Neo4jPoint",),
    QUERY_TYPE_NAME="Query",
    MUTATION_TYPE_NAME="Mutation",
    GENERATE_QUERIES=True,
    GENERATE_MUTATIONS=True,
    GENERATE_RELATION_MUTATIONS=True,
    ORDERING_SUFFIXES=("_asc", "_desc"),
)


def strawberry_neo4j_settings(
    overrides: Optional[Mapping[str, Any]] = None,
) -> StrawberryNeo4jSettings:
    """Get strawberry neo4j settings.

    Return the given overrides, with defaults for missing keys.

    Preferred to direct access for the type hints and defaults.
    """
    defaults = DEFAULT_NEO4J_SETTINGS
    return cast(
        "StrawberryNeo4jSettings",
        {**defaults, **(overrides or {})},
    )
