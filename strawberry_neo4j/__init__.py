from . import directives, operators
from .augment import augment_registry, augment_schema
from .context import BuildContext
from .directives import Dynamic, Id, Relation
from .exceptions import InvalidReferenceError, NamingCollisionError
from .fields import build_field_definition, get_input_type
from .filters import FilterInputBuilder, add_filter_type
from .inputs import add_input_type
from .operations import add_operation
from .ordering import add_ordering
from .registry import RelationIndex, TypeRegistry
from .sdl import (
    print_registry,
    registry_from_sdl,
    registry_from_strawberry,
    to_graphql_schema,
)
from .settings import strawberry_neo4j_settings

__all__ = [
    "BuildContext",
    "Dynamic",
    "FilterInputBuilder",
    "Id",
    "InvalidReferenceError",
    "NamingCollisionError",
    "Relation",
    "RelationIndex",
    "TypeRegistry",
    "add_filter_type",
    "add_input_type",
    "add_operation",
    "add_ordering",
    "augment_registry",
    "augment_schema",
    "build_field_definition",
    "directives",
    "get_input_type",
    "operators",
    "print_registry",
    "registry_from_sdl",
    "registry_from_strawberry",
    "strawberry_neo4j_settings",
    "to_graphql_schema",
]
