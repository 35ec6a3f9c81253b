from __future__ import annotations

import dataclasses
import functools
from collections.abc import Mapping
from typing import Any, Optional

from .operators import (
    RelationOperatorPolicy,
    ScalarOperatorPolicy,
    create_relation_filter_fields,
    operators_for,
)
from .registry import RelationIndex, TypeRegistry
from .settings import StrawberryNeo4jSettings, strawberry_neo4j_settings
from .types import GraphQLTypeDef, NamedType, ObjectType, ScalarType


@dataclasses.dataclass
class BuildContext:
    """State shared by every derivation of one schema build.

    The registry is borrowed from the caller and mutated in place. The
    relation index is computed once from the registry as it is when the
    context is created.
    """

    registry: TypeRegistry
    settings: StrawberryNeo4jSettings
    relations: RelationIndex
    field_operators: ScalarOperatorPolicy
    relation_operators: RelationOperatorPolicy

    @classmethod
    def create(
        cls,
        registry: TypeRegistry,
        settings: Optional[Mapping[str, Any]] = None,
        *,
        field_operators: Optional[ScalarOperatorPolicy] = None,
        relation_operators: Optional[RelationOperatorPolicy] = None,
    ) -> BuildContext:
        config = strawberry_neo4j_settings(settings)
        native_inputs = config["NATIVE_INPUT_TYPES"]
        if field_operators is None:
            field_operators = functools.partial(
                operators_for,
                native_types={*native_inputs, *native_inputs.values()},
                spatial_types={
                    name
                    for spatial in config["NATIVE_SPATIAL_TYPES"]
                    for name in (spatial, native_inputs.get(spatial))
                    if name is not None
                },
            )

        return cls(
            registry=registry,
            settings=config,
            relations=RelationIndex.from_registry(registry),
            field_operators=field_operators,
            relation_operators=relation_operators or create_relation_filter_fields,
        )

    def get_type_for_relation(self, name: str) -> Optional[ObjectType]:
        return self.relations.get_type_for_relation(self.registry, name)

    def is_native(self, type_: GraphQLTypeDef) -> bool:
        return isinstance(type_, (ObjectType, ScalarType)) and type_.native

    def native_input_name(self, type_: NamedType) -> Optional[str]:
        return self.settings["NATIVE_INPUT_TYPES"].get(type_.name)
