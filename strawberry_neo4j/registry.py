from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Optional

from .exceptions import InvalidReferenceError, NamingCollisionError
from .types import (
    BUILTIN_SCALARS,
    FieldsContainer,
    GraphQLTypeDef,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    TypeReference,
    inner_type,
    is_fields_container,
    kind_of,
)

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Mapping from type name to type definition for one schema build.

    Names are bound at most once. A bound name keeps its kind for the whole
    build: `bind` never overwrites and `replace` only accepts a definition of
    the same kind.
    """

    def __init__(
        self,
        types: Optional[Iterable[NamedType]] = None,
        *,
        include_builtins: bool = True,
    ):
        self._types: dict[str, NamedType] = {}
        if include_builtins:
            for scalar in BUILTIN_SCALARS:
                self._types[scalar.name] = scalar
        for type_ in types or ():
            self.bind(type_.name, type_)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"<TypeRegistry types={len(self._types)}>"

    def items(self):
        return self._types.items()

    def values(self):
        return self._types.values()

    def lookup(self, name: str) -> Optional[NamedType]:
        return self._types.get(name)

    def bind(self, name: str, definition: NamedType) -> NamedType:
        """Bind `definition` under `name` unless the name is already bound.

        Returns the definition bound under `name` after the call.
        """
        existing = self._types.get(name)
        if existing is not None:
            return existing

        logger.debug("Binding %s type %s", kind_of(definition), name)
        self._types[name] = definition
        return definition

    def replace(self, name: str, definition: NamedType) -> None:
        existing = self._types.get(name)
        if existing is None:
            raise InvalidReferenceError(f"{name} is unknown")
        if kind_of(existing) != kind_of(definition):
            raise NamingCollisionError(name, kind_of(existing), kind_of(definition))

        self._types[name] = definition

    def resolve(self, type_: GraphQLTypeDef) -> GraphQLTypeDef:
        """Resolve a reference to the type bound under its name."""
        if not isinstance(type_, TypeReference):
            return type_

        resolved = self._types.get(type_.name)
        if resolved is None:
            raise InvalidReferenceError(f"{type_.name} is unknown")
        return resolved

    def resolve_inner(self, type_: GraphQLTypeDef) -> NamedType:
        resolved = self.resolve(inner_type(type_))
        # References never point at wrappers
        assert not isinstance(resolved, (ListType, NonNullType, TypeReference))
        return resolved

    def get_fields_container(self, type_: GraphQLTypeDef) -> FieldsContainer:
        inner = self.resolve_inner(type_)
        if not is_fields_container(inner):
            raise InvalidReferenceError(
                f"{inner.name} is neither an object nor an interface"
            )
        return inner


class RelationIndex(Mapping[str, str]):
    """Relation name to the name of the relationship entity type declaring it.

    A snapshot: types bound after the index is built are not reflected.
    """

    def __init__(self, relations: Mapping[str, str]):
        self._relations = dict(relations)

    @classmethod
    def from_registry(cls, registry: TypeRegistry) -> RelationIndex:
        return cls({
            type_.relation.name: type_.name
            for type_ in registry.values()
            if isinstance(type_, ObjectType) and type_.relation is not None
        })

    def __getitem__(self, key: str) -> str:
        return self._relations[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._relations)

    def __len__(self) -> int:
        return len(self._relations)

    def get_type_for_relation(
        self,
        registry: TypeRegistry,
        name: str,
    ) -> Optional[ObjectType]:
        type_name = self._relations.get(name)
        if type_name is None:
            return None

        type_ = registry.lookup(type_name)
        return type_ if isinstance(type_, ObjectType) else None
