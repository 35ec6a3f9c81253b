"""Schema directives declaring graph metadata on strawberry types.

Examples
--------
    >>> @strawberry.type
    ... class Movie:
    ...     id: strawberry.ID = strawberry.field(directives=[Id()])
    ...     actors: list["Person"] = strawberry.field(
    ...         directives=[Relation(name="ACTED_IN", direction="IN")],
    ...     )

"""

from typing import Optional

from strawberry import directive_field, schema_directive
from strawberry.schema_directive import Location

RELATION = "relation"
DYNAMIC = "dynamic"
ID = "id"


@schema_directive(
    name=RELATION,
    locations=[Location.OBJECT, Location.FIELD_DEFINITION],
    description="Relationship a field traverses, or a relationship entity type maps.",
)
class Relation:
    name: str
    direction: Optional[str] = None
    from_: Optional[str] = directive_field(name="from", default=None)
    to: Optional[str] = None


@schema_directive(
    name=DYNAMIC,
    locations=[Location.FIELD_DEFINITION],
    description="Field computed from the properties starting with `prefix`.",
)
class Dynamic:
    prefix: str


@schema_directive(
    name=ID,
    locations=[Location.FIELD_DEFINITION],
    description="Field identifying its type.",
)
class Id: ...
