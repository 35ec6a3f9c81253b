from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

from strawberry.exceptions.exception import StrawberryException

if TYPE_CHECKING:
    from strawberry.exceptions.exception_source import ExceptionSource


class NamingCollisionError(StrawberryException):
    """A type name is already bound to a type of another kind."""

    def __init__(self, name: str, expected: str, actual: str):
        self.name = name
        self.expected = expected
        self.actual = actual

        self.message = f'Type "{name}" is already defined but not an {expected} type ({actual})'
        self.rich_message = (
            f"Type `[underline]{name}[/]` is already defined as "
            f"[bold red]{actual}[/], expected {expected}"
        )
        self.suggestion = f'To fix this error, rename the type "{name}"'
        self.annotation_message = "naming collision"

        super().__init__(self.message)

    @cached_property
    def exception_source(self) -> ExceptionSource | None:  # pragma: no cover
        return None


class InvalidReferenceError(StrawberryException):
    """A type cannot be resolved or is not usable where it is referenced."""

    def __init__(self, message: str):
        self.message = message
        self.rich_message = f"[bold red]{message}"
        self.suggestion = "To fix this error, check the referenced type definitions"
        self.annotation_message = "invalid type reference"

        super().__init__(self.message)

    @cached_property
    def exception_source(self) -> ExceptionSource | None:  # pragma: no cover
        return None
