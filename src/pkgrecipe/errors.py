"""Errors raised while turning a document tree into a package recipe.

All errors derive from RecipeError so callers can halt a build or resolve
operation with a single except clause. Errors are built as structured
values at the failure site and only rendered to text in ``__str__``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import Location


class RecipeError(Exception):
    """Base class for recipe parsing failures."""

    pass


class ValidationError(RecipeError):
    """A recognized field holds a malformed or missing value.

    Attributes:
        message: Human-readable cause
        location: Source location of the offending node
    """

    def __init__(self, message: str, location: Location) -> None:
        self.message = message
        self.location = location
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.location}: Error: {self.message}"


class MissingFieldError(RecipeError):
    """A recipe-level required field was never found."""

    def __init__(self, field_name: str, filename: str = "") -> None:
        self.field_name = field_name
        self.filename = filename
        super().__init__(field_name)

    @property
    def message(self) -> str:
        return f'The package "{self.field_name}" field is missing or empty.'

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}: Error: {self.message}"
        return self.message


class DuplicateDependencyError(RecipeError):
    """A dependency was declared more than once within one settings scope."""

    def __init__(self, dependency: str, location: Location) -> None:
        self.dependency = dependency
        self.location = location
        super().__init__(dependency)

    @property
    def message(self) -> str:
        return f"The dependency '{self.dependency}' is specified more than once."

    def __str__(self) -> str:
        return f"{self.location}: Error: {self.message}"
