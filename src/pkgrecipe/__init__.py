"""pkgrecipe - package manifest documents to typed build recipes.

The recipe core maps a parsed manifest document tree onto PackageRecipe.
The registry subpackage talks to an online package registry.
"""

from __future__ import annotations

from .document import Attribute, Location, Node
from .errors import DuplicateDependencyError, MissingFieldError, RecipeError, ValidationError
from .recipe import PackageRecipe, parse_recipe

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "DuplicateDependencyError",
    "Location",
    "MissingFieldError",
    "Node",
    "PackageRecipe",
    "RecipeError",
    "ValidationError",
    "parse_recipe",
]
