"""Package recipe model and the document tree walker that builds it.

Public API:
    parse_recipe - Build a PackageRecipe from a document tree
    PackageRecipe - Canonical recipe of one package
    BuildSettings - Settings of one scope (root, configuration, build type)
    Configuration - Named configuration
    SubPackage - Inline or path-referenced sub-package
    DependencySpec - Version/path/optionality of one dependency
    TargetType, BuildRequirement, BuildOption - Setting enumerations
"""

from __future__ import annotations

from .settings import expand_package_name, parse_build_settings, parse_dependency
from .types import (
    ANY_VERSION,
    BuildOption,
    BuildRequirement,
    BuildSettings,
    Configuration,
    DependencySpec,
    PackageRecipe,
    SubPackage,
    TargetType,
)
from .walker import parse_recipe

__all__ = [
    "ANY_VERSION",
    "BuildOption",
    "BuildRequirement",
    "BuildSettings",
    "Configuration",
    "DependencySpec",
    "PackageRecipe",
    "SubPackage",
    "TargetType",
    "expand_package_name",
    "parse_build_settings",
    "parse_dependency",
    "parse_recipe",
]
