"""Recipe tree walker: document tree -> PackageRecipe.

The walker scans the immediate children of a recipe node once, sorting
them into package metadata, deferred scopes (build types, configurations,
sub-packages) and root build settings. Sub-packages are full recipes and
are parsed by recursing into parse_recipe with the enclosing package's
qualified name.

Usage:
    recipe = parse_recipe(root_node, filename="dub.sdl")
"""

from __future__ import annotations

import logging

from ..document import Location, Node
from ..errors import DuplicateDependencyError, MissingFieldError, ValidationError
from .accessors import collect_string_array, enforce, require_single_string
from .settings import PACKAGE_SEPARATOR, parse_build_setting, parse_build_settings
from .types import BuildSettings, Configuration, PackageRecipe, SubPackage, TargetType

logger = logging.getLogger(__name__)

DDOX_FILTER_ARGS = "x:ddoxFilterArgs"

_SCALAR_FIELDS = {
    "name": "name",
    "description": "description",
    "homepage": "homepage",
    "copyright": "copyright",
    "license": "license",
}


def parse_recipe(root: Node, parent_name: str = "", filename: str = "") -> PackageRecipe:
    """Build a PackageRecipe from a recipe document node.

    Args:
        root: Node whose children are the recipe's top-level tags
        parent_name: Qualified name of the enclosing package (sub-packages only)
        filename: Label for diagnostics when nodes carry no file of their own

    Returns:
        The fully populated recipe

    Raises:
        ValidationError: A recognized field has a malformed value
        MissingFieldError: The recipe has no name
        DuplicateDependencyError: A dependency is declared twice in one scope
    """
    try:
        return _parse_recipe(root, parent_name, filename)
    except (ValidationError, DuplicateDependencyError) as e:
        if filename and not e.location.file:
            e.location = Location(filename, e.location.line)
        raise


def _parse_recipe(root: Node, parent_name: str, filename: str) -> PackageRecipe:
    recipe = PackageRecipe()
    settings_nodes: list[Node] = []
    build_types: list[Node] = []
    configurations: list[Node] = []
    sub_packages: list[Node] = []

    for node in root.children:
        enforce(bool(node.name), "Anonymous tags are not allowed at the root level.", node)
        field_name = node.full_name
        if field_name in _SCALAR_FIELDS:
            setattr(recipe, _SCALAR_FIELDS[field_name], require_single_string(node))
        elif field_name == "authors":
            recipe.authors.extend(collect_string_array(node))
        elif field_name == DDOX_FILTER_ARGS:
            recipe.ddox_filter_args.extend(collect_string_array(node))
        elif field_name == "buildType":
            build_types.append(node)
        elif field_name == "configuration":
            configurations.append(node)
        elif field_name == "subPackage":
            sub_packages.append(node)
        else:
            settings_nodes.append(node)

    if not recipe.name:
        raise MissingFieldError("name", filename or root.location.file)
    full_name = f"{parent_name}{PACKAGE_SEPARATOR}{recipe.name}" if parent_name else recipe.name

    parse_build_settings(settings_nodes, recipe.build_settings, full_name)

    for node in build_types:
        name = require_single_string(node, allow_children=True)
        recipe.build_types[name] = parse_build_settings(node.children, BuildSettings(), full_name)

    default_target_type = recipe.build_settings.target_type
    if default_target_type == TargetType.AUTODETECT:
        default_target_type = TargetType.LIBRARY

    for node in configurations:
        recipe.configurations.append(_parse_configuration(node, default_target_type, full_name))

    for node in sub_packages:
        recipe.sub_packages.append(_parse_sub_package(node, full_name, filename))

    return recipe


def _parse_configuration(
    node: Node, default_target_type: TargetType, package_name: str
) -> Configuration:
    config = Configuration()
    config.build_settings.target_type = default_target_type
    config.name = require_single_string(node, allow_children=True)
    for child in node.children:
        if child.full_name == "platforms":
            config.platforms.extend(collect_string_array(child))
        else:
            parse_build_setting(child, config.build_settings, package_name)
    return config


def _parse_sub_package(node: Node, package_name: str, filename: str) -> SubPackage:
    if node.values:
        path = require_single_string(node)
        enforce(not node.attributes, "No attributes allowed for sub package path references.", node)
        return SubPackage(path=path)

    enforce(not node.attributes, "No attributes allowed for inline sub package definitions.", node)
    logger.debug(f"Parsing inline sub package of {package_name} at {node.location}")
    return SubPackage(recipe=_parse_recipe(node, package_name, filename))

