"""Build-settings extraction for one settings scope.

A scope is the package root, a configuration or a build type. Each child
node is looked up by name in BUILD_SETTING_HANDLERS; names without a
handler are skipped so that documents written for newer tools still parse.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..document import Node
from ..errors import DuplicateDependencyError, ValidationError
from .accessors import (
    bool_attribute,
    collect_string_array,
    enforce,
    platform_key_of,
    require_single_string,
    string_attribute,
)
from .types import (
    ANY_VERSION,
    BuildOption,
    BuildRequirement,
    BuildSettings,
    DependencySpec,
    TargetType,
)

logger = logging.getLogger(__name__)

# Separates a package from its sub-packages ("proj:sub"). A name starting
# with it is short-hand for a sub-package of the enclosing package.
PACKAGE_SEPARATOR = ":"

SettingHandler = Callable[[Node, BuildSettings, str], None]


# =============================================================================
# Platform-keyed accumulation
# =============================================================================


def accumulate_strings(node: Node, target: dict[str, list[str]]) -> None:
    """Append the node's values to the list under its platform key."""
    values = collect_string_array(node, allow_children=True)
    target.setdefault(platform_key_of(node), []).extend(values)


def accumulate_flags(node: Node, target: dict, flag_type: type) -> None:
    """Union the named flags of the node into the set under its platform key."""
    key = platform_key_of(node)
    flags = target.get(key, flag_type(0))
    for value in collect_string_array(node, allow_children=True):
        try:
            flags |= flag_type.from_name(value)
        except ValueError:
            raise ValidationError(
                f"Unknown value '{value}' for '{node.full_name}'.", node.location
            ) from None
    target[key] = flags


# =============================================================================
# Dependencies
# =============================================================================


def expand_package_name(name: str, package_name: str, node: Node) -> str:
    """Expand a short-hand ``:sub`` reference relative to ``package_name``.

    Only top-level packages may use the short-hand; inside a sub-package the
    full name has to be spelled out.
    """
    if not name.startswith(PACKAGE_SEPARATOR):
        return name
    enforce(
        PACKAGE_SEPARATOR not in package_name,
        f"Short-hand packages syntax not allowed within sub packages: {package_name} -> {name}",
        node,
    )
    return package_name + name


def parse_dependency(node: Node, settings: BuildSettings, package_name: str) -> None:
    """Parse one ``dependency`` tag into ``settings.dependencies``."""
    enforce(len(node.values) > 0, "Missing package name for dependency.", node)
    token = node.values[0]
    enforce(isinstance(token, str), "Expected dependency package name to be a string.", node)

    package = expand_package_name(token, package_name, node)
    if package in settings.dependencies:
        raise DuplicateDependencyError(package, node.location)

    dependency = DependencySpec()
    if node.has_attribute("path"):
        dependency.path = string_attribute(node, "path")
        if node.has_attribute("version"):
            dependency.version = string_attribute(node, "version")
            logger.debug(
                f"Ignoring version specification ({dependency.version}) "
                f"for path based dependency {dependency.path}"
            )
        else:
            dependency.version = ANY_VERSION
    else:
        enforce(node.has_attribute("version"), "Missing version specification.", node)
        dependency.version = string_attribute(node, "version")

    if node.has_attribute("optional"):
        dependency.optional = bool_attribute(node, "optional")

    settings.dependencies[package] = dependency


def _parse_sub_configuration(node: Node, settings: BuildSettings, package_name: str) -> None:
    args = collect_string_array(node)
    enforce(len(args) == 2, "Expecting package and configuration names as arguments.", node)
    settings.sub_configurations[expand_package_name(args[0], package_name, node)] = args[1]


def _parse_target_type(node: Node, settings: BuildSettings, package_name: str) -> None:
    value = require_single_string(node)
    try:
        settings.target_type = TargetType(value)
    except ValueError:
        raise ValidationError(f"Unknown target type '{value}'.", node.location) from None


# =============================================================================
# Dispatch table
# =============================================================================


def _scalar(attr: str) -> SettingHandler:
    def handler(node: Node, settings: BuildSettings, package_name: str) -> None:
        setattr(settings, attr, require_single_string(node))

    return handler


def _platform_strings(attr: str) -> SettingHandler:
    def handler(node: Node, settings: BuildSettings, package_name: str) -> None:
        accumulate_strings(node, getattr(settings, attr))

    return handler


def _platform_flags(attr: str, flag_type: type) -> SettingHandler:
    def handler(node: Node, settings: BuildSettings, package_name: str) -> None:
        accumulate_flags(node, getattr(settings, attr), flag_type)

    return handler


_SCALAR_FIELDS = {
    "systemDependencies": "system_dependencies",
    "targetName": "target_name",
    "targetPath": "target_path",
    "workingDirectory": "working_directory",
    "mainSourceFile": "main_source_file",
}

_PLATFORM_STRING_FIELDS = {
    "dflags": "dflags",
    "lflags": "lflags",
    "libs": "libs",
    "sourceFiles": "source_files",
    "sourcePaths": "source_paths",
    "excludedSourceFiles": "excluded_source_files",
    "copyFiles": "copy_files",
    "versions": "versions",
    "debugVersions": "debug_versions",
    "importPaths": "import_paths",
    "stringImportPaths": "string_import_paths",
    "preGenerateCommands": "pre_generate_commands",
    "postGenerateCommands": "post_generate_commands",
    "preBuildCommands": "pre_build_commands",
    "postBuildCommands": "post_build_commands",
}

BUILD_SETTING_HANDLERS: dict[str, SettingHandler] = {
    "dependency": parse_dependency,
    "subConfiguration": _parse_sub_configuration,
    "targetType": _parse_target_type,
    "buildRequirements": _platform_flags("build_requirements", BuildRequirement),
    "buildOptions": _platform_flags("build_options", BuildOption),
    **{name: _scalar(attr) for name, attr in _SCALAR_FIELDS.items()},
    **{name: _platform_strings(attr) for name, attr in _PLATFORM_STRING_FIELDS.items()},
}


def parse_build_setting(node: Node, settings: BuildSettings, package_name: str) -> None:
    """Apply one tag to ``settings``; unrecognized tags are ignored."""
    handler = BUILD_SETTING_HANDLERS.get(node.full_name)
    if handler is not None:
        handler(node, settings, package_name)


def parse_build_settings(
    nodes: Iterable[Node], settings: BuildSettings, package_name: str
) -> BuildSettings:
    """Apply every tag of a scope to ``settings`` in document order.

    Args:
        nodes: Child tags of the scope
        settings: Settings being built; mutated in place
        package_name: Fully qualified name used to expand short-hand references

    Returns:
        The same settings object, for chaining
    """
    for node in nodes:
        parse_build_setting(node, settings, package_name)
    return settings
