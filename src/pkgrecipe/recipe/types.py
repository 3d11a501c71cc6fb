"""Recipe data model.

A PackageRecipe is the canonical in-memory form of one package's build
configuration. It is built fresh for every parse and owned by the caller
afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Any

ANY_VERSION = "*"

# Platform key for values that apply on every platform.
UNCONDITIONAL = ""


class TargetType(Enum):
    """Kind of artifact a package produces."""

    AUTODETECT = "autodetect"
    NONE = "none"
    EXECUTABLE = "executable"
    LIBRARY = "library"
    SOURCE_LIBRARY = "sourceLibrary"
    DYNAMIC_LIBRARY = "dynamicLibrary"
    STATIC_LIBRARY = "staticLibrary"
    OBJECT = "object"


class _NamedFlag(Flag):
    """Flag set whose members are spelled in camelCase in documents."""

    @classmethod
    def from_name(cls, name: str) -> Any:
        """Look up a single member by its document spelling.

        Raises:
            ValueError: If the name is not a member of this flag set
        """
        for member in cls:
            if member.document_name == name:
                return member
        raise ValueError(f"{name!r} is not a valid {cls.__name__}")

    @property
    def document_name(self) -> str:
        head, *rest = (self.name or "").lower().split("_")
        return head + "".join(part.upper() if len(part) == 1 else part.capitalize() for part in rest)

    def names(self) -> list[str]:
        """Document spellings of all members contained in this set."""
        return [member.document_name for member in type(self) if member in self]


class BuildRequirement(_NamedFlag):
    ALLOW_WARNINGS = auto()
    SILENCE_WARNINGS = auto()
    DISALLOW_DEPRECATIONS = auto()
    SILENCE_DEPRECATIONS = auto()
    DISALLOW_INLINING = auto()
    DISALLOW_OPTIMIZATION = auto()
    REQUIRE_BOUNDS_CHECK = auto()
    REQUIRE_CONTRACTS = auto()
    RELAX_PROPERTIES = auto()
    NO_DEFAULT_FLAGS = auto()


class BuildOption(_NamedFlag):
    DEBUG_MODE = auto()
    RELEASE_MODE = auto()
    COVERAGE = auto()
    DEBUG_INFO = auto()
    DEBUG_INFO_C = auto()
    ALWAYS_STACK_FRAME = auto()
    STACK_STOMPING = auto()
    INLINE = auto()
    NO_BOUNDS_CHECK = auto()
    OPTIMIZE = auto()
    PROFILE = auto()
    UNITTESTS = auto()
    VERBOSE = auto()
    IGNORE_UNKNOWN_PRAGMAS = auto()
    SYNTAX_ONLY = auto()
    WARNINGS = auto()
    WARNINGS_AS_ERRORS = auto()
    IGNORE_DEPRECATIONS = auto()
    DEPRECATION_WARNINGS = auto()
    DEPRECATION_ERRORS = auto()
    PROPERTY = auto()
    PROFILE_G_C = auto()
    PIC = auto()
    BETTER_C = auto()
    LOWMEM = auto()


@dataclass
class DependencySpec:
    """How one package depends on another.

    Attributes:
        version: Version constraint; ``*`` accepts any version
        path: Local path override; when set, ``version`` is not used for resolution
        optional: The build succeeds without this dependency
    """

    version: str = ANY_VERSION
    path: str | None = None
    optional: bool = False

    @property
    def is_path_based(self) -> bool:
        return self.path is not None

    def to_dict(self) -> dict:
        return {"version": self.version, "path": self.path, "optional": self.optional}


PlatformStrings = dict[str, list[str]]


@dataclass
class BuildSettings:
    """Build settings of one scope: package root, configuration or build type.

    The string-array and flag-set fields are keyed by platform: ``""`` holds
    unconditional values, ``"-" + platform`` holds platform-specific ones.
    """

    target_type: TargetType = TargetType.AUTODETECT
    target_name: str = ""
    target_path: str = ""
    working_directory: str = ""
    system_dependencies: str = ""
    main_source_file: str = ""
    dependencies: dict[str, DependencySpec] = field(default_factory=dict)
    sub_configurations: dict[str, str] = field(default_factory=dict)

    source_files: PlatformStrings = field(default_factory=dict)
    source_paths: PlatformStrings = field(default_factory=dict)
    excluded_source_files: PlatformStrings = field(default_factory=dict)
    import_paths: PlatformStrings = field(default_factory=dict)
    string_import_paths: PlatformStrings = field(default_factory=dict)
    copy_files: PlatformStrings = field(default_factory=dict)
    dflags: PlatformStrings = field(default_factory=dict)
    lflags: PlatformStrings = field(default_factory=dict)
    libs: PlatformStrings = field(default_factory=dict)
    versions: PlatformStrings = field(default_factory=dict)
    debug_versions: PlatformStrings = field(default_factory=dict)
    pre_generate_commands: PlatformStrings = field(default_factory=dict)
    post_generate_commands: PlatformStrings = field(default_factory=dict)
    pre_build_commands: PlatformStrings = field(default_factory=dict)
    post_build_commands: PlatformStrings = field(default_factory=dict)

    build_requirements: dict[str, BuildRequirement] = field(default_factory=dict)
    build_options: dict[str, BuildOption] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {}
        for name, value in vars(self).items():
            if isinstance(value, TargetType):
                data[name] = value.value
            elif name == "dependencies":
                data[name] = {pkg: dep.to_dict() for pkg, dep in value.items()}
            elif name in ("build_requirements", "build_options"):
                data[name] = {key: flags.names() for key, flags in value.items()}
            elif isinstance(value, dict):
                data[name] = {key: list(v) if isinstance(v, list) else v for key, v in value.items()}
            else:
                data[name] = value
        return data


@dataclass
class Configuration:
    """A named configuration: settings applied when the configuration is chosen."""

    name: str = ""
    platforms: list[str] = field(default_factory=list)
    build_settings: BuildSettings = field(default_factory=BuildSettings)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "platforms": list(self.platforms),
            "build_settings": self.build_settings.to_dict(),
        }


@dataclass
class SubPackage:
    """A sub-package, either referenced by path or defined inline.

    Exactly one of ``path`` and ``recipe`` is set.
    """

    path: str | None = None
    recipe: PackageRecipe | None = None

    @property
    def is_inline(self) -> bool:
        return self.recipe is not None

    def to_dict(self) -> dict:
        if self.recipe is not None:
            return {"recipe": self.recipe.to_dict()}
        return {"path": self.path}


@dataclass
class PackageRecipe:
    """Structured package recipe.

    Attributes:
        name: Package name (required, never empty after parsing)
        description: One-line description
        homepage: Project URL
        authors: Author names, accumulated across repeated ``authors`` tags
        copyright: Copyright notice
        license: License identifier
        build_settings: Settings of the package root scope
        configurations: Named configurations in document order
        build_types: Build-type profiles by name
        sub_packages: Sub-packages in document order
        ddox_filter_args: Arguments for the documentation filter extension
    """

    name: str = ""
    description: str = ""
    homepage: str = ""
    authors: list[str] = field(default_factory=list)
    copyright: str = ""
    license: str = ""
    build_settings: BuildSettings = field(default_factory=BuildSettings)
    configurations: list[Configuration] = field(default_factory=list)
    build_types: dict[str, BuildSettings] = field(default_factory=dict)
    sub_packages: list[SubPackage] = field(default_factory=list)
    ddox_filter_args: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "homepage": self.homepage,
            "authors": list(self.authors),
            "copyright": self.copyright,
            "license": self.license,
            "build_settings": self.build_settings.to_dict(),
            "configurations": [c.to_dict() for c in self.configurations],
            "build_types": {name: bt.to_dict() for name, bt in self.build_types.items()},
            "sub_packages": [sp.to_dict() for sp in self.sub_packages],
            "ddox_filter_args": list(self.ddox_filter_args),
        }
