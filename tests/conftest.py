"""Pytest configuration and shared fixtures."""

import pytest

from pkgrecipe.document import Node


@pytest.fixture
def full_document() -> Node:
    """A recipe document using every recognized field."""
    tag = Node.tag
    return tag(
        "",
        file="testfile",
        children=[
            tag("name", "projectname", line=1),
            tag("description", "project description", line=2),
            tag("homepage", "http://example.com", line=3),
            tag("authors", "author 1", "author 2", line=4),
            tag("authors", "author 3", line=5),
            tag("copyright", "copyright string", line=6),
            tag("license", "license string", line=7),
            tag("subPackage", line=8, children=[tag("name", "subpackage1", line=9)]),
            tag(
                "subPackage",
                line=11,
                children=[
                    tag("name", "subpackage2", line=12),
                    tag("dependency", "projectname:subpackage1", version="*", line=13),
                ],
            ),
            tag("subPackage", "pathsp3", line=15),
            tag(
                "configuration",
                "config1",
                line=16,
                children=[
                    tag("platforms", "windows", "linux", line=17),
                    tag("targetType", "library", line=18),
                ],
            ),
            tag(
                "configuration",
                "config2",
                line=20,
                children=[
                    tag("platforms", "windows-x86", line=21),
                    tag("targetType", "executable", line=22),
                ],
            ),
            tag("buildType", "debug", line=24, children=[tag("dflags", "-g", "-debug", line=25)]),
            tag("buildType", "release", line=27, children=[tag("dflags", "-release", "-O", line=28)]),
            tag("x:ddoxFilterArgs", "-arg1", "-arg2", line=30),
            tag("x:ddoxFilterArgs", "-arg3", line=31),
            tag("dependency", ":subpackage1", optional=False, path=".", line=33),
            tag("dependency", "somedep", version="1.0.0", optional=True, line=34),
            tag("systemDependencies", "system dependencies", line=35),
            tag("targetType", "executable", line=36),
            tag("targetName", "target name", line=37),
            tag("targetPath", "target path", line=38),
            tag("workingDirectory", "working directory", line=39),
            tag("subConfiguration", ":subpackage2", "library", line=40),
            tag("buildRequirements", "allowWarnings", "silenceDeprecations", line=41),
            tag("buildOptions", "verbose", "ignoreUnknownPragmas", line=42),
            tag("libs", "lib1", "lib2", line=43),
            tag("libs", "lib3", line=44),
            tag("sourceFiles", "source1", "source2", line=45),
            tag("sourceFiles", "source3", line=46),
            tag("sourcePaths", "sourcepath1", "sourcepath2", line=47),
            tag("sourcePaths", "sourcepath3", line=48),
            tag("excludedSourceFiles", "excluded1", "excluded2", line=49),
            tag("excludedSourceFiles", "excluded3", line=50),
            tag("mainSourceFile", "main source", line=51),
            tag("copyFiles", "copy1", "copy2", line=52),
            tag("copyFiles", "copy3", line=53),
            tag("versions", "version1", "version2", line=54),
            tag("versions", "version3", line=55),
            tag("debugVersions", "debug1", "debug2", line=56),
            tag("debugVersions", "debug3", line=57),
            tag("importPaths", "import1", "import2", line=58),
            tag("importPaths", "import3", line=59),
            tag("stringImportPaths", "string1", "string2", line=60),
            tag("stringImportPaths", "string3", line=61),
            tag("preGenerateCommands", "preg1", "preg2", line=62),
            tag("preGenerateCommands", "preg3", line=63),
            tag("postGenerateCommands", "postg1", "postg2", line=64),
            tag("postGenerateCommands", "postg3", line=65),
            tag("preBuildCommands", "preb1", "preb2", line=66),
            tag("preBuildCommands", "preb3", line=67),
            tag("postBuildCommands", "postb1", "postb2", line=68),
            tag("postBuildCommands", "postb3", line=69),
            tag("dflags", "df1", "df2", line=70),
            tag("dflags", "df3", line=71),
            tag("lflags", "lf1", "lf2", line=72),
            tag("lflags", "lf3", line=73),
        ],
    )
