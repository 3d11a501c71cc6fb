"""Tests for the document tree types."""

from __future__ import annotations

from pkgrecipe.document import Attribute, Location, Node


class TestNode:
    """Test Node helpers."""

    def test_tag_builds_node(self):
        node = Node.tag("dependency", "vibe-d", line=3, file="dub.sdl", version="~>0.9", optional=True)

        assert node.name == "dependency"
        assert node.namespace == ""
        assert node.values == ["vibe-d"]
        assert node.attributes == [Attribute("version", "~>0.9"), Attribute("optional", True)]
        assert node.children == []
        assert node.location == Location("dub.sdl", 3)

    def test_namespaced_tag(self):
        node = Node.tag("x:ddoxFilterArgs", "-a")

        assert node.namespace == "x"
        assert node.name == "ddoxFilterArgs"
        assert node.full_name == "x:ddoxFilterArgs"

    def test_anonymous_tag(self):
        node = Node.tag("", "value")

        assert node.name == ""
        assert node.full_name == ""

    def test_attribute_lookup(self):
        node = Node.tag("dflags", "-g", platform="linux")

        assert node.has_attribute("platform")
        assert not node.has_attribute("version")
        assert node.first_attribute("platform") == "linux"
        assert node.first_attribute("version") is None
        assert node.attribute_values("platform") == ["linux"]

    def test_structural_equality(self):
        """Test nodes compare by structure."""
        assert Node.tag("libs", "a", line=1) == Node.tag("libs", "a", line=1)
        assert Node.tag("libs", "a", line=1) != Node.tag("libs", "a", line=2)


class TestLocation:
    """Test Location rendering."""

    def test_str(self):
        assert str(Location("dub.sdl", 7)) == "dub.sdl(7)"

    def test_default(self):
        assert str(Location()) == "(0)"
