"""Generic tagged-document tree consumed by the recipe walker.

The document parser that produces these nodes lives outside this package.
It hands over a tree of named nodes, each with ordered values, named
attributes, child nodes and a source location. Nodes have no identity
beyond their structure.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

ScalarValue = Union[str, bool, int, float]


@dataclass(frozen=True)
class Location:
    """Source position of a node, used only for diagnostics."""

    file: str = ""
    line: int = 0

    def __str__(self) -> str:
        return f"{self.file}({self.line})"


@dataclass
class Attribute:
    """A named, typed value attached to a node (``platform="linux"``)."""

    name: str
    value: ScalarValue
    namespace: str = ""


@dataclass
class Node:
    """One tag of the document tree.

    Attributes:
        name: Tag name without namespace (empty for anonymous tags)
        namespace: Optional namespace prefix (``x`` in ``x:ddoxFilterArgs``)
        values: Ordered positional values
        attributes: Attributes in document order; a name may repeat
        children: Ordered child nodes
        location: Where the tag starts in its source document
    """

    name: str
    namespace: str = ""
    values: list[ScalarValue] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    location: Location = field(default_factory=Location)

    @classmethod
    def tag(
        cls,
        full_name: str,
        *values: ScalarValue,
        children: Iterable[Node] = (),
        line: int = 0,
        file: str = "",
        **attributes: ScalarValue,
    ) -> Node:
        """Build a node from its full name, values and attributes.

        ``Node.tag("dependency", "vibe-d", version="~>0.9")`` is the tree a
        parser produces for ``dependency "vibe-d" version="~>0.9"``.
        """
        namespace, _, name = full_name.rpartition(":")
        return cls(
            name=name,
            namespace=namespace,
            values=list(values),
            attributes=[Attribute(key, value) for key, value in attributes.items()],
            children=list(children),
            location=Location(file, line),
        )

    @property
    def full_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}:{self.name}"
        return self.name

    def attribute_values(self, name: str) -> list[ScalarValue]:
        return [attr.value for attr in self.attributes if attr.name == name]

    def has_attribute(self, name: str) -> bool:
        return any(attr.name == name for attr in self.attributes)

    def first_attribute(self, name: str) -> ScalarValue | None:
        """Return the first value of an attribute, or None if absent."""
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return None
