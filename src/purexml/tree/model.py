"""Document, prologue and tag containers.

Plain data classes with public fields. They are built once by the tree
builder and only read afterwards; the navigation helpers never modify the
tree.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from purexml.tree.serializer import render_document, render_prologue, render_tag

DEFAULT_VERSION = "1.0"
DEFAULT_ENCODING = "UTF-8"


@dataclass
class XMLPrologue:
    """The ``<?xml version="..." encoding="..."?>`` declaration."""

    version: str = DEFAULT_VERSION
    encoding: str = DEFAULT_ENCODING

    def render(self) -> str:
        """Render as ``<?xml version="V" encoding="E"?>``."""
        return render_prologue(self)

    def __str__(self) -> str:
        return self.render()


@dataclass
class XMLTag:
    """One element of the document tree.

    Attributes:
        name: Tag name
        attributes: Attribute values by name
        children: Child elements in document order
        content: All text and CDATA directly under this element, concatenated
            in document order regardless of where the children sit
        is_self_closing: Element was written as ``<name .../>``
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["XMLTag"] = field(default_factory=list)
    content: str = ""
    is_self_closing: bool = False

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return name in self.attributes

    def find_child(self, name: str) -> Optional["XMLTag"]:
        """Find first direct child with matching tag name."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find_children(self, name: str) -> List["XMLTag"]:
        """Find all direct children with matching tag name."""
        return [child for child in self.children if child.name == name]

    def find(self, name: str) -> Optional["XMLTag"]:
        """Find the first descendant with matching tag name, in document order."""
        for element in self.iter():
            if element is not self and element.name == name:
                return element
        return None

    def find_all(self, name: str) -> List["XMLTag"]:
        """Find all descendants with matching tag name, in document order."""
        return [
            element for element in self.iter()
            if element is not self and element.name == name
        ]

    def iter(self) -> Iterator["XMLTag"]:
        """Yield this element and all its descendants in document order."""
        stack = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "name": self.name,
            "attributes": dict(self.attributes),
            "is_self_closing": self.is_self_closing,
        }

        if self.content:
            result["content"] = self.content

        if self.children:
            result["children"] = [child.to_dict() for child in self.children]

        return result

    def render(self) -> str:
        """Render this element and its subtree as canonical XML text."""
        return render_tag(self)

    def __str__(self) -> str:
        return self.render()


@dataclass
class XMLDocument:
    """A parsed document: prologue plus exactly one root element."""

    prologue: XMLPrologue
    root: XMLTag

    @property
    def element_count(self) -> int:
        """Number of elements in the tree, root included."""
        return sum(1 for _ in self.root.iter())

    @property
    def max_depth(self) -> int:
        """Depth of the deepest element (root = 0)."""
        deepest = 0
        stack = [(self.root, 0)]
        while stack:
            element, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in element.children)
        return deepest

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        return {
            "version": self.prologue.version,
            "encoding": self.prologue.encoding,
            "root": self.root.to_dict(),
        }

    def render(self) -> str:
        """Render prologue followed by the root element."""
        return render_document(self)

    def __str__(self) -> str:
        return self.render()
