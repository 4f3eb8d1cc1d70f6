"""Document tree for purexml.

Key Components:
    XMLDocument: Prologue plus root element
    XMLPrologue: Version and encoding from ``<?xml ...?>``
    XMLTag: One element with attributes, content and children
    render_tag / render_document: Canonical text rendering

The recursive-descent builder lives in ``purexml.tree.builder``.
"""

from .model import (
    XMLDocument,
    XMLPrologue,
    XMLTag,
)
from .serializer import (
    render_document,
    render_prologue,
    render_tag,
)

__all__ = [
    "XMLDocument",
    "XMLPrologue",
    "XMLTag",
    "render_document",
    "render_prologue",
    "render_tag",
]
