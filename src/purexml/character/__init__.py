"""Character-level helpers for purexml.

Provides the entity codec shared by the tokenizers and the serializer.
"""

from .entities import (
    ENTITIES,
    escape,
    strip_layout_characters,
    unescape,
)

__all__ = [
    "ENTITIES",
    "escape",
    "strip_layout_characters",
    "unescape",
]
