"""Canonical text rendering of parsed trees.

The output is deterministic so parse results can be compared as text:
attributes are sorted by name, every attribute is followed by one space
(so ``<a >`` and ``<a />`` with no attributes), and content that would not
survive a re-parse as plain text is wrapped in CDATA.
"""

from typing import TYPE_CHECKING, List, Union

from purexml.character.entities import escape

if TYPE_CHECKING:
    from purexml.tree.model import XMLDocument, XMLPrologue, XMLTag

# Content holding any of these is written as CDATA
CDATA_TRIGGER_CHARACTERS = ("\n", "\r", "\t", "<", ">", "&", "!", "'", '"')


def render_attribute(name: str, value: str) -> str:
    """Render one ``name="value"`` pair.

    Values holding a double quote are wrapped in single quotes and keep the
    double quote literal; all other values use double quotes and keep any
    apostrophe literal.
    """
    if '"' in value:
        quote, literal = "'", '"'
    else:
        quote, literal = '"', "'"
    return f"{name}={quote}{escape(value, skip=literal)}{quote}"


def needs_cdata(content: str) -> bool:
    """Check whether ``content`` must be wrapped in a CDATA block."""
    if any(char in content for char in CDATA_TRIGGER_CHARACTERS):
        return True
    return content.strip() != content


def wrap_cdata(content: str) -> str:
    """Wrap ``content`` in CDATA, splitting around any ``]]>`` it holds."""
    return "<![CDATA[" + content.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _render_start(tag: "XMLTag") -> str:
    parts = [f"<{tag.name} "]
    for name in sorted(tag.attributes):
        parts.append(render_attribute(name, tag.attributes[name]) + " ")
    parts.append("/>" if tag.is_self_closing else ">")
    return "".join(parts)


def _render_end(tag: "XMLTag") -> str:
    content = tag.content
    if content and needs_cdata(content):
        content = wrap_cdata(content)
    return f"{content}</{tag.name}>"


def render_tag(tag: "XMLTag") -> str:
    """Render an element and its subtree.

    Args:
        tag: Element to render

    Returns:
        Canonical XML text for the element
    """
    parts: List[str] = []
    # Pending elements, or already rendered end-tag text
    stack: List[Union["XMLTag", str]] = [tag]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        parts.append(_render_start(item))
        if not item.is_self_closing:
            stack.append(_render_end(item))
            stack.extend(reversed(item.children))
    return "".join(parts)


def render_prologue(prologue: "XMLPrologue") -> str:
    """Render the ``<?xml ...?>`` declaration."""
    return f'<?xml version="{prologue.version}" encoding="{prologue.encoding}"?>'


def render_document(document: "XMLDocument") -> str:
    """Render prologue followed by the root element."""
    return render_prologue(document.prologue) + render_tag(document.root)
