"""Node kinds, attribute lookup and cloning over BeautifulSoup trees.

Every tree access in the filter goes through these helpers so that the rest
of the code only deals with three node kinds: elements, text and comments.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, PageElement, ProcessingInstruction, Tag

# Strings that are markup rather than content.
_NON_CONTENT_STRINGS = (Comment, Doctype, Declaration, ProcessingInstruction)


class NodeKind(str, Enum):
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


def node_kind(node: PageElement) -> NodeKind:
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, _NON_CONTENT_STRINGS):
        return NodeKind.COMMENT
    return NodeKind.TEXT


def is_element(node: object) -> bool:
    return isinstance(node, Tag)


def tag_name(node: PageElement) -> str:
    if not isinstance(node, Tag) or not node.name:
        return ""
    return node.name.lower()


def has_attributes(node: PageElement) -> bool:
    return isinstance(node, Tag) and bool(node.attrs)


def attribute(node: PageElement, name: str) -> Optional[str]:
    """Return the value of attribute ``name`` (case-insensitive) or None.

    Multi-valued attributes (bs4 splits ``class`` and ``rel``) are joined back
    with a single space so callers always compare the whole attribute value.
    The original whitespace is lost in that split: ``class=" foo "`` reads as
    ``"foo"``, and tabs or repeated spaces between tokens become one space.
    Parse with ``multi_valued_attributes=None`` to compare the value exactly
    as written.
    """
    if not name or not has_attributes(node):
        return None
    wanted = name.lower()
    for key, value in node.attrs.items():
        if not isinstance(key, str) or key.lower() != wanted:
            continue
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(str(v) for v in value)
        return str(value)
    return None


def children(node: PageElement) -> list[PageElement]:
    if not isinstance(node, Tag):
        return []
    return list(node.contents)


def structural_clone(node: Tag) -> Tag:
    """Copy of ``node`` with its name and attributes but no children."""
    if isinstance(node, BeautifulSoup):
        return type(node)("", builder=type(node.builder)())
    return node.copy_self()


def content_clone(node: PageElement) -> PageElement:
    """Independent deep copy of ``node`` and its whole subtree."""
    if isinstance(node, BeautifulSoup):
        clone = structural_clone(node)
        for child in node.contents:
            clone.append(copy.copy(child))
        return clone
    return copy.copy(node)


def strip(node: Tag) -> None:
    """Empty ``node`` in place; the node itself stays in its parent."""
    node.clear()
