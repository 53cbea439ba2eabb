"""Plain-text extraction for indexing."""

from __future__ import annotations

import re
from typing import Optional

from bs4.element import PageElement

from ..dom.nodes import NodeKind, node_kind, tag_name
from ..dom.walker import NodeWalker

_WHITESPACE_RE = re.compile(r"\s+")

SKIPPED_TAGS = frozenset({"script", "style"})


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def extract_text(root: Optional[PageElement], *, keep_root: bool = False) -> str:
    """Join the normalized text nodes under ``root`` with single spaces.

    ``script``/``style`` subtrees and comments are skipped. With
    ``keep_root=True`` the root itself is always read, even when it is a
    ``script`` or ``style`` element.
    """
    if root is None:
        return ""

    parts: list[str] = []
    walker = NodeWalker(root)
    for node in walker:
        kind = node_kind(node)
        if kind is NodeKind.COMMENT:
            walker.skip_children()
            continue
        if kind is NodeKind.ELEMENT:
            if tag_name(node) in SKIPPED_TAGS and not (keep_root and node is root):
                walker.skip_children()
            continue
        text = collapse_whitespace(str(node))
        if text:
            parts.append(text)
    return " ".join(parts)
