"""Pre-order tree walker with subtree skipping."""

from __future__ import annotations

from typing import Iterator, Optional

from bs4.element import PageElement

from .nodes import children


class NodeWalker:
    """Iterate a tree in document order without recursion.

    After a node has been returned, ``skip_children()`` drops its subtree
    from the walk::

        walker = NodeWalker(root)
        for node in walker:
            if tag_name(node) == "script":
                walker.skip_children()
    """

    def __init__(self, root: Optional[PageElement]):
        self._stack: list[PageElement] = [root] if root is not None else []
        self._pending = 0

    def __iter__(self) -> Iterator[PageElement]:
        return self

    def __next__(self) -> PageElement:
        if not self._stack:
            raise StopIteration
        node = self._stack.pop()
        kids = children(node)
        self._stack.extend(reversed(kids))
        self._pending = len(kids)
        return node

    def skip_children(self) -> None:
        if self._pending:
            del self._stack[-self._pending :]
            self._pending = 0
