"""Blacklist/whitelist tree filtering.

Rules:
- Never mutate the caller's tree: blacklisting strips a deep clone,
  whitelisting builds a new tree
- A matched node is handled once and its subtree is not visited again
"""

from __future__ import annotations

from typing import Callable, Iterable

from bs4.element import PageElement, Tag

from ..domain.models import ExcludeMode, MatchPolicy, Rule, SelectorSet
from ..dom import nodes
from ..observability.logger import get_logger
from ..rules.matcher import matches_selectors, matching_rules, selector_keys

logger = get_logger(__name__)

NodePredicate = Callable[[PageElement], bool]


class TreeFilter:
    """Processing layer component: strip or keep subtrees matching a predicate."""

    def __init__(self, predicate: NodePredicate):
        self._matches = predicate

    @classmethod
    def for_rules(cls, rules: Iterable[Rule], policy: MatchPolicy = MatchPolicy.FIRST_MATCH) -> "TreeFilter":
        rules = tuple(rules)

        def predicate(node: PageElement) -> bool:
            matched = matching_rules(node, rules, policy)
            for rule in matched:
                logger.debug("node_matched", tag=nodes.tag_name(node), rule=str(rule))
            return bool(matched)

        return cls(predicate)

    @classmethod
    def for_selectors(cls, selectors: SelectorSet) -> "TreeFilter":
        def predicate(node: PageElement) -> bool:
            if not matches_selectors(node, selectors):
                return False
            logger.debug("node_matched", keys=[k for k in selector_keys(node) if k])
            return True

        return cls(predicate)

    def strip(self, root: Tag) -> Tag:
        """Return a clone of ``root`` with every matching subtree emptied."""
        clone = nodes.content_clone(root)
        self._strip(clone)
        return clone

    def copy(self, root: Tag) -> Tag:
        """Return a new tree holding clones of the top-most matching nodes."""
        target = nodes.structural_clone(root)
        self._copy(root, target)
        return target

    def apply(self, root: Tag, mode: ExcludeMode) -> Tag:
        if mode is ExcludeMode.BLACKLIST:
            return self.strip(root)
        if mode is ExcludeMode.WHITELIST:
            return self.copy(root)
        return root

    def _strip(self, node: PageElement) -> None:
        if self._matches(node):
            logger.debug("node_stripped", tag=nodes.tag_name(node))
            nodes.strip(node)
            return
        for child in nodes.children(node):
            self._strip(child)

    def _copy(self, node: PageElement, target: Tag) -> None:
        if self._matches(node):
            logger.debug("node_whitelisted", tag=nodes.tag_name(node))
            target.append(nodes.content_clone(node))
            return
        for child in nodes.children(node):
            self._copy(child, target)
