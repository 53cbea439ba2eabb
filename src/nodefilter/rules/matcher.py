"""Node/rule matching.

Matching never raises: a node that is not an element, has no attributes or
carries unusable attribute values simply does not match.
"""

from __future__ import annotations

from typing import Iterable, Optional

from bs4.element import PageElement

from ..domain.models import MatchPolicy, Rule, SelectorSet
from ..dom.nodes import attribute, has_attributes, is_element, tag_name


def matches_rule(node: PageElement, rule: Rule) -> bool:
    if not is_element(node) or not has_attributes(node):
        return False
    if tag_name(node) != rule.tag.lower():
        return False
    value = attribute(node, rule.attribute)
    if value is None:
        return False
    # Whole-value comparison: class="foo bar" does not match "foo".
    return value.lower() == rule.value.lower()


def matching_rules(
    node: PageElement,
    rules: Iterable[Rule],
    policy: MatchPolicy = MatchPolicy.FIRST_MATCH,
) -> list[Rule]:
    matched: list[Rule] = []
    for rule in rules:
        if matches_rule(node, rule):
            matched.append(rule)
            if policy is MatchPolicy.FIRST_MATCH:
                break
    return matched


def selector_keys(node: PageElement) -> tuple[str, Optional[str], Optional[str]]:
    """Return the ``type``, ``type#id`` and ``type.class`` keys of a node."""
    kind = tag_name(node)
    node_id = attribute(node, "id")
    class_name = attribute(node, "class")
    by_id = f"{kind}#{node_id.lower()}" if node_id is not None else None
    by_class = f"{kind}.{class_name.lower()}" if class_name is not None else None
    return kind, by_id, by_class


def matches_selectors(node: PageElement, selectors: SelectorSet) -> bool:
    if not is_element(node) or not selectors:
        return False
    return any(key is not None and key in selectors for key in selector_keys(node))
