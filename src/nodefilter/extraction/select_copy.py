"""Copy the text of selected nodes into named metadata fields."""

from __future__ import annotations

from typing import Iterable, Optional

from bs4.element import PageElement

from ..domain.models import MatchPolicy, SelectRule
from ..dom.nodes import tag_name
from ..dom.walker import NodeWalker
from ..observability.logger import get_logger
from ..rules.matcher import matches_rule
from .text import extract_text

logger = get_logger(__name__)


def select_copy(
    root: Optional[PageElement],
    spec: Iterable[SelectRule],
    policy: MatchPolicy = MatchPolicy.FIRST_MATCH,
) -> dict[str, str]:
    """Walk ``root`` once and capture the text of nodes matching ``spec``.

    A captured node's subtree is not searched further. If several nodes match
    the same rule, the last one in document order wins. Fields whose rule
    never matched are absent from the result.
    """
    spec = tuple(spec)
    fields: dict[str, str] = {}
    if root is None or not spec:
        return fields

    walker = NodeWalker(root)
    for node in walker:
        captured = False
        for select in spec:
            if not matches_rule(node, select.rule):
                continue
            fields[select.field_name] = extract_text(node, keep_root=True)
            logger.debug("node_selected", tag=tag_name(node), field=select.field_name)
            captured = True
            if policy is MatchPolicy.FIRST_MATCH:
                break
        if captured:
            walker.skip_children()
    return fields
