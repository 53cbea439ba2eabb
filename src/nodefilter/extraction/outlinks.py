"""Outlink extraction from (filtered) document trees.

Responsibilities:
- Find the effective base URL (an in-document <base href> wins)
- Collect link targets in document order, resolved to absolute URLs

Rules:
- Duplicates are kept; ranking and deduplication belong to later stages
- rel="nofollow" links and javascript: targets are not outlinks
- A target or <base href> that cannot be parsed as a URL is skipped
"""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import urljoin, urlparse

from bs4.element import PageElement

from ..domain.models import LinkParam, Outlink
from ..dom.nodes import NodeKind, attribute, node_kind, tag_name
from ..dom.walker import NodeWalker
from ..observability.logger import get_logger
from .text import collapse_whitespace, extract_text

logger = get_logger(__name__)

DEFAULT_LINK_PARAMS: tuple[LinkParam, ...] = (
    LinkParam("a", "href"),
    LinkParam("area", "href"),
    LinkParam("link", "href"),
    LinkParam("frame", "src"),
    LinkParam("iframe", "src"),
    LinkParam("script", "src"),
    LinkParam("img", "src"),
)

FORM_LINK_PARAM = LinkParam("form", "action")


def _is_absolute(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme) and (bool(parsed.netloc) or parsed.scheme.lower() == "file")


def find_base(root: Optional[PageElement], fallback: str) -> str:
    """Return the first ``<base href>`` in ``root``, else ``fallback``.

    A first ``<base href>`` that is not a parseable URL also yields ``fallback``.
    """
    for node in NodeWalker(root):
        if tag_name(node) != "base":
            continue
        href = attribute(node, "href")
        if href is None or not href.strip():
            continue
        href = href.strip()
        try:
            if _is_absolute(href):
                return href
            return urljoin(fallback, href)
        except ValueError:
            logger.debug("base_href_unresolvable", href=href, fallback=fallback)
            return fallback
    return fallback


class OutlinkExtractor:
    def __init__(
        self,
        link_params: Iterable[LinkParam] = DEFAULT_LINK_PARAMS,
        *,
        ignore_tags: Iterable[str] = (),
        form_use_action: bool = False,
    ):
        ignored = {t.lower() for t in ignore_tags}
        params = list(link_params)
        if form_use_action:
            params.append(FORM_LINK_PARAM)
        self._params: dict[str, str] = {
            p.tag.lower(): p.attribute for p in params if p.tag.lower() not in ignored
        }

    def extract(self, root: Optional[PageElement], base_url: str) -> list[Outlink]:
        outlinks: list[Outlink] = []
        walker = NodeWalker(root)
        for node in walker:
            kind = node_kind(node)
            if kind is NodeKind.COMMENT:
                walker.skip_children()
                continue
            if kind is not NodeKind.ELEMENT:
                continue
            outlink = self._outlink_for(node, base_url)
            if outlink is not None:
                outlinks.append(outlink)
        return outlinks

    def _outlink_for(self, node: PageElement, base_url: str) -> Optional[Outlink]:
        name = tag_name(node)
        attr_name = self._params.get(name)
        if attr_name is None:
            return None

        target = attribute(node, attr_name)
        if target is None:
            return None
        target = target.strip()
        if not target or target.lower().startswith("javascript:"):
            return None

        rel = collapse_whitespace(attribute(node, "rel") or "").lower()
        if "nofollow" in rel.split():
            return None
        if name == "form" and (attribute(node, "method") or "").strip().lower() == "post":
            return None

        try:
            url = urljoin(base_url, target)
        except ValueError:
            logger.debug("outlink_unresolvable", target=target, base_url=base_url)
            return None

        metadata = {"tag": name}
        if rel:
            metadata["rel"] = rel
        return Outlink(
            url=url,
            anchor=extract_text(node),
            metadata=metadata,
        )
