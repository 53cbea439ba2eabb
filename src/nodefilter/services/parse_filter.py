"""Parse filter orchestration (select-copy + exclusion + re-extraction)."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from bs4.element import Tag

from ..config.settings import FilterSettings, get_settings
from ..domain.errors import BaseURLError
from ..domain.models import (
    FilterConfig,
    FilterResult,
    ParsedDocument,
    ParseRecord,
    ParseStatus,
    ParseStatusCode,
)
from ..domain.protocols import HtmlParseFilter
from ..extraction.outlinks import OutlinkExtractor, find_base
from ..extraction.select_copy import select_copy
from ..extraction.text import extract_text
from ..observability.logger import get_logger
from ..rules.compiler import build_filter_config
from ..utils.validators import parse_base_url
from .tree_filter import TreeFilter

logger = get_logger(__name__)


class ParseFilter:
    """Re-derive text, outlinks and select-copy fields for parsed documents.

    Rules:
    - Select-copy reads the original tree before any exclusion
    - Exclusion works on a clone (blacklist) or a new tree (whitelist)
    - Only text, outlinks and select-copy fields of a record are replaced
    - Holds no per-document state; safe to share across workers
    """

    def __init__(self, config: FilterConfig):
        self._config = config
        self._excluder = TreeFilter.for_rules(config.exclude_rules, config.match_policy)
        self._outlinks = OutlinkExtractor(
            ignore_tags=config.outlinks_ignore_tags,
            form_use_action=config.form_use_action,
        )

    @classmethod
    def from_settings(cls, settings: Optional[FilterSettings] = None) -> "ParseFilter":
        return cls(build_filter_config(settings or get_settings()))

    @property
    def enabled(self) -> bool:
        return self._config.exclude_enabled or self._config.select_enabled

    def apply(
        self,
        root: Tag,
        base_url: str,
        *,
        no_index: bool = False,
        no_follow: bool = False,
    ) -> FilterResult:
        """Filter one tree. Raises ``BaseURLError`` for an unusable base URL."""
        base = parse_base_url(base_url)

        fields: dict[str, str] = {}
        if self._config.select_enabled:
            fields = select_copy(root, self._config.select_spec, self._config.match_policy)

        filtered = root
        if self._config.exclude_enabled:
            filtered = self._excluder.apply(root, self._config.exclude_mode)

        text = "" if no_index else extract_text(filtered)
        outlinks: tuple = ()
        if not no_follow:
            outlinks = tuple(self._outlinks.extract(filtered, find_base(filtered, base)))

        return FilterResult(text=text, outlinks=outlinks, fields=fields)

    def filter(self, document: ParsedDocument) -> ParseRecord:
        directives = document.directives
        if directives.no_index and directives.no_follow:
            return document.parse
        if not self.enabled:
            return document.parse

        try:
            result = self.apply(
                document.root,
                document.base_url,
                no_index=directives.no_index,
                no_follow=directives.no_follow,
            )
        except BaseURLError as e:
            logger.warning("base_url_invalid", url=document.url, base_url=document.base_url, detail=e.info.detail)
            return replace(
                document.parse,
                text="",
                outlinks=(),
                status=ParseStatus(code=ParseStatusCode.FAILED, message=str(e), error=e),
            )

        content_meta = dict(document.parse.content_meta)
        content_meta.update(result.fields)
        logger.debug(
            "document_filtered",
            url=document.url,
            text_length=len(result.text),
            outlinks=len(result.outlinks),
            fields=sorted(result.fields),
        )
        return replace(
            document.parse,
            text=result.text,
            outlinks=result.outlinks,
            content_meta=content_meta,
        )


def run_parse_filters(document: ParsedDocument, filters: Iterable[HtmlParseFilter]) -> ParseRecord:
    """Run ``filters`` in order, each one seeing the previous record."""
    record = document.parse
    for parse_filter in filters:
        record = parse_filter.filter(replace(document, parse=record))
        if not record.status.success:
            break
    return record
