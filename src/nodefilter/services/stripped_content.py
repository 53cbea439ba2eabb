"""Selector-based stripped-content filter.

Selectors are ``type``, ``type#id`` or ``type.class`` tokens. The text left
after filtering is stored in the record's content metadata; the record's own
text and outlinks are not touched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from bs4.element import Tag

from ..config.settings import FilterSettings, get_settings
from ..domain.models import FilterConfig, ParsedDocument, ParseRecord, SelectorSet
from ..extraction.text import extract_text
from ..observability.logger import get_logger
from ..rules.compiler import build_filter_config
from .tree_filter import TreeFilter

logger = get_logger(__name__)

STRIPPED_CONTENT_FIELD = "stripped_content"


class StrippedContentFilter:
    def __init__(self, blacklist: SelectorSet = SelectorSet(), whitelist: SelectorSet = SelectorSet()):
        self._blacklist = blacklist
        self._whitelist = whitelist
        self._filter: Optional[TreeFilter] = None
        # Whitelist wins when both are configured.
        if whitelist:
            self._filter = TreeFilter.for_selectors(whitelist)
        elif blacklist:
            self._filter = TreeFilter.for_selectors(blacklist)

    @classmethod
    def from_config(cls, config: FilterConfig) -> "StrippedContentFilter":
        return cls(blacklist=config.blacklist, whitelist=config.whitelist)

    @classmethod
    def from_settings(cls, settings: Optional[FilterSettings] = None) -> "StrippedContentFilter":
        return cls.from_config(build_filter_config(settings or get_settings()))

    @property
    def enabled(self) -> bool:
        return self._filter is not None

    def strip_text(self, root: Tag) -> Optional[str]:
        if self._filter is None:
            return None
        if self._whitelist:
            filtered = self._filter.copy(root)
        else:
            filtered = self._filter.strip(root)
        return extract_text(filtered)

    def filter(self, document: ParsedDocument) -> ParseRecord:
        text = self.strip_text(document.root)
        if text is None:
            return document.parse
        content_meta = dict(document.parse.content_meta)
        content_meta[STRIPPED_CONTENT_FIELD] = text
        logger.debug("stripped_content_extracted", url=document.url, text_length=len(text))
        return replace(document.parse, content_meta=content_meta)
