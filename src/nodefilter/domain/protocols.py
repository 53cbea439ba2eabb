"""Protocol definitions for parse filters.

Parse filters take a parsed document and return the record the next stage
should see. Implementations must not mutate the document's tree or record.
"""

from typing import Protocol

from .models import ParsedDocument, ParseRecord


class HtmlParseFilter(Protocol):
    """Interface shared by every filter in a parse-filter chain."""

    def filter(self, document: ParsedDocument) -> ParseRecord:
        """Return the filtered record for ``document``."""
        ...
