"""Validation helpers."""

from __future__ import annotations

from urllib.parse import urlparse

from ..domain.errors import BaseURLError


def is_valid_base_url(url: str | None) -> bool:
    if not url or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    if not parsed.scheme:
        return False
    return bool(parsed.netloc) or parsed.scheme.lower() == "file"


def parse_base_url(url: str | None) -> str:
    """Return the stripped base URL or raise ``BaseURLError``."""
    if not is_valid_base_url(url):
        raise BaseURLError("base URL is not an absolute URL", detail=f"url={url!r}")
    return url.strip()
