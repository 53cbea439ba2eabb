from __future__ import annotations

from bs4 import BeautifulSoup

from nodefilter.extraction.outlinks import OutlinkExtractor, find_base

BASE = "http://example.com/a/"


def _urls(html: str, **kwargs) -> list[str]:
    soup = BeautifulSoup(html, "lxml")
    return [o.url for o in OutlinkExtractor(**kwargs).extract(soup, find_base(soup, BASE))]


def test_resolves_relative_fragment_and_protocol_relative() -> None:
    html = """
    <a href="page.html">Page</a>
    <a href="/root">Root</a>
    <a href="#top">Top</a>
    <a href="//cdn.example.org/x">CDN</a>
    <a href="https://other.org/abs">Abs</a>
    """
    assert _urls(html) == [
        "http://example.com/a/page.html",
        "http://example.com/root",
        "http://example.com/a/#top",
        "http://cdn.example.org/x",
        "https://other.org/abs",
    ]


def test_base_element_overrides_document_base() -> None:
    html = '<html><head><base href="http://other.com/"></head><body><a href="p.html">P</a></body></html>'
    assert _urls(html) == ["http://other.com/p.html"]


def test_relative_base_element_resolves_against_document_base() -> None:
    soup = BeautifulSoup('<base href="../b/"><a href="x">X</a>', "lxml")
    assert find_base(soup, BASE) == "http://example.com/b/"


def test_keeps_duplicates_and_document_order() -> None:
    html = '<a href="x">1</a><img src="i.png"><a href="x">2</a>'
    assert _urls(html) == [
        "http://example.com/a/x",
        "http://example.com/a/i.png",
        "http://example.com/a/x",
    ]


def test_skips_blank_javascript_and_nofollow_links() -> None:
    html = """
    <a>no href</a>
    <a href="  ">blank</a>
    <a href="javascript:void(0)">js</a>
    <a href="skip" rel="NoFollow noopener">nf</a>
    <a href="keep" rel="noopener">ok</a>
    """
    assert _urls(html) == ["http://example.com/a/keep"]


def test_skips_target_that_is_not_a_url() -> None:
    html = '<a href="http://[::1/x">bad</a><a href="ok">ok</a>'
    assert _urls(html) == ["http://example.com/a/ok"]


def test_unparseable_base_element_falls_back_to_document_base() -> None:
    soup = BeautifulSoup('<base href="http://[bad/"><a href="ok">ok</a>', "lxml")
    assert find_base(soup, BASE) == BASE
    assert [o.url for o in OutlinkExtractor().extract(soup, find_base(soup, BASE))] == [
        "http://example.com/a/ok"
    ]


def test_anchor_text_and_metadata() -> None:
    soup = BeautifulSoup('<a href="x" rel="next">  Next\n <b>page</b> </a>', "lxml")
    [link] = OutlinkExtractor().extract(soup, BASE)
    assert link.anchor == "Next page"
    assert link.metadata == {"tag": "a", "rel": "next"}


def test_ignore_tags_and_form_actions() -> None:
    html = """
    <img src="i.png">
    <form action="search" method="get"></form>
    <form action="login" method="POST"></form>
    """
    assert _urls(html) == ["http://example.com/a/i.png"]
    assert _urls(html, ignore_tags=["img"], form_use_action=True) == ["http://example.com/a/search"]
