from __future__ import annotations

from bs4 import BeautifulSoup

from nodefilter.domain.models import MatchPolicy
from nodefilter.extraction.select_copy import select_copy
from nodefilter.rules.compiler import compile_select_spec


def test_select_copy_example() -> None:
    soup = BeautifulSoup('<h1 id="title">Big   Headline</h1><p>Body</p>', "lxml")
    fields = select_copy(soup, compile_select_spec("h1;id;title"))
    assert fields == {"h1_id_title": "Big Headline"}


def test_unmatched_rule_is_absent_but_empty_match_is_present() -> None:
    soup = BeautifulSoup('<div id="empty"></div>', "lxml")
    fields = select_copy(soup, compile_select_spec("div;id;empty|h1;id;title"))
    assert fields == {"div_id_empty": ""}
    assert "h1_id_title" not in fields


def test_matched_node_children_are_not_searched() -> None:
    soup = BeautifulSoup('<div id="outer">A <div id="inner">B</div></div>', "lxml")
    fields = select_copy(soup, compile_select_spec("div;id;outer|div;id;inner"))
    assert fields == {"div_id_outer": "A B"}


def test_policy_controls_rules_per_node() -> None:
    soup = BeautifulSoup('<div id="a" class="b">X</div>', "lxml")
    spec = compile_select_spec("div;id;a|div;class;b")
    assert select_copy(soup, spec, MatchPolicy.FIRST_MATCH) == {"div_id_a": "X"}
    assert select_copy(soup, spec, MatchPolicy.ALL_MATCHES) == {"div_id_a": "X", "div_class_b": "X"}


def test_later_node_overwrites_earlier_for_same_rule() -> None:
    soup = BeautifulSoup('<p class="x">one</p><p class="x">two</p>', "lxml")
    assert select_copy(soup, compile_select_spec("p;class;x")) == {"p_class_x": "two"}


def test_select_copy_does_not_mutate_tree() -> None:
    soup = BeautifulSoup('<h1 id="title">T</h1>', "lxml")
    before = str(soup)
    select_copy(soup, compile_select_spec("h1;id;title"))
    assert str(soup) == before
    assert select_copy(None, compile_select_spec("h1;id;title")) == {}
