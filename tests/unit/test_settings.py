from __future__ import annotations

import pytest

from nodefilter.config.settings import FilterSettings, get_settings, reset_settings


def test_from_properties_maps_crawl_keys() -> None:
    settings = FilterSettings.from_properties(
        {
            "parser.html.nodes.exclude.mode": "blacklist",
            "parser.html.nodes.exclude.list": "div;id;nav",
            "parser.html.nodes.select.copy": "h1;id;title",
            "parser.html.whitelist": "div#main",
            "parser.html.outlinks.ignore_tags": "img, script",
            "parser.html.form.use_action": "true",
            "unrelated.key": "x",
        }
    )
    assert settings.nodes_exclude_mode == "blacklist"
    assert settings.nodes_exclude_list == "div;id;nav"
    assert settings.nodes_select_copy == "h1;id;title"
    assert settings.html_whitelist == "div#main"
    assert settings.outlinks_ignore_tags == ["img", "script"]
    assert settings.form_use_action is True


def test_validate_rejects_unknown_policy_and_level() -> None:
    with pytest.raises(ValueError):
        FilterSettings(match_policy="sometimes").validate()
    with pytest.raises(ValueError):
        FilterSettings(log_level="LOUD").validate()
    FilterSettings(match_policy="ALL_MATCHES").validate()


def test_get_settings_is_cached_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    reset_settings()
    monkeypatch.setenv("NODES_EXCLUDE_MODE", "whitelist")
    try:
        first = get_settings()
        assert first.nodes_exclude_mode == "whitelist"
        assert get_settings() is first
    finally:
        reset_settings()


def test_ignore_tags_from_env_accept_comma_separated_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTLINKS_IGNORE_TAGS", "img, script,,")
    assert FilterSettings().outlinks_ignore_tags == ["img", "script"]

    monkeypatch.setenv("OUTLINKS_IGNORE_TAGS", "")
    assert FilterSettings().outlinks_ignore_tags == []
    assert FilterSettings(outlinks_ignore_tags=["link"]).outlinks_ignore_tags == ["link"]
