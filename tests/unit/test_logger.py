from __future__ import annotations

import json

import pytest
import structlog

from nodefilter.config.settings import FilterSettings
from nodefilter.observability.logger import configure_logging, get_logger


def _emit(capsys: pytest.CaptureFixture[str], settings: FilterSettings, log_level: str | None = None) -> list[dict]:
    try:
        configure_logging(log_level, settings=settings)
        logger = get_logger("nodefilter.test")
        logger.debug("hidden_event")
        logger.info("rules_loaded", count=2)
        lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    finally:
        structlog.reset_defaults()
    return [json.loads(line) for line in lines]


def test_configure_logging_renders_json_tagged_with_service(capsys: pytest.CaptureFixture[str]) -> None:
    events = _emit(capsys, FilterSettings(service_name="crawl-parse", log_level="INFO"))

    assert len(events) == 1
    event = events[0]
    assert event["event"] == "rules_loaded"
    assert event["count"] == 2
    assert event["level"] == "info"
    assert event["service"] == "crawl-parse"
    assert "timestamp" in event


def test_explicit_level_overrides_settings(capsys: pytest.CaptureFixture[str]) -> None:
    events = _emit(capsys, FilterSettings(log_level="INFO"), log_level="debug")
    assert [e["event"] for e in events] == ["hidden_event", "rules_loaded"]


def test_unknown_level_falls_back_to_info(capsys: pytest.CaptureFixture[str]) -> None:
    events = _emit(capsys, FilterSettings(), log_level="chatty")
    assert [e["event"] for e in events] == ["rules_loaded"]
