"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from typing import Annotated, Any, Mapping

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Crawl-configuration property names -> settings fields.
PROPERTY_KEYS: dict[str, str] = {
    "parser.html.nodes.exclude.mode": "nodes_exclude_mode",
    "parser.html.nodes.exclude.list": "nodes_exclude_list",
    "parser.html.nodes.select.copy": "nodes_select_copy",
    "parser.html.nodes.match.policy": "match_policy",
    "parser.html.blacklist": "html_blacklist",
    "parser.html.whitelist": "html_whitelist",
    "parser.html.outlinks.ignore_tags": "outlinks_ignore_tags",
    "parser.html.form.use_action": "form_use_action",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_MATCH_POLICIES = ("first_match", "all_matches")


class FilterSettings(BaseSettings):
    """Filter settings loaded from environment variables."""

    # Service
    service_name: str = "parse-node-filter"

    # Generic engine: exclude (blacklist/whitelist) rules
    nodes_exclude_mode: str | None = None  # "blacklist" | "whitelist"
    nodes_exclude_list: str = ""  # tag;attribute;value|tag;attribute;value
    nodes_select_copy: str = ""  # tag;attribute;value|...

    # "first_match" stops evaluating rules for a node after the first hit,
    # "all_matches" evaluates every rule.
    match_policy: str = "first_match"

    # CSS-like engine: comma-separated type, type#id, type.class tokens.
    # Whitelist wins when both are configured.
    html_blacklist: str = ""
    html_whitelist: str = ""

    # Outlink extraction; env values are comma-separated (img,script)
    outlinks_ignore_tags: Annotated[list[str], NoDecode] = []
    form_use_action: bool = False

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "FilterSettings":
        """Build settings from crawl-configuration style dotted keys.

        Unknown keys are ignored. Comma-separated strings are accepted for
        ``parser.html.outlinks.ignore_tags``.
        """
        values: dict[str, Any] = {}
        for key, field in PROPERTY_KEYS.items():
            if key not in properties or properties[key] is None:
                continue
            values[field] = properties[key]
        return cls(**values)

    @field_validator("outlinks_ignore_tags", mode="before")
    @classmethod
    def split_tag_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        return value

    def validate(self) -> None:
        # Rule strings and exclude mode are not checked here: a malformed value
        # only disables its feature (see rules.compiler.build_filter_config).
        if self.match_policy.strip().lower() not in _MATCH_POLICIES:
            raise ValueError(f"match_policy must be one of {', '.join(_MATCH_POLICIES)}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")


_settings: FilterSettings | None = None


def get_settings() -> FilterSettings:
    global _settings
    if _settings is None:
        _settings = FilterSettings()
        _settings.validate()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
