"""Compile configuration strings into immutable rule sets.

Compilation happens once at configuration time. Malformed input raises
``ConfigurationError``; ``build_filter_config`` logs it and disables only the
affected feature so documents keep flowing through the pipeline.
"""

from __future__ import annotations

from typing import Optional

from ..config.settings import FilterSettings
from ..domain.errors import ConfigurationError
from ..domain.models import ExcludeMode, FilterConfig, MatchPolicy, Rule, SelectorSet, SelectRule
from ..observability.logger import get_logger

logger = get_logger(__name__)

RULE_SEPARATOR = "|"
FIELD_SEPARATOR = ";"
SELECTOR_SEPARATOR = ","


def parse_exclude_mode(value: Optional[str]) -> ExcludeMode:
    if value is None or not value.strip():
        return ExcludeMode.DISABLED
    normalized = value.strip().lower()
    if normalized == ExcludeMode.BLACKLIST.value:
        return ExcludeMode.BLACKLIST
    if normalized == ExcludeMode.WHITELIST.value:
        return ExcludeMode.WHITELIST
    raise ConfigurationError("invalid exclude mode", detail=f"value={value!r}")


def parse_match_policy(value: Optional[str]) -> MatchPolicy:
    if value is None or not value.strip():
        return MatchPolicy.FIRST_MATCH
    try:
        return MatchPolicy(value.strip().lower())
    except ValueError as e:
        raise ConfigurationError("invalid match policy", detail=f"value={value!r}") from e


def _split_groups(raw: Optional[str], outer: str) -> list[str]:
    if raw is None:
        return []
    return [g.strip() for g in raw.split(outer) if g.strip()]


def compile_rules(
    raw: Optional[str],
    outer: str = RULE_SEPARATOR,
    inner: str = FIELD_SEPARATOR,
) -> tuple[Rule, ...]:
    """Parse ``tag;attribute;value|...`` into rules (empty input => no rules)."""
    rules: list[Rule] = []
    for group in _split_groups(raw, outer):
        parts = [p.strip() for p in group.split(inner)]
        if len(parts) != 3 or not all(parts):
            raise ConfigurationError(
                "rule must have exactly tag, attribute and value",
                detail=f"rule={group!r}",
            )
        rules.append(Rule(tag=parts[0], attribute=parts[1], value=parts[2]))
    return tuple(rules)


def compile_select_spec(
    raw: Optional[str],
    outer: str = RULE_SEPARATOR,
    inner: str = FIELD_SEPARATOR,
) -> tuple[SelectRule, ...]:
    return tuple(SelectRule.from_rule(r) for r in compile_rules(raw, outer, inner))


def compile_selectors(raw: Optional[str], sep: str = SELECTOR_SEPARATOR) -> SelectorSet:
    """Parse ``div#nav,footer,p.note`` into a sorted selector set."""
    if raw is None:
        return SelectorSet()
    return SelectorSet(tuple(s.strip().lower() for s in raw.split(sep) if s.strip()))


def build_filter_config(settings: FilterSettings) -> FilterConfig:
    """Compile every configured feature into one immutable ``FilterConfig``."""
    try:
        policy = parse_match_policy(settings.match_policy)
    except ConfigurationError as e:
        logger.error("match_policy_invalid", error=str(e), detail=e.info.detail)
        policy = MatchPolicy.FIRST_MATCH

    exclude_mode = ExcludeMode.DISABLED
    exclude_rules: tuple[Rule, ...] = ()
    if settings.nodes_exclude_mode or settings.nodes_exclude_list.strip():
        try:
            exclude_mode = parse_exclude_mode(settings.nodes_exclude_mode)
            exclude_rules = compile_rules(settings.nodes_exclude_list)
        except ConfigurationError as e:
            logger.error(
                "exclude_config_invalid",
                mode=settings.nodes_exclude_mode,
                rules=settings.nodes_exclude_list,
                error=str(e),
                detail=e.info.detail,
            )
            exclude_mode, exclude_rules = ExcludeMode.DISABLED, ()
        else:
            if exclude_mode is ExcludeMode.DISABLED or not exclude_rules:
                logger.warning(
                    "exclude_config_incomplete",
                    mode=settings.nodes_exclude_mode,
                    rules=settings.nodes_exclude_list,
                )
                exclude_mode, exclude_rules = ExcludeMode.DISABLED, ()
            else:
                logger.info("exclude_rules_configured", mode=exclude_mode.value, count=len(exclude_rules))

    select_spec: tuple[SelectRule, ...] = ()
    if settings.nodes_select_copy.strip():
        try:
            select_spec = compile_select_spec(settings.nodes_select_copy)
        except ConfigurationError as e:
            logger.error(
                "select_copy_config_invalid",
                rules=settings.nodes_select_copy,
                error=str(e),
                detail=e.info.detail,
            )
        else:
            logger.info(
                "select_copy_configured",
                fields=[s.field_name for s in select_spec],
            )

    blacklist = compile_selectors(settings.html_blacklist)
    whitelist = compile_selectors(settings.html_whitelist)
    if whitelist:
        logger.info("selector_whitelist_configured", selectors=list(whitelist.selectors))
    elif blacklist:
        logger.info("selector_blacklist_configured", selectors=list(blacklist.selectors))

    return FilterConfig(
        exclude_mode=exclude_mode,
        exclude_rules=exclude_rules,
        select_spec=select_spec,
        match_policy=policy,
        blacklist=blacklist,
        whitelist=whitelist,
        outlinks_ignore_tags=tuple(t.strip().lower() for t in settings.outlinks_ignore_tags if t.strip()),
        form_use_action=settings.form_use_action,
    )
