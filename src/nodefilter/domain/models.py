"""Framework-agnostic domain models."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class ExcludeMode(str, Enum):
    DISABLED = "disabled"
    BLACKLIST = "blacklist"
    WHITELIST = "whitelist"


class MatchPolicy(str, Enum):
    FIRST_MATCH = "first_match"
    ALL_MATCHES = "all_matches"


class ParseStatusCode(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Rule:
    """A ``tag;attribute;value`` triple, matched case-insensitively."""

    tag: str
    attribute: str
    value: str

    def __str__(self) -> str:
        return f"{self.tag};{self.attribute};{self.value}"


@dataclass(frozen=True)
class SelectRule:
    rule: Rule
    field_name: str

    @classmethod
    def from_rule(cls, rule: Rule) -> "SelectRule":
        return cls(rule=rule, field_name=f"{rule.tag}_{rule.attribute}_{rule.value}")


@dataclass(frozen=True)
class SelectorSet:
    """Sorted lowercase ``type``, ``type#id`` and ``type.class`` tokens."""

    selectors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "selectors", tuple(sorted(self.selectors)))

    def __bool__(self) -> bool:
        return bool(self.selectors)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        i = bisect.bisect_left(self.selectors, key)
        return i < len(self.selectors) and self.selectors[i] == key


@dataclass(frozen=True)
class LinkParam:
    """Element/attribute pair that carries an outlink target."""

    tag: str
    attribute: str


@dataclass(frozen=True)
class FilterConfig:
    """Compiled, immutable filter configuration shared by every document."""

    exclude_mode: ExcludeMode = ExcludeMode.DISABLED
    exclude_rules: tuple[Rule, ...] = ()
    select_spec: tuple[SelectRule, ...] = ()
    match_policy: MatchPolicy = MatchPolicy.FIRST_MATCH
    blacklist: SelectorSet = field(default_factory=SelectorSet)
    whitelist: SelectorSet = field(default_factory=SelectorSet)
    outlinks_ignore_tags: tuple[str, ...] = ()
    form_use_action: bool = False

    @property
    def exclude_enabled(self) -> bool:
        return self.exclude_mode is not ExcludeMode.DISABLED and bool(self.exclude_rules)

    @property
    def select_enabled(self) -> bool:
        return bool(self.select_spec)


@dataclass(frozen=True)
class Outlink:
    url: str
    anchor: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FilterResult:
    text: str
    outlinks: tuple[Outlink, ...] = ()
    # Only fields whose rule matched a node are present.
    fields: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ParseStatus:
    code: ParseStatusCode = ParseStatusCode.SUCCESS
    message: str = ""
    error: Optional[BaseException] = None

    @property
    def success(self) -> bool:
        return self.code is ParseStatusCode.SUCCESS


@dataclass(frozen=True)
class ParseRecord:
    """Parse output for one document as handed between pipeline stages."""

    url: str
    text: str = ""
    title: str = ""
    outlinks: tuple[Outlink, ...] = ()
    status: ParseStatus = field(default_factory=ParseStatus)
    content_meta: Mapping[str, Any] = field(default_factory=dict)
    parse_meta: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MetaDirectives:
    no_index: bool = False
    no_follow: bool = False


@dataclass(frozen=True)
class ParsedDocument:
    """A parsed document: its tree, base URL, robots directives and record."""

    url: str
    base_url: str
    root: Any
    parse: ParseRecord
    directives: MetaDirectives = field(default_factory=MetaDirectives)
