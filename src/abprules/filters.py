"""
Parsed filter descriptors.

Every filter text turns into exactly one of the variants below. All variants
are frozen dataclasses tagged with a FilterType, so callers can dispatch on
``filter.kind`` or with isinstance checks:

    CommentFilter    ``! comment``
    InvalidFilter    rejected text, with the reason
    URLFilter        blocking (``||ads.com^``) or allowing (``@@||ads.com^``)
    ContentFilter    element hiding (``##``), exceptions (``#@#``),
                     emulation (``#?#``), snippets (``#$#``) or invalid ones
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from . import matcher
from .content_types import RESOURCE_TYPES, ContentType
from .domains import URLRequest
from .errors import FilterError
from .patterns import Pattern
from .resources import get_rewrite_resource


class FilterType(Enum):
    """Type of filter rule."""

    COMMENT = "comment"
    INVALID = "invalid"
    BLOCKING = "blocking"
    ALLOWING = "allowing"
    ELEMHIDE = "elemhide"
    ELEMHIDE_EXCEPTION = "elemhideexception"
    ELEMHIDE_EMULATION = "elemhideemulation"
    SNIPPET = "snippet"
    INVALID_CONTENT = "invalid_content"


URL_FILTER_TYPES = frozenset({FilterType.BLOCKING, FilterType.ALLOWING})

CONTENT_FILTER_TYPES = frozenset(
    {
        FilterType.ELEMHIDE,
        FilterType.ELEMHIDE_EXCEPTION,
        FilterType.ELEMHIDE_EMULATION,
        FilterType.SNIPPET,
        FilterType.INVALID_CONTENT,
    }
)


def _frozen_domains(domains: Mapping[str, bool] | None = None) -> Mapping[str, bool]:
    return MappingProxyType(dict(domains or {}))


@dataclass(frozen=True)
class CommentFilter:
    """A ``!`` comment line."""

    text: str
    kind: FilterType = field(default=FilterType.COMMENT, init=False)


@dataclass(frozen=True)
class InvalidFilter:
    """Filter text that was rejected while parsing."""

    text: str
    reason: FilterError
    kind: FilterType = field(default=FilterType.INVALID, init=False)


@dataclass(frozen=True)
class URLFilter:
    """Network filter deciding whether a request is blocked or allowed."""

    text: str
    kind: FilterType
    url_pattern: Pattern
    content_type: ContentType = RESOURCE_TYPES
    third_party: bool | None = None  # None: applies to both
    domains: Mapping[str, bool] = field(default_factory=_frozen_domains)
    domain_source: str = ""
    sitekeys: tuple[str, ...] | None = None
    csp: str = ""
    header: str = ""
    rewrite: str = ""

    def __post_init__(self) -> None:
        if self.kind not in URL_FILTER_TYPES:
            raise ValueError(f"Not a URL filter type: {self.kind}")
        object.__setattr__(self, "domains", _frozen_domains(self.domains))

    @property
    def blocking(self) -> bool:
        return self.kind is FilterType.BLOCKING

    @property
    def pattern(self) -> str:
        return self.url_pattern.pattern

    @property
    def match_case(self) -> bool:
        return self.url_pattern.match_case

    @property
    def regexp(self) -> re.Pattern[str] | None:
        return self.url_pattern.regexp

    @property
    def requires_privileged_subscription(self) -> bool:
        """Header filters may only come from privileged subscriptions."""
        return bool(self.content_type & ContentType.HEADER)

    def matches(
        self, request: URLRequest, type_mask: ContentType, sitekey: str | None = None
    ) -> bool:
        """Check whether this filter applies to the request."""
        return matcher.url_filter_matches(self, request, type_mask, sitekey)

    def is_active_on_domain(self, doc_domain: str | None, sitekey: str | None = None) -> bool:
        return matcher.is_active_on_domain(self, doc_domain, sitekey)

    def is_active_only_on_domain(self, doc_domain: str) -> bool:
        return matcher.is_active_only_on_domain(self, doc_domain)

    def is_generic(self) -> bool:
        return matcher.is_generic(self)

    def rewrite_url(self, url: str) -> str:
        """Get the URL to load instead of url for ``$rewrite`` filters.

        Returns url unchanged if the filter has no known rewrite resource.
        """
        if not self.rewrite:
            return url
        return get_rewrite_resource(self.rewrite) or url


@dataclass(frozen=True)
class ContentFilter:
    """Content filter applied inside the page.

    The body is opaque here: a CSS selector for hiding filters, an extended
    selector for emulation filters, or a snippet script.
    """

    text: str
    kind: FilterType
    body: str
    domains: Mapping[str, bool] = field(default_factory=_frozen_domains)
    domain_source: str = ""
    sitekeys: tuple[str, ...] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.kind not in CONTENT_FILTER_TYPES:
            raise ValueError(f"Not a content filter type: {self.kind}")
        object.__setattr__(self, "domains", _frozen_domains(self.domains))

    @property
    def selector(self) -> str | None:
        if self.kind in (
            FilterType.ELEMHIDE,
            FilterType.ELEMHIDE_EXCEPTION,
            FilterType.ELEMHIDE_EMULATION,
        ):
            return self.body
        return None

    @property
    def script(self) -> str | None:
        return self.body if self.kind is FilterType.SNIPPET else None

    @property
    def requires_privileged_subscription(self) -> bool:
        return self.kind is FilterType.SNIPPET

    def is_active_on_domain(self, doc_domain: str | None, sitekey: str | None = None) -> bool:
        return matcher.is_active_on_domain(self, doc_domain, sitekey)

    def is_active_only_on_domain(self, doc_domain: str) -> bool:
        return matcher.is_active_only_on_domain(self, doc_domain)

    def is_generic(self) -> bool:
        return matcher.is_generic(self)


Filter = CommentFilter | InvalidFilter | URLFilter | ContentFilter

ActiveFilter = URLFilter | ContentFilter


def is_active_filter(f: Filter) -> bool:
    """Check whether a filter carries domain restrictions and can get hits."""
    return isinstance(f, (URLFilter, ContentFilter))
