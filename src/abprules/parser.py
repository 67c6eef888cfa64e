"""
Filter syntax parser for Adblock Plus filter lists.

Turns a single line of filter text into a filter descriptor:

    ! comment                     CommentFilter
    example.com##.ad-banner       ContentFilter (element hiding)
    example.com#@#.ad-banner      ContentFilter (hiding exception)
    example.com#?#div:-abp-has()  ContentFilter (hiding emulation)
    example.com#$#log hello       ContentFilter (snippet)
    ||ads.com^$script             URLFilter (blocking)
    @@||ads.com^$document         URLFilter (allowing)
"""

from __future__ import annotations

import logging
import re

from .cache import FilterCache
from .domains import parse_domains
from .errors import FilterError, FilterParsingError
from .filters import (
    CommentFilter,
    ContentFilter,
    Filter,
    FilterType,
    InvalidFilter,
    URLFilter,
)
from .options import parse_options
from .patterns import Pattern

logger = logging.getLogger(__name__)

# <domains>#[@?$]#<body>
CONTENT_FILTER_RE = re.compile(r'^([^/|@"!]*?)#([@?$])?#(.+)$')

# Empty or bare "~" entry in a content filter domain list
_BAD_DOMAIN_LIST_RE = re.compile(r"(^|,)~?(,|$)")

# Some included entry looks like a real domain (has a dot after its first char)
_RESTRICTED_DOMAIN_RE = re.compile(r",[^~][^,.]*\.[^,]")

# Generic hiding filters with shorter bodies hide too much
MIN_GENERIC_CONTENT_FILTER_BODY_LENGTH = 3

_CONTENT_TYPE_BY_SEPARATOR = {
    "": FilterType.ELEMHIDE,
    "@": FilterType.ELEMHIDE_EXCEPTION,
    "?": FilterType.ELEMHIDE_EMULATION,
    "$": FilterType.SNIPPET,
}


def _match_content_filter(text: str) -> re.Match[str] | None:
    if "#" not in text:
        return None
    return CONTENT_FILTER_RE.fullmatch(text)


def parse_filter(
    text: str, *, cache: FilterCache | None = None, strict: bool = False
) -> Filter:
    """Parse a single line of filter text.

    Args:
        text: The filter text.
        cache: Optional memoization table; parsed filters are stored in and
            served from it.
        strict: Reject unknown ``$`` options instead of ignoring them.

    Returns:
        A CommentFilter, URLFilter or ContentFilter.

    Raises:
        FilterParsingError: If the text is not a valid filter.
    """
    if cache is not None:
        cached = cache.get(text)
        if cached is not None:
            return cached

    if not text:
        raise FilterParsingError(FilterError.EMPTY, text)

    parsed: Filter
    if text[0] == "!":
        parsed = CommentFilter(text)
    else:
        match = _match_content_filter(text)
        if match is not None:
            domains, separator, body = match.groups()
            parsed = parse_content_filter(text, domains, separator or "", body)
        else:
            parsed = parse_url_filter(text, strict=strict)

    if cache is not None:
        cache.put(text, parsed)
    return parsed


def classify_filter(
    text: str, *, cache: FilterCache | None = None, strict: bool = False
) -> Filter:
    """Parse a filter, returning an InvalidFilter instead of raising."""
    try:
        return parse_filter(text, cache=cache, strict=strict)
    except FilterParsingError as e:
        logger.debug("Invalid filter %r: %s", text, e.reason)
        return InvalidFilter(text, e.kind)


def parse_url_filter(text: str, *, strict: bool = False) -> URLFilter:
    """Parse a blocking or allowing URL filter.

    Raises:
        FilterParsingError: If the text is empty, is a comment or content
            filter, or has invalid options.
    """
    if not text:
        raise FilterParsingError(FilterError.EMPTY, text)
    if text[0] == "!" or _match_content_filter(text) is not None:
        raise FilterParsingError(FilterError.INVALID, text)

    options = parse_options(text, strict=strict)

    return URLFilter(
        text=text,
        kind=FilterType.BLOCKING if options.blocking else FilterType.ALLOWING,
        url_pattern=Pattern(options.pattern, options.match_case),
        content_type=options.content_type,
        third_party=options.third_party,
        domains=parse_domains(options.domains, "|"),
        domain_source=options.domains,
        sitekeys=tuple(options.sitekeys.split("|")) if options.sitekeys else None,
        csp=options.csp,
        header=options.header,
        rewrite=options.rewrite,
    )


def is_restricted_by_domain(domains: str) -> bool:
    """Check if a content filter domain list names at least one real domain."""
    return (
        _RESTRICTED_DOMAIN_RE.search("," + domains) is not None
        or ",localhost," in "," + domains + ","
    )


def parse_content_filter(text: str, domains: str, separator: str, body: str) -> ContentFilter:
    """Build a content filter from the parts of ``<domains>#<separator>#<body>``.

    Filters that would apply too broadly come back as INVALID_CONTENT:
    emulation and snippet filters need at least one real domain, and
    hiding filters without one need a body of 3 or more characters.
    """
    kind = _CONTENT_TYPE_BY_SEPARATOR[separator]

    if domains and _BAD_DOMAIN_LIST_RE.search(domains):
        kind = FilterType.INVALID_CONTENT
    else:
        restricted = is_restricted_by_domain(domains)
        if kind in (FilterType.ELEMHIDE_EMULATION, FilterType.SNIPPET):
            if not restricted:
                kind = FilterType.INVALID_CONTENT
        elif not restricted and len(body) < MIN_GENERIC_CONTENT_FILTER_BODY_LENGTH:
            kind = FilterType.INVALID_CONTENT

    if kind is FilterType.INVALID_CONTENT:
        logger.debug("Content filter is not restricted enough: %s", text)

    return ContentFilter(
        text=text,
        kind=kind,
        body=body,
        domains=parse_domains(domains, ","),
        domain_source=domains,
    )
