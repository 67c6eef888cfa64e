"""
Parser for URL filter options.

Options follow the last ``$`` of a filter, e.g.
``||ads.com^$third-party,script,domain=example.com|~shop.example.com``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .content_types import RESOURCE_TYPES, ContentType, exclude_type, type_from_name
from .domains import parse_domains
from .errors import FilterError, FilterParsingError

logger = logging.getLogger(__name__)

# Right-anchored options clause: $key1,~key2,key3=value
OPTIONS_RE = re.compile(
    r"\$(~?[A-Za-z0-9_-]+(?:=[^,]*)?(?:,~?[A-Za-z0-9_-]+(?:=[^,]*)?)*)$"
)

# CSP directives a blocking filter must not inject
INVALID_CSP_RE = re.compile(
    r"(;|^) ?(base-uri|referrer|report-to|report-uri|upgrade-insecure-requests)\b",
    re.IGNORECASE,
)

_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]")

REWRITE_PREFIX = "abp-resource:"

# Shortest pattern allowed for a filter restricted by both domain and sitekey
MIN_GENERIC_URL_FILTER_PATTERN_LENGTH = 4


@dataclass(frozen=True)
class FilterOptions:
    """Normalized result of parsing a URL filter's text and options."""

    blocking: bool
    pattern: str
    content_type: ContentType = RESOURCE_TYPES
    match_case: bool = False
    domains: str = ""
    third_party: bool | None = None
    sitekeys: str = ""
    csp: str = ""
    header: str = ""
    rewrite: str = ""


def split_options(text: str) -> tuple[str, list[str]]:
    """Split filter text into its pattern and its raw option strings.

    Text without a well-formed trailing options clause is all pattern.
    """
    match = OPTIONS_RE.search(text) if "$" in text else None
    if match is None:
        return text, []
    return text[: match.start()], match.group(1).split(",")


def parse_options(text: str, *, strict: bool = False) -> FilterOptions:
    """Parse URL filter text (comments and content filters excluded).

    Args:
        text: The complete filter text, including any leading ``@@``.
        strict: Reject unknown options instead of ignoring them.

    Returns:
        FilterOptions describing the filter.

    Raises:
        FilterParsingError: If an option is malformed or the option
            combination is not allowed.
    """
    orig_text = text
    blocking = True
    if text.startswith("@@"):
        blocking = False
        text = text[2:]

    text, options = split_options(text)

    content_type: ContentType | None = None
    match_case = False
    domains = ""
    third_party: bool | None = None
    sitekeys = ""
    rewrite = ""
    csp: str | None = None
    header: str | None = None

    for option in options:
        value: str | None = None
        if "=" in option:
            option, value = option.split("=", 1)

        inverse = option.startswith("~")
        if inverse:
            option = option[1:]

        option_type = type_from_name(option)
        if option_type is not None:
            if inverse:
                if content_type is None:
                    content_type = RESOURCE_TYPES
                content_type = exclude_type(content_type, option_type)
            elif option_type == ContentType.CSP:
                if blocking and not value:
                    raise FilterParsingError(FilterError.INVALID_CSP, orig_text)
                csp = value or ""
            elif option_type == ContentType.HEADER:
                if blocking and not value:
                    raise FilterParsingError(FilterError.INVALID_HEADER, orig_text)
                header = value or ""
            else:
                if content_type is None:
                    content_type = ContentType(0)
                content_type |= option_type
            continue

        key = option.lower()
        if key == "match-case":
            match_case = not inverse
        elif key == "domain":
            if not value or not parse_domains(value, "|"):
                raise FilterParsingError(FilterError.UNKNOWN_OPTION, orig_text)
            domains = value
        elif key in ("third-party", "3p"):
            third_party = not inverse
        elif key in ("first-party", "1p"):
            third_party = inverse
        elif key == "sitekey":
            if not value:
                raise FilterParsingError(FilterError.UNKNOWN_OPTION, orig_text)
            sitekeys = value
        elif key == "rewrite":
            if not value:
                raise FilterParsingError(FilterError.UNKNOWN_OPTION, orig_text)
            if not value.startswith(REWRITE_PREFIX):
                raise FilterParsingError(FilterError.INVALID_REWRITE, orig_text)
            rewrite = value[len(REWRITE_PREFIX) :]
        elif strict:
            raise FilterParsingError(FilterError.UNKNOWN_OPTION, orig_text)
        else:
            logger.debug("Ignoring unknown option %r in filter: %s", option, orig_text)

    if csp is not None or header is not None:
        if content_type is None:
            content_type = RESOURCE_TYPES
        if csp is not None:
            content_type |= ContentType.CSP
        if header is not None:
            content_type |= ContentType.HEADER

    _check_specific_enough(text, domains, sitekeys, orig_text)

    if domains and _NON_ASCII_RE.search(domains):
        raise FilterParsingError(FilterError.INVALID_DOMAIN, orig_text)

    if blocking:
        if csp and INVALID_CSP_RE.search(csp):
            raise FilterParsingError(FilterError.INVALID_CSP, orig_text)
        if rewrite:
            _check_rewrite(text, domains, third_party, orig_text)

    return FilterOptions(
        blocking=blocking,
        pattern=text,
        content_type=RESOURCE_TYPES if content_type is None else content_type,
        match_case=match_case,
        domains=domains,
        third_party=third_party,
        sitekeys=sitekeys,
        csp=csp or "",
        header=header or "",
        rewrite=rewrite,
    )


def _check_specific_enough(pattern: str, domains: str, sitekeys: str, orig_text: str) -> None:
    """Reject short patterns on filters restricted by both domain and sitekey."""
    if not (domains and sitekeys):
        return

    min_length = MIN_GENERIC_URL_FILTER_PATTERN_LENGTH
    if pattern.startswith("|"):
        min_length += 1
        if pattern.startswith("||"):
            min_length += 1

    if len(pattern) < min_length and "*" not in pattern:
        raise FilterParsingError(FilterError.URL_NOT_SPECIFIC_ENOUGH, orig_text)


def _check_rewrite(
    pattern: str, domains: str, third_party: bool | None, orig_text: str
) -> None:
    """Only allow rewrites that cannot redirect arbitrary sites."""
    if pattern.startswith("||"):
        if not domains and third_party:
            raise FilterParsingError(FilterError.INVALID_REWRITE, orig_text)
    elif pattern.startswith("*"):
        if not domains:
            raise FilterParsingError(FilterError.INVALID_REWRITE, orig_text)
    else:
        raise FilterParsingError(FilterError.INVALID_REWRITE, orig_text)
