"""
Parsing of whole filter lists.

Lines are parsed one by one; a bad line never stops the rest of the list from
loading; it is kept as an InvalidFilter so callers can report it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .cache import FilterCache
from .config import ParserConfig, resolve_unknown_options
from .filters import (
    CommentFilter,
    ContentFilter,
    Filter,
    FilterType,
    InvalidFilter,
    URLFilter,
)
from .parser import classify_filter

logger = logging.getLogger(__name__)

# [Adblock Plus 2.0] style list headers
LIST_HEADER_RE = re.compile(r"^\[(?:Adblock|uBlock|AdGuard)[^\]]*\]$", re.IGNORECASE)


@dataclass
class ParsedFilters:
    """Collection of parsed filters."""

    blocking_filters: list[URLFilter] = field(default_factory=list)
    allowing_filters: list[URLFilter] = field(default_factory=list)
    content_filters: list[ContentFilter] = field(default_factory=list)
    comments: list[CommentFilter] = field(default_factory=list)
    invalid_filters: list[Filter] = field(default_factory=list)

    def add(self, parsed: Filter) -> None:
        """Put a parsed filter into its bucket."""
        if isinstance(parsed, URLFilter):
            if parsed.blocking:
                self.blocking_filters.append(parsed)
            else:
                self.allowing_filters.append(parsed)
        elif isinstance(parsed, ContentFilter):
            if parsed.kind is FilterType.INVALID_CONTENT:
                self.invalid_filters.append(parsed)
            else:
                self.content_filters.append(parsed)
        elif isinstance(parsed, CommentFilter):
            self.comments.append(parsed)
        elif isinstance(parsed, InvalidFilter):
            self.invalid_filters.append(parsed)
        else:
            raise TypeError(f"Unexpected filter: {parsed!r}")

    def extend(self, other: ParsedFilters) -> None:
        self.blocking_filters.extend(other.blocking_filters)
        self.allowing_filters.extend(other.allowing_filters)
        self.content_filters.extend(other.content_filters)
        self.comments.extend(other.comments)
        self.invalid_filters.extend(other.invalid_filters)

    @property
    def url_filters(self) -> list[URLFilter]:
        return self.blocking_filters + self.allowing_filters


def parse_filter_list(
    content: str,
    *,
    config: ParserConfig | None = None,
    cache: FilterCache | None = None,
) -> ParsedFilters:
    """Parse a filter list and return categorized filters.

    Args:
        content: The list text, one filter per line.
        config: Parser configuration. Defaults to ParserConfig().
        cache: Filter cache shared between lists. A cache sized from the
            config is created when omitted.

    Returns:
        ParsedFilters with every non-blank line in exactly one bucket.
    """
    if config is None:
        config = ParserConfig()
    if cache is None:
        cache = FilterCache(config.cache_size)
    strict = resolve_unknown_options(config) == "reject"

    result = ParsedFilters()

    for line in content.splitlines():
        line = line.strip()

        # Skip empty lines and list headers
        if not line or LIST_HEADER_RE.match(line):
            continue

        result.add(classify_filter(line, cache=cache, strict=strict))

    logger.debug(
        "Parsed filters: %d blocking, %d allowing, %d content, %d invalid",
        len(result.blocking_filters),
        len(result.allowing_filters),
        len(result.content_filters),
        len(result.invalid_filters),
    )

    return result


def parse_all_filter_lists(
    lists: dict[str, str], *, config: ParserConfig | None = None
) -> ParsedFilters:
    """Parse multiple filter lists and merge results."""
    result = ParsedFilters()
    cache = FilterCache(config.cache_size if config else None)

    for name, content in lists.items():
        logger.debug("Parsing filter list: %s", name)
        result.extend(parse_filter_list(content, config=config, cache=cache))

    return result
