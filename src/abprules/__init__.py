"""
Adblock Plus filter parsing and matching.

Parses filter list rules into immutable descriptors and matches network
requests against them.
"""

from .cache import FilterCache
from .content_types import CONTEXT_TYPES, RESOURCE_TYPES, SPECIAL_TYPES, ContentType
from .domains import URLRequest, extract_domain, get_domain_suffixes, is_third_party
from .errors import FilterError, FilterParsingError
from .filters import (
    CommentFilter,
    ContentFilter,
    Filter,
    FilterType,
    InvalidFilter,
    URLFilter,
)
from .hits import HitCounter, HitStats
from .lists import ParsedFilters, parse_filter_list
from .parser import classify_filter, parse_filter, parse_url_filter
from .patterns import Pattern

__all__ = [
    "CONTEXT_TYPES",
    "RESOURCE_TYPES",
    "SPECIAL_TYPES",
    "CommentFilter",
    "ContentFilter",
    "ContentType",
    "Filter",
    "FilterCache",
    "FilterError",
    "FilterParsingError",
    "FilterType",
    "HitCounter",
    "HitStats",
    "InvalidFilter",
    "ParsedFilters",
    "Pattern",
    "URLFilter",
    "URLRequest",
    "classify_filter",
    "extract_domain",
    "get_domain_suffixes",
    "is_third_party",
    "parse_filter",
    "parse_filter_list",
    "parse_url_filter",
]
