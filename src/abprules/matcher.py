"""
Matching of single filters against requests.

Matching is a pure function of filter and request. Indexing large filter sets
and counting hits are left to the caller (see ``abprules.hits``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .content_types import CONTEXT_TYPES, ContentType
from .domains import get_domain_suffixes, is_third_party

if TYPE_CHECKING:
    from .domains import URLRequest
    from .filters import ActiveFilter, URLFilter


def is_active_on_domain(
    f: ActiveFilter, doc_domain: str | None, sitekey: str | None = None
) -> bool:
    """Check whether a filter is active on a document domain.

    The most specific domain in the filter's domain list decides, so
    ``domain=example.com|~shop.example.com`` is active on www.example.com
    but not on shop.example.com. When no domain entry decides and the document
    provides a sitekey, the filter's sitekey list decides.

    Args:
        f: The filter to check.
        doc_domain: Domain of the document making the request, if known.
        sitekey: Public key provided by the document, if any.

    Returns:
        True if the filter applies.
    """
    if not f.domains and f.sitekeys is None:
        return True

    if doc_domain and f.domains:
        for suffix in get_domain_suffixes(doc_domain):
            include = f.domains.get(suffix)
            if include is not None:
                return include

    if sitekey is not None and f.sitekeys is not None:
        return sitekey in f.sitekeys

    return not f.domains


def is_active_only_on_domain(f: ActiveFilter, doc_domain: str) -> bool:
    """Check whether a filter is restricted to doc_domain and its subdomains."""
    if not f.domains:
        return False

    for suffix in get_domain_suffixes(doc_domain):
        include = f.domains.get(suffix)
        if include is not None:
            return include

    return False


def is_generic(f: ActiveFilter) -> bool:
    """Check whether a filter applies regardless of domain and sitekey."""
    return not f.domains and f.sitekeys is None


def url_filter_matches(
    f: URLFilter,
    request: URLRequest,
    type_mask: ContentType,
    sitekey: str | None = None,
) -> bool:
    """Check if a URL filter matches a request.

    Args:
        f: The filter to test.
        request: The request.
        type_mask: Content type(s) of the request.
        sitekey: Public key provided by the document, if any.

    Returns:
        True if the filter applies to the request.
    """
    # Context types (csp) don't select filters on their own
    resource_mask = int(type_mask) & ~int(CONTEXT_TYPES)
    if not resource_mask & int(f.content_type):
        return False

    if not is_active_on_domain(f, request.document_domain, sitekey):
        return False

    if f.third_party is not None and request.document_domain is not None:
        if is_third_party(request.location, request.document_domain) != f.third_party:
            return False

    return f.url_pattern.matches_location(request)
