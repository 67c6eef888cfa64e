"""
Domain helpers and the request model used for matching.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class URLRequest:
    """A network request as seen by URL filters."""

    location: str
    document_domain: str | None = None
    location_lower: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "location_lower", self.location.lower())

    @classmethod
    def from_urls(cls, url: str, document_url: str | None = None) -> URLRequest:
        """Create a request for url issued by the page at document_url."""
        document_domain = extract_domain(document_url) if document_url else None
        return cls(url, document_domain or None)


def extract_domain(url: str) -> str:
    """Extract the lowercase host from a URL.

    User info and port are dropped. Returns an empty string when the URL has
    no host or cannot be parsed.
    """
    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        logger.debug("Cannot parse URL: %s", url[:80])
        return ""
    return hostname or ""


def get_domain_suffixes(domain: str) -> list[str]:
    """Get a domain and all of its parent domains.

    For 'sub.example.com', returns ['sub.example.com', 'example.com', 'com'].
    """
    domain = domain.lower()
    suffixes = []
    while "." in domain:
        suffixes.append(domain)
        domain = domain[domain.index(".") + 1 :]
    suffixes.append(domain)
    return suffixes


def is_third_party(url: str, document_domain: str) -> bool:
    """Check if a request to url is third-party for a page on document_domain.

    Requests to the same domain, a parent domain or a subdomain are
    first-party. URLs without a usable host count as third-party.
    """
    domain = extract_domain(url)
    document_domain = document_domain.lower()

    if not domain:
        return True

    if domain == document_domain:
        return False

    return not document_domain.endswith("." + domain) and not domain.endswith(
        "." + document_domain
    )


def parse_domains(domains: str, separator: str) -> dict[str, bool]:
    """Parse a domain list into a map of domain -> include (True) / exclude (False)."""
    result: dict[str, bool] = {}

    for domain in domains.split(separator):
        if not domain:
            continue
        include = True
        if domain.startswith("~"):
            include = False
            domain = domain[1:]
        if not domain:
            continue
        result[domain.lower()] = include

    return result
