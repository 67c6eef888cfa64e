"""
URL pattern compilation and matching.

A pattern is either matched literally (substring / anchored comparisons) or
converted to a regular expression. Patterns that only use a leading ``||`` or
a trailing ``^`` stay literal, which covers the bulk of real filter lists.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .domains import URLRequest

logger = logging.getLogger(__name__)

# Characters matched by the ``^`` separator placeholder
SEPARATOR_CLASS = r"[\x00-\x24\x26-\x2C\x2F\x3A-\x40\x5B-\x5E\x60\x7B-\x7F]"
SEPARATOR_RE = re.compile(SEPARATOR_CLASS)

# Scheme plus optional subdomain labels, what ``||`` expands to
DOMAIN_ANCHOR_REGEXP = r"^[\w\-]+:\/+(?:[^\/]+\.)?"

KEYWORD_RE = re.compile(r"[^a-z0-9%*][a-z0-9%]{2,}(?=[^a-z0-9%*])")

_SPECIAL_CHARS_RE = re.compile(r"[*^|]")
_WILDCARDS_RE = re.compile(r"\*+")
_ESCAPE_RE = re.compile(r"[^\w\-*]", re.ASCII)


def filter_to_regexp(text: str) -> str:
    """Convert filter pattern text into a regular expression source."""
    text = _WILDCARDS_RE.sub("*", text)

    if text.startswith("*"):
        text = text[1:]
    if text.endswith("*"):
        text = text[:-1]

    # Anchor after a separator placeholder adds nothing
    if text.endswith("^|"):
        text = text[:-1]

    text = _ESCAPE_RE.sub(lambda m: "\\" + m.group(0), text)
    text = text.replace("*", ".*")
    text = text.replace(r"\^", f"(?:{SEPARATOR_CLASS}|$)")

    if text.startswith(r"\|\|"):
        text = DOMAIN_ANCHOR_REGEXP + text[4:]
    elif text.startswith(r"\|"):
        text = "^" + text[2:]

    if text.endswith(r"\|"):
        text = text[:-2] + "$"

    return text


def compile_regexp(source: str, match_case: bool) -> re.Pattern[str] | None:
    """Compile a pattern regexp.

    Returns None when the source is not a valid expression; the caller then
    falls back to matching the pattern text literally.
    """
    flags = 0 if match_case else re.IGNORECASE
    try:
        return re.compile(source, flags)
    except re.error as e:
        logger.debug("Falling back to literal pattern for %r: %s", source, e)
        return None


def is_literal_pattern(text: str) -> bool:
    """Check if a pattern can be matched without a regexp."""
    if not _SPECIAL_CHARS_RE.search(text):
        return True
    if text.startswith("||") and not _SPECIAL_CHARS_RE.search(text[2:]):
        return True
    return text.endswith("^") and not _SPECIAL_CHARS_RE.search(text[:-1])


@dataclass(frozen=True)
class Pattern:
    """URL pattern of a filter."""

    pattern: str
    match_case: bool = False

    is_literal: bool = field(init=False)
    regexp_source: str = field(init=False)
    regexp: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regexp = None
        source = self.pattern
        literal = is_literal_pattern(self.pattern)

        if not literal:
            regexp = compile_regexp(filter_to_regexp(self.pattern), self.match_case)
            if regexp is None:
                literal = True
            else:
                source = regexp.pattern

        object.__setattr__(self, "is_literal", literal)
        object.__setattr__(self, "regexp_source", source)
        object.__setattr__(self, "regexp", regexp)

    def matches_location(self, request: URLRequest) -> bool:
        """Check whether the request location matches this pattern."""
        location = request.location if self.match_case else request.location_lower

        if self.regexp is not None:
            return self.regexp.search(location) is not None

        return self._matches_literal(location)

    def _matches_literal(self, location: str) -> bool:
        text = self.pattern if self.match_case else self.pattern.lower()

        if text.startswith("||"):
            text = text[2:]
            pos = location.find(text)
            if pos == -1:
                return False
            # Must start at a domain boundary
            return pos == 0 or location.endswith("://", 0, pos) or location[pos - 1] == "."

        if text.startswith("|"):
            return location.startswith(text[1:])

        if text.endswith("|"):
            return location.endswith(text[:-1])

        if text.endswith("^"):
            text = text[:-1]
            pos = location.find(text)
            if pos == -1:
                return False
            end = pos + len(text)
            if end >= len(location):
                return True
            return SEPARATOR_RE.match(location[end]) is not None

        return text in location

    def has_keywords(self) -> bool:
        """Check whether the pattern contains any keyword."""
        return KEYWORD_RE.search(self.pattern.lower()) is not None

    def keyword_candidates(self) -> list[str]:
        """Find all keywords that could be used to index this pattern.

        Every URL this pattern matches contains at least one of the returned
        keywords, as long as the list is not empty.
        """
        text = self.pattern.lower()
        candidates: list[str] = []
        for match in KEYWORD_RE.finditer(text):
            keyword = match.group(0)[1:]
            if keyword not in candidates:
                candidates.append(keyword)
        return candidates
