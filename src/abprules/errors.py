"""
Filter parsing errors.
"""

from __future__ import annotations

from enum import Enum


class FilterError(Enum):
    """Reason a filter text was rejected."""

    EMPTY = "filter_empty"
    INVALID = "filter_invalid"
    INVALID_CSP = "filter_invalid_csp"
    INVALID_HEADER = "filter_invalid_header"
    UNKNOWN_OPTION = "filter_unknown_option"
    INVALID_REWRITE = "filter_invalid_rewrite"
    URL_NOT_SPECIFIC_ENOUGH = "filter_url_not_specific_enough"
    INVALID_DOMAIN = "filter_invalid_domain"


class FilterParsingError(Exception):
    """Filter text could not be turned into a filter."""

    def __init__(self, kind: FilterError, text: str) -> None:
        super().__init__(f"{kind.value}: {text!r}")
        self.kind = kind
        self.text = text

    @property
    def reason(self) -> str:
        return self.kind.value
