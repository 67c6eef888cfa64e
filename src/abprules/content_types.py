"""
Content type bit flags for network filters.

The low 24 bits are resource types (script, image, ...). Higher bits are
special types that only some filters carry, such as ``$csp`` or the
exception-only ``$document`` and ``$elemhide`` flags.
"""

from __future__ import annotations

from enum import IntFlag


class ContentType(IntFlag):
    """Types of requests and filter contexts."""

    # Resource types
    OTHER = 1
    SCRIPT = 2
    IMAGE = 4
    STYLESHEET = 8
    OBJECT = 16
    SUBDOCUMENT = 32
    WEBSOCKET = 128
    WEBRTC = 256
    PING = 1024
    XMLHTTPREQUEST = 2048
    MEDIA = 16384
    FONT = 32768

    # Special filter options
    POPUP = 1 << 24
    CSP = 1 << 25
    HEADER = 1 << 26

    # Allowing flags
    DOCUMENT = 1 << 27
    GENERICBLOCK = 1 << 28
    ELEMHIDE = 1 << 29
    GENERICHIDE = 1 << 30


# A filter without an explicit type applies to every resource type but to
# none of the special types.
RESOURCE_TYPES = ContentType((1 << 24) - 1)

SPECIAL_TYPES = ContentType(((1 << 31) - 1) ^ RESOURCE_TYPES)

ALLOWING_TYPES = (
    ContentType.DOCUMENT
    | ContentType.GENERICBLOCK
    | ContentType.ELEMHIDE
    | ContentType.GENERICHIDE
)

# Types that describe the request context rather than the resource itself.
CONTEXT_TYPES = ContentType.CSP

NO_TYPES = ContentType(0)

# Option names accepted in addition to the member names
TYPE_ALIASES = {
    "XHR": ContentType.XMLHTTPREQUEST,
    "BACKGROUND": ContentType.IMAGE,
    "OBJECT_SUBREQUEST": ContentType.OBJECT,
}

# Map browser resource types (Playwright / webRequest) to content types
RESOURCE_TYPE_MAP = {
    "document": ContentType.DOCUMENT,
    "main_frame": ContentType.DOCUMENT,
    "sub_frame": ContentType.SUBDOCUMENT,
    "subdocument": ContentType.SUBDOCUMENT,
    "stylesheet": ContentType.STYLESHEET,
    "image": ContentType.IMAGE,
    "imageset": ContentType.IMAGE,
    "media": ContentType.MEDIA,
    "font": ContentType.FONT,
    "script": ContentType.SCRIPT,
    "object": ContentType.OBJECT,
    "xhr": ContentType.XMLHTTPREQUEST,
    "xmlhttprequest": ContentType.XMLHTTPREQUEST,
    "fetch": ContentType.XMLHTTPREQUEST,
    "websocket": ContentType.WEBSOCKET,
    "ping": ContentType.PING,
    "beacon": ContentType.PING,
    "texttrack": ContentType.OTHER,
    "eventsource": ContentType.OTHER,
    "manifest": ContentType.OTHER,
    "other": ContentType.OTHER,
}


def type_from_name(name: str) -> ContentType | None:
    """Look up a single content type by option name.

    Matching ignores case and treats ``-`` and ``_`` alike, so ``XMLHttpRequest``,
    ``xmlhttprequest`` and ``object-subrequest`` all resolve.

    Returns:
        The content type, or None if the name is unknown.
    """
    key = name.upper().replace("-", "_")
    if key in TYPE_ALIASES:
        return TYPE_ALIASES[key]
    return ContentType.__members__.get(key)


def name_from_type(content_type: ContentType) -> str:
    """Get the option name of a single content type, e.g. ``"image"``."""
    for name, member in ContentType.__members__.items():
        if member == content_type:
            return name.lower()
    raise ValueError(f"Not a single content type: {int(content_type)}")


def type_from_resource_type(resource_type: str) -> ContentType:
    """Map a browser resource type string to a content type."""
    return RESOURCE_TYPE_MAP.get(resource_type.lower(), ContentType.OTHER)


def has_type(mask: ContentType, content_type: ContentType) -> bool:
    """Check whether any bit of content_type is set in mask."""
    return (mask & content_type) != 0


def exclude_type(mask: ContentType, content_type: ContentType) -> ContentType:
    """Remove a type from a mask the way a negated option does.

    Only resource bits are cleared, special bits are left untouched.
    """
    return ContentType(int(mask) & ~int(content_type & RESOURCE_TYPES))
