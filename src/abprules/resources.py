"""
Replacement resources for ``$rewrite=abp-resource:<name>`` filters.

A rewrite filter substitutes a matched request with one of these harmless
resources (empty scripts, transparent images, ...) instead of blocking it.
"""

from __future__ import annotations

# Data URLs served in place of the rewritten request
REWRITE_RESOURCES: dict[str, str] = {
    "blank-html": "about:blank",
    "blank-js": "data:application/javascript,",
    "blank-css": "data:text/css,",
    "blank-text": "data:text/plain,",
    "blank-mp3": (
        "data:audio/mpeg;base64,"
        "/+NIxAAAAAANIAAAAAExBTUUzLjEwMFVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVV"
        "VVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVV"
        "VVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVVQ=="
    ),
    # 1x1 transparent GIF
    "1x1-transparent-gif": (
        "data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7"
    ),
    # 2x2 transparent PNG
    "2x2-transparent-png": (
        "data:image/png;base64,"
        "iVBORw0KGgoAAAANSUhEUgAAAAIAAAACCAYAAABytg0kAAAAC0lEQVQI12NgAAIAAAUAAeImBZsAAAAASUVORK5CYII="
    ),
    # 3x2 transparent PNG
    "3x2-transparent-png": (
        "data:image/png;base64,"
        "iVBORw0KGgoAAAANSUhEUgAAAAMAAAACCAYAAACddGYaAAAAC0lEQVQI12NgAAIAAAUAAeImBZsAAAAASUVORK5CYII="
    ),
    # 32x32 transparent PNG
    "32x32-transparent-png": (
        "data:image/png;base64,"
        "iVBORw0KGgoAAAANSUhEUgAAACAAAAAgCAYAAABzenr0AAAAGklEQVRYR+3OAQEAAAQEMP7/1KhkUKsA7BkPCgCjAAACsEXLAAAAAElFTkSuQmCC"
    ),
    "tracking-pixel": (
        "data:image/gif;base64,R0lGODlhAQABAAAAACH5BAEKAAEALAAAAAABAAEAAAICTAEAOw=="
    ),
}

# Older names still found in filter lists
RESOURCE_ALIASES: dict[str, str] = {
    "blank-txt": "blank-text",
}


def get_rewrite_resource(name: str) -> str | None:
    """Get the replacement URL for a rewrite resource.

    Args:
        name: Resource name without the ``abp-resource:`` prefix.

    Returns:
        The replacement URL, or None if the resource is unknown.
    """
    name = RESOURCE_ALIASES.get(name, name)
    return REWRITE_RESOURCES.get(name)
