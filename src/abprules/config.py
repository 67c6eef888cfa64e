"""
Configuration and path management for abprules.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

logger = logging.getLogger(__name__)

# Environment variable overriding the unknown option policy
UNKNOWN_OPTIONS_ENV = "ABPRULES_UNKNOWN_OPTIONS"

UnknownOptionPolicy = Literal["ignore", "reject"]

_POLICIES = ("ignore", "reject")


@dataclass
class ParserConfig:
    """Filter parsing configuration."""

    # What to do with $options that aren't recognized
    unknown_options: UnknownOptionPolicy = "ignore"

    # Size of the filter cache used for list parsing, None = unbounded
    cache_size: int | None = None

    def __post_init__(self) -> None:
        if self.unknown_options not in _POLICIES:
            raise ValueError(
                f"unknown_options must be one of {_POLICIES}, got {self.unknown_options!r}"
            )

    @property
    def strict(self) -> bool:
        return self.unknown_options == "reject"

    @classmethod
    def load(cls, path: Path | None = None) -> ParserConfig:
        """Load configuration from file."""
        if path is None:
            path = get_config_dir() / "config.json"

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls(
            unknown_options=data.get("unknown_options", "ignore"),
            cache_size=data.get("cache_size"),
        )

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = get_config_dir() / "config.json"

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "unknown_options": self.unknown_options,
            "cache_size": self.cache_size,
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)


def get_config_dir() -> Path:
    """Get config directory following platform conventions."""
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

    return base / "abprules"


def resolve_unknown_options(config: ParserConfig | None = None) -> UnknownOptionPolicy:
    """Resolve the unknown option policy.

    Priority:
    1. ABPRULES_UNKNOWN_OPTIONS environment variable
    2. unknown_options from config
    3. "ignore"
    """
    if config is None:
        config = ParserConfig.load()

    env_value = os.environ.get(UNKNOWN_OPTIONS_ENV, "").strip().lower()
    if env_value in _POLICIES:
        return env_value  # type: ignore[return-value]
    if env_value:
        logger.warning("Ignoring invalid %s value: %s", UNKNOWN_OPTIONS_ENV, env_value)

    return config.unknown_options
