from __future__ import annotations

import logging
import os
from dataclasses import dataclass


DEFAULT_NAVIGATION_SENTINEL = "ACTION_REDIRECT"


@dataclass(frozen=True, slots=True)
class ActionSettings:
    navigation_sentinel: str
    log_level: str


def settings_from_env() -> ActionSettings:
    return ActionSettings(
        navigation_sentinel=os.environ.get("ACTIONKIT_NAVIGATION_SENTINEL") or DEFAULT_NAVIGATION_SENTINEL,
        log_level=os.environ.get("ACTIONKIT_LOG_LEVEL", "INFO").upper(),
    )


_SETTINGS: ActionSettings | None = None


def get_settings() -> ActionSettings:
    """Read settings from the environment once and cache them."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = settings_from_env()
    return _SETTINGS


def reset_settings_for_tests() -> None:
    """Drop the cached settings so tests can change the environment."""

    global _SETTINGS
    _SETTINGS = None


def configure_logging(settings: ActionSettings | None = None) -> None:
    s = settings or get_settings()
    level = logging.getLevelName(s.log_level)
    # getLevelName returns "Level X" for unknown names.
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {s.log_level}")
    logging.basicConfig(level=level)
