"""Bouncer configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_CREATE_METHODS = ("POST", "PUT")
DEFAULT_PATCH_METHODS = ("PATCH",)
DEFAULT_JSON_MARKER = "json"


def _get_methods_env(name: str, default: tuple[str, ...]) -> frozenset[str]:
    raw = os.getenv(name)
    if raw is None:
        return frozenset(default)
    return frozenset(part.strip().upper() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class BouncerSettings:
    """Runtime settings for request binding and validation."""

    create_methods: frozenset[str] = frozenset(DEFAULT_CREATE_METHODS)
    patch_methods: frozenset[str] = frozenset(DEFAULT_PATCH_METHODS)
    json_marker: str = DEFAULT_JSON_MARKER

    @property
    def body_methods(self) -> frozenset[str]:
        """Methods whose requests are always eligible for body validation."""
        return self.create_methods | self.patch_methods

    def safe_for_logging(self) -> dict[str, str | list[str]]:
        """Return settings in a log-friendly form."""
        return {
            "create_methods": sorted(self.create_methods),
            "patch_methods": sorted(self.patch_methods),
            "json_marker": self.json_marker,
        }


@lru_cache(maxsize=1)
def get_bouncer_settings() -> BouncerSettings:
    """Load Bouncer settings from the environment."""
    return BouncerSettings(
        create_methods=_get_methods_env("BOUNCER_CREATE_METHODS", DEFAULT_CREATE_METHODS),
        patch_methods=_get_methods_env("BOUNCER_PATCH_METHODS", DEFAULT_PATCH_METHODS),
        json_marker=os.getenv("BOUNCER_JSON_MARKER", DEFAULT_JSON_MARKER),
    )
