"""Unit tests for environment-driven Bouncer settings."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from bouncer.core.config import BouncerSettings
from bouncer.core.config import get_bouncer_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_bouncer_settings.cache_clear()
    yield
    get_bouncer_settings.cache_clear()


def test_defaults_match_create_and_patch_semantics(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BOUNCER_CREATE_METHODS", "BOUNCER_PATCH_METHODS", "BOUNCER_JSON_MARKER"):
        monkeypatch.delenv(name, raising=False)

    settings = get_bouncer_settings()

    assert settings == BouncerSettings()
    assert settings.create_methods == frozenset({"POST", "PUT"})
    assert settings.patch_methods == frozenset({"PATCH"})
    assert settings.body_methods == frozenset({"POST", "PUT", "PATCH"})
    assert settings.json_marker == "json"


def test_environment_overrides_are_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOUNCER_CREATE_METHODS", " post , ")
    monkeypatch.setenv("BOUNCER_PATCH_METHODS", "patch,put")
    monkeypatch.setenv("BOUNCER_JSON_MARKER", "application/json")

    settings = get_bouncer_settings()

    assert settings.create_methods == frozenset({"POST"})
    assert settings.patch_methods == frozenset({"PATCH", "PUT"})
    assert settings.json_marker == "application/json"


def test_safe_for_logging_is_sorted_and_serializable() -> None:
    assert BouncerSettings().safe_for_logging() == {
        "create_methods": ["POST", "PUT"],
        "patch_methods": ["PATCH"],
        "json_marker": "json",
    }
