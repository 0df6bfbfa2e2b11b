from __future__ import annotations

import pytest

from ga4_adapter.config import Settings


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GA4_PROPERTY_ID", "987")
    monkeypatch.setenv("GA4_DOMAIN", "blog.example.org")
    monkeypatch.setenv("GA4_CREDENTIALS_FILE", "/tmp/key.json")

    s = Settings(_env_file=None)

    assert s.is_configured is True
    assert s.scope.dimension == "hostName"
    assert s.scope.value == "blog.example.org"
    assert s.scope.leaf().predicate.value == "blog.example.org"


def test_settings_incomplete(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GA4_PROPERTY_ID", "GA4_DOMAIN", "GA4_CREDENTIALS_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GA4_SCOPING_DIMENSION", "fullPageUrl")

    s = Settings(_env_file=None)

    assert s.is_configured is False
    assert s.scope.dimension == "fullPageUrl"
