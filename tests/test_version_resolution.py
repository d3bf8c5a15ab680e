"""Version resolution regression tests."""

from __future__ import annotations

from pathlib import Path

import domain_intel


def test_source_checkout_prefers_source_version() -> None:
    assert domain_intel._is_source_checkout(Path(domain_intel.__file__))
    assert domain_intel.__version__ == "0.3.0"


def test_resolve_version_uses_metadata_outside_source_checkout(monkeypatch) -> None:
    monkeypatch.setattr(domain_intel, "_is_source_checkout", lambda _path: False)
    monkeypatch.setattr(domain_intel, "version", lambda _name: "9.9.9")

    assert domain_intel._resolve_version() == "9.9.9"


def test_resolve_version_falls_back_when_metadata_missing(monkeypatch) -> None:
    monkeypatch.setattr(domain_intel, "_is_source_checkout", lambda _path: False)

    def _raise(_name: str) -> str:
        raise domain_intel.PackageNotFoundError

    monkeypatch.setattr(domain_intel, "version", _raise)

    assert domain_intel._resolve_version() == "0.3.0"
