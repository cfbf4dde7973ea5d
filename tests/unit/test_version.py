"""Tests for resolving the NairaTax release version."""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

import pytest

from nairatax.backend import version
from nairatax.backend.version import get_project_version


@pytest.fixture(autouse=True)
def fresh_version_cache():
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    yield
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_installed_distribution_version_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    requested: list[str] = []

    def fake_version(package: str) -> str:
        requested.append(package)
        return "9.9.9"

    monkeypatch.setattr(metadata, "version", fake_version)

    assert get_project_version() == "9.9.9"
    assert requested == ["nairatax"]


def test_source_checkout_reads_pyproject(monkeypatch: pytest.MonkeyPatch) -> None:
    with version.PYPROJECT_PATH.open("rb") as handle:
        expected = tomllib.load(handle)["project"]["version"]

    def not_installed(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", not_installed)

    assert get_project_version() == expected


def test_pyproject_without_version_is_an_error(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "nairatax"\n', encoding="utf-8")

    with pytest.raises(RuntimeError, match="Unable to determine project version"):
        version._read_version_from_pyproject(pyproject)
