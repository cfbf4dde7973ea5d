"""Utilities for exposing the project version consistently."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "nairatax"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the packaged version, falling back to ``pyproject.toml`` when needed."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject(PYPROJECT_PATH)


def _read_version_from_pyproject(path: Path) -> str:
    """Return ``project.version`` from the given ``pyproject.toml``."""

    if not path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    with path.open("rb") as handle:
        data = tomllib.load(handle)

    version = data.get("project", {}).get("version")
    if not isinstance(version, str) or not version.strip():
        raise RuntimeError("Unable to determine project version from pyproject.toml")
    return version.strip()


__all__ = ["get_project_version"]
