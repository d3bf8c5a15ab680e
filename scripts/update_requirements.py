"""Regenerate requirements files from the dependency lists in pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path

HEADER = "# Generated from pyproject.toml by scripts/update_requirements.py"


def _requirements_text(deps: list[str]) -> str:
    return "\n".join([HEADER, "", *sorted(deps, key=str.lower), ""])


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    project = tomllib.loads((root / "pyproject.toml").read_text(encoding="utf-8"))["project"]
    runtime = list(project.get("dependencies", []))
    test = list(project.get("optional-dependencies", {}).get("test", []))

    (root / "requirements.txt").write_text(_requirements_text(runtime), encoding="utf-8")
    (root / "requirements-dev.txt").write_text(
        _requirements_text(runtime + test), encoding="utf-8"
    )


if __name__ == "__main__":
    main()
