"""
Single source of truth for the tool version.

Prefers the installed distribution metadata, falls back to reading
pyproject.toml from a source checkout.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["VERSION", "APP_NAME", "DIST_NAME"]

APP_NAME = "workflow-catalog"
DIST_NAME = "workflow-catalog"

_FALLBACK_VERSION = "1.0.0"


def _read_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        pass

    toml_path = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if toml_path.exists():
        for line in toml_path.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # version = "1.0.0"
                return line.split("=", 1)[1].strip().strip('"').strip("'")
    return _FALLBACK_VERSION


VERSION = _read_version()
