from __future__ import annotations

from importlib import metadata

DIST_NAME = "stache-compiler"


def tool_version() -> str:
    """Version of the installed distribution, or ``0.0.0`` from a source checkout."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
