from __future__ import annotations

import importlib.metadata

from .constants import EditorConstants


def get_version() -> str:
    """Installed distribution version, or the built-in one when running from source."""
    try:
        return importlib.metadata.version("emed")
    except importlib.metadata.PackageNotFoundError:
        return EditorConstants.VERSION


def get_version_string() -> str:
    return f"emed {get_version()}"
