"""Where rod keeps user state and where the bundled template lives."""

from __future__ import annotations

import importlib.resources
import os
from pathlib import Path
from typing import Iterator

HOME_ENV = "ROD_HOME"
TEMPLATE_ROOT_ENV = "ROD_TEMPLATE_ROOT"


def _is_windows() -> bool:
    return os.name == "nt"


def get_rod_home() -> Path:
    """User-level state directory holding ``config.toml``.

    ``$ROD_HOME`` wins everywhere. Otherwise Windows uses the platformdirs
    user data dir and every other platform uses ``~/.rod``.
    """
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override)
    if not _is_windows():
        return Path.home() / ".rod"

    from platformdirs import user_data_dir

    return Path(user_data_dir("rod"))


def _bundled_candidates() -> Iterator[Path]:
    try:
        yield Path(str(importlib.resources.files("rod_cli"))) / "templates"
    except (TypeError, ModuleNotFoundError):
        pass
    # Source checkout without an installed distribution.
    yield Path(__file__).resolve().parent.parent / "templates"


def get_package_asset_root() -> Path:
    """Directory of the bundled default template.

    Raises:
        FileNotFoundError: If ``$ROD_TEMPLATE_ROOT`` points nowhere, or no
            bundled template ships with the package.
    """
    override = os.environ.get(TEMPLATE_ROOT_ENV)
    if override:
        root = Path(override)
        if not root.is_dir():
            raise FileNotFoundError(f"{TEMPLATE_ROOT_ENV} path does not exist: {override}")
        return root

    for candidate in _bundled_candidates():
        if candidate.is_dir():
            return candidate

    raise FileNotFoundError(
        f"Bundled templates are missing from rod-cli; reinstall it or set {TEMPLATE_ROOT_ENV}."
    )
