"""Config file and vault root discovery.

A vault is any directory holding ``vaultnote.toml`` or a ``.vaultnote/``
state directory. Discovery walks up from the working directory, the way
git finds ``.git/``. ``VAULTNOTE_CONFIG`` pins the config file outright.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "vaultnote.toml"
CONFIG_ENV_VAR = "VAULTNOTE_CONFIG"
STATE_DIRNAME = ".vaultnote"


def _walk_up(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    while True:
        yield current
        if current.parent == current:
            return
        current = current.parent


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``vaultnote.toml`` at or above *start*, or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _walk_up(start):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_vault_root(start: Path | None = None) -> Path | None:
    """Return the nearest directory that looks like a vault, or None."""
    for directory in _walk_up(start):
        if (directory / CONFIG_FILENAME).is_file() or (directory / STATE_DIRNAME).is_dir():
            return directory
    return None
