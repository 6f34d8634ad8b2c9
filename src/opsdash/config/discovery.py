"""Config file discovery and loading.

Walk-up finder locates opsdash.toml, similar to how git finds .git/.
Supports OPSDASH_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "opsdash.toml"
CONFIG_ENV_VAR = "OPSDASH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for opsdash.toml.

    Returns the path to the config file, or None if not found.
    Checks OPSDASH_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    A relative ``[seed] path`` is resolved against the config file's
    directory. Raises ``click.ClickException`` naming the file when the
    TOML is malformed.
    """
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
    seed = data.get("seed")
    if isinstance(seed, dict) and isinstance(seed.get("path"), str):
        seed_path = Path(seed["path"])
        if not seed_path.is_absolute():
            seed["path"] = str(path.parent / seed_path)
    return data
