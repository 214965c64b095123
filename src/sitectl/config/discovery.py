"""Locate and read the ``sitectl.toml`` declaration.

The declaration sits at the root of the site's repository. Lookup walks
up from the working directory and stops at the repository boundary (the
first directory holding ``.git``), so a stray ``sitectl.toml`` above the
checkout is never picked up. ``SITECTL_CONFIG`` and ``--config`` bypass
the walk entirely.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click

from sitectl.config.models import SitectlConfig

CONFIG_FILENAME = "sitectl.toml"
CONFIG_ENV_VAR = "SITECTL_CONFIG"
REPOSITORY_MARKER = ".git"


def _ancestors(start: Path) -> Iterator[Path]:
    """Yield *start* and its parents, ending at the repository root or ``/``."""
    current = start.resolve()
    while True:
        yield current
        if (current / REPOSITORY_MARKER).exists() or current.parent == current:
            return
        current = current.parent


def find_config(start: Path | None = None) -> Path | None:
    """Return the declaration that applies to *start* (default: cwd).

    ``SITECTL_CONFIG`` wins when set; a path that does not exist yields
    None rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None, start: Path | None = None) -> Path | None:
    """Resolve the ``--config`` flag, falling back to :func:`find_config`.

    Raises:
        click.ClickException: *explicit* names a file that does not exist.
    """
    if explicit is None:
        return find_config(start)
    path = Path(explicit)
    if not path.is_file():
        raise click.ClickException(f"Config file not found: {path}")
    return path


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, turning syntax errors into a CLI-facing message."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> SitectlConfig:
    """Validate the declaration at *path* (discovered from *cwd* when None).

    An absent declaration means the baked-in landing-page defaults.
    """
    path = path or find_config(cwd)
    if path is None:
        return SitectlConfig()
    return SitectlConfig.model_validate(read_toml(path))
