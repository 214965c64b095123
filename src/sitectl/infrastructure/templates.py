"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)


def build_template_environment(group: str, *, state_dir: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``<state_dir>/templates/``. Both a
    namespaced directory (for example ``.sitectl/templates/site/``) and the
    shared root are supported.
    """

    loaders: list[BaseLoader] = []
    if state_dir is not None:
        template_root = state_dir / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("sitectl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        autoescape=select_autoescape(enabled_extensions=("html", "html.j2")),
    )
