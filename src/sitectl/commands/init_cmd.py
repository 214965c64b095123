"""Command: project initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_INIT_EXAMPLES = """\
  sitectl init --owner acme --repository landing --zone acme.dev
  sitectl init site/ --name acme-landing --owner acme --repository landing --zone acme.dev
  sitectl init --owner acme --repository landing --zone acme.dev --dev-domain preview.acme.dev"""


@click.command("init", cls=SitectlCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--name", default=None, help="Application name (default: directory name).")
@click.option("--owner", required=True, help="Source repository owner.")
@click.option("--repository", required=True, help="Source repository name.")
@click.option("--zone", required=True, help="Hosted zone serving the site.")
@click.option("--dev-domain", default=None, help="Development hostname (default: dev.<zone>).")
@click.option("--force", is_flag=True, help="Overwrite an existing sitectl.toml.")
@click.pass_obj
def init_cmd(
    app: AppContext,
    path: str,
    name: str | None,
    owner: str,
    repository: str,
    zone: str,
    dev_domain: str | None,
    force: bool,
) -> None:
    """Write a starter sitectl.toml."""
    from sitectl.services.init import InitService

    project_path = Path(path).resolve()
    app.emit(
        InitService.init_project(
            project_path,
            name=name or project_path.name,
            owner=owner,
            repository=repository,
            zone=zone,
            dev_domain=dev_domain,
            force=force,
        )
    )
