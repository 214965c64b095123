"""Command: apply the descriptor to the hosting platform."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_APPLY_EXAMPLES = """\
  sitectl apply
  sitectl -v apply
  SITECTL_SOURCE__OAUTH_TOKEN=ghp_xxx sitectl apply"""


@click.command("apply", cls=SitectlCommand, examples=_APPLY_EXAMPLES)
@click.pass_obj
def apply(app: AppContext) -> None:
    """Validate, then create or update the app, branches, and domains.

    Certificates are requested but not awaited; follow up with
    ``sitectl certs reconcile``.
    """
    from sitectl.services.deploy import DeployService

    app.emit(DeployService(app.workspace).apply())
