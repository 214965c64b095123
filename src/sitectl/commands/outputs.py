"""Command: list declared outputs (app ID and environment URLs)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_OUTPUTS_EXAMPLES = """\
  sitectl outputs
  sitectl -q outputs
  sitectl --json outputs"""


@click.command("outputs", cls=SitectlCommand, examples=_OUTPUTS_EXAMPLES)
@click.pass_obj
def outputs(app: AppContext) -> None:
    """Show the application ID and every environment URL."""
    from sitectl.services.descriptor import DescriptorService

    app.emit(DescriptorService(app.workspace).outputs())
